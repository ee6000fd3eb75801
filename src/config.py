"""Configuration for the catalog backend, read from the environment."""

import os

from dotenv import load_dotenv

load_dotenv()

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

MONGO_CONFIG = {
    "uri": os.getenv("MONGODB_URI", "mongodb://localhost:27017"),
    "database": os.getenv("MONGODB_DB_NAME", "catalog_products"),
    "max_pool_size": int(os.getenv("MONGODB_MAX_POOL_SIZE", "10")),
    "server_selection_timeout_ms": int(os.getenv("MONGODB_SERVER_SELECTION_TIMEOUT_MS", "5000")),
    "socket_timeout_ms": int(os.getenv("MONGODB_SOCKET_TIMEOUT_MS", "45000")),
}

PRODUCTS_COLLECTION = os.getenv("MONGODB_PRODUCTS_COLLECTION", "products")

CLOUDINARY_CONFIG = {
    "cloud_name": os.getenv("CLOUDINARY_CLOUD_NAME", ""),
    "api_key": os.getenv("CLOUDINARY_API_KEY", ""),
    "api_secret": os.getenv("CLOUDINARY_API_SECRET", ""),
    "secure": True,
}

IMAGE_FOLDER = os.getenv("CLOUDINARY_FOLDER", "catalog/products")

API_CONFIG = {
    "host": os.getenv("API_HOST", "0.0.0.0"),
    "port": int(os.getenv("API_PORT", "50052")),
    "reload": os.getenv("API_RELOAD", "false").lower() == "true",
}
