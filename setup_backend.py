"""
Infrastructure Setup Script for the Product Catalog Backend
This script checks the database and image host connections and the catalog data.
"""

import logging

from pymongo.errors import PyMongoError

from src.config import PRODUCTS_COLLECTION
from src.db.mongodb_client import MongoDBClient
from src.repositories.product_repository import ProductRepository
from src.storage.image_store import CloudinaryImageStore

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def check_connections(mongo: MongoDBClient) -> bool:
    """Check if MongoDB and Cloudinary are reachable."""
    logger.info("Checking connections...")

    # Check MongoDB
    try:
        mongo.ping()
        mongo.create_indexes()
        logger.info("✅ MongoDB connection: OK")
    except PyMongoError as e:
        logger.error(f"❌ MongoDB connection error: {e}")
        return False

    # Check Cloudinary
    if CloudinaryImageStore().ping():
        logger.info("✅ Cloudinary connection: OK")
    else:
        logger.warning("⚠️ Cloudinary connection failed. Image uploads will not work.")

    return True


def check_data_availability(mongo: MongoDBClient) -> bool:
    """Check if catalog data is available."""
    logger.info("Checking data availability...")

    try:
        repository = ProductRepository(mongo.get_collection(PRODUCTS_COLLECTION))
        product_count = repository.count()
        logger.info(f"📦 Products in database: {product_count}")
        if product_count == 0:
            logger.warning("⚠️ No products found. Run the product loader first.")
            return False
    except PyMongoError as e:
        logger.error(f"Error checking data: {e}")
        return False

    return True


def main() -> bool:
    """Main setup function."""
    logger.info("🚀 Setting up Product Catalog Backend...")

    mongo = MongoDBClient()
    try:
        if not check_connections(mongo):
            logger.error("❌ Connection check failed!")
            return False

        if not check_data_availability(mongo):
            logger.warning("⚠️ Data availability check failed!")
            logger.info("💡 To load sample data, run:")
            logger.info("   python -m src.loaders.product_loader")
            return False
    finally:
        mongo.close()

    logger.info("✅ Setup complete! Ready to start the server.")
    return True


if __name__ == "__main__":
    main()
