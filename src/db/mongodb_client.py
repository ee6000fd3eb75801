"""MongoDB connection and utilities."""

import logging
from typing import Any

from pymongo import DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from src.config import MONGO_CONFIG, PRODUCTS_COLLECTION

logger = logging.getLogger(__name__)


class MongoDBClient:
    def __init__(self, config: dict[str, Any] | None = None):
        config = config or MONGO_CONFIG
        self.client = MongoClient(
            config["uri"],
            maxPoolSize=config["max_pool_size"],
            serverSelectionTimeoutMS=config["server_selection_timeout_ms"],
            socketTimeoutMS=config["socket_timeout_ms"],
            tz_aware=True,
        )
        self.db: Database = self.client[config["database"]]

    def get_collection(self, name: str) -> Collection:
        """Get a MongoDB collection."""
        return self.db[name]

    def ping(self) -> bool:
        """Round-trip to the server; raises if it is unreachable."""
        self.client.admin.command("ping")
        return True

    def create_indexes(self):
        """Create necessary indexes."""
        products = self.db.get_collection(PRODUCTS_COLLECTION)
        products.create_index("id", unique=True, name="unique_product_id")
        # Names are unique among active products only
        products.create_index(
            "name",
            unique=True,
            partialFilterExpression={"is_active": True},
            name="unique_active_product_name",
        )
        products.create_index("category", name="category_index")
        products.create_index("is_active", name="active_status_index")
        products.create_index([("created_at", DESCENDING)], name="created_at_index")
        logger.info(f"Indexes ensured on '{PRODUCTS_COLLECTION}'")

    def close(self):
        self.client.close()
        logger.info("MongoDB connection closed")
