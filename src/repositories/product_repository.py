"""Product persistence on a MongoDB collection."""

import logging
import re
from typing import Any

from pymongo import DESCENDING
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

logger = logging.getLogger(__name__)

NO_ID_PROJECTION = {"_id": 0}


class DuplicateNameError(Exception):
    """An active product already uses the name."""


class ProductRepository:
    def __init__(self, collection: Collection):
        self.collection = collection

    def find_by_id(self, product_id: str) -> dict[str, Any] | None:
        return self.collection.find_one({"id": product_id}, NO_ID_PROJECTION)

    def find_active_by_name(self, name: str, exclude_id: str | None = None) -> dict[str, Any] | None:
        """Find an active product with exactly this name, optionally ignoring one id."""
        query: dict[str, Any] = {"name": name, "is_active": True}
        if exclude_id:
            query["id"] = {"$ne": exclude_id}
        return self.collection.find_one(query, NO_ID_PROJECTION)

    def find_many(
        self,
        category: str | None = None,
        is_active: bool | None = None,
        search_text: str | None = None,
    ) -> list[dict[str, Any]]:
        """
        Find products matching all given filters, newest first.

        Args:
            category: Exact category match
            is_active: Exact status match (False is a real filter)
            search_text: Case-insensitive substring over name or description

        Returns:
            List of product documents
        """
        query: dict[str, Any] = {}
        if category is not None:
            query["category"] = category
        if is_active is not None:
            query["is_active"] = is_active
        if search_text:
            pattern = re.escape(search_text)
            query["$or"] = [
                {"name": {"$regex": pattern, "$options": "i"}},
                {"description": {"$regex": pattern, "$options": "i"}},
            ]

        cursor = self.collection.find(query, NO_ID_PROJECTION).sort("created_at", DESCENDING)
        return list(cursor)

    def insert(self, record: dict[str, Any]) -> None:
        try:
            # insert_one mutates its argument with _id
            self.collection.insert_one(dict(record))
        except DuplicateKeyError as e:
            logger.warning(f"Duplicate key inserting product {record.get('name')}: {e}")
            raise DuplicateNameError(record.get("name")) from e

    def update_fields(self, product_id: str, fields: dict[str, Any]) -> bool:
        """Set the given fields on one product. Returns False when no product matched."""
        try:
            result = self.collection.update_one({"id": product_id}, {"$set": fields})
        except DuplicateKeyError as e:
            logger.warning(f"Duplicate key updating product {product_id}: {e}")
            raise DuplicateNameError(fields.get("name")) from e
        return result.matched_count > 0

    def count(self) -> int:
        return self.collection.count_documents({})

    def clear(self) -> int:
        result = self.collection.delete_many({})
        return result.deleted_count
