"""Shared fixtures for the catalog tests."""

import copy
from unittest.mock import MagicMock

import pytest

from src.repositories.product_repository import DuplicateNameError

ADMIN_ID = "550e8400-e29b-41d4-a716-446655440000"

# Smallest valid JPEG header/footer pair is enough for the validators
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xd9"


class InMemoryProductRepository:
    """Dict-backed stand-in for ProductRepository with the same query semantics."""

    def __init__(self):
        self.records: dict[str, dict] = {}

    def _name_taken(self, name, exclude_id=None):
        return any(
            r["name"] == name and r["is_active"] and r["id"] != exclude_id for r in self.records.values()
        )

    def find_by_id(self, product_id):
        record = self.records.get(product_id)
        return copy.deepcopy(record) if record else None

    def find_active_by_name(self, name, exclude_id=None):
        for record in self.records.values():
            if record["name"] == name and record["is_active"] and record["id"] != exclude_id:
                return copy.deepcopy(record)
        return None

    def find_many(self, category=None, is_active=None, search_text=None):
        results = []
        for record in self.records.values():
            if category is not None and record["category"] != category:
                continue
            if is_active is not None and record["is_active"] != is_active:
                continue
            if search_text:
                needle = search_text.lower()
                if needle not in record["name"].lower() and needle not in record["description"].lower():
                    continue
            results.append(copy.deepcopy(record))
        return sorted(results, key=lambda r: r["created_at"], reverse=True)

    def insert(self, record):
        if record["id"] in self.records or (record["is_active"] and self._name_taken(record["name"])):
            raise DuplicateNameError(record["name"])
        self.records[record["id"]] = copy.deepcopy(record)

    def update_fields(self, product_id, fields):
        record = self.records.get(product_id)
        if record is None:
            return False
        merged = {**record, **fields}
        if merged["is_active"] and self._name_taken(merged["name"], exclude_id=product_id):
            raise DuplicateNameError(merged["name"])
        self.records[product_id] = copy.deepcopy(merged)
        return True


@pytest.fixture
def repository():
    return InMemoryProductRepository()


@pytest.fixture
def image_store():
    store = MagicMock()
    counter = {"n": 0}

    def upload(data, file_name=None):
        counter["n"] += 1
        image_id = f"catalog/products/product_{counter['n']}"
        return {"url": f"https://images.example.com/{image_id}.jpg", "image_id": image_id}

    store.upload.side_effect = upload
    store.replace.side_effect = lambda old_image_id, data, file_name=None: upload(data, file_name)
    return store


@pytest.fixture
def admin_id():
    return ADMIN_ID


@pytest.fixture
def jpeg_bytes():
    return JPEG_BYTES
