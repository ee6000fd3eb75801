"""
Pydantic models for MongoDB 'products' collection.
"""

import math
import uuid
from datetime import datetime, timedelta, timezone
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from src.utils.validators import (
    validate_category,
    validate_description,
    validate_price,
    validate_product_name,
)

UPDATABLE_FIELDS = ("name", "description", "price", "category", "image_url", "image_id", "is_active")


def utc_now() -> datetime:
    """Current UTC time truncated to milliseconds (BSON date precision)."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def to_iso(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _coerce_price(value: Any) -> float:
    # uncoercible prices become NaN so validate() reports them
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return math.nan


class Product(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, validate_assignment=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    description: str
    price: Annotated[float, BeforeValidator(_coerce_price)]
    category: str
    image_url: str = ""
    image_id: str = ""
    is_active: bool = True
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime | None = None

    @field_validator("id", mode="before")
    @classmethod
    def generate_missing_id(cls, value: Any) -> Any:
        return value or str(uuid.uuid4())

    @field_validator("image_url", "image_id", mode="before")
    @classmethod
    def empty_image_reference(cls, value: Any) -> Any:
        return value or ""

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @field_serializer("created_at", "updated_at", when_used="json")
    def serialize_timestamp(self, value: datetime) -> str:
        return to_iso(value)

    def model_post_init(self, __context: Any) -> None:
        if self.updated_at is None:
            self.updated_at = self.created_at

    def validate(self) -> list[str]:
        """Re-check the stored fields; returns every error found."""
        checks = (
            validate_product_name(self.name),
            validate_description(self.description),
            validate_price(self.price),
            validate_category(self.category),
        )
        return [check["message"] for check in checks if not check["valid"]]

    def to_storage_record(self) -> dict[str, Any]:
        """Durable document representation."""
        record = self.model_dump()
        for field_name in ("name", "description", "category"):
            record[field_name] = record[field_name].strip()
        return record

    def to_wire_record(self) -> dict[str, Any]:
        """Response representation; the image handle stays internal."""
        return self.model_dump(mode="json", by_alias=True, exclude={"image_id"})

    @classmethod
    def from_storage_record(cls, doc: dict[str, Any]) -> "Product":
        return cls.model_validate(doc)

    def apply_updates(self, updates: dict[str, Any]) -> None:
        """Overwrite the given fields and refresh updated_at, even when nothing changed."""
        for field_name in UPDATABLE_FIELDS:
            if field_name in updates:
                setattr(self, field_name, updates[field_name])
        self._touch()

    def soft_delete(self) -> None:
        self.is_active = False
        self._touch()

    def _touch(self) -> None:
        # updated_at must strictly increase, even within the same millisecond
        now = utc_now()
        if self.updated_at is not None and now <= self.updated_at:
            now = self.updated_at + timedelta(milliseconds=1)
        self.updated_at = now
