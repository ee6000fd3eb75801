"""Field validation and text sanitizing for catalog products.

Every validator returns a dict of the form ``{"valid": bool, "message": str | None}``
and never raises for bad input; callers decide what to do with the message.
"""

import math
import re
from typing import Any

MIN_NAME_LENGTH = 3
MAX_NAME_LENGTH = 100
MIN_DESCRIPTION_LENGTH = 10
MAX_DESCRIPTION_LENGTH = 1000
MIN_CATEGORY_LENGTH = 3
MAX_CATEGORY_LENGTH = 50
MAX_PRICE = 9_999_999.99
MAX_IMAGE_SIZE = 5 * 1024 * 1024  # 5 MiB
ALLOWED_IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".webp", ".gif")

UUID_V4_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)
DIGITS_ONLY_PATTERN = re.compile(r"[0-9]+")


def _ok() -> dict[str, Any]:
    return {"valid": True, "message": None}


def _fail(message: str) -> dict[str, Any]:
    return {"valid": False, "message": message}


def is_valid_uuid(value: Any) -> bool:
    """Check that a value is a version 4 UUID string."""
    if not isinstance(value, str):
        return False
    return UUID_V4_PATTERN.match(value) is not None


def validate_price(price: Any) -> dict[str, Any]:
    """Price must be a finite number in (0, MAX_PRICE]."""
    if isinstance(price, bool):
        return _fail("Price must be a number")
    try:
        value = float(price)
    except (TypeError, ValueError, OverflowError):
        return _fail("Price must be a number")
    if math.isnan(value) or math.isinf(value):
        return _fail("Price must be a number")
    if value <= 0:
        return _fail("Price must be greater than 0")
    if value > MAX_PRICE:
        return _fail("Price exceeds the allowed limit")
    return _ok()


def validate_product_name(name: Any) -> dict[str, Any]:
    if not name or not isinstance(name, str):
        return _fail("Product name is required")

    trimmed = name.strip()
    if len(trimmed) < MIN_NAME_LENGTH:
        return _fail(f"Product name must be at least {MIN_NAME_LENGTH} characters")
    if len(trimmed) > MAX_NAME_LENGTH:
        return _fail(f"Product name cannot exceed {MAX_NAME_LENGTH} characters")
    if DIGITS_ONLY_PATTERN.fullmatch(trimmed):
        return _fail("Product name cannot contain only numbers")
    return _ok()


def validate_description(description: Any) -> dict[str, Any]:
    if not description or not isinstance(description, str):
        return _fail("Description is required")

    trimmed = description.strip()
    if len(trimmed) < MIN_DESCRIPTION_LENGTH:
        return _fail(f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters")
    if len(trimmed) > MAX_DESCRIPTION_LENGTH:
        return _fail(f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters")
    return _ok()


def validate_category(category: Any) -> dict[str, Any]:
    if not category or not isinstance(category, str):
        return _fail("Category is required")

    trimmed = category.strip()
    if len(trimmed) < MIN_CATEGORY_LENGTH:
        return _fail(f"Category must be at least {MIN_CATEGORY_LENGTH} characters")
    if len(trimmed) > MAX_CATEGORY_LENGTH:
        return _fail(f"Category cannot exceed {MAX_CATEGORY_LENGTH} characters")
    return _ok()


def validate_image(data: bytes | None, file_name: str | None = None) -> dict[str, Any]:
    """
    Validate raw image bytes and, when given, the original file name.

    Args:
        data: Image content
        file_name: Original file name, used for the extension check

    Returns:
        Validation result dict
    """
    if not data:
        return _fail("Image is required")
    if len(data) > MAX_IMAGE_SIZE:
        return _fail("Image cannot exceed 5MB")

    if file_name:
        dot = file_name.rfind(".")
        extension = file_name[dot:].lower() if dot != -1 else ""
        if extension not in ALLOWED_IMAGE_EXTENSIONS:
            return _fail(f"File extension not allowed. Use: {', '.join(ALLOWED_IMAGE_EXTENSIONS)}")
    return _ok()


def validate_admin_id(admin_id: Any) -> dict[str, Any]:
    if not admin_id or not isinstance(admin_id, str):
        return _fail("Administrator ID is required")
    if not is_valid_uuid(admin_id):
        return _fail("Administrator ID is not valid")
    return _ok()


def sanitize_text(text: Any) -> str:
    """Trim, drop angle brackets and collapse whitespace runs to a single space."""
    if not isinstance(text, str):
        return ""
    cleaned = text.strip().replace("<", "").replace(">", "")
    return re.sub(r"\s+", " ", cleaned).strip()
