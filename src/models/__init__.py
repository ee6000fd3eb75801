"""
Init file for the catalog models.
"""

from .product import Product

__all__ = [
    "Product",
]
