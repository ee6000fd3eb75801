"""Load sample catalog products into MongoDB."""

import logging

from src.config import PRODUCTS_COLLECTION
from src.db.mongodb_client import MongoDBClient
from src.models.product import Product
from src.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)

SAMPLE_IMAGE_URL = "https://res.cloudinary.com/demo/image/upload/sample.jpg"

SEED_PRODUCTS = [
    {
        "name": "HP Pavilion 15 Laptop",
        "description": "High performance laptop with an Intel Core i7 processor, 16GB RAM and a 512GB SSD.",
        "price": 899.99,
        "category": "Electronics",
        "image_id": "sample_laptop",
    },
    {
        "name": "Samsung Galaxy S23",
        "description": "Latest generation smartphone with a 6.1 inch AMOLED display and a 50MP camera.",
        "price": 799.99,
        "category": "Electronics",
        "image_id": "sample_phone",
    },
    {
        "name": "Trek Mountain Bike",
        "description": "All-terrain bike with front suspension, 21 speeds and a lightweight aluminium frame.",
        "price": 549.99,
        "category": "Sports",
        "image_id": "sample_bike",
    },
    {
        "name": "Oster Pro Blender",
        "description": "High performance blender with a 1200W motor. Great for smoothies and soups.",
        "price": 89.99,
        "category": "Home",
        "image_id": "sample_blender",
    },
    {
        "name": "Casio G-Shock Watch",
        "description": "Water and shock resistant sports watch with multiple functions and urban style.",
        "price": 129.99,
        "category": "Accessories",
        "image_id": "sample_watch",
    },
    {
        "name": "North Face Borealis Backpack",
        "description": "Durable backpack with a padded laptop sleeve, several pockets and an ergonomic design.",
        "price": 99.99,
        "category": "Accessories",
        "image_id": "sample_backpack",
    },
]


class ProductLoader:
    def __init__(self, repository: ProductRepository):
        self.repository = repository

    def build_products(self) -> list[Product]:
        products = [Product(image_url=SAMPLE_IMAGE_URL, **data) for data in SEED_PRODUCTS]
        for product in products:
            errors = product.validate()
            if errors:
                raise ValueError(f"Invalid seed product {product.name}: {', '.join(errors)}")
        return products

    def load_products(self) -> list[Product]:
        """Replace the collection content with the sample products."""
        products = self.build_products()

        removed = self.repository.clear()
        logger.info(f"Removed {removed} existing products")

        for product in products:
            self.repository.insert(product.to_storage_record())
            logger.info(f"Inserted {product.name} - ${product.price} ({product.category})")

        logger.info(f"Loaded {len(products)} products into MongoDB")
        return products


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    mongo = MongoDBClient()
    try:
        mongo.create_indexes()
        loader = ProductLoader(ProductRepository(mongo.get_collection(PRODUCTS_COLLECTION)))
        loader.load_products()
    finally:
        mongo.close()
