"""Product catalog service: validation, uniqueness and image/record coordination."""

import logging
from typing import Any

from src.models.product import Product
from src.repositories.product_repository import DuplicateNameError, ProductRepository
from src.storage.image_store import CloudinaryImageStore, ImageStoreError
from src.utils.responses import ErrorKind, error_response, success_response
from src.utils.validators import (
    is_valid_uuid,
    sanitize_text,
    validate_admin_id,
    validate_category,
    validate_description,
    validate_image,
    validate_price,
    validate_product_name,
)

logger = logging.getLogger(__name__)


def _first_failure(*checks: dict[str, Any]) -> str | None:
    for check in checks:
        if not check["valid"]:
            return check["message"]
    return None


class ProductService:
    """
    Create, list, read, update and soft-delete catalog products.

    Every operation returns a result dict with ``success`` and ``message`` keys;
    failures also carry an ``error`` kind. Nothing is raised to the caller.
    """

    def __init__(self, repository: ProductRepository, image_store: CloudinaryImageStore):
        self.repository = repository
        self.image_store = image_store

    def _discard_image(self, image_id: str, reason: str) -> None:
        """Best-effort removal of an image no record points to."""
        try:
            self.image_store.delete(image_id)
            logger.info(f"Discarded image {image_id} after {reason}")
        except Exception as e:
            logger.warning(f"Could not discard image {image_id} after {reason}: {e}")

    def create_product(
        self,
        name: str | None,
        description: str | None,
        price: float | None,
        category: str | None,
        image: bytes | None,
        image_file_name: str | None,
        admin_id: str | None,
    ) -> dict[str, Any]:
        """
        Create a product and upload its image.

        The image is uploaded before the record is written; if the record never
        reaches the store the uploaded image is deleted again.

        Returns:
            Dict with operation result and the created product
        """
        logger.info(f"Creating product: name={name!r}, category={category!r}, price={price}")

        admin_check = validate_admin_id(admin_id)
        if not admin_check["valid"]:
            return error_response(admin_check["message"], ErrorKind.AUTHORIZATION)

        failure = _first_failure(
            validate_product_name(name),
            validate_description(description),
            validate_price(price),
            validate_category(category),
            validate_image(image, image_file_name),
        )
        if failure:
            return error_response(failure)

        try:
            clean_name = sanitize_text(name)
            if self.repository.find_active_by_name(clean_name):
                return error_response("A product with that name already exists", ErrorKind.CONFLICT)

            try:
                image_data = self.image_store.upload(image, image_file_name)
            except ImageStoreError as e:
                return error_response(f"Error uploading image: {e}", ErrorKind.INTERNAL)

            product = Product(
                name=clean_name,
                description=sanitize_text(description),
                price=price,
                category=sanitize_text(category),
                image_url=image_data["url"],
                image_id=image_data["image_id"],
            )

            errors = product.validate()
            if errors:
                self._discard_image(product.image_id, "validation failure")
                return error_response(", ".join(errors))

            try:
                self.repository.insert(product.to_storage_record())
            except DuplicateNameError:
                self._discard_image(product.image_id, "duplicate name rejection")
                return error_response("A product with that name already exists", ErrorKind.CONFLICT)
            except Exception:
                self._discard_image(product.image_id, "persistence failure")
                raise

            logger.info(f"Product created: {product.id}")
            return success_response("Product created successfully", product=product.to_wire_record())

        except Exception as e:
            logger.error(f"Error creating product: {e}")
            return error_response(f"Internal error: {e}", ErrorKind.INTERNAL)

    def get_products(
        self,
        category: str | None = None,
        is_active: bool | None = None,
        search_name: str | None = None,
    ) -> dict[str, Any]:
        """
        List products, newest first.

        Args:
            category: Exact category filter
            is_active: Status filter; None returns both
            search_name: Substring searched in name and description

        Returns:
            Dict with the matching products and their count
        """
        logger.info(f"Listing products: category={category!r}, is_active={is_active}, search={search_name!r}")

        try:
            docs = self.repository.find_many(
                category=sanitize_text(category) if category else None,
                is_active=is_active,
                search_text=sanitize_text(search_name) if search_name else None,
            )
            products = [Product.from_storage_record(doc).to_wire_record() for doc in docs]

            logger.info(f"Found {len(products)} products")
            return success_response("Products retrieved successfully", products=products, total=len(products))

        except Exception as e:
            logger.error(f"Error listing products: {e}")
            return error_response(f"Internal error: {e}", ErrorKind.INTERNAL, products=[], total=0)

    def get_product_by_id(self, product_id: str | None) -> dict[str, Any]:
        """Fetch one product by id, active or not."""
        logger.info(f"Looking up product: {product_id}")

        if not is_valid_uuid(product_id):
            return error_response("Invalid product ID")

        try:
            doc = self.repository.find_by_id(product_id)
            if not doc:
                return error_response("Product not found", ErrorKind.NOT_FOUND)

            product = Product.from_storage_record(doc)
            return success_response("Product found", product=product.to_wire_record())

        except Exception as e:
            logger.error(f"Error fetching product {product_id}: {e}")
            return error_response(f"Internal error: {e}", ErrorKind.INTERNAL)

    def update_product(
        self,
        product_id: str | None,
        admin_id: str | None,
        name: str | None = None,
        description: str | None = None,
        price: float | None = None,
        category: str | None = None,
        image: bytes | None = None,
        image_file_name: str | None = None,
    ) -> dict[str, Any]:
        """
        Partially update a product.

        Only arguments that are not None are changed (an image only when
        non-empty). A new image replaces the old one on the image host; losing
        the old image is tolerated.

        Returns:
            Dict with operation result and the updated product
        """
        logger.info(f"Updating product: {product_id}")

        admin_check = validate_admin_id(admin_id)
        if not admin_check["valid"]:
            return error_response(admin_check["message"], ErrorKind.AUTHORIZATION)

        if not is_valid_uuid(product_id):
            return error_response("Invalid product ID")

        new_image = None
        try:
            doc = self.repository.find_by_id(product_id)
            if not doc:
                return error_response("Product not found", ErrorKind.NOT_FOUND)

            product = Product.from_storage_record(doc)
            updates: dict[str, Any] = {}

            if name is not None:
                check = validate_product_name(name)
                if not check["valid"]:
                    return error_response(check["message"])
                clean_name = sanitize_text(name)
                if (
                    clean_name != product.name
                    and product.is_active
                    and self.repository.find_active_by_name(clean_name, exclude_id=product_id)
                ):
                    return error_response("Another product already uses that name", ErrorKind.CONFLICT)
                updates["name"] = clean_name

            if description is not None:
                check = validate_description(description)
                if not check["valid"]:
                    return error_response(check["message"])
                updates["description"] = sanitize_text(description)

            if price is not None:
                check = validate_price(price)
                if not check["valid"]:
                    return error_response(check["message"])
                updates["price"] = price

            if category is not None:
                check = validate_category(category)
                if not check["valid"]:
                    return error_response(check["message"])
                updates["category"] = sanitize_text(category)

            # Sanitizing can shorten a value below its limits
            errors = product.model_copy(update=updates).validate()
            if errors:
                return error_response(", ".join(errors))

            if image:
                check = validate_image(image, image_file_name)
                if not check["valid"]:
                    return error_response(check["message"])
                try:
                    new_image = self.image_store.replace(product.image_id, image, image_file_name)
                except ImageStoreError as e:
                    return error_response(f"Error updating image: {e}", ErrorKind.INTERNAL)
                updates["image_url"] = new_image["url"]
                updates["image_id"] = new_image["image_id"]

            product.apply_updates(updates)
            record = product.to_storage_record()
            del record["id"], record["created_at"]

            try:
                matched = self.repository.update_fields(product_id, record)
            except DuplicateNameError:
                if new_image:
                    self._discard_image(new_image["image_id"], "duplicate name rejection")
                return error_response("Another product already uses that name", ErrorKind.CONFLICT)
            if not matched:
                if new_image:
                    self._discard_image(new_image["image_id"], "missing product")
                return error_response("Product not found", ErrorKind.NOT_FOUND)

            logger.info(f"Product updated: {product.id}")
            return success_response("Product updated successfully", product=product.to_wire_record())

        except Exception as e:
            logger.error(f"Error updating product {product_id}: {e}")
            if new_image:
                self._discard_image(new_image["image_id"], "persistence failure")
            return error_response(f"Internal error: {e}", ErrorKind.INTERNAL)

    def delete_product(self, product_id: str | None, admin_id: str | None) -> dict[str, Any]:
        """Soft-delete a product. Deleting an inactive product is rejected."""
        logger.info(f"Deleting product: {product_id}")

        admin_check = validate_admin_id(admin_id)
        if not admin_check["valid"]:
            return error_response(admin_check["message"], ErrorKind.AUTHORIZATION)

        if not is_valid_uuid(product_id):
            return error_response("Invalid product ID")

        try:
            doc = self.repository.find_by_id(product_id)
            if not doc:
                return error_response("Product not found", ErrorKind.NOT_FOUND)

            product = Product.from_storage_record(doc)
            if not product.is_active:
                return error_response("Product is already inactive", ErrorKind.ALREADY_INACTIVE)

            product.soft_delete()
            matched = self.repository.update_fields(product_id, {"is_active": False, "updated_at": product.updated_at})
            if not matched:
                return error_response("Product not found", ErrorKind.NOT_FOUND)

            logger.info(f"Product soft-deleted: {product.id}")
            return success_response("Product deleted successfully")

        except Exception as e:
            logger.error(f"Error deleting product {product_id}: {e}")
            return error_response(f"Internal error: {e}", ErrorKind.INTERNAL)
