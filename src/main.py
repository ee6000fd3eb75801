"""FastAPI application for the product catalog service."""

import base64
import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.config import API_CONFIG, LOG_LEVEL, PRODUCTS_COLLECTION
from src.db.mongodb_client import MongoDBClient
from src.repositories.product_repository import ProductRepository
from src.services.product_service import ProductService
from src.storage.image_store import CloudinaryImageStore
from src.utils.responses import ErrorKind, error_response
from src.utils.validators import is_valid_uuid, validate_admin_id

# Configure logging
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    ErrorKind.VALIDATION.value: 400,
    ErrorKind.AUTHORIZATION.value: 401,
    ErrorKind.NOT_FOUND.value: 404,
    ErrorKind.CONFLICT.value: 409,
    ErrorKind.ALREADY_INACTIVE.value: 409,
    ErrorKind.INTERNAL.value: 500,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    mongo = MongoDBClient()
    mongo.ping()
    mongo.create_indexes()
    logger.info("Connected to MongoDB")

    image_store = CloudinaryImageStore()
    if not image_store.ping():
        logger.warning("Could not reach Cloudinary. Image operations will fail.")

    repository = ProductRepository(mongo.get_collection(PRODUCTS_COLLECTION))
    app.state.product_service = ProductService(repository, image_store)
    try:
        yield
    finally:
        mongo.close()


# Create FastAPI app
app = FastAPI(
    title="Product Catalog API",
    description="Admin catalog of products with image hosting and soft deletion",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Pydantic models for request bodies; business rules are checked by the service,
# so price stays loose and the base64 image is decoded in the route
class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateProductRequest(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Any = None
    category: Optional[str] = None
    image: Optional[str] = None
    image_file_name: Optional[str] = None
    admin_id: Optional[str] = None


class UpdateProductRequest(CamelModel):
    admin_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    price: Any = None
    category: Optional[str] = None
    image: Optional[str] = None
    image_file_name: Optional[str] = None


def get_product_service(request: Request) -> ProductService:
    return request.app.state.product_service


def _respond(result: dict, success_status: int = 200) -> JSONResponse:
    if result["success"]:
        return JSONResponse(status_code=success_status, content=result)
    return JSONResponse(status_code=STATUS_BY_ERROR.get(result.get("error"), 500), content=result)


def _decode_image(encoded: Optional[str]) -> Optional[bytes]:
    """Decode a base64 image payload. Raises ValueError when it is malformed."""
    if encoded is None:
        return None
    return base64.b64decode(encoded, validate=True)


def _malformed_image_response(admin_id: Optional[str], product_id: Optional[str] = None) -> JSONResponse:
    """Reject an undecodable image without skipping the checks that come before it."""
    admin_check = validate_admin_id(admin_id)
    if not admin_check["valid"]:
        return _respond(error_response(admin_check["message"], ErrorKind.AUTHORIZATION))
    if product_id is not None and not is_valid_uuid(product_id):
        return _respond(error_response("Invalid product ID"))
    return _respond(error_response("Image must be valid base64 data"))


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    logger.warning(f"Rejected malformed request to {request.url.path}: {errors}")
    return _respond(error_response(f"Invalid value for '{field}': {first.get('msg', 'malformed request')}"))


# Health check endpoint
@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "Product Catalog API"}


@app.post("/api/products")
def create_product(request: CreateProductRequest, service: ProductService = Depends(get_product_service)):
    """Create a product and upload its image."""
    try:
        image = _decode_image(request.image)
    except ValueError:
        return _malformed_image_response(request.admin_id)

    result = service.create_product(
        name=request.name,
        description=request.description,
        price=request.price,
        category=request.category,
        image=image,
        image_file_name=request.image_file_name,
        admin_id=request.admin_id,
    )
    return _respond(result, success_status=201)


@app.get("/api/products")
def get_products(
    category: Optional[str] = Query(None),
    is_active: Optional[bool] = Query(None, alias="isActive"),
    search_name: Optional[str] = Query(None, alias="searchName"),
    service: ProductService = Depends(get_product_service),
):
    """List products with optional category, status and text filters."""
    return _respond(service.get_products(category=category, is_active=is_active, search_name=search_name))


@app.get("/api/products/{product_id}")
def get_product_by_id(product_id: str, service: ProductService = Depends(get_product_service)):
    """Get a product by id, including soft-deleted ones."""
    return _respond(service.get_product_by_id(product_id))


@app.put("/api/products/{product_id}")
def update_product(
    product_id: str,
    request: UpdateProductRequest,
    service: ProductService = Depends(get_product_service),
):
    """Partially update a product."""
    try:
        image = _decode_image(request.image)
    except ValueError:
        return _malformed_image_response(request.admin_id, product_id)

    result = service.update_product(
        product_id,
        request.admin_id,
        name=request.name,
        description=request.description,
        price=request.price,
        category=request.category,
        image=image,
        image_file_name=request.image_file_name,
    )
    return _respond(result)


@app.delete("/api/products/{product_id}")
def delete_product(
    product_id: str,
    admin_id: Optional[str] = Query(None, alias="adminId"),
    service: ProductService = Depends(get_product_service),
):
    """Soft-delete a product."""
    return _respond(service.delete_product(product_id, admin_id))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=API_CONFIG["host"], port=API_CONFIG["port"])
