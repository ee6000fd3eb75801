#!/usr/bin/env python3
"""
Product Catalog Backend Startup Script
This script starts the FastAPI server for the catalog service.
"""

import logging

import uvicorn

from src.config import API_CONFIG, ENVIRONMENT, LOG_LEVEL

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    logger.info("Starting Product Catalog Backend...")
    logger.info(f"Environment: {ENVIRONMENT}")
    logger.info("Available endpoints:")
    logger.info("  - Health Check: GET /health")
    logger.info("  - CreateProduct: POST /api/products")
    logger.info("  - GetProducts: GET /api/products")
    logger.info("  - GetProductById: GET /api/products/{product_id}")
    logger.info("  - UpdateProduct: PUT /api/products/{product_id}")
    logger.info("  - DeleteProduct: DELETE /api/products/{product_id}")
    logger.info(f"  - API Docs: http://localhost:{API_CONFIG['port']}/docs")

    uvicorn.run(
        "src.main:app",
        host=API_CONFIG["host"],
        port=API_CONFIG["port"],
        reload=API_CONFIG["reload"],
        log_level=LOG_LEVEL.lower()
    )
