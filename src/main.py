"""Main application entry point for the hotel admin console.

This module provides the FastAPI application factory and configuration
for running the console locally or in production.
"""

import logging
import os
from typing import Any

import boto3
from fastapi import FastAPI

from hotel_admin_console.auth.credential_validator import SharedSecretValidator
from hotel_admin_console.handlers.api_handler import create_app
from hotel_admin_console.observability import configure_logging, setup_observability
from hotel_admin_console.repositories.kv_store import (
    DynamoDBKeyValueStore,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
)
from hotel_admin_console.services.entity_store import EntityStore
from hotel_admin_console.services.session_gate import SessionGate

logger = logging.getLogger(__name__)

DEVELOPMENT_SECRET = "dummy-secret-for-development"


def get_dynamodb_resource() -> Any:
    """Create DynamoDB resource with appropriate configuration.

    Returns:
        Boto3 DynamoDB resource configured for environment
    """
    endpoint_url = os.getenv("DYNAMODB_ENDPOINT")
    region = os.getenv("AWS_REGION", "us-east-1")

    if endpoint_url:
        # Local DynamoDB accepts any credentials
        logger.info(f"Using local DynamoDB at {endpoint_url}")
        return boto3.resource(
            "dynamodb",
            endpoint_url=endpoint_url,
            region_name=region,
            aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID", "dummy"),
            aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY", "dummy"),
        )

    logger.info(f"Using AWS DynamoDB in region {region}")
    return boto3.resource("dynamodb", region_name=region)


def create_kv_store() -> KeyValueStore:
    """Create the key-value store selected by STORAGE_BACKEND.

    Returns:
        Configured persistence adapter

    Raises:
        ValueError: If STORAGE_BACKEND names an unknown backend
    """
    backend = os.getenv("STORAGE_BACKEND", "file").lower()

    if backend == "memory":
        logger.warning("Using in-memory storage, data will not survive a restart")
        return InMemoryKeyValueStore()

    if backend == "file":
        directory = os.getenv("STORAGE_DIR", "./data")
        logger.info(f"Using JSON file storage in {directory}")
        return JsonFileKeyValueStore(directory)

    if backend == "dynamodb":
        table_name = os.getenv("DYNAMODB_KV_TABLE", "hotel-admin-console")
        logger.info(f"Using DynamoDB storage table {table_name}")
        return DynamoDBKeyValueStore(dynamodb_resource=get_dynamodb_resource(), table_name=table_name)

    raise ValueError(f"Unknown STORAGE_BACKEND '{backend}', expected file, memory or dynamodb")


def get_shared_secret() -> str:
    """Read the admin secret, falling back to a development placeholder."""
    secret = os.getenv("ADMIN_SHARED_SECRET", "").strip()
    if not secret:
        logger.warning("No ADMIN_SHARED_SECRET configured - using development placeholder")
        return DEVELOPMENT_SECRET
    return secret


def create_application() -> FastAPI:
    """Create and configure the FastAPI application with all dependencies.

    This factory function:
    1. Configures logging
    2. Creates the key-value store
    3. Rehydrates the entity store
    4. Restores the session gate
    5. Creates the FastAPI app
    6. Sets up observability

    Returns:
        Configured FastAPI application instance
    """
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    logger.info("Initializing hotel admin console...")

    kv_store = create_kv_store()
    entity_store = EntityStore(kv_store=kv_store)
    session_gate = SessionGate(
        kv_store=kv_store, validator=SharedSecretValidator(get_shared_secret())
    )

    app = create_app(entity_store=entity_store, session_gate=session_gate)
    setup_observability(app)

    logger.info("Hotel admin console initialized successfully")
    return app


# Create the FastAPI application instance (only when not in test mode)
# This prevents the app from being created during test collection
if os.getenv("ENVIRONMENT") != "test":  # noqa: SIM108
    app = create_application()
else:
    # Create a placeholder app for test imports
    app = FastAPI()


if __name__ == "__main__":
    """Run the application with uvicorn when executed directly."""
    import uvicorn

    port = int(os.getenv("PORT", "8001"))
    host = os.getenv("HOST", "0.0.0.0")

    logger.info(f"Starting development server on {host}:{port}")
    logger.info(f"API documentation available at http://{host}:{port}/docs")

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
