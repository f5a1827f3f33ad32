"""Shared dependencies for API routes."""

from fastapi import Request

from app.services.local_db import LocalDbClient
from app.validators import CollectionValidator, SchemaRegistry, schema_registry


def get_local_db(request: Request) -> LocalDbClient:
    """Local document store created at startup."""
    return request.app.state.local_db


def get_validator(request: Request) -> CollectionValidator:
    """Collection validator bound to the local document store."""
    return request.app.state.collection_validator


def get_registry() -> SchemaRegistry:
    return schema_registry
