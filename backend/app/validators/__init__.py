"""Collection Validator — schema-conformance checks for stored collections.

Usage:
    from app.validators import get_schema_for_collection, validate_collection_data

    schema = get_schema_for_collection("appointments")
    results = await validate_collection_data("appointments", schema)
    invalid = [r for r in results if r.status == "invalid"]
"""

from app.validators.base import BaseSchema, ModelSchema
from app.validators.engine import (
    CollectionValidator,
    ReportingSink,
    generate_validation_summary,
    get_collection_validator,
    validate_collection_data,
    validate_multiple_collections,
)
from app.validators.models import (
    FETCH_ERROR_ID,
    DocumentStatus,
    DocumentValidationResult,
    FieldError,
    ValidationSummary,
)
from app.validators.registry import (
    RECOGNIZED_COLLECTIONS,
    SchemaRegistry,
    get_schema_for_collection,
    schema_registry,
)

__all__ = [
    "BaseSchema",
    "ModelSchema",
    "CollectionValidator",
    "ReportingSink",
    "generate_validation_summary",
    "get_collection_validator",
    "validate_collection_data",
    "validate_multiple_collections",
    "FETCH_ERROR_ID",
    "DocumentStatus",
    "DocumentValidationResult",
    "FieldError",
    "ValidationSummary",
    "RECOGNIZED_COLLECTIONS",
    "SchemaRegistry",
    "get_schema_for_collection",
    "schema_registry",
]
