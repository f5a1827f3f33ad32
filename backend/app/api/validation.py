"""Validation API — run schema-conformance checks over stored collections."""

from fastapi import APIRouter, Depends, HTTPException, Query

import structlog

from app.api.deps import get_registry, get_validator
from app.models.requests import ValidationRunRequest
from app.models.responses import CollectionListResponse
from app.services.validation_report import (
    CollectionReport,
    DatabaseValidationReport,
    build_collection_report,
    build_database_report,
)
from app.validators import CollectionValidator, SchemaRegistry

logger = structlog.get_logger()

router = APIRouter(prefix="/validation")


@router.get("/collections", response_model=CollectionListResponse)
async def list_collections(registry: SchemaRegistry = Depends(get_registry)):
    """List the collections that have a registered schema."""
    return CollectionListResponse(collections=registry.collections())


@router.get("/collections/{collection}", response_model=CollectionReport)
async def validate_collection(
    collection: str,
    verbose: bool = Query(default=False),
    registry: SchemaRegistry = Depends(get_registry),
    validator: CollectionValidator = Depends(get_validator),
):
    """Validate every document of one collection."""
    schema = registry.get(collection)
    if schema is None:
        raise HTTPException(status_code=404, detail=f"No schema registered for collection '{collection}'")

    results = await validator.validate_collection_data(collection, schema, verbose)
    return build_collection_report(collection, results)


@router.post("/runs", response_model=DatabaseValidationReport)
async def run_validation(
    request: ValidationRunRequest,
    registry: SchemaRegistry = Depends(get_registry),
    validator: CollectionValidator = Depends(get_validator),
):
    """Validate several collections (all recognized collections by default)."""
    collections = request.collections or registry.collections()
    unknown = [name for name in collections if name not in registry]
    if unknown:
        logger.warning("validation_run_unknown_collections", collections=unknown)
        raise HTTPException(
            status_code=422,
            detail=f"No schema registered for collection(s): {', '.join(unknown)}",
        )

    results = await validator.validate_multiple_collections(collections, request.verbose)
    report = build_database_report(results)

    logger.info(
        "validation_run_complete",
        collections=list(results.keys()),
        total_documents=report.total_documents,
        valid_documents=report.valid_documents,
    )
    return report
