"""Collection Validation Engine — fetches a collection and validates every document.

This is the main entry point for collection validation. It asks the fetcher
for the stored documents, checks each one against the collection schema and
returns one result per document, in input order.

Usage:
    validator = CollectionValidator(collection_fetchers(LocalDbClient("./local_db")))
    results = await validator.validate_collection_data("users", get_schema_for_collection("users"))
    for result in results:
        if result.status != "valid":
            ...

A failed or empty fetch never raises: it becomes a single result with
status "error" and the failure reason in fetch_error.
"""

import time
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Protocol

import structlog

from app.config import get_settings
from app.services.local_db import Fetcher, LocalDbClient, collection_fetchers
from app.validators.base import BaseSchema
from app.validators.models import DocumentValidationResult, ValidationSummary
from app.validators.registry import SchemaRegistry, schema_registry

logger = structlog.get_logger()


class ReportingSink(Protocol):
    """Leveled structured logging. A structlog logger satisfies it."""

    def info(self, event: str, **data: Any) -> Any: ...

    def warning(self, event: str, **data: Any) -> Any: ...

    def error(self, event: str, **data: Any) -> Any: ...


class CollectionValidator:
    """Validates stored collections against their schemas.

    Holds no mutable state between calls; concurrent validations of the
    same or different collections are independent.
    """

    def __init__(
        self,
        fetchers: Mapping[str, Fetcher],
        registry: Optional[SchemaRegistry] = None,
        sink: Optional[ReportingSink] = None,
    ):
        """Initialize with the fetch functions of the backing store.

        Args:
            fetchers: Collection name -> async fetch function
            registry: Schemas used by validate_multiple_collections (default registry if None)
            sink: Receives phase notifications (structlog logger if None)
        """
        self.fetchers: Mapping[str, Fetcher] = MappingProxyType(dict(fetchers))
        self.registry = registry or schema_registry
        self.sink: ReportingSink = sink or logger

    async def validate_collection_data(
        self,
        collection_name: str,
        schema: BaseSchema,
        verbose: bool = False,
    ) -> list[DocumentValidationResult]:
        """Fetch a collection and validate each document against schema.

        Args:
            collection_name: Collection to fetch
            schema: Schema every document must satisfy
            verbose: Also report each valid document

        Returns:
            One result per document in input order, or a single "error"
            result when the collection could not be fetched
        """
        if not isinstance(schema, BaseSchema):
            raise TypeError(
                f"schema must be a BaseSchema, got {type(schema).__name__} for collection '{collection_name}'"
            )

        self.sink.info("collection_validation_started", collection=collection_name, schema=schema.name)

        try:
            documents = await self._fetch(collection_name)
        except Exception as e:
            reason = str(e) or type(e).__name__
            self.sink.error(
                "collection_fetch_failed",
                collection=collection_name,
                reason="fetch_exception",
                error=reason,
                error_type=type(e).__name__,
            )
            return [DocumentValidationResult.fetch_failure(collection_name, reason)]

        if documents is None:
            return [self._unusable_fetch(collection_name, "no_data", f"No documents found in {collection_name}")]

        if not isinstance(documents, list):
            return [self._unusable_fetch(
                collection_name,
                "invalid_shape",
                f"Invalid data type in {collection_name}: expected a list of documents, "
                f"got {type(documents).__name__}",
            )]

        self.sink.info("collection_documents_fetched", collection=collection_name, count=len(documents))

        start_time = time.perf_counter()
        results = [
            self._validate_document(collection_name, document, schema, verbose)
            for document in documents
        ]
        summary = ValidationSummary.build(results, collection_name)

        self.sink.info(
            "collection_validation_finished",
            collection=collection_name,
            summary=summary.model_dump(),
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )

        return results

    async def validate_multiple_collections(
        self,
        collections: Iterable[str],
        verbose: bool = False,
    ) -> dict[str, list[DocumentValidationResult]]:
        """Validate several collections in turn, each against its registered schema.

        Collections without a registered schema are skipped.
        """
        results: dict[str, list[DocumentValidationResult]] = {}

        for collection in collections:
            schema = self.registry.get(collection)
            if schema is None:
                self.sink.warning("collection_schema_missing", collection=collection)
                continue
            results[collection] = await self.validate_collection_data(collection, schema, verbose)

        return results

    async def _fetch(self, collection_name: str) -> Any:
        fetcher = self.fetchers.get(collection_name)
        if fetcher is None:
            return None
        return await fetcher()

    def _unusable_fetch(self, collection_name: str, reason: str, message: str) -> DocumentValidationResult:
        self.sink.error("collection_fetch_failed", collection=collection_name, reason=reason, error=message)
        return DocumentValidationResult.fetch_failure(collection_name, message)

    def _validate_document(
        self,
        collection_name: str,
        document: Any,
        schema: BaseSchema,
        verbose: bool,
    ) -> DocumentValidationResult:
        doc_id, data = _split_document(document)
        errors = schema.check(data)

        if errors:
            self.sink.warning(
                "document_validation_failed",
                collection=collection_name,
                document_id=doc_id,
                errors=[e.model_dump() for e in errors],
            )
            return DocumentValidationResult.invalid(collection_name, doc_id, errors)

        if verbose:
            self.sink.info("document_valid", collection=collection_name, document_id=doc_id)
        return DocumentValidationResult.valid(collection_name, doc_id)


def _split_document(document: Any) -> tuple[Optional[str], Any]:
    """Separate the id from the data the schema sees."""
    if not isinstance(document, Mapping):
        return None, document
    raw_id = document.get("id")
    data = {key: value for key, value in document.items() if key != "id"}
    return (None if raw_id is None else str(raw_id)), data


def generate_validation_summary(
    results: list[DocumentValidationResult], collection_name: str
) -> ValidationSummary:
    """Summarize the results of one collection."""
    return ValidationSummary.build(results, collection_name)


@lru_cache
def get_collection_validator() -> CollectionValidator:
    """Validator over the configured local document store."""
    settings = get_settings()
    return CollectionValidator(collection_fetchers(LocalDbClient(settings.LOCAL_DB_PATH)))


async def validate_collection_data(
    collection_name: str, schema: BaseSchema, verbose: bool = False
) -> list[DocumentValidationResult]:
    """Validate one collection of the configured store."""
    return await get_collection_validator().validate_collection_data(collection_name, schema, verbose)


async def validate_multiple_collections(
    collections: Iterable[str], verbose: bool = False
) -> dict[str, list[DocumentValidationResult]]:
    """Validate several collections of the configured store."""
    return await get_collection_validator().validate_multiple_collections(collections, verbose)
