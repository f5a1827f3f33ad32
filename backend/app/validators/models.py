"""Validation models — document status, field errors, per-document results and summaries.

Results are created fresh on every validation run and never mutated afterwards.
"""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field

# Placeholder id for the synthetic result produced when a fetch fails
FETCH_ERROR_ID = "N/A"


class DocumentStatus(str, Enum):
    """Outcome of validating one document."""

    VALID = "valid"
    INVALID = "invalid"
    ERROR = "error"  # The collection could not be fetched at all


class FieldError(BaseModel):
    """A single field-level schema violation."""

    model_config = ConfigDict(frozen=True)

    field: str                  # Dot-joined path, "" for the document root
    message: str
    received: Any = None        # Offending value at that path, None when absent


class DocumentValidationResult(BaseModel):
    """Validation outcome for one document, or for a failed fetch."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str]
    collection: str
    status: DocumentStatus
    errors: Optional[list[FieldError]] = None
    fetch_error: Optional[str] = None

    @classmethod
    def valid(cls, collection: str, doc_id: Optional[str]) -> "DocumentValidationResult":
        return cls(id=doc_id, collection=collection, status=DocumentStatus.VALID)

    @classmethod
    def invalid(
        cls, collection: str, doc_id: Optional[str], errors: list[FieldError]
    ) -> "DocumentValidationResult":
        return cls(id=doc_id, collection=collection, status=DocumentStatus.INVALID, errors=errors)

    @classmethod
    def fetch_failure(cls, collection: str, reason: str) -> "DocumentValidationResult":
        return cls(
            id=FETCH_ERROR_ID,
            collection=collection,
            status=DocumentStatus.ERROR,
            fetch_error=reason,
        )


class ValidationSummary(BaseModel):
    """Status counts for one collection plus the most frequently failing fields."""

    collection: str
    total_documents: int = 0
    valid_documents: int = 0
    invalid_documents: int = 0
    error_documents: int = 0
    common_errors: dict[str, int] = Field(
        default_factory=dict,
        description="Field path -> number of field errors reported for it",
    )

    @classmethod
    def build(cls, results: list[DocumentValidationResult], collection: str) -> "ValidationSummary":
        """Build a summary from the results of one collection."""
        summary = cls(collection=collection, total_documents=len(results))

        for result in results:
            if result.status == DocumentStatus.VALID:
                summary.valid_documents += 1
            elif result.status == DocumentStatus.INVALID:
                summary.invalid_documents += 1
                for error in result.errors or []:
                    summary.common_errors[error.field] = summary.common_errors.get(error.field, 0) + 1
            elif result.status == DocumentStatus.ERROR:
                summary.error_documents += 1

        return summary
