"""Database validation report — aggregates per-collection results into one document."""

import json
import math
from pathlib import Path
from typing import Union

import structlog
from pydantic import BaseModel, Field

from app.validators.models import DocumentStatus, DocumentValidationResult, ValidationSummary

logger = structlog.get_logger()

RECOMMENDATIONS = [
    "Update invalid documents to match the collection schema definitions",
    "If a schema itself is wrong, change the document models in app/models/documents.py",
    "Consider running a data migration to fix recurring issues automatically",
]


def valid_percentage(valid: int, total: int) -> int:
    """Share of valid documents, rounded half-up; 0 when there are no documents."""
    if total <= 0:
        return 0
    return math.floor(valid * 100 / total + 0.5)


class CollectionReport(BaseModel):
    """Summary and results for a single collection."""

    collection: str
    valid_percentage: int
    summary: ValidationSummary
    results: list[DocumentValidationResult] = Field(default_factory=list)

    @property
    def invalid_results(self) -> list[DocumentValidationResult]:
        return [r for r in self.results if r.status == DocumentStatus.INVALID]


class DatabaseValidationReport(BaseModel):
    """Complete report across every validated collection."""

    total_documents: int = 0
    valid_documents: int = 0
    valid_percentage: int = 0
    collections: dict[str, CollectionReport] = Field(default_factory=dict)
    recommendations: list[str] = Field(default_factory=list)

    @property
    def all_valid(self) -> bool:
        return self.valid_documents == self.total_documents


def build_collection_report(collection: str, results: list[DocumentValidationResult]) -> CollectionReport:
    summary = ValidationSummary.build(results, collection)
    return CollectionReport(
        collection=collection,
        valid_percentage=valid_percentage(summary.valid_documents, summary.total_documents),
        summary=summary,
        results=results,
    )


def build_database_report(
    results_by_collection: dict[str, list[DocumentValidationResult]],
) -> DatabaseValidationReport:
    """Build the whole-database report from validate_multiple_collections output."""
    collections = {
        name: build_collection_report(name, results)
        for name, results in results_by_collection.items()
    }

    total = sum(c.summary.total_documents for c in collections.values())
    valid = sum(c.summary.valid_documents for c in collections.values())

    return DatabaseValidationReport(
        total_documents=total,
        valid_documents=valid,
        valid_percentage=valid_percentage(valid, total),
        collections=collections,
        recommendations=list(RECOMMENDATIONS) if valid < total else [],
    )


def write_report(report: DatabaseValidationReport, path: Union[str, Path]) -> Path:
    """Write the report as pretty-printed JSON and return the path written."""
    target = Path(path)
    if target.parent != Path("."):
        target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(report.model_dump(mode="json"), indent=2), encoding="utf-8")
    logger.info("validation_report_written", path=str(target), total_documents=report.total_documents)
    return target
