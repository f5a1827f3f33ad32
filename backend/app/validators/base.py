"""Base schema — the capability interface every collection schema implements.

A schema validates one document's data and reports field-level violations.
The engine only depends on this interface, so any structural-validation
library can sit behind it.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.validators.models import FieldError


class BaseSchema(ABC):
    """Abstract base for collection schemas.

    Contract:
        - check() is deterministic and side-effect free
        - check() never raises for bad data; it returns the violations
        - An empty list means the document conforms
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for logging."""
        ...

    @abstractmethod
    def check(self, data: Any) -> list[FieldError]:
        """Validate one document's data (without its id).

        Args:
            data: Raw document data as stored

        Returns:
            List of FieldError findings (empty if the document conforms)
        """
        ...

    # ── Helper Methods ──

    def _error(self, path: tuple, message: str, data: Any) -> FieldError:
        """Convenience method to create a FieldError for a location in data."""
        return FieldError(
            field=".".join(str(part) for part in path),
            message=message,
            received=self._value_at(data, path),
        )

    @staticmethod
    def _value_at(data: Any, path: tuple) -> Optional[Any]:
        """Walk data along path; None when any step is missing."""
        current = data
        for part in path:
            if isinstance(current, dict):
                current = current.get(part)
            elif isinstance(current, (list, tuple)) and isinstance(part, int) and -len(current) <= part < len(current):
                current = current[part]
            else:
                return None
        return current


class ModelSchema(BaseSchema):
    """Schema backed by a pydantic model."""

    def __init__(self, model: type[BaseModel]):
        if not (isinstance(model, type) and issubclass(model, BaseModel)):
            raise TypeError(f"ModelSchema requires a pydantic model class, got {model!r}")
        self.model = model

    @property
    def name(self) -> str:
        return self.model.__name__

    def check(self, data: Any) -> list[FieldError]:
        try:
            self.model.model_validate(data)
        except PydanticValidationError as exc:
            return [
                self._error(tuple(issue["loc"]), self._message(issue), data)
                for issue in exc.errors()
            ]
        return []

    @staticmethod
    def _message(issue: dict) -> str:
        """Use the raised message for custom checks instead of pydantic's 'Value error, ...'."""
        ctx = issue.get("ctx") or {}
        if issue.get("type") == "value_error" and "error" in ctx:
            return str(ctx["error"])
        return issue["msg"]

    def __repr__(self) -> str:
        return f"ModelSchema({self.name})"
