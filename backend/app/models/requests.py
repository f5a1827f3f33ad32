"""API request models."""

from pydantic import BaseModel, Field
from typing import Optional


class ValidationRunRequest(BaseModel):
    """Request to validate one or more stored collections."""

    collections: Optional[list[str]] = Field(
        default=None,
        min_length=1,
        description="Collections to validate; all recognized collections if omitted",
        examples=[["users", "appointments"]],
    )
    verbose: bool = False
