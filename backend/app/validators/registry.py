"""Schema registry — maps a collection name to its schema.

The set of recognized collections is closed: any other name has no schema,
which is a normal answer rather than an error.
"""

from types import MappingProxyType
from typing import Mapping, Optional

from app.models.documents import Appointment, DoctorProfile, Notification, PatientProfile, UserProfile
from app.validators.base import BaseSchema, ModelSchema

RECOGNIZED_COLLECTIONS: tuple[str, ...] = ("users", "patients", "doctors", "appointments", "notifications")

COLLECTION_SCHEMAS: Mapping[str, BaseSchema] = MappingProxyType({
    "users": ModelSchema(UserProfile),
    "patients": ModelSchema(PatientProfile),
    "doctors": ModelSchema(DoctorProfile),
    "appointments": ModelSchema(Appointment),
    "notifications": ModelSchema(Notification),
})


class SchemaRegistry:
    """Immutable lookup table from collection name to schema."""

    def __init__(self, schemas: Optional[Mapping[str, BaseSchema]] = None):
        """Initialize with the default collection schemas or a custom mapping.

        Args:
            schemas: Optional name -> schema mapping. If None, uses COLLECTION_SCHEMAS.
        """
        source = COLLECTION_SCHEMAS if schemas is None else schemas
        for name, schema in source.items():
            if not isinstance(schema, BaseSchema):
                raise TypeError(f"Schema for collection '{name}' must be a BaseSchema, got {type(schema).__name__}")
        self._schemas: Mapping[str, BaseSchema] = MappingProxyType(dict(source))

    def get(self, collection_name: str) -> Optional[BaseSchema]:
        """Return the schema for a collection, or None if it is not recognized."""
        return self._schemas.get(collection_name)

    def collections(self) -> list[str]:
        """Recognized collection names in declaration order."""
        return list(self._schemas.keys())

    def __contains__(self, collection_name: object) -> bool:
        return collection_name in self._schemas


# Module-level singleton
schema_registry = SchemaRegistry()


def get_schema_for_collection(collection_name: str) -> Optional[BaseSchema]:
    """Look up the schema registered for collection_name (None if unrecognized)."""
    return schema_registry.get(collection_name)
