"""Redline result models — field-level changes between two versions."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ChangeType(StrEnum):
    """How a field moved between two versions."""

    ADDED = "Added"
    REMOVED = "Removed"
    MODIFIED = "Modified"


class FieldChange(BaseModel):
    """A single field whose value differs between two versions."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    field: str
    old_value: str | None = None
    new_value: str | None = None
    change_type: ChangeType


class RedlineResult(BaseModel):
    """Field-level diff of two versions of the same entity."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    old_version: int
    new_version: int
    changes: list[FieldChange] = Field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        """True if at least one field differs."""
        return bool(self.changes)

    def to_json(self) -> str:
        """Serialize with camelCase keys for API consumers."""
        return self.model_dump_json(by_alias=True)
