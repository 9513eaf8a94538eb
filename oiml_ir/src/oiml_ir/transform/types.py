"""Transformation context and diagnostic collection."""

from typing import FrozenSet, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from oiml_ir.config.settings import get_settings
from oiml_ir.ir.common import Diagnostic, SEMVER_PATTERN, Severity


class DiagnosticCollector:
    """
    Ordered, append-only list of diagnostics for one transform call.

    Entries are kept in the order they were reported and never removed.
    """

    def __init__(self):
        self._diagnostics: List[Diagnostic] = []

    def _add(self, code: str, severity: Severity, message: str, path: str) -> None:
        self._diagnostics.append(
            Diagnostic(code=code, severity=severity, message=message, path=path)
        )

    def error(self, code: str, message: str, path: str = "$") -> None:
        self._add(code, "error", message, path)

    def warn(self, code: str, message: str, path: str = "$") -> None:
        self._add(code, "warning", message, path)

    def info(self, code: str, message: str, path: str = "$") -> None:
        self._add(code, "info", message, path)

    def has_errors(self) -> bool:
        return any(d.severity == "error" for d in self._diagnostics)

    def get_diagnostics(self) -> List[Diagnostic]:
        """Snapshot of the collected diagnostics."""
        return list(self._diagnostics)

    def count(self, severity: Severity) -> int:
        return sum(1 for d in self._diagnostics if d.severity == severity)

    def __len__(self) -> int:
        return len(self._diagnostics)


def _default_auto_index() -> bool:
    return get_settings().auto_index


def _default_naming_convention() -> str:
    return get_settings().table_naming_convention


def _default_oiml_version() -> str:
    return get_settings().default_oiml_version


class TransformOptions(BaseModel):
    """Knobs that change how intents are resolved."""

    model_config = ConfigDict(frozen=True)

    # Add an index on every foreign key column that has none
    auto_index: bool = Field(default_factory=_default_auto_index)
    table_naming_convention: Literal["snake_case", "camelCase", "PascalCase"] = Field(
        default_factory=_default_naming_convention
    )


class TransformContext(BaseModel):
    """
    What the transformer knows about the project when resolving an intent.

    ``existing_entities=None`` means the project state is unknown, and every
    entity-existence check is skipped.
    """

    model_config = ConfigDict(frozen=True)

    intent_id: str = Field(min_length=1)
    project_id: str = Field(min_length=1)
    oiml_version: str = Field(default_factory=_default_oiml_version, pattern=SEMVER_PATTERN)
    model: Optional[str] = None
    existing_entities: Optional[FrozenSet[str]] = None
    options: TransformOptions = Field(default_factory=TransformOptions)

    @field_validator("existing_entities", mode="before")
    @classmethod
    def _coerce_entities(cls, value):
        if value is None or isinstance(value, frozenset):
            return value
        # A bare name would otherwise become a set of its characters
        if isinstance(value, (str, bytes)):
            raise ValueError("existing_entities must be a collection of entity names, not a single string")
        return frozenset(value)

    def entity_exists(self, name: str) -> bool:
        """True when entity tracking is off or ``name`` is known."""
        return self.existing_entities is None or name in self.existing_entities

    def with_entities(self, entities: Optional[FrozenSet[str]]) -> "TransformContext":
        return self.model_copy(update={"existing_entities": entities})
