"""Common IR models shared across all intent envelopes."""

from typing import Any, Dict, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

IR_VERSION = "1.0.0"

ISO_UTC_PATTERN = r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{3})?Z$"
SEMVER_PATTERN = r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)$"

Severity = Literal["error", "warning", "info"]


class IRModel(BaseModel):
    """Base for all IR models: closed, immutable, camelCase on the wire."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_json_dict(self) -> Dict[str, Any]:
        """Dump to the JSON contract (camelCase keys, unset optionals omitted)."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Diagnostic(IRModel):
    """A structured, leveled message produced while resolving an intent."""

    code: str = Field(min_length=1)  # e.g. "IR030"
    severity: Severity
    message: str = Field(min_length=1)
    path: str  # JSON-path-like pointer into the source intent, e.g. "$.fields[0].type"


class Provenance(IRModel):
    """Traceability metadata attached to every IR envelope."""

    intent_id: str = Field(min_length=1)  # content hash, URI or filename
    project_id: str = Field(min_length=1)
    generated_at: str = Field(pattern=ISO_UTC_PATTERN)
    source_intent_version: str = Field(pattern=SEMVER_PATTERN)
    model: Optional[str] = None  # AI model used, if any
