"""Top-level intent document (``oiml.intent`` file)."""

import hashlib
import json
from typing import Any, Dict, List, Mapping, Optional
from pydantic import BaseModel, ConfigDict, Field

from oiml_ir.ir.common import SEMVER_PATTERN


class DocumentProvenance(BaseModel):
    """Who or what authored the document."""

    model_config = ConfigDict(extra="forbid")

    created_by: Optional[Dict[str, Any]] = None  # {type: human|agent|system, name?, id?}
    created_at: Optional[str] = None
    source: Optional[str] = None
    model: Optional[str] = None


class IntentDocument(BaseModel):
    """
    A versioned batch of intents.

    Individual intents are kept as raw mappings here: each is validated by
    its transformer, so one malformed intent does not reject the whole file.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    version: str = Field(default="0.1.0", pattern=SEMVER_PATTERN)
    type: Optional[str] = None  # "oiml.intent"
    schema_url: Optional[str] = Field(default=None, alias="$schema")
    ai_context: Optional[Dict[str, Any]] = None
    provenance: Optional[DocumentProvenance] = None
    intents: List[Dict[str, Any]] = Field(min_length=1)

    @property
    def author_model(self) -> Optional[str]:
        """AI model recorded in the document provenance, if any."""
        if self.provenance is None:
            return None
        if self.provenance.model:
            return self.provenance.model
        created_by = self.provenance.created_by or {}
        if created_by.get("type") == "agent":
            return created_by.get("name")
        return None


def compute_intent_id(document: Mapping[str, Any]) -> str:
    """
    Content id of an intent document: ``sha256:`` plus 16 hex digits.

    The hash covers the canonical JSON form (sorted keys, compact), so key
    order and formatting of the source file do not change the id.
    """
    canonical = json.dumps(document, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)
    digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
    return f"sha256:{digest[:16]}"
