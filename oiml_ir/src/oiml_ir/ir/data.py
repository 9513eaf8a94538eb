"""IR envelopes for data-scope intents (entities, fields, relations)."""

from typing import Annotated, List, Literal
from pydantic import Field

from .common import Diagnostic, IRModel, Provenance
from .entity import EntityIR
from .field import FieldIR
from .types import ReferenceType


class AddEntityIR(IRModel):
    """IR envelope for an ``add_entity`` intent."""

    kind: Literal["AddEntity"] = "AddEntity"
    ir_version: Literal["1.0.0"] = "1.0.0"
    provenance: Provenance
    entity: EntityIR
    diagnostics: List[Diagnostic]


class AddFieldIR(IRModel):
    """IR envelope for an ``add_field`` intent: new fields on an existing entity."""

    kind: Literal["AddField"] = "AddField"
    ir_version: Literal["1.0.0"] = "1.0.0"
    provenance: Provenance
    entity_name: str = Field(min_length=1)
    fields: List[FieldIR] = Field(min_length=1)
    diagnostics: List[Diagnostic]


class RelationIR(IRModel):
    """A resolved relation from ``source_entity.field_name`` to ``target_entity``."""

    source_entity: str = Field(min_length=1)
    target_entity: str = Field(min_length=1)
    field_name: str = Field(min_length=1)
    type: ReferenceType
    emit_migration: bool


class AddRelationIR(IRModel):
    """IR envelope for an ``add_relation`` intent."""

    kind: Literal["AddRelation"] = "AddRelation"
    ir_version: Literal["1.0.0"] = "1.0.0"
    provenance: Provenance
    relation: RelationIR
    diagnostics: List[Diagnostic]


class RemoveEntityIR(IRModel):
    """IR envelope for a ``remove_entity`` intent.

    Describes a deletion for a downstream generator; nothing is deleted here.
    """

    kind: Literal["RemoveEntity"] = "RemoveEntity"
    ir_version: Literal["1.0.0"] = "1.0.0"
    provenance: Provenance
    entity_name: str = Field(min_length=1)
    cascade: bool
    diagnostics: List[Diagnostic]


class RemoveFieldIR(IRModel):
    """IR envelope for a ``remove_field`` intent."""

    kind: Literal["RemoveField"] = "RemoveField"
    ir_version: Literal["1.0.0"] = "1.0.0"
    provenance: Provenance
    entity_name: str = Field(min_length=1)
    field_names: List[Annotated[str, Field(min_length=1)]] = Field(min_length=1)
    diagnostics: List[Diagnostic]


class RenameEntityIR(IRModel):
    """IR envelope for a ``rename_entity`` intent."""

    kind: Literal["RenameEntity"] = "RenameEntity"
    ir_version: Literal["1.0.0"] = "1.0.0"
    provenance: Provenance
    from_name: str = Field(min_length=1)
    to_name: str = Field(min_length=1)
    update_references: bool
    diagnostics: List[Diagnostic]


class RenameFieldIR(IRModel):
    """IR envelope for a ``rename_field`` intent."""

    kind: Literal["RenameField"] = "RenameField"
    ir_version: Literal["1.0.0"] = "1.0.0"
    provenance: Provenance
    entity_name: str = Field(min_length=1)
    from_name: str = Field(min_length=1)
    to_name: str = Field(min_length=1)
    update_references: bool
    diagnostics: List[Diagnostic]
