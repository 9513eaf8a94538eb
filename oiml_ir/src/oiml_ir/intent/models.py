"""Intent input models, one per intent kind.

These mirror the published ``oiml.intent`` schema. Only the shape is
checked here; types, names and references are resolved by the transformers.
"""

from typing import Any, Dict, List, Literal, Optional, Tuple
from pydantic import Field, model_validator

from oiml_ir.ir.api import PATH_PATTERN

from .fields import (
    FieldAttribute,
    FieldSpec,
    ForeignKey,
    IntentModel,
    RelationKind,
    ReverseRelationSpec,
    check_relation_shape,
)

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]


class IndexSpec(IntentModel):
    name: Optional[str] = None
    fields: List[str] = Field(min_length=1)
    unique: bool = False
    type: Optional[str] = None


class SeedSpec(IntentModel):
    mode: Literal["Random", "Fixtures"] = "Random"
    environments: List[str] = Field(default_factory=lambda: ["dev"])
    count: Optional[int] = None
    generators: Optional[Dict[str, Dict[str, Any]]] = None
    fixtures_path: Optional[str] = None


class AddEntityIntent(IntentModel):
    kind: Literal["add_entity"] = "add_entity"
    scope: Literal["data"] = "data"
    entity: str = Field(min_length=1)
    fields: List[FieldSpec] = Field(min_length=1)
    unique: Optional[List[List[str]]] = None
    indexes: Optional[List[IndexSpec]] = None
    namespace: Optional[str] = None
    module: Optional[str] = None
    label_singular: Optional[str] = None
    label_plural: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None
    table_name: Optional[str] = None
    table_schema: Optional[str] = None
    tenant_column: Optional[str] = None
    seed: Optional[SeedSpec] = None


class AddFieldIntent(IntentModel):
    kind: Literal["add_field"] = "add_field"
    scope: Literal["data"] = "data"
    entity: str = Field(min_length=1)
    fields: List[FieldSpec] = Field(min_length=1)


class RemoveFieldIntent(IntentModel):
    kind: Literal["remove_field"] = "remove_field"
    scope: Literal["data"] = "data"
    entity: str = Field(min_length=1)
    fields: List[str] = Field(min_length=1)


class RemoveEntityIntent(IntentModel):
    kind: Literal["remove_entity"] = "remove_entity"
    scope: Literal["data"] = "data"
    entity: str = Field(min_length=1)
    cascade: bool = False


class RenameEntityIntent(IntentModel):
    kind: Literal["rename_entity"] = "rename_entity"
    scope: Literal["data"] = "data"
    from_: str = Field(alias="from", min_length=1)
    to: str = Field(min_length=1)
    update_references: Optional[bool] = None  # ignored, references are always updated


class RenameFieldIntent(IntentModel):
    kind: Literal["rename_field"] = "rename_field"
    scope: Literal["data"] = "data"
    entity: str = Field(min_length=1)
    from_: str = Field(alias="from", min_length=1)
    to: str = Field(min_length=1)
    update_references: Optional[bool] = None  # ignored, references are always updated


class RelationSpec(IntentModel):
    source_entity: str = Field(min_length=1)
    target_entity: str = Field(min_length=1)
    kind: RelationKind
    field_name: str = Field(min_length=1)
    foreign_key: Optional[ForeignKey] = None
    attributes: List[FieldAttribute] = Field(default_factory=list)
    reverse: Optional[ReverseRelationSpec] = None
    emit_migration: bool = True

    @model_validator(mode="after")
    def check_shape(self) -> "RelationSpec":
        check_relation_shape(self.kind, self.foreign_key, self.reverse)
        return self


class AddRelationIntent(IntentModel):
    kind: Literal["add_relation"] = "add_relation"
    scope: Literal["schema"] = "schema"
    relation: RelationSpec


class EndpointAuthSpec(IntentModel):
    required: bool = False
    roles: Optional[List[str]] = None


class AddEndpointIntent(IntentModel):
    kind: Literal["add_endpoint"] = "add_endpoint"
    scope: Literal["api"] = "api"
    method: HttpMethod
    path: str = Field(pattern=PATH_PATTERN)
    description: Optional[str] = None
    entity: Optional[str] = None
    fields: Optional[List[FieldSpec]] = None
    request_fields: Optional[List[FieldSpec]] = None
    auth: Optional[EndpointAuthSpec] = None


class JoinSpec(IntentModel):
    foreign_key: str = Field(min_length=1)
    target_entity: str = Field(min_length=1)
    target_field: str = Field(min_length=1)


# Parts each response field source type cannot do without
SOURCE_REQUIRED_PARTS: Dict[str, Tuple[str, ...]] = {
    "relation": ("relation",),
    "field": ("entity", "field"),
    "computed": ("expression",),
    "join": ("join",),
}


class FieldSourceSpec(IntentModel):
    type: Literal["relation", "field", "computed", "join"]
    relation: Optional[str] = None
    entity: Optional[str] = None
    field: Optional[str] = None
    expression: Optional[str] = None
    join: Optional[JoinSpec] = None

    @model_validator(mode="after")
    def check_required_parts(self) -> "FieldSourceSpec":
        missing = [name for name in SOURCE_REQUIRED_PARTS[self.type] if not getattr(self, name)]
        if missing:
            raise ValueError(f"{self.type} source requires: {', '.join(missing)}")
        return self


class FieldUpdateSpec(IntentModel):
    name: str = Field(min_length=1)
    source: FieldSourceSpec


class EndpointUpdatesSpec(IntentModel):
    add_field: Optional[List[FieldUpdateSpec]] = None
    remove_field: Optional[List[str]] = None


class UpdateEndpointIntent(IntentModel):
    kind: Literal["update_endpoint"] = "update_endpoint"
    scope: Literal["api"] = "api"
    method: HttpMethod
    path: str = Field(pattern=PATH_PATTERN)
    updates: EndpointUpdatesSpec


class CapabilityEndpointSpec(IntentModel):
    method: Optional[HttpMethod] = None
    path: Optional[str] = Field(default=None, pattern=PATH_PATTERN)
    group: Optional[str] = None
    description: Optional[str] = None


class AddCapabilityIntent(IntentModel):
    kind: Literal["add_capability"] = "add_capability"
    scope: Literal["capability"] = "capability"
    capability: Literal[
        "auth",
        "email",
        "storage",
        "billing",
        "file_upload",
        "file_stream",
        "sse",
        "websocket",
    ]
    framework: str = Field(min_length=1)
    provider: Optional[str] = None
    entity: Optional[str] = None
    config: Optional[Dict[str, Any]] = None
    endpoints: Optional[List[CapabilityEndpointSpec]] = None
    buckets: Optional[List[Dict[str, Any]]] = None
    plans: Optional[List[Dict[str, Any]]] = None


class AddComponentIntent(IntentModel):
    kind: Literal["add_component"] = "add_component"
    scope: Literal["ui"] = "ui"
    component: str = Field(min_length=1)
    template: Literal["List", "Form", "Custom"] = "Custom"
    entity: Optional[str] = None
    display_fields: Optional[List[str]] = None
    route: Optional[str] = None
