"""Field and relation blocks shared by several intent kinds."""

from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

RelationKind = Literal["one_to_one", "one_to_many", "many_to_one", "many_to_many"]

INVERSE_RELATION_KIND: Dict[str, str] = {
    "one_to_one": "one_to_one",
    "many_to_one": "one_to_many",
    "one_to_many": "many_to_one",
    "many_to_many": "many_to_many",
}


class IntentModel(BaseModel):
    """Base for intent input models: snake_case keys, unknown keys rejected."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class FieldAttribute(IntentModel):
    """Free-form attribute such as ``indexed``, ``primary`` or ``on_delete``."""

    name: str
    args: Dict[str, Any] = Field(default_factory=dict)


class ForeignKey(IntentModel):
    local_field: str = Field(min_length=1)
    target_field: str = Field(min_length=1)
    constraint_name: Optional[str] = None


class ReverseRelationSpec(IntentModel):
    enabled: bool = True
    field_name: str = Field(min_length=1)
    kind: Optional[RelationKind] = None
    attributes: List[FieldAttribute] = Field(default_factory=list)


def check_relation_shape(kind: str, foreign_key, reverse) -> None:
    if kind in ("many_to_one", "one_to_one") and foreign_key is None:
        raise ValueError("foreign_key is required for *_to_one relations")
    if reverse is not None and reverse.kind and INVERSE_RELATION_KIND[kind] != reverse.kind:
        raise ValueError("reverse.kind must be the inverse of relation.kind")


class FieldRelation(IntentModel):
    """Relation declared inline on a field."""

    target_entity: str = Field(min_length=1)
    kind: RelationKind
    foreign_key: Optional[ForeignKey] = None
    attributes: List[FieldAttribute] = Field(default_factory=list)
    reverse: Optional[ReverseRelationSpec] = None
    emit_migration: bool = True

    @model_validator(mode="after")
    def check_shape(self) -> "FieldRelation":
        check_relation_shape(self.kind, self.foreign_key, self.reverse)
        return self


class FieldApiSpec(IntentModel):
    include: bool
    endpoints: Optional[List[str]] = None


class FieldSpec(IntentModel):
    """A human-authored field. ``type`` stays a loose token until resolution."""

    name: str = Field(min_length=1)
    type: str
    required: Optional[bool] = None
    unique: Optional[bool] = None
    default: Any = None
    max_length: Optional[int] = Field(default=None, gt=0)
    min_length: Optional[int] = Field(default=None, ge=0)
    pattern: Optional[str] = None
    min: Optional[float] = None
    max: Optional[float] = None
    array_type: Optional[str] = None
    enum_values: Optional[List[str]] = None
    enum_name: Optional[str] = None
    attributes: List[FieldAttribute] = Field(default_factory=list)
    api: Optional[FieldApiSpec] = None
    relation: Optional[FieldRelation] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None

    def has_attribute(self, *names: str) -> bool:
        return any(attr.name in names for attr in self.attributes)
