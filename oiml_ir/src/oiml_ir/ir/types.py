"""Resolved field types and field-level value semantics.

Every variant carries a ``kind`` discriminator so that the closed set of
types can be matched exhaustively by code generators.
"""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union
from pydantic import Field

from .common import IRModel

ScalarKind = Literal[
    "String",
    "Text",
    "Int",
    "BigInt",
    "Float",
    "Decimal",
    "Boolean",
    "DateTime",
    "Date",
    "Time",
    "Uuid",
    "Bytes",
]

Cardinality = Literal["One", "Many"]
OnDelete = Literal["Restrict", "Cascade", "SetNull"]


class ScalarType(IRModel):
    """Primitive column type, serialized as ``{"kind": "String"}`` etc."""

    kind: ScalarKind


class JsonType(IRModel):
    """JSON/blob field, optionally pointing at an external JSON schema."""

    kind: Literal["Json"] = "Json"
    schema_ref: Optional[str] = None


class EnumType(IRModel):
    """Enumerated type with a stable, generated or explicit name."""

    kind: Literal["Enum"] = "Enum"
    name: str = Field(min_length=1)  # e.g. "IssueStatusEnum"
    values: List[Annotated[str, Field(min_length=1)]] = Field(min_length=1)
    source: Literal["Inline", "Shared"] = "Inline"


class ArrayType(IRModel):
    """Homogeneous list of another field type."""

    kind: Literal["Array"] = "Array"
    element_type: FieldType


class ReverseRelation(IRModel):
    """The virtual field generated on the target side of a reference."""

    enabled: bool
    field_name: str = Field(min_length=1)
    cardinality: Cardinality


class ReferenceType(IRModel):
    """Reference to another entity, by name."""

    kind: Literal["Reference"] = "Reference"
    target_entity: str = Field(min_length=1)
    target_field: Optional[str] = None  # defaults to the target primary key
    cardinality: Cardinality
    nullable: bool
    relation_name: Optional[str] = None
    on_delete: Optional[OnDelete] = None
    reverse: Optional[ReverseRelation] = None


FieldType = Annotated[
    Union[ScalarType, JsonType, EnumType, ArrayType, ReferenceType],
    Field(discriminator="kind"),
]

ArrayType.model_rebuild()


class LiteralDefault(IRModel):
    kind: Literal["Literal"] = "Literal"
    value: Union[bool, int, float, str]


class NowDefault(IRModel):
    kind: Literal["Now"] = "Now"


class UUIDv4Default(IRModel):
    kind: Literal["UUIDv4"] = "UUIDv4"


class AutoIncrementDefault(IRModel):
    kind: Literal["AutoIncrement"] = "AutoIncrement"


DefaultValue = Annotated[
    Union[LiteralDefault, NowDefault, UUIDv4Default, AutoIncrementDefault],
    Field(discriminator="kind"),
]


class Generated(IRModel):
    """Generated value semantics (beyond defaults)."""

    strategy: Literal["AutoIncrement", "UUID", "Timestamp", "Custom"]
    expr: Optional[str] = None


class MinLengthValidation(IRModel):
    kind: Literal["MinLength"] = "MinLength"
    min: int = Field(ge=0)


class MaxLengthValidation(IRModel):
    kind: Literal["MaxLength"] = "MaxLength"
    max: int = Field(gt=0)


class PatternValidation(IRModel):
    kind: Literal["Pattern"] = "Pattern"
    regex: str


class MinValidation(IRModel):
    kind: Literal["Min"] = "Min"
    min: float


class MaxValidation(IRModel):
    kind: Literal["Max"] = "Max"
    max: float


Validation = Annotated[
    Union[
        MinLengthValidation,
        MaxLengthValidation,
        PatternValidation,
        MinValidation,
        MaxValidation,
    ],
    Field(discriminator="kind"),
]
