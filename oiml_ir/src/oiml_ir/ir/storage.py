"""Storage-level IR: tables, keys, tenant scoping and constraints."""

from typing import Annotated, List, Literal, Optional, Union
from pydantic import Field

from .common import IRModel

NonEmptyName = Annotated[str, Field(min_length=1)]


class SinglePrimaryKey(IRModel):
    kind: Literal["Single"] = "Single"
    field: NonEmptyName


class CompositePrimaryKey(IRModel):
    kind: Literal["Composite"] = "Composite"
    fields: List[NonEmptyName] = Field(min_length=2)


PrimaryKey = Annotated[
    Union[SinglePrimaryKey, CompositePrimaryKey],
    Field(discriminator="kind"),
]


class TenantScope(IRModel):
    """Single-column tenant scope (e.g. ``workspaceId``)."""

    mode: Literal["Column"] = "Column"
    column: NonEmptyName


class RelationalTableStorage(IRModel):
    """An entity stored as a relational table."""

    kind: Literal["RelationalTable"] = "RelationalTable"
    table_name: NonEmptyName
    db_schema: Optional[str] = Field(default=None, alias="schema")
    primary_key: PrimaryKey
    tenant_scoping: Optional[TenantScope] = None


# v1 only knows relational tables; new storage kinds become a discriminated union here.
EntityStorage = RelationalTableStorage


class UniqueConstraint(IRModel):
    kind: Literal["Unique"] = "Unique"
    name: Optional[str] = None
    fields: List[NonEmptyName] = Field(min_length=1)


class IndexConstraint(IRModel):
    kind: Literal["Index"] = "Index"
    name: Optional[str] = None
    fields: List[NonEmptyName] = Field(min_length=1)
    unique: Optional[bool] = None
    type: Optional[str] = None  # index type hint: btree, hash, gist, gin


Constraint = Annotated[
    Union[UniqueConstraint, IndexConstraint],
    Field(discriminator="kind"),
]
