"""Resolved field definition."""

from typing import List, Optional
from pydantic import Field

from .common import IRModel
from .types import DefaultValue, FieldType, Generated, Validation


class FieldAPIConfig(IRModel):
    """API exposure of a field."""

    include: bool
    endpoints: Optional[List[str]] = None


class FieldIR(IRModel):
    """A single resolved field of an entity, endpoint or request body."""

    name: str = Field(min_length=1)
    type: FieldType
    nullable: bool
    unique: Optional[bool] = None
    is_primary: Optional[bool] = None
    default: Optional[DefaultValue] = None
    generated: Optional[Generated] = None
    validations: Optional[List[Validation]] = None
    api: Optional[FieldAPIConfig] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None
