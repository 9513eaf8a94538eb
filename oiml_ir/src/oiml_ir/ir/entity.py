"""Resolved entity definition."""

from typing import List, Optional
from pydantic import Field

from .common import IRModel
from .field import FieldIR
from .seed import SeedIR
from .storage import Constraint, EntityStorage


class EntityIR(IRModel):
    """A domain entity: its storage, fields, constraints and traceability.

    Constraints and seed generators reference fields by name only.
    """

    name: str = Field(min_length=1)
    namespace: Optional[str] = None
    module: Optional[str] = None
    label_singular: Optional[str] = None
    label_plural: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None
    storage: EntityStorage
    fields: List[FieldIR] = Field(min_length=1)
    constraints: Optional[List[Constraint]] = None
    seed: Optional[SeedIR] = None
    created_by_intent: str = Field(min_length=1)
    updated_by_intents: List[str]
