"""Seeding configuration IR."""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from pydantic import Field

from .common import IRModel


class FakerGenerator(IRModel):
    kind: Literal["Faker"] = "Faker"
    path: str = Field(min_length=1)  # e.g. "lorem.sentence"


class EnumWeightsGenerator(IRModel):
    kind: Literal["EnumWeights"] = "EnumWeights"
    values: List[str]
    weights: Optional[List[float]] = None


class LiteralGenerator(IRModel):
    kind: Literal["Literal"] = "Literal"
    value: Any


class SequentialGenerator(IRModel):
    kind: Literal["Sequential"] = "Sequential"
    start: Optional[float] = None
    step: Optional[float] = None


FieldSeedGenerator = Annotated[
    Union[FakerGenerator, EnumWeightsGenerator, LiteralGenerator, SequentialGenerator],
    Field(discriminator="kind"),
]


class SeedIR(IRModel):
    """Seeding configuration for an entity."""

    mode: Literal["Random", "Fixtures"]
    environments: List[Literal["dev", "preview", "test", "prod"]] = Field(min_length=1)
    count: Optional[int] = Field(default=None, gt=0)
    generator_by_field: Optional[Dict[str, FieldSeedGenerator]] = None
    fixtures_path: Optional[str] = None
