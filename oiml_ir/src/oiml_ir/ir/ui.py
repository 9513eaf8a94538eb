"""IR envelope for ui-scope intents."""

from typing import Annotated, List, Literal, Optional
from pydantic import Field

from .common import Diagnostic, IRModel, Provenance


class ComponentIR(IRModel):
    name: str = Field(min_length=1)
    template: Literal["List", "Form", "Custom"]
    entity: Optional[str] = None
    display_fields: Optional[List[Annotated[str, Field(min_length=1)]]] = None
    route: Optional[str] = None


class AddComponentIR(IRModel):
    """IR envelope for an ``add_component`` intent."""

    kind: Literal["AddComponent"] = "AddComponent"
    ir_version: Literal["1.0.0"] = "1.0.0"
    provenance: Provenance
    component: ComponentIR
    diagnostics: List[Diagnostic]
