"""Closed discriminated union over every IR envelope kind."""

from typing import Annotated, Any, Dict, List, Union
from pydantic import Field, TypeAdapter

from .api import AddEndpointIR, UpdateEndpointIR
from .capability import AddCapabilityIR
from .data import (
    AddEntityIR,
    AddFieldIR,
    AddRelationIR,
    RemoveEntityIR,
    RemoveFieldIR,
    RenameEntityIR,
    RenameFieldIR,
)
from .ui import AddComponentIR

IntentIR = Annotated[
    Union[
        AddEntityIR,
        AddFieldIR,
        AddRelationIR,
        RemoveEntityIR,
        RemoveFieldIR,
        RenameEntityIR,
        RenameFieldIR,
        AddEndpointIR,
        UpdateEndpointIR,
        AddCapabilityIR,
        AddComponentIR,
    ],
    Field(discriminator="kind"),
]

IR_KINDS = (
    "AddEntity",
    "AddField",
    "AddRelation",
    "RemoveEntity",
    "RemoveField",
    "RenameEntity",
    "RenameField",
    "AddEndpoint",
    "UpdateEndpoint",
    "AddCapability",
    "AddComponent",
)

_intent_ir_adapter = TypeAdapter(IntentIR)
_intent_ir_list_adapter = TypeAdapter(List[IntentIR])


def parse_ir(data: Dict[str, Any]) -> IntentIR:
    """
    Validate a plain JSON IR envelope against the union.

    Args:
        data: Decoded JSON object with a ``kind`` discriminator

    Returns:
        The matching envelope model

    Raises:
        pydantic.ValidationError: If the object matches no IR kind
    """
    return _intent_ir_adapter.validate_python(data)


def parse_ir_list(data: List[Dict[str, Any]]) -> List[IntentIR]:
    """Validate a list of JSON IR envelopes."""
    return _intent_ir_list_adapter.validate_python(data)


def ir_json_schema() -> Dict[str, Any]:
    """JSON Schema of the IR union, using wire (camelCase) names."""
    return _intent_ir_adapter.json_schema(by_alias=True)
