"""``add_component`` -> AddComponent IR."""

from typing import Any, Mapping, Union

from oiml_ir.intent.models import AddComponentIntent
from oiml_ir.ir.ui import AddComponentIR
from ..builders import check_entity_exists, coerce_intent, envelope, finalize
from ..types import DiagnosticCollector, TransformContext


def transform_add_component(
    intent: Union[Mapping[str, Any], AddComponentIntent],
    context: TransformContext,
) -> AddComponentIR:
    """Transform an ``add_component`` intent. An unknown entity only warns."""
    intent = coerce_intent(AddComponentIntent, intent)
    diagnostics = DiagnosticCollector()

    component = {"name": intent.component, "template": intent.template}
    if intent.entity:
        check_entity_exists(intent.entity, context, diagnostics, "$.entity", fatal=False)
        component["entity"] = intent.entity
    if intent.display_fields:
        component["displayFields"] = list(intent.display_fields)
    if intent.route:
        component["route"] = intent.route

    payload = envelope("AddComponent", context, component=component)
    return finalize(AddComponentIR, payload, diagnostics)
