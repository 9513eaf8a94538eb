"""``update_endpoint`` -> UpdateEndpoint IR."""

from typing import Any, Dict, Mapping, Union

from oiml_ir.intent.models import FieldSourceSpec, UpdateEndpointIntent
from oiml_ir.ir.api import UpdateEndpointIR
from ..builders import coerce_intent, envelope, finalize
from ..types import DiagnosticCollector, TransformContext


def _build_source(source: FieldSourceSpec) -> Dict[str, Any]:
    """Map an intent field source to its IR form. Missing parts are left for re-validation."""
    if source.type == "relation":
        data = {"type": "relation", "relation": source.relation}
        if source.field:
            data["field"] = source.field
        return data
    if source.type == "field":
        return {"type": "field", "entity": source.entity, "field": source.field}
    if source.type == "computed":
        return {"type": "computed", "expression": source.expression or ""}
    if source.join is None:
        return {"type": "join"}
    return {
        "type": "join",
        "foreignKey": source.join.foreign_key,
        "targetEntity": source.join.target_entity,
        "targetField": source.join.target_field,
    }


def transform_update_endpoint(
    intent: Union[Mapping[str, Any], UpdateEndpointIntent],
    context: TransformContext,
) -> UpdateEndpointIR:
    """
    Transform an ``update_endpoint`` intent into an UpdateEndpoint IR envelope.

    Only the structure is checked. A source missing its required parts
    (e.g. a ``field`` source without ``entity``) is rejected with the
    intent (IR010).
    """
    intent = coerce_intent(UpdateEndpointIntent, intent)
    diagnostics = DiagnosticCollector()

    updates: Dict[str, Any] = {}
    if intent.updates.add_field:
        updates["addFields"] = [
            {"name": update.name, "source": _build_source(update.source)}
            for update in intent.updates.add_field
        ]
    if intent.updates.remove_field:
        updates["removeFields"] = list(intent.updates.remove_field)

    payload = envelope(
        "UpdateEndpoint",
        context,
        method=intent.method,
        path=intent.path,
        updates=updates,
    )
    return finalize(UpdateEndpointIR, payload, diagnostics)
