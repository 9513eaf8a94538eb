"""``remove_entity`` -> RemoveEntity IR."""

from typing import Any, Mapping, Union

from oiml_ir.intent.models import RemoveEntityIntent
from oiml_ir.ir.data import RemoveEntityIR
from ..builders import check_entity_exists, coerce_intent, envelope, finalize
from ..types import DiagnosticCollector, TransformContext


def transform_remove_entity(
    intent: Union[Mapping[str, Any], RemoveEntityIntent],
    context: TransformContext,
) -> RemoveEntityIR:
    """Transform a ``remove_entity`` intent. Cascading deletes only warn (IR041)."""
    intent = coerce_intent(RemoveEntityIntent, intent)
    diagnostics = DiagnosticCollector()

    check_entity_exists(intent.entity, context, diagnostics, "$.entity")
    if intent.cascade:
        diagnostics.warn(
            "IR041",
            f"Cascade delete is enabled for entity '{intent.entity}' - related data will be deleted",
            "$.cascade",
        )

    payload = envelope("RemoveEntity", context, entityName=intent.entity, cascade=intent.cascade)
    return finalize(RemoveEntityIR, payload, diagnostics)
