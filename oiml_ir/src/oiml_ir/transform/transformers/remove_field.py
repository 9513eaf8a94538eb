"""``remove_field`` -> RemoveField IR."""

from typing import Any, Mapping, Union

from oiml_ir.intent.models import RemoveFieldIntent
from oiml_ir.ir.data import RemoveFieldIR
from ..builders import check_entity_exists, coerce_intent, envelope, finalize
from ..types import DiagnosticCollector, TransformContext


def transform_remove_field(
    intent: Union[Mapping[str, Any], RemoveFieldIntent],
    context: TransformContext,
) -> RemoveFieldIR:
    """
    Transform a ``remove_field`` intent into a RemoveField IR envelope.

    Names listed more than once are reported (IR040) and kept once, in
    first-seen order.
    """
    intent = coerce_intent(RemoveFieldIntent, intent)
    diagnostics = DiagnosticCollector()

    check_entity_exists(intent.entity, context, diagnostics, "$.entity")

    field_names = list(dict.fromkeys(intent.fields))
    if len(field_names) != len(intent.fields):
        duplicates = sorted({name for name in intent.fields if intent.fields.count(name) > 1})
        diagnostics.warn(
            "IR040", f"Duplicate field names in remove list: {', '.join(duplicates)}", "$.fields"
        )

    payload = envelope("RemoveField", context, entityName=intent.entity, fieldNames=field_names)
    return finalize(RemoveFieldIR, payload, diagnostics)
