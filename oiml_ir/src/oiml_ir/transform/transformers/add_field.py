"""``add_field`` -> AddField IR."""

from typing import Any, Mapping, Union

from oiml_ir.config.logging import get_logger
from oiml_ir.intent.models import AddFieldIntent
from oiml_ir.ir.data import AddFieldIR
from ..builders import build_fields, check_entity_exists, coerce_intent, envelope, finalize
from ..types import DiagnosticCollector, TransformContext

logger = get_logger(__name__)


def transform_add_field(
    intent: Union[Mapping[str, Any], AddFieldIntent],
    context: TransformContext,
) -> AddFieldIR:
    """
    Transform an ``add_field`` intent into an AddField IR envelope.

    Duplicate names (IR020) and unresolvable types (IR021) are reported and
    the offending field is skipped, so every problem is listed in one pass.

    Raises:
        IRTransformError: On an unknown entity, duplicates or invalid types
    """
    intent = coerce_intent(AddFieldIntent, intent)
    diagnostics = DiagnosticCollector()
    logger.debug(f"add_field: {len(intent.fields)} field(s) on '{intent.entity}'")

    check_entity_exists(intent.entity, context, diagnostics, "$.entity")
    fields = build_fields(intent.fields, intent.entity, diagnostics)

    payload = envelope("AddField", context, entityName=intent.entity, fields=fields)
    return finalize(AddFieldIR, payload, diagnostics)
