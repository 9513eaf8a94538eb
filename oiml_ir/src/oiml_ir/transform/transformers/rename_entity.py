"""``rename_entity`` -> RenameEntity IR."""

from typing import Any, Mapping, Union

from oiml_ir.intent.models import RenameEntityIntent
from oiml_ir.ir.data import RenameEntityIR
from ..builders import check_entity_exists, coerce_intent, envelope, finalize
from ..types import DiagnosticCollector, TransformContext
from ..utils import is_reserved_keyword


def transform_rename_entity(
    intent: Union[Mapping[str, Any], RenameEntityIntent],
    context: TransformContext,
) -> RenameEntityIR:
    """
    Transform a ``rename_entity`` intent into a RenameEntity IR envelope.

    ``updateReferences`` is always true in the output, whatever the intent says.

    Raises:
        IRTransformError: If the source is unknown (IR030) or the new name
            is already taken (IR031)
    """
    intent = coerce_intent(RenameEntityIntent, intent)
    diagnostics = DiagnosticCollector()

    check_entity_exists(intent.from_, context, diagnostics, "$.from")
    if context.existing_entities is not None and intent.to in context.existing_entities:
        diagnostics.error("IR031", f"Entity '{intent.to}' already exists", "$.to")
    if is_reserved_keyword(intent.to):
        diagnostics.warn("IR011", f"New entity name '{intent.to}' is a reserved SQL keyword", "$.to")

    diagnostics.info(
        "IR050",
        f"Renaming entity '{intent.from_}' to '{intent.to}' - references will be updated automatically",
    )

    payload = envelope(
        "RenameEntity",
        context,
        fromName=intent.from_,
        toName=intent.to,
        updateReferences=True,
    )
    return finalize(RenameEntityIR, payload, diagnostics)
