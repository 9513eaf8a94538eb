"""``rename_field`` -> RenameField IR."""

from typing import Any, Mapping, Union

from oiml_ir.intent.models import RenameFieldIntent
from oiml_ir.ir.data import RenameFieldIR
from ..builders import check_entity_exists, coerce_intent, envelope, finalize
from ..types import DiagnosticCollector, TransformContext
from ..utils import is_reserved_keyword


def transform_rename_field(
    intent: Union[Mapping[str, Any], RenameFieldIntent],
    context: TransformContext,
) -> RenameFieldIR:
    """Transform a ``rename_field`` intent; ``updateReferences`` is always true."""
    intent = coerce_intent(RenameFieldIntent, intent)
    diagnostics = DiagnosticCollector()

    check_entity_exists(intent.entity, context, diagnostics, "$.entity")
    if is_reserved_keyword(intent.to):
        diagnostics.warn("IR011", f"New field name '{intent.to}' is a reserved SQL keyword", "$.to")

    diagnostics.info(
        "IR051",
        f"Renaming field '{intent.from_}' to '{intent.to}' in entity '{intent.entity}' "
        f"- references will be updated automatically",
    )

    payload = envelope(
        "RenameField",
        context,
        entityName=intent.entity,
        fromName=intent.from_,
        toName=intent.to,
        updateReferences=True,
    )
    return finalize(RenameFieldIR, payload, diagnostics)
