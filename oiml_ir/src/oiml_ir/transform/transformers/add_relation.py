"""``add_relation`` -> AddRelation IR."""

from typing import Any, Mapping, Union

from oiml_ir.config.logging import get_logger
from oiml_ir.intent.models import AddRelationIntent
from oiml_ir.ir.data import AddRelationIR
from ..builders import build_reference, check_entity_exists, coerce_intent, envelope, finalize
from ..errors import InvalidTypeError, IRTransformError
from ..types import DiagnosticCollector, TransformContext

logger = get_logger(__name__)


def transform_add_relation(
    intent: Union[Mapping[str, Any], AddRelationIntent],
    context: TransformContext,
) -> AddRelationIR:
    """
    Transform an ``add_relation`` intent into an AddRelation IR envelope.

    Cardinality follows the relation kind: ``*_to_one`` gives ``One`` and
    ``*_to_many`` gives ``Many``. Both endpoints are checked independently,
    so two unknown entities give two IR030 errors.

    Raises:
        IRTransformError: If the source or target entity is unknown, or the
            relation attributes cannot be resolved (IR021)
    """
    intent = coerce_intent(AddRelationIntent, intent)
    diagnostics = DiagnosticCollector()
    rel = intent.relation
    logger.debug(f"add_relation: {rel.source_entity}.{rel.field_name} -> {rel.target_entity} ({rel.kind})")

    check_entity_exists(rel.source_entity, context, diagnostics, "$.relation.source_entity", label="Source entity")
    check_entity_exists(rel.target_entity, context, diagnostics, "$.relation.target_entity", label="Target entity")

    relation = {
        "sourceEntity": rel.source_entity,
        "targetEntity": rel.target_entity,
        "fieldName": rel.field_name,
        "emitMigration": rel.emit_migration,
    }
    try:
        relation["type"] = build_reference(
            rel.target_entity,
            rel.kind,
            foreign_key=rel.foreign_key,
            attributes=rel.attributes,
            reverse=rel.reverse,
            relation_name=rel.field_name,
        )
    except InvalidTypeError as e:
        diagnostics.error("IR021", f"Invalid relation: {e}", "$.relation.attributes")
        logger.warning(f"add_relation: {rel.field_name} has no resolvable reference type")
        raise IRTransformError("AddRelation transformation failed", diagnostics.get_diagnostics()) from e

    payload = envelope("AddRelation", context, relation=relation)
    return finalize(AddRelationIR, payload, diagnostics)
