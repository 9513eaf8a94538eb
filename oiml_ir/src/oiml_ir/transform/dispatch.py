"""Route intents to their transformer, one at a time or a whole document."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from oiml_ir.config.logging import get_logger, intent_logger
from oiml_ir.config.settings import get_settings
from oiml_ir.intent.document import IntentDocument, compute_intent_id
from oiml_ir.ir.common import Diagnostic
from oiml_ir.ir.union import IntentIR
from .builders import format_error_path
from .errors import IRTransformError, UnsupportedIntentError
from .types import TransformContext
from .transformers import (
    transform_add_capability,
    transform_add_component,
    transform_add_endpoint,
    transform_add_entity,
    transform_add_field,
    transform_add_relation,
    transform_remove_entity,
    transform_remove_field,
    transform_rename_entity,
    transform_rename_field,
    transform_update_endpoint,
)

logger = get_logger(__name__)

Transformer = Callable[[Any, TransformContext], IntentIR]

TRANSFORMERS: Dict[str, Transformer] = {
    "add_entity": transform_add_entity,
    "add_field": transform_add_field,
    "add_relation": transform_add_relation,
    "remove_entity": transform_remove_entity,
    "remove_field": transform_remove_field,
    "rename_entity": transform_rename_entity,
    "rename_field": transform_rename_field,
    "add_endpoint": transform_add_endpoint,
    "update_endpoint": transform_update_endpoint,
    "add_capability": transform_add_capability,
    "add_component": transform_add_component,
}


def transform_intent(intent: Mapping[str, Any], context: TransformContext) -> IntentIR:
    """
    Transform a single raw intent, routed by its ``kind``.

    Args:
        intent: Raw intent mapping with a ``kind`` key
        context: Project state and provenance

    Returns:
        The validated IR envelope

    Raises:
        UnsupportedIntentError: If ``kind`` is missing or unknown (IR000)
        IRTransformError: If the transformer reports errors
    """
    kind = intent.get("kind") if isinstance(intent, Mapping) else None
    transformer = TRANSFORMERS.get(kind) if isinstance(kind, str) else None
    if transformer is None:
        diagnostic = Diagnostic(
            code="IR000",
            severity="error",
            message=f"Unsupported intent kind: {kind!r}",
            path="$.kind",
        )
        raise UnsupportedIntentError(f"Unsupported intent kind: {kind!r}", [diagnostic])

    logger.debug(f"Dispatching {kind} intent")
    return transformer(intent, context)


@dataclass
class IntentFailure:
    """An intent of a document that could not be transformed."""

    index: int
    kind: Optional[str]
    diagnostics: List[Diagnostic]


@dataclass
class DocumentTransformResult:
    """
    IR envelopes of the intents that succeeded, failures for the rest.

    ``ir_indices[i]`` is the position in the document of the intent that
    produced ``irs[i]``.
    """

    irs: List[IntentIR] = field(default_factory=list)
    failures: List[IntentFailure] = field(default_factory=list)
    ir_indices: List[int] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def add_ir(self, index: int, ir: IntentIR) -> None:
        self.irs.append(ir)
        self.ir_indices.append(index)

    @property
    def diagnostics(self) -> List[Diagnostic]:
        """Every diagnostic, in document order of the intents that reported them."""
        groups = [(index, ir.diagnostics) for index, ir in zip(self.ir_indices, self.irs)]
        groups.extend((failure.index, failure.diagnostics) for failure in self.failures)
        groups.sort(key=lambda group: group[0])
        return [d for _, diagnostics in groups for d in diagnostics]


def _evolve_entities(entities: Optional[FrozenSet[str]], ir: IntentIR) -> Optional[FrozenSet[str]]:
    """Known entity set after applying ``ir``."""
    if entities is None:
        return None
    if ir.kind == "AddEntity":
        return entities | {ir.entity.name}
    if ir.kind == "RemoveEntity":
        return entities - {ir.entity_name}
    if ir.kind == "RenameEntity":
        return (entities - {ir.from_name}) | {ir.to_name}
    return entities


def transform_document(
    document: Union[Mapping[str, Any], IntentDocument],
    project_id: Optional[str] = None,
    intent_id: Optional[str] = None,
    existing_entities: Optional[Iterable[str]] = None,
    model: Optional[str] = None,
) -> DocumentTransformResult:
    """
    Transform every intent of an intent document.

    A failing intent does not stop the others. When ``existing_entities`` is
    given, the known entity set follows the document: an entity added by an
    earlier intent can be referenced by a later one.

    Args:
        document: Raw document mapping or IntentDocument
        project_id: Project identifier, defaults to ``settings.default_project_id``
        intent_id: Provenance id, defaults to the content hash of the document
        existing_entities: Entities known before the document, None to skip checks
        model: AI model name, defaults to the one in the document provenance

    Returns:
        DocumentTransformResult with the IR envelopes and the failures

    Raises:
        IRTransformError: If the document itself is malformed (IR010)
    """
    if isinstance(document, IntentDocument):
        doc = document
        raw = document.model_dump(by_alias=True, exclude_none=True)
    else:
        raw = document
        try:
            doc = IntentDocument.model_validate(document)
        except ValidationError as e:
            diagnostics = [
                Diagnostic(
                    code="IR010",
                    severity="error",
                    message=f"Intent document is malformed: {err['msg']}",
                    path=format_error_path(err["loc"]),
                )
                for err in e.errors()
            ]
            raise IRTransformError("Intent document is malformed", diagnostics) from e

    settings = get_settings()
    context = TransformContext(
        intent_id=intent_id or compute_intent_id(raw),
        project_id=project_id or settings.default_project_id,
        oiml_version=doc.version,
        model=model or doc.author_model or settings.model,
        existing_entities=existing_entities,
    )
    log = intent_logger(logger, context.intent_id)
    log.info(f"Transforming {len(doc.intents)} intent(s)")

    result = DocumentTransformResult()
    entities = context.existing_entities
    for index, intent in enumerate(doc.intents):
        kind = intent.get("kind")
        try:
            ir = transform_intent(intent, context.with_entities(entities))
        except IRTransformError as e:
            log.warning(f"Intent #{index} ({kind}) failed: {e}")
            result.failures.append(IntentFailure(index=index, kind=kind, diagnostics=e.diagnostics))
            continue
        result.add_ir(index, ir)
        entities = _evolve_entities(entities, ir)

    log.info(f"Transformed {len(result.irs)} intent(s), {len(result.failures)} failure(s)")
    return result
