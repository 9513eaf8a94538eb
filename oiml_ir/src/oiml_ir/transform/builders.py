"""Pieces shared by the per-intent transformers.

Every transformer follows the same protocol: coerce the raw intent into its
input model, collect diagnostics while building a plain camelCase payload,
then re-validate the payload against the closed envelope model.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from oiml_ir.config.logging import get_logger
from oiml_ir.intent.fields import FieldAttribute, FieldSpec, ForeignKey, ReverseRelationSpec
from oiml_ir.ir.common import IRModel
from .errors import InvalidTypeError, IRTransformError
from .types import DiagnosticCollector, TransformContext
from .utils import (
    REFERENCE_TOKENS,
    generate_enum_name,
    is_reserved_keyword,
    resolve_field_type,
    resolve_reference_type,
)

logger = get_logger(__name__)

IntentT = TypeVar("IntentT", bound=BaseModel)
EnvelopeT = TypeVar("EnvelopeT", bound=IRModel)

# Default tokens that map to special default kinds
NOW_DEFAULTS = ("now", "current_timestamp")


def format_error_path(loc: Sequence[Union[str, int]], root: str = "$") -> str:
    """
    Render a pydantic error location as a JSON path.

    ``("fields", 0, "type")`` becomes ``$.fields[0].type``. Tagged-union
    branch names (e.g. ``"Enum"``) are kept as path segments.
    """
    path = root
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}"
    return path


def build_provenance(context: TransformContext) -> Dict[str, Any]:
    """Fresh provenance block for one envelope (UTC, millisecond precision)."""
    generated_at = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    provenance = {
        "intentId": context.intent_id,
        "projectId": context.project_id,
        "generatedAt": generated_at.replace("+00:00", "Z"),
        "sourceIntentVersion": context.oiml_version,
    }
    if context.model:
        provenance["model"] = context.model
    return provenance


def coerce_intent(model_cls: Type[IntentT], intent: Union[Mapping[str, Any], BaseModel]) -> IntentT:
    """
    Validate a raw intent mapping against its input model.

    Args:
        model_cls: Intent input model, e.g. ``AddFieldIntent``
        intent: Raw mapping (as parsed from YAML/JSON) or a model instance

    Returns:
        The validated intent model

    Raises:
        IRTransformError: With one IR010 diagnostic per schema issue
    """
    if isinstance(intent, model_cls):
        return intent
    if isinstance(intent, BaseModel):
        intent = intent.model_dump(by_alias=True, exclude_none=True)

    try:
        return model_cls.model_validate(intent)
    except ValidationError as e:
        diagnostics = DiagnosticCollector()
        for err in e.errors():
            diagnostics.error(
                "IR010",
                f"Intent does not match the {model_cls.__name__} schema: {err['msg']}",
                format_error_path(err["loc"]),
            )
        logger.warning(f"{model_cls.__name__}: rejected intent with {len(diagnostics)} schema issue(s)")
        raise IRTransformError(
            f"Intent does not match the {model_cls.__name__} schema",
            diagnostics.get_diagnostics(),
        ) from e


def check_entity_exists(
    name: str,
    context: TransformContext,
    diagnostics: DiagnosticCollector,
    path: str,
    label: str = "Entity",
    fatal: bool = True,
) -> bool:
    """Report IR030 when entity tracking is on and ``name`` is unknown."""
    if context.entity_exists(name):
        return True
    message = f"{label} '{name}' does not exist"
    if fatal:
        diagnostics.error("IR030", message, path)
    else:
        diagnostics.warn("IR030", message, path)
    return False


def attribute(attributes: List[FieldAttribute], *names: str) -> Optional[FieldAttribute]:
    """First attribute whose name is one of ``names``."""
    for attr in attributes:
        if attr.name in names:
            return attr
    return None


def build_reference(
    target_entity: str,
    relation_kind: str,
    foreign_key: Optional[ForeignKey] = None,
    attributes: Optional[List[FieldAttribute]] = None,
    reverse: Optional[ReverseRelationSpec] = None,
    relation_name: Optional[str] = None,
    nullable: bool = False,
) -> Dict[str, Any]:
    """
    Resolve a relation block into a Reference field type payload.

    The referenced field defaults to ``id``. An ``on_delete`` attribute with
    ``args.action`` sets the delete behavior (``Restrict`` when no action).

    Raises:
        InvalidTypeError: For an unknown relation kind or delete action
    """
    attributes = attributes or []
    on_delete = None
    on_delete_attr = attribute(attributes, "on_delete")
    if on_delete_attr is not None:
        on_delete = str(on_delete_attr.args.get("action", "restrict"))
    if attribute(attributes, "nullable", "optional") is not None:
        nullable = True

    reference = resolve_reference_type(
        target_entity,
        relation_kind,
        nullable=nullable,
        target_field=foreign_key.target_field if foreign_key else "id",
        relation_name=relation_name,
        on_delete=on_delete,
        reverse_field_name=reverse.field_name if reverse else None,
        reverse_kind=reverse.kind if reverse else None,
        reverse_enabled=reverse.enabled if reverse else True,
    )
    return reference.to_json_dict()


def build_default(value: Any) -> Optional[Dict[str, Any]]:
    """Map an intent ``default`` to an IR default value."""
    if value is None:
        return None
    if isinstance(value, str):
        token = value.strip().lower()
        if token in NOW_DEFAULTS:
            return {"kind": "Now"}
        if token == "autoincrement":
            return {"kind": "AutoIncrement"}
        if token in ("uuid", "uuidv4", "uuid()"):
            return {"kind": "UUIDv4"}
    if isinstance(value, (str, int, float, bool)):
        return {"kind": "Literal", "value": value}
    return None


def build_validations(spec: FieldSpec) -> List[Dict[str, Any]]:
    validations = []
    if spec.max_length is not None:
        validations.append({"kind": "MaxLength", "max": spec.max_length})
    if spec.min_length is not None:
        validations.append({"kind": "MinLength", "min": spec.min_length})
    if spec.pattern:
        validations.append({"kind": "Pattern", "regex": spec.pattern})
    if spec.min is not None:
        validations.append({"kind": "Min", "min": spec.min})
    if spec.max is not None:
        validations.append({"kind": "Max", "max": spec.max})
    return validations


def resolve_spec_type(spec: FieldSpec, owner: str) -> Dict[str, Any]:
    """
    Resolve the type of one intent field to a plain FieldType payload.

    A field carrying a ``relation`` block becomes a Reference. Its own type
    token (the foreign key column type) must still resolve, unless it is
    ``reference``.

    Raises:
        InvalidTypeError: If the type cannot be resolved
    """
    is_reference_token = spec.type.strip().lower() in REFERENCE_TOKENS
    if spec.relation is None or not is_reference_token:
        field_type = resolve_field_type(
            spec.type,
            enum_values=spec.enum_values,
            array_element_type=spec.array_type,
            enum_name=spec.enum_name or generate_enum_name(owner, spec.name),
        )
        if spec.relation is None:
            return field_type.to_json_dict()

    relation = spec.relation
    return build_reference(
        relation.target_entity,
        relation.kind,
        foreign_key=relation.foreign_key,
        attributes=relation.attributes,
        reverse=relation.reverse,
        relation_name=spec.name,
        nullable=spec.required is not True,
    )


def build_field(
    spec: FieldSpec,
    owner: str,
    path: str,
    diagnostics: DiagnosticCollector,
    check_reserved: bool = True,
) -> Optional[Dict[str, Any]]:
    """
    Build a plain Field payload from an intent field.

    Args:
        spec: Intent field
        owner: Entity (or endpoint context) name used for generated enum names
        path: JSON path of the field in the intent, e.g. ``$.fields[2]``
        diagnostics: Collector of the current call
        check_reserved: Warn (IR011) when the field name is a reserved keyword

    Returns:
        The field payload, or None when the type is invalid (IR021 reported)
    """
    if check_reserved and is_reserved_keyword(spec.name):
        diagnostics.warn("IR011", f"Field name '{spec.name}' is a reserved SQL keyword", f"{path}.name")

    try:
        field_type = resolve_spec_type(spec, owner)
    except InvalidTypeError as e:
        diagnostics.error(
            "IR021",
            f"Invalid field type '{spec.type}' for field '{spec.name}': {e}",
            f"{path}.type",
        )
        return None

    nullable = spec.required is not True
    if spec.has_attribute("nullable", "optional"):
        nullable = True

    field: Dict[str, Any] = {"name": spec.name, "type": field_type, "nullable": nullable}

    if spec.unique or spec.has_attribute("unique"):
        field["unique"] = True

    default = build_default(spec.default)
    if default is None and spec.has_attribute("default_now"):
        default = {"kind": "Now"}
    if default is None and spec.has_attribute("auto_increment"):
        default = {"kind": "AutoIncrement"}
    if default is not None:
        field["default"] = default

    if spec.has_attribute("updated_at"):
        field["generated"] = {"strategy": "Timestamp"}

    validations = build_validations(spec)
    if validations:
        field["validations"] = validations

    if spec.api is not None:
        field["api"] = spec.api.model_dump(exclude_none=True)
    if spec.description:
        field["description"] = spec.description
    if spec.tags:
        field["tags"] = list(spec.tags)
    return field


def build_fields(
    specs: List[FieldSpec],
    owner: str,
    diagnostics: DiagnosticCollector,
    root: str = "$.fields",
    check_duplicates: bool = True,
    check_reserved: bool = True,
) -> List[Dict[str, Any]]:
    """Build every field of a list, skipping duplicates (IR020) and bad types (IR021)."""
    fields = []
    seen = set()
    for i, spec in enumerate(specs):
        path = f"{root}[{i}]"
        if check_duplicates:
            if spec.name in seen:
                diagnostics.error("IR020", f"Duplicate field name '{spec.name}'", f"{path}.name")
                continue
            seen.add(spec.name)
        field = build_field(spec, owner, path, diagnostics, check_reserved=check_reserved)
        if field is not None:
            fields.append(field)
    return fields


def envelope(kind: str, context: TransformContext, **payload: Any) -> Dict[str, Any]:
    """Plain envelope with fresh provenance; ``diagnostics`` is added by ``finalize``."""
    data = {"kind": kind, "irVersion": "1.0.0", "provenance": build_provenance(context)}
    data.update(payload)
    return data


def finalize(
    envelope_cls: Type[EnvelopeT],
    payload: Dict[str, Any],
    diagnostics: DiagnosticCollector,
) -> EnvelopeT:
    """
    Re-validate an assembled envelope and return it, or raise.

    Each schema issue is recorded as an IR099 error. The returned object is
    always the validated model instance. When the intent already produced
    errors, the payload is incomplete and is not re-validated, so IR099 only
    reports envelopes the transformer itself got wrong.

    Raises:
        IRTransformError: If any error diagnostic was recorded
    """
    kind = payload.get("kind", envelope_cls.__name__)
    payload["diagnostics"] = [d.to_json_dict() for d in diagnostics.get_diagnostics()]

    ir = None
    if not diagnostics.has_errors():
        try:
            ir = envelope_cls.model_validate(payload)
        except ValidationError as e:
            for err in e.errors():
                diagnostics.error("IR099", f"IR validation failed: {err['msg']}", format_error_path(err["loc"]))

    if diagnostics.has_errors():
        logger.warning(
            f"{kind}: transformation failed with {diagnostics.count('error')} error(s)"
        )
        raise IRTransformError(f"{kind} transformation failed", diagnostics.get_diagnostics())

    logger.debug(
        f"{kind}: built IR with {diagnostics.count('warning')} warning(s), "
        f"{diagnostics.count('info')} info note(s)"
    )
    return ir
