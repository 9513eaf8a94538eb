"""``add_entity`` -> AddEntity IR."""

from typing import Any, Dict, List, Mapping, Optional, Union

from oiml_ir.config.logging import get_logger
from oiml_ir.intent.models import AddEntityIntent, SeedSpec
from oiml_ir.ir.data import AddEntityIR
from ..builders import build_fields, coerce_intent, envelope, finalize
from ..types import DiagnosticCollector, TransformContext
from ..utils import is_reserved_keyword, to_table_name

logger = get_logger(__name__)

PRIMARY_ATTRIBUTES = ("primary", "id")


def _is_primary(spec) -> bool:
    return (
        spec.name == "id"
        or spec.default == "autoincrement"
        or spec.has_attribute(*PRIMARY_ATTRIBUTES)
    )


def _mark_primary_keys(
    intent: AddEntityIntent,
    fields: List[Dict[str, Any]],
    diagnostics: DiagnosticCollector,
) -> List[str]:
    """
    Flag primary key fields in place and return their names.

    A field is a primary key when it is named ``id``, defaults to
    ``autoincrement`` or carries a ``primary``/``id`` attribute.
    """
    specs = {}
    for i, spec in enumerate(intent.fields):
        specs.setdefault(spec.name, (i, spec))

    primary_keys = []
    for field in fields:
        i, spec = specs[field["name"]]
        if not _is_primary(spec):
            continue
        field["isPrimary"] = True
        field["nullable"] = False
        primary_keys.append(field["name"])
        if len(primary_keys) == 1:
            diagnostics.info("IR001", f"Inferred primary key '{field['name']}'", f"$.fields[{i}]")

        token = spec.type.strip().lower()
        if spec.default == "autoincrement" or token in ("integer", "int", "bigint"):
            field["generated"] = {"strategy": "AutoIncrement"}
            field.pop("default", None)
        elif token == "uuid" and "default" not in field:
            field["generated"] = {"strategy": "UUID"}
    return primary_keys


def _build_constraints(
    intent: AddEntityIntent,
    fields: List[Dict[str, Any]],
    context: TransformContext,
    diagnostics: DiagnosticCollector,
) -> List[Dict[str, Any]]:
    constraints: List[Dict[str, Any]] = []

    for fields_group in intent.unique or []:
        constraints.append({"kind": "Unique", "fields": list(fields_group)})

    for index in intent.indexes or []:
        constraint = {"kind": "Index", "fields": list(index.fields), "unique": index.unique}
        if index.name:
            constraint["name"] = index.name
        if index.type:
            constraint["type"] = index.type
        constraints.append(constraint)

    def has_single_index(name: str) -> bool:
        return any(c["kind"] == "Index" and c["fields"] == [name] for c in constraints)

    for spec in intent.fields:
        if spec.has_attribute("indexed") and not has_single_index(spec.name):
            constraints.append({"kind": "Index", "fields": [spec.name]})

    if context.options.auto_index:
        for field in fields:
            if field["type"]["kind"] == "Reference" and not has_single_index(field["name"]):
                constraints.append({"kind": "Index", "fields": [field["name"]]})
                diagnostics.info(
                    "IR003", f"Auto-added index for foreign key '{field['name']}'", "$.fields"
                )
    return constraints


def _check_field_references(
    intent: AddEntityIntent,
    known: set,
    diagnostics: DiagnosticCollector,
) -> None:
    """IR023 for constraint, tenant and seed entries naming unknown fields."""
    for i, group in enumerate(intent.unique or []):
        for name in group:
            if name not in known:
                diagnostics.error("IR023", f"Unique constraint references unknown field '{name}'", f"$.unique[{i}]")
    for i, index in enumerate(intent.indexes or []):
        for name in index.fields:
            if name not in known:
                diagnostics.error("IR023", f"Index references unknown field '{name}'", f"$.indexes[{i}].fields")
    if intent.tenant_column and intent.tenant_column not in known:
        diagnostics.error(
            "IR023", f"Tenant column '{intent.tenant_column}' is not a field", "$.tenant_column"
        )
    if intent.seed and intent.seed.generators:
        for name in intent.seed.generators:
            if name not in known:
                diagnostics.error(
                    "IR023", f"Seed generator targets unknown field '{name}'", f"$.seed.generators.{name}"
                )


def _build_seed(seed: SeedSpec) -> Dict[str, Any]:
    data: Dict[str, Any] = {"mode": seed.mode, "environments": list(seed.environments)}
    if seed.count is not None:
        data["count"] = seed.count
    if seed.generators:
        data["generatorByField"] = {name: dict(gen) for name, gen in seed.generators.items()}
    if seed.fixtures_path:
        data["fixturesPath"] = seed.fixtures_path
    return data


def transform_add_entity(
    intent: Union[Mapping[str, Any], AddEntityIntent],
    context: TransformContext,
) -> AddEntityIR:
    """
    Transform an ``add_entity`` intent into an AddEntity IR envelope.

    Args:
        intent: Raw intent mapping or AddEntityIntent
        context: Project state and provenance

    Returns:
        Validated AddEntityIR

    Raises:
        IRTransformError: On duplicate fields, invalid types, missing primary
            key, unknown field references or schema violations
    """
    intent = coerce_intent(AddEntityIntent, intent)
    diagnostics = DiagnosticCollector()
    logger.debug(f"add_entity: resolving '{intent.entity}' ({len(intent.fields)} field(s))")

    if is_reserved_keyword(intent.entity):
        diagnostics.warn("IR011", f"Entity name '{intent.entity}' is a reserved SQL keyword", "$.entity")

    if intent.table_name:
        table_name = intent.table_name
    else:
        table_name = to_table_name(intent.entity, context.options.table_naming_convention)
        diagnostics.info("IR002", f"Inferred table name '{table_name}'", "$.entity")

    fields = build_fields(intent.fields, intent.entity, diagnostics)
    primary_keys = _mark_primary_keys(intent, fields, diagnostics)
    if not primary_keys:
        diagnostics.error("IR022", "No primary key found or could be inferred", "$.fields")

    _check_field_references(intent, {spec.name for spec in intent.fields}, diagnostics)
    constraints = _build_constraints(intent, fields, context, diagnostics)

    if len(primary_keys) > 1:
        primary_key = {"kind": "Composite", "fields": primary_keys}
    else:
        primary_key = {"kind": "Single", "field": primary_keys[0] if primary_keys else "id"}

    storage: Dict[str, Any] = {
        "kind": "RelationalTable",
        "tableName": table_name,
        "primaryKey": primary_key,
    }
    if intent.table_schema:
        storage["schema"] = intent.table_schema
    if intent.tenant_column:
        storage["tenantScoping"] = {"mode": "Column", "column": intent.tenant_column}

    entity: Dict[str, Any] = {
        "name": intent.entity,
        "storage": storage,
        "fields": fields,
        "createdByIntent": context.intent_id,
        "updatedByIntents": [],
    }
    optional: Dict[str, Optional[Any]] = {
        "namespace": intent.namespace,
        "module": intent.module,
        "labelSingular": intent.label_singular,
        "labelPlural": intent.label_plural,
        "description": intent.description,
        "tags": intent.tags,
    }
    entity.update({key: value for key, value in optional.items() if value})
    if constraints:
        entity["constraints"] = constraints
    if intent.seed is not None:
        entity["seed"] = _build_seed(intent.seed)

    payload = envelope("AddEntity", context, entity=entity)
    return finalize(AddEntityIR, payload, diagnostics)
