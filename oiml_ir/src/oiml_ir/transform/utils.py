"""Type resolution and naming helpers used by every transformer."""

import re
from typing import Dict, List, Optional

from oiml_ir.ir.types import (
    ArrayType,
    EnumType,
    FieldType,
    JsonType,
    ReferenceType,
    ReverseRelation,
    ScalarType,
)
from oiml_ir.intent.fields import INVERSE_RELATION_KIND
from .errors import InvalidTypeError

# Loose intent token -> scalar kind
SCALAR_TOKENS: Dict[str, str] = {
    "string": "String",
    "str": "String",
    "text": "Text",
    "integer": "Int",
    "int": "Int",
    "bigint": "BigInt",
    "float": "Float",
    "decimal": "Decimal",
    "boolean": "Boolean",
    "bool": "Boolean",
    "datetime": "DateTime",
    "date": "Date",
    "time": "Time",
    "uuid": "Uuid",
    "bytes": "Bytes",
}

REFERENCE_TOKENS = ("reference", "ref", "relation")

# Scalars allowed as array elements
ARRAY_ELEMENT_TOKENS = (
    "string",
    "str",
    "text",
    "integer",
    "int",
    "bigint",
    "float",
    "decimal",
    "boolean",
    "bool",
    "uuid",
)

RELATION_CARDINALITY = {
    "one_to_one": "One",
    "many_to_one": "One",
    "one_to_many": "Many",
    "many_to_many": "Many",
}

ON_DELETE_ACTIONS = {
    "restrict": "Restrict",
    "cascade": "Cascade",
    "set_null": "SetNull",
    "setnull": "SetNull",
}

RESERVED_KEYWORDS = frozenset(
    {
        "select", "from", "where", "insert", "update", "delete", "table",
        "column", "index", "key", "primary", "foreign", "constraint",
        "default", "null", "not", "and", "or", "order", "group", "by",
        "having", "join", "inner", "outer", "left", "right", "cross",
        "union", "distinct", "as", "on", "using", "limit", "offset",
    }
)

IRREGULAR_PLURALS = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "tooth": "teeth",
    "foot": "feet",
    "mouse": "mice",
    "goose": "geese",
}


def resolve_field_type(
    type_token: str,
    enum_values: Optional[List[str]] = None,
    array_element_type: Optional[str] = None,
    enum_name: Optional[str] = None,
) -> FieldType:
    """
    Resolve a loose intent type token into a closed IR field type.

    Tokens are matched case-insensitively, so ``"String"`` and ``"string"``
    resolve alike.

    Args:
        type_token: Token from the intent, e.g. "string", "enum", "array"
        enum_values: Values of an inline enum (required for "enum")
        array_element_type: Scalar token of array elements (required for "array")
        enum_name: Name for an enum type. When omitted the returned enum has an
            empty name and the caller must fill it in with ``generate_enum_name``

    Returns:
        The resolved field type

    Raises:
        InvalidTypeError: If the token is unknown or its metadata is missing
    """
    token = (type_token or "").strip().lower()

    if token in SCALAR_TOKENS:
        return ScalarType(kind=SCALAR_TOKENS[token])
    if token == "json":
        return JsonType()
    if token == "enum":
        if not enum_values:
            raise InvalidTypeError("Enum type requires non-empty enum_values")
        if any(not v for v in enum_values):
            raise InvalidTypeError("Enum values must be non-empty strings")
        # model_construct: the name may still be empty here
        return EnumType.model_construct(
            kind="Enum", name=enum_name or "", values=list(enum_values), source="Inline"
        )
    if token == "array":
        if not array_element_type:
            raise InvalidTypeError("Array type requires array_type")
        element = array_element_type.strip().lower()
        if element not in ARRAY_ELEMENT_TOKENS:
            raise InvalidTypeError(f"Invalid array element type: {array_element_type}")
        return ArrayType(element_type=ScalarType(kind=SCALAR_TOKENS[element]))
    if token in REFERENCE_TOKENS:
        raise InvalidTypeError(
            f"Type '{type_token}' needs a relation block with a target entity"
        )
    raise InvalidTypeError(f"Unknown field type: {type_token}")


def resolve_reference_type(
    target_entity: str,
    relation_kind: str,
    nullable: bool = False,
    target_field: Optional[str] = None,
    relation_name: Optional[str] = None,
    on_delete: Optional[str] = None,
    reverse_field_name: Optional[str] = None,
    reverse_kind: Optional[str] = None,
    reverse_enabled: bool = True,
) -> ReferenceType:
    """
    Build a Reference field type from a relation block.

    Args:
        target_entity: Name of the referenced entity
        relation_kind: one_to_one, one_to_many, many_to_one or many_to_many
        nullable: Whether the reference may be empty
        target_field: Referenced field, defaults to the target primary key
        relation_name: Optional explicit relation name
        on_delete: restrict, cascade or set_null (any case)
        reverse_field_name: Name of the virtual field on the target side
        reverse_kind: Relation kind seen from the target. Defaults to the
            inverse of ``relation_kind``
        reverse_enabled: Whether the reverse side is generated

    Returns:
        The resolved reference type

    Raises:
        InvalidTypeError: For an unknown relation kind or on_delete action
    """
    if relation_kind not in RELATION_CARDINALITY:
        raise InvalidTypeError(f"Unknown relation kind: {relation_kind}")

    action = None
    if on_delete is not None:
        action = ON_DELETE_ACTIONS.get(on_delete.strip().lower())
        if action is None:
            raise InvalidTypeError(f"Unknown on_delete action: {on_delete}")

    reverse = None
    if reverse_field_name:
        kind = reverse_kind or INVERSE_RELATION_KIND[relation_kind]
        if kind not in RELATION_CARDINALITY:
            raise InvalidTypeError(f"Unknown reverse relation kind: {kind}")
        reverse = ReverseRelation(
            enabled=reverse_enabled,
            field_name=reverse_field_name,
            cardinality=RELATION_CARDINALITY[kind],
        )

    return ReferenceType(
        target_entity=target_entity,
        target_field=target_field,
        cardinality=RELATION_CARDINALITY[relation_kind],
        nullable=nullable,
        relation_name=relation_name,
        on_delete=action,
        reverse=reverse,
    )


def to_pascal_case(name: str) -> str:
    """``due_date`` -> ``DueDate``, ``status`` -> ``Status``."""
    parts = [p for p in re.split(r"[_\-\s]+", name) if p]
    return "".join(p[0].upper() + p[1:] for p in parts)


def to_camel_case(name: str) -> str:
    pascal = to_pascal_case(name)
    return pascal[:1].lower() + pascal[1:]


def to_snake_case(name: str) -> str:
    """``OrderItem`` -> ``order_item``."""
    name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    return re.sub(r"[\-\s]+", "_", name).lower()


def pluralize(word: str) -> str:
    """Basic English pluralization with a few irregular nouns."""
    plural = IRREGULAR_PLURALS.get(word.lower())
    if plural:
        return plural[0].upper() + plural[1:] if word[:1].isupper() else plural
    if len(word) > 1 and word.endswith("y") and word[-2].lower() not in "aeiou":
        return word[:-1] + "ies"
    if re.search(r"(s|x|z|ch|sh)$", word):
        return word + "es"
    return word + "s"


def to_table_name(entity_name: str, convention: str = "snake_case") -> str:
    """
    Derive a table name from an entity name (pluralized).

    Args:
        entity_name: Entity name, e.g. "OrderItem"
        convention: snake_case, camelCase or PascalCase

    Returns:
        Table name, e.g. "order_items"
    """
    plural = pluralize(entity_name)
    if convention == "snake_case":
        return to_snake_case(plural)
    if convention == "camelCase":
        return to_camel_case(plural)
    if convention == "PascalCase":
        return to_pascal_case(plural)
    raise ValueError(f"Unknown table naming convention: {convention}")


def generate_enum_name(context_name: str, field_name: str) -> str:
    """Stable enum type name, e.g. ("Post", "status") -> "PostStatusEnum"."""
    return f"{to_pascal_case(context_name)}{to_pascal_case(field_name)}Enum"


def is_reserved_keyword(name: str) -> bool:
    """Whether ``name`` is a reserved SQL keyword (case-insensitive)."""
    return name.lower() in RESERVED_KEYWORDS
