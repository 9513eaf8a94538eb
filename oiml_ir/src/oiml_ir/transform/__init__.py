"""Intent-to-IR transformation: context, diagnostics, transformers, dispatch."""

from .errors import (
    IntentLoadError,
    InvalidTypeError,
    IRTransformError,
    OIMLError,
    UnsupportedIntentError,
)
from .types import DiagnosticCollector, TransformContext, TransformOptions
from .utils import (
    generate_enum_name,
    is_reserved_keyword,
    pluralize,
    resolve_field_type,
    resolve_reference_type,
    to_camel_case,
    to_pascal_case,
    to_snake_case,
    to_table_name,
)
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
from .dispatch import (
    TRANSFORMERS,
    DocumentTransformResult,
    IntentFailure,
    transform_document,
    transform_intent,
)

__all__ = [
    "IntentLoadError",
    "InvalidTypeError",
    "IRTransformError",
    "OIMLError",
    "UnsupportedIntentError",
    "DiagnosticCollector",
    "TransformContext",
    "TransformOptions",
    "generate_enum_name",
    "is_reserved_keyword",
    "pluralize",
    "resolve_field_type",
    "resolve_reference_type",
    "to_camel_case",
    "to_pascal_case",
    "to_snake_case",
    "to_table_name",
    "transform_add_capability",
    "transform_add_component",
    "transform_add_endpoint",
    "transform_add_entity",
    "transform_add_field",
    "transform_add_relation",
    "transform_remove_entity",
    "transform_remove_field",
    "transform_rename_entity",
    "transform_rename_field",
    "transform_update_endpoint",
    "TRANSFORMERS",
    "DocumentTransformResult",
    "IntentFailure",
    "transform_document",
    "transform_intent",
]
