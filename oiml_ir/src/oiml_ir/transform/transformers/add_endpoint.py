"""``add_endpoint`` -> AddEndpoint IR."""

from typing import Any, Dict, Mapping, Union

from oiml_ir.intent.models import AddEndpointIntent
from oiml_ir.ir.api import AddEndpointIR
from ..builders import build_fields, check_entity_exists, coerce_intent, envelope, finalize
from ..types import DiagnosticCollector, TransformContext


def transform_add_endpoint(
    intent: Union[Mapping[str, Any], AddEndpointIntent],
    context: TransformContext,
) -> AddEndpointIR:
    """
    Transform an ``add_endpoint`` intent into an AddEndpoint IR envelope.

    Response fields and request fields are resolved like entity fields.
    Inline enums are named after the endpoint entity, or ``Response`` /
    ``Request`` when the endpoint has none.

    Raises:
        IRTransformError: If a field type cannot be resolved (IR021)
    """
    intent = coerce_intent(AddEndpointIntent, intent)
    diagnostics = DiagnosticCollector()

    endpoint: Dict[str, Any] = {"method": intent.method, "path": intent.path}
    if intent.description:
        endpoint["description"] = intent.description
    if intent.entity:
        check_entity_exists(intent.entity, context, diagnostics, "$.entity", fatal=False)
        endpoint["entity"] = intent.entity

    if intent.fields:
        response_fields = build_fields(
            intent.fields,
            intent.entity or "Response",
            diagnostics,
            check_duplicates=False,
            check_reserved=False,
        )
        if response_fields:
            endpoint["responseFields"] = response_fields

    if intent.request_fields:
        request_fields = build_fields(
            intent.request_fields,
            f"{intent.entity}Request" if intent.entity else "Request",
            diagnostics,
            root="$.request_fields",
            check_duplicates=False,
            check_reserved=False,
        )
        if request_fields:
            endpoint["requestFields"] = request_fields

    if intent.auth is not None:
        endpoint["auth"] = intent.auth.model_dump(exclude_none=True)

    payload = envelope("AddEndpoint", context, endpoint=endpoint)
    return finalize(AddEndpointIR, payload, diagnostics)
