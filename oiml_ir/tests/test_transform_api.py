"""Tests for endpoint, component and capability transformers."""

import pytest

from oiml_ir.transform.errors import IRTransformError
from oiml_ir.transform.transformers import (
    transform_add_capability,
    transform_add_component,
    transform_add_endpoint,
    transform_update_endpoint,
)

from conftest import codes


def test_add_endpoint(context):
    """Response and request fields are resolved like entity fields."""
    ir = transform_add_endpoint(
        {
            "kind": "add_endpoint",
            "scope": "api",
            "method": "GET",
            "path": "/api/users/{id}",
            "description": "Fetch a user",
            "entity": "User",
            "fields": [
                {"name": "id", "type": "uuid", "required": True},
                {"name": "role", "type": "enum", "enum_values": ["admin", "member"]},
            ],
            "request_fields": [{"name": "expand", "type": "boolean"}],
            "auth": {"required": True, "roles": ["admin"]},
        },
        context,
    )
    endpoint = ir.endpoint
    assert endpoint.method == "GET"
    assert endpoint.entity == "User"
    assert [f.name for f in endpoint.response_fields] == ["id", "role"]
    assert endpoint.response_fields[1].type.name == "UserRoleEnum"
    assert endpoint.request_fields[0].type.kind == "Boolean"
    assert endpoint.auth.roles == ["admin"]
    assert ir.diagnostics == []


def test_add_endpoint_unknown_entity_warns(context):
    """An unknown endpoint entity is a warning only."""
    ir = transform_add_endpoint({"method": "POST", "path": "/api/ghosts", "entity": "Ghost"}, context)
    assert codes(ir.diagnostics, "warning") == ["IR030"]
    assert ir.endpoint.response_fields is None


def test_add_endpoint_invalid_field_type(context):
    """Invalid response field types fail the call."""
    with pytest.raises(IRTransformError) as exc_info:
        transform_add_endpoint(
            {"method": "GET", "path": "/api/stats", "fields": [{"name": "total", "type": "money"}]},
            context,
        )
    diagnostics = exc_info.value.diagnostics
    assert codes(diagnostics, "error") == ["IR021"]
    assert diagnostics[0].path == "$.fields[0].type"


def test_add_endpoint_bad_path(context):
    """Paths must start with '/'; the intent itself is rejected."""
    with pytest.raises(IRTransformError) as exc_info:
        transform_add_endpoint({"method": "GET", "path": "api/users"}, context)
    diagnostics = exc_info.value.diagnostics
    assert codes(diagnostics) == ["IR010"]
    assert diagnostics[0].path == "$.path"


def test_update_endpoint_bad_path(context):
    """update_endpoint paths follow the same rule as add_endpoint."""
    with pytest.raises(IRTransformError) as exc_info:
        transform_update_endpoint({"method": "GET", "path": "users", "updates": {}}, context)
    assert codes(exc_info.value.diagnostics) == ["IR010"]
    assert exc_info.value.diagnostics[0].path == "$.path"


def test_capability_endpoint_bad_path(context):
    """Capability endpoints need a leading '/' too."""
    with pytest.raises(IRTransformError) as exc_info:
        transform_add_capability(
            {
                "capability": "email",
                "framework": "next",
                "provider": "sendgrid",
                "endpoints": [{"method": "POST", "path": "api/email/webhook"}],
            },
            context,
        )
    assert codes(exc_info.value.diagnostics) == ["IR010"]
    assert exc_info.value.diagnostics[0].path == "$.endpoints[0].path"


def test_add_endpoint_bad_method(context):
    """Unknown HTTP methods are rejected by the intent schema."""
    with pytest.raises(IRTransformError) as exc_info:
        transform_add_endpoint({"method": "FETCH", "path": "/x"}, context)
    assert codes(exc_info.value.diagnostics) == ["IR010"]


def test_update_endpoint_sources(context):
    """Each source type maps to its IR form."""
    ir = transform_update_endpoint(
        {
            "method": "GET",
            "path": "/api/posts",
            "updates": {
                "add_field": [
                    {"name": "author_name", "source": {"type": "relation", "relation": "author", "field": "name"}},
                    {"name": "title", "source": {"type": "field", "entity": "Post", "field": "title"}},
                    {"name": "word_count", "source": {"type": "computed", "expression": "len(body)"}},
                    {
                        "name": "team",
                        "source": {
                            "type": "join",
                            "join": {"foreign_key": "team_id", "target_entity": "Team", "target_field": "name"},
                        },
                    },
                ],
                "remove_field": ["legacy_flag"],
            },
        },
        context,
    )
    add_fields = ir.updates.add_fields
    assert [f.source.type for f in add_fields] == ["relation", "field", "computed", "join"]
    assert add_fields[3].source.target_entity == "Team"
    assert ir.updates.remove_fields == ["legacy_flag"]
    assert ir.to_json_dict()["updates"]["addFields"][3]["source"]["foreignKey"] == "team_id"


def test_update_endpoint_incomplete_source(context):
    """A field source without its entity is rejected with the intent."""
    with pytest.raises(IRTransformError) as exc_info:
        transform_update_endpoint(
            {
                "method": "GET",
                "path": "/api/posts",
                "updates": {"add_field": [{"name": "title", "source": {"type": "field", "field": "title"}}]},
            },
            context,
        )
    diagnostics = exc_info.value.diagnostics
    assert codes(diagnostics) == ["IR010"]
    assert diagnostics[0].path == "$.updates.add_field[0].source"
    assert "entity" in diagnostics[0].message


def test_add_component(context):
    """Components default to the Custom template."""
    ir = transform_add_component(
        {"component": "UserList", "template": "List", "entity": "User", "display_fields": ["name", "email"]},
        context,
    )
    assert ir.component.template == "List"
    assert ir.component.display_fields == ["name", "email"]
    assert ir.diagnostics == []

    custom = transform_add_component({"component": "Dashboard", "entity": "Ghost", "route": "/dash"}, context)
    assert custom.component.template == "Custom"
    assert codes(custom.diagnostics, "warning") == ["IR030"]


def test_auth_capability_defaults(context):
    """Auth overlays get default strategy, session and password policy."""
    ir = transform_add_capability(
        {"capability": "auth", "framework": "next", "provider": "custom"},
        context,
    )
    overlay = ir.capability.overlay
    assert overlay.type == "auth"
    assert overlay.strategies == ["jwt"]
    assert overlay.session.duration == 86400
    assert overlay.session.cookie.same_site == "lax"
    assert overlay.password.min_length == 8
    assert codes(ir.diagnostics) == ["CAP008", "CAP009", "CAP010", "CAP000"]


def test_email_capability(context):
    """Sender comes from config; webhook is inferred from endpoints."""
    ir = transform_add_capability(
        {
            "capability": "email",
            "framework": "next",
            "provider": "sendgrid",
            "config": {"from_email": "hello@example.com"},
            "endpoints": [{"method": "POST", "path": "/api/email/webhook"}],
        },
        context,
    )
    overlay = ir.capability.overlay
    assert overlay.from_.email == "hello@example.com"
    assert overlay.from_.name == "Your App"
    assert overlay.webhooks.endpoint == "/api/email/webhook"
    assert overlay.webhooks.verify_signature is True
    assert codes(ir.diagnostics) == ["CAP001", "CAP002", "CAP003", "CAP000"]
    assert ir.to_json_dict()["capability"]["overlay"]["from"]["email"] == "hello@example.com"


def test_storage_capability(context):
    """Buckets are normalized; Supabase enables transforms and CDN."""
    ir = transform_add_capability(
        {
            "capability": "storage",
            "framework": "next",
            "provider": "supabase",
            "buckets": [{"name": "avatars", "file_size_limit": 1048576}],
        },
        context,
    )
    overlay = ir.capability.overlay
    assert overlay.buckets[0].public is True
    assert overlay.buckets[0].cache_control == "3600"
    assert overlay.buckets[0].file_size_limit == 1048576
    assert overlay.image_transformations.quality.default == 80
    assert overlay.cdn.enabled is True

    bare = transform_add_capability({"capability": "storage", "framework": "next"}, context)
    assert bare.capability.overlay.buckets == []
    assert codes(bare.diagnostics, "warning") == ["CAP005"]


def test_billing_and_file_upload_capabilities(context):
    """Billing defaults to stripe; file uploads default to local storage."""
    billing = transform_add_capability({"capability": "billing", "framework": "next"}, context)
    assert billing.capability.overlay.provider == "stripe"
    assert "CAP012" in codes(billing.diagnostics, "warning")

    upload = transform_add_capability(
        {"capability": "file_upload", "framework": "express", "config": {"destination": "s3"}},
        context,
    )
    overlay = upload.capability.overlay
    assert overlay.destination == "s3"
    assert overlay.max_file_size == 10 * 1024 * 1024
    assert overlay.allowed_types == ["*/*"]
    assert overlay.virus_scanning.enabled is False


def test_capability_without_overlay(context):
    """Capabilities with no overlay builder pass through with CAP100."""
    ir = transform_add_capability({"capability": "websocket", "framework": "express"}, context)
    assert ir.capability.overlay is None
    assert codes(ir.diagnostics) == ["CAP100"]
