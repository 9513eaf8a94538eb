"""Shared fixtures for transformer tests."""

import pytest

from oiml_ir.transform.types import TransformContext, TransformOptions


@pytest.fixture
def context():
    """Context for a project that already has User and Post entities."""
    return TransformContext(
        intent_id="sha256:0123456789abcdef",
        project_id="test-project",
        existing_entities={"User", "Post"},
        options=TransformOptions(auto_index=True, table_naming_convention="snake_case"),
    )


@pytest.fixture
def untracked_context():
    """Context without entity tracking: existence checks are skipped."""
    return TransformContext(intent_id="test.yaml", project_id="test-project")


@pytest.fixture
def user_entity_intent():
    return {
        "kind": "add_entity",
        "scope": "data",
        "entity": "Customer",
        "fields": [
            {"name": "id", "type": "uuid", "required": True},
            {"name": "email", "type": "string", "required": True, "unique": True, "max_length": 255},
            {"name": "status", "type": "enum", "enum_values": ["active", "disabled"], "default": "active"},
            {"name": "created_at", "type": "datetime", "default": "now"},
        ],
    }


def codes(diagnostics, severity=None):
    """Diagnostic codes, optionally filtered by severity."""
    return [d.code for d in diagnostics if severity is None or d.severity == severity]
