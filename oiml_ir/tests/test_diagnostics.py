"""Tests for the diagnostic collector, transform context and errors."""

import pytest
from pydantic import ValidationError

from oiml_ir.ir.common import Diagnostic
from oiml_ir.transform.errors import IRTransformError, UnsupportedIntentError
from oiml_ir.transform.types import DiagnosticCollector, TransformContext


def test_collector_keeps_call_order():
    """Diagnostics are kept in the order they were reported."""
    collector = DiagnosticCollector()
    collector.info("IR002", "Inferred table name 'users'", "$.entity")
    collector.warn("IR011", "Reserved keyword")
    collector.error("IR020", "Duplicate field name 'a'", "$.fields[1].name")

    diagnostics = collector.get_diagnostics()
    assert [d.code for d in diagnostics] == ["IR002", "IR011", "IR020"]
    assert [d.severity for d in diagnostics] == ["info", "warning", "error"]
    assert diagnostics[1].path == "$"
    assert collector.has_errors()
    assert len(collector) == 3


def test_collector_snapshot_is_independent():
    """get_diagnostics returns a copy; later reports do not change it."""
    collector = DiagnosticCollector()
    collector.warn("IR041", "Cascade")
    snapshot = collector.get_diagnostics()
    collector.error("IR030", "Missing")
    assert len(snapshot) == 1
    assert not DiagnosticCollector().has_errors()


def test_diagnostic_is_frozen():
    """Diagnostics cannot be mutated once created."""
    diagnostic = Diagnostic(code="IR001", severity="info", message="pk", path="$")
    with pytest.raises(ValidationError):
        diagnostic.code = "IR002"


def test_context_entity_tracking():
    """existing_entities=None disables existence checks."""
    tracked = TransformContext(intent_id="i", project_id="p", existing_entities=["User"])
    assert tracked.entity_exists("User")
    assert not tracked.entity_exists("Ghost")
    assert isinstance(tracked.existing_entities, frozenset)

    untracked = TransformContext(intent_id="i", project_id="p")
    assert untracked.entity_exists("Ghost")
    assert untracked.oiml_version == "0.1.0"


def test_context_rejects_single_entity_name():
    """A bare string is not split into characters."""
    with pytest.raises(ValidationError, match="single string"):
        TransformContext(intent_id="i", project_id="p", existing_entities="User")

    context = TransformContext(intent_id="i", project_id="p", existing_entities={"User", "Post"})
    assert context.existing_entities == frozenset({"User", "Post"})
    assert not context.entity_exists("U")


def test_context_rejects_bad_version():
    """The source intent version must be semver."""
    with pytest.raises(ValidationError):
        TransformContext(intent_id="i", project_id="p", oiml_version="v1")


def test_transform_error_carries_diagnostics():
    """IRTransformError exposes the full list and the errors in its message."""
    diagnostics = [
        Diagnostic(code="IR011", severity="warning", message="reserved", path="$.to"),
        Diagnostic(code="IR030", severity="error", message="Entity 'X' does not exist", path="$.entity"),
    ]
    error = IRTransformError("AddField transformation failed", diagnostics)
    assert error.diagnostics == diagnostics
    assert [d.code for d in error.errors] == ["IR030"]
    assert "IR030 at $.entity" in str(error)
    assert issubclass(UnsupportedIntentError, IRTransformError)
