"""Tests for intent routing and document-level transformation."""

from pathlib import Path

import pytest

from oiml_ir.intent.document import compute_intent_id
from oiml_ir.ir.union import IR_KINDS
from oiml_ir.transform.dispatch import TRANSFORMERS, transform_document, transform_intent
from oiml_ir.transform.errors import IRTransformError, UnsupportedIntentError
from oiml_ir.utils.ir_io import load_intent_document


@pytest.fixture
def blog_document():
    return {
        "type": "oiml.intent",
        "version": "0.1.0",
        "provenance": {"created_by": {"type": "agent", "name": "planner"}},
        "intents": [
            {
                "kind": "add_entity",
                "scope": "data",
                "entity": "Post",
                "fields": [
                    {"name": "id", "type": "uuid", "required": True},
                    {"name": "title", "type": "string", "required": True},
                ],
            },
            {
                "kind": "add_field",
                "scope": "data",
                "entity": "Post",
                "fields": [{"name": "views", "type": "integer"}],
            },
            {
                "kind": "add_relation",
                "scope": "schema",
                "relation": {
                    "source_entity": "Post",
                    "target_entity": "User",
                    "kind": "many_to_one",
                    "field_name": "author",
                    "foreign_key": {"local_field": "author_id", "target_field": "id"},
                },
            },
        ],
    }


def test_every_ir_kind_has_a_transformer():
    """The dispatcher covers the whole IR union."""
    assert len(TRANSFORMERS) == len(IR_KINDS) == 11


def test_transform_intent_routes_by_kind(context):
    ir = transform_intent({"kind": "remove_entity", "entity": "User"}, context)
    assert ir.kind == "RemoveEntity"


def test_transform_intent_unsupported_kind(context):
    """Unknown or missing kinds raise UnsupportedIntentError with IR000."""
    with pytest.raises(UnsupportedIntentError) as exc_info:
        transform_intent({"kind": "drop_database"}, context)
    assert [d.code for d in exc_info.value.diagnostics] == ["IR000"]

    with pytest.raises(IRTransformError):
        transform_intent({"entity": "User"}, context)


def test_document_tracks_entities(blog_document):
    """Entities added earlier in a document are known to later intents."""
    result = transform_document(blog_document, project_id="blog", existing_entities=["User"])

    assert result.ok
    assert [ir.kind for ir in result.irs] == ["AddEntity", "AddField", "AddRelation"]
    provenance = result.irs[0].provenance
    assert provenance.project_id == "blog"
    assert provenance.intent_id == compute_intent_id(blog_document)
    assert provenance.intent_id.startswith("sha256:")
    assert len(provenance.intent_id) == len("sha256:") + 16
    assert provenance.model == "planner"


def test_document_collects_failures(blog_document):
    """A failing intent is reported without stopping the others."""
    blog_document["intents"].insert(0, {"kind": "add_field", "entity": "Ghost", "fields": [{"name": "x", "type": "int"}]})

    result = transform_document(blog_document, existing_entities=["User"], intent_id="blog.yaml")

    assert not result.ok
    assert len(result.irs) == 3
    assert len(result.failures) == 1
    failure = result.failures[0]
    assert failure.index == 0
    assert failure.kind == "add_field"
    assert failure.diagnostics[0].code == "IR030"
    assert result.irs[0].provenance.intent_id == "blog.yaml"
    assert "IR030" in [d.code for d in result.diagnostics]


def test_document_diagnostics_follow_document_order():
    """A failure early in the document is listed before later warnings."""
    document = {
        "version": "0.1.0",
        "intents": [
            {"kind": "remove_field", "entity": "User", "fields": ["a", "a"]},
            {"kind": "add_field", "entity": "Ghost", "fields": [{"name": "x", "type": "int"}]},
            {"kind": "remove_field", "entity": "User", "fields": ["b", "b"]},
        ],
    }
    result = transform_document(document, existing_entities=["User"])

    assert result.ir_indices == [0, 2]
    assert [d.code for d in result.diagnostics] == ["IR040", "IR030", "IR040"]


def test_document_rename_and_remove_evolve_entities():
    """Renamed and removed entities leave the known set."""
    document = {
        "version": "0.1.0",
        "intents": [
            {"kind": "rename_entity", "from": "User", "to": "Member"},
            {"kind": "add_field", "entity": "User", "fields": [{"name": "a", "type": "string"}]},
            {"kind": "add_field", "entity": "Member", "fields": [{"name": "a", "type": "string"}]},
            {"kind": "remove_entity", "entity": "Member"},
            {"kind": "remove_entity", "entity": "Member"},
        ],
    }
    result = transform_document(document, existing_entities=["User"])
    assert [ir.kind for ir in result.irs] == ["RenameEntity", "AddField", "RemoveEntity"]
    assert [f.index for f in result.failures] == [1, 4]


def test_document_without_tracking_skips_checks():
    """Without existing entities nothing is checked for existence."""
    document = {"version": "0.2.0", "intents": [{"kind": "remove_entity", "entity": "Anything"}]}
    result = transform_document(document)
    assert result.ok
    assert result.irs[0].provenance.source_intent_version == "0.2.0"


def test_malformed_document():
    """Documents without intents fail as a whole with IR010."""
    with pytest.raises(IRTransformError) as exc_info:
        transform_document({"version": "0.1.0", "intents": []})
    assert [d.code for d in exc_info.value.diagnostics] == ["IR010"]


def test_intent_id_ignores_key_order():
    a = {"version": "0.1.0", "intents": [{"kind": "remove_entity", "entity": "X"}]}
    b = {"intents": [{"entity": "X", "kind": "remove_entity"}], "version": "0.1.0"}
    assert compute_intent_id(a) == compute_intent_id(b)


def test_example_document():
    """The bundled blog example transforms cleanly from an empty project."""
    path = Path(__file__).parent.parent / "examples" / "blog.intent.yaml"
    result = transform_document(load_intent_document(path), project_id="blog", existing_entities=[])

    assert result.ok, [f.diagnostics for f in result.failures]
    kinds = [ir.kind for ir in result.irs]
    assert kinds == ["AddEntity", "AddEntity", "AddEndpoint", "RenameField", "AddCapability", "AddComponent"]
    post = result.irs[1].entity
    assert post.fields[2].type.name == "PostStatusEnum"
    assert post.fields[4].type.target_entity == "Author"
