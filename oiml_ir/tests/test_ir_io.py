"""Tests for intent loading, IR JSON round-trips and the IR union."""

import json

import pytest
from pydantic import ValidationError

from oiml_ir.ir.union import ir_json_schema, parse_ir
from oiml_ir.transform.dispatch import transform_intent
from oiml_ir.transform.errors import IntentLoadError
from oiml_ir.transform.transformers import transform_add_entity, transform_add_relation
from oiml_ir.utils.ir_io import load_intent_document, load_ir_from_json, save_ir_to_json

INTENT_YAML = """\
type: oiml.intent
version: 0.1.0
intents:
  - kind: add_entity
    scope: data
    entity: Tag
    fields:
      - name: id
        type: uuid
        required: true
      - name: label
        type: string
"""


def test_load_yaml_and_json(tmp_path):
    """The loader picks YAML or JSON by suffix."""
    yaml_path = tmp_path / "intent.yaml"
    yaml_path.write_text(INTENT_YAML, encoding="utf-8")
    document = load_intent_document(yaml_path)
    assert document["intents"][0]["entity"] == "Tag"

    json_path = tmp_path / "intent.json"
    json_path.write_text(json.dumps(document), encoding="utf-8")
    assert load_intent_document(json_path) == document


@pytest.mark.parametrize(
    "name, content",
    [
        ("empty.yaml", "   \n"),
        ("broken.yaml", "intents: [unclosed"),
        ("broken.json", "{not json"),
        ("list.yaml", "- a\n- b\n"),
    ],
)
def test_load_bad_intent_files(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    with pytest.raises(IntentLoadError):
        load_intent_document(path)


def test_load_missing_intent_file(tmp_path):
    with pytest.raises(IntentLoadError, match="not found"):
        load_intent_document(tmp_path / "missing.yaml")


def test_round_trip(tmp_path, context, user_entity_intent):
    """Saved IR parses back into equal envelopes."""
    entity_ir = transform_add_entity(user_entity_intent, context)
    relation_ir = transform_add_relation(
        {
            "relation": {
                "source_entity": "Post",
                "target_entity": "User",
                "kind": "one_to_many",
                "field_name": "comments",
                "attributes": [{"name": "on_delete", "args": {"action": "set_null"}}],
            }
        },
        context,
    )

    single = tmp_path / "entity.ir.json"
    save_ir_to_json(entity_ir, single)
    assert load_ir_from_json(single) == entity_ir

    many = tmp_path / "out" / "all.ir.json"
    save_ir_to_json([entity_ir, relation_ir], many)
    assert load_ir_from_json(many) == [entity_ir, relation_ir]
    assert json.loads(many.read_text(encoding="utf-8"))[1]["relation"]["type"]["onDelete"] == "SetNull"


def test_parse_ir_rejects_unknown_keys(context, user_entity_intent):
    """The IR is closed: extra keys and unknown kinds fail."""
    data = transform_add_entity(user_entity_intent, context).to_json_dict()
    assert parse_ir(data).kind == "AddEntity"

    data["entity"]["color"] = "blue"
    with pytest.raises(ValidationError):
        parse_ir(data)

    with pytest.raises(ValidationError):
        parse_ir({"kind": "DropTable", "irVersion": "1.0.0"})


def test_parse_ir_rejects_other_versions(context, user_entity_intent):
    data = transform_add_entity(user_entity_intent, context).to_json_dict()
    data["irVersion"] = "2.0.0"
    with pytest.raises(ValidationError):
        parse_ir(data)


def test_load_ir_errors(tmp_path):
    empty = tmp_path / "empty.json"
    empty.write_text("", encoding="utf-8")
    with pytest.raises(ValueError):
        load_ir_from_json(empty)
    with pytest.raises(FileNotFoundError):
        load_ir_from_json(tmp_path / "missing.json")


def test_json_schema_uses_wire_names():
    schema = json.dumps(ir_json_schema())
    assert "irVersion" in schema
    assert "targetEntity" in schema
    assert "AddCapability" in schema


EVERY_KIND = {
    "add_entity": {
        "kind": "add_entity",
        "entity": "Invoice",
        "table_schema": "billing",
        "fields": [
            {"name": "id", "type": "uuid", "required": True},
            {"name": "total", "type": "decimal", "min": 0},
            {"name": "state", "type": "enum", "enum_values": ["open", "paid"]},
        ],
    },
    "add_field": {"kind": "add_field", "entity": "User", "fields": [{"name": "nickname", "type": "string"}]},
    "add_relation": {
        "kind": "add_relation",
        "relation": {
            "source_entity": "Post",
            "target_entity": "User",
            "kind": "many_to_one",
            "field_name": "author",
            "foreign_key": {"local_field": "author_id", "target_field": "id"},
            "reverse": {"field_name": "posts"},
        },
    },
    "remove_entity": {"kind": "remove_entity", "entity": "Post", "cascade": True},
    "remove_field": {"kind": "remove_field", "entity": "User", "fields": ["legacy"]},
    "rename_entity": {"kind": "rename_entity", "from": "Post", "to": "Article"},
    "rename_field": {"kind": "rename_field", "entity": "User", "from": "name", "to": "full_name"},
    "add_endpoint": {
        "kind": "add_endpoint",
        "method": "GET",
        "path": "/api/users",
        "entity": "User",
        "fields": [{"name": "id", "type": "uuid"}],
        "auth": {"required": True, "roles": ["admin"]},
    },
    "update_endpoint": {
        "kind": "update_endpoint",
        "method": "GET",
        "path": "/api/posts",
        "updates": {
            "add_field": [{"name": "author", "source": {"type": "relation", "relation": "author"}}],
            "remove_field": ["legacy"],
        },
    },
    "add_component": {"kind": "add_component", "component": "UserList", "template": "List", "entity": "User"},
    "add_capability:auth": {"kind": "add_capability", "capability": "auth", "framework": "next"},
    "add_capability:email": {
        "kind": "add_capability",
        "capability": "email",
        "framework": "next",
        "config": {"from_email": "hello@example.com"},
    },
    "add_capability:storage": {
        "kind": "add_capability",
        "capability": "storage",
        "framework": "next",
        "provider": "supabase",
        "buckets": [{"name": "avatars"}],
    },
    "add_capability:billing": {"kind": "add_capability", "capability": "billing", "framework": "next"},
    "add_capability:file_upload": {"kind": "add_capability", "capability": "file_upload", "framework": "express"},
    "add_capability:sse": {"kind": "add_capability", "capability": "sse", "framework": "express"},
}


@pytest.mark.parametrize("intent", list(EVERY_KIND.values()), ids=list(EVERY_KIND))
def test_every_ir_kind_round_trips(tmp_path, context, intent):
    """Each envelope kind survives save and load unchanged."""
    ir = transform_intent(intent, context)
    path = tmp_path / "ir.json"
    save_ir_to_json(ir, path)

    loaded = load_ir_from_json(path)
    assert loaded == ir
    assert loaded.to_json_dict() == json.loads(path.read_text(encoding="utf-8"))


def test_aliased_wire_names_round_trip(tmp_path, context):
    """Keyword-clashing wire names (from, pass, schema) survive a round-trip."""
    entity = transform_intent(EVERY_KIND["add_entity"], context)
    email = transform_intent(EVERY_KIND["add_capability:email"], context).to_json_dict()
    email["capability"]["overlay"]["smtp"] = {
        "host": "smtp.example.com",
        "port": 587,
        "auth": {"user": "mailer", "pass": "secret"},
    }
    email_ir = parse_ir(email)
    assert email_ir.capability.overlay.smtp.auth.password == "secret"

    path = tmp_path / "aliases.ir.json"
    save_ir_to_json([entity, email_ir], path)
    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved[0]["entity"]["storage"]["schema"] == "billing"
    assert saved[1]["capability"]["overlay"]["from"]["email"] == "hello@example.com"
    assert saved[1]["capability"]["overlay"]["smtp"]["auth"] == {"user": "mailer", "pass": "secret"}
    assert load_ir_from_json(path) == [entity, email_ir]
