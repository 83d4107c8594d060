import logging
import re

from conftest import node_at

from schema_mapper.schema_utils import build_schema_tree, build_tree, is_likely_json_schema, normalize_schema_type
from schema_mapper.tree import IdSequence, iter_nodes


def _without_ids(node):
    data = node.to_dict()

    def strip(d):
        d["id"] = d["id"].rsplit(":", 1)[0]
        for child in d.get("children", []):
            strip(child)
        return d

    return strip(data)


def test_root_takes_schema_title_and_has_no_required_state(person_tree):
    assert person_tree.name == "Person"
    assert person_tree.type == "object"
    assert person_tree.required_state is None
    assert person_tree.id == ":1"


def test_property_children_are_sorted_by_key(person_tree):
    names = [c.name for c in person_tree.children]
    assert names == sorted(names)
    assert names[0] == "account"


def test_ids_are_path_plus_sequence(person_tree):
    ids = [n.id for n in iter_nodes(person_tree)]
    seqs = [int(i.rsplit(":", 1)[1]) for i in ids]
    assert seqs == list(range(1, len(ids) + 1))
    street = node_at(person_tree, "address.street")
    assert re.fullmatch(r"address\.street:\d+", street.id)


def test_build_is_deterministic_modulo_sequence(person_schema):
    first = build_schema_tree(person_schema)
    second = build_schema_tree(person_schema)
    assert _without_ids(first) == _without_ids(second)


def test_property_order_in_source_does_not_matter():
    a = {"type": "object", "properties": {"b": {"type": "string"}, "a": {"type": "integer"}}}
    b = {"type": "object", "properties": {"a": {"type": "integer"}, "b": {"type": "string"}}}
    assert build_schema_tree(a).to_dict() == build_schema_tree(b).to_dict()


def test_shared_id_sequence_continues_across_builds():
    ids = IdSequence()
    first = build_schema_tree({"type": "string"}, ids)
    second = build_schema_tree({"type": "string"}, ids)
    assert first.id == ":1"
    assert second.id == ":2"


def test_conditional_and_required_states(person_tree):
    assert node_at(person_tree, "address").required_state == "required"
    assert node_at(person_tree, "address.street").required_state == "required"
    assert node_at(person_tree, "address.state").required_state == "optional"
    assert node_at(person_tree, "secondary_residence").required_state == "optional"
    assert node_at(person_tree, "secondary_residence.street").required_state == "conditional"
    assert node_at(person_tree, "secondary_residence.city").required_state == "conditional"
    assert node_at(person_tree, "secondary_residence.coordinates.lat").required_state == "optional"


def test_required_chain_invariant(person_tree):
    parents = {}

    def collect(node):
        for child in node.children or []:
            parents[child.id] = node
            collect(child)

    collect(person_tree)
    for node in iter_nodes(person_tree):
        if node.required_state != "required":
            continue
        parent = parents.get(node.id)
        while parent is not None and parent is not person_tree:
            assert parent.required_state == "required", (node.id, parent.id)
            parent = parents.get(parent.id)


def test_array_items_pass_required_chain_through():
    schema = {
        "type": "object",
        "required": ["lines"],
        "properties": {
            "lines": {
                "type": "array",
                "items": {"type": "object", "required": ["sku"], "properties": {"sku": {"type": "string"}}},
            },
            "notes": {
                "type": "array",
                "items": {"type": "object", "required": ["text"], "properties": {"text": {"type": "string"}}},
            },
        },
    }
    tree = build_schema_tree(schema)
    assert node_at(tree, "lines.item").name == "[item]"
    assert node_at(tree, "lines.item").required_state == "required"
    assert node_at(tree, "lines.item.sku").required_state == "required"
    assert node_at(tree, "notes.item").required_state == "optional"
    assert node_at(tree, "notes.item.text").required_state == "conditional"


def test_tuple_items_keep_positional_order():
    schema = {"type": "array", "items": [{"type": "string"}, {"type": "number"}, {"type": "boolean"}]}
    tree = build_schema_tree(schema)
    assert [c.name for c in tree.children] == ["[0]", "[1]", "[2]"]
    assert [c.type for c in tree.children] == ["string", "number", "boolean"]
    assert tree.children[1].path_key == "1"


def test_allof_branches_are_appended_after_properties():
    schema = {
        "type": "object",
        "required": ["z"],
        "properties": {"z": {"type": "string"}, "a": {"type": "string"}},
        "allOf": [
            {"title": "Audit Info", "properties": {"createdBy": {"type": "string"}}},
            {"properties": {"flag": {"type": "boolean"}}},
        ],
    }
    tree = build_schema_tree(schema)
    assert [c.name for c in tree.children] == ["a", "z", "Audit Info", "allOf_2"]
    assert node_at(tree, "Audit_Info.createdBy").required_state == "optional"
    assert node_at(tree, "allOf_2.flag").type == "boolean"
    assert node_at(tree, "z").required_state == "required"
    assert node_at(tree, "a").required_state == "optional"


def test_oneof_only_node_is_object_leaf():
    tree = build_schema_tree({"type": "object", "properties": {"choice": {"oneOf": [{"type": "string"}]}}})
    choice = node_at(tree, "choice")
    assert choice.type == "object"
    assert choice.children is None
    assert choice.is_leaf


def test_leaf_carries_type_description_and_rules(person_tree):
    theme = node_at(person_tree, "account.preferences.theme")
    assert theme.type == "string"
    assert theme.description == "Visual theme preference"
    assert theme.rules == ['enum: "light", "dark", "system"']
    assert theme.children is None


def test_leaf_without_rules_has_none(person_tree):
    assert node_at(person_tree, "address.state").rules is None


def test_type_normalization():
    assert normalize_schema_type({"type": ["integer", "null"]}) == "integer"
    assert normalize_schema_type({"properties": {}}) == "object"
    assert normalize_schema_type({"type": "mystery"}) == "object"
    assert normalize_schema_type({"type": []}) == "object"
    assert normalize_schema_type(True) == "unknown"


def test_malformed_substructures_degrade_to_leaves():
    schema = {
        "type": "object",
        "required": "name",
        "properties": {
            "name": {"type": "string"},
            "weird": True,
            "list": {"type": "array", "items": 5},
        },
    }
    tree = build_schema_tree(schema)
    assert node_at(tree, "name").required_state == "optional"
    assert node_at(tree, "weird").type == "unknown"
    assert node_at(tree, "list").children is None
    assert build_schema_tree({"type": "object", "properties": []}).children is None


class _Unprintable:
    def __str__(self):
        raise RuntimeError("cannot render")

    __repr__ = __str__


def test_node_level_errors_are_logged_and_do_not_abort(caplog):
    schema = {
        "type": "object",
        "properties": {
            "bad": {"type": "string", "description": "kept?", "const": _Unprintable()},
            "good": {"type": "string", "description": "fine", "minLength": 2},
        },
    }
    logger = logging.getLogger("schema_mapper.schema_utils")
    logger.addHandler(caplog.handler)
    try:
        tree = build_schema_tree(schema)
    finally:
        logger.removeHandler(caplog.handler)
    bad = node_at(tree, "bad")
    assert bad.rules is None
    assert bad.description is None
    good = node_at(tree, "good")
    assert good.rules == ["minLength: 2"]
    assert good.description == "fine"
    assert any("bad" in r.getMessage() for r in caplog.records)


def test_schema_sniffing_and_dispatch():
    assert is_likely_json_schema({"$schema": "x"})
    assert is_likely_json_schema({"type": "array"})
    assert is_likely_json_schema({"properties": {}})
    assert not is_likely_json_schema({"name": "Ada"})
    assert not is_likely_json_schema([1, 2])

    value_tree = build_tree({"name": "Ada", "age": 36})
    assert value_tree.name == "root"
    assert value_tree.children[0].description == "Integer numeric value."
    assert value_tree.children[0].required_state is None

    schema_tree = build_tree({"title": "Doc", "type": "object", "properties": {"a": {"type": "string"}}})
    assert schema_tree.name == "Doc"
    assert schema_tree.children[0].required_state == "optional"
