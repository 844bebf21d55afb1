import json
import logging
import textwrap

import pytest

from data_model import NodeKind, RelationType
from solver import (
    ContentLoadError,
    SchemaVariantError,
    detect_variant,
    load_answers,
    load_content,
    load_json_file,
    load_payload,
    load_yaml_directory,
    parse_axiom_list,
    payload_to_dict,
    read_yaml_directory,
)


def _write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(text), encoding="utf-8")


# ---------------------------------------------------------------------------
# Katalog YAML
# ---------------------------------------------------------------------------

@pytest.fixture
def yaml_tree(tmp_path):
    _write(tmp_path / "categories.yaml", """
        categories:
          - id: core
            name: Core
            color: "#000000"
    """)
    _write(tmp_path / "axioms" / "b.yaml", """
        axioms:
          - id: A2
            title: Drugi
            description: ""
            category: core
    """)
    _write(tmp_path / "axioms" / "a.yaml", """
        axioms:
          - id: A1
            title: Pierwszy
            description: ""
            category: core
            metadata:
              difficulty: basic
              acceptability: 0.5
    """)
    _write(tmp_path / "arguments" / "main.yaml", """
        arguments:
          - id: G1
            title: G1
            description: ""
            conclusion: ""
            category: core
            level: 1
            activation_conditions:
              required_axioms: [A1]
              forbidden_axioms: [A2]
    """)
    _write(tmp_path / "edges" / "main.yaml", """
        edges:
          - fromNode: A1
            toNode: G1
            relation: {type: supports, strength: 0.5}
    """)
    _write(tmp_path / "axioms" / "notes.txt", "ignored")
    return tmp_path


def test_yaml_directory_merges_files_in_order(yaml_tree):
    payload = load_yaml_directory(yaml_tree)
    assert [a.id for a in payload.axioms] == ["A1", "A2"]
    assert payload.axioms[0].metadata.acceptability == 0.5
    assert payload.arguments[0].activation_conditions.required_axioms == {"A1"}
    assert payload.arguments[0].activation_conditions.forbidden_axioms == {"A2"}
    assert payload.schema_variant == "collections"


def test_edge_id_and_types_are_filled(yaml_tree):
    edge = load_yaml_directory(yaml_tree).edges[0]
    assert edge.id == "A1->G1:supports"
    assert edge.from_type is NodeKind.AXIOM
    assert edge.to_type is NodeKind.ARGUMENT
    assert edge.relation.bidirectional is False


def test_missing_directories_are_skipped(tmp_path):
    _write(tmp_path / "axioms" / "a.yaml", "axioms: [{id: A1}]\n")
    data = read_yaml_directory(tmp_path)
    assert data["arguments"] == []
    assert data["edges"] == []
    assert "categories" not in data


def test_yaml_syntax_error_names_file(tmp_path):
    _write(tmp_path / "arguments" / "bad.yaml", "arguments: [\n")
    with pytest.raises(ContentLoadError) as exc:
        read_yaml_directory(tmp_path)
    assert exc.value.source == "arguments/bad.yaml"


def test_invalid_utf8_names_file(tmp_path):
    bad = tmp_path / "axioms" / "bad.yaml"
    bad.parent.mkdir(parents=True)
    bad.write_bytes(b"axioms:\n  - id: \xff\n")
    with pytest.raises(ContentLoadError) as exc:
        load_yaml_directory(tmp_path)
    assert exc.value.source == "axioms/bad.yaml"

    answers = tmp_path / "answers.json"
    answers.write_bytes(b"{\"A1\": \xfe}")
    with pytest.raises(ContentLoadError):
        load_answers(answers)
    with pytest.raises(ContentLoadError):
        load_json_file(answers)


def test_missing_directory_raises(tmp_path):
    with pytest.raises(ContentLoadError):
        read_yaml_directory(tmp_path / "missing")


def test_load_content_dispatches_on_path(yaml_tree, tmp_path):
    json_file = tmp_path / "graph-data.json"
    json_file.write_text(json.dumps({"axioms": [{"id": "X"}]}), encoding="utf-8")
    assert [a.id for a in load_content(json_file).axioms] == ["X"]
    assert len(load_content(yaml_tree).axioms) == 2

    with pytest.raises(ContentLoadError):
        load_content(tmp_path / "nope.json")

    other = tmp_path / "graph.txt"
    other.write_text("x", encoding="utf-8")
    with pytest.raises(ContentLoadError):
        load_content(other)


def test_json_syntax_error(tmp_path):
    f = tmp_path / "graph-data.json"
    f.write_text("{not json", encoding="utf-8")
    with pytest.raises(ContentLoadError):
        load_json_file(f)


def test_bundled_content_loads(data_dir):
    payload = load_content(data_dir)
    assert len(payload.axioms) == 6
    assert len(payload.arguments) == 7
    assert payload.questionnaire
    assert payload.sources


# ---------------------------------------------------------------------------
# load_payload: wariant collections
# ---------------------------------------------------------------------------

def test_collections_variant(collections_dict):
    payload = load_payload(collections_dict)
    assert [g.id for g in payload.arguments] == ["G1", "G2"]
    assert payload.edges[1].from_type is NodeKind.ARGUMENT
    assert payload.questionnaire[0].axiom_id == "A1"
    assert payload.categories[0].color == "#111111"


def test_argument_without_conditions_keeps_none():
    payload = load_payload({"arguments": [{"id": "G1"}]})
    assert payload.arguments[0].activation_conditions is None
    assert payload.arguments[0].title == "G1"


def test_edge_key_aliases_and_flat_relation():
    payload = load_payload({
        "axioms": [{"id": "A1"}],
        "arguments": [{"id": "G1"}],
        "edges": [{"from": "A1", "to_node": "G1", "type": "implies", "strength": 0.3}],
    })
    edge = payload.edges[0]
    assert (edge.from_node, edge.to_node) == ("A1", "G1")
    assert edge.relation.type is RelationType.IMPLIES
    assert edge.relation.strength == 0.3


@pytest.mark.parametrize("data, where", [
    ({"axioms": [{"title": "no id"}]},                               "/axioms/0/id"),
    ({"arguments": [{"id": "G1", "level": "high"}]},                 "/arguments/0/level"),
    ({"axioms": [{"id": "A1", "metadata": {"difficulty": "hard"}}]}, "/axioms/0/metadata/difficulty"),
    ({"edges": [{"fromNode": "A1", "toNode": "G1", "relation": {"type": "refutes"}}]},
     "/edges/0/relation/type"),
    ({"edges": [{"toNode": "G1", "relation": "supports"}]},          "/edges/0/fromNode"),
    ({"axioms": {"id": "A1"}},                                       "/axioms"),
])
def test_invalid_content_raises_with_path(data, where):
    with pytest.raises(ContentLoadError) as exc:
        load_payload(data, source="test.json")
    assert exc.value.path == where
    assert exc.value.source == "test.json"


def test_none_raises_type_error():
    with pytest.raises(TypeError):
        load_payload(None)


# ---------------------------------------------------------------------------
# Wariant nodes
# ---------------------------------------------------------------------------

def test_detect_variant():
    assert detect_variant({"axioms": []}) == "collections"
    assert detect_variant({}) == "collections"
    assert detect_variant({"nodes": []}) == "nodes"
    with pytest.raises(SchemaVariantError):
        detect_variant({"nodes": [], "axioms": []})
    with pytest.raises(SchemaVariantError):
        detect_variant(["not", "a", "dict"])


def test_nodes_variant_with_explicit_kind():
    payload = load_payload({
        "nodes": [
            {"id": "A1", "kind": "axiom", "title": "A1"},
            {
                "id": "G1", "kind": "argument",
                "activation_conditions": {"required_axioms": ["A1"]},
                "edges": [{"to": "A1", "relation": "requires"}],
            },
        ],
    })
    assert [a.id for a in payload.axioms] == ["A1"]
    assert payload.arguments[0].activation_conditions.required_axioms == {"A1"}
    assert payload.edges[0].from_node == "G1"
    assert payload.edges[0].to_type is NodeKind.AXIOM
    assert payload.notes == ()
    assert payload.schema_variant == "nodes"


def test_nodes_variant_infers_kind_and_conditions(caplog):
    data = {
        "nodes": [
            {"id": "A1"},
            {"id": "A2"},
            {
                "id": "G1",
                "edges": [
                    {"to": "A1", "relation": "requires"},
                    {"to": "A2", "relation": "contradicts"},
                    {"to": "G2", "relation": "assumes"},
                    {"to": "A1", "relation": "supports"},
                ],
            },
            {"id": "G2", "kind": "argument", "edges": []},
        ],
    }
    with caplog.at_level(logging.WARNING, logger="solver.loader"):
        payload = load_payload(data)

    assert {a.id for a in payload.axioms} == {"A1", "A2"}
    g1 = payload.arguments[0]
    conds = g1.activation_conditions
    assert conds.required_axioms == {"A1"}
    assert conds.forbidden_axioms == {"A2"}
    assert conds.required_arguments == {"G2"}
    assert payload.arguments[1].activation_conditions is None
    assert len(payload.edges) == 4
    assert any("wywnioskowany" in n for n in payload.notes)
    assert any("odtworzone" in n for n in payload.notes)
    assert "schemat 'nodes'" in caplog.text


def test_nodes_variant_unknown_target_becomes_required_argument():
    payload = load_payload({
        "nodes": [{"id": "G1", "kind": "argument", "edges": [{"to": "ghost", "relation": "requires"}]}],
    })
    assert payload.arguments[0].activation_conditions.required_arguments == {"ghost"}


def test_export_roundtrip_of_legacy_content():
    payload = load_payload({
        "nodes": [
            {"id": "A1", "kind": "axiom"},
            {"id": "G1", "kind": "argument", "edges": [{"to": "A1", "relation": "requires"}]},
        ],
    })
    exported = payload_to_dict(payload)
    assert set(exported) >= {"axioms", "arguments", "edges", "categories"}
    assert exported["arguments"][0]["activation_conditions"] == {"required_axioms": ["A1"]}
    reloaded = load_payload(exported)
    assert reloaded.schema_variant == "collections"
    assert reloaded.arguments[0].activation_conditions == payload.arguments[0].activation_conditions
    assert reloaded.edges[0].id == payload.edges[0].id


# ---------------------------------------------------------------------------
# Wejście użytkownika
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("raw, expected", [
    ("a1, a2 a3", {"a1", "a2", "a3"}),
    (["a1", "a2,a3;a4"], {"a1", "a2", "a3", "a4"}),
    ("", set()),
    (None, set()),
    ("  a1  ", {"a1"}),
])
def test_parse_axiom_list(raw, expected):
    assert parse_axiom_list(raw) == expected


def test_load_answers_bool_map(tmp_path):
    f = tmp_path / "answers.json"
    f.write_text(json.dumps({"A1": True, "A2": False}), encoding="utf-8")
    assert load_answers(f) == ({"A1"}, {"A2"})


def test_load_answers_lists(tmp_path):
    f = tmp_path / "answers.json"
    f.write_text(json.dumps({"accepted": ["A1", "A3"], "rejected": ["A2"]}), encoding="utf-8")
    accepted, rejected = load_answers(f)
    assert accepted == {"A1", "A3"}
    assert rejected == {"A2"}


@pytest.mark.parametrize("content", [
    {"A1": "yes"},
    {"accepted": ["A1"], "rejected": ["A1"]},
    ["A1"],
])
def test_load_answers_rejects_bad_input(tmp_path, content):
    f = tmp_path / "answers.json"
    f.write_text(json.dumps(content), encoding="utf-8")
    with pytest.raises(ContentLoadError):
        load_answers(f)
