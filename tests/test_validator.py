import copy

import pytest

from conftest import make_argument, make_axiom, make_edge, make_graph
from data_model import NodeKind, RelationType
from solver import load_payload, read_content
from validator import (
    ErrorCode,
    GraphValidator,
    find_requirement_cycles,
    format_cycle,
    load_schema,
    normalize_payload,
)


@pytest.fixture(scope="module")
def validator():
    return GraphValidator(load_schema())


def _codes(issues):
    return [i.code for i in issues]


# ---------------------------------------------------------------------------
# Treść poprawna
# ---------------------------------------------------------------------------

def test_bundled_content_is_clean(validator, data_dir):
    report = validator.validate(read_content(data_dir))
    assert report.is_valid, [str(e) for e in report.errors]
    assert report.warnings == []
    assert report.orphaned_arguments == []
    assert report.circular_dependencies == []


def test_minimal_content_is_valid(validator, collections_dict):
    report = validator.validate(collections_dict)
    assert report.is_valid
    assert report.warnings == []


def test_validate_does_not_mutate_input(validator, collections_dict):
    before = copy.deepcopy(collections_dict)
    validator.validate(collections_dict)
    assert collections_dict == before


def test_none_raises(validator):
    with pytest.raises(TypeError):
        validator.validate(None)


# ---------------------------------------------------------------------------
# Etap A: schemat i wczytanie
# ---------------------------------------------------------------------------

def test_schema_violations_fail_fast(validator, collections_dict):
    collections_dict["arguments"][0]["level"] = "one"
    collections_dict["edges"][0]["relation"]["strength"] = 2
    report = validator.validate(collections_dict)
    assert not report.is_valid
    assert set(_codes(report.errors)) == {ErrorCode.SCHEMA_VIOLATION}
    paths = [e.path for e in report.errors]
    assert "/arguments/0/level" in paths
    assert "/edges/0/relation/strength" in paths
    assert report.warnings == []


def test_axiom_with_conditions_violates_schema(validator, collections_dict):
    collections_dict["axioms"][0]["activation_conditions"] = {"required_axioms": ["A2"]}
    report = validator.validate(collections_dict)
    assert _codes(report.errors) == [ErrorCode.SCHEMA_VIOLATION]
    assert report.errors[0].path == "/axioms/0"


def test_mixed_variants_is_load_failure(validator):
    report = validator.validate({"nodes": [], "axioms": []})
    assert _codes(report.errors) == [ErrorCode.LOAD_FAILED]


def test_without_schema_loader_errors_are_reported():
    report = GraphValidator().validate({"axioms": [{"id": "A1", "metadata": {"difficulty": "hard"}}]})
    assert _codes(report.errors) == [ErrorCode.LOAD_FAILED]
    assert report.errors[0].path == "/axioms/0/metadata/difficulty"


def test_legacy_nodes_variant_warns(validator):
    report = validator.validate({
        "nodes": [
            {"id": "A1"},
            {"id": "G1", "edges": [{"to": "A1", "relation": "requires"}]},
        ],
    })
    assert report.is_valid
    assert ErrorCode.LEGACY_SCHEMA in _codes(report.warnings)


def test_normalizer_aliases():
    data = {"edges": [{"from_node": " A1", "to_node": "G1", "relation": "supports"}],
            "arguments": [{"id": " G1 "}]}
    out = normalize_payload(data)
    assert out["edges"][0] == {
        "fromNode": " A1", "toNode": "G1", "relation": {"type": "supports", "bidirectional": False},
    }
    assert out["arguments"][0] == {"id": "G1", "dependencies": []}
    assert data["arguments"][0]["id"] == " G1 "


# ---------------------------------------------------------------------------
# Etap B: tożsamość
# ---------------------------------------------------------------------------

def test_duplicate_and_collision(validator, collections_dict):
    collections_dict["axioms"].append(dict(collections_dict["axioms"][0]))
    collections_dict["arguments"].append({
        "id": "A2", "title": "x", "description": "", "conclusion": "",
        "category": "core", "level": 1, "activation_conditions": {},
    })
    report = validator.validate(collections_dict)
    codes = _codes(report.errors)
    assert ErrorCode.DUPLICATE_ID in codes
    assert ErrorCode.ID_COLLISION in codes
    dup = next(e for e in report.errors if e.code == ErrorCode.DUPLICATE_ID)
    assert dup.path == "/axioms/2/id"


# ---------------------------------------------------------------------------
# Etap C: odwołania
# ---------------------------------------------------------------------------

def test_reference_errors():
    graph = make_graph(
        axioms=[make_axiom("A1")],
        arguments=[
            make_argument("G1", required_axioms=["A1", "missing"]),
            make_argument("G2", required_axioms=["G1"], required_arguments=["A1"]),
        ],
    )
    report = GraphValidator().validate(graph)
    codes = _codes(report.errors)
    assert codes.count(ErrorCode.REF_UNKNOWN) == 1
    assert codes.count(ErrorCode.REF_WRONG_KIND) == 2
    unknown = next(e for e in report.errors if e.code == ErrorCode.REF_UNKNOWN)
    assert unknown.path == "/arguments/0/activation_conditions/required_axioms"
    assert unknown.details == {"argument": "G1", "ref": "missing"}


def test_edge_errors():
    graph = make_graph(
        axioms=[make_axiom("A1")],
        arguments=[make_argument("G1", required_axioms=["A1"])],
        edges=[
            make_edge("A1", "ghost", edge_id="e1"),
            make_edge("G1", "A1", from_type=NodeKind.AXIOM, to_type=NodeKind.AXIOM, edge_id="e2"),
        ],
    )
    report = GraphValidator().validate(graph)
    codes = _codes(report.errors)
    assert ErrorCode.EDGE_ENDPOINT_UNKNOWN in codes
    assert ErrorCode.EDGE_TYPE_MISMATCH in codes
    mismatch = next(e for e in report.errors if e.code == ErrorCode.EDGE_TYPE_MISMATCH)
    assert mismatch.path == "/edges/1/fromNode"


def test_strength_out_of_range_without_schema():
    payload = load_payload({
        "axioms": [{"id": "A1"}],
        "arguments": [{"id": "G1", "activation_conditions": {"required_axioms": ["A1"]}}],
        "edges": [{"fromNode": "A1", "toNode": "G1", "relation": {"type": "supports", "strength": 1.5}}],
    })
    report = GraphValidator().validate(payload)
    assert _codes(report.errors) == [ErrorCode.STRENGTH_OUT_OF_RANGE]


def test_flat_strength_next_to_relation_name_is_checked(validator, collections_dict):
    edge = collections_dict["edges"][0]
    edge["relation"] = "supports"
    edge["strength"] = 1.5

    normalized = normalize_payload(collections_dict)["edges"][0]
    assert normalized["relation"] == {"type": "supports", "strength": 1.5, "bidirectional": False}
    assert "strength" not in normalized

    report = validator.validate(collections_dict)
    assert [(e.code, e.path) for e in report.errors] == [
        (ErrorCode.SCHEMA_VIOLATION, "/edges/0/relation/strength"),
    ]

    report = GraphValidator().validate(collections_dict)
    assert _codes(report.errors) == [ErrorCode.STRENGTH_OUT_OF_RANGE]


def test_reference_warnings(validator, collections_dict):
    collections_dict["axioms"][0]["category"] = "unknown-cat"
    collections_dict["arguments"][0]["dependencies"] = ["nowhere"]
    collections_dict["questionnaire"].append({"axiomId": "ZZ", "question": "?", "category": "core"})
    report = validator.validate(collections_dict)
    assert report.is_valid
    codes = _codes(report.warnings)
    assert ErrorCode.CATEGORY_UNKNOWN in codes
    assert ErrorCode.DEPENDENCY_UNKNOWN in codes
    assert ErrorCode.QUESTIONNAIRE_UNKNOWN in codes


# ---------------------------------------------------------------------------
# Etap D: cykle
# ---------------------------------------------------------------------------

def test_cycles_reported_once_and_rotated():
    args = {
        a.id: a for a in [
            make_argument("c", required_arguments=["a"]),
            make_argument("a", required_arguments=["b"]),
            make_argument("b", required_arguments=["c"]),
            make_argument("s", required_arguments=["s"]),
            make_argument("x", required_arguments=["a", "missing"]),
        ]
    }
    cycles = find_requirement_cycles(args)
    assert sorted(cycles) == [("a", "b", "c"), ("s",)]
    assert format_cycle(("a", "b", "c")) == "a -> b -> c -> a"


def test_cycles_sharing_a_node_are_all_reported():
    args = {
        a.id: a for a in [
            make_argument("A", required_arguments=["B", "C"]),
            make_argument("B", required_arguments=["C"]),
            make_argument("C", required_arguments=["A"]),
        ]
    }
    assert sorted(find_requirement_cycles(args)) == [("A", "B", "C"), ("A", "C")]

    report = GraphValidator().validate(make_graph(arguments=list(args.values())))
    assert report.circular_dependencies == ["A -> B -> C -> A", "A -> C -> A"]


def test_cycle_is_error_and_orphan():
    graph = make_graph(
        axioms=[make_axiom("A1")],
        arguments=[
            make_argument("G1", required_axioms=["A1"], required_arguments=["G2"]),
            make_argument("G2", required_arguments=["G1"]),
        ],
    )
    report = GraphValidator().validate(graph)
    assert not report.is_valid
    assert report.circular_dependencies == ["G1 -> G2 -> G1"]
    assert report.orphaned_arguments == ["G1", "G2"]


# ---------------------------------------------------------------------------
# Etap E: osierocone argumenty
# ---------------------------------------------------------------------------

def test_orphans():
    graph = make_graph(
        axioms=[make_axiom("A1"), make_axiom("A2")],
        arguments=[
            make_argument("lonely", conditions=False),
            make_argument("documented", conditions=False),
            make_argument("contradictory", required_axioms=["A1"], forbidden_axioms=["A1"]),
            make_argument("needs-lonely", required_arguments=["lonely"]),
            make_argument("fine", required_axioms=["A1"], forbidden_axioms=["A2"]),
            make_argument("after-fine", required_arguments=["fine"], forbidden_arguments=["x"]),
        ],
        edges=[make_edge("A1", "documented", RelationType.SUPPORTS)],
    )
    report = GraphValidator().validate(graph)
    assert report.orphaned_arguments == ["contradictory", "lonely", "needs-lonely"]
    codes = _codes(report.warnings)
    assert codes.count(ErrorCode.NO_CONDITIONS) == 2
    assert ErrorCode.CONTRADICTORY_CONDITIONS in codes
    assert ErrorCode.UNREACHABLE in codes


def test_report_to_dict(validator, collections_dict):
    collections_dict["arguments"][1]["activation_conditions"]["required_arguments"] = ["G2"]
    report = validator.validate(collections_dict)
    out = report.to_dict()
    assert set(out) == {"isValid", "errors", "warnings", "orphanedArguments", "circularDependencies"}
    assert out["isValid"] is False
    assert out["circularDependencies"] == ["G2 -> G2"]
    assert out["errors"][0].startswith("[E_CIRCULAR_REQUIREMENT]")

    detailed = report.to_dict(detail=True)
    assert detailed["issues"][0]["code"] == "E_CIRCULAR_REQUIREMENT"
    assert "expectedFix" in detailed["issues"][0]
