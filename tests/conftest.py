"""Wspólne fabryki i fikstury testów."""

from __future__ import annotations

import pathlib

import pytest

from data_model import (
    ActivationConditions,
    Argument,
    Axiom,
    Category,
    Edge,
    LogicalRelation,
    NodeKind,
    RelationType,
)
from solver import GraphModel, GraphPayload

ROOT     = pathlib.Path(__file__).resolve().parent.parent
DATA_DIR = ROOT / "data"


def make_axiom(node_id: str, category: str = "core") -> Axiom:
    return Axiom(id=node_id, title=node_id.upper(), description="", category=category)


def make_argument(
    node_id: str,
    *,
    required_axioms=(),
    forbidden_axioms=(),
    required_arguments=(),
    forbidden_arguments=(),
    conditions: bool = True,
    category: str = "core",
) -> Argument:
    conds = None
    if conditions:
        conds = ActivationConditions(
            required_axioms=frozenset(required_axioms),
            forbidden_axioms=frozenset(forbidden_axioms),
            required_arguments=frozenset(required_arguments),
            forbidden_arguments=frozenset(forbidden_arguments),
        )
    return Argument(
        id=node_id,
        title=node_id.upper(),
        description="",
        conclusion="",
        category=category,
        activation_conditions=conds,
    )


def make_edge(
    from_node: str,
    to_node: str,
    rel: RelationType = RelationType.SUPPORTS,
    from_type: NodeKind | None = NodeKind.AXIOM,
    to_type: NodeKind | None = NodeKind.ARGUMENT,
    edge_id: str | None = None,
) -> Edge:
    return Edge(
        id=edge_id or f"{from_node}->{to_node}",
        from_node=from_node,
        to_node=to_node,
        from_type=from_type,
        to_type=to_type,
        relation=LogicalRelation(type=rel),
    )


def make_graph(axioms=(), arguments=(), edges=()) -> GraphModel:
    return GraphModel(GraphPayload(
        axioms=tuple(axioms),
        arguments=tuple(arguments),
        edges=tuple(edges),
        categories=(Category(id="core", name="Core", color="#000000"),),
    ))


@pytest.fixture
def chain_graph() -> GraphModel:
    """A1 → G1 → G2, G3 (samocykl), G4 z zakazem A2."""
    return make_graph(
        axioms=[make_axiom("A1"), make_axiom("A2")],
        arguments=[
            make_argument("G1", required_axioms=["A1"]),
            make_argument("G2", required_arguments=["G1"]),
            make_argument("G3", required_arguments=["G3"]),
            make_argument("G4", required_axioms=["A1"], forbidden_axioms=["A2"]),
        ],
        edges=[make_edge("A1", "G1")],
    )


@pytest.fixture
def data_dir() -> pathlib.Path:
    return DATA_DIR


@pytest.fixture
def collections_dict() -> dict:
    """Minimalna poprawna treść w wariancie collections."""
    return {
        "categories": [{"id": "core", "name": "Core", "color": "#111111"}],
        "axioms": [
            {"id": "A1", "title": "A1", "description": "", "category": "core"},
            {"id": "A2", "title": "A2", "description": "", "category": "core"},
        ],
        "arguments": [
            {
                "id": "G1", "title": "G1", "description": "", "conclusion": "",
                "category": "core", "level": 1,
                "activation_conditions": {"required_axioms": ["A1"]},
            },
            {
                "id": "G2", "title": "G2", "description": "", "conclusion": "",
                "category": "core", "level": 2,
                "activation_conditions": {
                    "required_arguments": ["G1"],
                    "forbidden_axioms": ["A2"],
                },
            },
        ],
        "edges": [
            {
                "id": "e1", "fromNode": "A1", "toNode": "G1",
                "fromType": "axiom", "toType": "argument",
                "relation": {"type": "supports", "strength": 0.8},
            },
            {
                "id": "e2", "fromNode": "G1", "toNode": "G2",
                "relation": {"type": "implies"},
            },
        ],
        "questionnaire": [
            {"axiomId": "A1", "question": "A1?", "category": "core"},
        ],
    }
