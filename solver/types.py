"""
solver/types.py — typy wejścia/wyjścia silnika.

GraphPayload — znormalizowana treść (wariant kanoniczny: trzy równoległe kolekcje).
Connection   — pojedyncze połączenie zwracane przez ConnectivityIndex.
ClosureTrace — wynik domknięcia z numerem przebiegu, w którym argument stał się ważny.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from data_model import (
    Argument,
    Axiom,
    Category,
    Direction,
    Edge,
    Node,
    NodeId,
    NodeKind,
    QuestionnaireItem,
    RelationType,
    Source,
)


@dataclass(frozen=True)
class GraphPayload:
    """
    Treść grafu po normalizacji, jeszcze bez indeksów.

    Kolekcje zachowują kolejność i ewentualne duplikaty z plików źródłowych —
    walidator ich potrzebuje. Deduplikacja odbywa się w GraphModel.

    - schema_variant: "collections" (kanoniczny) lub "nodes" (wariant z listą węzłów)
    - notes:          uwagi z normalizacji (np. wnioskowanie rodzaju węzła)
    """
    axioms:         tuple[Axiom, ...] = ()
    arguments:      tuple[Argument, ...] = ()
    edges:          tuple[Edge, ...] = ()
    categories:     tuple[Category, ...] = ()
    sources:        tuple[Source, ...] = ()
    questionnaire:  tuple[QuestionnaireItem, ...] = ()
    schema_variant: str = "collections"
    notes:          tuple[str, ...] = ()


@dataclass(frozen=True)
class Connection:
    """Węzeł sąsiedni wraz z relacją i kierunkiem względem węzła zapytania."""
    node:      Node
    node_type: NodeKind
    edge:      Edge
    direction: Direction

    @property
    def relation_type(self) -> RelationType:
        return self.edge.relation.type

    def to_dict(self) -> dict[str, Any]:
        return {
            "node":      self.node.id,
            "nodeType":  str(self.node_type),
            "type":      str(self.relation_type),
            "direction": str(self.direction),
            "edge":      self.edge.id,
        }


@dataclass(frozen=True)
class ClosureTrace:
    """
    Domknięcie z informacją o kolejności wyprowadzenia.

    - valid:  zbiór ważnych argumentów (identyczny z compute_valid_arguments)
    - passes: argument_id -> numer przebiegu (1-based), w którym został dodany
    - rounds: liczba wykonanych przebiegów (łącznie z ostatnim, pustym)
    """
    valid:  frozenset[NodeId]
    passes: dict[NodeId, int] = field(default_factory=dict)
    rounds: int = 0

    def by_pass(self) -> dict[int, list[NodeId]]:
        grouped: dict[int, list[NodeId]] = {}
        for arg_id, n in self.passes.items():
            grouped.setdefault(n, []).append(arg_id)
        return {n: sorted(ids) for n, ids in sorted(grouped.items())}
