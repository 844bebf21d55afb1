"""
solver/graph.py — niezmienny, zindeksowany widok grafu aksjomatów i argumentów.

GraphModel buduje się raz z GraphPayload i nie udostępnia API modyfikacji.
Przy przeładowaniu treści tworzy się nowy obiekt (zob. solver.holder).

Indeksy:
  _axioms, _arguments, _edges, _categories — id -> obiekt (pierwsze wystąpienie wygrywa)
  _outgoing, _incoming                      — node_id -> krotka krawędzi
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping

from data_model import (
    Argument,
    Axiom,
    Category,
    Edge,
    Node,
    NodeId,
    NodeKind,
    QuestionnaireItem,
    Source,
)

from .types import GraphPayload


def _index_first[T](items: tuple[T, ...], duplicates: set[str]) -> dict[str, T]:
    """Buduje słownik id -> element; kolejne wystąpienia tego samego id trafiają do duplicates."""
    out: dict[str, T] = {}
    for item in items:
        item_id = item.id  # type: ignore[attr-defined]
        if item_id in out:
            duplicates.add(item_id)
            continue
        out[item_id] = item
    return out


class GraphModel:
    """
    Graf treści z wyszukiwaniem O(1) po identyfikatorze.

    Użycie::

        graph = GraphModel(load_yaml_directory("data"))
        graph.argument("arg-1").activation_conditions
        graph.outgoing("free-will")
    """

    def __init__(self, payload: GraphPayload) -> None:
        if payload is None:
            raise TypeError("GraphModel wymaga GraphPayload, otrzymano None.")

        duplicates: set[str] = set()

        self._payload    = payload
        self._axioms     = _index_first(payload.axioms, duplicates)
        self._arguments  = _index_first(payload.arguments, duplicates)
        self._edges      = _index_first(payload.edges, duplicates)
        self._categories = _index_first(payload.categories, duplicates)
        self._duplicates = frozenset(duplicates)

        # aksjomat wygrywa przy kolizji id między kolekcjami
        self._collisions = frozenset(self._axioms.keys() & self._arguments.keys())

        outgoing: dict[NodeId, list[Edge]] = {}
        incoming: dict[NodeId, list[Edge]] = {}
        for edge in self._edges.values():
            outgoing.setdefault(edge.from_node, []).append(edge)
            incoming.setdefault(edge.to_node, []).append(edge)

        self._outgoing = {k: tuple(v) for k, v in outgoing.items()}
        self._incoming = {k: tuple(v) for k, v in incoming.items()}

    @classmethod
    def from_payload(cls, payload: GraphPayload) -> "GraphModel":
        return cls(payload)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def axiom(self, node_id: NodeId) -> Axiom | None:
        return self._axioms.get(node_id)

    def argument(self, node_id: NodeId) -> Argument | None:
        return self._arguments.get(node_id)

    def node(self, node_id: NodeId) -> Node | None:
        """Aksjomat lub argument o podanym id (None gdy brak)."""
        found = self._axioms.get(node_id)
        if found is not None:
            return found
        return self._arguments.get(node_id)

    def kind_of(self, node_id: NodeId) -> NodeKind | None:
        node = self.node(node_id)
        return node.kind if node is not None else None

    def edge(self, edge_id: str) -> Edge | None:
        return self._edges.get(edge_id)

    def category(self, category_id: str) -> Category | None:
        return self._categories.get(category_id)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._axioms or node_id in self._arguments

    def __len__(self) -> int:
        return len(self._axioms) + len(self._arguments)

    def __iter__(self) -> Iterator[Node]:
        yield from self._axioms.values()
        yield from self._arguments.values()

    # ------------------------------------------------------------------
    # Sąsiedztwo
    # ------------------------------------------------------------------

    def outgoing(self, node_id: NodeId) -> tuple[Edge, ...]:
        """Krawędzie, dla których node_id jest źródłem."""
        return self._outgoing.get(node_id, ())

    def incoming(self, node_id: NodeId) -> tuple[Edge, ...]:
        """Krawędzie, dla których node_id jest celem."""
        return self._incoming.get(node_id, ())

    # ------------------------------------------------------------------
    # Kolekcje
    # ------------------------------------------------------------------

    @property
    def axioms(self) -> tuple[Axiom, ...]:
        return tuple(self._axioms.values())

    @property
    def arguments(self) -> tuple[Argument, ...]:
        return tuple(self._arguments.values())

    @property
    def arguments_by_id(self) -> Mapping[NodeId, Argument]:
        return MappingProxyType(self._arguments)

    @property
    def axiom_ids(self) -> frozenset[NodeId]:
        return frozenset(self._axioms)

    @property
    def argument_ids(self) -> frozenset[NodeId]:
        return frozenset(self._arguments)

    @property
    def edges(self) -> tuple[Edge, ...]:
        return tuple(self._edges.values())

    @property
    def categories(self) -> tuple[Category, ...]:
        return tuple(self._categories.values())

    @property
    def sources(self) -> tuple[Source, ...]:
        return self._payload.sources

    @property
    def questionnaire(self) -> tuple[QuestionnaireItem, ...]:
        return self._payload.questionnaire

    @property
    def payload(self) -> GraphPayload:
        """Treść źródłowa (z duplikatami) — dla walidatora."""
        return self._payload

    @property
    def duplicate_ids(self) -> frozenset[str]:
        return self._duplicates

    @property
    def id_collisions(self) -> frozenset[NodeId]:
        """Identyfikatory obecne jednocześnie wśród aksjomatów i argumentów."""
        return self._collisions
