"""
solver/connectivity.py — zapytania o bezpośrednie sąsiedztwo węzła.

Niezależne od obliczania aktywacji: korzysta wyłącznie z krawędzi
dokumentacyjnych GraphModel (listy sąsiedztwa budowane raz w konstruktorze grafu).
"""

from __future__ import annotations

from typing import AbstractSet, Iterable

from data_model import Direction, Edge, NodeId, RelationType

from .graph import GraphModel
from .types import Connection


class ConnectivityIndex:
    """
    Indeks połączeń węzłów.

    Użycie::

        index = ConnectivityIndex(graph)
        for c in index.get_connections("free-will"):
            print(c.direction, c.relation_type, c.node.id)
    """

    def __init__(self, graph: GraphModel) -> None:
        if graph is None:
            raise TypeError("ConnectivityIndex wymaga GraphModel, otrzymano None.")
        self._graph = graph

    def _peer(self, edge: Edge, peer_id: NodeId, direction: Direction) -> Connection | None:
        node = self._graph.node(peer_id)
        if node is None:
            return None  # krawędź do nieistniejącego węzła, pomijamy
        return Connection(node=node, node_type=node.kind, edge=edge, direction=direction)

    def get_connections(self, node_id: NodeId) -> list[Connection]:
        """
        Wszystkie relacje, w których node_id jest źródłem (outgoing) lub celem (incoming).

        Nieznany node_id → pusta lista. Pętla własna daje wpis w obu kierunkach.
        """
        connections: list[Connection] = []

        for edge in self._graph.outgoing(node_id):
            c = self._peer(edge, edge.to_node, Direction.OUTGOING)
            if c is not None:
                connections.append(c)

        for edge in self._graph.incoming(node_id):
            c = self._peer(edge, edge.from_node, Direction.INCOMING)
            if c is not None:
                connections.append(c)

        return connections

    def neighbourhood(
        self,
        node_ids:       Iterable[NodeId],
        allowed:        AbstractSet[NodeId] | None = None,
        relation_types: AbstractSet[RelationType] | None = None,
    ) -> list[Edge]:
        """
        Krawędzie incydentne z węzłami node_ids, których drugi koniec należy do allowed.

        Args:
            node_ids:       węzły startowe
            allowed:        dopuszczalne węzły po drugiej stronie (None → wszystkie)
            relation_types: filtr typów relacji (None → wszystkie)

        Returns:
            Lista unikalnych krawędzi w kolejności wykrycia.
        """
        seen: set[str] = set()
        edges: list[Edge] = []
        for node_id in node_ids:
            for c in self.get_connections(node_id):
                if allowed is not None and c.node.id not in allowed:
                    continue
                if relation_types is not None and c.relation_type not in relation_types:
                    continue
                if c.edge.id in seen:
                    continue
                seen.add(c.edge.id)
                edges.append(c.edge)
        return edges
