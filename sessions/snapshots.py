"""
sessions/snapshots.py — migawki stanowiska użytkownika.

Migawka zapisuje przyjęte aksjomaty, wynikające z nich ważne argumenty
(obliczone przez silnik w chwili tworzenia) oraz krawędzie łączące te węzły.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable

from data_model import NodeId
from solver.connectivity import ConnectivityIndex
from solver.engine import Engine

from .store import UserSession, new_id


@dataclass(frozen=True)
class Snapshot:
    id:          str
    title:       str
    axioms:      tuple[NodeId, ...]
    arguments:   tuple[NodeId, ...]
    edges:       tuple[str, ...]
    description: str | None = None
    is_public:   bool = False
    created_by:  str | None = None
    tags:        tuple[str, ...] = ()
    created_at:  datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id":          self.id,
            "title":       self.title,
            "description": self.description,
            "axioms":      list(self.axioms),
            "arguments":   list(self.arguments),
            "edges":       list(self.edges),
            "metadata": {
                "createdBy": self.created_by,
                "isPublic":  self.is_public,
                "tags":      list(self.tags),
            },
            "createdAt":   self.created_at.isoformat(),
        }

    def summary(self) -> dict[str, Any]:
        return {
            "id":          self.id,
            "title":       self.title,
            "description": self.description,
            "createdAt":   self.created_at.isoformat(),
            "axiomCount":  len(self.axioms),
        }


def build_snapshot(
    engine:       Engine,
    connectivity: ConnectivityIndex,
    session:      UserSession,
    title:        str,
    description:  str | None = None,
    is_public:    bool = False,
    tags:         Iterable[str] = (),
) -> Snapshot:
    """
    Buduje migawkę dla sesji.

    Aksjomaty spoza grafu są pomijane. Krawędzie: wszystkie relacje, których
    oba końce należą do przyjętych aksjomatów lub ważnych argumentów.
    """
    graph    = engine.graph
    accepted = frozenset(a for a in session.accepted_axioms if graph.axiom(a) is not None)
    valid    = engine.compute_valid_arguments(accepted)
    nodes    = accepted | valid

    edges = connectivity.neighbourhood(sorted(nodes), allowed=nodes)

    return Snapshot(
        id=new_id(),
        title=title,
        description=description,
        axioms=tuple(sorted(accepted)),
        arguments=tuple(sorted(valid)),
        edges=tuple(e.id for e in edges),
        is_public=is_public,
        created_by=session.id,
        tags=tuple(tags),
    )


class SnapshotStore:
    """Magazyn migawek w pamięci procesu."""

    def __init__(self) -> None:
        self._lock  = threading.Lock()
        self._items: dict[str, Snapshot] = {}

    def save(self, snapshot: Snapshot) -> Snapshot:
        with self._lock:
            self._items[snapshot.id] = snapshot
        return snapshot

    def get(self, snapshot_id: str) -> Snapshot | None:
        with self._lock:
            return self._items.get(snapshot_id)

    def list_public(self) -> list[dict[str, Any]]:
        """Podsumowania publicznych migawek, od najnowszej."""
        with self._lock:
            public = [s for s in self._items.values() if s.is_public]
        public.sort(key=lambda s: s.created_at, reverse=True)
        return [s.summary() for s in public]
