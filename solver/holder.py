"""
solver/holder.py — bieżąca wersja grafu z atomową podmianą przy przeładowaniu.

GraphHolder trzyma jedną referencję do GraphState (graf + silnik + indeks połączeń).
Czytelnicy pobierają cały stan przez current() i pracują na nim do końca
obliczeń; reload() buduje nowy stan obok i podmienia referencję pod blokadą.
Stary stan nigdy nie jest modyfikowany.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable

from .connectivity import ConnectivityIndex
from .engine import Engine
from .graph import GraphModel
from .types import GraphPayload

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class GraphState:
    """Spójny zestaw obiektów zbudowanych z jednego wczytania treści."""
    graph:        GraphModel
    engine:       Engine
    connectivity: ConnectivityIndex
    version:      int

    @classmethod
    def build(cls, payload: GraphPayload, version: int) -> "GraphState":
        graph = GraphModel(payload)
        return cls(
            graph=graph,
            engine=Engine(graph),
            connectivity=ConnectivityIndex(graph),
            version=version,
        )


class GraphHolder:
    """
    Użycie::

        holder = GraphHolder(lambda: load_content("data"))
        state  = holder.current()
        state.engine.compute_valid_arguments({"a1"})
        holder.reload()      # po zmianie plików treści
    """

    def __init__(self, loader: Callable[[], GraphPayload]) -> None:
        self._loader    = loader
        self._lock      = threading.Lock()
        self._callbacks: list[Callable[[GraphState], None]] = []
        self._state     = GraphState.build(loader(), version=1)

    def current(self) -> GraphState:
        return self._state

    def on_change(self, callback: Callable[[GraphState], None]) -> None:
        """Rejestruje funkcję wywoływaną po każdej udanej podmianie grafu."""
        with self._lock:
            self._callbacks.append(callback)

    def reload(self) -> GraphState:
        """
        Wczytuje treść ponownie i podmienia stan.

        Przy błędzie wczytania poprzedni stan zostaje, a wyjątek jest propagowany.
        """
        try:
            payload = self._loader()
        except Exception:
            log.exception("Przeładowanie treści nie powiodło się — zostaje wersja %d",
                          self._state.version)
            raise

        with self._lock:
            state = GraphState.build(payload, version=self._state.version + 1)
            self._state = state
            callbacks = list(self._callbacks)

        log.info("Przeładowano treść grafu (wersja %d, %d węzłów)", state.version, len(state.graph))
        for callback in callbacks:
            callback(state)
        return state
