"""
sessions/store.py — sesje użytkownika: wybór przyjętych i odrzuconych aksjomatów.

SessionStore jest jawnie tworzonym magazynem klucz–wartość w pamięci procesu,
z czasem życia (TTL) liczonym od ostatniego użycia sesji. Przekazuje się go
tam, gdzie jest potrzebny — nie ma globalnej mapy sesji.

Publiczne API:
  UserSession                      niezmienny stan sesji
  SessionStore(ttl)                create / get / update / accept / reject / delete
  SessionNotFound                  nieznana lub wygasła sesja
"""

from __future__ import annotations

import dataclasses
import secrets
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Iterable

from data_model import NodeId


class SessionNotFound(KeyError):
    """Sesja nie istnieje albo wygasła."""


def _now() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return secrets.token_urlsafe(9)


@dataclass(frozen=True)
class UserSession:
    """
    Stan sesji. Aksjomat jest najwyżej w jednym z zbiorów accepted/rejected.
    """
    id:                   str
    accepted_axioms:      frozenset[NodeId] = frozenset()
    rejected_axioms:      frozenset[NodeId] = frozenset()
    explored_connections: tuple[str, ...] = ()
    current_snapshot:     str | None = None
    created_at:           datetime = field(default_factory=_now)
    updated_at:           datetime | None = None

    def accept(self, axiom_id: NodeId) -> "UserSession":
        return dataclasses.replace(
            self,
            accepted_axioms=self.accepted_axioms | {axiom_id},
            rejected_axioms=self.rejected_axioms - {axiom_id},
            updated_at=_now(),
        )

    def reject(self, axiom_id: NodeId) -> "UserSession":
        return dataclasses.replace(
            self,
            accepted_axioms=self.accepted_axioms - {axiom_id},
            rejected_axioms=self.rejected_axioms | {axiom_id},
            updated_at=_now(),
        )

    def to_dict(self) -> dict:
        return {
            "id":                  self.id,
            "acceptedAxioms":      sorted(self.accepted_axioms),
            "rejectedAxioms":      sorted(self.rejected_axioms),
            "exploredConnections": list(self.explored_connections),
            "currentSnapshot":     self.current_snapshot,
            "createdAt":           self.created_at.isoformat(),
            "updatedAt":           self.updated_at.isoformat() if self.updated_at else None,
        }


class SessionStore:
    """
    Magazyn sesji z TTL.

    Użycie::

        with SessionStore(ttl=3600) as store:
            session = store.create(accepted=["free-will"])
            session = store.accept(session.id, "moral-realism")
            valid   = engine.compute_valid_arguments(session.accepted_axioms)
    """

    def __init__(
        self,
        ttl:   float | None = 86400.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl is not None and ttl <= 0:
            raise ValueError(f"ttl musi być dodatni, otrzymano {ttl}")
        self._ttl     = ttl
        self._clock   = clock
        self._lock    = threading.Lock()
        self._items:  dict[str, tuple[UserSession, float]] = {}
        self._closed  = False

    # ------------------------------------------------------------------

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("SessionStore jest zamknięty.")

    def _expired(self, touched: float) -> bool:
        return self._ttl is not None and self._clock() - touched > self._ttl

    def _put(self, session: UserSession) -> UserSession:
        self._items[session.id] = (session, self._clock())
        return session

    def _get_locked(self, session_id: str) -> UserSession:
        entry = self._items.get(session_id)
        if entry is None:
            raise SessionNotFound(session_id)
        session, touched = entry
        if self._expired(touched):
            del self._items[session_id]
            raise SessionNotFound(session_id)
        return session

    # ------------------------------------------------------------------

    def create(
        self,
        accepted: Iterable[NodeId] = (),
        rejected: Iterable[NodeId] = (),
    ) -> UserSession:
        accepted_set = frozenset(accepted)
        rejected_set = frozenset(rejected) - accepted_set
        session = UserSession(
            id=new_id(),
            accepted_axioms=accepted_set,
            rejected_axioms=rejected_set,
            updated_at=_now(),
        )
        with self._lock:
            self._ensure_open()
            return self._put(session)

    def get(self, session_id: str) -> UserSession:
        with self._lock:
            self._ensure_open()
            return self._put(self._get_locked(session_id))

    def update(
        self,
        session_id: str,
        accepted:   Iterable[NodeId] | None = None,
        rejected:   Iterable[NodeId] | None = None,
        explored:   Iterable[str] | None = None,
        snapshot:   str | None = None,
    ) -> UserSession:
        """Nadpisuje podane pola (None → bez zmian), jak PUT w warstwie HTTP."""
        with self._lock:
            self._ensure_open()
            session = self._get_locked(session_id)
            changes: dict = {"updated_at": _now()}
            if accepted is not None:
                changes["accepted_axioms"] = frozenset(accepted)
            if rejected is not None:
                changes["rejected_axioms"] = frozenset(rejected)
            if explored is not None:
                changes["explored_connections"] = tuple(explored)
            if snapshot is not None:
                changes["current_snapshot"] = snapshot
            session = dataclasses.replace(session, **changes)
            overlap = session.accepted_axioms & session.rejected_axioms
            if overlap:
                raise ValueError(
                    f"Aksjomaty jednocześnie przyjęte i odrzucone: {', '.join(sorted(overlap))}"
                )
            return self._put(session)

    def accept(self, session_id: str, axiom_id: NodeId) -> UserSession:
        with self._lock:
            self._ensure_open()
            return self._put(self._get_locked(session_id).accept(axiom_id))

    def reject(self, session_id: str, axiom_id: NodeId) -> UserSession:
        with self._lock:
            self._ensure_open()
            return self._put(self._get_locked(session_id).reject(axiom_id))

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._ensure_open()
            if self._items.pop(session_id, None) is None:
                raise SessionNotFound(session_id)

    def purge_expired(self) -> int:
        """Usuwa wygasłe sesje; zwraca ich liczbę."""
        with self._lock:
            self._ensure_open()
            stale = [sid for sid, (_, touched) in self._items.items() if self._expired(touched)]
            for sid in stale:
                del self._items[sid]
            return len(stale)

    def close(self) -> None:
        with self._lock:
            self._items.clear()
            self._closed = True

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __enter__(self) -> "SessionStore":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
