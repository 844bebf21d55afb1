"""
sessions — sesje użytkownika i migawki stanowiska.

  UserSession, SessionStore, SessionNotFound   — sesje (store.py)
  Snapshot, SnapshotStore, build_snapshot      — migawki (snapshots.py)
"""

from .store import SessionNotFound, SessionStore, UserSession
from .snapshots import Snapshot, SnapshotStore, build_snapshot

__all__ = [
    "SessionNotFound",
    "SessionStore",
    "UserSession",
    "Snapshot",
    "SnapshotStore",
    "build_snapshot",
]
