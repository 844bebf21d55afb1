"""
Wspólne typy pierwotne używane przez conditions, nodes i relations.

Mapowanie na format treści (YAML / graph-data.json):
  id węzła        → NodeId
  fromType/toType → NodeKind
  metadata.difficulty → Difficulty
"""

from __future__ import annotations

from enum import StrEnum

# ---------------------------------------------------------------------------
# Aliasy typów
# ---------------------------------------------------------------------------

# Identyfikator aksjomatu lub argumentu, np. "free-will" lub "arg-determinism-1"
type NodeId = str

# Identyfikator kategorii, np. "ethics"
type CategoryId = str


# ---------------------------------------------------------------------------
# Enumeracje
# ---------------------------------------------------------------------------

class NodeKind(StrEnum):
    """
    Rodzaj węzła grafu.
    - AXIOM:    zdanie bazowe, przyjmowane lub odrzucane wprost przez użytkownika
    - ARGUMENT: twierdzenie pochodne, aktywowane przez activation_conditions
    """
    AXIOM    = "axiom"
    ARGUMENT = "argument"


class Difficulty(StrEnum):
    """Poziom trudności treści (tylko prezentacja)."""
    BASIC        = "basic"
    INTERMEDIATE = "intermediate"
    ADVANCED     = "advanced"


class Direction(StrEnum):
    """Kierunek połączenia względem węzła, o który pytamy."""
    INCOMING = "incoming"
    OUTGOING = "outgoing"
