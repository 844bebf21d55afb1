"""
Struktury danych dla relacji logicznych (krawędzi) między węzłami.

Krawędzie są dokumentacyjne: służą eksploracji i wyjaśnieniom, nie biorą
udziału w obliczaniu aktywacji argumentów.

Mapowanie na format treści (edges/*.yaml):
  id, fromNode, toNode, fromType, toType,
  relation: {type, strength, bidirectional}, explanation, metadata
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from .common import Difficulty, NodeId, NodeKind


class RelationType(StrEnum):
    """Typ relacji logicznej."""
    IMPLIES     = "implies"
    CONTRADICTS = "contradicts"
    SUPPORTS    = "supports"
    REQUIRES    = "requires"
    ASSUMES     = "assumes"


@dataclass(frozen=True, slots=True)
class LogicalRelation:
    """
    Typ i siła relacji.

    - strength:      0..1, siła powiązania logicznego
    - bidirectional: relacja obowiązuje w obie strony (tylko informacyjnie)
    """
    type:          RelationType
    strength:      float = 1.0
    bidirectional: bool = False


@dataclass(frozen=True, slots=True)
class Edge:
    """
    Skierowana krawędź from_node → to_node.

    from_type / to_type są None gdy treść ich nie podała, a identyfikator
    nie odpowiada żadnemu znanemu węzłowi (walidator zgłasza to jako błąd).
    """
    id:          str
    from_node:   NodeId
    to_node:     NodeId
    from_type:   NodeKind | None
    to_type:     NodeKind | None
    relation:    LogicalRelation
    explanation: str = ""
    difficulty:  Difficulty | None = None
    source:      str | None = None

    def __str__(self) -> str:
        return f"{self.from_node} --{self.relation.type}--> {self.to_node}"

    @property
    def is_self_loop(self) -> bool:
        return self.from_node == self.to_node
