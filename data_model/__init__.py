"""
data_model — struktury danych modelu philsaxioms.

Użycie:
  from data_model import Axiom, Argument, ActivationConditions, Edge, ...

Moduły:
  common     — NodeId, CategoryId, NodeKind, Difficulty, Direction
  conditions — ActivationConditions
  nodes      — Axiom, Argument, Node, AxiomMetadata, ArgumentMetadata
  relations  — RelationType, LogicalRelation, Edge
  content    — Category, Source, QuestionnaireItem

Wszystkie struktury są niezmienne (frozen) — graf wczytany raz nie jest
modyfikowany w trakcie życia danego wczytania treści.
"""

from .common import (
    NodeId,
    CategoryId,
    NodeKind,
    Difficulty,
    Direction,
)
from .conditions import ActivationConditions
from .nodes import (
    AxiomMetadata,
    ArgumentMetadata,
    Axiom,
    Argument,
    Node,
)
from .relations import (
    RelationType,
    LogicalRelation,
    Edge,
)
from .content import (
    Category,
    Source,
    QuestionnaireItem,
)

__all__ = [
    # common
    "NodeId",
    "CategoryId",
    "NodeKind",
    "Difficulty",
    "Direction",
    # conditions
    "ActivationConditions",
    # nodes
    "AxiomMetadata",
    "ArgumentMetadata",
    "Axiom",
    "Argument",
    "Node",
    # relations
    "RelationType",
    "LogicalRelation",
    "Edge",
    # content
    "Category",
    "Source",
    "QuestionnaireItem",
]
