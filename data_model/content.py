"""
data_model/content.py — treści pomocnicze: kategorie, źródła, kwestionariusz.

Żadna z tych struktur nie wpływa na silnik aktywacji — służą prezentacji
i wstępnemu wyborowi aksjomatów.
"""

from __future__ import annotations

from dataclasses import dataclass

from .common import CategoryId, NodeId


@dataclass(frozen=True, slots=True)
class Category:
    id:          CategoryId
    name:        str
    color:       str          # np. "#EF4444"
    description: str | None = None


@dataclass(frozen=True, slots=True)
class Source:
    """Tradycja lub autor, do którego odwołują się metadane węzłów."""
    id:          str
    name:        str
    period:      str | None = None
    tradition:   str | None = None
    key_works:   tuple[str, ...] = ()
    perspective: str | None = None
    description: str | None = None
    key_figures: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class QuestionnaireItem:
    axiom_id:    NodeId       # aksjomat przyjmowany przy odpowiedzi "tak"
    question:    str
    category:    CategoryId
    explanation: str | None = None
