"""
Struktury danych dla warunków aktywacji argumentu (activation_conditions).

Mapowanie na format treści:
  activation_conditions:
    required_axioms:     [id, ...]   — wszystkie muszą być przyjęte
    forbidden_axioms:    [id, ...]   — żaden nie może być przyjęty
    required_arguments:  [id, ...]   — wszystkie muszą być ważne (lub aktywowalne)
    forbidden_arguments: [id, ...]   — żaden nie może być ważny

Brak struktury activation_conditions na argumencie oznacza, że argumentu
nie da się aktywować (nie jest to błąd treści).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .common import NodeId


# ---------------------------------------------------------------------------
# ActivationConditions
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ActivationConditions:
    """
    Koniunkcyjny zestaw warunków aktywacji argumentu.

    Każde pole jest frozenset — pusty zbiór oznacza brak ograniczenia
    danego rodzaju.
    """
    required_axioms:     frozenset[NodeId] = field(default_factory=frozenset)
    forbidden_axioms:    frozenset[NodeId] = field(default_factory=frozenset)
    required_arguments:  frozenset[NodeId] = field(default_factory=frozenset)
    forbidden_arguments: frozenset[NodeId] = field(default_factory=frozenset)

    def referenced_ids(self) -> frozenset[NodeId]:
        """Wszystkie identyfikatory występujące w warunkach."""
        return (
            self.required_axioms
            | self.forbidden_axioms
            | self.required_arguments
            | self.forbidden_arguments
        )

    def contradictions(self) -> frozenset[NodeId]:
        """Identyfikatory jednocześnie wymagane i zakazane."""
        return (
            (self.required_axioms & self.forbidden_axioms)
            | (self.required_arguments & self.forbidden_arguments)
        )

    def without_forbidden(self) -> ActivationConditions:
        """Kopia bez warunków negatywnych (relaksacja używana przez walidator)."""
        return ActivationConditions(
            required_axioms=self.required_axioms,
            required_arguments=self.required_arguments,
        )

    def to_dict(self) -> dict[str, list[NodeId]]:
        """Postać słownikowa z posortowanymi listami (pomija puste zbiory)."""
        out: dict[str, list[NodeId]] = {}
        for key in (
            "required_axioms",
            "forbidden_axioms",
            "required_arguments",
            "forbidden_arguments",
        ):
            ids = getattr(self, key)
            if ids:
                out[key] = sorted(ids)
        return out
