"""
Struktury danych dla węzłów grafu: aksjomatów i argumentów.

Węzeł jest jawną unią oznaczoną (Axiom | Argument) rozróżnianą polem `kind`.
Rodzaj węzła nigdy nie jest wnioskowany z kształtu danych — tylko Argument
może nieść activation_conditions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from .common import CategoryId, Difficulty, NodeId, NodeKind
from .conditions import ActivationConditions


# ---------------------------------------------------------------------------
# Metadane
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class AxiomMetadata:
    """
    Metadane aksjomatu.

    - acceptability: 0..1, jak powszechnie aksjomat jest przyjmowany
    """
    difficulty:    Difficulty | None = None
    source:        str | None = None
    attribution:   tuple[str, ...] = ()
    tags:          tuple[str, ...] = ()
    acceptability: float | None = None


@dataclass(frozen=True, slots=True)
class ArgumentMetadata:
    """
    Metadane argumentu.

    - strength:    0..1, jak przekonujący jest argument
    - controversy: 0..1, jak bardzo jest sporny
    """
    difficulty:  Difficulty | None = None
    source:      str | None = None
    attribution: tuple[str, ...] = ()
    tags:        tuple[str, ...] = ()
    strength:    float | None = None
    controversy: float | None = None


# ---------------------------------------------------------------------------
# Axiom
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Axiom:
    """Zdanie bazowe — wejście silnika, bez warunków aktywacji."""
    kind: ClassVar[NodeKind] = NodeKind.AXIOM

    id:          NodeId
    title:       str
    description: str
    category:    CategoryId
    metadata:    AxiomMetadata = field(default_factory=AxiomMetadata)


# ---------------------------------------------------------------------------
# Argument
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Argument:
    """
    Twierdzenie pochodne.

    - level:                 zgrubny wskaźnik głębokości (tylko informacyjnie)
    - dependencies:          identyfikatory do dokumentacji (nie wpływają na aktywację)
    - activation_conditions: None → argument nigdy nie jest aktywny
    """
    kind: ClassVar[NodeKind] = NodeKind.ARGUMENT

    id:                    NodeId
    title:                 str
    description:           str
    conclusion:            str
    category:              CategoryId
    level:                 int = 1
    dependencies:          tuple[NodeId, ...] = ()
    activation_conditions: ActivationConditions | None = None
    metadata:              ArgumentMetadata = field(default_factory=ArgumentMetadata)


type Node = Axiom | Argument
