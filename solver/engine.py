"""
solver/engine.py — silnik aktywacji argumentów: predykat + domknięcie (fixed-point).

Obsługuje:
  - warunki koniunkcyjne: required/forbidden axioms, required/forbidden arguments
  - rekurencyjne sprawdzanie required_arguments z ochroną przed cyklami
  - domknięcie bottom-up (naive fixed-point): przebiegi aż do braku zmian

Gwarancje:
  - Silnik jest czystą funkcją (graf, przyjęte aksjomaty) — nie modyfikuje
    wejściowych zbiorów i nie przechowuje stanu między wywołaniami.
  - Niespełnialne odwołania (nieznane id) degradują do "nieaktywny",
    nigdy nie podnoszą wyjątku.
  - Zbiór `visiting` jest niezmienny (frozenset, kopia przy zagłębieniu),
    a zagłębienia obsługuje jawny stos — długie łańcuchy required_arguments
    nie wyczerpują stosu interpretera.
"""

from __future__ import annotations

from typing import AbstractSet, Generator, Iterable, Mapping

from data_model import Argument, NodeId

from .graph import GraphModel
from .types import ClosureTrace

# Ramka sprawdzenia: wysyła (argument, visiting) do sprawdzenia, odbiera bool
_Check = Generator[tuple[Argument, frozenset[NodeId]], bool, bool]


# ---------------------------------------------------------------------------
# Ewaluator warunków aktywacji
# ---------------------------------------------------------------------------

class ActivationEvaluator:
    """
    Rozstrzyga, czy pojedynczy argument może zostać aktywowany.

    Użycie::

        ev = ActivationEvaluator(graph.arguments_by_id)
        ev.can_activate(arg, accepted_axioms={"a1"}, valid_so_far=set())
    """

    def __init__(self, arguments: Mapping[NodeId, Argument]) -> None:
        if arguments is None:
            raise TypeError("ActivationEvaluator wymaga słownika argumentów, otrzymano None.")
        self._arguments = arguments

    def can_activate(
        self,
        argument:        Argument,
        accepted_axioms: AbstractSet[NodeId],
        valid_so_far:    AbstractSet[NodeId],
        visiting:        Iterable[NodeId] = frozenset(),
    ) -> bool:
        """
        Zwraca True gdy wszystkie warunki aktywacji argumentu są spełnione.

        Args:
            argument:        sprawdzany argument
            accepted_axioms: identyfikatory przyjętych aksjomatów
            valid_so_far:    argumenty już uznane za ważne w tym domknięciu
            visiting:        argumenty w bieżącym łańcuchu sprawdzania (ochrona przed cyklem)

        Returns:
            True tylko gdy przejdą wszystkie warunki; brak activation_conditions → False.
        """
        stack: list[_Check] = [
            self._check(argument, accepted_axioms, valid_so_far, frozenset(visiting))
        ]
        result: bool | None = None

        while stack:
            frame = stack[-1]
            try:
                request = next(frame) if result is None else frame.send(result)
            except StopIteration as stop:
                stack.pop()
                result = bool(stop.value)
                continue
            result = None
            required, inner_visiting = request
            stack.append(self._check(required, accepted_axioms, valid_so_far, inner_visiting))

        return bool(result)

    def _check(
        self,
        argument:        Argument,
        accepted_axioms: AbstractSet[NodeId],
        valid_so_far:    AbstractSet[NodeId],
        visiting:        frozenset[NodeId],
    ) -> _Check:
        """
        Jedna ramka sprawdzenia. Zagłębienie w required_arguments zwraca
        (yield) żądanie sprawdzenia i otrzymuje wynik przez send().
        """
        if argument.id in visiting:
            return False  # cykl: argument nie może spełnić sam siebie

        conditions = argument.activation_conditions
        if conditions is None:
            return False

        if not conditions.required_axioms.issubset(accepted_axioms):
            return False
        if not conditions.forbidden_axioms.isdisjoint(accepted_axioms):
            return False
        # warunek negatywny przed zagłębieniem w required_arguments
        if not conditions.forbidden_arguments.isdisjoint(valid_so_far):
            return False

        inner = visiting | {argument.id}
        for required_id in sorted(conditions.required_arguments):
            if required_id in valid_so_far:
                continue
            required = self._arguments.get(required_id)
            if required is None:
                return False  # nieznane id: warunek niespełnialny
            ok = yield required, inner
            if not ok:
                return False

        return True


# ---------------------------------------------------------------------------
# Domknięcie (least fixed point)
# ---------------------------------------------------------------------------

def _closure(
    evaluator:       ActivationEvaluator,
    arguments:       Iterable[Argument],
    accepted_axioms: AbstractSet[NodeId],
) -> ClosureTrace:
    """
    Przebiegi po wszystkich jeszcze nieważnych argumentach aż do przebiegu,
    który niczego nie doda. Argument dodany w danym przebiegu jest od razu
    widoczny dla kolejnych argumentów tego samego przebiegu.
    """
    ordered = list(arguments)
    valid:  set[NodeId]      = set()
    passes: dict[NodeId, int] = {}
    rounds  = 0
    changed = True

    while changed:
        changed = False
        rounds += 1
        for argument in ordered:
            if argument.id in valid:
                continue
            if evaluator.can_activate(argument, accepted_axioms, valid):
                valid.add(argument.id)
                passes[argument.id] = rounds
                changed = True

    return ClosureTrace(valid=frozenset(valid), passes=passes, rounds=rounds)


def compute_valid_arguments(
    arguments:       Iterable[Argument],
    accepted_axioms: Iterable[NodeId],
) -> frozenset[NodeId]:
    """
    Oblicza maksymalny zbiór ważnych argumentów dla przyjętych aksjomatów.

    Args:
        arguments:       wszystkie argumenty grafu
        accepted_axioms: identyfikatory przyjętych aksjomatów (może być pusty)

    Returns:
        frozenset identyfikatorów ważnych argumentów.
    """
    if arguments is None:
        raise TypeError("compute_valid_arguments wymaga kolekcji argumentów, otrzymano None.")
    if accepted_axioms is None:
        raise TypeError("compute_valid_arguments wymaga zbioru aksjomatów, otrzymano None.")

    ordered = list(arguments)
    by_id: dict[NodeId, Argument] = {}
    for argument in ordered:
        by_id.setdefault(argument.id, argument)

    evaluator = ActivationEvaluator(by_id)
    return _closure(evaluator, by_id.values(), frozenset(accepted_axioms)).valid


# ---------------------------------------------------------------------------
# Engine: silnik związany z konkretnym grafem
# ---------------------------------------------------------------------------

class Engine:
    """
    Silnik aktywacji dla jednego, niezmiennego GraphModel.

    Użycie::

        engine = Engine(graph)
        valid  = engine.compute_valid_arguments({"a1", "a2"})
        trace  = engine.trace({"a1"})
    """

    def __init__(self, graph: GraphModel) -> None:
        if graph is None:
            raise TypeError("Engine wymaga GraphModel, otrzymano None.")
        self._graph     = graph
        self._evaluator = ActivationEvaluator(graph.arguments_by_id)

    @property
    def graph(self) -> GraphModel:
        return self._graph

    @property
    def evaluator(self) -> ActivationEvaluator:
        return self._evaluator

    def compute_valid_arguments(self, accepted_axioms: Iterable[NodeId]) -> frozenset[NodeId]:
        """Zbiór ważnych argumentów dla przyjętych aksjomatów."""
        return self.trace(accepted_axioms).valid

    def trace(self, accepted_axioms: Iterable[NodeId]) -> ClosureTrace:
        """Domknięcie wraz z numerem przebiegu dla każdego ważnego argumentu."""
        if accepted_axioms is None:
            raise TypeError("Engine.trace wymaga zbioru aksjomatów, otrzymano None.")
        return _closure(self._evaluator, self._graph.arguments, frozenset(accepted_axioms))

    def can_activate(
        self,
        argument_id:     NodeId,
        accepted_axioms: Iterable[NodeId],
        valid_so_far:    Iterable[NodeId] = frozenset(),
    ) -> bool:
        """Predykat dla argumentu o podanym id; nieznane id → False."""
        argument = self._graph.argument(argument_id)
        if argument is None:
            return False
        return self._evaluator.can_activate(
            argument, frozenset(accepted_axioms), frozenset(valid_so_far)
        )
