import dataclasses

import pytest

from conftest import make_argument, make_axiom, make_graph
from data_model import ActivationConditions
from solver import ActivationEvaluator, Engine, compute_valid_arguments


# ---------------------------------------------------------------------------
# Scenariusze podstawowe
# ---------------------------------------------------------------------------

def test_required_axiom_activates_argument():
    args = [make_argument("G1", required_axioms=["A1"])]
    assert compute_valid_arguments(args, {"A1"}) == {"G1"}


def test_required_argument_chain(chain_graph):
    engine = Engine(chain_graph)
    assert engine.compute_valid_arguments({"A1"}) >= {"G1", "G2"}
    assert engine.compute_valid_arguments(set()) == frozenset()


def test_self_cycle_never_activates(chain_graph):
    engine = Engine(chain_graph)
    for accepted in (set(), {"A1"}, {"A2"}, {"A1", "A2"}):
        assert "G3" not in engine.compute_valid_arguments(accepted)


def test_forbidden_axiom_blocks(chain_graph):
    engine = Engine(chain_graph)
    assert "G4" not in engine.compute_valid_arguments({"A1", "A2"})
    assert "G4" in engine.compute_valid_arguments({"A1"})


def test_exact_result_for_chain(chain_graph):
    assert Engine(chain_graph).compute_valid_arguments({"A1"}) == {"G1", "G2", "G4"}


# ---------------------------------------------------------------------------
# Własności
# ---------------------------------------------------------------------------

def test_idempotent(chain_graph):
    engine = Engine(chain_graph)
    assert engine.compute_valid_arguments({"A1"}) == engine.compute_valid_arguments({"A1"})


def test_monotonic_without_forbidden_conditions():
    args = [
        make_argument("G1", required_axioms=["A1"]),
        make_argument("G2", required_axioms=["A2"]),
        make_argument("G3", required_arguments=["G1", "G2"]),
        make_argument("G4", required_axioms=["A1"], required_arguments=["G1"]),
    ]
    smaller = compute_valid_arguments(args, {"A1"})
    larger  = compute_valid_arguments(args, {"A1", "A2"})
    assert smaller == {"G1", "G4"}
    assert smaller <= larger
    assert larger == {"G1", "G2", "G3", "G4"}


def test_monotonicity_can_fail_with_forbidden_axiom():
    args = [make_argument("G1", required_axioms=["A1"], forbidden_axioms=["A2"])]
    assert compute_valid_arguments(args, {"A1"}) == {"G1"}
    assert compute_valid_arguments(args, {"A1", "A2"}) == frozenset()


def test_monotonicity_can_fail_with_forbidden_argument():
    args = [
        make_argument("G2", required_axioms=["A2"]),
        make_argument("G1", required_axioms=["A1"], forbidden_arguments=["G2"]),
    ]
    assert "G1" in compute_valid_arguments(args, {"A1"})
    assert "G1" not in compute_valid_arguments(args, {"A1", "A2"})


def test_forbidden_argument_depends_on_order_within_pass():
    # G2 staje się ważny w tym samym przebiegu; wcześniejszy G1 już wszedł
    g1 = make_argument("G1", required_axioms=["A1"], forbidden_arguments=["G2"])
    g2 = make_argument("G2", required_axioms=["A1"])
    assert compute_valid_arguments([g1, g2], {"A1"}) == {"G1", "G2"}
    assert compute_valid_arguments([g2, g1], {"A1"}) == {"G2"}


def test_no_conditions_never_valid():
    args = [
        make_argument("G1", conditions=False),
        make_argument("G2", required_arguments=["G1"]),
    ]
    for accepted in (set(), {"A1"}, {"A1", "A2", "A3"}):
        assert compute_valid_arguments(args, accepted) == frozenset()


def test_empty_conditions_always_valid():
    args = [make_argument("G1")]
    assert compute_valid_arguments(args, set()) == {"G1"}


def test_unknown_required_argument_is_unsatisfiable():
    args = [make_argument("G1", required_arguments=["missing"])]
    assert compute_valid_arguments(args, {"A1"}) == frozenset()


def test_unknown_axiom_in_accepted_set_is_ignored():
    args = [make_argument("G1", required_axioms=["A1"])]
    assert compute_valid_arguments(args, {"A1", "nope"}) == {"G1"}


def test_two_node_cycle_never_activates():
    args = [
        make_argument("G1", required_axioms=["A1"], required_arguments=["G2"]),
        make_argument("G2", required_axioms=["A1"], required_arguments=["G1"]),
    ]
    assert compute_valid_arguments(args, {"A1"}) == frozenset()


def test_long_cycle_terminates_without_recursion_error():
    n = 2000
    args = [
        make_argument(f"G{i}", required_arguments=[f"G{(i + 1) % n}"])
        for i in range(n)
    ]
    ev = ActivationEvaluator({a.id: a for a in args})
    assert ev.can_activate(args[0], frozenset(), frozenset()) is False


def test_deep_chain_activates_without_recursion_error():
    n = 2000
    args = [make_argument("G0", required_axioms=["A1"])]
    args += [make_argument(f"G{i}", required_arguments=[f"G{i - 1}"]) for i in range(1, n)]
    ev = ActivationEvaluator({a.id: a for a in args})
    assert ev.can_activate(args[-1], frozenset({"A1"}), frozenset()) is True
    assert ev.can_activate(args[-1], frozenset(), frozenset()) is False


def test_reverse_ordered_chain_reaches_fixed_point():
    # kolejność odwrotna do zależności: rekurencyjne sprawdzenie dociera do źródła
    args = [
        make_argument("G3", required_arguments=["G2"]),
        make_argument("G2", required_arguments=["G1"]),
        make_argument("G1", required_axioms=["A1"]),
    ]
    assert compute_valid_arguments(args, {"A1"}) == {"G1", "G2", "G3"}


def test_inputs_not_mutated():
    args = [make_argument("G1", required_axioms=["A1"])]
    accepted = {"A1"}
    compute_valid_arguments(args, accepted)
    assert accepted == {"A1"}
    assert len(args) == 1


def test_visiting_guard_not_shared_between_calls():
    g1 = make_argument("G1", required_axioms=["A1"])
    g2 = make_argument("G2", required_arguments=["G1"])
    ev = ActivationEvaluator({"G1": g1, "G2": g2})
    visiting = frozenset()
    assert ev.can_activate(g2, frozenset({"A1"}), frozenset(), visiting)
    assert ev.can_activate(g2, frozenset({"A1"}), frozenset(), visiting)
    assert visiting == frozenset()


def test_visiting_member_is_rejected():
    g1 = make_argument("G1", required_axioms=["A1"])
    ev = ActivationEvaluator({"G1": g1})
    assert ev.can_activate(g1, frozenset({"A1"}), frozenset(), visiting={"G1"}) is False


def test_duplicate_argument_first_wins():
    first  = make_argument("G1", required_axioms=["A1"])
    second = dataclasses.replace(first, activation_conditions=ActivationConditions(
        required_axioms=frozenset({"A2"})
    ))
    assert compute_valid_arguments([first, second], {"A1"}) == {"G1"}
    assert compute_valid_arguments([first, second], {"A2"}) == frozenset()


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

def test_trace_records_passes():
    graph = make_graph(
        axioms=[make_axiom("A1")],
        arguments=[
            make_argument("G2", required_arguments=["G1"], forbidden_arguments=["G9"]),
            make_argument("G1", required_axioms=["A1"]),
        ],
    )
    trace = Engine(graph).trace({"A1"})
    assert trace.valid == {"G1", "G2"}
    assert trace.passes == {"G2": 1, "G1": 1}
    assert trace.rounds == 2
    assert trace.by_pass() == {1: ["G1", "G2"]}


def test_engine_can_activate_by_id(chain_graph):
    engine = Engine(chain_graph)
    assert engine.can_activate("G1", {"A1"})
    assert not engine.can_activate("G2", set())
    assert engine.can_activate("G2", set(), valid_so_far={"G1"})
    assert not engine.can_activate("unknown", {"A1"})


def test_none_inputs_raise_type_error(chain_graph):
    with pytest.raises(TypeError):
        Engine(None)
    with pytest.raises(TypeError):
        compute_valid_arguments(None, set())
    with pytest.raises(TypeError):
        compute_valid_arguments([], None)
    with pytest.raises(TypeError):
        Engine(chain_graph).compute_valid_arguments(None)
    with pytest.raises(TypeError):
        ActivationEvaluator(None)
