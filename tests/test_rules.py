# Copyright 2018-2025 Xanadu Quantum Technologies Inc.

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""
Unit tests for the rewrite rule matchers and the graph rewrites behind them.
"""
import numpy as np
import pytest
from simulation import circuit_unitary, equal_up_to_phase, random_circuit

from paulisynth import CNOT, CZ, RX, RZ, Circuit, H, S, T, Tdg, X
from paulisynth.exceptions import ConfigurationError
from paulisynth.transforms import (
    RULES,
    PhaseGadget,
    Replacement,
    RewriteContext,
    RuleKind,
    fusion_groups,
    phase_gadget_graph,
    synthesize_parity,
)
from paulisynth.transforms.graph_rewrite import cnot_block, gaussian_elimination, parity_matrix
from paulisynth.transforms.rules import (
    match_adjacent_cancellation,
    match_commute_and_cancel,
    match_pivot,
    match_rotation_merge,
    match_spider_fusion,
)


def apply(circuit, replacement):
    edited = circuit.copy()
    edited.replace(replacement.removed, replacement.inserted, replacement.at)
    return edited


def assert_sound(circuit, replacement):
    """The replacement leaves the unitary unchanged up to a global phase."""
    edited = apply(circuit, replacement)
    assert equal_up_to_phase(circuit_unitary(edited), circuit_unitary(circuit))


def random_cnots(num_qubits, count, seed):
    rng = np.random.default_rng(seed)
    cnots = []
    for _ in range(count):
        c, t = rng.choice(num_qubits, size=2, replace=False)
        cnots.append(CNOT(int(c), int(t)))
    return cnots


@pytest.fixture
def context():
    return RewriteContext()


class TestRuleKind:
    """Tests for rule names."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("pivot", RuleKind.PIVOT),
            ("PIVOT", RuleKind.PIVOT),
            ("spider-fusion", RuleKind.SPIDER_FUSION),
            ("Spider Fusion", RuleKind.SPIDER_FUSION),
            (RuleKind.ROTATION_MERGE, RuleKind.ROTATION_MERGE),
        ],
    )
    def test_coerce(self, name, expected):
        assert RuleKind.coerce(name) is expected

    def test_unknown(self):
        with pytest.raises(ConfigurationError, match="Unknown rewrite rule"):
            RuleKind.coerce("peephole")

    def test_every_rule_has_a_matcher(self):
        assert set(RULES) == set(RuleKind)


class TestRewriteContext:
    """Tests for the analysis cache."""

    def test_cached_and_invalidate(self):
        ctx = RewriteContext()
        calls = []

        def compute():
            calls.append(1)
            return len(calls)

        assert ctx.cached("key", compute) == 1
        assert ctx.cached("key", compute) == 1
        ctx.invalidate()
        assert ctx.cached("key", compute) == 2


class TestAdjacentCancellation:
    """Tests for match_adjacent_cancellation."""

    @pytest.mark.parametrize(
        "gates",
        [[H(0), H(0)], [CNOT(0, 1), CNOT(0, 1)], [CZ(0, 1), CZ(1, 0)], [T(1), Tdg(1)]],
    )
    def test_cancels(self, gates, context):
        circuit = Circuit(2, gates)
        rep = match_adjacent_cancellation(circuit, 0, context)
        assert rep == Replacement((0, 1), (), 0, RuleKind.ADJACENT_CANCELLATION)
        assert len(apply(circuit, rep)) == 0
        assert_sound(circuit, rep)

    def test_skips_gates_on_other_qubits(self, context):
        circuit = Circuit(2, [H(0), X(1), H(0)])
        assert match_adjacent_cancellation(circuit, 0, context).removed == (0, 2)

    def test_gate_in_between(self, context):
        circuit = Circuit(2, [CNOT(0, 1), H(1), CNOT(0, 1)])
        assert match_adjacent_cancellation(circuit, 0, context) is None

    def test_different_operands(self, context):
        circuit = Circuit(2, [CNOT(0, 1), CNOT(1, 0)])
        assert match_adjacent_cancellation(circuit, 0, context) is None

    def test_last_gate(self, context):
        assert match_adjacent_cancellation(Circuit(1, [H(0)]), 0, context) is None


class TestRotationMerge:
    """Tests for match_rotation_merge."""

    def test_merge(self, context):
        circuit = Circuit(1, [RZ(0, 0.3), RZ(0, 0.4)])
        rep = match_rotation_merge(circuit, 0, context)
        assert rep.removed == (0, 1)
        assert len(rep.inserted) == 1
        assert rep.inserted[0].angle == pytest.approx(0.7)
        assert_sound(circuit, rep)

    @pytest.mark.parametrize(
        "gates, expected",
        [([T(0), T(0)], [S(0)]), ([T(0), Tdg(0)], [])],
    )
    def test_named_results(self, gates, expected, context):
        circuit = Circuit(1, gates)
        rep = match_rotation_merge(circuit, 0, context)
        assert list(rep.inserted) == expected

    def test_merge_to_half_turn(self, context):
        circuit = Circuit(1, [S(0), S(0)])
        rep = match_rotation_merge(circuit, 0, context)
        assert [g.name.value for g in rep.inserted] == ["Z"]
        assert_sound(circuit, rep)

    def test_tolerance(self):
        circuit = Circuit(1, [RZ(0, 0.3), RZ(0, -0.3 + 1e-6)])
        assert match_rotation_merge(circuit, 0, RewriteContext(atol=1e-9)).inserted != ()
        assert match_rotation_merge(circuit, 0, RewriteContext(atol=1e-5)).inserted == ()

    @pytest.mark.parametrize("gates", [[RZ(0, 0.3), RX(0, 0.3)], [H(0), H(0)], [RZ(0, 0.3)]])
    def test_no_match(self, gates, context):
        assert match_rotation_merge(Circuit(1, gates), 0, context) is None


class TestCommuteAndCancel:
    """Tests for match_commute_and_cancel."""

    def test_cancel_through_rotation(self, context):
        circuit = Circuit(2, [CNOT(0, 1), RZ(0, 0.3), CNOT(0, 1)])
        rep = match_commute_and_cancel(circuit, 0, context)
        assert rep == Replacement((0, 2), (), 0, RuleKind.COMMUTE_AND_CANCEL)
        assert_sound(circuit, rep)

    def test_merge_through_cnot(self, context):
        circuit = Circuit(2, [RZ(0, 0.3), CNOT(0, 1), RZ(0, 0.2)])
        rep = match_commute_and_cancel(circuit, 0, context)
        assert rep.removed == (0, 2)
        assert rep.inserted[0].angle == pytest.approx(0.5)
        assert_sound(circuit, rep)

    def test_cancel_through_cnot_targets(self, context):
        circuit = Circuit(3, [CNOT(0, 2), CNOT(1, 2), RX(2, 0.1), CNOT(0, 2)])
        rep = match_commute_and_cancel(circuit, 0, context)
        assert rep.removed == (0, 3)
        assert_sound(circuit, rep)

    def test_blocked(self, context):
        circuit = Circuit(2, [CNOT(0, 1), H(0), CNOT(0, 1)])
        assert match_commute_and_cancel(circuit, 0, context) is None

    def test_window(self):
        circuit = Circuit(2, [CNOT(0, 1), RZ(0, 0.3), CNOT(0, 1)])
        assert match_commute_and_cancel(circuit, 0, RewriteContext(window=1)) is None
        assert match_commute_and_cancel(circuit, 0, RewriteContext(window=2)) is not None


class TestSpiderFusion:
    """Tests for match_spider_fusion and the phase-gadget graph."""

    def test_fuse_through_cnots(self, context):
        circuit = Circuit(2, [RZ(1, 0.1), CNOT(0, 1), RZ(1, 0.5), CNOT(0, 1), RZ(1, 0.2)])
        rep = match_spider_fusion(circuit, 0, context)
        assert rep.removed == (0, 4)
        assert rep.inserted[0].qubits == (1,)
        assert rep.inserted[0].angle == pytest.approx(0.3)
        assert_sound(circuit, rep)

    def test_fuse_distinct_wires(self, context):
        """A rotation on qubit 1 fuses with one on qubit 0 carrying the same parity."""
        circuit = Circuit(2, [CNOT(0, 1), T(1), CNOT(0, 1), CNOT(1, 0), T(0)])
        groups = fusion_groups(circuit)
        assert list(groups) == [1]
        rep = match_spider_fusion(circuit, 1, context)
        assert rep.removed == (1, 4)
        assert [g.name.value for g in rep.inserted] == ["S"]
        assert_sound(circuit, rep)

    def test_flipped_parity(self, context):
        circuit = Circuit(1, [RZ(0, 0.3), X(0), RZ(0, 0.3)])
        rep = match_spider_fusion(circuit, 0, context)
        assert rep.removed == (0, 2)
        assert rep.inserted == ()
        assert_sound(circuit, rep)

    def test_hadamard_separates(self, context):
        circuit = Circuit(1, [RZ(0, 0.1), H(0), RZ(0, 0.2)])
        assert match_spider_fusion(circuit, 0, context) is None

    def test_only_first_gadget_matches(self, context):
        circuit = Circuit(2, [T(0), CNOT(0, 1), T(0)])
        assert match_spider_fusion(circuit, 2, context) is None
        assert match_spider_fusion(circuit, 0, context).removed == (0, 2)

    def test_gadget_graph(self):
        c = Circuit(2, [RZ(1, 0.1), CNOT(0, 1), CNOT(0, 1), RZ(1, 0.2)])
        graph, gadgets = phase_gadget_graph(c)
        assert [sorted(graph.neighbors(g)) for g in gadgets] == [[1], [1]]
        assert graph[gadgets[1]] == PhaseGadget(3, 1, 0.2, False)

    def test_gadget_graph_parity(self):
        c = Circuit(2, [CNOT(0, 1), RZ(1, 0.1), H(0), S(0)])
        graph, gadgets = phase_gadget_graph(c)
        assert sorted(graph.neighbors(gadgets[0])) == [0, 1]
        # the Hadamard opens a fresh path variable on qubit 0
        assert sorted(graph.neighbors(gadgets[1])) == [3]
        assert graph.num_nodes() == 5

    @pytest.mark.parametrize("seed", range(6))
    def test_random_circuits_sound(self, seed, context):
        circuit = random_circuit(3, 30, seed=seed)
        for pos in fusion_groups(circuit):
            assert_sound(circuit, match_spider_fusion(circuit, pos, RewriteContext()))


class TestPivot:
    """Tests for match_pivot and the parity resynthesis."""

    def test_chain(self, context):
        circuit = Circuit(3, [CNOT(0, 1), CNOT(1, 2), CNOT(0, 1)])
        rep = match_pivot(circuit, 0, context)
        assert rep == Replacement((0, 1, 2), (CNOT(1, 2), CNOT(0, 2)), 0, RuleKind.PIVOT)
        assert_sound(circuit, rep)

    def test_swap_is_optimal(self, context):
        circuit = Circuit(2, [CNOT(0, 1), CNOT(1, 0), CNOT(0, 1)])
        assert match_pivot(circuit, 0, context) is None

    def test_gathers_past_other_qubits(self, context):
        circuit = Circuit(3, [CNOT(0, 1), H(2), CNOT(0, 1)])
        rep = match_pivot(circuit, 0, context)
        assert rep.removed == (0, 2)
        assert rep.inserted == ()
        assert_sound(circuit, rep)

    def test_blocked(self, context):
        circuit = Circuit(3, [CNOT(0, 1), H(1), CNOT(1, 2), CNOT(0, 1)])
        assert match_pivot(circuit, 0, context) is None

    def test_not_a_cnot(self, context):
        assert match_pivot(Circuit(1, [H(0)]), 0, context) is None

    def test_cnot_block(self):
        circuit = Circuit(3, [CNOT(0, 1), H(2), CNOT(0, 1), CNOT(1, 2), CNOT(1, 0)])
        assert cnot_block(circuit, 0, 10) == [0, 2]
        assert cnot_block(circuit, 0, 1) == [0]

    def test_parity_matrix(self):
        matrix = parity_matrix([CNOT(0, 1), CNOT(1, 2)], [0, 1, 2])
        assert np.array_equal(matrix, [[1, 0, 0], [1, 1, 0], [1, 1, 1]])

    @pytest.mark.parametrize("seed", range(8))
    def test_gaussian_elimination(self, seed):
        qubits = [0, 1, 2, 3]
        matrix = parity_matrix(random_cnots(4, 12, seed), qubits)
        m = matrix.copy()
        for target, source in gaussian_elimination(matrix):
            m[target] ^= m[source]
        assert np.array_equal(m, np.eye(4, dtype=np.uint8))

    @pytest.mark.parametrize("seed", range(8))
    def test_synthesize_parity(self, seed):
        qubits = [1, 3, 4]
        matrix = parity_matrix(random_cnots(3, 10, seed), [0, 1, 2])
        cnots = synthesize_parity(matrix, qubits)
        assert all(q in qubits for g in cnots for q in g.qubits)
        assert np.array_equal(parity_matrix(cnots, qubits), matrix)
