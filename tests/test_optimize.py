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
Tests for the rewrite engine and the default optimization pipeline.
"""
import warnings

import numpy as np
import pytest
from simulation import circuit_unitary, equal_up_to_phase, random_circuit, redundant_circuit

from paulisynth import (
    CNOT,
    RZ,
    Circuit,
    CostModel,
    H,
    S,
    T,
    Tdg,
    X,
    full_optimize,
    optimize,
    pauli_network_synthesis,
)
from paulisynth.exceptions import ConfigurationError, ConvergenceWarning, InvalidGateError
from paulisynth.transforms import RULES, Replacement, RuleKind, default_pipeline

METRICS = ["gate_count", "depth", "t_count", "two_qubit_count"]


def assert_equivalent(a, b):
    assert equal_up_to_phase(circuit_unitary(a), circuit_unitary(b))


class TestOptimize:
    """Tests for the rewrite engine."""

    @pytest.mark.parametrize(
        "gates, expected",
        [
            ([H(0), H(0)], []),
            ([CNOT(0, 1), CNOT(0, 1)], []),
            ([RZ(0, 0.3), RZ(0, 0.7)], [("RZ", (0,), 1.0)]),
            ([T(0), T(0)], [("S", (0,), None)]),
            ([T(0), H(1), Tdg(0)], [("H", (1,), None)]),
            ([CNOT(0, 1), RZ(0, 0.2), CNOT(0, 1)], [("RZ", (0,), 0.2)]),
            ([H(0), CNOT(0, 1), CNOT(0, 1), H(0)], []),
        ],
    )
    def test_small_circuits(self, gates, expected):
        circuit = Circuit(2, gates)
        optimized = optimize(circuit)
        assert [g.to_tuple()[:2] for g in optimized] == [e[:2] for e in expected]
        for gate, (_, _, angle) in zip(optimized, expected):
            if angle is not None:
                assert gate.angle == pytest.approx(angle)
        assert_equivalent(optimized, circuit)
        assert optimized.converged is True

    def test_docstring_example(self):
        c = Circuit(2, [H(0), H(0), CNOT(0, 1), RZ(1, 0.3), RZ(1, 0.7)])
        optimized = optimize(c)
        assert optimized.to_list() == [("CNOT", (0, 1), None), ("RZ", (1,), 1.0)]
        assert optimized.converged is True
        assert optimized.cycles == 2

    def test_input_not_modified(self):
        c = Circuit(1, [H(0), H(0)])
        optimize(c)
        assert len(c) == 2
        assert c.converged is None

    def test_empty_circuit(self):
        optimized = optimize(Circuit(3))
        assert len(optimized) == 0
        assert optimized.converged is True
        assert optimized.cycles == 1

    def test_nested_cancellation(self):
        """Cancelling the inner pair exposes the outer one."""
        c = Circuit(2, [H(0), S(0), CNOT(0, 1), CNOT(0, 1), S(0).inverse(), H(0)])
        assert len(optimize(c)) == 0

    @pytest.mark.parametrize("metric", METRICS)
    @pytest.mark.parametrize("seed", range(5))
    def test_random_circuits(self, metric, seed):
        circuit = random_circuit(3, 40, seed=seed)
        optimized = optimize(circuit, cost=metric)
        assert_equivalent(optimized, circuit)
        model = CostModel(metric)
        assert model.cost(optimized) <= model.cost(circuit)
        assert len(optimized) <= len(circuit)

    @pytest.mark.parametrize("seed", range(5))
    def test_redundant_circuits(self, seed):
        circuit = redundant_circuit(3, 30, seed=seed)
        optimized = optimize(circuit)
        assert_equivalent(optimized, circuit)
        assert len(optimized) < len(circuit)
        assert sum(optimized.rewrite_stats.values()) > 0

    @pytest.mark.parametrize("seed", range(3))
    def test_idempotent(self, seed):
        once = optimize(redundant_circuit(3, 30, seed=seed))
        twice = optimize(once)
        assert twice.gates == once.gates
        assert twice.cycles == 1

    def test_rewrite_stats(self):
        c = Circuit(2, [H(0), H(0), RZ(1, 0.1), RZ(1, 0.2)])
        stats = optimize(c).rewrite_stats
        assert set(stats) == {k.value for k in RuleKind}
        assert stats["adjacent_cancellation"] == 1
        assert stats["rotation_merge"] == 1
        assert stats["pivot"] == 0

    def test_custom_passes(self):
        c = Circuit(2, [H(0), H(0), RZ(1, 0.1), RZ(1, 0.2)])
        optimized = optimize(c, passes=[["rotation_merge"]])
        assert [g.name.value for g in optimized] == ["H", "H", "RZ"]

    def test_single_rule_pass(self):
        c = Circuit(1, [H(0), H(0)])
        assert len(optimize(c, passes=["adjacent_cancellation"])) == 0

    def test_equal_length_rewrite_not_committed(self, monkeypatch):
        """A replacement that keeps the gate count is rejected even when it lowers the cost."""

        def t_to_s(circuit, pos, context):
            if circuit[pos] != T(0):
                return None
            return Replacement(removed=(pos,), inserted=(S(0),), at=pos, kind=RuleKind.PIVOT)

        monkeypatch.setitem(RULES, RuleKind.PIVOT, t_to_s)
        optimized = optimize(Circuit(1, [T(0)]), passes=["pivot"], cost="t_count")
        assert optimized.to_list() == [("T", (0,), None)]
        assert optimized.converged

    def test_unknown_rule(self):
        with pytest.raises(ConfigurationError):
            optimize(Circuit(1), passes=[["fold"]])

    def test_unknown_metric(self):
        with pytest.raises(ConfigurationError):
            optimize(Circuit(1), cost="fidelity")

    def test_rejects_non_circuits(self):
        with pytest.raises(InvalidGateError):
            optimize([H(0), H(0)])

    def test_window(self):
        gates = [CNOT(0, 1), RZ(0, 0.1), X(1), RZ(0, 0.2), CNOT(0, 1)]
        c = Circuit(2, gates)
        narrow = optimize(c, passes=[["commute_and_cancel"]], window=1)
        wide = optimize(c, passes=[["commute_and_cancel"]], window=8)
        assert len(wide) < len(narrow)
        assert_equivalent(wide, c)

    def test_max_cycles_warning(self):
        c = Circuit(1, [H(0), H(0)])
        with pytest.warns(ConvergenceWarning, match="1 cycles"):
            optimized = optimize(c, max_cycles=1)
        assert optimized.converged is False
        assert optimized.cycles == 1
        assert len(optimized) == 0

    def test_no_warning_at_fixed_point(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error", ConvergenceWarning)
            optimized = optimize(Circuit(1, [H(0)]), max_cycles=1)
        assert optimized.converged is True

    def test_depth_cost_not_increased(self):
        """Under the depth metric a rewrite may not lengthen the critical path."""
        c = Circuit(3, [CNOT(0, 1), CNOT(1, 2), CNOT(0, 1), H(0)])
        optimized = optimize(c, cost="depth")
        assert optimized.depth() <= c.depth()
        assert_equivalent(optimized, c)

    def test_default_pipeline(self):
        assert default_pipeline[0] == (RuleKind.ADJACENT_CANCELLATION,)
        assert RuleKind.PIVOT in default_pipeline[-1]


class TestFullOptimize:
    """Tests for the full_optimize entry point."""

    def test_cancels(self):
        c = Circuit(2, [CNOT(0, 1), RZ(0, 0.2), CNOT(0, 1), T(1), Tdg(1)])
        optimized = full_optimize(c)
        assert optimized.to_list() == [("RZ", (0,), 0.2)]

    @pytest.mark.parametrize("metric", METRICS + [None])
    def test_metrics(self, metric):
        c = redundant_circuit(3, 25, seed=4)
        optimized = full_optimize(c, metric=metric)
        assert_equivalent(optimized, c)
        assert optimized.converged

    def test_max_cycles(self):
        c = redundant_circuit(3, 25, seed=4)
        with pytest.warns(ConvergenceWarning):
            full_optimize(c, max_cycles=1)

    def test_unitary_preserved_on_synthesized_circuits(self):
        terms = [("XXI", 0.3), ("IZZ", 0.4), ("XXI", 0.2), ("ZIZ", np.pi / 2)]
        circuit = pauli_network_synthesis(terms)
        optimized = full_optimize(circuit)
        assert_equivalent(optimized, circuit)
        assert len(optimized) <= len(circuit)
