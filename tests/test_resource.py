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
Unit tests for the cost model and the resource summary of circuits.
"""
import numpy as np
import pytest

from paulisynth import (
    CNOT,
    RZ,
    Circuit,
    CircuitResources,
    CostModel,
    H,
    Metric,
    T,
    Tdg,
    analyze_circuit,
)
from paulisynth.exceptions import ConfigurationError

METRICS = ["gate_count", "depth", "t_count", "two_qubit_count"]


@pytest.fixture
def circuit():
    return Circuit(3, [H(0), CNOT(0, 1), T(1), CNOT(1, 2), RZ(2, 0.3), H(0)])


class TestMetric:
    """Tests for metric names."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("gate_count", Metric.GATE_COUNT),
            ("GateCount", Metric.GATE_COUNT),
            ("depth", Metric.DEPTH),
            ("t-count", Metric.T_COUNT),
            ("T count", Metric.T_COUNT),
            ("two_qubit_count", Metric.TWO_QUBIT_COUNT),
            ("cnot_count", Metric.TWO_QUBIT_COUNT),
            (Metric.DEPTH, Metric.DEPTH),
        ],
    )
    def test_coerce(self, name, expected):
        assert Metric.coerce(name) is expected

    @pytest.mark.parametrize("name", ["fidelity", None, 3])
    def test_unknown(self, name):
        with pytest.raises(ConfigurationError, match="Unknown metric"):
            Metric.coerce(name)


class TestCostModel:
    """Tests for the lexicographic cost model."""

    @pytest.mark.parametrize(
        "metric, expected",
        [
            ("gate_count", (6, 2)),
            ("depth", (5, 6)),
            ("t_count", (2, 2)),
            ("two_qubit_count", (2, 6)),
        ],
    )
    def test_cost(self, circuit, metric, expected):
        assert CostModel(metric).cost(circuit) == expected

    def test_empty_circuit(self):
        for metric in Metric:
            assert CostModel(metric).cost(Circuit(2)) == (0, 0)

    def test_additive(self):
        assert CostModel("gate_count").is_additive
        assert CostModel("t_count").is_additive
        assert not CostModel("depth").is_additive

    @pytest.mark.parametrize("metric", ["gate_count", "t_count", "two_qubit_count"])
    def test_delta_matches_cost(self, circuit, metric):
        """The delta of an edit equals the difference of the full costs."""
        model = CostModel(metric)
        before = model.cost(circuit)
        removed = [circuit[2], circuit[4]]
        inserted = [RZ(1, np.pi / 4 + 0.3)]
        edited = circuit.copy()
        edited.replace([2, 4], inserted, 2)
        after = model.cost(edited)
        delta = model.delta(removed, inserted)
        assert (before[0] + delta[0], before[1] + delta[1]) == after

    def test_delta_depth(self, circuit):
        assert CostModel("depth").delta([circuit[0]], []) is None

    @pytest.mark.parametrize("metric", METRICS)
    def test_append_delta_matches_cost(self, circuit, metric):
        """Appending gates changes the cost by the reported amount."""
        model = CostModel(metric)
        gates = [CNOT(0, 1), H(0), T(2)]
        extended = circuit.copy()
        for gate in gates:
            extended.append(gate)
        before, after = model.cost(circuit), model.cost(extended)
        # per-qubit layers of the fixture circuit
        levels = [3, 4, 5]
        delta = model.append_delta(gates, levels)
        assert (before[0] + delta[0], before[1] + delta[1]) == after

    def test_append_delta_depth(self):
        model = CostModel("depth")
        assert model.append_delta([H(0)], [0, 3]) == (0, 1)
        assert model.append_delta([CNOT(0, 1)], [0, 3]) == (1, 1)
        assert model.append_delta([H(0)]) == (1, 1)

    @pytest.mark.parametrize(
        "before, after, expected",
        [((3, 2), (3, 2), True), ((3, 2), (2, 9), True), ((3, 2), (3, 3), False), ((3, 2), (4, 0), False)],
    )
    def test_accepts(self, before, after, expected):
        assert CostModel.accepts(before, after) is expected

    def test_repr(self):
        assert repr(CostModel("depth")) == "CostModel('depth')"


class TestCircuitResources:
    """Tests for the CircuitResources class."""

    def test_from_circuit(self, circuit):
        res = CircuitResources.from_circuit(circuit)
        assert res.num_qubits == 3
        assert res.gate_count == 6
        assert res.two_qubit_count == 2
        assert res.depth == 5
        assert res.t_count == 2
        assert res.gate_types == {"H": 2, "CNOT": 2, "T": 1, "RZ": 1}
        assert res.rotation_classes == {"clifford": 0, "t": 1, "arbitrary": 1}
        assert res.converged is None
        assert res.cycles is None

    def test_add(self):
        r1 = CircuitResources(num_qubits=2, gate_count=2, depth=2, gate_types={"H": 2})
        r2 = CircuitResources(
            num_qubits=3,
            gate_count=2,
            two_qubit_count=1,
            depth=1,
            t_count=1,
            gate_types={"H": 1, "T": 1},
            rotation_classes={"clifford": 0, "t": 1, "arbitrary": 0},
        )
        total = r1 + r2
        assert total.num_qubits == 3
        assert total.gate_count == 4
        assert total.depth == 3
        assert total.gate_types == {"H": 3, "T": 1}
        assert total.rotation_classes == {"clifford": 0, "t": 1, "arbitrary": 0}

    def test_add_wrong_type(self):
        with pytest.raises(TypeError):
            _ = CircuitResources() + 1

    def test_str(self):
        res = CircuitResources.from_circuit(Circuit(1, [H(0), T(0), Tdg(0)]))
        expected = (
            "num_qubits: 1\n"
            "gate_count: 3\n"
            "two_qubit_count: 0\n"
            "depth: 3\n"
            "t_count: 2\n"
            "gate_types:\n"
            "{'H': 1, 'T': 1, 'Tdg': 1}\n"
            "rotation_classes:\n"
            "{'clifford': 0, 't': 2, 'arbitrary': 0}"
        )
        assert str(res) == expected


class TestAnalyzeCircuit:
    """Tests for analyze_circuit."""

    def test_keys(self, circuit):
        info = analyze_circuit(circuit)
        assert set(info) == {
            "num_qubits",
            "gate_count",
            "two_qubit_count",
            "depth",
            "t_count",
            "gate_types",
            "rotation_classes",
            "converged",
            "cycles",
        }
        assert info["gate_count"] == 6

    def test_reports_optimization(self, circuit):
        circuit.converged = True
        circuit.cycles = 2
        info = analyze_circuit(circuit)
        assert info["converged"] is True
        assert info["cycles"] == 2

    def test_empty(self):
        info = analyze_circuit(Circuit(0))
        assert info["gate_count"] == 0
        assert info["depth"] == 0
        assert info["gate_types"] == {}
