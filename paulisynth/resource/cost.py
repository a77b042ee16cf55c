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
The pluggable lexicographic cost used by both the synthesis engine and the
rewrite engine.
"""
from enum import Enum

from paulisynth.exceptions import ConfigurationError


class Metric(Enum):
    """The resource a compilation minimizes first."""

    GATE_COUNT = "gate_count"
    DEPTH = "depth"
    T_COUNT = "t_count"
    TWO_QUBIT_COUNT = "two_qubit_count"

    @classmethod
    def coerce(cls, value):
        """Return the metric named by ``value``.

        Names are matched ignoring case, underscores, dashes and spaces, so
        ``"gate_count"``, ``"GateCount"`` and ``"gates"`` all name
        :attr:`GATE_COUNT`.

        Raises:
            ConfigurationError: if ``value`` names no metric
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.replace("_", "").replace("-", "").replace(" ", "").lower()
            member = _aliases.get(key)
            if member is not None:
                return member
        raise ConfigurationError(
            f"Unknown metric {value!r}; expected one of {[m.value for m in cls]}."
        )


_aliases = {
    "gatecount": Metric.GATE_COUNT,
    "gates": Metric.GATE_COUNT,
    "count": Metric.GATE_COUNT,
    "depth": Metric.DEPTH,
    "tcount": Metric.T_COUNT,
    "t": Metric.T_COUNT,
    "twoqubitcount": Metric.TWO_QUBIT_COUNT,
    "2qcount": Metric.TWO_QUBIT_COUNT,
    "cnotcount": Metric.TWO_QUBIT_COUNT,
}


def _gate_vector(gate):
    """Contribution of one gate to the additive counters ``(gates, two_qubit, t)``."""
    return (1, int(gate.num_qubits == 2), int(not gate.is_clifford))


class CostModel:
    """Lexicographic ``(primary, secondary)`` cost of a circuit under a :class:`Metric`.

    ================  ==========================  =================
    metric            primary                     secondary
    ================  ==========================  =================
    gate count        number of gates             two-qubit gates
    depth             circuit depth               number of gates
    T count           non-Clifford rotations      two-qubit gates
    two-qubit count   two-qubit gates             number of gates
    ================  ==========================  =================

    Args:
        metric (Metric or str): the metric to minimize

    **Example**

    >>> model = CostModel("depth")
    >>> model.cost(Circuit(2, [H(0), H(1), CNOT(0, 1)]))
    (2, 3)
    >>> model.accepts((2, 3), (2, 2))
    True
    """

    # indices into the additive counters (gates, two_qubit, t)
    _components = {
        Metric.GATE_COUNT: (0, 1),
        Metric.T_COUNT: (2, 1),
        Metric.TWO_QUBIT_COUNT: (1, 0),
    }

    def __init__(self, metric=Metric.GATE_COUNT):
        self.metric = Metric.coerce(metric)

    def __repr__(self):
        return f"CostModel({self.metric.value!r})"

    @property
    def is_additive(self):
        """Whether the cost of an edit follows from the edited gates alone."""
        return self.metric != Metric.DEPTH

    def cost(self, circuit):
        """Return the ``(primary, secondary)`` cost of a circuit."""
        if self.metric == Metric.DEPTH:
            return (circuit.depth(), circuit.gate_count)
        totals = [0, 0, 0]
        for gate in circuit:
            for i, v in enumerate(_gate_vector(gate)):
                totals[i] += v
        p, s = self._components[self.metric]
        return (totals[p], totals[s])

    def delta(self, removed, inserted):
        """Change of cost caused by replacing the gates ``removed`` by ``inserted``.

        Returns:
            tuple[int, int] or None: the ``(primary, secondary)`` change, or
            ``None`` when the metric is not additive
        """
        if not self.is_additive:
            return None
        diff = [0, 0, 0]
        for gate in inserted:
            for i, v in enumerate(_gate_vector(gate)):
                diff[i] += v
        for gate in removed:
            for i, v in enumerate(_gate_vector(gate)):
                diff[i] -= v
        p, s = self._components[self.metric]
        return (diff[p], diff[s])

    def append_delta(self, gates, levels=None):
        """Change of cost caused by appending ``gates`` to the end of a circuit.

        Additive metrics follow from :meth:`delta`. The depth metric needs the
        as-soon-as-possible layer ``levels[q]`` reached on each qubit ``q`` of
        the circuit so far.

        Returns:
            tuple[int, int]: the ``(primary, secondary)`` change
        """
        gates = list(gates)
        if self.is_additive:
            return self.delta((), gates)
        layers = dict(enumerate(levels or ()))
        before = max(layers.values(), default=0)
        for gate in gates:
            lvl = max(layers.get(q, 0) for q in gate.qubits) + 1
            for q in gate.qubits:
                layers[q] = lvl
        return (max(max(layers.values(), default=0) - before, 0), len(gates))

    @staticmethod
    def accepts(before, after):
        """Whether ``after`` is no worse than ``before`` in lexicographic order."""
        return tuple(after) <= tuple(before)
