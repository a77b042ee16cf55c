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
This module contains the :class:`Circuit` class, the ordered gate list shared by
the synthesis engine and the rewrite engine.
"""
from bisect import bisect_left, bisect_right
from collections import Counter

from paulisynth.exceptions import InvalidGateError, QubitOutOfRangeError
from paulisynth.ops import Gate, GateType


class Circuit:
    """An ordered list of gates on ``num_qubits`` qubits.

    The circuit keeps the index of the last gate on every qubit current while
    gates are appended, and per-qubit position lists that are rebuilt lazily
    after in-place edits. These back the traversal helpers
    :meth:`next_gate_on`, :meth:`previous_gate_on` and :meth:`next_overlapping`.

    Args:
        num_qubits (int): number of qubits
        gates (Iterable[Gate]): initial gates, in application order

    Raises:
        QubitOutOfRangeError: if a gate acts on a qubit ``>= num_qubits``

    **Example**

    >>> c = Circuit(2, [H(0), CNOT(0, 1), RZ(1, 0.3)])
    >>> c.depth()
    3
    >>> c.next_gate_on(0, 1)
    1
    >>> c.to_list()
    [('H', (0,), None), ('CNOT', (0, 1), None), ('RZ', (1,), 0.3)]
    """

    def __init__(self, num_qubits, gates=()):
        if isinstance(num_qubits, bool) or not isinstance(num_qubits, int) or num_qubits < 0:
            raise QubitOutOfRangeError(
                f"The number of qubits must be a non-negative integer; got {num_qubits!r}."
            )
        self.num_qubits = num_qubits
        self._gates = []
        self._last = [None] * num_qubits
        self._wires = None

        #: whether the last optimization reached a fixed point, ``None`` if not optimized
        self.converged = None
        #: number of rewrite cycles run by the last optimization
        self.cycles = None
        #: number of committed rewrites per rule name
        self.rewrite_stats = {}

        self.extend(gates)

    def _check_gate(self, gate):
        if not isinstance(gate, Gate):
            raise InvalidGateError(f"Circuits hold Gate instances; got {type(gate).__name__}.")
        for q in gate.qubits:
            if q >= self.num_qubits:
                raise QubitOutOfRangeError(
                    f"{gate!r} acts on qubit {q} of a circuit with {self.num_qubits} qubits."
                )

    def append(self, gate):
        """Append a gate to the end of the circuit."""
        self._check_gate(gate)
        pos = len(self._gates)
        self._gates.append(gate)
        for q in gate.qubits:
            self._last[q] = pos
        if self._wires is not None:
            for q in gate.qubits:
                self._wires[q].append(pos)

    def extend(self, gates):
        """Append several gates in order."""
        for gate in gates:
            self.append(gate)

    def __len__(self):
        return len(self._gates)

    def __iter__(self):
        return iter(self._gates)

    def __getitem__(self, idx):
        return self._gates[idx]

    def __eq__(self, other):
        if not isinstance(other, Circuit):
            return NotImplemented
        return self.num_qubits == other.num_qubits and self._gates == other._gates

    def __repr__(self):
        return f"<Circuit: qubits={self.num_qubits}, gates={len(self._gates)}>"

    def __str__(self):
        return "\n".join(repr(g) for g in self._gates)

    @property
    def gates(self):
        """A copy of the gate list."""
        return list(self._gates)

    def copy(self):
        """Return a copy of the circuit, bookkeeping attributes included."""
        new = Circuit(self.num_qubits, self._gates)
        new.converged = self.converged
        new.cycles = self.cycles
        new.rewrite_stats = dict(self.rewrite_stats)
        return new

    def inverse(self):
        """Return the circuit implementing the inverse unitary."""
        return Circuit(self.num_qubits, [g.inverse() for g in reversed(self._gates)])

    # -------------------------------------------------------------------------
    # traversal
    # -------------------------------------------------------------------------

    def _wire_positions(self):
        if self._wires is None:
            self._wires = [[] for _ in range(self.num_qubits)]
            for pos, gate in enumerate(self._gates):
                for q in gate.qubits:
                    self._wires[q].append(pos)
        return self._wires

    def positions_on(self, qubit):
        """Positions of the gates acting on ``qubit``, in order."""
        return list(self._wire_positions()[qubit])

    def last_gate_on(self, qubit):
        """Position of the last gate on ``qubit``, or ``None``."""
        return self._last[qubit]

    def next_gate_on(self, pos, qubit):
        """Position of the first gate after ``pos`` acting on ``qubit``, or ``None``."""
        wire = self._wire_positions()[qubit]
        i = bisect_right(wire, pos)
        return wire[i] if i < len(wire) else None

    def previous_gate_on(self, pos, qubit):
        """Position of the last gate before ``pos`` acting on ``qubit``, or ``None``."""
        wire = self._wire_positions()[qubit]
        i = bisect_left(wire, pos)
        return wire[i - 1] if i > 0 else None

    def next_overlapping(self, pos, qubits):
        """Given a position, finds the next gate that acts on at least one of
        ``qubits``, if present.

        Args:
            pos (int): position to search after
            qubits (Iterable[int]): the qubits of interest

        Returns:
            int or None: The position of the earliest gate after ``pos`` that uses
            one or more of the qubits, or None if no such gate is present.
        """
        candidates = [self.next_gate_on(pos, q) for q in qubits]
        candidates = [c for c in candidates if c is not None]
        return min(candidates) if candidates else None

    def replace(self, positions, new_gates, at):
        """In-place rewrite primitive.

        The gates at ``positions`` are removed, then ``new_gates`` are inserted
        so that the first of them lands at index ``at`` of the shortened list.

        Args:
            positions (Iterable[int]): positions of the gates to remove
            new_gates (Sequence[Gate]): gates to insert
            at (int): insertion index, measured after removal
        """
        positions = sorted(set(positions))
        for p in positions:
            if not 0 <= p < len(self._gates):
                raise IndexError(f"Position {p} is outside a circuit of {len(self._gates)} gates.")
        new_gates = list(new_gates)
        for gate in new_gates:
            self._check_gate(gate)

        for p in reversed(positions):
            del self._gates[p]
        if not 0 <= at <= len(self._gates):
            raise IndexError(f"Insertion index {at} is outside a circuit of {len(self._gates)} gates.")
        self._gates[at:at] = new_gates

        self._wires = None
        self._last = [None] * self.num_qubits
        for pos, gate in enumerate(self._gates):
            for q in gate.qubits:
                self._last[q] = pos

    # -------------------------------------------------------------------------
    # introspection
    # -------------------------------------------------------------------------

    @property
    def gate_count(self):
        """Total number of gates."""
        return len(self._gates)

    @property
    def two_qubit_count(self):
        """Number of two-qubit gates."""
        return sum(1 for g in self._gates if g.num_qubits == 2)

    def gate_counts(self):
        """Number of gates per gate type name."""
        return dict(Counter(g.name.value for g in self._gates))

    def t_count(self):
        """Number of non-Clifford rotations (``T``, ``Tdg`` and rotations by
        angles that are not multiples of pi/2)."""
        return sum(1 for g in self._gates if not g.is_clifford)

    def rotation_classes(self):
        """Number of rotation gates per angle class."""
        counts = {"clifford": 0, "t": 0, "arbitrary": 0}
        for g in self._gates:
            if g.is_rotation:
                counts[g.angle_class] += 1
        return counts

    def layers(self):
        """Group the gates into as-soon-as-possible layers.

        Returns:
            list[list[int]]: positions of the gates of each layer
        """
        level = [0] * self.num_qubits
        layers = []
        for pos, gate in enumerate(self._gates):
            lvl = max(level[q] for q in gate.qubits)
            if lvl == len(layers):
                layers.append([])
            layers[lvl].append(pos)
            for q in gate.qubits:
                level[q] = lvl + 1
        return layers

    def depth(self):
        """Length of the longest gate path through the circuit."""
        level = [0] * self.num_qubits
        for gate in self._gates:
            lvl = max(level[q] for q in gate.qubits) + 1
            for q in gate.qubits:
                level[q] = lvl
        return max(level, default=0)

    # -------------------------------------------------------------------------
    # serialization
    # -------------------------------------------------------------------------

    def to_list(self):
        """Serialize as a list of ``(gate_type, qubit_operands, angle)`` tuples."""
        return [g.to_tuple() for g in self._gates]

    @classmethod
    def from_list(cls, num_qubits, items):
        """Build a circuit from ``(gate_type, qubit_operands, angle)`` tuples.

        >>> Circuit.from_list(2, [("H", (0,), None), ("CNOT", (0, 1), None)])
        <Circuit: qubits=2, gates=2>
        """
        gates = []
        for item in items:
            if len(item) == 2:
                name, qubits = item
                angle = None
            else:
                name, qubits, angle = item
            gates.append(Gate(GateType.coerce(name), tuple(qubits), angle))
        return cls(num_qubits, gates)

    def to_dag(self):
        """Return the commutation DAG of the circuit, see :func:`~.commutation_dag`."""
        # pylint: disable=import-outside-toplevel
        from .dag import commutation_dag

        return commutation_dag(self)
