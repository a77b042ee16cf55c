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
"""Utility functions for circuit optimization."""

from paulisynth.ops import rotation_gate


def same_operands(gate1, gate2):
    """Whether two gates act on the same qubits, in any order for symmetric gates."""
    if gate1.qubits == gate2.qubits:
        return True
    return gate1.is_symmetric and gate2.is_symmetric and set(gate1.qubits) == set(gate2.qubits)


def can_merge(gate1, gate2):
    """Whether two gates are rotations about the same axis on the same qubit."""
    return (
        gate1.is_rotation
        and gate2.is_rotation
        and gate1.axis == gate2.axis
        and gate1.qubits == gate2.qubits
    )


def merged_rotation(gate1, gate2, atol):
    """Combine two mergeable rotations into a single canonical gate.

    If the combination of the two rotations produces an angle that is close to
    0, ``None`` is returned and neither gate needs to be applied.

    Args:
        gate1 (Gate): the first rotation
        gate2 (Gate): the second rotation, about the same axis and qubit
        atol (float): tolerance of the angle comparisons

    Returns:
        Gate or None: the merged rotation
    """
    angle = gate1.rotation_angle + gate2.rotation_angle
    return rotation_gate(gate1.axis, gate1.qubits[0], angle, atol=atol)


def restart_position(circuit, removed, qubits):
    """Earliest position the scan must revisit after an edit.

    This is the first removed position, or an earlier gate on one of the edited
    qubits, whichever comes first. Positions refer to the circuit before the edit.
    """
    first = min(removed)
    restart = first
    for q in qubits:
        prev = circuit.previous_gate_on(first, q)
        if prev is not None:
            restart = min(restart, prev)
    return restart
