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
Static commutation rules between gates of the circuit IR.
"""
from collections import OrderedDict

from .gate import GateType

# Pauli axis each gate is diagonal in, per operand position. ``None`` marks an
# operand on which the gate has no eigenbasis shared with a Pauli axis.
axis_map = OrderedDict(
    {
        GateType.H: (None,),
        GateType.S: ("Z",),
        GateType.SDG: ("Z",),
        GateType.T: ("Z",),
        GateType.TDG: ("Z",),
        GateType.Z: ("Z",),
        GateType.RZ: ("Z",),
        GateType.X: ("X",),
        GateType.RX: ("X",),
        GateType.Y: ("Y",),
        GateType.RY: ("Y",),
        GateType.CNOT: ("Z", "X"),
        GateType.CZ: ("Z", "Z"),
        GateType.SWAP: (None, None),
    }
)


def qubit_axes(gate):
    """Map each qubit operand of ``gate`` to the Pauli axis the gate is diagonal in there.

    >>> qubit_axes(CNOT(0, 1))
    {0: 'Z', 1: 'X'}
    """
    return dict(zip(gate.qubits, axis_map[gate.name]))


def is_commuting(gate1, gate2):
    r"""Check if two gates commute.

    Gates on disjoint qubits commute, as do identical gates. Otherwise the
    gates commute when, on every shared qubit, both are diagonal in the same
    Pauli axis. The check is conservative: ``False`` means commutation could
    not be certified.

    Args:
        gate1 (Gate): A first gate.
        gate2 (Gate): A second gate.

    Returns:
         bool: True if the gates commute, False otherwise.

    **Example**

    >>> is_commuting(CNOT(0, 1), RZ(0, 0.3))
    True
    >>> is_commuting(CNOT(0, 1), CNOT(1, 2))
    False
    """
    shared = set(gate1.qubits) & set(gate2.qubits)

    # Case 1 gates are disjoint
    if not shared:
        return True

    # Case 2 identical gates
    if gate1 == gate2:
        return True

    # Case 3 symmetric two-qubit gates on the same pair
    if gate1.name == gate2.name and gate1.is_symmetric and set(gate1.qubits) == set(gate2.qubits):
        return True

    # Case 4 every shared qubit carries the same axis in both gates
    axes1 = qubit_axes(gate1)
    axes2 = qubit_axes(gate2)
    return all(axes1[q] is not None and axes1[q] == axes2[q] for q in shared)
