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
Stores the resource summary of a compiled circuit.
"""
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Optional


@dataclass(frozen=True)
class CircuitResources:
    r"""Contains attributes which store key resources such as number of gates, number of qubits,
    depth and gate types of a compiled circuit.

    Args:
        num_qubits (int): number of qubits
        gate_count (int): number of gates
        two_qubit_count (int): number of two-qubit gates
        depth (int): the depth of the circuit defined as the maximum number of non-parallel gates
        t_count (int): number of non-Clifford rotations
        gate_types (dict): dictionary storing gate names (str) as keys
            and the number of times they are used in the circuit (int) as values
        rotation_classes (dict): number of rotation gates per angle class
            (``"clifford"``, ``"t"``, ``"arbitrary"``)
        converged (bool or None): whether the rewrite loop reached a fixed point
        cycles (int or None): number of rewrite cycles run

    **Example**

    >>> r1 = CircuitResources(num_qubits=2, gate_count=2, two_qubit_count=1, depth=2,
    ...                       gate_types={"H": 1, "CNOT": 1})
    >>> r2 = CircuitResources(num_qubits=2, gate_count=1, depth=1, t_count=1, gate_types={"T": 1})
    >>> print(r1 + r2)
    num_qubits: 2
    gate_count: 3
    two_qubit_count: 1
    depth: 3
    t_count: 1
    gate_types:
    {'H': 1, 'CNOT': 1, 'T': 1}
    rotation_classes:
    {'clifford': 0, 't': 0, 'arbitrary': 0}
    """

    num_qubits: int = 0
    gate_count: int = 0
    two_qubit_count: int = 0
    depth: int = 0
    t_count: int = 0
    gate_types: dict = field(default_factory=dict)
    rotation_classes: dict = field(
        default_factory=lambda: {"clifford": 0, "t": 0, "arbitrary": 0}
    )
    converged: Optional[bool] = None
    cycles: Optional[int] = None

    @classmethod
    def from_circuit(cls, circuit):
        """Collect the resources of a :class:`~.Circuit`."""
        return cls(
            num_qubits=circuit.num_qubits,
            gate_count=circuit.gate_count,
            two_qubit_count=circuit.two_qubit_count,
            depth=circuit.depth(),
            t_count=circuit.t_count(),
            gate_types=circuit.gate_counts(),
            rotation_classes=circuit.rotation_classes(),
            converged=circuit.converged,
            cycles=circuit.cycles,
        )

    def __add__(self, other):
        r"""Adds two :class:`~.CircuitResources` objects together as if the circuits were
        executed in series. The depth of the sum is an upper bound.

        Args:
            other (CircuitResources): the resource object to add

        Returns:
            CircuitResources: the combined resources
        """
        if not isinstance(other, CircuitResources):
            return NotImplemented
        return CircuitResources(
            num_qubits=max(self.num_qubits, other.num_qubits),
            gate_count=self.gate_count + other.gate_count,
            two_qubit_count=self.two_qubit_count + other.two_qubit_count,
            depth=self.depth + other.depth,
            t_count=self.t_count + other.t_count,
            gate_types=dict(Counter(self.gate_types) + Counter(other.gate_types)),
            rotation_classes={
                k: self.rotation_classes.get(k, 0) + other.rotation_classes.get(k, 0)
                for k in ("clifford", "t", "arbitrary")
            },
        )

    def to_dict(self):
        """Convert the resources to a plain dictionary."""
        return asdict(self)

    def __str__(self):
        keys = ["num_qubits", "gate_count", "two_qubit_count", "depth", "t_count"]
        items = "\n".join(f"{k}: {getattr(self, k)}" for k in keys)

        gate_type_str = ", ".join(
            [f"'{gate_name}': {count}" for gate_name, count in self.gate_types.items()]
        )
        items += "\ngate_types:\n{" + gate_type_str + "}"

        class_str = ", ".join(f"'{k}': {v}" for k, v in self.rotation_classes.items())
        items += "\nrotation_classes:\n{" + class_str + "}"
        return items


def analyze_circuit(circuit):
    """Summarize the resources of a circuit.

    Args:
        circuit (Circuit): the circuit to analyze

    Returns:
        dict: with keys ``num_qubits``, ``gate_count``, ``two_qubit_count``,
        ``depth``, ``t_count``, ``gate_types``, ``rotation_classes``,
        ``converged`` and ``cycles``

    **Example**

    >>> info = analyze_circuit(Circuit(1, [H(0), T(0)]))
    >>> info["t_count"], info["gate_types"]
    (1, {'H': 1, 'T': 1})
    """
    return CircuitResources.from_circuit(circuit).to_dict()
