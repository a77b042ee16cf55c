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
This module contains the gate set of the circuit IR: the :class:`GateType`
enumeration, the immutable :class:`Gate` record and one constructor per gate.
"""
# pylint: disable=invalid-name
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from paulisynth.exceptions import InvalidAngleError, InvalidGateError

DEFAULT_ATOL = 1e-9


class GateType(Enum):
    """The closed set of gate kinds understood by the compiler."""

    H = "H"
    S = "S"
    SDG = "Sdg"
    T = "T"
    TDG = "Tdg"
    X = "X"
    Y = "Y"
    Z = "Z"
    CNOT = "CNOT"
    CZ = "CZ"
    SWAP = "SWAP"
    RX = "RX"
    RY = "RY"
    RZ = "RZ"

    @classmethod
    def coerce(cls, value):
        """Return the member named by ``value`` (case insensitive), or ``value`` itself."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            for member in cls:
                if member.value.upper() == key or member.name == key:
                    return member
            if key in ("CX",):
                return cls.CNOT
        raise InvalidGateError(f"Unknown gate type {value!r}.")


TWO_QUBIT_GATES = frozenset({GateType.CNOT, GateType.CZ, GateType.SWAP})
PARAMETRIC_GATES = frozenset({GateType.RX, GateType.RY, GateType.RZ})
SELF_INVERSE_GATES = frozenset(
    {GateType.H, GateType.X, GateType.Y, GateType.Z, GateType.CNOT, GateType.CZ, GateType.SWAP}
)
SYMMETRIC_GATES = frozenset({GateType.CZ, GateType.SWAP})

# rotation axis and equivalent angle of the single-qubit rotation family
rotation_map = {
    GateType.Z: ("Z", math.pi),
    GateType.S: ("Z", math.pi / 2),
    GateType.SDG: ("Z", -math.pi / 2),
    GateType.T: ("Z", math.pi / 4),
    GateType.TDG: ("Z", -math.pi / 4),
    GateType.RZ: ("Z", None),
    GateType.X: ("X", math.pi),
    GateType.RX: ("X", None),
    GateType.Y: ("Y", math.pi),
    GateType.RY: ("Y", None),
}

inverse_map = {
    GateType.S: GateType.SDG,
    GateType.SDG: GateType.S,
    GateType.T: GateType.TDG,
    GateType.TDG: GateType.T,
}

_s2 = 1 / np.sqrt(2)

mat_map = {
    GateType.H: np.array([[_s2, _s2], [_s2, -_s2]], dtype=np.complex128),
    GateType.S: np.diag([1, 1j]).astype(np.complex128),
    GateType.SDG: np.diag([1, -1j]).astype(np.complex128),
    GateType.T: np.diag([1, np.exp(1j * np.pi / 4)]).astype(np.complex128),
    GateType.TDG: np.diag([1, np.exp(-1j * np.pi / 4)]).astype(np.complex128),
    GateType.X: np.array([[0, 1], [1, 0]], dtype=np.complex128),
    GateType.Y: np.array([[0, -1j], [1j, 0]], dtype=np.complex128),
    GateType.Z: np.diag([1, -1]).astype(np.complex128),
    GateType.CNOT: np.array(
        [[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 0, 1], [0, 0, 1, 0]], dtype=np.complex128
    ),
    GateType.CZ: np.diag([1, 1, 1, -1]).astype(np.complex128),
    GateType.SWAP: np.array(
        [[1, 0, 0, 0], [0, 0, 1, 0], [0, 1, 0, 0], [0, 0, 0, 1]], dtype=np.complex128
    ),
}


def normalize_angle(angle):
    r"""Map an angle onto the interval :math:`(-\pi, \pi]`."""
    angle = math.remainder(angle, 2 * math.pi)
    if angle <= -math.pi:
        angle += 2 * math.pi
    return angle


def _is_multiple(angle, step, atol):
    ratio = angle / step
    return abs(ratio - round(ratio)) * step <= atol


@dataclass(frozen=True)
class Gate:
    """A single gate of a circuit.

    Args:
        name (GateType or str): the gate kind
        qubits (tuple[int]): the qubit operands; control first for ``CNOT``
        angle (float or None): the rotation angle, required by ``RX``, ``RY``
            and ``RZ`` and forbidden for every other gate

    Raises:
        InvalidGateError: for a wrong number of qubits or repeated or negative
            qubit operands
        InvalidAngleError: if a rotation gate has no finite angle, or another
            gate is given one

    **Example**

    >>> g = Gate("CNOT", (0, 1))
    >>> g
    CNOT(0, 1)
    >>> g.inverse() == g
    True
    """

    name: GateType
    qubits: Tuple[int, ...]
    angle: Optional[float] = None

    def __post_init__(self):
        name = GateType.coerce(self.name)
        object.__setattr__(self, "name", name)

        if isinstance(self.qubits, (int, np.integer)) and not isinstance(self.qubits, bool):
            qubits = (self.qubits,)
        else:
            qubits = tuple(self.qubits)
        for q in qubits:
            if isinstance(q, bool) or not isinstance(q, (int, np.integer)) or q < 0:
                raise InvalidGateError(f"Qubit operands must be non-negative integers; got {q!r}.")
        qubits = tuple(int(q) for q in qubits)
        arity = 2 if name in TWO_QUBIT_GATES else 1
        if len(qubits) != arity:
            raise InvalidGateError(
                f"{name.value} acts on {arity} qubit(s); got operands {qubits}."
            )
        if len(set(qubits)) != len(qubits):
            raise InvalidGateError(f"{name.value} operands must be distinct; got {qubits}.")
        object.__setattr__(self, "qubits", qubits)

        if name in PARAMETRIC_GATES:
            if (
                self.angle is None
                or isinstance(self.angle, bool)
                or not isinstance(self.angle, (int, float, np.integer, np.floating))
                or not math.isfinite(self.angle)
            ):
                raise InvalidAngleError(f"{name.value} requires a finite angle; got {self.angle!r}.")
            object.__setattr__(self, "angle", float(self.angle))
        elif self.angle is not None:
            raise InvalidAngleError(f"{name.value} does not take an angle; got {self.angle!r}.")

    def __repr__(self):
        args = ", ".join(str(q) for q in self.qubits)
        if self.angle is not None:
            args += f", {self.angle}"
        return f"{self.name.value}({args})"

    @property
    def num_qubits(self):
        """Number of qubit operands."""
        return len(self.qubits)

    @property
    def is_rotation(self):
        """Whether the gate is a single-qubit rotation about a Pauli axis."""
        return self.name in rotation_map

    @property
    def axis(self):
        """The Pauli axis (``"X"``, ``"Y"`` or ``"Z"``) of a rotation gate, else ``None``."""
        entry = rotation_map.get(self.name)
        return entry[0] if entry else None

    @property
    def rotation_angle(self):
        """The rotation angle, including the equivalent angle of named gates
        (``T`` has ``pi / 4``). ``None`` for non-rotations."""
        entry = rotation_map.get(self.name)
        if entry is None:
            return None
        return self.angle if entry[1] is None else entry[1]

    def is_clifford_within(self, atol=DEFAULT_ATOL):
        """Whether the gate is a Clifford gate, rotation angles compared up to ``atol``."""
        if not self.is_rotation:
            return True
        return _is_multiple(self.rotation_angle, math.pi / 2, atol)

    @property
    def is_clifford(self):
        """Whether the gate is a Clifford gate."""
        return self.is_clifford_within()

    @property
    def angle_class(self):
        """``"clifford"``, ``"t"`` for odd multiples of pi/4, else ``"arbitrary"``."""
        if self.is_clifford:
            return "clifford"
        if _is_multiple(self.rotation_angle, math.pi / 4, DEFAULT_ATOL):
            return "t"
        return "arbitrary"

    @property
    def is_self_inverse(self):
        """Whether the gate is its own inverse."""
        return self.name in SELF_INVERSE_GATES

    @property
    def is_symmetric(self):
        """Whether the gate is invariant under a permutation of its operands."""
        return self.name in SYMMETRIC_GATES

    def inverse(self):
        """Return the inverse gate."""
        if self.name in PARAMETRIC_GATES:
            return Gate(self.name, self.qubits, -self.angle)
        if self.name in inverse_map:
            return Gate(inverse_map[self.name], self.qubits)
        return self

    def is_inverse_of(self, other):
        """Whether ``other`` undoes this gate, symmetric operands in any order."""
        if not isinstance(other, Gate):
            return False
        inv = self.inverse()
        if inv.name != other.name:
            return False
        if inv.qubits != other.qubits:
            if not (self.is_symmetric and set(inv.qubits) == set(other.qubits)):
                return False
        if self.name in PARAMETRIC_GATES:
            return abs(normalize_angle(inv.angle - other.angle)) <= DEFAULT_ATOL
        return True

    def matrix(self):
        """Returns the dense matrix of the gate on its own operands, first operand
        as the most significant qubit."""
        if self.name in mat_map:
            return mat_map[self.name].copy()
        half = self.angle / 2
        c, s = np.cos(half), np.sin(half)
        if self.name == GateType.RX:
            return np.array([[c, -1j * s], [-1j * s, c]], dtype=np.complex128)
        if self.name == GateType.RY:
            return np.array([[c, -s], [s, c]], dtype=np.complex128)
        return np.diag([np.exp(-1j * half), np.exp(1j * half)]).astype(np.complex128)

    def to_tuple(self):
        """Serialize as ``(gate_type, qubit_operands, angle)``."""
        return (self.name.value, self.qubits, self.angle)


def H(q):
    """Hadamard gate"""
    return Gate(GateType.H, (q,))


def S(q):
    """Phase gate"""
    return Gate(GateType.S, (q,))


def Sdg(q):
    """Inverse phase gate"""
    return Gate(GateType.SDG, (q,))


def T(q):
    """T gate"""
    return Gate(GateType.T, (q,))


def Tdg(q):
    """Inverse T gate"""
    return Gate(GateType.TDG, (q,))


def X(q):
    """Pauli X gate"""
    return Gate(GateType.X, (q,))


def Y(q):
    """Pauli Y gate"""
    return Gate(GateType.Y, (q,))


def Z(q):
    """Pauli Z gate"""
    return Gate(GateType.Z, (q,))


def CNOT(control, target):
    """Controlled-NOT gate"""
    return Gate(GateType.CNOT, (control, target))


def CZ(a, b):
    """Controlled-Z gate"""
    return Gate(GateType.CZ, (a, b))


def SWAP(a, b):
    """SWAP gate"""
    return Gate(GateType.SWAP, (a, b))


def RX(q, angle):
    """Rotation about the X axis"""
    return Gate(GateType.RX, (q,), angle)


def RY(q, angle):
    """Rotation about the Y axis"""
    return Gate(GateType.RY, (q,), angle)


def RZ(q, angle):
    """Rotation about the Z axis"""
    return Gate(GateType.RZ, (q,), angle)


_named_z = (
    (math.pi, GateType.Z),
    (math.pi / 2, GateType.S),
    (-math.pi / 2, GateType.SDG),
    (math.pi / 4, GateType.T),
    (-math.pi / 4, GateType.TDG),
)

_rotation_types = {
    "X": (GateType.RX, GateType.X),
    "Y": (GateType.RY, GateType.Y),
    "Z": (GateType.RZ, GateType.Z),
}


def rotation_gate(axis, qubit, angle, atol=DEFAULT_ATOL):
    r"""Return the canonical gate of a rotation by ``angle`` about ``axis``.

    The angle is first normalized onto :math:`(-\pi, \pi]`. A vanishing angle
    yields ``None``; angles matching a named gate up to ``atol`` give that gate
    (``Z``, ``S``, ``Sdg``, ``T`` and ``Tdg`` about Z, ``X`` or ``Y`` for a
    half turn about the other axes); any other angle gives ``RX``, ``RY`` or ``RZ``.

    Args:
        axis (str): ``"X"``, ``"Y"`` or ``"Z"``
        qubit (int): the qubit operand
        angle (float): the rotation angle
        atol (float): absolute tolerance of the angle comparisons

    Returns:
        Gate or None: the gate, or ``None`` if the rotation is the identity

    **Example**

    >>> rotation_gate("Z", 0, np.pi / 2)
    S(0)
    >>> rotation_gate("X", 1, 0.3)
    RX(1, 0.3)
    >>> rotation_gate("Z", 0, 2 * np.pi) is None
    True
    """
    if axis not in _rotation_types:
        raise InvalidGateError(f"Unknown rotation axis {axis!r}.")
    if angle is None or not math.isfinite(angle):
        raise InvalidAngleError(f"Rotation angles must be finite; got {angle!r}.")

    angle = normalize_angle(angle)
    if abs(angle) <= atol:
        return None
    if math.pi - abs(angle) <= atol:
        return Gate(_rotation_types[axis][1], (qubit,))
    if axis == "Z":
        for value, gate_type in _named_z:
            if abs(angle - value) <= atol:
                return Gate(gate_type, (qubit,))
    return Gate(_rotation_types[axis][0], (qubit,), angle)
