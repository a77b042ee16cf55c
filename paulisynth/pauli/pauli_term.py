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
"""The immutable Pauli rotation term consumed by the synthesis engine."""
from dataclasses import dataclass, field
from functools import lru_cache, reduce
from typing import Optional

import numpy as np
from scipy import sparse

from paulisynth.exceptions import InvalidAngleError, InvalidPauliError, InvalidSignError

I = "I"
X = "X"
Y = "Y"
Z = "Z"

PAULIS = (I, X, Y, Z)

matI = np.eye(2, dtype=np.complex128)
matX = np.array([[0, 1], [1, 0]], dtype=np.complex128)
matY = np.array([[0, -1j], [1j, 0]], dtype=np.complex128)
matZ = np.array([[1, 0], [0, -1]], dtype=np.complex128)

mat_map = {
    I: matI,
    X: matX,
    Y: matY,
    Z: matZ,
}

anticom_map = {
    I: {I: 0, X: 0, Y: 0, Z: 0},
    X: {I: 0, X: 0, Y: 1, Z: 1},
    Y: {I: 0, X: 1, Y: 0, Z: 1},
    Z: {I: 0, X: 1, Y: 1, Z: 0},
}

# symplectic encoding, Y = XZ up to phase
xz_map = {I: (0, 0), X: (1, 0), Y: (1, 1), Z: (0, 1)}
xz_to_pauli = {v: k for k, v in xz_map.items()}


@lru_cache
def _cached_sparse(op):
    """Returns the sparse CSR matrix of a single-qubit Pauli operator."""
    return sparse.csr_matrix(mat_map[op])


def _check_angle(angle):
    if angle is None:
        return None
    if isinstance(angle, bool) or not isinstance(angle, (int, float, np.floating, np.integer)):
        raise InvalidAngleError(f"Pauli term angles must be real numbers; got {angle!r}.")
    angle = float(angle)
    if not np.isfinite(angle):
        raise InvalidAngleError(f"Pauli term angles must be finite; got {angle}.")
    if angle < 0:
        raise InvalidAngleError(
            f"Pauli term angles must be non-negative, the rotation direction is set by the sign; got {angle}."
        )
    return angle


@dataclass(frozen=True, eq=False)
class PauliTerm:
    r"""A Pauli string with a sign and an optional rotation angle.

    The term represents the rotation :math:`\exp(-i \frac{\theta}{2} \sigma P)`
    where :math:`\sigma` is ``sign`` and :math:`\theta` is ``angle``. The
    characters of ``paulis`` act on qubits ``0, 1, ...`` in order.

    Two terms are equal when their Pauli strings and signs agree; the angle
    does not take part in equality or hashing.

    Args:
        paulis (str): string over ``{"I", "X", "Y", "Z"}``, case insensitive
        sign (int): ``+1`` or ``-1``
        angle (float or None): non-negative rotation angle, or ``None`` to
            use the synthesis default

    Raises:
        InvalidPauliError: if ``paulis`` contains another symbol
        InvalidSignError: if ``sign`` is not ``+1`` or ``-1``
        InvalidAngleError: if ``angle`` is negative, NaN or infinite

    **Example**

    >>> t = PauliTerm("xiz", sign=-1, angle=0.3)
    >>> t
    PauliTerm('-XIZ', angle=0.3)
    >>> t.support
    (0, 2)
    >>> t.commutes_with(PauliTerm("ZIZ"))
    False
    """

    paulis: str
    sign: int = 1
    angle: Optional[float] = field(default=None)

    def __post_init__(self):
        if not isinstance(self.paulis, str):
            raise InvalidPauliError(f"Pauli strings must be str; got {type(self.paulis).__name__}.")
        paulis = self.paulis.upper()
        bad = set(paulis) - set(PAULIS)
        if bad:
            raise InvalidPauliError(
                f"Pauli string {self.paulis!r} contains invalid symbols {sorted(bad)}."
            )
        if isinstance(self.sign, bool) or self.sign not in (1, -1):
            raise InvalidSignError(f"Pauli term signs must be +1 or -1; got {self.sign!r}.")
        object.__setattr__(self, "paulis", paulis)
        object.__setattr__(self, "sign", int(self.sign))
        object.__setattr__(self, "angle", _check_angle(self.angle))

    @classmethod
    def from_string(cls, string, angle=None):
        """Build a term from a string with an optional leading ``+`` or ``-``.

        >>> PauliTerm.from_string("-XZ")
        PauliTerm('-XZ')
        """
        if not isinstance(string, str):
            raise InvalidPauliError(f"Pauli strings must be str; got {type(string).__name__}.")
        string = string.strip()
        sign = 1
        if string[:1] in ("+", "-"):
            sign = -1 if string[0] == "-" else 1
            string = string[1:]
        return cls(string, sign, angle)

    @classmethod
    def from_xz(cls, x, z, sign=1, angle=None):
        """Build a term from its symplectic bit vectors."""
        paulis = "".join(xz_to_pauli[(int(a), int(b))] for a, b in zip(x, z))
        return cls(paulis, sign, angle)

    def __eq__(self, other):
        if not isinstance(other, PauliTerm):
            return NotImplemented
        return self.paulis == other.paulis and self.sign == other.sign

    def __hash__(self):
        return hash((self.paulis, self.sign))

    def __len__(self):
        return len(self.paulis)

    def __getitem__(self, qubit):
        return self.paulis[qubit]

    def __str__(self):
        return ("-" if self.sign < 0 else "+") + self.paulis

    def __repr__(self):
        s = ("-" if self.sign < 0 else "") + self.paulis
        if self.angle is None:
            return f"PauliTerm({s!r})"
        return f"PauliTerm({s!r}, angle={self.angle})"

    @property
    def num_qubits(self):
        """Number of qubits the term is defined on."""
        return len(self.paulis)

    @property
    def support(self):
        """Indices of the qubits carrying a non-identity Pauli."""
        return tuple(q for q, p in enumerate(self.paulis) if p != I)

    @property
    def weight(self):
        """Number of non-identity Paulis."""
        return len(self.paulis) - self.paulis.count(I)

    @property
    def is_identity(self):
        """Whether the term acts trivially on every qubit."""
        return self.weight == 0

    def with_angle(self, angle):
        """Return a copy of the term carrying ``angle``."""
        return PauliTerm(self.paulis, self.sign, angle)

    def commutes_with(self, other):
        """Fast check if two terms commute with each other"""
        if not isinstance(other, PauliTerm):
            raise TypeError(f"Cannot check commutation with {type(other).__name__}.")
        anticom_count = sum(anticom_map[a][b] for a, b in zip(self.paulis, other.paulis))
        return (anticom_count % 2) == 0

    def xz(self):
        """Return the symplectic representation.

        Returns:
            tuple[array[uint8], array[uint8]]: the ``x`` and ``z`` bit vectors
        """
        x = np.fromiter((xz_map[p][0] for p in self.paulis), dtype=np.uint8, count=len(self))
        z = np.fromiter((xz_map[p][1] for p in self.paulis), dtype=np.uint8, count=len(self))
        return x, z

    def to_mat(self, sparse_format=False):
        """Returns the matrix representation of :math:`\\sigma P`.

        Keyword Args:
            sparse_format (bool): return a ``scipy.sparse`` CSR matrix instead of a
                dense numpy array

        Returns:
            (Union[NumpyArray, ScipySparseArray]): Matrix representation of the term.
        """
        if not self.paulis:
            mat = np.array([[complex(self.sign)]])
            return sparse.csr_matrix(mat) if sparse_format else mat
        if sparse_format:
            mat = reduce(
                lambda a, b: sparse.kron(a, b, format="csr"),
                (_cached_sparse(p) for p in self.paulis),
            )
            return (self.sign * mat).tocsr()
        return self.sign * reduce(np.kron, (mat_map[p] for p in self.paulis))

    def rotation_matrix(self):
        r"""Returns the dense matrix of :math:`\exp(-i \frac{\theta}{2} \sigma P)`.

        Raises:
            InvalidAngleError: if the term carries no angle
        """
        if self.angle is None:
            raise InvalidAngleError("The rotation matrix of a term requires an angle.")
        dim = 2 ** len(self)
        half = self.angle / 2
        return np.cos(half) * np.eye(dim, dtype=np.complex128) - 1j * np.sin(half) * self.to_mat()
