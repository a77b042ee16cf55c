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
r"""
This module contains the :class:`GraphState` stabilizer tableau that tracks the
Clifford frame accumulated during Pauli-network synthesis.
"""
import math

import numpy as np

from paulisynth.exceptions import NonCliffordGateError, QubitOutOfRangeError
from paulisynth.ops import GateType
from paulisynth.pauli import PauliTerm


class GraphState:
    r"""Symplectic tableau of a Clifford unitary :math:`C`.

    The tableau has :math:`2N` rows over :math:`N` qubits, stored as the binary
    arrays ``x`` and ``z`` of shape ``(2N, N)`` and the sign bits ``r`` of
    shape ``(2N,)``. Row :math:`i < N` is the destabilizer :math:`C X_i C^\dagger`
    and row :math:`N + i` the stabilizer :math:`C Z_i C^\dagger`. A ``Y`` is
    encoded as ``x = z = 1``; ``r = 1`` marks a negative sign.

    A new tableau describes the identity, that is the all-zero state
    :math:`|0\dots0\rangle` stabilized by every :math:`Z_i`. Applying a gate
    :math:`G` replaces :math:`C` by :math:`G C`, conjugating every row.

    Args:
        num_qubits (int): number of qubits

    **Example**

    >>> gs = GraphState(2)
    >>> gs.apply_h(0)
    >>> gs.apply_cnot(0, 1)
    >>> gs.stabilizers()
    [PauliTerm('XX'), PauliTerm('ZZ')]
    >>> gs.measure_pauli_support(PauliTerm("ZI", angle=0.1))
    PauliTerm('XX', angle=0.1)
    """

    def __init__(self, num_qubits):
        if isinstance(num_qubits, bool) or not isinstance(num_qubits, int) or num_qubits < 0:
            raise QubitOutOfRangeError(
                f"The number of qubits must be a non-negative integer; got {num_qubits!r}."
            )
        n = num_qubits
        self.num_qubits = n
        self.x = np.zeros((2 * n, n), dtype=np.uint8)
        self.z = np.zeros((2 * n, n), dtype=np.uint8)
        self.r = np.zeros(2 * n, dtype=np.uint8)
        self.x[np.arange(n), np.arange(n)] = 1
        self.z[n + np.arange(n), np.arange(n)] = 1

        self._dispatch = {
            GateType.H: self.apply_h,
            GateType.S: self.apply_s,
            GateType.SDG: self.apply_sdg,
            GateType.X: self.apply_x,
            GateType.Y: self.apply_y,
            GateType.Z: self.apply_z,
            GateType.CNOT: self.apply_cnot,
            GateType.CZ: self.apply_cz,
            GateType.SWAP: self.apply_swap,
        }

    @classmethod
    def new(cls, num_qubits):
        """Return the identity tableau on ``num_qubits`` qubits."""
        return cls(num_qubits)

    def __eq__(self, other):
        if not isinstance(other, GraphState):
            return NotImplemented
        return (
            self.num_qubits == other.num_qubits
            and np.array_equal(self.x, other.x)
            and np.array_equal(self.z, other.z)
            and np.array_equal(self.r, other.r)
        )

    def __repr__(self):
        return f"<GraphState: qubits={self.num_qubits}>"

    def copy(self):
        """Return an independent copy of the tableau."""
        new = GraphState(self.num_qubits)
        new.x = self.x.copy()
        new.z = self.z.copy()
        new.r = self.r.copy()
        return new

    def _check(self, *qubits):
        for q in qubits:
            if isinstance(q, bool) or not isinstance(q, (int, np.integer)) or not 0 <= q < self.num_qubits:
                raise QubitOutOfRangeError(
                    f"Qubit {q!r} is out of range for a tableau on {self.num_qubits} qubits."
                )

    # -------------------------------------------------------------------------
    # conjugation updates
    # -------------------------------------------------------------------------

    def apply_h(self, q):
        """Conjugate by a Hadamard: X and Z swap, Y picks up a sign."""
        self._check(q)
        self.r ^= self.x[:, q] & self.z[:, q]
        self.x[:, q], self.z[:, q] = self.z[:, q].copy(), self.x[:, q].copy()

    def apply_s(self, q):
        """Conjugate by S: X to Y, Y to -X."""
        self._check(q)
        self.r ^= self.x[:, q] & self.z[:, q]
        self.z[:, q] ^= self.x[:, q]

    def apply_sdg(self, q):
        """Conjugate by S dagger: X to -Y, Y to X."""
        self._check(q)
        self.r ^= self.x[:, q] & (self.z[:, q] ^ 1)
        self.z[:, q] ^= self.x[:, q]

    def apply_x(self, q):
        """Conjugate by X: Z and Y flip sign."""
        self._check(q)
        self.r ^= self.z[:, q]

    def apply_y(self, q):
        """Conjugate by Y: X and Z flip sign."""
        self._check(q)
        self.r ^= self.x[:, q] ^ self.z[:, q]

    def apply_z(self, q):
        """Conjugate by Z: X and Y flip sign."""
        self._check(q)
        self.r ^= self.x[:, q]

    def apply_cnot(self, control, target):
        """Conjugate by a CNOT."""
        self._check(control, target)
        if control == target:
            raise QubitOutOfRangeError("CNOT control and target must differ.")
        xc, zc = self.x[:, control], self.z[:, control]
        xt, zt = self.x[:, target], self.z[:, target]
        self.r ^= xc & zt & (xt ^ zc ^ 1)
        self.x[:, target] = xt ^ xc
        self.z[:, control] = zc ^ zt

    def apply_cz(self, a, b):
        """Conjugate by a CZ, as H(b) CNOT(a, b) H(b)."""
        self.apply_h(b)
        self.apply_cnot(a, b)
        self.apply_h(b)

    def apply_swap(self, a, b):
        """Conjugate by a SWAP by exchanging the columns of both qubits."""
        self._check(a, b)
        self.x[:, [a, b]] = self.x[:, [b, a]]
        self.z[:, [a, b]] = self.z[:, [b, a]]

    def _apply_quarter_turns(self, axis, q, turns):
        """Conjugate by a rotation of ``turns`` quarter turns about ``axis``."""
        turns %= 4
        if turns == 0:
            return
        if axis == "X":
            self.apply_h(q)
            self._apply_quarter_turns("Z", q, turns)
            self.apply_h(q)
        elif axis == "Y":
            self.apply_sdg(q)
            self._apply_quarter_turns("X", q, turns)
            self.apply_s(q)
        else:
            {1: self.apply_s, 2: self.apply_z, 3: self.apply_sdg}[turns](q)

    def apply_gate(self, gate):
        """Conjugate the tableau by a Clifford gate.

        Rotation gates are accepted when their angle is a multiple of pi/2.

        Raises:
            NonCliffordGateError: if the gate is not a Clifford gate
        """
        func = self._dispatch.get(gate.name)
        if func is not None:
            func(*gate.qubits)
            return
        if gate.is_rotation and gate.is_clifford:
            turns = int(round(gate.rotation_angle / (math.pi / 2)))
            self._apply_quarter_turns(gate.axis, gate.qubits[0], turns)
            return
        raise NonCliffordGateError(f"Cannot apply the non-Clifford gate {gate!r} to a tableau.")

    # -------------------------------------------------------------------------
    # queries
    # -------------------------------------------------------------------------

    def measure_pauli_support(self, term):
        r"""Return the image :math:`C \sigma P C^\dagger` of a Pauli term.

        The image is accumulated as a product of tableau rows in the
        :math:`i^e X^x Z^z` form, which keeps the phase exact.

        Args:
            term (PauliTerm): the term on ``num_qubits`` qubits

        Returns:
            PauliTerm: the conjugated term, carrying the angle of ``term``
        """
        n = self.num_qubits
        if len(term) != n:
            raise QubitOutOfRangeError(
                f"Term {term} has {len(term)} qubits; the tableau has {n}."
            )
        px, pz = term.xz()
        x = np.zeros(n, dtype=np.uint8)
        z = np.zeros(n, dtype=np.uint8)
        e = 2 * (term.sign < 0) + int(np.sum(px & pz))

        for k in range(n):
            for row, bit in ((k, px[k]), (n + k, pz[k])):
                if not bit:
                    continue
                rx, rz = self.x[row], self.z[row]
                e += 2 * int(self.r[row]) + int(np.sum(rx & rz))
                e += 2 * int(np.sum(z & rx))
                x ^= rx
                z ^= rz

        phase = (e - int(np.sum(x & z))) % 4
        sign = 1 if phase == 0 else -1
        return PauliTerm.from_xz(x, z, sign, term.angle)

    def conjugate_xz(self, px, pz):
        """Phase-free images of a batch of Paulis.

        Args:
            px (array[int]): ``(L, N)`` X bits of the Paulis
            pz (array[int]): ``(L, N)`` Z bits of the Paulis

        Returns:
            tuple[array[uint8], array[uint8]]: the X and Z bits of the images
        """
        n = self.num_qubits
        px = np.asarray(px, dtype=np.int64)
        pz = np.asarray(pz, dtype=np.int64)
        dx, dz = self.x[:n].astype(np.int64), self.z[:n].astype(np.int64)
        sx, sz = self.x[n:].astype(np.int64), self.z[n:].astype(np.int64)
        fx = (px @ dx + pz @ sx) % 2
        fz = (px @ dz + pz @ sz) % 2
        return fx.astype(np.uint8), fz.astype(np.uint8)

    def _rows(self, rows):
        return [
            PauliTerm.from_xz(self.x[i], self.z[i], -1 if self.r[i] else 1) for i in rows
        ]

    def destabilizers(self):
        """Copies of the destabilizer rows."""
        return self._rows(range(self.num_qubits))

    def stabilizers(self):
        """Copies of the stabilizer rows."""
        return self._rows(range(self.num_qubits, 2 * self.num_qubits))

    def tableau(self):
        """Return a copy of the ``2N x (2N + 1)`` binary matrix ``[x | z | r]``."""
        return np.hstack([self.x, self.z, self.r[:, None]]).astype(np.uint8)

    def is_identity(self):
        """Whether the tableau describes the identity, signs included."""
        return self == GraphState(self.num_qubits)

    def is_valid(self):
        """Check the symplectic invariant of the tableau.

        Stabilizers commute with each other, destabilizers commute with each
        other, and destabilizer ``i`` anticommutes with stabilizer ``i`` only.
        """
        n = self.num_qubits
        x = self.x.astype(np.int64)
        z = self.z.astype(np.int64)
        product = (x @ z.T + z @ x.T) % 2
        expected = np.zeros((2 * n, 2 * n), dtype=np.int64)
        expected[:n, n:] = np.eye(n, dtype=np.int64)
        expected[n:, :n] = np.eye(n, dtype=np.int64)
        return bool(np.array_equal(product, expected))
