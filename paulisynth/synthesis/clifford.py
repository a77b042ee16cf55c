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
Resynthesis of the Clifford unitary stored in a :class:`~.GraphState`.
"""
from paulisynth.ops import CNOT, H, S, X, Z


def _emit(state, gates, gate):
    state.apply_gate(gate)
    gates.append(gate)


def _clear_destabilizer(state, gates, i):
    """Drive destabilizer ``i`` to ``+-X_i`` with gates on qubits ``>= i``."""
    n = state.num_qubits
    row = i
    for k in range(i, n):
        x, z = state.x[row, k], state.z[row, k]
        if x and z:
            _emit(state, gates, S(k))
        elif z:
            _emit(state, gates, H(k))

    support = [k for k in range(i, n) if state.x[row, k]]
    if i not in support:
        _emit(state, gates, CNOT(support[0], i))
    for k in support:
        if k != i:
            _emit(state, gates, CNOT(i, k))


def _clear_stabilizer(state, gates, i):
    """Drive stabilizer ``i`` to ``+-Z_i`` keeping destabilizer ``i`` at ``+-X_i``."""
    n = state.num_qubits
    row = n + i
    if state.x[row, i]:
        # maps X to X and Y to Z on qubit i
        for gate in (H(i), S(i), H(i)):
            _emit(state, gates, gate)

    for k in range(i + 1, n):
        x, z = state.x[row, k], state.z[row, k]
        if x and z:
            _emit(state, gates, S(k))
            _emit(state, gates, H(k))
        elif x:
            _emit(state, gates, H(k))

    for k in range(i + 1, n):
        if state.z[row, k]:
            _emit(state, gates, CNOT(k, i))


def synthesize_inverse(graph_state):
    r"""Return a gate list implementing :math:`C^\dagger` for the Clifford
    :math:`C` stored in ``graph_state``.

    A copy of the tableau is reduced to the identity one qubit at a time: the
    destabilizer is turned into :math:`\pm X_i`, the stabilizer into
    :math:`\pm Z_i`, and the remaining signs are fixed with Pauli gates. The
    gates applied during the reduction, in order, implement the inverse.

    Args:
        graph_state (GraphState): the tableau, left unchanged

    Returns:
        list[Gate]: the gates, in application order
    """
    state = graph_state.copy()
    gates = []
    n = state.num_qubits

    for i in range(n):
        _clear_destabilizer(state, gates, i)
        _clear_stabilizer(state, gates, i)

    for i in range(n):
        if state.r[i]:
            _emit(state, gates, Z(i))
        if state.r[n + i]:
            _emit(state, gates, X(i))

    return gates


def synthesize_clifford(graph_state):
    r"""Return a gate list implementing the Clifford :math:`C` stored in ``graph_state``.

    >>> gs = GraphState(2)
    >>> gs.apply_h(0)
    >>> gs.apply_cnot(0, 1)
    >>> replay = GraphState(2)
    >>> for g in synthesize_clifford(gs):
    ...     replay.apply_gate(g)
    >>> replay == gs
    True
    """
    return [g.inverse() for g in reversed(synthesize_inverse(graph_state))]
