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
Structural rewrites that extract a region of the circuit into a graph or a
matrix, rewrite it there and emit it back as gates.

* Spider fusion extracts the circuit into a phase-gadget graph. Every wire
  carries an affine parity over path variables; ``CNOT``, ``X``, ``SWAP`` and
  ``CZ`` transform the parities, any other non-diagonal gate starts a fresh
  variable. Each Z rotation becomes a gadget node joined to the variables of its
  parity. Gadgets with the same neighbourhood are phases on the same parity and
  fuse into the first of them.
* Pivoting extracts a movable block of CNOTs into its GF(2) parity matrix and
  resynthesizes it by Gaussian elimination.
"""
from collections import defaultdict
from dataclasses import dataclass

import numpy as np
import rustworkx as rx

from paulisynth.ops import CNOT, GateType, rotation_gate


@dataclass(frozen=True)
class PhaseGadget:
    """A Z rotation seen as a phase on a parity of path variables.

    Args:
        position (int): position of the rotation in the circuit
        qubit (int): the qubit it acts on
        angle (float): the rotation angle with respect to the parity without
            its constant part
        flipped (bool): whether the wire carried the complemented parity
    """

    position: int
    qubit: int
    angle: float
    flipped: bool


def phase_gadget_graph(circuit):
    """Extract the phase-gadget graph of a circuit.

    Args:
        circuit (Circuit): the circuit

    Returns:
        tuple[rustworkx.PyGraph, list[int]]: the graph, whose nodes hold either
        a :class:`PhaseGadget` or the qubit that opened a path variable, and the
        node indices of the gadgets in circuit order

    **Example**

    >>> c = Circuit(2, [RZ(1, 0.1), CNOT(0, 1), CNOT(0, 1), RZ(1, 0.2)])
    >>> graph, gadgets = phase_gadget_graph(c)
    >>> [sorted(graph.neighbors(g)) for g in gadgets]
    [[1], [1]]
    """
    graph = rx.PyGraph(multigraph=False)
    variables = []
    mask = [0] * circuit.num_qubits
    const = [0] * circuit.num_qubits

    def fresh(q):
        mask[q] = 1 << len(variables)
        const[q] = 0
        variables.append(graph.add_node(q))

    for q in range(circuit.num_qubits):
        fresh(q)

    gadgets = []
    for pos, gate in enumerate(circuit):
        name = gate.name
        if name == GateType.CNOT:
            c, t = gate.qubits
            mask[t] ^= mask[c]
            const[t] ^= const[c]
        elif name == GateType.X:
            const[gate.qubits[0]] ^= 1
        elif name == GateType.SWAP:
            a, b = gate.qubits
            mask[a], mask[b] = mask[b], mask[a]
            const[a], const[b] = const[b], const[a]
        elif name == GateType.CZ:
            continue
        elif gate.axis == "Z":
            q = gate.qubits[0]
            angle = -gate.rotation_angle if const[q] else gate.rotation_angle
            node = graph.add_node(PhaseGadget(pos, q, angle, bool(const[q])))
            bits, var = mask[q], 0
            while bits:
                if bits & 1:
                    graph.add_edge(node, variables[var], None)
                bits >>= 1
                var += 1
            gadgets.append(node)
        else:
            for q in gate.qubits:
                fresh(q)

    return graph, gadgets


def fusion_groups(circuit):
    """Group the Z rotations of a circuit that act on the same parity.

    Returns:
        dict[int, list[PhaseGadget]]: for every group of at least two gadgets,
        the position of its first gadget mapped to the gadgets in circuit order
    """
    graph, gadgets = phase_gadget_graph(circuit)
    groups = defaultdict(list)
    for node in gadgets:
        groups[frozenset(graph.neighbors(node))].append(graph[node])
    return {group[0].position: group for group in groups.values() if len(group) > 1}


def fuse_gadgets(group, atol):
    """Emit the single rotation implementing a group of gadgets, or ``None``."""
    first = group[0]
    total = sum(g.angle for g in group)
    if first.flipped:
        total = -total
    return rotation_gate("Z", first.qubit, total, atol=atol)


def cnot_block(circuit, pos, limit):
    """Positions of the maximal movable block of CNOTs starting at ``pos``.

    A later CNOT joins the block when none of its qubits is touched by a gate
    left outside the block, so the whole block can be gathered at ``pos``.

    Args:
        circuit (Circuit): the circuit
        pos (int): position of the first CNOT
        limit (int): maximum number of gates examined after ``pos``

    Returns:
        list[int]: block positions in order
    """
    block = [pos]
    blocked = set()
    end = min(len(circuit), pos + 1 + limit)
    for j in range(pos + 1, end):
        gate = circuit[j]
        if gate.name == GateType.CNOT and not blocked.intersection(gate.qubits):
            block.append(j)
        else:
            blocked.update(gate.qubits)
            if len(blocked) == circuit.num_qubits:
                break
    return block


def parity_matrix(cnots, qubits):
    """GF(2) matrix whose row ``i`` is the parity carried by ``qubits[i]`` after the CNOTs."""
    index = {q: i for i, q in enumerate(qubits)}
    matrix = np.eye(len(qubits), dtype=np.uint8)
    for gate in cnots:
        c, t = gate.qubits
        matrix[index[t]] ^= matrix[index[c]]
    return matrix


def gaussian_elimination(matrix):
    """Reduce an invertible GF(2) matrix to the identity with row additions.

    Returns:
        list[tuple[int, int]]: the ``(target, source)`` row additions, in order
    """
    m = np.array(matrix, dtype=np.uint8)
    size = m.shape[0]
    ops = []
    for col in range(size):
        if not m[col, col]:
            pivot = next(r for r in range(col + 1, size) if m[r, col])
            m[col] ^= m[pivot]
            ops.append((col, pivot))
        for row in range(size):
            if row != col and m[row, col]:
                m[row] ^= m[col]
                ops.append((row, col))
    return ops


def synthesize_parity(matrix, qubits):
    """Return CNOTs implementing a linear reversible map given by its parity matrix."""
    ops = gaussian_elimination(matrix)
    return [CNOT(qubits[source], qubits[target]) for target, source in reversed(ops)]
