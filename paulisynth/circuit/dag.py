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
This module builds the commutation DAG of a :class:`~.Circuit`.
"""
import networkx as nx

from paulisynth.ops import is_commuting


def commutation_dag(circuit):
    r"""Represent a circuit as a directed acyclic graph of gate dependencies.

    Nodes are gate positions carrying the gate under the ``"gate"`` attribute.
    There is a path from node ``i`` to node ``j > i`` whenever the gates share a
    qubit and do not commute; the edge set is transitively reduced, so edges
    only join gates with no other dependency between them. Any topological
    order of the DAG implements the same unitary as the circuit.

    Args:
        circuit (Circuit): the circuit

    Returns:
        networkx.DiGraph: the commutation DAG

    **Example**

    >>> c = Circuit(2, [CNOT(0, 1), RZ(0, 0.1), CNOT(0, 1), H(1)])
    >>> sorted(commutation_dag(c).edges())
    [(0, 3), (2, 3)]
    """
    graph = nx.DiGraph()
    for pos, gate in enumerate(circuit):
        graph.add_node(pos, gate=gate)

    for pos, gate in enumerate(circuit):
        for q in gate.qubits:
            prev = circuit.previous_gate_on(pos, q)
            while prev is not None:
                if not is_commuting(circuit[prev], gate):
                    graph.add_edge(prev, pos)
                prev = circuit.previous_gate_on(prev, q)

    reduced = nx.transitive_reduction(graph)
    reduced.add_nodes_from(graph.nodes(data=True))
    return reduced
