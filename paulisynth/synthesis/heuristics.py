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
Greedy scoring functions of the Pauli-network synthesis engine.

The engine keeps the phase-free frames :math:`C P C^\dagger` of the next
pending terms as binary ``(L, N)`` arrays and scores candidate moves by the
total weight those frames would have afterwards.
"""
import numpy as np

from paulisynth.ops import CNOT, GateType, H, Sdg, rotation_gate
from paulisynth.resource import CostModel, Metric


def frame_arrays(graph_state, terms):
    """Return the phase-free frames of ``terms`` under the tableau as ``(fx, fz)``."""
    n = graph_state.num_qubits
    if not terms:
        empty = np.zeros((0, n), dtype=np.uint8)
        return empty, empty.copy()
    px = np.zeros((len(terms), n), dtype=np.uint8)
    pz = np.zeros((len(terms), n), dtype=np.uint8)
    for i, term in enumerate(terms):
        px[i], pz[i] = term.xz()
    return graph_state.conjugate_xz(px, pz)


def frame_weights(fx, fz):
    """Number of non-identity Paulis in each frame."""
    return np.sum(fx | fz, axis=1)


def apply_to_frames(fx, fz, gate):
    """Conjugate the frames in place by a Clifford gate, ignoring signs."""
    q = gate.qubits
    if gate.name == GateType.H:
        fx[:, q[0]], fz[:, q[0]] = fz[:, q[0]].copy(), fx[:, q[0]].copy()
    elif gate.name in (GateType.S, GateType.SDG):
        fz[:, q[0]] ^= fx[:, q[0]]
    elif gate.name == GateType.CNOT:
        c, t = q
        fx[:, t] ^= fx[:, c]
        fz[:, c] ^= fz[:, t]


def advance_levels(levels, gate):
    """Update the as-soon-as-possible layer reached on each qubit after ``gate``."""
    lvl = max(levels[q] for q in gate.qubits) + 1
    for q in gate.qubits:
        levels[q] = lvl


def cnot_weight(fx, fz, control, target):
    """Total frame weight after a ``CNOT(control, target)``, frames left unchanged."""
    if fx.shape[0] == 0:
        return 0
    xc, zc, xt, zt = fx[:, control], fz[:, control], fx[:, target], fz[:, target]
    before = np.sum(xc | zc) + np.sum(xt | zt)
    after = np.sum(xc | (zc ^ zt)) + np.sum((xt ^ xc) | zt)
    return int(np.sum(fx | fz) - before + after)


def _as_model(cost):
    return cost if isinstance(cost, CostModel) else CostModel(cost)


def emitted_gates(fx_row, fz_row, angle):
    """Gates that implement a term with the phase-free frame ``(fx_row, fz_row)``.

    The CNOTs are laid out as a chain over the support; the engine picks its
    own pairs, so only their number is exact.
    """
    support = [int(q) for q in np.flatnonzero(fx_row | fz_row)]
    gates = []
    for q in support:
        if fx_row[q] and fz_row[q]:
            gates.extend([Sdg(q), H(q)])
        elif fx_row[q]:
            gates.append(H(q))
    gates.extend(CNOT(c, t) for c, t in zip(support[:-1], support[1:]))
    if support and angle is not None:
        rotation = rotation_gate("Z", support[-1], angle)
        if rotation is not None:
            gates.append(rotation)
    return gates


def choose_cnot(support, fx, fz, cost, levels):
    """Pick the CNOT that removes one qubit from a Z-only support.

    Every ordered pair ``(c, t)`` of support qubits is a candidate; ``CNOT(c, t)``
    removes ``c``. The score is the total weight of the lookahead frames after
    the CNOT, preceded by the layer the CNOT lands in for the depth metric.
    Equal scores are broken by the cost model, then by the smallest ``(c, t)``.

    Args:
        support (list[int]): qubits of the Z-only support
        fx, fz (array[uint8]): lookahead frames
        cost (CostModel or Metric or str): the cost model
        levels (list[int]): layer reached on each qubit

    Returns:
        tuple[int, int]: the control and target qubits
    """
    model = _as_model(cost)
    best, best_score = None, None
    for c in support:
        for t in support:
            if c == t:
                continue
            weight = cnot_weight(fx, fz, c, t)
            extra = model.append_delta([CNOT(c, t)], levels)
            if model.metric == Metric.DEPTH:
                score = (max(levels[c], levels[t]) + 1, weight, extra, c, t)
            else:
                score = (weight, extra, c, t)
            if best_score is None or score < best_score:
                best, best_score = (c, t), score
    return best


def choose_term(pending, graph_state, cost, lookahead, levels):
    """Pick the next term to implement when reordering is allowed.

    Among the first ``lookahead`` pending terms, a term is a candidate when it
    commutes with every pending term before it. Candidates are scored by frame
    weight, or by ``(estimated depth, frame weight)`` for the depth metric.
    Equal scores go to the term whose gates cost least under the cost model,
    then to the earliest term.

    Returns:
        int: index of the chosen term in ``pending``
    """
    model = _as_model(cost)
    window = pending[:lookahead]
    fx, fz = frame_arrays(graph_state, window)
    weights = frame_weights(fx, fz)

    best, best_score = 0, None
    for i, term in enumerate(window):
        if not all(term.commutes_with(earlier) for earlier in window[:i]):
            continue
        weight = int(weights[i])
        extra = model.append_delta(emitted_gates(fx[i], fz[i], term.angle), levels)
        if model.metric == Metric.DEPTH:
            support = np.flatnonzero(fx[i] | fz[i])
            start = max((levels[q] for q in support), default=0)
            score = (start + max(weight - 1, 0), weight, extra, i)
        else:
            score = (weight, extra, i)
        if best_score is None or score < best_score:
            best, best_score = i, score
    return best
