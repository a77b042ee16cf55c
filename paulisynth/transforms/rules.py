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
The closed set of rewrite rules and their matchers.

A matcher is a pure function ``(circuit, position, context)`` returning a
:class:`Replacement` or ``None``. Matchers never modify the circuit; the
rewrite engine decides whether a replacement is committed.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from paulisynth.exceptions import ConfigurationError
from paulisynth.ops import Gate, GateType, is_commuting

from .graph_rewrite import (
    cnot_block,
    fuse_gadgets,
    fusion_groups,
    parity_matrix,
    synthesize_parity,
)
from .optimization_utils import can_merge, merged_rotation, same_operands


class RuleKind(Enum):
    """The rewrite rules known to the engine."""

    ADJACENT_CANCELLATION = "adjacent_cancellation"
    ROTATION_MERGE = "rotation_merge"
    COMMUTE_AND_CANCEL = "commute_and_cancel"
    SPIDER_FUSION = "spider_fusion"
    PIVOT = "pivot"  # CNOT-block parity resynthesis

    @classmethod
    def coerce(cls, value):
        """Return the rule named by ``value``."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "_").replace(" ", "_")
            for member in cls:
                if member.value == key:
                    return member
        raise ConfigurationError(
            f"Unknown rewrite rule {value!r}; expected one of {[m.value for m in cls]}."
        )


@dataclass(frozen=True)
class Replacement:
    """A proposed edit: remove the gates at ``removed`` and insert ``inserted``
    starting at index ``at`` of the shortened circuit."""

    removed: Tuple[int, ...]
    inserted: Tuple[Gate, ...]
    at: int
    kind: RuleKind


@dataclass
class RewriteContext:
    """Parameters shared by the matchers of one optimization run.

    Args:
        atol (float): tolerance of angle comparisons
        window (int): maximum number of gates a matcher examines ahead of its position
    """

    atol: float = 1e-9
    window: int = 16
    _cache: dict = field(default_factory=dict, repr=False)

    def cached(self, key, compute):
        """Return the analysis stored under ``key``, computing it on first use."""
        if key not in self._cache:
            self._cache[key] = compute()
        return self._cache[key]

    def invalidate(self):
        """Drop every cached analysis after the circuit was edited."""
        self._cache.clear()


def match_adjacent_cancellation(circuit, pos, context):  # pylint: disable=unused-argument
    """A gate followed by its inverse on the same qubits, with nothing in between
    touching those qubits."""
    gate = circuit[pos]
    nxt = circuit.next_overlapping(pos, gate.qubits)
    if nxt is None:
        return None
    other = circuit[nxt]
    if not same_operands(gate, other) or not gate.is_inverse_of(other):
        return None
    return Replacement((pos, nxt), (), pos, RuleKind.ADJACENT_CANCELLATION)


def match_rotation_merge(circuit, pos, context):
    """Two consecutive rotations about the same axis on the same qubit."""
    gate = circuit[pos]
    if not gate.is_rotation:
        return None
    nxt = circuit.next_gate_on(pos, gate.qubits[0])
    if nxt is None or not can_merge(gate, circuit[nxt]):
        return None
    merged = merged_rotation(gate, circuit[nxt], context.atol)
    inserted = () if merged is None else (merged,)
    return Replacement((pos, nxt), inserted, pos, RuleKind.ROTATION_MERGE)


def match_commute_and_cancel(circuit, pos, context):
    """A gate moved forward through gates it commutes with until it meets its
    inverse or a rotation it merges with."""
    gate = circuit[pos]
    cursor = pos
    for _ in range(context.window):
        cursor = circuit.next_overlapping(cursor, gate.qubits)
        if cursor is None:
            return None
        other = circuit[cursor]
        if same_operands(gate, other) and gate.is_inverse_of(other):
            return Replacement((pos, cursor), (), pos, RuleKind.COMMUTE_AND_CANCEL)
        if can_merge(gate, other):
            merged = merged_rotation(gate, other, context.atol)
            inserted = () if merged is None else (merged,)
            return Replacement((pos, cursor), inserted, pos, RuleKind.COMMUTE_AND_CANCEL)
        if not is_commuting(gate, other):
            return None
    return None


def match_spider_fusion(circuit, pos, context):
    """Z rotations acting on the same parity of path variables fuse into the first."""
    if circuit[pos].axis != "Z":
        return None
    groups = context.cached("fusion_groups", lambda: fusion_groups(circuit))
    group = groups.get(pos)
    if group is None:
        return None
    merged = fuse_gadgets(group, context.atol)
    inserted = () if merged is None else (merged,)
    removed = tuple(g.position for g in group)
    return Replacement(removed, inserted, pos, RuleKind.SPIDER_FUSION)


def match_pivot(circuit, pos, context):
    """A movable block of CNOTs resynthesized from its parity matrix with fewer CNOTs.

    The block is read as a GF(2) matrix recording which input qubits each output
    qubit depends on, and rebuilt by Gaussian elimination. This is a linear
    reversible rewrite of the CNOT network, not the ZX-calculus pivot.
    """
    if circuit[pos].name != GateType.CNOT:
        return None
    block = cnot_block(circuit, pos, 4 * context.window)
    if len(block) < 2:
        return None
    cnots = [circuit[p] for p in block]
    qubits = sorted({q for g in cnots for q in g.qubits})
    new_cnots = synthesize_parity(parity_matrix(cnots, qubits), qubits)
    if len(new_cnots) >= len(cnots):
        return None
    return Replacement(tuple(block), tuple(new_cnots), pos, RuleKind.PIVOT)


RULES = {
    RuleKind.ADJACENT_CANCELLATION: match_adjacent_cancellation,
    RuleKind.ROTATION_MERGE: match_rotation_merge,
    RuleKind.COMMUTE_AND_CANCEL: match_commute_and_cancel,
    RuleKind.SPIDER_FUSION: match_spider_fusion,
    RuleKind.PIVOT: match_pivot,
}
