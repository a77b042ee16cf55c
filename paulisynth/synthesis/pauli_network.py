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
Pauli-network synthesis: scheduling a sequence of Pauli rotations into a
Clifford + single-qubit rotation circuit.
"""
import logging
import math
from dataclasses import dataclass
from typing import Optional

from paulisynth.circuit import Circuit
from paulisynth.configuration import default_config, get_float, get_int
from paulisynth.exceptions import (
    ConfigurationError,
    InvalidAngleError,
    InvalidPauliError,
    SynthesisBudgetError,
)
from paulisynth.logging import TRACE, debug_logger
from paulisynth.ops import CNOT, DEFAULT_ATOL, H, Sdg, normalize_angle, rotation_gate
from paulisynth.pauli import PauliTerm, merge_adjacent_duplicates, parse_pauli_network, validate_terms
from paulisynth.resource import CostModel, Metric

from .clifford import synthesize_inverse
from .graph_state import GraphState
from .heuristics import (
    advance_levels,
    apply_to_frames,
    choose_cnot,
    choose_term,
    frame_arrays,
)

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


@dataclass
class SynthesisOptions:
    """Options of a Pauli-network synthesis call.

    Args:
        metric (Metric or str): the cost to minimize
        preserve_order (bool): implement the terms in input order; otherwise a
            term may move ahead of pending terms it commutes with
        qubit_count (int or None): declared number of qubits, checked against the terms
        merge_duplicates (bool): sum the angles of adjacent equal terms first
        upto_clifford (bool): skip the final Clifford that undoes the accumulated
            frame; the circuit then equals the network only up to that Clifford
        lookahead (int): number of pending terms considered by the heuristics
        max_steps (int or None): maximum number of term diagonalizations
        default_angle (float): angle given to terms without one
    """

    metric: Metric = Metric.GATE_COUNT
    preserve_order: bool = True
    qubit_count: Optional[int] = None
    merge_duplicates: bool = False
    upto_clifford: bool = False
    lookahead: int = 16
    max_steps: Optional[int] = None
    default_angle: float = math.pi / 4

    def __post_init__(self):
        self.metric = Metric.coerce(self.metric)
        if isinstance(self.lookahead, bool) or not isinstance(self.lookahead, int) or self.lookahead < 1:
            raise ConfigurationError(f"lookahead must be a positive integer; got {self.lookahead!r}.")
        if self.max_steps is not None and (
            isinstance(self.max_steps, bool) or not isinstance(self.max_steps, int) or self.max_steps < 0
        ):
            raise ConfigurationError(
                f"max_steps must be a non-negative integer or None; got {self.max_steps!r}."
            )
        if (
            isinstance(self.default_angle, bool)
            or not isinstance(self.default_angle, (int, float))
            or not math.isfinite(self.default_angle)
            or self.default_angle < 0
        ):
            raise InvalidAngleError(
                f"default_angle must be a finite non-negative number; got {self.default_angle!r}."
            )

    @classmethod
    def from_config(cls, config=None, **overrides):
        """Build options from a :class:`~.Configuration`, keyword arguments taking precedence."""
        config = default_config if config is None else config
        values = {
            "metric": config.get("synthesis.metric"),
            "lookahead": get_int(config, "synthesis.lookahead", minimum=1),
            "default_angle": get_float(config, "synthesis.default_angle"),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


class _Emitter:
    """Appends gates to the output circuit while keeping the tableau, the
    lookahead frames and the per-qubit layers in step."""

    def __init__(self, circuit, state, model):
        self.circuit = circuit
        self.state = state
        self.model = model
        self.levels = [0] * circuit.num_qubits
        self.fx = self.fz = None

    def clifford(self, gate):
        self.circuit.append(gate)
        self.state.apply_gate(gate)
        if self.fx is not None:
            apply_to_frames(self.fx, self.fz, gate)
        advance_levels(self.levels, gate)

    def rotation(self, gate):
        self.circuit.append(gate)
        advance_levels(self.levels, gate)


def _implement_term(term, window, emitter):
    """Diagonalize one term in the current frame and emit its rotation."""
    state = emitter.state
    image = state.measure_pauli_support(term)
    emitter.fx, emitter.fz = frame_arrays(state, window)

    for q, p in enumerate(image.paulis):
        if p == "X":
            emitter.clifford(H(q))
        elif p == "Y":
            emitter.clifford(Sdg(q))
            emitter.clifford(H(q))

    support = list(image.support)
    while len(support) > 1:
        control, target = choose_cnot(
            support, emitter.fx, emitter.fz, emitter.model, emitter.levels
        )
        emitter.clifford(CNOT(control, target))
        support.remove(control)

    # the frame now maps the term onto a single signed Z
    image = state.measure_pauli_support(term)
    qubit = support[0]
    gate = rotation_gate("Z", qubit, image.sign * term.angle)
    if gate is not None:
        emitter.rotation(gate)

    if logger.isEnabledFor(TRACE):  # pragma: no cover
        logger.log(TRACE, "Term %r implemented on qubit %d as %r", term, qubit, gate)


def _is_trivial(term):
    return term.is_identity or abs(normalize_angle(term.angle)) <= DEFAULT_ATOL


def synthesize(terms, options=None):
    r"""Synthesize a circuit implementing a sequence of Pauli rotations.

    The circuit implements :math:`\prod_j \exp(-i \frac{\theta_j}{2} \sigma_j P_j)`
    with the first term applied first. Each non-trivial term is diagonalized
    once in the Clifford frame accumulated so far: single-qubit gates map it
    onto Z's, CNOTs chosen greedily against the upcoming terms shrink it to a
    single qubit, and a Z rotation implements it there. The frame is never
    undone between terms; a single Clifford appended at the end restores it.

    Args:
        terms (Sequence[PauliTerm]): the Pauli network
        options (SynthesisOptions): synthesis options; defaults to ``SynthesisOptions()``

    Returns:
        Circuit: the synthesized circuit

    Raises:
        ContractViolation: if the terms are inconsistent; nothing is synthesized
        SynthesisBudgetError: if more than ``options.max_steps`` terms need a
            diagonalization
    """
    options = SynthesisOptions() if options is None else options
    terms = list(terms)
    for t in terms:
        if not isinstance(t, PauliTerm):
            raise InvalidPauliError(f"Expected PauliTerm instances; got {type(t).__name__}.")
    num_qubits = validate_terms(terms, options.qubit_count)

    pending = [t.with_angle(options.default_angle) if t.angle is None else t for t in terms]
    if options.merge_duplicates:
        pending = merge_adjacent_duplicates(pending)

    if logger.isEnabledFor(logging.DEBUG):  # pragma: no cover
        logger.debug(
            "Synthesizing %d terms on %d qubits with %s",
            len(pending),
            num_qubits,
            options,
        )

    state = GraphState(num_qubits)
    circuit = Circuit(num_qubits)
    emitter = _Emitter(circuit, state, CostModel(options.metric))
    steps = 0

    while pending:
        if options.preserve_order:
            idx = 0
        else:
            idx = choose_term(pending, state, emitter.model, options.lookahead, emitter.levels)
        term = pending.pop(idx)
        if _is_trivial(term):
            continue
        if options.max_steps is not None and steps >= options.max_steps:
            raise SynthesisBudgetError(
                f"Synthesis stopped after {steps} steps with {len(pending) + 1} terms pending."
            )
        steps += 1
        _implement_term(term, pending[: options.lookahead], emitter)

    if not options.upto_clifford:
        emitter.fx = None
        for gate in synthesize_inverse(state):
            circuit.append(gate)

    if logger.isEnabledFor(logging.DEBUG):  # pragma: no cover
        logger.debug(
            "Synthesized %d gates (%d two-qubit) over %d steps",
            circuit.gate_count,
            circuit.two_qubit_count,
            steps,
        )
    return circuit


@debug_logger
def pauli_network_synthesis(paulis, metric=None, preserve_order=True, **options):
    """Synthesize a Pauli network into a circuit.

    Args:
        paulis (Iterable): the Pauli network; entries are :class:`~.PauliTerm`
            instances, strings such as ``"XZ"`` or ``"-XZ"``, or ``(string, angle)`` pairs
        metric (Metric or str or None): the cost to minimize; defaults to the
            ``synthesis.metric`` configuration option (gate count)
        preserve_order (bool): keep the terms in input order
        **options: further :class:`~.SynthesisOptions` fields

    Returns:
        Circuit: the synthesized circuit

    **Example**

    >>> circuit = pauli_network_synthesis([("XX", 0.3), ("ZZ", 0.2)])
    >>> analyze_circuit(circuit)["t_count"]
    2
    """
    terms = parse_pauli_network(paulis)
    opts = SynthesisOptions.from_config(metric=metric, preserve_order=preserve_order, **options)
    return synthesize(terms, opts)
