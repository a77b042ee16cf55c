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
"""Code for the rewrite engine that runs the optimization pipeline to a fixed point."""
import logging
import warnings

from paulisynth.circuit import Circuit
from paulisynth.configuration import default_config, get_float, get_int
from paulisynth.exceptions import ConvergenceWarning, InvalidGateError
from paulisynth.logging import TRACE, debug_logger
from paulisynth.resource import CostModel

from .optimization_utils import restart_position
from .rules import RULES, RewriteContext, RuleKind

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


default_pipeline = (
    (RuleKind.ADJACENT_CANCELLATION,),
    (RuleKind.ROTATION_MERGE,),
    (RuleKind.COMMUTE_AND_CANCEL,),
    (RuleKind.SPIDER_FUSION, RuleKind.PIVOT),
)


def _normalize_passes(passes):
    if passes is None:
        return default_pipeline
    normalized = []
    for rules in passes:
        if isinstance(rules, (str, RuleKind)):
            rules = (rules,)
        normalized.append(tuple(RuleKind.coerce(r) for r in rules))
    return tuple(normalized)


def _cost_after(model, circuit, current, replacement):
    """Cost of the circuit once ``replacement`` is applied."""
    removed = [circuit[p] for p in replacement.removed]
    delta = model.delta(removed, replacement.inserted)
    if delta is not None:
        return (current[0] + delta[0], current[1] + delta[1])
    trial = circuit.copy()
    trial.replace(replacement.removed, replacement.inserted, replacement.at)
    return model.cost(trial)


def _run_pass(circuit, rules, model, context, stats):
    """Scan the circuit once with a worklist cursor, committing replacements in place.

    Returns:
        int: the number of committed replacements
    """
    commits = 0
    current = model.cost(circuit)
    pos = 0
    while pos < len(circuit):
        for kind in rules:
            replacement = RULES[kind](circuit, pos, context)
            # commits must shorten the circuit, even when an equal-length edit is cheaper
            if replacement is None or len(replacement.inserted) >= len(replacement.removed):
                continue
            after = _cost_after(model, circuit, current, replacement)
            if not model.accepts(current, after):
                continue

            qubits = {q for p in replacement.removed for q in circuit[p].qubits}
            restart = min(replacement.at, restart_position(circuit, replacement.removed, qubits))

            if logger.isEnabledFor(TRACE):  # pragma: no cover
                logger.log(
                    TRACE,
                    "%s at %d: %s -> %s",
                    kind.value,
                    pos,
                    [circuit[p] for p in replacement.removed],
                    list(replacement.inserted),
                )

            circuit.replace(replacement.removed, replacement.inserted, replacement.at)
            context.invalidate()
            current = after
            stats[kind.value] += 1
            commits += 1
            pos = restart
            break
        else:
            pos += 1
    return commits


def optimize(circuit, passes=None, cost=None, max_cycles=None, atol=None, window=None):
    """Rewrite a circuit with the rule pipeline until nothing changes.

    The default pipeline runs, in order:

    - cancellation of adjacent inverse gates
    - merging of consecutive rotations about the same axis
    - cancellation or merging of gates moved through commuting gates
    - spider fusion of Z rotations on the same parity, then CNOT block pivoting

    Each pass scans the circuit from the start; a replacement is committed when
    it removes more gates than it inserts and does not increase the cost, after
    which the scan resumes from the earliest gate the edit can affect. The
    pipeline repeats until a whole cycle commits nothing.

    Args:
        circuit (Circuit): the circuit; it is not modified
        passes (Sequence[Sequence[RuleKind or str]]): the pipeline, one tuple of
            rules per pass. Defaults to ``default_pipeline``.
        cost (CostModel or Metric or str): the cost that must not increase;
            defaults to the gate count
        max_cycles (int): maximum number of pipeline repetitions, defaults to the
            ``optimize.max_cycles`` configuration option (20)
        atol (float): tolerance of angle comparisons, defaults to ``optimize.atol``
        window (int): lookahead of the commutation rule, defaults to ``optimize.window``

    Returns:
        Circuit: the optimized circuit with ``converged``, ``cycles`` and
        ``rewrite_stats`` filled in

    Warns:
        ConvergenceWarning: if ``max_cycles`` is reached before a fixed point

    **Example**

    >>> c = Circuit(2, [H(0), H(0), CNOT(0, 1), RZ(1, 0.3), RZ(1, 0.7)])
    >>> optimized = optimize(c)
    >>> optimized.to_list()
    [('CNOT', (0, 1), None), ('RZ', (1,), 1.0)]
    >>> optimized.converged, optimized.cycles
    (True, 2)
    """
    if not isinstance(circuit, Circuit):
        raise InvalidGateError(f"optimize expects a Circuit; got {type(circuit).__name__}.")

    model = cost if isinstance(cost, CostModel) else CostModel(cost or "gate_count")
    passes = _normalize_passes(passes)
    if max_cycles is None:
        max_cycles = get_int(default_config, "optimize.max_cycles", minimum=1)
    if atol is None:
        atol = get_float(default_config, "optimize.atol")
    if window is None:
        window = get_int(default_config, "optimize.window", minimum=1)

    work = Circuit(circuit.num_qubits, circuit)
    context = RewriteContext(atol=atol, window=window)
    stats = {kind.value: 0 for kind in RuleKind}

    if logger.isEnabledFor(logging.DEBUG):  # pragma: no cover
        logger.debug(
            "Optimizing %r with %s, passes=%s, max_cycles=%s",
            work,
            model,
            [[k.value for k in p] for p in passes],
            max_cycles,
        )

    converged = False
    cycles = 0
    while cycles < max_cycles:
        cycles += 1
        commits = sum(_run_pass(work, rules, model, context, stats) for rules in passes)
        if logger.isEnabledFor(logging.DEBUG):  # pragma: no cover
            logger.debug("Cycle %d committed %d rewrites, cost %s", cycles, commits, model.cost(work))
        if commits == 0:
            converged = True
            break

    if not converged:
        warnings.warn(
            f"Rewriting stopped after {cycles} cycles without reaching a fixed point.",
            ConvergenceWarning,
        )

    work.converged = converged
    work.cycles = cycles
    work.rewrite_stats = stats
    return work


@debug_logger
def full_optimize(circuit, metric=None, max_cycles=None):
    """Optimize a circuit with the default pipeline.

    Args:
        circuit (Circuit): the circuit to optimize
        metric (Metric or str or None): the cost that must not increase,
            defaults to the gate count
        max_cycles (int or None): maximum number of pipeline repetitions

    Returns:
        Circuit: the optimized circuit
    """
    return optimize(circuit, cost=metric, max_cycles=max_cycles)
