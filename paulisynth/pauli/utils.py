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
"""Utility functions for sequences of Pauli terms."""
from itertools import combinations

from paulisynth.exceptions import (
    InvalidAngleError,
    InvalidPauliError,
    LengthMismatchError,
    QubitOutOfRangeError,
)

from .pauli_term import PauliTerm


def parse_pauli_network(paulis):
    """Convert a user supplied Pauli network into a list of :class:`~.PauliTerm`.

    Each entry may be a :class:`~.PauliTerm`, a string such as ``"XZ"`` or
    ``"-XZ"``, or a ``(string, angle)`` pair.

    Args:
        paulis (Iterable): the Pauli network

    Returns:
        list[PauliTerm]: the parsed terms, in input order

    Raises:
        InvalidPauliError: if an entry has an unsupported type

    **Example**

    >>> parse_pauli_network(["XX", ("-ZI", 0.5), PauliTerm("YY")])
    [PauliTerm('XX'), PauliTerm('-ZI', angle=0.5), PauliTerm('YY')]
    """
    if isinstance(paulis, (str, PauliTerm)):
        paulis = [paulis]

    terms = []
    for item in paulis:
        if isinstance(item, PauliTerm):
            terms.append(item)
        elif isinstance(item, str):
            terms.append(PauliTerm.from_string(item))
        elif isinstance(item, (tuple, list)) and len(item) == 2 and isinstance(item[0], str):
            terms.append(PauliTerm.from_string(item[0], angle=item[1]))
        else:
            raise InvalidPauliError(
                f"Cannot interpret {item!r} as a Pauli term; expected a PauliTerm, "
                "a string or a (string, angle) pair."
            )
    return terms


def validate_terms(terms, num_qubits=None):
    """Check that a term sequence is consistent before any work is done on it.

    Args:
        terms (Sequence[PauliTerm]): terms to check
        num_qubits (int or None): declared number of qubits

    Returns:
        int: the number of qubits of the terms

    Raises:
        LengthMismatchError: if the terms have different lengths
        QubitOutOfRangeError: if the declared number of qubits is invalid or
            disagrees with the term length
        InvalidAngleError: if a term angle is not a finite non-negative number
    """
    lengths = {len(t) for t in terms}
    if len(lengths) > 1:
        raise LengthMismatchError(
            f"All Pauli strings must have the same length; got lengths {sorted(lengths)}."
        )

    if num_qubits is not None:
        if isinstance(num_qubits, bool) or not isinstance(num_qubits, int) or num_qubits < 0:
            raise QubitOutOfRangeError(
                f"The number of qubits must be a non-negative integer; got {num_qubits!r}."
            )
        if lengths and lengths != {num_qubits}:
            raise QubitOutOfRangeError(
                f"Pauli strings of length {lengths.pop()} do not fit {num_qubits} qubits."
            )
        n = num_qubits
    else:
        n = lengths.pop() if lengths else 0

    for t in terms:
        # PauliTerm subclasses may bypass the constructor checks
        if t.angle is not None and (t.angle != t.angle or t.angle < 0):
            raise InvalidAngleError(f"Invalid angle {t.angle} in term {t}.")

    return n


def merge_adjacent_duplicates(terms, default_angle=None):
    """Sum the angles of adjacent equal terms.

    Terms without an angle take ``default_angle``; if that is ``None`` as well
    they are never merged.

    >>> merge_adjacent_duplicates([PauliTerm("XX", angle=0.1), PauliTerm("XX", angle=0.2)])
    [PauliTerm('XX', angle=0.30000000000000004)]
    """
    merged = []
    for t in terms:
        angle = t.angle if t.angle is not None else default_angle
        if merged and angle is not None and merged[-1] == t and merged[-1].angle is not None:
            merged[-1] = merged[-1].with_angle(merged[-1].angle + angle)
        else:
            merged.append(t if angle is None else t.with_angle(angle))
    return merged


def are_commuting(terms):
    """Check if all terms of a sequence commute pairwise."""
    return all(a.commutes_with(b) for a, b in combinations(terms, 2))
