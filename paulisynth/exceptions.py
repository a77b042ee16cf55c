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
This module contains all the custom exceptions and warnings used in PauliSynth.

.. warning::

    Unless you are extending PauliSynth, you will likely not need
    to use these classes directly. They are raised by PauliSynth functions
    when errors are encountered.

Contents
--------

The exceptions and warnings are organized by their category of use.

.. currentmodule:: paulisynth.exceptions

Contract Violations
~~~~~~~~~~~~~~~~~~~

Malformed input is a programming error. These exceptions are raised before any
work is done and are never retried.

.. autosummary::
    :toctree: api

    ~ContractViolation
    ~LengthMismatchError
    ~QubitOutOfRangeError
    ~InvalidAngleError
    ~InvalidSignError
    ~InvalidPauliError
    ~InvalidGateError
    ~NonCliffordGateError

Execution Errors
~~~~~~~~~~~~~~~~

.. autosummary::
    :toctree: api

    ~PauliSynthError
    ~SynthesisBudgetError
    ~ConfigurationError

User Warnings
~~~~~~~~~~~~~

.. autosummary::
    :toctree: api

    ~ConvergenceWarning

"""  # pragma: no cover

# =============================================================================
# Base
# =============================================================================


class PauliSynthError(Exception):
    """Base class for all errors raised by PauliSynth."""


# =============================================================================
# Contract violations
# =============================================================================


class ContractViolation(PauliSynthError, ValueError):
    """Raised when malformed input is passed to a PauliSynth entry point."""


class LengthMismatchError(ContractViolation):
    """Raised when Pauli strings of a single term set have different lengths."""


class QubitOutOfRangeError(ContractViolation):
    """Raised when a qubit index does not fit the declared number of qubits."""


class InvalidAngleError(ContractViolation):
    """Raised for rotation angles that are NaN, infinite, negative (for Pauli terms)
    or missing where one is required."""


class InvalidSignError(ContractViolation):
    """Raised when a Pauli term sign is not ``+1`` or ``-1``."""


class InvalidPauliError(ContractViolation):
    """Raised when a Pauli string contains a symbol outside ``{I, X, Y, Z}``."""


class InvalidGateError(ContractViolation):
    """Raised when a gate is built with the wrong arity or operands."""


class NonCliffordGateError(ContractViolation):
    """Raised when a non-Clifford gate is applied to a stabilizer tableau."""


# =============================================================================
# Execution errors
# =============================================================================


class SynthesisBudgetError(PauliSynthError, RuntimeError):
    """Raised when a synthesis call exhausts its ``max_steps`` budget."""


class ConfigurationError(PauliSynthError):
    """Raised when a configuration value cannot be interpreted."""


# =============================================================================
# Warnings
# =============================================================================


class ConvergenceWarning(UserWarning):
    """Warning raised when the rewrite loop stops at its cycle budget before
    reaching a fixed point."""
