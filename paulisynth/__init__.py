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
This is the top level module from which all basic functions and classes of
PauliSynth can be directly imported.
"""
from paulisynth import exceptions
from paulisynth import logging
from paulisynth import ops
from paulisynth.ops import (
    CNOT,
    CZ,
    SWAP,
    Gate,
    GateType,
    H,
    RX,
    RY,
    RZ,
    S,
    Sdg,
    T,
    Tdg,
    X,
    Y,
    Z,
    is_commuting,
    rotation_gate,
)
from paulisynth import pauli
from paulisynth.pauli import PauliTerm
from paulisynth.circuit import Circuit
from paulisynth import resource
from paulisynth.resource import CircuitResources, CostModel, Metric, analyze_circuit
from paulisynth import synthesis
from paulisynth.synthesis import GraphState, SynthesisOptions, pauli_network_synthesis, synthesize
from paulisynth import transforms
from paulisynth.transforms import RuleKind, full_optimize, optimize

from paulisynth._version import __version__
from paulisynth.about import about
from paulisynth.configuration import Configuration, default_config


def version():
    """Returns the PauliSynth version number."""
    return __version__
