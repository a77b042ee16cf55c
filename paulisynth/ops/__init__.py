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
"""The gate set of the circuit IR and its commutation rules."""

from .commutation import is_commuting, qubit_axes
from .gate import (
    CNOT,
    CZ,
    SWAP,
    DEFAULT_ATOL,
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
    normalize_angle,
    rotation_gate,
)
