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
Pytest configuration file for the PauliSynth test suite.
"""
import os
import sys

import numpy as np
import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), "helpers"))

# defaults
TOL = 1e-9


@pytest.fixture(scope="session")
def tol():
    """Numerical tolerance for unitary equivalence tests."""
    return float(os.environ.get("TOL", TOL))


@pytest.fixture(scope="function")
def rng():
    """Seeded random number generator."""
    return np.random.default_rng(seed=42)
