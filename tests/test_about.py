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
Unit tests for the :func:`paulisynth.about` function.
"""
import contextlib
import io

import paulisynth as ps


def test_about():
    """
    about: Tests if the about string prints correct.
    """
    f = io.StringIO()
    with contextlib.redirect_stdout(f):
        ps.about()
    out = f.getvalue().strip()

    assert ps.version().replace("-", ".") in out.replace("-", ".")
    assert "Python version" in out
    assert "Numpy version" in out
    assert "Scipy version" in out
    assert "NetworkX version" in out
    assert "rustworkx version" in out
