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
This module contains the :func:`about` function to display the details of the PauliSynth installation,
e.g., OS, version, and the versions of the numerical and graph libraries it relies on.
"""
import platform
import sys
from importlib import metadata
from importlib.metadata import PackageNotFoundError

import networkx
import numpy
import rustworkx
import scipy

from paulisynth._version import __version__


def about():
    """
    Prints the information for the PauliSynth installation.
    """
    try:
        meta = metadata.metadata("PauliSynth")
        location = str(metadata.distribution("PauliSynth").locate_file(""))
        print(f"Name: {meta.get('Name', 'PauliSynth')}")
        print(f"Version: {meta.get('Version', __version__)}")
        print(f"Location: {location}")
    except PackageNotFoundError:
        print(f"PauliSynth version {__version__} (not installed)")
    print(f"Platform info:           {platform.platform(aliased=True)}")
    print(
        f"Python version:          {sys.version_info[0]}.{sys.version_info[1]}.{sys.version_info[2]}"
    )
    print(f"Numpy version:           {numpy.__version__}")
    print(f"Scipy version:           {scipy.__version__}")
    print(f"NetworkX version:        {networkx.__version__}")
    print(f"rustworkx version:       {rustworkx.__version__}")


if __name__ == "__main__":
    about()
