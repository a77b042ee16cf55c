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

"""Setup file for package installation."""
# pylint: disable=unspecified-encoding, consider-using-with

from setuptools import find_packages, setup

with open("paulisynth/_version.py") as f:
    version = f.readlines()[-1].split()[-1].strip("\"'")

requirements = [
    "numpy",
    "scipy",
    "networkx",
    "rustworkx>=0.14.0",
    "tomlkit",
    "appdirs",
]

info = {
    "name": "PauliSynth",
    "version": version,
    "license": "Apache License 2.0",
    "packages": find_packages(where=".", include=["paulisynth", "paulisynth.*"]),
    "description": "PauliSynth is a quantum circuit compiler backend: Pauli-network synthesis over a stabilizer tableau and rewrite-based circuit optimization.",
    "long_description": open("README.md").read(),
    "long_description_content_type": "text/markdown",
    "provides": ["paulisynth"],
    "install_requires": requirements,
    "extras_require": {"test": ["pytest"]},
    "package_data": {"paulisynth": ["logging/log_config.toml"]},
    "include_package_data": True,
}

classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "License :: OSI Approved :: Apache Software License",
    "Natural Language :: English",
    "Operating System :: POSIX",
    "Operating System :: MacOS :: MacOS X",
    "Operating System :: POSIX :: Linux",
    "Operating System :: Microsoft :: Windows",
    "Programming Language :: Python",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3 :: Only",
    "Topic :: Scientific/Engineering :: Physics",
]

setup(classifiers=classifiers, **(info))
