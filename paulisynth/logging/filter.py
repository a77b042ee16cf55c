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
"""This file provides support for logging framework filters. For more information please see the
official Python documentation on filters at https://docs.python.org/3/library/logging.html#filter"""
import logging
import os
from logging import Filter


# pylint: disable=too-few-public-methods
class LocalProcessFilter(Filter):
    """
    Filters logs not originating from the current executing Python process ID.
    """

    def __init__(self):
        super().__init__()
        self._pid = os.getpid()

    def filter(self, record):
        return record.process == self._pid


# pylint: disable=too-few-public-methods
class DebugOnlyFilter(Filter):
    """
    Filters logs that are less verbose than the DEBUG level (CRITICAL, ERROR, WARN & INFO).
    """

    def filter(self, record):
        return record.levelno <= logging.DEBUG


# pylint: disable=too-few-public-methods
class ComponentFilter(Filter):
    """
    Keeps only the logs of the named PauliSynth subpackages.

    Args:
        components (Iterable[str]): subpackage names such as ``"synthesis"`` or ``"transforms"``
    """

    def __init__(self, components=("synthesis", "transforms")):
        super().__init__()
        self._prefixes = tuple(f"paulisynth.{c}" for c in components)

    def filter(self, record):
        return any(record.name == p or record.name.startswith(p + ".") for p in self._prefixes)
