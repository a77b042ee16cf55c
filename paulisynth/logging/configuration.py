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
This module contains support methods for configuring the logging functionality.
"""
import logging
import logging.config
import os
from importlib import import_module
from importlib.util import find_spec

has_toml = False
toml_libs = ["tomllib", "tomli", "tomlkit"]
for pkg in toml_libs:
    spec = find_spec(pkg)
    if spec:
        tomllib = import_module(pkg)
        has_toml = True
        break

# Define absolute path to this file in source tree
_path = os.path.dirname(__file__)

# Define a more verbose log-level. Not currently controlled by internal log configurations.
TRACE = logging.DEBUG // 2


def _add_trace_level():
    "Wrapper to define custom TRACE level for PauliSynth logging"

    def trace(self, message, *args, **kws):
        """Enable a more verbose mode than DEBUG. Used to dump tableaux and rewrite windows."""

        # Due to limitations in how the logging module exposes support for custom levels,
        # accessing the private method `_log` has no alternative.
        # pylint: disable=protected-access
        if self.isEnabledFor(TRACE):
            self._log(TRACE, message, args, **kws)

    logging.addLevelName(TRACE, "TRACE")
    logging.TRACE = TRACE
    lc = logging.getLoggerClass()
    lc.trace = trace


def _configure_logging(config_file):
    """
    This method allows custom logging configuration throughout PauliSynth.
    All configurations are read through the ``log_config.toml`` file.
    """
    if not has_toml:
        raise ImportError(
            "A TOML parser is required to enable PauliSynth logging defaults. "
            "We support any of the following TOML parsers: [tomli, tomlkit, tomllib] "
            "You can install either tomli via `pip install tomli`, "
            "tomlkit via `pip install tomlkit`, or use Python 3.11 "
            "or above which natively offers the tomllib library."
        )
    with open(os.path.join(_path, config_file), "rb") as f:
        ps_config = tomllib.load(f)
        logging.config.dictConfig(ps_config)


# Loggers configured by ``log_config.toml``
LOGGERS = ("paulisynth", "paulisynth.synthesis", "paulisynth.transforms")


def _resolve_level(level):
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if isinstance(resolved, int):
            return resolved
    elif isinstance(level, int) and not isinstance(level, bool):
        return level
    raise ValueError(f"Unknown log level {level!r}.")


def enable_logging(level=None):
    """
    This method allows to selectively enable logging throughout PauliSynth, following the configuration options defined in the ``log_config.toml`` file.

    Enabling logging through this method will override any externally defined logging configurations.

    Args:
        level (int or str or None): if given, the level of the PauliSynth loggers and of
            their handlers, overriding the configuration file. ``"TRACE"`` also shows
            every implemented term and every committed rewrite.

    **Example**

    >>> paulisynth.logging.enable_logging()
    >>> paulisynth.logging.enable_logging(level="TRACE")
    """
    _add_trace_level()
    _configure_logging("log_config.toml")
    if level is None:
        return
    level = _resolve_level(level)
    for name in LOGGERS:
        lgr = logging.getLogger(name)
        lgr.setLevel(level)
        for handler in lgr.handlers:
            if handler.level > level:
                handler.setLevel(level)


def config_path():
    """
    This method returns the full absolute path to the the ``log_config.toml`` configuration file.

    Returns:
        str: System path to the ``log_config.toml`` file.

    **Example**

    >>> config_path()
    /home/user/pyenv/lib/python3.12/site-packages/paulisynth/logging/log_config.toml
    """
    path = os.path.join(_path, "log_config.toml")
    return path
