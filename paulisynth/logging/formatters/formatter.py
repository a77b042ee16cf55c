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
"""The PauliSynth log-level formatters are defined here with default options, and ANSI-terminal color-codes."""
import logging
from logging import Formatter
from typing import NamedTuple


# For color-code definitions see https://en.wikipedia.org/wiki/ANSI_escape_code#Colors
# 24-bit mode support RGB color codes in 8bit-wide r;g;b format
# pylint: disable=too-few-public-methods
class ColorScheme(NamedTuple):
    """Utility class to define colors for the log-levels."""

    debug: tuple
    debug_bg: tuple
    info: tuple
    info_bg: tuple
    warning: tuple
    warning_bg: tuple
    error: tuple
    error_bg: tuple
    critical: tuple
    critical_bg: tuple
    use_rgb: bool


def build_code_rgb(rgb: tuple, rgb_bg: tuple = None):
    """
    Utility function to generate the appropriate ANSI RGB codes for a given set of foreground (font) and background colors.
    """
    output = "\x1b[38;2;" + ";".join(str(c) for c in rgb)
    if rgb_bg:
        output += ";48;2;" + ";".join(str(c) for c in rgb_bg)
    return output + "m"


_default_scheme = ColorScheme(
    debug=(220, 238, 200),
    debug_bg=None,
    info=(80, 125, 125),
    info_bg=None,
    warning=(208, 167, 133),
    warning_bg=None,
    error=(208, 133, 133),
    error_bg=None,
    critical=(135, 53, 53),
    critical_bg=(210, 210, 210),
    use_rgb=True,
)


class DefaultFormatter(Formatter):
    """This formatter has the default rules used for formatting PauliSynth log messages."""

    fmt_str = '[%(asctime)s][%(levelname)s][<PID %(process)d:%(processName)s>] - %(name)s.%(funcName)s()::"%(message)s"'

    cmap = _default_scheme

    FORMATS = {
        logging.DEBUG: build_code_rgb(cmap.debug, cmap.debug_bg),
        logging.INFO: build_code_rgb(cmap.info, cmap.info_bg),
        logging.WARNING: build_code_rgb(cmap.warning, cmap.warning_bg),
        logging.ERROR: build_code_rgb(cmap.error, cmap.error_bg),
        logging.CRITICAL: build_code_rgb(cmap.critical, cmap.critical_bg),
    }

    def format(self, record):
        color = self.FORMATS.get(record.levelno, "")
        formatter = Formatter(color + self.fmt_str + "\x1b[0m")
        return formatter.format(record)


class SimpleFormatter(Formatter):
    """This formatter has a simplified layout and rules used for formatting messages."""

    fmt_str = "[%(asctime)s][%(levelname)s][%(name)s.%(funcName)s] - %(message)s"

    def format(self, record):
        formatter = Formatter(self.fmt_str)
        return formatter.format(record)
