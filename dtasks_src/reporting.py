#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Leveled status-line reporting.
"""

from enum import Enum
from typing import Optional, Protocol

from rich.console import Console

# Rich Console for beautiful output
console = Console()


class Level(str, Enum):
    HEADER = "header"
    DANGER_HEADER = "danger_header"
    CAUTION_HEADER = "caution_header"
    INFO = "info"
    COMMAND = "command"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    PLAIN = "plain"


class Reporter(Protocol):
    """Anything that can emit a leveled, human-readable status line"""

    def emit(self, level: Level, message: str) -> None: ...


STYLES: dict[Level, str] = {
    Level.HEADER: "bold blue",
    Level.DANGER_HEADER: "bold red",
    Level.CAUTION_HEADER: "bold yellow",
    Level.INFO: "cyan",
    Level.COMMAND: "dim yellow",
    Level.SUCCESS: "green",
    Level.WARNING: "yellow",
    Level.ERROR: "red",
    Level.PLAIN: "",
}


class ConsoleReporter:
    """Reporter printing through a rich Console"""

    def __init__(self, target: Optional[Console] = None):
        self.console = target or console

    def emit(self, level: Level, message: str) -> None:
        # Messages carry command lines and service names; never parse markup
        self.console.print(
            message,
            style=STYLES[level] or None,
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
