#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Docker task helper package.
"""

from .commands import app, main
from .dispatcher import PreconditionFailed, TaskDispatcher
from .models import (
    ActionResult,
    ActionStatus,
    ActionStep,
    CommandTemplate,
    EndpointConfig,
    EndpointScope,
    Operation,
    OperationSpec,
    Precondition,
    TasksConfig,
)
from .operations import OPERATIONS, build_steps
from .reporting import ConsoleReporter, Level, Reporter
from .runner import Runner, SubprocessRunner

__all__ = [
    # Commands
    "app",
    "main",
    # Dispatcher
    "TaskDispatcher",
    "PreconditionFailed",
    "OPERATIONS",
    "build_steps",
    # Execution
    "Runner",
    "SubprocessRunner",
    # Reporting
    "Reporter",
    "ConsoleReporter",
    "Level",
    # Models
    "Operation",
    "Precondition",
    "OperationSpec",
    "CommandTemplate",
    "EndpointScope",
    "ActionStep",
    "ActionStatus",
    "ActionResult",
    "EndpointConfig",
    "TasksConfig",
]
