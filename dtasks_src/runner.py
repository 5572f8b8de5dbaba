#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Execution of external docker / docker-compose commands.
"""

import subprocess
from typing import Protocol

from .models import ActionResult, ActionStatus, ActionStep


class Runner(Protocol):
    def run(self, step: ActionStep) -> ActionResult: ...

    def probe(self, command: str) -> bool: ...


class SubprocessRunner:
    """Runs steps synchronously, inheriting stdin/stdout/stderr"""

    def __init__(self, dry_run: bool = False):
        self.dry_run = dry_run

    def run(self, step: ActionStep) -> ActionResult:
        """Execute a step and capture its outcome; never raises for tool errors"""
        if self.dry_run:
            return ActionResult(step=step, status=ActionStatus.SUCCEEDED, returncode=0)

        try:
            result = subprocess.run(step.argv, check=True)
        except subprocess.CalledProcessError as e:
            return ActionResult(
                step=step,
                status=ActionStatus.FAILED,
                returncode=e.returncode,
                error=str(e),
            )
        except (OSError, ValueError) as e:
            # executable not found, permission denied, unbalanced quotes
            return ActionResult(step=step, status=ActionStatus.FAILED, error=str(e))
        except KeyboardInterrupt:
            return ActionResult(
                step=step,
                status=ActionStatus.INTERRUPTED,
                returncode=130,
                error="Interrupted by user",
            )

        return ActionResult(
            step=step, status=ActionStatus.SUCCEEDED, returncode=result.returncode
        )

    def probe(self, command: str) -> bool:
        """Return True if ``command`` runs and exits with status 0"""
        try:
            subprocess.run(
                ActionStep(command=command, description=command).argv,
                check=True,
                capture_output=True,
                text=True,
            )
        except (subprocess.CalledProcessError, OSError, ValueError):
            return False
        return True
