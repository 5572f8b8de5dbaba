# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

import os
import subprocess
from typing import Optional

import pytest

from dtasks_src.models import ActionResult, ActionStatus, ActionStep
from dtasks_src.reporting import Level


class RecordingReporter:
    """Reporter keeping every emitted line"""

    def __init__(self):
        self.lines: list[tuple[Level, str]] = []

    def emit(self, level: Level, message: str) -> None:
        self.lines.append((level, message))

    def messages(self, level: Optional[Level] = None) -> list[str]:
        return [m for lvl, m in self.lines if level is None or lvl is level]

    @property
    def text(self) -> str:
        return "\n".join(self.messages())


class FakeRunner:
    """Runner recording commands; outcomes are chosen per command string"""

    def __init__(
        self,
        failing: tuple[str, ...] = (),
        interrupting: tuple[str, ...] = (),
        failing_probes: tuple[str, ...] = (),
    ):
        self.failing = failing
        self.interrupting = interrupting
        self.failing_probes = failing_probes
        self.commands: list[str] = []
        self.probes: list[str] = []

    def run(self, step: ActionStep) -> ActionResult:
        self.commands.append(step.command)
        if step.command in self.failing:
            return ActionResult(
                step=step,
                status=ActionStatus.FAILED,
                returncode=1,
                error=f"Command '{step.command}' returned non-zero exit status 1.",
            )
        if step.command in self.interrupting:
            return ActionResult(
                step=step,
                status=ActionStatus.INTERRUPTED,
                returncode=130,
                error="Interrupted by user",
            )
        return ActionResult(step=step, status=ActionStatus.SUCCEEDED, returncode=0)

    def probe(self, command: str) -> bool:
        self.probes.append(command)
        return command not in self.failing_probes


class FakeSubprocessRun:
    """Stand-in for subprocess.run recording argv lists"""

    def __init__(
        self, failing: tuple[str, ...] = (), missing_tools: tuple[str, ...] = ()
    ):
        self.failing = failing
        self.missing_tools = missing_tools
        self.actions: list[list[str]] = []
        self.probes: list[list[str]] = []

    def __call__(self, args, check=False, capture_output=False, **kwargs):
        argv = list(args)
        if capture_output:
            self.probes.append(argv)
            if argv[0] in self.missing_tools:
                raise FileNotFoundError(2, "No such file or directory", argv[0])
            return subprocess.CompletedProcess(argv, 0, "version 1.0\n", "")

        self.actions.append(argv)
        if " ".join(argv) in self.failing:
            if check:
                raise subprocess.CalledProcessError(1, argv)
            return subprocess.CompletedProcess(argv, 1)
        return subprocess.CompletedProcess(argv, 0)


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch):
    for key in list(os.environ):
        if key.upper().startswith("DOCKER_TASKS_"):
            monkeypatch.delenv(key)


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()
