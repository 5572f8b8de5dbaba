#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Command dispatcher for docker-tasks operations.
"""

from pathlib import Path
from typing import Optional

from .models import (
    ActionResult,
    ActionStep,
    EndpointConfig,
    EndpointScope,
    Operation,
    OperationSpec,
    Precondition,
    TasksConfig,
)
from .operations import (
    OPERATIONS,
    USAGE_EXAMPLES,
    build_steps,
    render,
    template_context,
)
from .reporting import Level, Reporter
from .runner import Runner

PROG_NAME = "docker-tasks"

_HEADER_LEVELS = {
    "default": Level.HEADER,
    "danger": Level.DANGER_HEADER,
    "caution": Level.CAUTION_HEADER,
}


class PreconditionFailed(Exception):
    """A fatal precondition check failed; no action was run"""

    def __init__(self, precondition: Precondition, message: str):
        super().__init__(message)
        self.precondition = precondition


# ============================================================================
# Core Dispatcher
# ============================================================================


class TaskDispatcher:
    """Maps operations to external actions and reports their outcome"""

    def __init__(
        self,
        config: TasksConfig,
        runner: Runner,
        reporter: Reporter,
        workdir: Optional[Path] = None,
    ):
        self.config = config
        self.runner = runner
        self.reporter = reporter
        self.workdir = workdir or Path.cwd()

    # ------------------------------------------------------------------
    # Preconditions
    # ------------------------------------------------------------------

    def check_tools(self) -> bool:
        """Check that docker and the compose CLI are available"""
        for command in (
            f"{self.config.docker_command} --version",
            f"{self.config.compose_command} --version",
        ):
            if not self.runner.probe(command):
                self.reporter.emit(
                    Level.ERROR,
                    "Error: Docker or Docker Compose is not installed or not running "
                    f"({command!r} failed)",
                )
                return False
        return True

    def check_env_file(self) -> bool:
        """Warn when the project's env file is missing"""
        env_path = self.workdir / self.config.env_file
        if not env_path.exists():
            self.reporter.emit(
                Level.WARNING,
                f"Warning: {self.config.env_file} not found, "
                "check your environment variable settings",
            )
            return False
        return True

    def check_preconditions(self, spec: OperationSpec) -> None:
        """Run the operation's checks; raise PreconditionFailed on fatal ones"""
        for precondition in spec.preconditions:
            if precondition is Precondition.TOOLS:
                if not self.check_tools():
                    raise PreconditionFailed(
                        precondition, "Docker tooling is unavailable"
                    )
            elif precondition is Precondition.ENV_FILE:
                self.check_env_file()

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def run_step(self, step: ActionStep) -> ActionResult:
        """Execute one step and report it"""
        self.reporter.emit(Level.INFO, f"Executing: {step.description}")
        self.reporter.emit(Level.COMMAND, f"Command: {step.command}")

        result = self.runner.run(step)

        if result.ok:
            self.reporter.emit(Level.SUCCESS, f"✓ {step.description} done")
        elif result.interrupted:
            self.reporter.emit(Level.WARNING, f"{step.description}: {result.error}")
        else:
            self.reporter.emit(
                Level.ERROR,
                f"✗ {step.description} failed: {step.command}: {result.error}",
            )
        return result

    def dispatch(
        self, operation: Operation, service: Optional[str] = None
    ) -> list[ActionResult]:
        """Run an operation end to end.

        Every step runs even if an earlier one failed. Action failures are
        reported and returned, never raised; only a fatal precondition raises
        PreconditionFailed, before any step has run.
        """
        spec = OPERATIONS[operation]
        context = template_context(self.config, service)

        header = f"{spec.icon} {spec.title}" if spec.icon else spec.title
        self.reporter.emit(_HEADER_LEVELS[spec.header_style], header)

        self.check_preconditions(spec)

        results: list[ActionResult] = []
        for step in build_steps(operation, self.config, service):
            result = self.run_step(step)
            results.append(result)
            if result.interrupted:
                break

        failed = [r for r in results if not r.ok and not r.interrupted]
        if failed:
            self.reporter.emit(
                Level.WARNING,
                f"{operation.value} finished with {len(failed)} failed step(s)",
            )
        elif all(r.ok for r in results):
            self._report_done(spec, context)

        return results

    def _report_done(self, spec: OperationSpec, context: dict) -> None:
        if spec.done_message:
            self.reporter.emit(Level.SUCCESS, render(spec.done_message, context))
        for endpoint in self._endpoints(spec.endpoint_scope):
            self.reporter.emit(Level.INFO, f"• {endpoint.name}: {endpoint.address}")
        for note in spec.notes:
            self.reporter.emit(Level.INFO, f"• {render(note, context)}")

    def _endpoints(self, scope: EndpointScope) -> list[EndpointConfig]:
        if scope is EndpointScope.ALL:
            return list(self.config.endpoints)
        if scope is EndpointScope.APP:
            return self.config.app_endpoints()
        return []

    # ------------------------------------------------------------------
    # Usage
    # ------------------------------------------------------------------

    def show_usage(self, prog_name: str = PROG_NAME) -> None:
        """Print the operation listing and examples; runs nothing"""
        context = template_context(self.config)
        width = max(len(op.value) for op in Operation) + 2

        self.reporter.emit(Level.HEADER, "Docker task helper")
        self.reporter.emit(Level.INFO, "Available commands:")
        for operation in Operation:
            summary = OPERATIONS[operation].summary
            self.reporter.emit(
                Level.PLAIN, f"  {operation.value:<{width}}- {summary}"
            )
        self.reporter.emit(Level.WARNING, "Examples:")
        for example in USAGE_EXAMPLES:
            self.reporter.emit(
                Level.PLAIN, f"  {prog_name} {render(example, context)}"
            )
