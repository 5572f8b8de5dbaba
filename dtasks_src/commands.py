#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
CLI commands for docker-tasks.
"""

from pathlib import Path
from typing import Annotated, Optional

import click
import typer
from rich.table import Table
from typer.core import TyperGroup

from .config import load_config
from .dispatcher import PROG_NAME, PreconditionFailed, TaskDispatcher
from .models import Operation, TasksConfig
from .operations import OPERATIONS
from .reporting import ConsoleReporter, console
from .runner import SubprocessRunner
from .schema_utils import DEFAULT_SCHEMA_PATH, schema_is_current, write_config_schema

USAGE_COMMAND = "usage"

# Operations ignore tokens after their own arguments
PASSTHROUGH = {"allow_extra_args": True, "ignore_unknown_options": True}


class UsageFallbackGroup(TyperGroup):
    """Route unknown command names and options to the usage listing"""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError:
            # unknown option, or a known option missing its value
            return super().parse_args(ctx, [USAGE_COMMAND])

    def resolve_command(self, ctx: click.Context, args: list[str]):
        if args and not args[0].startswith("-"):
            if self.get_command(ctx, args[0]) is None:
                return USAGE_COMMAND, self.get_command(ctx, USAGE_COMMAND), []
        return super().resolve_command(ctx, args)


app = typer.Typer(
    name=PROG_NAME,
    help="Docker task helper for the stock-bot compose project",
    add_completion=False,
    cls=UsageFallbackGroup,
)


@app.callback(invoke_without_command=True)
def root(
    ctx: typer.Context,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Print commands without executing them"),
    ] = False,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", help="Settings file (default: ./docker-tasks.yaml)"),
    ] = None,
):
    """Docker task helper"""
    # Settings are loaded by the commands that need them
    ctx.obj = {"config_path": config, "dry_run": dry_run}
    if ctx.invoked_subcommand is None:
        _show_usage()


def _show_usage() -> None:
    # Built-in defaults only: the listing must not depend on settings or env
    TaskDispatcher(
        TasksConfig.model_construct(),
        SubprocessRunner(dry_run=True),
        ConsoleReporter(),
    ).show_usage()


def _dispatcher(ctx: typer.Context) -> TaskDispatcher:
    return TaskDispatcher(
        load_config(ctx.obj["config_path"]),
        SubprocessRunner(dry_run=ctx.obj["dry_run"]),
        ConsoleReporter(),
    )


def _dispatch(
    ctx: typer.Context, operation: Operation, service: Optional[str] = None
) -> None:
    dispatcher = _dispatcher(ctx)
    try:
        dispatcher.dispatch(operation, service)
    except PreconditionFailed:
        raise typer.Exit(1)


# ============================================================================
# Operations
# ============================================================================


@app.command(
    Operation.START_ALL.value,
    help=OPERATIONS[Operation.START_ALL].summary,
    context_settings=PASSTHROUGH,
)
def start_all(ctx: typer.Context):
    _dispatch(ctx, Operation.START_ALL)


@app.command(
    Operation.START_BOT.value,
    help=OPERATIONS[Operation.START_BOT].summary,
    context_settings=PASSTHROUGH,
)
def start_bot(ctx: typer.Context):
    _dispatch(ctx, Operation.START_BOT)


@app.command(
    Operation.START_DEBUG.value,
    help=OPERATIONS[Operation.START_DEBUG].summary,
    context_settings=PASSTHROUGH,
)
def start_debug(ctx: typer.Context):
    _dispatch(ctx, Operation.START_DEBUG)


@app.command(
    Operation.STOP_ALL.value,
    help=OPERATIONS[Operation.STOP_ALL].summary,
    context_settings=PASSTHROUGH,
)
def stop_all(ctx: typer.Context):
    _dispatch(ctx, Operation.STOP_ALL)


@app.command(
    Operation.LOGS.value,
    help=OPERATIONS[Operation.LOGS].summary,
    context_settings=PASSTHROUGH,
)
def logs(
    ctx: typer.Context,
    service: Annotated[
        Optional[str], typer.Argument(help="Service to show logs for (default: all)")
    ] = None,
):
    _dispatch(ctx, Operation.LOGS, service)


@app.command(
    Operation.STATUS.value,
    help=OPERATIONS[Operation.STATUS].summary,
    context_settings=PASSTHROUGH,
)
def status(ctx: typer.Context):
    _dispatch(ctx, Operation.STATUS)


@app.command(
    Operation.CLEAN.value,
    help=OPERATIONS[Operation.CLEAN].summary,
    context_settings=PASSTHROUGH,
)
def clean(ctx: typer.Context):
    _dispatch(ctx, Operation.CLEAN)


# ============================================================================
# Auxiliary commands
# ============================================================================


@app.command(USAGE_COMMAND, hidden=True, context_settings=PASSTHROUGH)
def usage():
    """Show the operation listing"""
    _show_usage()


@app.command("config")
def show_config(ctx: typer.Context):
    """Show the effective settings"""
    settings = load_config(ctx.obj["config_path"])

    table = Table(title="docker-tasks settings", header_style="bold magenta")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="yellow")

    for name, value in settings.model_dump(exclude={"endpoints"}).items():
        table.add_row(name, "-" if value is None else str(value))
    for endpoint in settings.endpoints:
        service = f" ({endpoint.service})" if endpoint.service else ""
        table.add_row("endpoint", f"{endpoint.name}: {endpoint.address}{service}")

    console.print(table)


@app.command("schema")
def schema(
    output: Annotated[
        Path, typer.Option("-o", "--output", help="Where to write the schema")
    ] = DEFAULT_SCHEMA_PATH,
    check: Annotated[
        bool,
        typer.Option("--check", help="Only verify the schema file is up to date"),
    ] = False,
):
    """Generate editor schema for docker-tasks.yaml"""
    if check:
        if not schema_is_current(output):
            console.print(
                f"[red]{output} is missing or stale. "
                "Run 'docker-tasks schema' to regenerate it.[/red]"
            )
            raise typer.Exit(1)
        console.print(f"[green]✓[/green] {output} is up to date")
        return

    try:
        write_config_schema(output)
    except OSError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]✓[/green] Generated {output}")


def main():
    """Main entry point"""
    app(prog_name=PROG_NAME)
