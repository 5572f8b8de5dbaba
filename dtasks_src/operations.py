#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Operation table and command template rendering.
"""

import shlex
from typing import Any, Optional

from jinja2 import Environment, StrictUndefined

from .models import (
    ActionStep,
    CommandTemplate,
    EndpointScope,
    Operation,
    OperationSpec,
    Precondition,
    TasksConfig,
)

_STARTUP_CHECKS = (Precondition.TOOLS, Precondition.ENV_FILE)

OPERATIONS: dict[Operation, OperationSpec] = {
    Operation.START_ALL: OperationSpec(
        title="Starting all Docker services",
        icon="🐳",
        summary="Start all services",
        commands=(
            CommandTemplate(
                command="{{ compose }} up -d --build",
                description=(
                    "Start all services "
                    "({{ database_service }} + {{ app_service }} + sync)"
                ),
            ),
        ),
        preconditions=_STARTUP_CHECKS,
        done_message="All services started!",
        endpoint_scope=EndpointScope.ALL,
        notes=("View logs: {{ compose }} logs -f",),
    ),
    Operation.START_BOT: OperationSpec(
        title="Starting the Stock Bot service",
        icon="🤖",
        summary="Start only the bot (and its database)",
        commands=(
            CommandTemplate(
                command="{{ compose }} up -d {{ database_service | quote }}",
                description="Start database {{ database_service }}",
            ),
            CommandTemplate(
                command="{{ compose }} up -d {{ app_service | quote }}",
                description="Start application {{ app_service }}",
            ),
        ),
        preconditions=_STARTUP_CHECKS,
        done_message="{{ app_service }} started!",
        endpoint_scope=EndpointScope.APP,
    ),
    Operation.START_DEBUG: OperationSpec(
        title="Starting debug mode",
        icon="🐛",
        summary="Start services in debug mode",
        commands=(
            CommandTemplate(
                command=(
                    "{{ compose_command }} -f {{ debug_compose_file | quote }}"
                    " up -d --build"
                ),
                description="Start debug services",
            ),
        ),
        preconditions=_STARTUP_CHECKS,
        done_message="Debug mode started!",
        notes=(
            "Using {{ debug_compose_file }}",
            "View logs: {{ compose_command }} -f {{ debug_compose_file }} logs -f",
        ),
    ),
    Operation.STOP_ALL: OperationSpec(
        title="Stopping all Docker services",
        icon="🛑",
        header_style="danger",
        summary="Stop all services",
        commands=(
            CommandTemplate(
                command="{{ compose }} down",
                description="Stop all services",
            ),
        ),
        done_message="All services stopped!",
    ),
    Operation.LOGS: OperationSpec(
        title="Service logs",
        icon="📋",
        summary="Follow logs (optionally for one service)",
        commands=(
            CommandTemplate(
                command=(
                    "{{ compose }} logs -f"
                    "{% if service %} {{ service | quote }}{% endif %}"
                ),
                description="Logs of {{ service or 'all services' }}",
            ),
        ),
    ),
    Operation.STATUS: OperationSpec(
        title="Service status",
        icon="📊",
        summary="Show service status",
        commands=(
            CommandTemplate(
                command="{{ compose }} ps",
                description="Show service status",
            ),
        ),
    ),
    Operation.CLEAN: OperationSpec(
        title="Cleaning Docker resources",
        icon="🧹",
        header_style="caution",
        summary="Remove containers, volumes and unused resources",
        commands=(
            CommandTemplate(
                command="{{ compose }} down -v --remove-orphans",
                description="Stop and remove all containers and volumes",
            ),
            CommandTemplate(
                command="{{ docker_command }} system prune -f",
                description="Prune unused Docker resources",
            ),
        ),
        done_message="Cleanup complete!",
    ),
}

USAGE_EXAMPLES = ("start-all", "logs {{ app_service }}")


def _environment() -> Environment:
    env = Environment(undefined=StrictUndefined, autoescape=False)
    env.filters["quote"] = shlex.quote
    return env


_env = _environment()


def template_context(config: TasksConfig, service: Optional[str] = None) -> dict[str, Any]:
    """Variables available to command, description and note templates"""
    return {
        "compose": config.compose,
        "compose_command": config.compose_command,
        "docker_command": config.docker_command,
        "debug_compose_file": config.debug_compose_file,
        "database_service": config.database_service,
        "app_service": config.app_service,
        "service": service or "",
    }


def render(template: str, context: dict[str, Any]) -> str:
    """Render a single template string"""
    return _env.from_string(template).render(**context)


def build_steps(
    operation: Operation, config: TasksConfig, service: Optional[str] = None
) -> list[ActionStep]:
    """Render the external actions of ``operation`` in execution order"""
    spec = OPERATIONS[operation]
    context = template_context(config, service)
    return [
        ActionStep(
            command=render(template.command, context),
            description=render(template.description, context),
        )
        for template in spec.commands
    ]
