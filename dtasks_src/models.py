#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Operation, result and settings models for docker-tasks.
"""

import shlex
from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

# ============================================================================
# Operations
# ============================================================================


class Operation(str, Enum):
    """Supported docker-tasks operations"""

    START_ALL = "start-all"
    START_BOT = "start-bot"
    START_DEBUG = "start-debug"
    STOP_ALL = "stop-all"
    LOGS = "logs"
    STATUS = "status"
    CLEAN = "clean"


class Precondition(str, Enum):
    """Checks performed before an operation's actions run"""

    TOOLS = "tools"  # fatal
    ENV_FILE = "env-file"  # warning only


class EndpointScope(str, Enum):
    """Which configured endpoints are listed after a successful start"""

    ALL = "all"
    APP = "app"
    NONE = "none"


class CommandTemplate(BaseModel):
    """A Jinja2 command string and the description shown while it runs"""

    model_config = ConfigDict(frozen=True)

    command: str
    description: str


class OperationSpec(BaseModel):
    """Immutable record describing one operation"""

    model_config = ConfigDict(frozen=True)

    title: str = Field(description="Header line printed when the operation starts")
    icon: str = Field(default="", description="Emoji prefixed to the header")
    header_style: Literal["default", "danger", "caution"] = "default"
    summary: str = Field(description="One-line description for the usage listing")
    commands: Tuple[CommandTemplate, ...]
    preconditions: Tuple[Precondition, ...] = (Precondition.TOOLS,)
    done_message: Optional[str] = None
    endpoint_scope: EndpointScope = EndpointScope.NONE
    notes: Tuple[str, ...] = ()


# ============================================================================
# Steps and results
# ============================================================================


@dataclass(frozen=True)
class ActionStep:
    """One rendered external action"""

    command: str
    description: str

    @property
    def argv(self) -> list[str]:
        return shlex.split(self.command)


class ActionStatus(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    INTERRUPTED = "interrupted"


@dataclass(frozen=True)
class ActionResult:
    """Outcome of executing an ActionStep"""

    step: ActionStep
    status: ActionStatus
    returncode: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is ActionStatus.SUCCEEDED

    @property
    def interrupted(self) -> bool:
        return self.status is ActionStatus.INTERRUPTED


# ============================================================================
# Settings
# ============================================================================


class EndpointConfig(BaseModel):
    """A service endpoint reported after services start"""

    name: str = Field(description="Display name")
    address: str = Field(description="host:port the service is reachable at")
    service: Optional[str] = Field(
        default=None, description="Compose service providing this endpoint"
    )


def _default_endpoints() -> list[EndpointConfig]:
    return [
        EndpointConfig(name="PostgreSQL", address="localhost:5432", service="postgres"),
        EndpointConfig(name="Stock Bot", address="localhost:8080", service="stock-bot"),
    ]


class TasksConfig(BaseSettings):
    """docker-tasks settings"""

    model_config = SettingsConfigDict(
        env_prefix="DOCKER_TASKS_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="forbid",
    )

    compose_command: str = Field(
        default="docker-compose",
        description="Compose CLI invocation (e.g. 'docker-compose', 'docker compose')",
    )
    docker_command: str = Field(default="docker", description="Docker CLI executable")
    compose_file: Optional[str] = Field(
        default=None, description="Compose file passed with -f (None = tool default)"
    )
    debug_compose_file: str = Field(
        default="docker-compose_debug.yml",
        description="Compose file used by start-debug",
    )
    env_file: str = Field(
        default=".env", description="File expected in the working directory"
    )
    database_service: str = Field(
        default="postgres", description="Database service started first by start-bot"
    )
    app_service: str = Field(
        default="stock-bot", description="Application service started by start-bot"
    )
    endpoints: list[EndpointConfig] = Field(default_factory=_default_endpoints)

    @field_validator("compose_command", "docker_command")
    @classmethod
    def validate_command(cls, v: str) -> str:
        """Reject empty or unparsable command strings"""
        try:
            tokens = shlex.split(v)
        except ValueError as e:
            raise ValueError(f"Invalid command: {e}")
        if not tokens:
            raise ValueError("Command must not be empty")
        return v.strip()

    @field_validator(
        "database_service", "app_service", "debug_compose_file", "env_file"
    )
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Value must not be empty")
        return v.strip()

    @property
    def compose(self) -> str:
        """Compose invocation including the -f option when configured"""
        if self.compose_file:
            return f"{self.compose_command} -f {shlex.quote(self.compose_file)}"
        return self.compose_command

    def app_endpoints(self) -> list[EndpointConfig]:
        return [ep for ep in self.endpoints if ep.service == self.app_service]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """
        Customize settings sources priority.
        Priority: env vars > YAML (init) > defaults

        The project's .env belongs to the compose services and is not read.
        """
        return env_settings, init_settings
