#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Settings loading for docker-tasks.
"""

from pathlib import Path
from typing import Optional

import typer
import yaml
from pydantic import ValidationError

from .models import TasksConfig
from .reporting import console

CONFIG_FILENAME = "docker-tasks.yaml"


def load_config(
    config_path: Optional[Path] = None, workdir: Optional[Path] = None
) -> TasksConfig:
    """Load settings from YAML (if present) and DOCKER_TASKS_* env vars.

    An explicitly given ``config_path`` must exist; the default
    ``docker-tasks.yaml`` in ``workdir`` is optional.
    """
    explicit = config_path is not None
    if config_path is None:
        config_path = (workdir or Path.cwd()) / CONFIG_FILENAME

    data: dict = {}
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            console.print(f"[red]Error: cannot parse {config_path}: {e}[/red]")
            raise typer.Exit(1)
        if not isinstance(data, dict):
            console.print(f"[red]Error: {config_path} must contain a mapping[/red]")
            raise typer.Exit(1)
    elif explicit:
        console.print(f"[red]Error: {config_path} not found[/red]")
        raise typer.Exit(1)

    try:
        return TasksConfig(**data)
    except ValidationError as e:
        console.print(f"[red]Error: invalid settings in {config_path}[/red]")
        console.print(str(e), markup=False)
        raise typer.Exit(1)
