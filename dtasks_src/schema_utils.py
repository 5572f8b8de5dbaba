#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""Editor schema for docker-tasks.yaml."""

import json
from pathlib import Path
from typing import Any

from .config import CONFIG_FILENAME
from .models import TasksConfig

JSON_SCHEMA_DRAFT = "https://json-schema.org/draft/2020-12/schema"
DEFAULT_SCHEMA_PATH = Path(".vscode") / "docker-tasks.schema.json"


def build_config_schema() -> dict[str, Any]:
    """JSON schema of the YAML settings file"""
    schema: dict[str, Any] = {
        "$schema": JSON_SCHEMA_DRAFT,
        "$id": CONFIG_FILENAME,
    }
    schema.update(TasksConfig.model_json_schema())
    schema["title"] = f"{CONFIG_FILENAME} settings"
    schema["description"] = (
        "docker-tasks settings; DOCKER_TASKS_* environment variables "
        "take precedence over values in this file"
    )
    return schema


def render_config_schema() -> str:
    return json.dumps(build_config_schema(), indent=2, ensure_ascii=False) + "\n"


def schema_is_current(path: Path) -> bool:
    """True if ``path`` holds exactly the schema this version would write"""
    if not path.is_file():
        return False
    return path.read_text(encoding="utf-8") == render_config_schema()


def write_config_schema(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_config_schema(), encoding="utf-8")
    return path
