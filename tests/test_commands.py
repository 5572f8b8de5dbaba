# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

import json

import pytest
from typer.testing import CliRunner

from conftest import FakeSubprocessRun
from dtasks_src import runner as runner_module
from dtasks_src.commands import app

cli = CliRunner()


@pytest.fixture
def project(tmp_path, monkeypatch):
    """Empty compose project directory with an .env file"""
    (tmp_path / ".env").write_text("DB_HOST=postgres\n")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _fake_run(monkeypatch, **kwargs) -> FakeSubprocessRun:
    fake = FakeSubprocessRun(**kwargs)
    monkeypatch.setattr(runner_module.subprocess, "run", fake)
    return fake


@pytest.mark.parametrize(
    "args",
    [
        ["bogus-command"],
        [],
        ["bogus", "extra"],
        ["--bogus"],
        ["--bogus", "start-all"],
        ["--config"],
    ],
)
def test_unknown_or_missing_command_prints_usage(project, monkeypatch, args):
    fake = _fake_run(monkeypatch)

    result = cli.invoke(app, args)

    assert result.exit_code == 0, result.output
    for name in [
        "start-all",
        "start-bot",
        "start-debug",
        "stop-all",
        "logs",
        "status",
        "clean",
    ]:
        assert name in result.output
    assert "docker-tasks start-all" in result.output
    assert "docker-tasks logs stock-bot" in result.output
    assert fake.actions == []
    assert fake.probes == []


def test_start_all_runs_compose_up(project, monkeypatch):
    fake = _fake_run(monkeypatch)

    result = cli.invoke(app, ["start-all"])

    assert result.exit_code == 0, result.output
    assert fake.actions == [["docker-compose", "up", "-d", "--build"]]
    assert "PostgreSQL: localhost:5432" in result.output
    assert "Stock Bot: localhost:8080" in result.output


@pytest.mark.parametrize(
    ("args", "expected"),
    [
        (["logs", "stock-bot"], ["docker-compose", "logs", "-f", "stock-bot"]),
        (["logs"], ["docker-compose", "logs", "-f"]),
    ],
)
def test_logs_target(project, monkeypatch, args, expected):
    fake = _fake_run(monkeypatch)

    result = cli.invoke(app, args)

    assert result.exit_code == 0, result.output
    assert fake.actions == [expected]


@pytest.mark.parametrize(
    ("missing", "probe_count"), [("docker", 1), ("docker-compose", 2)]
)
def test_missing_tools_exit_with_status_1(
    project, monkeypatch, missing: str, probe_count: int
):
    fake = _fake_run(monkeypatch, missing_tools=(missing,))

    result = cli.invoke(app, ["stop-all"])

    assert result.exit_code == 1
    assert fake.actions == []
    assert len(fake.probes) == probe_count
    assert fake.probes[-1][0] == missing
    assert "not installed" in result.output


def test_action_failure_keeps_exit_status_zero(project, monkeypatch):
    fake = _fake_run(monkeypatch, failing=("docker-compose up -d postgres",))

    result = cli.invoke(app, ["start-bot"])

    assert result.exit_code == 0, result.output
    assert fake.actions == [
        ["docker-compose", "up", "-d", "postgres"],
        ["docker-compose", "up", "-d", "stock-bot"],
    ]
    assert "failed" in result.output


def test_missing_env_file_still_runs(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    fake = _fake_run(monkeypatch)

    result = cli.invoke(app, ["start-debug"])

    assert result.exit_code == 0, result.output
    assert ".env not found" in result.output
    assert fake.actions == [
        ["docker-compose", "-f", "docker-compose_debug.yml", "up", "-d", "--build"]
    ]


def test_extra_arguments_are_ignored(project, monkeypatch):
    fake = _fake_run(monkeypatch)

    result = cli.invoke(app, ["status", "whatever"])

    assert result.exit_code == 0, result.output
    assert fake.actions == [["docker-compose", "ps"]]


def test_dry_run_executes_nothing(project, monkeypatch):
    fake = _fake_run(monkeypatch)

    result = cli.invoke(app, ["--dry-run", "clean"])

    assert result.exit_code == 0, result.output
    assert fake.actions == []
    assert "docker system prune -f" in result.output
    assert len(fake.probes) == 2


def test_settings_file_and_env_override(project, monkeypatch):
    (project / "docker-tasks.yaml").write_text(
        "compose_command: docker compose\napp_service: bot\n"
    )
    monkeypatch.setenv("DOCKER_TASKS_APP_SERVICE", "telegram-bot")
    fake = _fake_run(monkeypatch)

    result = cli.invoke(app, ["start-bot"])

    assert result.exit_code == 0, result.output
    assert fake.actions == [
        ["docker", "compose", "up", "-d", "postgres"],
        ["docker", "compose", "up", "-d", "telegram-bot"],
    ]
    assert fake.probes[1] == ["docker", "compose", "--version"]


def test_invalid_settings_file_exits_1(project, monkeypatch):
    (project / "docker-tasks.yaml").write_text("compose_command: ''\n")
    fake = _fake_run(monkeypatch)

    result = cli.invoke(app, ["status"])

    assert result.exit_code == 1
    assert fake.actions == []


@pytest.mark.parametrize("args", [["bogus"], []])
def test_usage_ignores_invalid_settings_file(project, monkeypatch, args):
    (project / "docker-tasks.yaml").write_text("compose_command: ''\n")
    monkeypatch.setenv("DOCKER_TASKS_APP_SERVICE", " ")
    fake = _fake_run(monkeypatch)

    result = cli.invoke(app, args)

    assert result.exit_code == 0, result.output
    assert "docker-tasks logs stock-bot" in result.output
    assert fake.probes == []


def test_explicit_missing_settings_file_exits_1(project, monkeypatch):
    _fake_run(monkeypatch)

    result = cli.invoke(app, ["--config", "nope.yaml", "status"])

    assert result.exit_code == 1
    assert "not found" in result.output


def test_config_command_shows_settings(project, monkeypatch):
    fake = _fake_run(monkeypatch)

    result = cli.invoke(app, ["config"])

    assert result.exit_code == 0, result.output
    assert "compose_command" in result.output
    assert fake.actions == []


def test_schema_command_writes_json_schema(project, monkeypatch):
    _fake_run(monkeypatch)

    result = cli.invoke(app, ["schema"])

    assert result.exit_code == 0, result.output
    schema_path = project / ".vscode" / "docker-tasks.schema.json"
    schema = json.loads(schema_path.read_text(encoding="utf-8"))
    assert schema["$id"] == "docker-tasks.yaml"
    assert schema["title"] == "docker-tasks.yaml settings"
    assert "compose_command" in schema["properties"]


def test_schema_command_custom_output(project, monkeypatch):
    _fake_run(monkeypatch)

    result = cli.invoke(app, ["schema", "--output", "schemas/tasks.json"])

    assert result.exit_code == 0, result.output
    assert (project / "schemas" / "tasks.json").is_file()
    assert not (project / ".vscode").exists()


def test_schema_check_detects_stale_file(project, monkeypatch):
    _fake_run(monkeypatch)

    missing = cli.invoke(app, ["schema", "--check"])
    assert missing.exit_code == 1

    assert cli.invoke(app, ["schema"]).exit_code == 0
    current = cli.invoke(app, ["schema", "--check"])
    assert current.exit_code == 0, current.output
    assert "up to date" in current.output

    schema_path = project / ".vscode" / "docker-tasks.schema.json"
    schema_path.write_text("{}\n", encoding="utf-8")
    stale = cli.invoke(app, ["schema", "--check"])
    assert stale.exit_code == 1
    assert "stale" in stale.output
