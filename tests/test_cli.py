"""Tests for the taskdeck CLI."""

from __future__ import annotations

import signal
from pathlib import Path

import pytest
from click.testing import CliRunner

from taskdeck import __version__
from taskdeck.cli import cli

TARGETS_FILE = """
import sys
from taskdeck import targets, target, cmd

PY = sys.executable

def write(path, expr):
    return cmd(PY, "-c", f"import os; open({path!r}, 'w').write({expr})")

def define(platform):
    return targets(
        target("build", write("built.txt", "os.environ['RUST_LOG']"), description="compile"),
        target("run", cmd(PY, "-c", "raise SystemExit(3)"), write("ran.txt", "'yes'")),
        target("env", write("env.txt", "os.environ.get('RUST_BACKTRACE', '-')")),
        target("platform", write("platform.txt", repr(platform))),
    )
"""


@pytest.fixture
def project(cli_runner: CliRunner, tmp_path: Path):
    with cli_runner.isolated_filesystem(temp_dir=tmp_path) as d:
        root = Path(d)
        (root / "taskdeck_targets.py").write_text(TARGETS_FILE)
        yield root


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "taskdeck" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_run_success_exports_overlay(cli_runner: CliRunner, project: Path) -> None:
    result = cli_runner.invoke(cli, ["run", "build"], env={"TASKDECK_RUST_LOG": None, "RUST_LOG": "error"})
    assert result.exit_code == 0, result.output
    assert (project / "built.txt").read_text() == "info"
    assert "STATUS: success" in result.output


def test_run_default_target(cli_runner: CliRunner, project: Path) -> None:
    result = cli_runner.invoke(cli, ["run"])
    assert result.exit_code == 0, result.output
    assert (project / "built.txt").exists()


def test_run_failure_exit_code_and_fail_fast(cli_runner: CliRunner, project: Path) -> None:
    result = cli_runner.invoke(cli, ["run", "run"])
    assert result.exit_code == 3
    assert "COMMAND FAILED" in result.output
    assert not (project / "ran.txt").exists()


def test_run_unknown_target(cli_runner: CliRunner, project: Path) -> None:
    result = cli_runner.invoke(cli, ["run", "package"])
    assert result.exit_code == 2
    assert "package" in result.output
    assert "build" in result.output
    assert not (project / "built.txt").exists()


def test_run_multiple_targets_summary(cli_runner: CliRunner, project: Path) -> None:
    result = cli_runner.invoke(cli, ["run", "build", "run", "env"])
    assert result.exit_code == 3
    assert "RESULTS" in result.output
    assert "env: NOT RUN" in result.output
    assert not (project / "env.txt").exists()


def test_env_option_adds_overlay(cli_runner: CliRunner, project: Path) -> None:
    result = cli_runner.invoke(cli, ["run", "env", "-e", "RUST_BACKTRACE=1"])
    assert result.exit_code == 0, result.output
    assert (project / "env.txt").read_text() == "1"


def test_env_option_rejects_malformed(cli_runner: CliRunner, project: Path) -> None:
    result = cli_runner.invoke(cli, ["run", "env", "--env", "NOPE"])
    assert result.exit_code == 2
    assert "KEY=VALUE" in result.output


def test_dry_run(cli_runner: CliRunner, project: Path) -> None:
    result = cli_runner.invoke(cli, ["run", "--dry-run", "build"])
    assert result.exit_code == 0
    assert "WOULD RUN" in result.output
    assert not (project / "built.txt").exists()


def test_platform_fact_reaches_target_file(cli_runner: CliRunner, project: Path) -> None:
    result = cli_runner.invoke(cli, ["run", "platform"])
    assert result.exit_code == 0, result.output
    assert (project / "platform.txt").read_text() != ""


def test_list_targets(cli_runner: CliRunner, project: Path) -> None:
    result = cli_runner.invoke(cli, ["list"])
    assert result.exit_code == 0
    assert "build (default)  compile" in result.output
    assert "platform" in result.output


def test_list_builtin_rules(cli_runner: CliRunner, tmp_path: Path) -> None:
    with cli_runner.isolated_filesystem(temp_dir=tmp_path):
        result = cli_runner.invoke(cli, ["--debug", "list"], env={"TASKDECK_FILE": None})
    assert result.exit_code == 0
    for name in ("build", "run", "lint", "doc"):
        assert name in result.output
    assert "cargo doc --document-private-items" in result.output


def test_bad_targets_file(cli_runner: CliRunner, tmp_path: Path) -> None:
    bad = tmp_path / "bad.py"
    bad.write_text("X = 1\n")
    result = cli_runner.invoke(cli, ["run", "--file", str(bad), "build"])
    assert result.exit_code == 1
    assert "List[Target]" in result.output


def test_info(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["info", "-e", "EXTRA=x"], env={"TASKDECK_RUST_LOG": None})
    assert result.exit_code == 0
    assert "Platform:" in result.output
    assert "RUST_LOG=info" in result.output
    assert "EXTRA=x" in result.output



def test_run_signal_killed_command_exit_code(cli_runner: CliRunner, tmp_path: Path) -> None:
    f = tmp_path / "k.py"
    f.write_text(
        "import sys\n"
        "from taskdeck import targets, target, cmd\n"
        "TARGETS = targets(target('k', cmd(sys.executable, '-c', "
        "'import os, signal; os.kill(os.getpid(), signal.SIGTERM)')))\n"
    )
    result = cli_runner.invoke(cli, ["run", "--file", str(f), "k"])
    assert result.exit_code == 128 + signal.SIGTERM
    assert f"Signal: {int(signal.SIGTERM)}" in result.output


def test_run_define_error_is_reported_as_target_file_error(cli_runner: CliRunner, tmp_path: Path) -> None:
    f = tmp_path / "t.py"
    f.write_text("def define(platform):\n    raise RuntimeError('boom')\n")
    result = cli_runner.invoke(cli, ["run", "--file", str(f), "build"])
    assert result.exit_code == 1
    assert "ERROR: target file" in result.output
    assert "boom" in result.output
