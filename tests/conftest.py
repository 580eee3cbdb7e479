"""Shared pytest fixtures and test helpers for taskdeck tests."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict, List, Mapping, Tuple

import pytest
from click.testing import CliRunner

from taskdeck.environment import EnvironmentResolver
from taskdeck.model import Command
from taskdeck.ui.console import Console, set_console


class RecordingSpawn:
    """Stand-in process launcher: records calls, returns scripted exit codes."""

    def __init__(self, codes: Dict[str, int] | None = None):
        self.codes = dict(codes or {})
        self.calls: List[Tuple[Tuple[str, ...], Dict[str, str], Path]] = []

    def __call__(self, command: Command, env: Mapping[str, str], cwd: Path) -> int:
        self.calls.append((command.argv, dict(env), cwd))
        return self.codes.get(command.executable, 0)

    @property
    def executables(self) -> List[str]:
        return [argv[0] for argv, _env, _cwd in self.calls]


@pytest.fixture(autouse=True)
def _fresh_console():
    set_console(Console())
    yield
    set_console(Console())


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def spawn() -> RecordingSpawn:
    return RecordingSpawn()


@pytest.fixture
def resolver() -> EnvironmentResolver:
    """Resolver with a fixed platform and a minimal inherited environment."""
    return EnvironmentResolver(
        {"RUST_LOG": "info"},
        probe=lambda: "Linux",
        base_env={"PATH": "/usr/bin", "RUST_LOG": "warn", "HOME": "/home/dev"},
    )


@pytest.fixture
def py() -> str:
    return sys.executable
