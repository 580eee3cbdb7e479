# dsl.py
from __future__ import annotations

import shlex
from typing import List, Optional, Sequence, Union

from .model import Command, Target


# ---------------------------------------------------------------------
# Command helper
# ---------------------------------------------------------------------

def cmd(*argv: str, name: str | None = None, cwd: str | None = None) -> Command:
    """
    Create a command.

    Accepts either separate arguments or a single string that is split
    shell-style on any whitespace (no shell is involved at run time):
        cmd("cargo", "build")
        cmd("cargo doc --document-private-items")

    A single string is always split, so an executable whose path contains
    spaces must be passed as its own argument or quoted:
        cmd("/opt/My Tools/cargo", "build")
        cmd("'/opt/My Tools/cargo' build")
    """
    if len(argv) == 1 and any(ch.isspace() for ch in argv[0]):
        argv = tuple(shlex.split(argv[0]))
    if not argv:
        raise ValueError("cmd() needs at least an executable")
    return Command(argv=tuple(argv), name=name, cwd=cwd)


# ---------------------------------------------------------------------
# Functional Target helper
# ---------------------------------------------------------------------

CommandLike = Union[Command, str, Sequence[str]]


def _as_command(value: CommandLike) -> Command:
    if isinstance(value, Command):
        return value
    if isinstance(value, str):
        return cmd(value)
    return cmd(*value)


def target(
    name: str,
    *commands: CommandLike,  # allow: target("x", cmd(...), "tool arg")
    description: Optional[str] = None,
    cwd: str | None = None,  # default cwd applied to commands missing cwd
) -> Target:
    if not commands:
        raise ValueError(f"target({name!r}) must have at least one command")

    final: List[Command] = []
    for c in commands:
        c = _as_command(c)
        if cwd is not None and c.cwd is None:
            c = Command(argv=c.argv, name=c.name, cwd=cwd)
        final.append(c)

    return Target(name=name, commands=tuple(final), description=description)


# ---------------------------------------------------------------------
# Builder API
# ---------------------------------------------------------------------

class TargetBuilder:
    def __init__(self, name: str):
        self.name = name
        self._commands: list[Command] = []
        self._description: Optional[str] = None

    def describe(self, text: str):
        self._description = text
        return self

    def define_command(self, *argv: str, name: str | None = None, cwd: str | None = None):
        self._commands.append(cmd(*argv, name=name, cwd=cwd))
        return self

    def build(self) -> Target:
        if not self._commands:
            raise ValueError(f"Target '{self.name}' has no commands")
        return Target(name=self.name, commands=tuple(self._commands), description=self._description)


def build(name: str) -> TargetBuilder:
    """Convenience: build('lint').define_command('cargo', 'clippy').build()"""
    return TargetBuilder(name)


# ---------------------------------------------------------------------
# Collection helper (single-file story)
# ---------------------------------------------------------------------

def targets(*items: Target) -> List[Target]:
    """
    Target file helper.

    Users can write:
        from taskdeck import targets, target, cmd

        def define(platform):
            return targets(
                target("build", cmd("cargo", "build")),
                target("run", cmd("cargo", "run")),
            )

    Or use TARGETS directly:
        TARGETS = targets(target(...), target(...))
    """
    return list(items)
