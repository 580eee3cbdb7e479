# model.py
from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .errors import CommandFailed


@dataclass(frozen=True)
class Command:
    """A single external invocation inside a target."""
    argv: Tuple[str, ...]
    name: str | None = None
    cwd: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.argv, str):
            raise TypeError("Command argv must be a sequence of arguments, not a string; use cmd() to split one")
        if not self.argv:
            raise ValueError("Command must have an executable")
        # accept lists from callers but store an immutable tuple
        object.__setattr__(self, "argv", tuple(str(a) for a in self.argv))

    @property
    def executable(self) -> str:
        return self.argv[0]

    @property
    def args(self) -> Tuple[str, ...]:
        return self.argv[1:]

    @property
    def display(self) -> str:
        return shlex.join(self.argv)

    @property
    def label(self) -> str:
        return self.name or self.display


@dataclass(frozen=True)
class Target:
    """A named, ordered sequence of commands."""
    name: str
    commands: Tuple[Command, ...]
    description: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Target must have a name")
        object.__setattr__(self, "commands", tuple(self.commands))


@dataclass(frozen=True)
class Invocation:
    """Outcome of one spawned command."""
    command: Command
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def signal(self) -> Optional[int]:
        return -self.returncode if self.returncode < 0 else None


@dataclass
class Success:
    target: str
    invocations: list[Invocation] = field(default_factory=list)

    ok = True
    exit_code = 0

    def raise_for_status(self) -> None:
        return None


DispatchResult = Success | CommandFailed
