# errors.py
from __future__ import annotations

import signal as _signal
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .model import Command


@dataclass(eq=False)
class TaskdeckError(Exception):
    """
    Structured error with enough context for:
      - clean CLI output
      - debugging without full tracebacks
    """
    kind: str
    message: str
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        lines = [f"{self.kind}: {self.message}"]
        for k, v in self.details.items():
            lines.append(f"{k}={v}")
        return "\n".join(lines)


class UnknownTarget(TaskdeckError):
    def __init__(self, name: str, known: list[str] | None = None):
        self.name = name
        self.known = list(known or [])
        super().__init__(
            kind="unknown_target",
            message=f"No rule to make target '{name}'",
            details={"known": ", ".join(self.known)} if self.known else {},
        )


class DuplicateTarget(TaskdeckError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(
            kind="duplicate_target",
            message=f"Target '{name}' is already registered",
        )


class RegistryFrozen(TaskdeckError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(
            kind="registry_frozen",
            message=f"Cannot register '{name}': registry is frozen",
        )


class PlatformUnknown(TaskdeckError):
    def __init__(self, reason: str):
        super().__init__(
            kind="platform_unknown",
            message="Host platform could not be detected",
            details={"reason": reason},
        )


class TargetFileError(TaskdeckError):
    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(
            kind="target_file",
            message=message,
            details={"file": path},
        )


@dataclass(eq=False)
class CommandFailed(Exception):
    """A command exited non-zero or was killed; remaining commands were skipped."""
    target: str
    command: "Command"
    status: int
    reason: Optional[str] = None

    ok = False

    @property
    def signal(self) -> Optional[int]:
        # subprocess reports "killed by signal N" as returncode -N
        return -self.status if self.status < 0 else None

    @property
    def exit_code(self) -> int:
        """Exit code suitable for the calling process."""
        if self.signal is not None:
            return 128 + self.signal
        return self.status

    def raise_for_status(self) -> None:
        raise self

    def __str__(self) -> str:
        if self.signal is not None:
            try:
                sig = _signal.Signals(self.signal).name
            except ValueError:
                sig = str(self.signal)
            outcome = f"terminated by {sig}"
        else:
            outcome = f"exit={self.status}"
        msg = f"[{self.target}] command '{self.command.label}' failed ({outcome}): {self.command.display}"
        if self.reason:
            msg += f"\n{self.reason}"
        return msg
