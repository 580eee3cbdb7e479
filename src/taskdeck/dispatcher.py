# dispatcher.py
from __future__ import annotations

import signal
import subprocess
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from .environment import EnvironmentResolver
from .errors import CommandFailed
from .model import Command, DispatchResult, Invocation, Success, Target
from .registry import TargetRegistry
from .ui.console import Console, get_console


TOOL_HINTS = {
    "cargo": "Install the Rust toolchain (https://rustup.rs) or fix PATH.",
    "rustc": "Install the Rust toolchain (https://rustup.rs) or fix PATH.",
    "make": "Install make or fix PATH.",
    "python3": "Install Python 3 or fix PATH (python3).",
}

# shell conventions for "could not execute"
STATUS_NOT_FOUND = 127
STATUS_NOT_EXECUTABLE = 126

# spawn(command, env, cwd) -> returncode
SpawnFn = Callable[[Command, Mapping[str, str], Path], int]


# ----------------------------------------------------------------------
# Execution primitives
# ----------------------------------------------------------------------

def _spawn(command: Command, env: Mapping[str, str], cwd: Path) -> int:
    """
    Run one command to completion with output streaming to the terminal.

    A Ctrl-C while the child runs is delivered to the child by the terminal;
    we report it as the child having been interrupted.
    """
    try:
        proc = subprocess.run(
            list(command.argv),
            shell=False,
            cwd=str(cwd),
            env=dict(env),
            check=False,
        )
    except KeyboardInterrupt:
        return -signal.SIGINT
    return proc.returncode


def _missing_tool_hint(command: Command) -> str:
    tool = Path(command.executable).name
    return TOOL_HINTS.get(tool, f"Install {tool} or fix PATH.")


class Dispatcher:
    """
    Resolves a target and runs its commands one after another, fail-fast.

    Args:
        registry: Frozen target registry.
        resolver: Supplies the overlay merged into every spawned environment.
        root:     Directory commands run in (their own cwd is relative to it).
        dry_run:  Print commands instead of spawning them.
        spawn:    Process launcher; replaced in tests.
    """

    def __init__(
        self,
        registry: TargetRegistry,
        resolver: EnvironmentResolver,
        *,
        root: str | Path = ".",
        dry_run: bool = False,
        spawn: SpawnFn = _spawn,
        console: Optional[Console] = None,
    ):
        self.registry = registry
        self.resolver = resolver
        self.root = Path(root)
        self.dry_run = dry_run
        self._spawn = spawn
        self._console = console

    @property
    def console(self) -> Console:
        return self._console or get_console()

    def run(self, target_name: str) -> DispatchResult:
        # UnknownTarget propagates before anything is spawned
        t = self.registry.resolve(target_name)
        return self._run_target(t)

    def run_many(self, target_names: Sequence[str]) -> List[DispatchResult]:
        """
        Run several targets in order, stopping after the first failed one.
        With no names, runs the registry's default (first) target.
        """
        if target_names:
            resolved = [self.registry.resolve(n) for n in target_names]
        else:
            resolved = [self.registry.default()]

        results: List[DispatchResult] = []
        for t in resolved:
            result = self._run_target(t)
            results.append(result)
            if not result.ok:
                break
        return results

    def _run_target(self, t: Target) -> DispatchResult:
        env = self.resolver.environ()
        console = self.console
        console.print_target_start(t.name)
        console.print_debug(f"platform={self.resolver.platform()} overlay={dict(self.resolver.overlay())}")

        invocations: List[Invocation] = []
        for command in t.commands:
            console.print_command(command, dry_run=self.dry_run)
            if self.dry_run:
                continue

            failure = self._invoke(t, command, env, invocations)
            if failure is not None:
                console.print_failure(t.name, failure)
                return failure

        console.print_success(t.name)
        return Success(target=t.name, invocations=invocations)

    def _invoke(
        self,
        t: Target,
        command: Command,
        env: Dict[str, str],
        invocations: List[Invocation],
    ) -> Optional[CommandFailed]:
        cwd = (self.root / (command.cwd or ".")).resolve()
        if not cwd.is_dir():
            return CommandFailed(
                target=t.name,
                command=command,
                status=1,
                reason=f"working directory not found: {cwd}",
            )

        try:
            rc = self._spawn(command, env, cwd)
        except FileNotFoundError:
            return CommandFailed(
                target=t.name,
                command=command,
                status=STATUS_NOT_FOUND,
                reason=f"{command.executable}: command not found. {_missing_tool_hint(command)}",
            )
        except PermissionError:
            return CommandFailed(
                target=t.name,
                command=command,
                status=STATUS_NOT_EXECUTABLE,
                reason=f"{command.executable}: permission denied",
            )

        invocations.append(Invocation(command=command, returncode=rc))
        if rc != 0:
            return CommandFailed(target=t.name, command=command, status=rc)
        return None
