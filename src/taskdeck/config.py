# config.py
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional

# Exported into every spawned command; external tools honor it if they know it.
DEFAULT_OVERLAY: Dict[str, str] = {"RUST_LOG": "info"}

DEFAULT_TARGETS_FILE = "taskdeck_targets.py"


@dataclass(frozen=True)
class Settings:
    overlay: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_OVERLAY))
    targets_file: Optional[Path] = None
    cwd: Path = field(default_factory=Path.cwd)
    dry_run: bool = False
    debug: bool = False

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        extra_env: Iterable[tuple[str, str]] = (),
        targets_file: str | Path | None = None,
        dry_run: bool = False,
        debug: bool = False,
    ) -> "Settings":
        """
        Build settings from the process environment plus CLI overrides.

        TASKDECK_RUST_LOG overrides the default verbosity; --env pairs
        (extra_env) are applied last and win over everything else.
        """
        environ = os.environ if environ is None else environ

        overlay = dict(DEFAULT_OVERLAY)
        level = environ.get("TASKDECK_RUST_LOG")
        if level:
            overlay["RUST_LOG"] = level
        for key, value in extra_env:
            overlay[key] = value

        tf = targets_file or environ.get("TASKDECK_FILE") or None
        return cls(
            overlay=overlay,
            targets_file=Path(tf) if tf else None,
            dry_run=dry_run,
            debug=debug,
        )


def parse_env_pair(raw: str) -> tuple[str, str]:
    """Parse KEY=VALUE; the value may be empty or contain '='."""
    key, sep, value = raw.partition("=")
    key = key.strip()
    if not sep or not key:
        raise ValueError(f"Expected KEY=VALUE, got: {raw!r}")
    return key, value
