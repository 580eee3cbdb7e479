# rules.py
# Built-in rule set: the Rust toolchain targets this project drives.
from __future__ import annotations

from typing import List

from .dsl import cmd, target, targets
from .model import Target
from .registry import TargetRegistry


def define(platform: str) -> List[Target]:
    # platform is available for per-host commands; none of these need it yet
    return targets(
        target("build", cmd("cargo", "build"), description="Compile the project"),
        target("run", cmd("cargo", "run"), description="Build and run the application"),
        target("lint", cmd("cargo", "clippy"), description="Static analysis with clippy"),
        target(
            "doc",
            cmd("cargo", "doc", "--document-private-items"),
            description="Generate docs, including private items",
        ),
    )


def default_registry(platform: str) -> TargetRegistry:
    return TargetRegistry.from_targets(define(platform))
