# loader.py
from __future__ import annotations

import inspect
import runpy
from pathlib import Path
from typing import List, Optional

from .config import DEFAULT_TARGETS_FILE
from .errors import TargetFileError
from .model import Target
from .registry import TargetRegistry
from . import rules


# ----------------------------------------------------------------------
# Target file loading (local python file)
# ----------------------------------------------------------------------

def load_targets(path: str | Path, platform: str) -> List[Target]:
    """
    Load targets from a python file path.

    The file must define either:
      - define(platform) -> List[Target]   (or define() with no arguments)
      - TARGETS = [Target, ...]

    Returns:
      List[Target] in declaration order
    """
    tf_path = Path(path).expanduser().resolve()
    if not tf_path.exists():
        raise TargetFileError(str(tf_path), "Target file not found")
    if tf_path.suffix != ".py":
        raise TargetFileError(str(tf_path), f"Target file must be a .py file, got: {tf_path.name}")

    module_name = f"taskdeck_targets_{tf_path.stem}"
    try:
        globals_dict = runpy.run_path(str(tf_path), run_name=module_name)
    except Exception as e:
        raise TargetFileError(str(tf_path), f"Error while executing target file: {e}") from e

    found = None
    define = globals_dict.get("define")
    if callable(define):
        try:
            if inspect.signature(define).parameters:
                found = define(platform)
            else:
                found = define()
        except Exception as e:
            raise TargetFileError(str(tf_path), f"Error while calling define(): {e}") from e
    elif "TARGETS" in globals_dict:
        found = globals_dict["TARGETS"]

    if not isinstance(found, list) or not all(isinstance(t, Target) for t in found):
        raise TargetFileError(
            str(tf_path),
            "Target file must return/define a List[Target]. "
            "Define define(platform) -> List[Target] or TARGETS = [Target, ...].",
        )

    return found


def discover_targets_file(cwd: str | Path = ".") -> Optional[Path]:
    """Return the default target file in cwd, if one exists."""
    candidate = Path(cwd) / DEFAULT_TARGETS_FILE
    return candidate if candidate.exists() else None


def build_registry(platform: str, targets_file: str | Path | None = None, cwd: str | Path = ".") -> TargetRegistry:
    """
    Registry for this process: a target file when given or discovered,
    otherwise the built-in rules. Frozen on return.
    """
    path = Path(targets_file) if targets_file else discover_targets_file(cwd)
    if path is None:
        return rules.default_registry(platform)
    return TargetRegistry.from_targets(load_targets(path, platform))
