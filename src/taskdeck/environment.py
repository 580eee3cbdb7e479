# environment.py
# Host facts and the environment overlay shared by every spawned command.
# Both are computed on first use and never change afterwards.

from __future__ import annotations

import os
import subprocess
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional

from .config import DEFAULT_OVERLAY
from .errors import PlatformUnknown

UNKNOWN_PLATFORM = "unknown"


def _uname() -> str:
    """
    Query the host kernel name (`uname -s`).

    Raises:
        PlatformUnknown: uname is missing, fails, or prints nothing.
    """
    try:
        out = subprocess.check_output(
            ["uname", "-s"],
            text=True,
            stderr=subprocess.DEVNULL,
        )
    except (OSError, subprocess.CalledProcessError) as e:
        raise PlatformUnknown(str(e)) from e

    name = out.strip()
    if not name:
        raise PlatformUnknown("uname printed nothing")
    return name


class EnvironmentResolver:
    """
    Owns the platform fact and the environment overlay.

    Args:
        overlay: Variables injected on top of the inherited environment.
                 Defaults to DEFAULT_OVERLAY (RUST_LOG=info).
        probe:   Callable returning the platform name; raises PlatformUnknown
                 when the host cannot be queried.
        base_env: Inherited environment; defaults to os.environ at merge time.
    """

    def __init__(
        self,
        overlay: Mapping[str, str] | None = None,
        *,
        probe: Callable[[], str] = _uname,
        base_env: Mapping[str, str] | None = None,
    ):
        self._overlay_src: Dict[str, str] = dict(DEFAULT_OVERLAY if overlay is None else overlay)
        self._probe = probe
        self._base_env = base_env
        self._platform: Optional[str] = None
        self._overlay: Optional[Mapping[str, str]] = None

    def platform(self) -> str:
        if self._platform is None:
            try:
                self._platform = self._probe()
            except PlatformUnknown:
                self._platform = UNKNOWN_PLATFORM
        return self._platform

    def overlay(self) -> Mapping[str, str]:
        if self._overlay is None:
            self._overlay = MappingProxyType({str(k): str(v) for k, v in self._overlay_src.items()})
        return self._overlay

    def environ(self) -> Dict[str, str]:
        """Inherited environment with the overlay applied on top (overlay wins)."""
        env = dict(os.environ if self._base_env is None else self._base_env)
        env.update(self.overlay())
        return env
