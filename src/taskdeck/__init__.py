__version__ = "0.1.0"

from .dsl import cmd, target, targets, TargetBuilder, build
from .dispatcher import Dispatcher
from .environment import EnvironmentResolver, UNKNOWN_PLATFORM
from .errors import CommandFailed, DuplicateTarget, UnknownTarget
from .model import Command, Target, Success
from .registry import TargetRegistry

__all__ = [
    "cmd",
    "target",
    "targets",
    "TargetBuilder",
    "build",
    "Dispatcher",
    "EnvironmentResolver",
    "UNKNOWN_PLATFORM",
    "CommandFailed",
    "DuplicateTarget",
    "UnknownTarget",
    "Command",
    "Target",
    "Success",
    "TargetRegistry",
]
