# registry.py
from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from .errors import DuplicateTarget, RegistryFrozen, UnknownTarget
from .model import Command, Target


class TargetRegistry:
    """
    Fixed mapping from target name to its ordered commands.

    Populated once at startup, then frozen. Reads after freezing need no
    locking since nothing is mutated.
    """

    def __init__(self, targets: Iterable[Target] = ()):
        self._targets: Dict[str, Target] = {}  # insertion order = declaration order
        self._frozen = False
        for t in targets:
            self.register(t)

    @classmethod
    def from_targets(cls, targets: Iterable[Target]) -> "TargetRegistry":
        reg = cls(targets)
        reg.freeze()
        return reg

    def register(
        self,
        name: str | Target,
        commands: Optional[Sequence[Command]] = None,
        *,
        description: str | None = None,
    ) -> Target:
        if isinstance(name, Target):
            t = name
        else:
            t = Target(name=name, commands=tuple(commands or ()), description=description)

        if self._frozen:
            raise RegistryFrozen(t.name)
        if t.name in self._targets:
            raise DuplicateTarget(t.name)

        self._targets[t.name] = t
        return t

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def resolve(self, name: str) -> Target:
        try:
            return self._targets[name]
        except KeyError:
            raise UnknownTarget(name, known=self.names()) from None

    def default(self) -> Target:
        """First registered target (make's default goal)."""
        if not self._targets:
            raise UnknownTarget("<default>")
        return next(iter(self._targets.values()))

    def names(self) -> List[str]:
        return list(self._targets)

    def __contains__(self, name: object) -> bool:
        return name in self._targets

    def __iter__(self) -> Iterator[Target]:
        return iter(list(self._targets.values()))

    def __len__(self) -> int:
        return len(self._targets)
