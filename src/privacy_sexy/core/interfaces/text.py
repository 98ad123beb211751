from __future__ import annotations
"""Text pipe protocol definitions."""

from typing import Callable, Protocol, Sequence

PipeFn = Callable[[str], str]


class PipeRegistryProtocol(Protocol):
    """Protocol for named text transforms applied to substituted values.

    Methods:
        get: Return the transform registered under `name`, or None.
        apply: Run `value` through `pipes` left to right.
    """

    def get(self, name: str) -> PipeFn | None:
        ...

    def apply(self, value: str, pipes: Sequence[str]) -> str:
        ...
