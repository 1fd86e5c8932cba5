"""Non-reentrant guard for the engine's mutating entry points."""
from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from ..errors import ReentrantCall


class ReentrancyGuard:
    def __init__(self) -> None:
        self._entered = False

    @property
    def entered(self) -> bool:
        return self._entered

    @contextmanager
    def hold(self, operation: str) -> Iterator[None]:
        if self._entered:
            raise ReentrantCall(f"Reentrant call to {operation}")
        self._entered = True
        try:
            yield
        finally:
            self._entered = False
