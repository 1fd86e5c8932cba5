"""Journaled protocol: state that can be rolled back after a failed call."""
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Journaled(Protocol):
    def snapshot(self) -> Any: ...

    def restore(self, snapshot: Any) -> None: ...
