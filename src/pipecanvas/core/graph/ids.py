"""Injectable id generation for new nodes and edges.

The canvas historically derived ids from the wall clock (``"llm-1718000000000"``).
Graph operations take an :class:`IdGenerator` instead so tests can supply
deterministic ids.
"""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable

__all__ = ["IdGenerator", "SequentialIdGenerator", "TimestampIdGenerator"]


@runtime_checkable
class IdGenerator(Protocol):
    """Anything that can hand out fresh id suffixes."""

    def next(self) -> str: ...


class TimestampIdGenerator:
    """Millisecond timestamps, bumped so repeated calls never collide."""

    __slots__ = ("_last",)

    def __init__(self) -> None:
        self._last = 0

    def next(self) -> str:
        now = time.time_ns() // 1_000_000
        self._last = now if now > self._last else self._last + 1
        return str(self._last)


class SequentialIdGenerator:
    """Deterministic counter: ``"1"``, ``"2"``, ... starting at ``start``."""

    __slots__ = ("_counter",)

    def __init__(self, start: int = 1) -> None:
        self._counter = start - 1

    def next(self) -> str:
        self._counter += 1
        return str(self._counter)
