"""Bounded combat console.

The event log is the operator-facing record of dice results. Entries are
appended in order and never edited; once the log holds more than its
capacity the oldest entries fall off.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator

from mass_combat.core.constants import DEFAULT_LOG_CAPACITY


class EventLog:
    """Append-only sequence of formatted result lines.

    Example:
        >>> log = EventLog(capacity=2)
        >>> log.extend(["a", "b", "c"])
        >>> log.lines
        ['b', 'c']
    """

    def __init__(self, capacity: int = DEFAULT_LOG_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._entries: deque[str] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def lines(self) -> list[str]:
        """Retained entries, oldest first."""
        return list(self._entries)

    def append(self, line: str) -> None:
        self._entries.append(line)

    def extend(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.append(line)

    def tail(self, n: int) -> list[str]:
        """Newest ``n`` entries in their original order."""
        if n <= 0:
            return []
        return list(self._entries)[-n:]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))


__all__ = [
    "EventLog",
]
