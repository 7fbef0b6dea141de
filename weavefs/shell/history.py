"""
Command History Module

Bounded, navigable history of entered command lines.

Author: YSNRFD
Version: 1.0.0
"""

from collections import deque
from typing import Optional, List, Deque


class CommandHistory:
    """
    Append-only command history with up/down navigation.

    Consecutive duplicates are stored once. When the history is full the
    oldest entry is dropped.

    Example:
        >>> history = CommandHistory()
        >>> history.add('ls')
        >>> history.add('pwd')
        >>> history.navigate('up')
        'pwd'
        >>> history.navigate('up')
        'ls'
    """

    def __init__(self, max_size: int = 1000):
        self._entries: Deque[str] = deque(maxlen=max_size)
        self._index = -1

    def add(self, line: str) -> None:
        """Record a line and reset navigation."""
        line = line.strip()
        if line and (not self._entries or self._entries[-1] != line):
            self._entries.append(line)
        self._index = -1

    def navigate(self, direction: str) -> Optional[str]:
        """
        Step through history.

        Args:
            direction: 'up' for older entries, 'down' for newer ones

        Returns:
            The selected entry, '' when stepping past the newest entry,
            or None when there is nothing to show
        """
        if not self._entries:
            return None

        if direction == 'up':
            if self._index == -1:
                self._index = len(self._entries) - 1
            else:
                self._index = max(0, self._index - 1)
            return self._entries[self._index]

        if direction == 'down':
            if self._index == -1:
                return None
            self._index += 1
            if self._index >= len(self._entries):
                self._index = -1
                return ''
            return self._entries[self._index]

        raise ValueError(f"Unknown direction: {direction}")

    def entries(self) -> List[str]:
        """All entries, oldest first."""
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()
        self._index = -1

    def __len__(self) -> int:
        return len(self._entries)
