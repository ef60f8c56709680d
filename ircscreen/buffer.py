"""Fixed-capacity ring buffer of the lines shown in a channel window."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

TEXT_LENGTH_MAX = 510
FROM_LENGTH_MAX = 100
BUFFER_LINES_MAX = 1 << 10


class LineType(IntEnum):
    """Kinds of buffer line, in order of precedence."""

    OTHER = 0
    SERVER_INFO = 1
    SERVER_ERROR = 2
    JOIN = 3
    NICK = 4
    PART = 5
    QUIT = 6
    CHAT = 7
    PINGED = 8


@dataclass
class LineCache:
    """Drawing properties cached on a line."""

    colour: int = 0
    cols: int = 0
    rows: int = 0
    initialized: bool = False


@dataclass
class BufferLine:
    """One line of buffer text with its sender and timestamp."""

    type: LineType
    sender: str
    text: str
    time: int = field(default_factory=lambda: int(time.time()))
    cached: LineCache = field(default_factory=LineCache)

    @property
    def from_len(self) -> int:
        return len(self.sender)

    @property
    def text_len(self) -> int:
        return len(self.text)


class Buffer:
    """Ring buffer of lines, indexed by ever-increasing absolute positions.

    Valid indices lie in ``[tail_index, head_index)``; once the buffer is
    full the oldest line is dropped for every new one.
    """

    def __init__(self, capacity: int = BUFFER_LINES_MAX) -> None:
        if capacity <= 0 or capacity & (capacity - 1):
            raise ValueError("buffer capacity must be a power of 2")
        self.capacity = capacity
        self.clear()

    def clear(self) -> None:
        """Drop every line and return to the initial state."""
        self._lines: list[Optional[BufferLine]] = [None] * self.capacity
        self.head_index = 0
        self.tail_index = 0
        self.scrollback = 0
        self.pad = 0
        self.top_index = 0
        self.bottom_index = 0
        self.time_last = 0

    def __len__(self) -> int:
        return self.head_index - self.tail_index

    def head(self) -> Optional[BufferLine]:
        """The newest line, or None when empty."""
        if not len(self):
            return None
        return self._lines[(self.head_index - 1) % self.capacity]

    def tail(self) -> Optional[BufferLine]:
        """The oldest line, or None when empty."""
        if not len(self):
            return None
        return self._lines[self.tail_index % self.capacity]

    def line(self, index: int) -> Optional[BufferLine]:
        """The line at absolute ``index``; None when the buffer is empty."""
        if not len(self):
            return None
        if not self.tail_index <= index < self.head_index:
            raise IndexError(f"invalid index: {index}")
        return self._lines[index % self.capacity]

    def newline(
        self,
        line_type: LineType,
        from_str: str,
        text: str,
        prefix: Optional[str] = None,
    ) -> BufferLine:
        """Append a line and return it."""
        if from_str is None:
            raise ValueError("from string is None")
        if text is None:
            raise ValueError("text string is None")

        sender = ((prefix or "") + from_str)[:FROM_LENGTH_MAX]
        line = BufferLine(type=LineType(line_type), sender=sender, text=text[:TEXT_LENGTH_MAX])
        self._push(line)

        if line.from_len > self.pad:
            self.pad = line.from_len

        return line

    def _push(self, line: BufferLine) -> None:
        # keep the scrollback locked to the head while it is viewing the head
        if not len(self) or self.scrollback == self.head_index - 1:
            self.scrollback = self.head_index

        # keep the scrollback locked to the tail when the tail is evicted
        if len(self) == self.capacity:
            if self.scrollback == self.tail_index:
                self.scrollback += 1
            self.tail_index += 1

        self._lines[self.head_index % self.capacity] = line
        self.head_index += 1