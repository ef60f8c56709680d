"""Editable input line with history and word completion."""

from __future__ import annotations

from typing import Callable, Optional

INPUT_LEN_MAX = 410
INPUT_HIST_MAX = 16

# Called with (word, maximum replacement length, word starts the input);
# returns the replacement word, or None/"" when there is no match.
CompletionCallback = Callable[[str, int, bool], Optional[str]]


def _is_control(ch: str) -> bool:
    return ord(ch) < 0x20 or ord(ch) == 0x7F


def _is_printable(ch: str) -> bool:
    return 0x20 <= ord(ch) < 0x7F


class Input:
    """A bounded line of text split at the cursor, plus a history ring."""

    def __init__(self, max_len: int = INPUT_LEN_MAX, hist_max: int = INPUT_HIST_MAX) -> None:
        if max_len <= 0:
            raise ValueError("input length must be positive")
        if hist_max <= 0 or hist_max & (hist_max - 1):
            raise ValueError("history size must be a power of 2")
        self.max_len = max_len
        self.hist_max = hist_max
        self._left = ""
        self._right = ""
        self.window = 0
        self._history: list[str] = []
        self._hist_current = 0

    @property
    def cursor(self) -> int:
        """Cursor position within the text."""
        return len(self._left)

    @property
    def history(self) -> tuple[str, ...]:
        """History entries, oldest first."""
        return tuple(self._history)

    def _size(self) -> int:
        return len(self._left) + len(self._right)

    def text(self) -> str:
        """The whole input text."""
        return self._left + self._right

    def cursor_back(self) -> bool:
        if not self._left:
            return False
        self._right = self._left[-1] + self._right
        self._left = self._left[:-1]
        return True

    def cursor_forw(self) -> bool:
        if not self._right:
            return False
        self._left += self._right[0]
        self._right = self._right[1:]
        return True

    def delete_back(self) -> bool:
        if not self._left:
            return False
        self._left = self._left[:-1]
        return True

    def delete_forw(self) -> bool:
        if not self._right:
            return False
        self._right = self._right[1:]
        return True

    def insert(self, text: str) -> bool:
        """Insert at the cursor; control characters become spaces and
        other unprintable characters are dropped. False when already full."""
        room = self.max_len - self._size()
        if room == 0:
            return False

        chars = []
        for ch in text:
            if not room:
                break
            if _is_control(ch):
                chars.append(" ")
                room -= 1
            elif _is_printable(ch):
                chars.append(ch)
                room -= 1

        self._left += "".join(chars)
        return True

    def reset(self) -> bool:
        """Clear the text; False when it is already empty."""
        if not self._size():
            return False
        self._hist_current = len(self._history)
        self._left = ""
        self._right = ""
        self.window = 0
        return True

    def complete(self, callback: CompletionCallback) -> bool:
        """Replace the word under the cursor with the callback's result.

        The cursor must be above a character of a word, above a space
        right after a word, or at the end of the line after a word.
        """
        if not self._size():
            return False

        start = self._left.rfind(" ") + 1
        if start == len(self._left) and (not self._right or self._right[0] == " "):
            return False

        end = self._right.find(" ")
        if end < 0:
            end = len(self._right)

        word = self._left[start:] + self._right[:end]
        max_len = self.max_len - self._size()

        replacement = callback(word, max_len, start == 0)
        if not replacement:
            return False
        if len(replacement) > max_len:
            raise ValueError("completion longer than the space available")

        self._left = self._left[:start] + replacement
        self._right = self._right[end:]
        return True

    def _load(self, text: str) -> None:
        self._left = text
        self._right = ""

    def hist_back(self) -> bool:
        if not self._history or self._hist_current == 0:
            return False
        self._hist_current -= 1
        self._load(self._history[self._hist_current])
        return True

    def hist_forw(self) -> bool:
        if not self._history or self._hist_current == len(self._history):
            return False
        self._hist_current += 1
        if self._hist_current == len(self._history):
            self._load("")
        else:
            self._load(self._history[self._hist_current])
        return True

    def hist_push(self) -> bool:
        """Save the text to history and clear it; False when empty."""
        text = self.text()
        if not text:
            return False
        if len(self._history) == self.hist_max:
            self._history.pop(0)
        self._history.append(text)
        return self.reset()

    def frame(self, width: int) -> tuple[str, int]:
        """Return the visible text for ``width`` columns and the cursor
        offset within it, reframing so the cursor stays in view."""
        if width < 1:
            raise ValueError("width must be positive")

        head = len(self._left)
        span = width - 1

        if self.window >= head or self.window + span <= head:
            back = span * 2 // 3
            self.window = 0 if back >= head else head - back

        return self.write(width, self.window), head - self.window

    def write(self, width: int, pos: int = 0) -> str:
        """Text from ``pos`` onwards, at most ``width - 1`` characters."""
        return (self._left[pos:] + self._right)[: max(width - 1, 0)]