"""Layout rules for drawing a channel buffer: wrapping, scrolling and colours."""

from __future__ import annotations

from enum import IntEnum
from typing import Optional, Sequence

from ircscreen.attrs import wrap
from ircscreen.buffer import Buffer, BufferLine

# Header drawn before each buffer line; the sender is padded into it.
HEADER_TEMPLATE = " HH:MM  ~ "

# Rows taken by the nav, the two separators and the input line.
RESERVED_ROWS = 4

# Minimum rows or columns to safely draw.
COLS_MIN = 5
ROWS_MIN = 5

# Width in bytes of one entry of the colour table, as used when picking a colour.
_COLOUR_ENTRY_SIZE = 4


class DrawBit(IntEnum):
    """Parts of the screen that can be marked for redrawing."""

    INVALID = 0
    FLUSH = 1        # immediately draw all set bits
    BELL = 2         # ring the terminal bell
    BUFFER = 3       # draw the buffer
    BUFFER_BACK = 4  # scroll the buffer back one page
    BUFFER_FORW = 5  # scroll the buffer forward one page
    INPUT = 6        # draw the input line
    NAV = 7          # draw the nav
    STATUS = 8       # draw the status bar
    ALL = 9          # everything aside from the bell


def line_rows(line: BufferLine, cols: int) -> int:
    """Number of rows ``line`` takes when wrapped in ``cols`` columns.

    The result is cached on the line per column width; an empty line
    occupies one row.
    """
    if cols <= 0:
        raise ValueError("cols must be positive")

    if not line.text:
        line.cached.rows = 1
        return 1

    if line.cached.cols != cols:
        rows = 0
        rest = line.text
        while rest:
            taken = wrap(rest, cols)
            if not taken:
                raise RuntimeError("wrapping made no progress")
            rest = rest[taken:]
            rows += 1
        line.cached.cols = cols
        line.cached.rows = rows

    return line.cached.rows


def split_columns(cols: int, pad: int) -> tuple[int, int]:
    """Split ``cols`` into header and text columns for a line.

    The header holds the time and a sender padded to ``pad`` characters;
    when it does not fit it takes half of the width.
    """
    if cols < 2:
        raise ValueError("at least two columns are needed")

    head = len(HEADER_TEMPLATE) + 1 + pad
    if head >= cols:
        head = cols // 2
    head -= 1

    return head, cols - head


def scrollback_status(buffer: Buffer) -> Optional[int]:
    """Percentage [0, 100] of undrawn lines lying below the drawn lines,
    or None when the view is at the newest line or nothing is undrawn."""
    if len(buffer) == 0 or buffer.line(buffer.scrollback) is buffer.head():
        return None

    below = float(buffer.head_index - buffer.bottom_index - 1)
    above = float(buffer.top_index - buffer.tail_index)

    if not below and not above:
        return None

    return int(100 * (below / (below + above)))


def scroll_back(buffer: Buffer, cols: int, rows: int) -> None:
    """Move the scrollback of ``buffer`` back one page, for a terminal of
    ``cols`` by ``rows``."""
    if len(buffer) == 0:
        return

    available = rows - RESERVED_ROWS
    tail = buffer.tail()
    line = buffer.line(buffer.scrollback)

    if line is tail:
        return

    count = 0
    while True:
        _, cols_text = split_columns(cols, buffer.pad)
        count += line_rows(line, cols_text)

        if line is tail or count >= available:
            break

        buffer.scrollback -= 1
        line = buffer.line(buffer.scrollback)

    # the top line in view draws in full; scroll one additional line
    if count == available and line is not tail:
        buffer.scrollback -= 1


def scroll_forw(buffer: Buffer, cols: int, rows: int) -> None:
    """Move the scrollback of ``buffer`` forward one page, for a terminal of
    ``cols`` by ``rows``."""
    if len(buffer) == 0:
        return

    available = rows - RESERVED_ROWS

    if buffer.top_index == buffer.tail_index and buffer.bottom_index != buffer.head_index - 1:
        buffer.scrollback = buffer.bottom_index

    head = buffer.head()
    line = buffer.line(buffer.scrollback)

    if line is head:
        return

    count = 0
    while True:
        _, cols_text = split_columns(cols, buffer.pad)
        count += line_rows(line, cols_text)

        if line is head or count >= available:
            break

        buffer.scrollback += 1
        line = buffer.line(buffer.scrollback)

    # the bottom line in view draws in full; scroll one additional line
    if count == available and line is not head:
        buffer.scrollback += 1


def nick_colour(nick: str, colours: Sequence[int]) -> int:
    """Pick a colour for ``nick`` from ``colours`` by the sum of its bytes."""
    if not colours:
        raise ValueError("no colours to choose from")

    total = 0
    for byte in nick.encode("utf-8"):
        total += byte - 256 if byte >= 128 else byte
    total %= 1 << 32

    index = (total % (len(colours) * _COLOUR_ENTRY_SIZE)) // _COLOUR_ENTRY_SIZE
    return colours[index]