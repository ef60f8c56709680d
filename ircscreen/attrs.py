"""IRC text formatting codes, terminal attributes and word wrapping."""

from __future__ import annotations

from typing import NamedTuple, Optional

CSI = "\x1b["

ATTR_BOLD = "\x02"
ATTR_COLOUR = "\x03"
ATTR_ITALIC = "\x1d"
ATTR_MONOSPACE = "\x11"
ATTR_RESET = "\x0f"
ATTR_REVERSE = "\x16"
ATTR_STRIKE = "\x1e"
ATTR_UNDERLINE = "\x1f"

_SINGLE_CHAR_ATTRS = frozenset(
    (ATTR_BOLD, ATTR_ITALIC, ATTR_MONOSPACE, ATTR_RESET, ATTR_REVERSE, ATTR_STRIKE, ATTR_UNDERLINE)
)

_TOGGLES = {
    ATTR_BOLD: "bold",
    ATTR_ITALIC: "italic",
    ATTR_REVERSE: "reverse",
    ATTR_STRIKE: "strike",
    ATTR_UNDERLINE: "underline",
}

# IRC colour numbers 0-99 mapped to 256-colour terminal indices; -1 is default.
IRC_TO_ANSI_COLOUR: tuple[int, ...] = (
    15, 0, 4, 2, 9, 1, 5, 3, 11, 10,
    6, 14, 12, 13, 8, 7, 52, 94, 100, 58,
    22, 29, 23, 24, 17, 54, 53, 89, 88, 130,
    142, 64, 28, 35, 30, 25, 18, 91, 90, 125,
    124, 166, 184, 106, 34, 49, 37, 33, 19, 129,
    127, 161, 196, 208, 226, 154, 46, 86, 51, 75,
    21, 171, 201, 198, 203, 215, 227, 191, 83, 122,
    87, 111, 63, 177, 207, 205, 217, 223, 229, 193,
    157, 158, 159, 153, 147, 183, 219, 212, 16, 233,
    235, 237, 239, 241, 244, 247, 250, 254, 231, -1,
)


def _in_palette(colour: int) -> bool:
    return 0 <= colour <= 255


class DrawAttrs:
    """Terminal drawing attributes: colours and text styles.

    ``flush`` is set whenever an attribute changes, meaning the terminal
    has not yet been told about the change.
    """

    def __init__(self, bg: int = -1, fg: int = -1) -> None:
        self._bg = bg
        self._fg = fg
        self.bold = False
        self.italic = False
        self.reverse = False
        self.strike = False
        self.underline = False
        self.flush = True

    @property
    def bg(self) -> int:
        return self._bg

    @bg.setter
    def bg(self, colour: int) -> None:
        self._bg = colour
        self.flush = True

    @property
    def fg(self) -> int:
        return self._fg

    @fg.setter
    def fg(self, colour: int) -> None:
        self._fg = colour
        self.flush = True

    def sgr(self) -> str:
        """The escape sequence selecting exactly these attributes."""
        parts = ["0"]
        if _in_palette(self._bg):
            parts.append(f"48;5;{self._bg}")
        if _in_palette(self._fg):
            parts.append(f"38;5;{self._fg}")
        for on, code in (
            (self.bold, "1"),
            (self.italic, "3"),
            (self.reverse, "7"),
            (self.strike, "9"),
            (self.underline, "4"),
        ):
            if on:
                parts.append(code)
        return CSI + ";".join(parts) + "m"

    def emit(self, force: bool = False) -> str:
        """The escape sequence if attributes changed (or ``force``), else ""."""
        if not (self.flush or force):
            return ""
        self.flush = False
        return self.sgr()

    def reset(self) -> None:
        """Return to default colours with every style off."""
        self._bg = -1
        self._fg = -1
        self.bold = False
        self.italic = False
        self.reverse = False
        self.strike = False
        self.underline = False
        self.flush = True

    def toggle(self, code: str) -> None:
        """Flip the style selected by an IRC formatting code.

        The monospace code is accepted and has no effect; any other code
        that is not a style raises ValueError.
        """
        if code == ATTR_MONOSPACE:
            return
        name = _TOGGLES.get(code)
        if name is None:
            raise ValueError(f"not a style code: {code!r}")
        setattr(self, name, not getattr(self, name))
        self.flush = True


class IrcColour(NamedTuple):
    """A parsed IRC colour code.

    ``length`` is the number of characters the code occupies. ``fg`` and
    ``bg`` are terminal colours, -1 for the default colour, or None when
    the code leaves that colour unchanged. A bare code gives -1 for both.
    """

    length: int
    fg: Optional[int]
    bg: Optional[int]


def parse_irc_colour(text: str) -> IrcColour:
    """Parse the colour code at the start of ``text``: ``^C[fg[,bg]]``,
    with up to two digits for each colour."""
    if not text.startswith(ATTR_COLOUR):
        raise ValueError(f"not a colour code: {text[:1]!r}")

    comma = 0
    digits_fg = digits_bg = 0
    parsed_fg = parsed_bg = 0

    for ch in text[1:]:
        if "0" <= ch <= "9":
            if comma:
                if digits_bg >= 2:
                    break
                digits_bg += 1
                parsed_bg = parsed_bg * 10 + int(ch)
            else:
                if digits_fg >= 2:
                    break
                digits_fg += 1
                parsed_fg = parsed_fg * 10 + int(ch)
        elif ch == ",":
            if comma:
                break
            comma += 1
        else:
            break

    length = 1 + digits_fg + digits_bg + (1 if comma and digits_bg else 0)

    if not digits_fg and not digits_bg:
        return IrcColour(length, -1, -1)

    fg = IRC_TO_ANSI_COLOUR[parsed_fg] if digits_fg else None
    bg = IRC_TO_ANSI_COLOUR[parsed_bg] if digits_bg else None
    return IrcColour(length, fg, bg)


def attr_len(text: str) -> int:
    """Length of the formatting code at the start of ``text``, 0 if none."""
    if not text:
        return 0
    if text[0] == ATTR_COLOUR:
        return parse_irc_colour(text).length
    if text[0] in _SINGLE_CHAR_ATTRS:
        return 1
    return 0


def wrap(text: str, cols: int) -> int:
    """Number of characters of ``text`` to draw in ``cols`` columns.

    Formatting codes take no columns. The break falls before a word when
    possible; a word longer than the line is split.
    """
    if not cols:
        return 0

    n = len(text)
    if n <= cols:
        return n

    i = 0
    while i < n and (ret := attr_len(text[i:])):
        i += ret

    w = 0
    while cols and i < n:
        in_spaces = text[i] == " "
        while cols and i < n:
            ret = attr_len(text[i:])
            if ret:
                i += ret
            elif (text[i] == " ") == in_spaces:
                i += 1
                cols -= 1
            else:
                break

        if cols and i < n and text[i] != " ":
            w = i

    return w if (i < n and w) else i