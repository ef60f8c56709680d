"""User, channel and prefix modes, and the server's mode configuration.

Three categories of mode exist, depending on the MODE message target:

- modes set server-wide for the user (usermodes)
- modes set for a channel (chanmodes)
- modes set for a user on a channel (prefix modes)

Channel modes fall into the CHANMODES subtypes:

- A: adds or removes a nick or address to a list; always has a parameter
- B: changes a setting; always has a parameter
- C: changes a setting; has a parameter only when set
- D: changes a setting; never has a parameter

PREFIX maps a subset of modes to user prefixes, in order of precedence.
"""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from enum import Enum

DEFAULT_PREFIX_FROM = "ov"
DEFAULT_PREFIX_TO = "@+"
DEFAULT_CHANMODES = "OovaimnqpsrtklbeI"
DEFAULT_USERMODES = "aiwroOs"
DEFAULT_SUBTYPES = "IObe,k,l,aimnqpsrt"

_LETTERS = frozenset(string.ascii_letters)


class ModeError(ValueError):
    """An invalid mode flag or mode configuration string."""


class ModeType(Enum):
    INVALID_FLAG = 0
    CHANMODE = 1
    CHANMODE_PARAM = 2
    PREFIX = 3


def _is_flag(flag: str) -> bool:
    return len(flag) == 1 and flag in _LETTERS


def _is_graph(ch: str) -> bool:
    return len(ch) == 1 and 0x21 <= ord(ch) <= 0x7E


@dataclass
class Mode:
    """A set of mode letters, with the prefix character they display as."""

    flags: set[str] = field(default_factory=set)
    prefix: str = ""

    def is_set(self, flag: str) -> bool:
        return _is_flag(flag) and flag in self.flags

    def set(self, flag: str, on: bool) -> None:
        """Set or unset ``flag``; characters that are not letters are ignored."""
        if not _is_flag(flag):
            return
        if on:
            self.flags.add(flag)
        else:
            self.flags.discard(flag)

    def clear(self) -> None:
        self.flags.clear()
        self.prefix = ""

    def copy(self) -> "Mode":
        return Mode(set(self.flags), self.prefix)

    def __str__(self) -> str:
        lower = "".join(c for c in string.ascii_lowercase if c in self.flags)
        upper = "".join(c for c in string.ascii_uppercase if c in self.flags)
        return lower + upper


def _mode_from(text: str) -> Mode:
    mode = Mode()
    for ch in text:
        mode.set(ch, True)
    return mode


class ModeConfig:
    """Mode configuration of a server, starting from the RFC defaults.

    ``chanmodes`` and ``usermodes`` come from numeric 004, the CHANMODES
    subtypes and PREFIX from numeric 005.
    """

    def __init__(self) -> None:
        self.chanmodes = Mode()
        self.usermodes = Mode()
        self.subtypes: tuple[Mode, Mode, Mode, Mode] = (Mode(), Mode(), Mode(), Mode())
        self.prefix_from = DEFAULT_PREFIX_FROM
        self.prefix_to = DEFAULT_PREFIX_TO
        self.set_chanmodes(DEFAULT_CHANMODES)
        self.set_usermodes(DEFAULT_USERMODES)
        self.set_subtypes(DEFAULT_SUBTYPES)

    def set_chanmodes(self, text: str) -> None:
        """Configure the channel modes from a numeric 004 string."""
        self.chanmodes = _mode_from(text)

    def set_usermodes(self, text: str) -> None:
        """Configure the user modes from a numeric 004 string."""
        self.usermodes = _mode_from(text)

    def set_subtypes(self, text: str) -> None:
        """Configure the CHANMODES subtypes, e.g. ``"abc,d,ef,xyz"``.

        On error every subtype is cleared and ModeError is raised.
        """
        subtypes = (Mode(), Mode(), Mode(), Mode())
        index = 0
        for ch in text:
            if ch == ",":
                if index >= 3:
                    self.subtypes = (Mode(), Mode(), Mode(), Mode())
                    raise ModeError(f"too many CHANMODES subtypes: {text!r}")
                index += 1
                continue
            if not _is_flag(ch):
                self.subtypes = (Mode(), Mode(), Mode(), Mode())
                raise ModeError(f"invalid CHANMODES flag {ch!r}: {text!r}")
            subtypes[index].set(ch, True)
        self.subtypes = subtypes

    def set_prefix(self, text: str) -> None:
        """Configure PREFIX, e.g. ``"(ov)@+"`` maps o to @ and v to +.

        On error the mapping is cleared and ModeError is raised.
        """
        self.prefix_from = ""
        self.prefix_to = ""

        if not text.startswith("("):
            raise ModeError(f"invalid PREFIX: {text!r}")
        close = text.find(")")
        if close < 0:
            raise ModeError(f"invalid PREFIX: {text!r}")

        flags = text[1:close]
        prefixes = text[close + 1:]
        if len(flags) != len(prefixes):
            raise ModeError(f"invalid PREFIX: {text!r}")

        seen = ""
        for flag, prefix in zip(flags, prefixes):
            if not _is_flag(flag) or not _is_graph(prefix) or flag in seen:
                raise ModeError(f"invalid PREFIX: {text!r}")
            seen += flag

        self.prefix_from = flags
        self.prefix_to = prefixes

    def chanmode_set(self, mode: Mode, flag: str, on: bool) -> None:
        """Set or unset a channel mode; list modes (subtype A) are not kept."""
        if not self.chanmodes.is_set(flag):
            raise ModeError(f"invalid chanmode flag: {flag!r}")
        if self.subtypes[0].is_set(flag):
            return
        mode.set(flag, on)

    def prfxmode_set(self, mode: Mode, flag: str, on: bool) -> None:
        """Set or unset a prefix mode, given by flag or by prefix character,
        and update the prefix shown for ``mode``."""
        for mode_flag, prefix in zip(self.prefix_from, self.prefix_to):
            if flag in (mode_flag, prefix):
                break
        else:
            raise ModeError(f"invalid prfxmode flag: {flag!r}")

        mode.set(mode_flag, on)

        mode.prefix = next(
            (p for f, p in zip(self.prefix_from, self.prefix_to) if mode.is_set(f)),
            "",
        )

    def usermode_set(self, mode: Mode, flag: str, on: bool) -> None:
        """Set or unset a user mode."""
        if not self.usermodes.is_set(flag):
            raise ModeError(f"invalid usermode flag: {flag!r}")
        mode.set(flag, on)

    def mode_type(self, flag: str, on: bool) -> ModeType:
        """How a channel MODE flag is applied, and whether it takes a parameter."""
        if len(flag) == 1 and flag in self.prefix_from:
            return ModeType.PREFIX
        a, b, c, d = self.subtypes
        if a.is_set(flag) or b.is_set(flag):
            return ModeType.CHANMODE_PARAM
        if c.is_set(flag):
            return ModeType.CHANMODE_PARAM if on else ModeType.CHANMODE
        if d.is_set(flag):
            return ModeType.CHANMODE
        return ModeType.INVALID_FLAG