"""IRC servers: connection settings, nicks, numeric 004/005 and the server list."""

from __future__ import annotations

import random
import string
from typing import Iterator, Optional

from ircscreen.channel import Channel, ChannelList, ChannelType
from ircscreen.ircv3 import Caps, Sasl, SaslMech
from ircscreen.mode import Mode, ModeConfig, ModeError
from ircscreen.user import Casemapping

_NICK_SPECIAL = "[]\\`_^{|}"
_NICK_FIRST = frozenset(string.ascii_letters + _NICK_SPECIAL)
_NICK_REST = frozenset(string.ascii_letters + string.digits + _NICK_SPECIAL + "-")
_CHAN_PREFIX = "#&+!"
_CHAN_INVALID = frozenset(" ,\x07\r\n\0")

_RANDOM_NICK_CHARS = "0123456789ABCDEF"
_RANDOM_NICK_BASE = "rirc"
_RANDOM_NICK_LEN = 9


class ServerError(ValueError):
    """Invalid server configuration or server-supplied value."""


def _is_nick(text: str) -> bool:
    return bool(text) and text[0] in _NICK_FIRST and all(c in _NICK_REST for c in text[1:])


def _is_chan(text: str) -> bool:
    return bool(text) and text[0] in _CHAN_PREFIX and not any(c in _CHAN_INVALID for c in text)


def parse_005(text: str) -> Iterator[tuple[str, Optional[str]]]:
    """Yield ``(parameter, value)`` pairs from a numeric 005 (ISUPPORT) string.

    Parsing stops at the first token not starting with a letter or digit,
    such as the trailing ``:are supported by this server``. An empty value
    is given as None.
    """
    rest = text
    while True:
        rest = rest.lstrip(" ")
        if not rest or not (rest[0].isascii() and rest[0].isalnum()):
            return
        token, _, rest = rest.partition(" ")
        arg, sep, val = token.partition("=")
        yield arg, (val if sep and val else None)


class Server:
    """One IRC server, its settings, state and channels."""

    def __init__(
        self,
        host: str,
        port: str,
        username: str,
        realname: str,
        *,
        password: Optional[str] = None,
        mode: Optional[str] = None,
    ) -> None:
        self.host = host
        self.port = port
        self.password = password
        self.username = username
        self.realname = realname
        self.mode = mode
        self.nick: Optional[str] = None
        self.nicks: list[str] = []
        self.nicks_next = 0
        self.casemapping = Casemapping.RFC1459
        self.ircv3_caps = Caps()
        self.ircv3_sasl = Sasl()
        self.mode_cfg = ModeConfig()
        self.usermodes = Mode()
        self.ping = 0
        self.connected = False
        self.quitting = False
        self.registered = False
        self.connection: object = None

        self.clist = ChannelList()
        self.channel = Channel(host, ChannelType.SERVER, server=self)
        self.clist.add(self.channel)

    @property
    def mode_str(self) -> str:
        return str(self.usermodes)

    def set_chans(self, text: str) -> None:
        """Add channels and private chats from a comma separated list."""
        names = text.split(",")
        for name in names:
            if not _is_chan(name) and not _is_nick(name):
                raise ServerError(f"invalid chans: {text!r}")

        for name in names:
            if self.clist.get(name, self.casemapping):
                continue
            kind = ChannelType.CHANNEL if _is_chan(name) else ChannelType.PRIVMSG
            self.clist.add(Channel(name, kind, server=self))

    def set_nicks(self, text: str) -> None:
        """Set the nicks to try in turn, from a comma separated list."""
        nicks = text.split(",")
        if not all(_is_nick(nick) for nick in nicks):
            raise ServerError(f"invalid nicks: {text!r}")
        self.nicks = nicks
        self.nicks_next = 0

    def set_004(self, text: str) -> None:
        """Apply numeric 004: ``<server_name> <version> <user_modes> <chan_modes>``.

        Modes that are present are applied even when others are missing;
        ServerError is raised afterwards for what was missing.
        """
        fields = text.split()
        names = ("server_name", "version", "user_modes", "chan_modes")
        errors = [
            f"invalid numeric 004: {name} is null"
            for index, name in enumerate(names)
            if index >= len(fields)
        ]

        if len(fields) > 2:
            self.mode_cfg.set_usermodes(fields[2])
        if len(fields) > 3:
            self.mode_cfg.set_chanmodes(fields[3])

        if errors:
            raise ServerError("; ".join(errors))

    def set_005(self, text: str) -> None:
        """Apply the CASEMAPPING, CHANMODES and PREFIX options of numeric 005.

        Every option is tried; ServerError lists those that were invalid.
        """
        handlers = {
            "CASEMAPPING": self._set_casemapping,
            "CHANMODES": self.mode_cfg.set_subtypes,
            "PREFIX": self.mode_cfg.set_prefix,
        }
        errors = []
        for arg, val in parse_005(text):
            handler = handlers.get(arg)
            if handler is None:
                continue
            if val is None:
                errors.append(f"invalid numeric 005 {arg}: value is NULL")
                continue
            try:
                handler(val)
            except (ModeError, ServerError):
                errors.append(f"invalid numeric 005 {arg}: {val}")
        if errors:
            raise ServerError("; ".join(errors))

    def _set_casemapping(self, value: str) -> None:
        try:
            self.casemapping = Casemapping(value)
        except ValueError:
            raise ServerError(f"unknown casemapping: {value}") from None

    def set_sasl(
        self, mech: str, user: Optional[str] = None, password: Optional[str] = None
    ) -> None:
        """Choose the SASL mechanism; credentials are kept only for PLAIN."""
        sasl = self.ircv3_sasl
        sasl.user = None
        sasl.password = None
        upper = mech.upper()
        if upper == "EXTERNAL":
            sasl.mech = SaslMech.EXTERNAL
        elif upper == "PLAIN":
            sasl.mech = SaslMech.PLAIN
            sasl.user = user
            sasl.password = password

    def set_nick(self, nick: str) -> None:
        self.nick = nick

    def next_nick(self) -> str:
        """Move to the next configured nick, or a random one when none are left."""
        if self.nicks_next < len(self.nicks):
            nick = self.nicks[self.nicks_next]
            self.nicks_next += 1
        else:
            suffix_len = _RANDOM_NICK_LEN - len(_RANDOM_NICK_BASE)
            nick = _RANDOM_NICK_BASE + "".join(
                random.choice(_RANDOM_NICK_CHARS) for _ in range(suffix_len)
            )
        self.set_nick(nick)
        return nick

    def reset(self) -> None:
        """Return to the state of a disconnected server."""
        self.ircv3_caps.reset()
        self.ircv3_sasl.reset()
        self.usermodes.clear()
        self.ping = 0
        self.quitting = False
        self.registered = False
        self.nicks_next = 0


class ServerList:
    """Servers in the order added, unique by host and port."""

    def __init__(self) -> None:
        self._servers: list[Server] = []

    def add(self, server: Server) -> None:
        """Add ``server``; ServerError if one with its host and port exists."""
        if self.get(server.host, server.port) is not None:
            raise ServerError(f"duplicate server: {server.host}:{server.port}")
        self._servers.append(server)

    def remove(self, server: Server) -> Server:
        """Remove and return ``server``; ValueError if it is not listed."""
        for position, candidate in enumerate(self._servers):
            if candidate is server:
                return self._servers.pop(position)
        raise ValueError(f"server not in list: {server.host}:{server.port}")

    def get(self, host: str, port: str) -> Optional[Server]:
        return next(
            (s for s in self._servers if s.host == host and s.port == port),
            None,
        )

    def __len__(self) -> int:
        return len(self._servers)

    def __iter__(self) -> Iterator[Server]:
        return iter(list(self._servers))