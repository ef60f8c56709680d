"""Channels and the ordered, wrapping list of channels on a server."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, Iterator, Optional

from ircscreen.buffer import Buffer
from ircscreen.input import Input
from ircscreen.mode import Mode
from ircscreen.user import Casemapping, UserList, casefold

if TYPE_CHECKING:
    from ircscreen.server import Server


class Activity(IntEnum):
    """Channel activity, in order of precedence."""

    DEFAULT = 0
    JPQ = 1
    ACTIVE = 2
    PINGED = 3


class ChannelType(IntEnum):
    INVALID = 0
    RIRC = 1
    CHANNEL = 2
    PRIVMSG = 3
    SERVER = 4


@dataclass(eq=False)
class Channel:
    """A window of conversation: a channel, a private chat or a server buffer."""

    name: str
    type: ChannelType
    key: Optional[str] = None
    activity: Activity = Activity.DEFAULT
    server: Optional["Server"] = None
    buffer: Buffer = field(default_factory=Buffer)
    input: Input = field(default_factory=Input)
    chanmodes: Mode = field(default_factory=Mode)
    users: UserList = field(default_factory=UserList)
    parted: bool = False
    joined: bool = False

    @property
    def name_len(self) -> int:
        return len(self.name)

    @property
    def chanmodes_str(self) -> str:
        return str(self.chanmodes)

    def part(self) -> None:
        """Leave the channel, keeping its buffer."""
        self.reset()
        self.parted = True

    def reset(self) -> None:
        """Forget modes and users, as when disconnected."""
        self.chanmodes.clear()
        self.users.clear()
        self.joined = False


class ChannelList:
    """Channels in the order added; next and prev wrap around."""

    def __init__(self) -> None:
        self._channels: list[Channel] = []

    @property
    def head(self) -> Optional[Channel]:
        return self._channels[0] if self._channels else None

    @property
    def tail(self) -> Optional[Channel]:
        return self._channels[-1] if self._channels else None

    def add(self, channel: Channel) -> None:
        self._channels.append(channel)

    def remove(self, channel: Channel) -> None:
        """Remove ``channel``; ValueError if it is not in the list."""
        self._channels.pop(self._position(channel))

    def get(self, name: str, casemapping: Casemapping) -> Optional[Channel]:
        """The channel whose name matches ``name`` under ``casemapping``."""
        want = casefold(name, casemapping)
        return next(
            (c for c in self._channels if casefold(c.name, casemapping) == want),
            None,
        )

    def next(self, channel: Channel) -> Channel:
        """The channel after ``channel``, wrapping to the first."""
        return self._channels[(self._position(channel) + 1) % len(self._channels)]

    def prev(self, channel: Channel) -> Channel:
        """The channel before ``channel``, wrapping to the last."""
        return self._channels[(self._position(channel) - 1) % len(self._channels)]

    def _position(self, channel: Channel) -> int:
        for position, candidate in enumerate(self._channels):
            if candidate is channel:
                return position
        raise ValueError(f"channel not in list: {channel.name}")

    def __len__(self) -> int:
        return len(self._channels)

    def __iter__(self) -> Iterator[Channel]:
        return iter(list(self._channels))