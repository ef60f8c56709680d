"""Users on a channel, looked up by nick under an IRC casemapping."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

from ircscreen.mode import Mode


class Casemapping(Enum):
    ASCII = "ascii"
    RFC1459 = "rfc1459"
    STRICT_RFC1459 = "strict-rfc1459"


_UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_LOWER = "abcdefghijklmnopqrstuvwxyz"

_FOLD = {
    Casemapping.ASCII: str.maketrans(_UPPER, _LOWER),
    Casemapping.RFC1459: str.maketrans(_UPPER + "[]\\~", _LOWER + "{}|^"),
    Casemapping.STRICT_RFC1459: str.maketrans(_UPPER + "[]\\", _LOWER + "{}|"),
}


def casefold(text: str, casemapping: Casemapping) -> str:
    """Fold ``text`` to lower case under an IRC casemapping."""
    return text.translate(_FOLD[casemapping])


class UserError(Exception):
    """A user list operation that cannot be done."""


class DuplicateUserError(UserError):
    """The nick is already in the list."""


class UserNotFoundError(UserError, KeyError):
    """The nick is not in the list."""


@dataclass
class User:
    nick: str
    prfxmodes: Mode = field(default_factory=Mode)

    @property
    def nick_len(self) -> int:
        return len(self.nick)


class UserList:
    """The users of a channel, kept in casemapped nick order."""

    def __init__(self) -> None:
        self._casemapping = Casemapping.RFC1459
        self._users: dict[str, User] = {}

    def _index(self, casemapping: Casemapping) -> dict[str, User]:
        if casemapping is not self._casemapping:
            self._casemapping = casemapping
            self._users = {casefold(u.nick, casemapping): u for u in self._users.values()}
        return self._users

    def add(self, casemapping: Casemapping, nick: str, prfxmodes: Optional[Mode] = None) -> User:
        """Add a user with a copy of ``prfxmodes`` and return it."""
        users = self._index(casemapping)
        key = casefold(nick, casemapping)
        if key in users:
            raise DuplicateUserError(nick)
        user = User(nick, prfxmodes.copy() if prfxmodes else Mode())
        users[key] = user
        return user

    def delete(self, casemapping: Casemapping, nick: str) -> None:
        users = self._index(casemapping)
        try:
            del users[casefold(nick, casemapping)]
        except KeyError:
            raise UserNotFoundError(nick) from None

    def replace(self, casemapping: Casemapping, nick_old: str, nick_new: str) -> User:
        """Rename a user, keeping its modes; a change of case only is allowed."""
        users = self._index(casemapping)
        key_old = casefold(nick_old, casemapping)
        key_new = casefold(nick_new, casemapping)
        old = users.get(key_old)
        if old is None:
            raise UserNotFoundError(nick_old)
        if key_new in users and key_new != key_old:
            raise DuplicateUserError(nick_new)
        new = User(nick_new, old.prfxmodes.copy())
        del users[key_old]
        users[key_new] = new
        return new

    def get(self, casemapping: Casemapping, nick: str, prefix_len: int = 0) -> Optional[User]:
        """The user called ``nick``, or with ``prefix_len`` > 0 the first user
        whose nick agrees with ``nick`` in its first ``prefix_len`` characters."""
        users = self._index(casemapping)
        key = casefold(nick, casemapping)
        if not prefix_len:
            return users.get(key)
        want = key[:prefix_len]
        for folded in sorted(users):
            if folded[:prefix_len] == want:
                return users[folded]
        return None

    def clear(self) -> None:
        self._users.clear()

    def __len__(self) -> int:
        return len(self._users)

    def __iter__(self) -> Iterator[User]:
        return (self._users[k] for k in sorted(self._users))