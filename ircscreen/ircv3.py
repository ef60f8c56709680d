"""IRCv3 capability and SASL state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntFlag
from typing import Iterable, Iterator, Optional

CAP_VERSION = "302"


class CapFlag(IntFlag):
    NONE = 0
    AUTO = 1 << 0
    NO_DEL = 1 << 1
    NO_REQ = 1 << 2


DEFAULT_CAPS: tuple[tuple[str, CapFlag], ...] = (
    ("account-notify", CapFlag.AUTO),
    ("away-notify", CapFlag.AUTO),
    ("chghost", CapFlag.AUTO),
    ("extended-join", CapFlag.AUTO),
    ("invite-notify", CapFlag.AUTO),
    ("multi-prefix", CapFlag.AUTO),
    ("sasl", CapFlag.AUTO),
)


@dataclass
class Cap:
    """State of one capability."""

    name: str
    supports_del: bool = True
    supports_req: bool = True
    req_auto: bool = False
    val: Optional[str] = None
    req: bool = False
    set: bool = False
    supported: bool = False

    @classmethod
    def from_flags(cls, name: str, flags: CapFlag) -> "Cap":
        return cls(
            name=name,
            supports_del=not flags & CapFlag.NO_DEL,
            supports_req=not flags & CapFlag.NO_REQ,
            req_auto=bool(flags & CapFlag.AUTO),
        )

    def reset(self) -> None:
        self.val = None
        self.req = False
        self.set = False
        self.supported = False


class Caps:
    """The known capabilities of a server connection, in definition order."""

    def __init__(self, extra: Iterable[tuple[str, CapFlag]] = ()) -> None:
        self._caps = {
            name: Cap.from_flags(name, CapFlag(flags))
            for name, flags in (*DEFAULT_CAPS, *extra)
        }

    def get(self, name: str) -> Optional[Cap]:
        """The capability called ``name``, or None if it is unknown."""
        return self._caps.get(name)

    def reset(self) -> None:
        """Forget everything negotiated with the server."""
        for cap in self._caps.values():
            cap.reset()

    def __iter__(self) -> Iterator[Cap]:
        return iter(self._caps.values())

    def __len__(self) -> int:
        return len(self._caps)


class SaslMech(Enum):
    NONE = 0
    EXTERNAL = 1
    PLAIN = 2


class SaslState(Enum):
    NONE = 0
    REQ_MECH = 1
    AUTHENTICATED = 2


@dataclass
class Sasl:
    """SASL mechanism, credentials and progress."""

    mech: SaslMech = SaslMech.NONE
    state: SaslState = SaslState.NONE
    user: Optional[str] = None
    password: Optional[str] = None

    def reset(self) -> None:
        self.state = SaslState.NONE