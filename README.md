# ircscreen

The building blocks of a text-mode IRC client. The package models servers,
channels, users, modes, scrollback buffers and the input line editor. It
also has the rules for laying a channel buffer out on a terminal: formatting
codes, word wrapping, ANSI attributes and page scrolling.

## Installation

```
pip install ircscreen
```

To run the test suite from a checkout:

```
pip install ".[test]"
pytest
```

## Modules

- `ircscreen.buffer`: `Buffer` is a fixed-capacity ring of `BufferLine`
  entries. Lines are addressed by absolute index (`Buffer.line`), and
  `head()` and `tail()` give the newest and the oldest line. The buffer
  keeps a `scrollback` position and the widest sender in `pad`. Each line
  has a `LineType`. The sender is cut to 100 characters and the text to
  510 characters.
- `ircscreen.input`: `Input` is a bounded line editor. It has cursor
  movement, deletion, word completion through a callback, and a history of
  at most 16 entries by default. `Input.frame` returns the visible text for
  a given width with the cursor offset, and reframes so the cursor stays in
  view.
- `ircscreen.ircv3`: `Caps` holds one `Cap` per known capability, in
  definition order, and `CAP_VERSION` is `"302"`. `Sasl` holds the SASL
  mechanism (`SaslMech`), the progress (`SaslState`) and the credentials.
- `ircscreen.mode`: `Mode` is a set of mode letters with a display prefix.
  `ModeConfig` starts from the RFC defaults. It reads the numeric 004 user
  and channel modes, the CHANMODES subtypes and PREFIX, and applies
  channel, prefix and user mode changes. `ModeConfig.mode_type` says
  whether a flag takes a parameter. Invalid input raises `ModeError`.
- `ircscreen.user`: `UserList` is a nick list that looks nicks up under a
  `Casemapping` (see `casefold`). It can also match by prefix. A duplicate
  nick raises `DuplicateUserError` and an unknown nick raises
  `UserNotFoundError`.
- `ircscreen.channel`: `Channel` has its own buffer, input, modes and users.
  `ChannelList` keeps channels in the order they were added, and
  `ChannelList.next` and `ChannelList.prev` wrap around at the ends.
- `ircscreen.server`: `Server` holds the connection settings and a list of
  nicks to try in turn. When that list runs out it picks a random `rirc…`
  nick. It also holds the channels, added from a comma-separated list, and
  the handling of numerics 004 and 005. `parse_005` yields the ISUPPORT
  `(parameter, value)` pairs. `ServerList` refuses a second server with the
  same host and port. Invalid values raise `ServerError`.
- `ircscreen.attrs`: `DrawAttrs` builds ANSI SGR sequences for colours and
  styles. `parse_irc_colour` and `attr_len` read IRC formatting codes.
  `wrap` decides how much of a line fits in a number of columns, and breaks
  before a word where it can.
- `ircscreen.render`: the layout of the scrollback view. `line_rows` counts
  the rows a wrapped line takes, and `split_columns` splits the width
  between the header and the text. `scrollback_status` gives the scroll
  percentage, `scroll_back` and `scroll_forw` move the view by a page, and
  `nick_colour` picks a colour for a nick. `DrawBit` names the parts of
  the screen that can be redrawn.

## Example

```python
from ircscreen.buffer import Buffer, LineType
from ircscreen.input import Input
from ircscreen.mode import Mode
from ircscreen.user import Casemapping, UserList

buf = Buffer()
buf.newline(LineType.CHAT, "alice", "hello there", "@")
print(buf.head().sender, buf.head().text)   # @alice hello there

inp = Input()
inp.insert("/join #python")
print(inp.text())                           # /join #python

users = UserList()
users.add(Casemapping.RFC1459, "Alice", Mode())
print(users.get(Casemapping.RFC1459, "alice", 0).nick)   # Alice
```

## What the package does not do

ircscreen is a library of state and layout rules only. It does not open
network connections, send or parse IRC messages beyond numerics 004 and
005, or run SASL authentication. It does not drive a terminal screen or read
the keyboard, and it has no command to start.