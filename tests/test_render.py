import pytest

from ircscreen.buffer import Buffer, BufferLine, LineType
from ircscreen.render import (
    RESERVED_ROWS,
    DrawBit,
    line_rows,
    nick_colour,
    scroll_back,
    scroll_forw,
    scrollback_status,
    split_columns,
)


def _line(text):
    return BufferLine(type=LineType.CHAT, sender="nick", text=text)


def _filled(count, text="hello"):
    buffer = Buffer()
    for n in range(count):
        buffer.newline(LineType.CHAT, "nick", f"{text} {n}")
    return buffer


def test_drawbit_lookup_by_value():
    assert DrawBit(DrawBit.FLUSH.value) is DrawBit.FLUSH
    assert max(DrawBit) is DrawBit.ALL


def test_line_rows_empty_line_is_one_row():
    line = _line("")
    assert line_rows(line, 10) == 1
    assert line.cached.rows == 1


def test_line_rows_short_line_fits():
    line = _line("abc")
    assert line_rows(line, 10) == 1
    assert line.cached.cols == 10


def test_line_rows_wraps_on_space():
    line = _line("aaaa bbbb")
    assert line_rows(line, 5) == 2


def test_line_rows_splits_long_word():
    text = "a" * 20
    assert line_rows(_line(text), 5) == len(text) // 5


def test_line_rows_ignores_formatting_codes():
    assert line_rows(_line("\x02" + "a" * 5), 5) == 1


def test_line_rows_cached_per_width():
    line = _line("a" * 30)
    first = line_rows(line, 10)
    line.text = "a"
    assert line_rows(line, 10) == first
    assert line_rows(line, 11) == 1


def test_line_rows_never_more_with_wider_columns():
    text = "the quick brown fox jumps over the lazy dog " * 3
    widths = [5, 8, 13, 21, 40]
    rows = [line_rows(_line(text), w) for w in widths]
    assert rows == sorted(rows, reverse=True)


def test_line_rows_zero_cols_raises():
    with pytest.raises(ValueError):
        line_rows(_line("abc"), 0)


@pytest.mark.parametrize("cols", [2, 3, 7, 15, 40, 200])
@pytest.mark.parametrize("pad", [0, 4, 30])
def test_split_columns_sums_to_width(cols, pad):
    head, text = split_columns(cols, pad)
    assert head + text == cols
    assert 0 <= head < cols


def test_split_columns_header_includes_pad():
    wide = split_columns(200, 0)[0]
    assert split_columns(200, 7)[0] == wide + 7


def test_split_columns_narrow_takes_half():
    head, text = split_columns(20, 30)
    assert head < text


def test_split_columns_too_narrow_raises():
    with pytest.raises(ValueError):
        split_columns(1, 0)


def test_scrollback_status_empty_buffer():
    assert scrollback_status(Buffer()) is None


def test_scrollback_status_at_head():
    buffer = _filled(10)
    assert buffer.scrollback == buffer.head_index - 1
    assert scrollback_status(buffer) is None


def test_scrollback_status_all_below():
    buffer = _filled(10)
    buffer.scrollback = 4
    buffer.top_index = 0
    buffer.bottom_index = 4
    assert scrollback_status(buffer) == 100


def test_scrollback_status_all_above():
    buffer = _filled(10)
    buffer.scrollback = 8
    buffer.top_index = 5
    buffer.bottom_index = 9
    assert scrollback_status(buffer) == 0


def test_scrollback_status_in_range():
    buffer = _filled(10)
    buffer.scrollback = 5
    buffer.top_index = 3
    buffer.bottom_index = 6
    status = scrollback_status(buffer)
    assert 0 < status < 100


def test_scroll_back_one_page():
    buffer = _filled(20)
    rows = RESERVED_ROWS + 5
    start = buffer.scrollback
    scroll_back(buffer, 80, rows)
    assert buffer.scrollback == start - (rows - RESERVED_ROWS)


def test_scroll_back_stops_at_tail():
    buffer = _filled(20)
    for _ in range(20):
        scroll_back(buffer, 80, RESERVED_ROWS + 5)
        assert buffer.scrollback >= buffer.tail_index
    assert buffer.scrollback == buffer.tail_index
    scroll_back(buffer, 80, RESERVED_ROWS + 5)
    assert buffer.scrollback == buffer.tail_index


def test_scroll_back_single_line_unchanged():
    buffer = _filled(1)
    scroll_back(buffer, 80, 20)
    assert buffer.scrollback == buffer.tail_index


def test_scroll_forw_one_page_from_drawn_bottom():
    buffer = _filled(20)
    buffer.scrollback = 0
    buffer.top_index = 0
    buffer.bottom_index = 4
    rows = RESERVED_ROWS + 5
    scroll_forw(buffer, 80, rows)
    assert buffer.scrollback == buffer.bottom_index + (rows - RESERVED_ROWS)


def test_scroll_forw_stops_at_head():
    buffer = _filled(20)
    buffer.scrollback = 0
    buffer.top_index = 1
    for _ in range(20):
        scroll_forw(buffer, 80, RESERVED_ROWS + 5)
        assert buffer.scrollback <= buffer.head_index - 1
    assert buffer.line(buffer.scrollback) is buffer.head()


def test_scroll_forw_at_head_unchanged():
    buffer = _filled(5)
    buffer.top_index = 1
    start = buffer.scrollback
    scroll_forw(buffer, 80, 20)
    assert buffer.scrollback == start


def test_scroll_on_empty_buffer_is_noop():
    buffer = Buffer()
    scroll_back(buffer, 80, 20)
    scroll_forw(buffer, 80, 20)
    assert buffer.scrollback == 0


def test_nick_colour_from_palette():
    colours = [31, 32, 33, 34, 35, 36]
    for nick in ("alice", "bob", "carol", "ünïcode"):
        assert nick_colour(nick, colours) in colours


def test_nick_colour_stable_and_order_independent():
    colours = list(range(100, 116))
    assert nick_colour("ab", colours) == nick_colour("ba", colours)
    assert nick_colour("someone", colours) == nick_colour("someone", colours)


def test_nick_colour_single_colour():
    assert nick_colour("anyone", [7]) == 7


def test_nick_colour_empty_palette_raises():
    with pytest.raises(ValueError):
        nick_colour("nick", [])