import pytest

from ircscreen.mode import Mode, ModeConfig, ModeError, ModeType


@pytest.fixture
def cfg():
    return ModeConfig()


def test_mode_set_and_unset():
    m = Mode()
    m.set("a", True)
    m.set("Z", True)
    assert m.is_set("a")
    assert m.is_set("Z")
    assert not m.is_set("A")
    m.set("a", False)
    assert not m.is_set("a")


def test_mode_ignores_non_letters():
    m = Mode()
    m.set("1", True)
    m.set("@", True)
    assert str(m) == ""
    assert not m.is_set("1")


def test_mode_str_lower_before_upper():
    m = Mode()
    for ch in "ZbCa":
        m.set(ch, True)
    assert str(m) == "abCZ"


def test_default_mode_types(cfg):
    assert cfg.mode_type("o", True) is ModeType.PREFIX
    assert cfg.mode_type("v", False) is ModeType.PREFIX
    assert cfg.mode_type("b", True) is ModeType.CHANMODE_PARAM
    assert cfg.mode_type("k", False) is ModeType.CHANMODE_PARAM
    assert cfg.mode_type("l", True) is ModeType.CHANMODE_PARAM
    assert cfg.mode_type("l", False) is ModeType.CHANMODE
    assert cfg.mode_type("t", True) is ModeType.CHANMODE
    assert cfg.mode_type("z", True) is ModeType.INVALID_FLAG
    assert cfg.mode_type("", True) is ModeType.INVALID_FLAG


def test_default_chanmodes_and_usermodes(cfg):
    assert str(cfg.chanmodes) == "abeiklmnopqrstvIO"
    assert str(cfg.usermodes) == "aiorswO"


def test_subtypes_parsing(cfg):
    cfg.set_subtypes("abc,d,ef,xyz")
    assert cfg.mode_type("b", True) is ModeType.CHANMODE_PARAM
    assert cfg.mode_type("d", False) is ModeType.CHANMODE_PARAM
    assert cfg.mode_type("e", False) is ModeType.CHANMODE
    assert cfg.mode_type("y", True) is ModeType.CHANMODE


@pytest.mark.parametrize("text", ["a,b,c,d,e", "ab1", "a,b,c,d,"])
def test_subtypes_errors_clear_everything(cfg, text):
    with pytest.raises(ModeError):
        cfg.set_subtypes(text)
    assert all(str(sub) == "" for sub in cfg.subtypes)
    assert cfg.mode_type("b", True) is ModeType.INVALID_FLAG


def test_prefix_parsing(cfg):
    cfg.set_prefix("(abc)!@#")
    assert cfg.prefix_from == "abc"
    assert cfg.prefix_to == "!@#"
    assert cfg.mode_type("c", True) is ModeType.PREFIX


def test_empty_prefix_is_valid(cfg):
    cfg.set_prefix("()")
    assert cfg.prefix_from == ""
    assert cfg.mode_type("o", True) is ModeType.INVALID_FLAG


@pytest.mark.parametrize(
    "text", ["ov)@+", "(ov@+", "(ov)@", "(o1)@+", "(oo)@+", "(ov)@ "]
)
def test_prefix_errors_clear_mapping(cfg, text):
    with pytest.raises(ModeError):
        cfg.set_prefix(text)
    assert cfg.prefix_from == ""
    assert cfg.prefix_to == ""
    assert cfg.mode_type("o", True) is ModeType.INVALID_FLAG


def test_prfxmode_precedence(cfg):
    m = Mode()
    cfg.prfxmode_set(m, "v", True)
    assert m.prefix == "+"
    cfg.prfxmode_set(m, "o", True)
    assert m.prefix == "@"
    cfg.prfxmode_set(m, "o", False)
    assert m.prefix == "+"
    cfg.prfxmode_set(m, "v", False)
    assert m.prefix == ""


def test_prfxmode_by_prefix_character(cfg):
    m = Mode()
    cfg.prfxmode_set(m, "@", True)
    assert m.is_set("o")
    assert m.prefix == "@"


def test_prfxmode_unknown_flag(cfg):
    with pytest.raises(ModeError):
        cfg.prfxmode_set(Mode(), "x", True)


def test_chanmode_set(cfg):
    m = Mode()
    cfg.chanmode_set(m, "t", True)
    assert m.is_set("t")
    cfg.chanmode_set(m, "t", False)
    assert not m.is_set("t")


def test_chanmode_list_modes_not_kept(cfg):
    m = Mode()
    cfg.chanmode_set(m, "b", True)
    assert not m.is_set("b")


def test_chanmode_unknown_flag(cfg):
    cfg.set_chanmodes("abc")
    with pytest.raises(ModeError):
        cfg.chanmode_set(Mode(), "t", True)


def test_usermode_set(cfg):
    m = Mode()
    cfg.usermode_set(m, "i", True)
    assert m.is_set("i")
    with pytest.raises(ModeError):
        cfg.usermode_set(m, "x", True)
    assert not m.is_set("x")


def test_set_usermodes_replaces(cfg):
    cfg.set_usermodes("xyz")
    assert cfg.usermodes.is_set("x")
    assert not cfg.usermodes.is_set("i")