import pytest

from mvskit import fss
from mvskit.fss import FssError, Screen
from mvskit.tso import Aid, off_to_buf, xlate3270


class FakeTerminal:
    def __init__(self, replies=()):
        self.replies = list(replies)
        self.written = []
        self.calls = []

    def put_fullscreen(self, data):
        self.written.append(bytes(data))
        return len(data)

    def get_asis(self, size):
        return self.replies.pop(0) if self.replies else b""

    def set_fullscreen_mode(self, on):
        self.calls.append(("fullscreen", on))

    def set_temporary_mode(self, on):
        self.calls.append(("temporary", on))

    def set_line_number(self, line):
        self.calls.append(("line", line))


def _addr(offset):
    return off_to_buf(offset).to_bytes(2, "big")


def _reply(aid, cursor, *fields):
    data = bytes((aid,)) + _addr(cursor)
    for offset, text in fields:
        data += b"\x11" + _addr(offset) + text.encode("cp037")
    return data


def test_trim_removes_trailing_blanks_only():
    assert fss.trim("  ab  ") == "  ab"
    assert fss.trim("   ") == ""


def test_is_numeric():
    assert fss.is_numeric("0123")
    assert not fss.is_numeric("")
    assert not fss.is_numeric("12a")


def test_is_hex():
    assert fss.is_hex("09afAF")
    assert not fss.is_hex("")
    assert not fss.is_hex("0g")


def test_is_blank():
    assert fss.is_blank("")
    assert fss.is_blank("   ")
    assert not fss.is_blank("  x ")


def test_make_printable_replaces_control_characters():
    assert fss.make_printable("a\tb\x00c") == "a.b.c"
    assert fss.make_printable("Hello, World!") == "Hello, World!"


def test_fss_attr_translates_basic_and_keeps_extended():
    value = fss.fss_attr(fss.PROT | fss.RED | fss.BLINK)
    assert value & 0xFF == xlate3270(fss.PROT)
    assert value & 0xFFFF00 == fss.RED | fss.BLINK


def test_text_position_and_length_errors():
    screen = Screen(FakeTerminal())
    with pytest.raises(FssError):
        screen.text(0, 2, fss.PROT, "x")
    with pytest.raises(FssError):
        screen.text(1, 1, fss.PROT, "x")
    with pytest.raises(FssError):
        screen.text(25, 2, fss.PROT, "x")
    with pytest.raises(FssError):
        screen.text(1, 2, fss.PROT, "")
    with pytest.raises(FssError):
        screen.text(1, 2, fss.PROT, "x" * 80)
    assert screen.fields == ()


def test_field_duplicate_and_length_errors():
    screen = Screen(FakeTerminal())
    screen.field(2, 10, 0, "name", 8, "")
    with pytest.raises(FssError):
        screen.field(3, 10, 0, "name", 8, "")
    with pytest.raises(FssError):
        screen.field(3, 10, 0, "other", 0, "")
    with pytest.raises(FssError):
        screen.field(3, 10, 0, "other", 80, "")
    assert len(screen.fields) == 1


def test_field_and_set_field_truncate_to_length():
    screen = Screen(FakeTerminal())
    screen.field(2, 10, 0, "name", 4, "ABCDEFG")
    assert screen.get_field("name") == "ABCD"
    screen.set_field("name", "xy\x01")
    assert screen.get_field("name") == "xy."
    screen.set_field("name", "123456")
    assert screen.get_field("name") == "1234"


def test_unknown_field_names_raise():
    screen = Screen(FakeTerminal())
    screen.text(1, 2, fss.PROT, "label")
    for call in (
        lambda: screen.get_field("none"),
        lambda: screen.set_field("none", "x"),
        lambda: screen.set_cursor("none"),
        lambda: screen.set_attr("none", 0),
        lambda: screen.set_color("none", fss.RED),
        lambda: screen.set_xh("none", fss.BLINK),
    ):
        with pytest.raises(FssError):
            call()


def test_set_color_xh_and_attr():
    screen = Screen(FakeTerminal())
    screen.field(2, 10, fss.HI, "f", 5, "")
    screen.set_color("f", fss.YELLOW)
    screen.set_xh("f", fss.REVERSE)
    (field,) = screen.fields
    assert field.color == 0xF6
    assert field.highlight == 0xF2
    assert field.basic_attr == xlate3270(fss.HI)
    screen.set_attr("f", fss.PROT)
    assert screen.fields[0].basic_attr == xlate3270(fss.PROT)
    assert screen.fields[0].color == 0


def test_build_output_for_text_field():
    screen = Screen(FakeTerminal())
    screen.text(1, 2, fss.PROT, "HI")
    expected = (
        bytes((0x27, 0xF5, 0xC3))
        + b"\x11" + _addr(0) + bytes((0x1D, xlate3270(fss.PROT)))
        + "HI".encode("cp037")
        + b"\x11" + _addr(3) + bytes((0x1D, xlate3270(fss.PROT)))
    )
    assert screen.build_output() == expected


def test_build_output_extended_attributes_and_cursor():
    screen = Screen(FakeTerminal())
    screen.field(1, 2, fss.RED | fss.USCORE, "f", 3, "ab")
    screen.set_cursor("f")
    out = screen.build_output()
    assert bytes((0x28, 0x41, 0xF4)) in out
    assert bytes((0x28, 0x42, 0xF2)) in out
    assert out.endswith(bytes((0x28, 0x00, 0x00)) + b"\x11" + _addr(1) + b"\x13")


def test_process_input_updates_fields():
    screen = Screen(FakeTerminal())
    screen.field(2, 10, 0, "a", 5, "")
    screen.field(3, 10, 0, "b", 3, "old")
    a_off = 1 * 80 + 9
    b_off = 2 * 80 + 9
    screen.process_input(_reply(Aid.ENTER, a_off, (a_off, "HELLO"), (b_off, "LONGER")))
    assert screen.aid == Aid.ENTER
    assert screen.cursor == a_off
    assert screen.get_field("a") == "HELLO"
    assert screen.get_field("b") == "LON"


def test_process_input_short_reply_clears_state():
    screen = Screen(FakeTerminal())
    screen.process_input(_reply(Aid.PF03, 5))
    assert screen.aid == Aid.PF03
    screen.process_input(bytes((Aid.CLEAR,)))
    assert screen.aid == 0
    assert screen.cursor == 0


def test_process_input_rejects_bad_order():
    screen = Screen(FakeTerminal())
    with pytest.raises(FssError):
        screen.process_input(bytes((Aid.ENTER,)) + _addr(0) + b"\x1d" + _addr(0) + b"x")


def test_refresh_repeats_on_reshow_and_clears_cursor():
    off = 1 * 80 + 9
    terminal = FakeTerminal(
        [bytes((Aid.RESHOW, 0, 0)), _reply(Aid.PF03, off, (off, "abc"))]
    )
    screen = Screen(terminal)
    screen.field(2, 10, 0, "f", 5, "")
    screen.set_cursor("f")
    assert screen.refresh() == Aid.PF03
    assert len(terminal.written) == 2
    assert terminal.written[0] == terminal.written[1]
    assert terminal.written[0].endswith(b"\x13")
    assert screen.get_field("f") == "abc"
    assert not screen.build_output().endswith(b"\x13")


def test_init_and_term_switch_terminal_modes():
    terminal = FakeTerminal()
    with Screen(terminal) as screen:
        screen.text(1, 2, 0, "x")
    assert terminal.calls == [
        ("fullscreen", True),
        ("temporary", True),
        ("line", 1),
        ("fullscreen", False),
        ("temporary", False),
    ]
    assert screen.fields == ()