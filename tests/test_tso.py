import io

import pytest

from mvskit.tso import (
    Aid,
    Color,
    Highlight,
    Order,
    Terminal,
    get_buf_addr,
    get_buf_offset,
    off_to_buf,
    rc_to_off,
    xlate3270,
)


def test_xlate3270_table_values():
    assert xlate3270(0) == 0x40
    assert xlate3270(1) == 0xC1
    assert xlate3270(63) == 0x7F


def test_xlate3270_keeps_low_six_bits():
    for value in range(64):
        assert xlate3270(value) & 0x3F == value


def test_xlate3270_values_are_distinct():
    assert len({xlate3270(v) for v in range(64)}) == 64


@pytest.mark.parametrize("value", [-1, 64, 255])
def test_xlate3270_rejects_out_of_range(value):
    with pytest.raises(ValueError):
        xlate3270(value)


def test_offset_round_trip_over_screen():
    for offset in range(24 * 80):
        assert get_buf_offset(off_to_buf(offset)) == offset


def test_buffer_address_bytes_are_3270_codes():
    codes = {xlate3270(v) for v in range(64)}
    for offset in (0, 79, 80, 1919):
        addr = off_to_buf(offset)
        assert addr >> 8 in codes
        assert addr & 0xFF in codes


def test_first_position_address():
    assert rc_to_off(1, 1) == 0
    assert get_buf_addr(1, 1) == 0x4040


def test_rc_to_off_matches_buffer_address():
    for row, col in [(1, 1), (1, 80), (2, 1), (12, 40), (24, 80)]:
        assert get_buf_offset(get_buf_addr(row, col)) == rc_to_off(row, col)


def test_rc_to_off_is_row_major():
    assert rc_to_off(2, 1) == rc_to_off(1, 80) + 1


@pytest.mark.parametrize("row,col", [(0, 1), (25, 1), (1, 0), (1, 81)])
def test_positions_out_of_range(row, col):
    with pytest.raises(ValueError):
        rc_to_off(row, col)
    with pytest.raises(ValueError):
        get_buf_addr(row, col)


def test_orders_and_attributes_written_as_stream_bytes():
    out = io.BytesIO()
    term = Terminal(output=out, input=io.BytesIO())
    addr = get_buf_addr(1, 1)
    stream = bytes(
        [
            Order.SBA,
            addr >> 8,
            addr & 0xFF,
            Order.SF,
            Color.WHITE,
            Highlight.UNDERSCORE,
            Aid.ENTER,
            Aid.RESHOW,
        ]
    )
    assert term.put_fullscreen(stream) == 8
    assert out.getvalue() == b"\x11\x40\x40\x1d\xf7\xf4\x7d\x6e"


def test_put_fullscreen_writes_stream():
    out = io.BytesIO()
    term = Terminal(output=out, input=io.BytesIO())
    data = bytes([0x27, 0xF5, 0xC3])
    assert term.put_fullscreen(data) == 3
    assert out.getvalue() == data


def test_get_asis_reads_up_to_size():
    term = Terminal(output=io.BytesIO(), input=io.BytesIO(b"\x7d\x40\x40rest"))
    assert term.get_asis(3) == b"\x7d\x40\x40"
    assert term.get_asis(100) == b"rest"
    assert term.get_asis(10) == b""


def test_get_asis_rejects_negative_size():
    term = Terminal(output=io.BytesIO(), input=io.BytesIO(b""))
    with pytest.raises(ValueError):
        term.get_asis(-1)


def test_modes_and_line_number():
    term = Terminal(output=io.BytesIO(), input=io.BytesIO())
    term.set_fullscreen_mode(True)
    term.set_temporary_mode(True)
    assert term.fullscreen is True
    assert term.temporary_mode is True
    term.set_fullscreen_mode(False)
    term.set_temporary_mode(0)
    assert term.fullscreen is False
    assert term.temporary_mode is False
    term.set_line_number(1)
    assert term.line_number == 1
    with pytest.raises(ValueError):
        term.set_line_number(0)