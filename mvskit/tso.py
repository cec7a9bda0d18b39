"""3270 data-stream helpers and a terminal for full-screen TSO I/O.

A 3270 screen of 24 rows by 80 columns is addressed by a buffer offset
(0 for row 1, column 1). On the wire an offset is sent as a two-byte
buffer address. Each byte carries six bits of the offset, passed through
the 3270 code table, so every byte is a printable character.
"""

from __future__ import annotations

import enum
import sys
from typing import BinaryIO

MAX_ROW = 24
MAX_COL = 80

ATTR_PROTECTED = 0x30
ATTR_NUMERIC = 0x10
ATTR_HIGH = 0x08

_TBL3270 = bytes(
    (
        0x40, 0xC1, 0xC2, 0xC3, 0xC4, 0xC5, 0xC6, 0xC7,
        0xC8, 0xC9, 0x4A, 0x4B, 0x4C, 0x4D, 0x4E, 0x4F,
        0x50, 0xD1, 0xD2, 0xD3, 0xD4, 0xD5, 0xD6, 0xD7,
        0xD8, 0xD9, 0x5A, 0x5B, 0x5C, 0x5D, 0x5E, 0x5F,
        0x60, 0x61, 0xE2, 0xE3, 0xE4, 0xE5, 0xE6, 0xE7,
        0xE8, 0xE9, 0x6A, 0x6B, 0x6C, 0x6D, 0x6E, 0x6F,
        0xF0, 0xF1, 0xF2, 0xF3, 0xF4, 0xF5, 0xF6, 0xF7,
        0xF8, 0xF9, 0x7A, 0x7B, 0x7C, 0x7D, 0x7E, 0x7F,
    )
)


class Order(enum.IntEnum):
    """3270 data-stream orders and set-attribute types."""

    SF = 0x1D
    SBA = 0x11
    IC = 0x13
    PT = 0x05
    RA = 0x3C
    EUA = 0x12
    SA = 0x28
    SA_EXTH = 0x41
    SA_COLOR = 0x42


class Aid(enum.IntEnum):
    """Attention identifiers sent by the terminal."""

    ENTER = 0x7D
    PF01 = 0xF1
    PF02 = 0xF2
    PF03 = 0xF3
    PF04 = 0xF4
    PF05 = 0xF5
    PF06 = 0xF6
    PF07 = 0xF7
    PF08 = 0xF8
    PF09 = 0xF9
    PF10 = 0x7A
    PF11 = 0x7B
    PF12 = 0x7C
    PF13 = 0xC1
    PF14 = 0xC2
    PF15 = 0xC3
    PF16 = 0xC4
    PF17 = 0xC5
    PF18 = 0xC6
    PF19 = 0xC7
    PF20 = 0xC8
    PF21 = 0xC9
    PF22 = 0x4A
    PF23 = 0x4B
    PF24 = 0x4C
    PA1 = 0x6C
    PA2 = 0x6E
    PA3 = 0x6B
    CLEAR = 0x6D
    RESHOW = 0x6E


class Color(enum.IntEnum):
    """Extended colour attribute values."""

    DEFAULT = 0x00
    BLUE = 0xF1
    RED = 0xF2
    PINK = 0xF3
    GREEN = 0xF4
    TURQUOISE = 0xF5
    YELLOW = 0xF6
    WHITE = 0xF7


class Highlight(enum.IntEnum):
    """Extended highlighting attribute values."""

    DEFAULT = 0x00
    BLINK = 0xF1
    REVERSE = 0xF2
    UNDERSCORE = 0xF4


def xlate3270(byte: int) -> int:
    """Translate a six-bit value (0-63) into its 3270 code byte."""
    if not 0 <= byte <= 63:
        raise ValueError(f"value out of 3270 code range: {byte}")
    return _TBL3270[byte]


def get_buf_offset(buf_addr: int) -> int:
    """Convert a two-byte 3270 buffer address into a buffer offset."""
    return (buf_addr & 0x3F) | ((buf_addr & 0x3F00) >> 2)


def off_to_buf(offset: int) -> int:
    """Convert a buffer offset into a two-byte 3270 buffer address."""
    high = xlate3270((offset >> 6) & 0x3F)
    low = xlate3270(offset & 0x3F)
    return (high << 8) | low


def _check_position(row: int, col: int) -> None:
    if not (1 <= row <= MAX_ROW and 1 <= col <= MAX_COL):
        raise ValueError(f"screen position out of range: row {row}, column {col}")


def rc_to_off(row: int, col: int) -> int:
    """Convert a 1-based row and column into a buffer offset."""
    _check_position(row, col)
    return (row - 1) * MAX_COL + (col - 1)


def get_buf_addr(row: int, col: int) -> int:
    """Convert a 1-based row and column into a 3270 buffer address."""
    return off_to_buf(rc_to_off(row, col))


class Terminal:
    """A full-screen terminal reading and writing raw 3270 data streams."""

    def __init__(
        self,
        output: BinaryIO | None = None,
        input: BinaryIO | None = None,
    ) -> None:
        self._output = output
        self._input = input
        self.fullscreen = False
        self.temporary_mode = False
        self.line_number: int | None = None

    @property
    def output(self) -> BinaryIO:
        return self._output if self._output is not None else sys.stdout.buffer

    @property
    def input(self) -> BinaryIO:
        return self._input if self._input is not None else sys.stdin.buffer

    def put_fullscreen(self, data: bytes) -> int:
        """Write a full-screen data stream as is; return the byte count."""
        payload = bytes(data)
        self.output.write(payload)
        self.output.flush()
        return len(payload)

    def get_asis(self, size: int) -> bytes:
        """Read at most ``size`` bytes of terminal input without translation."""
        if size < 0:
            raise ValueError(f"size must not be negative: {size}")
        stream = self.input
        reader = getattr(stream, "read1", None)
        data = reader(size) if reader is not None else stream.read(size)
        return bytes(data or b"")

    def set_fullscreen_mode(self, on: bool) -> None:
        """Switch full-screen mode on or off."""
        self.fullscreen = bool(on)

    def set_temporary_mode(self, on: bool) -> None:
        """Switch temporary full-screen mode on or off."""
        self.temporary_mode = bool(on)

    def set_line_number(self, line: int) -> None:
        """Set the line on which line-mode output resumes."""
        if line < 1:
            raise ValueError(f"line number must be positive: {line}")
        self.line_number = line