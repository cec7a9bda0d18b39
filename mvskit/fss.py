"""Full-screen services: define fields on a 3270 screen and exchange them.

A screen is a list of fields. Text fields are fixed labels. Named fields
hold data the program can set and read, and the terminal user can
change. ``Screen.refresh`` writes the whole screen and reads the user's
reply. It updates the named fields, the attention identifier and the
cursor position from that reply.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Protocol

from .tso import (
    MAX_COL,
    MAX_ROW,
    Aid,
    Order,
    Terminal,
    get_buf_offset,
    off_to_buf,
    xlate3270,
)

ENCODING = "cp037"
BUFFER_SIZE = MAX_ROW * MAX_COL * 2
MAX_FIELDS = 1024
MAX_FIELD_LENGTH = 79

# Basic field attributes.
PROT = 0x30
NUM = 0x10
HI = 0x08
NON = 0x0C

# Extended colours, placed in the second byte of an attribute.
BLUE = 0xF100
RED = 0xF200
PINK = 0xF300
GREEN = 0xF400
TURQ = 0xF500
YELLOW = 0xF600
WHITE = 0xF700

# Extended highlighting, placed in the third byte of an attribute.
BLINK = 0xF10000
REVERSE = 0xF20000
USCORE = 0xF40000

_WRITE_ERASE = bytes((0x27, 0xF5, 0xC3))
_RESET_ATTRIBUTES = bytes((Order.SA, 0x00, 0x00))
_HEX_DIGITS = frozenset(string.hexdigits)
_DIGITS = frozenset(string.digits)


class FssError(Exception):
    """Raised when a screen request is invalid."""


class _TerminalLike(Protocol):
    def put_fullscreen(self, data: bytes) -> int: ...
    def get_asis(self, size: int) -> bytes: ...
    def set_fullscreen_mode(self, on: bool) -> None: ...
    def set_temporary_mode(self, on: bool) -> None: ...
    def set_line_number(self, line: int) -> None: ...


@dataclass
class Field:
    """A field on the screen; ``name`` is None for a text field."""

    name: str | None
    bufaddr: int
    attr: int
    length: int
    data: str

    @property
    def basic_attr(self) -> int:
        return self.attr & 0xFF

    @property
    def color(self) -> int:
        return (self.attr >> 8) & 0xFF

    @property
    def highlight(self) -> int:
        return (self.attr >> 16) & 0xFF


def trim(data: str) -> str:
    """Return ``data`` without trailing blanks."""
    return data.rstrip(" ")


def is_numeric(data: str) -> bool:
    """Return True if ``data`` is non-empty and all decimal digits."""
    return bool(data) and all(c in _DIGITS for c in data)


def is_hex(data: str) -> bool:
    """Return True if ``data`` is non-empty and all hexadecimal digits."""
    return bool(data) and all(c in _HEX_DIGITS for c in data)


def is_blank(data: str) -> bool:
    """Return True if ``data`` holds only blanks (or nothing)."""
    return all(c == " " for c in data)


def make_printable(text: str) -> str:
    """Replace every non-printable character with a period."""
    return "".join(c if " " <= c <= "~" else "." for c in text)


def fss_attr(attr: int) -> int:
    """Translate the basic attribute byte to its 3270 code, keeping the rest."""
    return (attr & 0xFFFF00) | xlate3270(attr & 0xFF)


def _check_position(row: int, col: int) -> None:
    if row < 1 or col < 2 or row > MAX_ROW or col > MAX_COL:
        raise FssError(f"field position out of range: row {row}, column {col}")


def _check_length(length: int) -> None:
    if not 1 <= length <= MAX_FIELD_LENGTH:
        raise FssError(f"field length out of range: {length}")


def _address_bytes(offset: int) -> bytes:
    return off_to_buf(offset).to_bytes(2, "big")


class Screen:
    """A full-screen layout bound to a terminal."""

    def __init__(self, terminal: _TerminalLike | None = None) -> None:
        self.terminal = terminal if terminal is not None else Terminal()
        self._fields: list[Field] = []
        self.aid = 0
        self.cursor = 0
        self._cursor_pos = 0

    def __enter__(self) -> Screen:
        self.init()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.term()

    @property
    def fields(self) -> tuple[Field, ...]:
        return tuple(self._fields)

    def init(self) -> None:
        """Start with an empty screen and put the terminal in full-screen mode."""
        self._fields.clear()
        self._cursor_pos = 0
        self.terminal.set_fullscreen_mode(True)
        self.terminal.set_temporary_mode(True)

    def reset(self) -> None:
        """Discard every field and the last input state."""
        self._fields.clear()
        self.aid = 0
        self.cursor = 0
        self._cursor_pos = 0

    def term(self) -> None:
        """Discard the screen and return the terminal to line mode."""
        self.reset()
        self.terminal.set_line_number(1)
        self.terminal.set_fullscreen_mode(False)
        self.terminal.set_temporary_mode(False)

    def _find(self, name: str) -> Field:
        for field in self._fields:
            if field.name is not None and field.name == name:
                return field
        raise FssError(f"no such field: {name!r}")

    def _has(self, name: str) -> bool:
        return any(f.name is not None and f.name == name for f in self._fields)

    def _append(self, field: Field) -> None:
        if len(self._fields) >= MAX_FIELDS:
            raise FssError(f"too many fields: at most {MAX_FIELDS}")
        self._fields.append(field)

    def text(self, row: int, col: int, attr: int, text: str) -> None:
        """Add a text field holding ``text`` at ``row``, ``col``."""
        text = make_printable(text)
        _check_position(row, col)
        _check_length(len(text))
        self._append(
            Field(
                name=None,
                bufaddr=(row - 1) * MAX_COL + (col - 1),
                attr=fss_attr(attr),
                length=len(text),
                data=text,
            )
        )

    def field(
        self, row: int, col: int, attr: int, name: str, length: int, text: str
    ) -> None:
        """Add a named field of ``length`` characters, starting with ``text``."""
        _check_position(row, col)
        _check_length(length)
        if self._has(name):
            raise FssError(f"duplicate field name: {name!r}")
        self._append(
            Field(
                name=name,
                bufaddr=(row - 1) * MAX_COL + (col - 1),
                attr=fss_attr(attr),
                length=length,
                data=make_printable(text)[:length],
            )
        )

    def set_field(self, name: str, text: str) -> None:
        """Replace a named field's contents, cut to the field's length."""
        field = self._find(name)
        field.data = make_printable(text)[: field.length]

    def get_field(self, name: str) -> str:
        """Return a named field's contents."""
        return self._find(name).data

    def set_cursor(self, name: str) -> None:
        """Place the cursor at the start of a named field on the next write."""
        self._cursor_pos = off_to_buf(self._find(name).bufaddr)

    def set_attr(self, name: str, attr: int) -> None:
        """Replace a named field's attribute."""
        self._find(name).attr = fss_attr(attr)

    def set_color(self, name: str, color: int) -> None:
        """Replace a named field's extended colour."""
        field = self._find(name)
        field.attr = (field.attr & 0xFF00FF) | (color & 0xFF00)

    def set_xh(self, name: str, attr: int) -> None:
        """Replace a named field's extended highlighting."""
        field = self._find(name)
        field.attr = (field.attr & 0xFFFF) | (attr & 0xFF0000)

    def build_output(self) -> bytes:
        """Return the 3270 data stream that draws the whole screen."""
        out = bytearray(_WRITE_ERASE)
        for field in self._fields:
            out.append(Order.SBA)
            out += _address_bytes(field.bufaddr - 1)
            out += bytes((Order.SF, field.basic_attr))
            highlight = field.highlight
            color = field.color
            if highlight:
                out += bytes((Order.SA, Order.SA_EXTH, highlight))
            if color:
                out += bytes((Order.SA, Order.SA_COLOR, color))
            out += field.data[: field.length].encode(ENCODING)
            out.append(Order.SBA)
            out += _address_bytes(field.bufaddr + field.length)
            out += bytes((Order.SF, xlate3270(PROT)))
            if highlight or color:
                out += _RESET_ATTRIBUTES
        if self._cursor_pos:
            out.append(Order.SBA)
            out += self._cursor_pos.to_bytes(2, "big")
            out.append(Order.IC)
        return bytes(out)

    def process_input(self, data: bytes) -> None:
        """Take the AID, cursor and changed fields from a terminal reply.

        A reply shorter than three bytes clears the AID and cursor.
        Raises FssError if a field does not begin with a set-buffer-address
        order.
        """
        if len(data) < 3:
            self.aid = 0
            self.cursor = 0
            return
        self.aid = data[0]
        self.cursor = get_buf_offset((data[1] << 8) + data[2])
        pos = 3
        end = len(data)
        while end - pos > 3:
            if data[pos] != Order.SBA:
                raise FssError(
                    f"expected set-buffer-address order at byte {pos}, "
                    f"got {data[pos]:#04x}"
                )
            bufpos = get_buf_offset((data[pos + 1] << 8) + data[pos + 2])
            start = pos + 3
            stop = data.find(bytes((Order.SBA,)), start)
            pos = end if stop < 0 else stop
            self._update(bufpos, data[start:pos])

    def _update(self, bufpos: int, raw: bytes) -> None:
        for field in self._fields:
            if field.bufaddr == bufpos:
                field.data = raw[: field.length].decode(ENCODING)
                return

    def refresh(self) -> int:
        """Show the screen, wait for the user's reply and return its AID."""
        out = self.build_output()
        self._cursor_pos = 0
        while True:
            self.terminal.put_fullscreen(out)
            reply = self.terminal.get_asis(BUFFER_SIZE)
            if not reply or reply[0] != Aid.RESHOW:
                break
        self.process_input(reply)
        return self.aid