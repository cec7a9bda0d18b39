# mvskit

mvskit is a small toolkit for the conventions of classic mainframe terminal
programs. It has no third-party dependencies.

It has four modules:

- `mvskit.timeconv`: scalar day-number calendar arithmetic and C-style
  time functions. These are `gmtime`, `localtime`, `mktime`, `asctime`,
  `ctime`, `difftime`, `clock`, `current_time` and a compact `strftime`.
  Broken-down times are held in a `Tm` dataclass.
- `mvskit.chainr`: `Chain`, a collection of records kept in ascending key
  order. Keys can be integer, blank-padded character or binary.
- `mvskit.tso`: 3270 buffer addressing helpers, the `Order`, `Aid`, `Color`
  and `Highlight` codes, and a `Terminal` that writes and reads raw 3270
  data streams on byte streams.
- `mvskit.fss`: full-screen services. A `Screen` holds text and named
  fields. It builds the 3270 output data stream and applies the inbound
  data stream back to the fields.

## Time conversion

```python
from mvskit.timeconv import gmtime, asctime, strftime, ymd_to_scalar

tm = gmtime(0)
print(asctime(tm), end="")                      # Thu Jan  1 00:00:00 1970
print(strftime("%Y-%m-%d %H:%M:%S", tm, 64))    # 1970-01-01 00:00:00
print(ymd_to_scalar(1970, 1, 1))
```

Timestamps are whole seconds since 1970-01-01 UTC; `gmtime` raises
`ValueError` for a negative one. `localtime` applies no time zone and gives
the same result as `gmtime`. `mktime` accepts only years 1970 to 2020,
raising `ValueError` otherwise, and normalises the `Tm` it is given in
place. `clock()` always returns -1.

`strftime` supports a fixed, locale-free set of conversions: `%a %A %b %B
%c %d %H %I %j %m %M %p %S %U %W %w %x %X %y %Y %Z %%`. Unknown conversions
are copied through unchanged, and `%Z` gives an empty string. If `maxsize`
is given and the result plus a terminator does not fit in that many
characters, `ValueError` is raised.

## Ordered chains

```python
from mvskit.chainr import Chain, DuplicateKeyError

chain = Chain.new_char(8, 32)
for name in ("Tommy", "Donna", "Vince", "Eli"):
    chain.add(name)

print(len(chain))                 # 4
print(chain.first().key)          # b'Donna   '
record = chain.find("Vince")      # a ChainRecord, or None if absent
record.value = {"visits": 1}

try:
    chain.add("Eli")
except DuplicateKeyError:
    pass
```

Keys are stored as bytes of the chain's key length and compared byte by
byte: integer keys as 4-byte big-endian values, character keys cut or
blank-padded to the key length, binary keys as their first key-length
bytes. `add` returns the new `ChainRecord`, whose `value` the caller may
set. Iterating a `Chain` walks the records from lowest to highest key, and
`reset()` empties it. Invalid key types, key lengths outside 1 to 255 (or
above 4 for integer keys) and record sizes over a fifth of the allocation
size raise `ChainError`.

## 3270 addressing

```python
from mvskit.tso import get_buf_addr, get_buf_offset, rc_to_off, off_to_buf

offset = rc_to_off(2, 10)          # row/column -> buffer offset (89)
address = off_to_buf(offset)       # offset -> 3270 buffer address
assert get_buf_offset(address) == offset
assert get_buf_addr(2, 10) == address
```

Rows run from 1 to 24 and columns from 1 to 80, as on a Model 2 screen;
positions outside that raise `ValueError`, as does `xlate3270` for a value
outside 0 to 63.

## Full-screen panels

A `Screen` is built on a `Terminal` (by default one on standard output and
standard input). `Screen.init()` and `Screen.term()` switch the terminal's
modes; the screen can also be used as a context manager.

```python
import io

from mvskit import fss
from mvskit.fss import Screen, FssError
from mvskit.tso import Terminal

terminal = Terminal(output=io.BytesIO(), input=io.BytesIO(b"\x7d\x40\x40"))
with Screen(terminal) as screen:
    screen.text(1, 2, fss.PROT, "Enter your name:")
    screen.field(1, 20, 0x00, "name", 20, "")
    screen.set_color("name", fss.YELLOW)
    screen.set_cursor("name")

    stream = screen.build_output()     # bytes of the 3270 write
    aid = screen.refresh()             # write the screen, read the reply
    print(hex(aid), screen.get_field("name"))
```

Colours and highlighting are given as the `fss` constants (`BLUE` ...
`WHITE`, `BLINK`, `REVERSE`, `USCORE`), which place the code in the second
or third byte of an attribute. Field text is sent and read in EBCDIC code
page 037. `refresh` writes the screen again while the reply's AID is
reshow, then takes the AID, cursor offset and changed fields from the
reply.

Positions out of range (column 1 is reserved for the attribute byte), bad
lengths, more than 1024 fields, duplicate field names, unknown field names
and malformed replies raise `FssError`. The helpers `trim`, `is_numeric`,
`is_hex`, `is_blank` and `make_printable` tidy and check field contents.

## What mvskit does not do

- `Terminal` only writes and reads bytes on the streams it is given. It
  does not connect to a host or speak TN3270, and its full-screen,
  temporary-mode and line-number settings are recorded as attributes only.
- There is no command-line program; everything is used as a library.