"""Ordered, keyed record chains.

A chain keeps records sorted by key. Keys are compared byte by byte over
a fixed key length, exactly as stored:

* ``KeyType.INT`` keys are integers stored as 32-bit big-endian values,
  so they compare as unsigned numbers.
* ``KeyType.CHAR`` keys are text padded with blanks to the key length.
  Longer text is cut to the key length.
* ``KeyType.BINARY`` keys are raw bytes, of which the first key-length
  bytes are used.
"""

from __future__ import annotations

import bisect
import enum
from dataclasses import dataclass
from typing import Any, Iterator

DEFAULT_ALLOC_SIZE = 4090
MIN_ALLOC_SIZE = 512
MAX_KEY_LENGTH = 255
INT_KEY_LENGTH = 4


class KeyType(enum.IntEnum):
    """How keys given to a chain are turned into stored key bytes."""

    INT = 0
    CHAR = 1
    BINARY = 2


class ChainError(Exception):
    """Raised when a chain is created with invalid parameters."""


class DuplicateKeyError(ChainError):
    """Raised when a record with an existing key is added."""


@dataclass(eq=False)
class ChainRecord:
    """A record on a chain: its stored key and a value the caller may set."""

    key: bytes
    value: Any = None


class Chain:
    """A chain of records kept in ascending key order."""

    def __init__(
        self,
        key_length: int,
        key_type: KeyType | int,
        record_size: int,
        alloc_size: int = DEFAULT_ALLOC_SIZE,
    ) -> None:
        try:
            key_type = KeyType(key_type)
        except ValueError:
            raise ChainError(f"invalid key type: {key_type!r}") from None
        if not 1 <= key_length <= MAX_KEY_LENGTH:
            raise ChainError(f"invalid key length: {key_length}")
        if key_type is KeyType.INT and key_length > INT_KEY_LENGTH:
            raise ChainError(
                f"integer keys are at most {INT_KEY_LENGTH} bytes: {key_length}"
            )
        alloc_size = max(alloc_size, MIN_ALLOC_SIZE)
        if record_size > alloc_size // 5:
            raise ChainError(
                f"allocation size {alloc_size} too small for records of {record_size}"
            )
        self.key_type = key_type
        self.key_length = key_length
        self.record_size = record_size
        self.alloc_size = alloc_size
        self._keys: list[bytes] = []
        self._records: list[ChainRecord] = []

    @classmethod
    def new_int(cls, record_size: int) -> Chain:
        """Create a chain keyed by 4-byte integers."""
        return cls(INT_KEY_LENGTH, KeyType.INT, record_size, DEFAULT_ALLOC_SIZE)

    @classmethod
    def new_char(cls, key_length: int, record_size: int) -> Chain:
        """Create a chain keyed by blank-padded text."""
        return cls(key_length, KeyType.CHAR, record_size, DEFAULT_ALLOC_SIZE)

    @classmethod
    def new_bin(cls, key_length: int, record_size: int) -> Chain:
        """Create a chain keyed by raw bytes."""
        return cls(key_length, KeyType.BINARY, record_size, DEFAULT_ALLOC_SIZE)

    def _normalize(self, key: Any) -> bytes:
        if self.key_type is KeyType.INT:
            if not isinstance(key, int):
                raise TypeError(f"integer key expected, got {type(key).__name__}")
            return (key & 0xFFFFFFFF).to_bytes(INT_KEY_LENGTH, "big")[: self.key_length]
        if self.key_type is KeyType.CHAR:
            if isinstance(key, str):
                raw = key.encode("utf-8")
            elif isinstance(key, (bytes, bytearray, memoryview)):
                raw = bytes(key)
            else:
                raise TypeError(f"text key expected, got {type(key).__name__}")
            return raw[: self.key_length].ljust(self.key_length, b" ")
        if not isinstance(key, (bytes, bytearray, memoryview)):
            raise TypeError(f"bytes key expected, got {type(key).__name__}")
        raw = bytes(key)
        if len(raw) < self.key_length:
            raise ValueError(
                f"binary key needs {self.key_length} bytes, got {len(raw)}"
            )
        return raw[: self.key_length]

    def add(self, key: Any) -> ChainRecord:
        """Insert a new record with ``key`` in order and return it.

        Raises DuplicateKeyError if a record with the same key exists.
        """
        stored = self._normalize(key)
        position = bisect.bisect_left(self._keys, stored)
        if position < len(self._keys) and self._keys[position] == stored:
            raise DuplicateKeyError(f"duplicate key: {stored!r}")
        record = ChainRecord(stored)
        self._keys.insert(position, stored)
        self._records.insert(position, record)
        return record

    def find(self, key: Any) -> ChainRecord | None:
        """Return the record with ``key``, or None if there is none."""
        stored = self._normalize(key)
        position = bisect.bisect_left(self._keys, stored)
        if position < len(self._keys) and self._keys[position] == stored:
            return self._records[position]
        return None

    def __contains__(self, key: Any) -> bool:
        return self.find(key) is not None

    def first(self) -> ChainRecord | None:
        """Return the record with the lowest key, or None if empty."""
        return self._records[0] if self._records else None

    def last(self) -> ChainRecord | None:
        """Return the record with the highest key, or None if empty."""
        return self._records[-1] if self._records else None

    def reset(self) -> None:
        """Remove every record, keeping the chain's parameters."""
        self._keys.clear()
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ChainRecord]:
        return iter(list(self._records))