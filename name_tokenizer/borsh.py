"""Borsh encoding for the subset of types the tokenizer program uses.

Provides a cursor-based reader and an append-only writer, plus a tiny schema
layer: a schema is a static tuple of ``(field_name, FieldKind)`` pairs that is
encoded in declaration order with no padding. All integers are little-endian.
"""

from __future__ import annotations

import struct
from enum import Enum
from typing import Any

from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from name_tokenizer.errors import MalformedPayload, TruncatedInput

PUBKEY_SIZE = 32


class IncrementalReader:
    """Cursor-based Borsh binary reader. Every read is strict."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._offset = 0

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    def read_u8(self) -> int:
        if self._offset + 1 > len(self._data):
            raise TruncatedInput(f"borsh: not enough data for u8 at offset {self._offset}")
        v = self._data[self._offset]
        self._offset += 1
        return v

    def read_u32(self) -> int:
        if self._offset + 4 > len(self._data):
            raise TruncatedInput(f"borsh: not enough data for u32 at offset {self._offset}")
        (v,) = struct.unpack_from("<I", self._data, self._offset)
        self._offset += 4
        return v

    def read_u64(self) -> int:
        if self._offset + 8 > len(self._data):
            raise TruncatedInput(f"borsh: not enough data for u64 at offset {self._offset}")
        (v,) = struct.unpack_from("<Q", self._data, self._offset)
        self._offset += 8
        return v

    def read_bytes(self, n: int) -> bytes:
        if self._offset + n > len(self._data):
            raise TruncatedInput(
                f"borsh: not enough data for {n} bytes at offset {self._offset}"
            )
        v = self._data[self._offset : self._offset + n]
        self._offset += n
        return v

    def read_pubkey_raw(self) -> bytes:
        """Read a 32-byte public key as raw bytes."""
        return self.read_bytes(PUBKEY_SIZE)

    def read_pubkey(self) -> Pubkey:
        return Pubkey.from_bytes(self.read_pubkey_raw())

    def _read_length_prefixed(self, what: str) -> bytes:
        length = self.read_u32()
        if length > self.remaining:
            raise MalformedPayload(
                f"borsh: {what} of length {length} at offset {self._offset} "
                f"exceeds remaining {self.remaining} bytes"
            )
        return self.read_bytes(length)

    def read_string(self) -> str:
        raw = self._read_length_prefixed("string")
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedPayload(f"borsh: string is not valid UTF-8: {e}") from e

    def read_byte_vec(self) -> bytes:
        return self._read_length_prefixed("byte vector")


class IncrementalWriter:
    """Append-only Borsh writer."""

    def __init__(self) -> None:
        self._buf = bytearray()

    def __len__(self) -> int:
        return len(self._buf)

    def getvalue(self) -> bytes:
        return bytes(self._buf)

    def _write_uint(self, fmt: str, bits: int, v: int) -> None:
        if not 0 <= v < 1 << bits:
            raise ValueError(f"borsh: {v} out of range for u{bits}")
        self._buf += struct.pack(fmt, v)

    def write_u8(self, v: int) -> None:
        self._write_uint("<B", 8, v)

    def write_u32(self, v: int) -> None:
        self._write_uint("<I", 32, v)

    def write_u64(self, v: int) -> None:
        self._write_uint("<Q", 64, v)

    def write_bytes(self, v: bytes) -> None:
        self._buf += v

    def write_pubkey(self, v: Pubkey) -> None:
        raw = bytes(v)
        if len(raw) != PUBKEY_SIZE:
            raise ValueError(f"borsh: pubkey must be {PUBKEY_SIZE} bytes, got {len(raw)}")
        self._buf += raw

    def write_string(self, v: str) -> None:
        self.write_byte_vec(v.encode("utf-8"))

    def write_byte_vec(self, v: bytes) -> None:
        self.write_u32(len(v))
        self._buf += v


# ---------------------------------------------------------------------------
# Static schemas
# ---------------------------------------------------------------------------


class FieldKind(Enum):
    U8 = "u8"
    U32 = "u32"
    STRING = "string"
    PUBKEY = "pubkey"
    BYTES = "bytes"  # Vec<u8>


Schema = tuple[tuple[str, FieldKind], ...]

_READERS = {
    FieldKind.U8: IncrementalReader.read_u8,
    FieldKind.U32: IncrementalReader.read_u32,
    FieldKind.STRING: IncrementalReader.read_string,
    FieldKind.PUBKEY: IncrementalReader.read_pubkey,
    FieldKind.BYTES: IncrementalReader.read_byte_vec,
}

_WRITERS = {
    FieldKind.U8: IncrementalWriter.write_u8,
    FieldKind.U32: IncrementalWriter.write_u32,
    FieldKind.STRING: IncrementalWriter.write_string,
    FieldKind.PUBKEY: IncrementalWriter.write_pubkey,
    FieldKind.BYTES: IncrementalWriter.write_byte_vec,
}


def read_fields(r: IncrementalReader, schema: Schema) -> dict[str, Any]:
    return {name: _READERS[kind](r) for name, kind in schema}


def write_fields(w: IncrementalWriter, schema: Schema, obj: Any) -> None:
    for name, kind in schema:
        try:
            _WRITERS[kind](w, getattr(obj, name))
        except ValueError as e:
            raise ValueError(f"{name}: {e}") from e
