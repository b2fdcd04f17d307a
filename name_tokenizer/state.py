"""On-chain account data structures for the name tokenizer program.

Accounts are Borsh-serialized with a 1-byte ``Tag`` as the first byte. The
``NftRecord`` layout is fixed-size and its field offsets double as memcmp
filter offsets (see ``name_tokenizer.query``).
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar

from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from name_tokenizer.borsh import (
    FieldKind,
    IncrementalReader,
    IncrementalWriter,
    Schema,
    read_fields,
    write_fields,
)
from name_tokenizer.errors import MalformedPayload, TruncatedInput, UnknownVariant
from name_tokenizer.pda import derive_central_state_pda, derive_nft_record_pda


class Tag(IntEnum):
    UNINITIALIZED = 0
    CENTRAL_STATE = 1
    ACTIVE_RECORD = 2
    INACTIVE_RECORD = 3

    def __str__(self) -> str:
        _names = {
            0: "uninitialized",
            1: "central_state",
            2: "active_record",
            3: "inactive_record",
        }
        return _names.get(self.value, "unknown")


def _read_tag(r: IncrementalReader) -> Tag:
    raw = r.read_u8()
    try:
        return Tag(raw)
    except ValueError:
        raise UnknownVariant(f"unknown account tag {raw}") from None


@dataclass
class CentralState:
    tag: Tag

    STRUCT_SIZE = 1

    @classmethod
    def find_key(cls, program_id: Pubkey) -> tuple[Pubkey, int]:
        return derive_central_state_pda(program_id)

    @classmethod
    def from_bytes(cls, data: bytes) -> CentralState:
        r = IncrementalReader(data)
        tag = _read_tag(r)
        if tag != Tag.CENTRAL_STATE:
            raise UnknownVariant(f"expected central state tag, got {tag}")
        return cls(tag=tag)


@dataclass
class NftRecord:
    tag: Tag
    nonce: int  # u8, bump of the record PDA
    name_account: Pubkey
    owner: Pubkey
    nft_mint: Pubkey

    OFFSET_TAG = 0
    OFFSET_NONCE = 1
    OFFSET_NAME_ACCOUNT = 2
    OFFSET_OWNER = 34
    OFFSET_NFT_MINT = 66
    STRUCT_SIZE = 98

    FIELDS: ClassVar[Schema] = (
        ("nonce", FieldKind.U8),
        ("name_account", FieldKind.PUBKEY),
        ("owner", FieldKind.PUBKEY),
        ("nft_mint", FieldKind.PUBKEY),
    )

    @classmethod
    def find_key(cls, program_id: Pubkey, name_account: Pubkey) -> tuple[Pubkey, int]:
        return derive_nft_record_pda(program_id, name_account)

    @classmethod
    def from_bytes(cls, data: bytes) -> NftRecord:
        if len(data) < cls.STRUCT_SIZE:
            raise TruncatedInput(
                f"nft record too short: have {len(data)} bytes, need {cls.STRUCT_SIZE}"
            )
        if len(data) > cls.STRUCT_SIZE:
            raise MalformedPayload(
                f"nft record too long: have {len(data)} bytes, want {cls.STRUCT_SIZE}"
            )
        r = IncrementalReader(data)
        tag = _read_tag(r)
        fields = read_fields(r, cls.FIELDS)
        assert r.offset == cls.STRUCT_SIZE, f"NftRecord byte coverage: {r.offset} != {cls.STRUCT_SIZE}"
        return cls(tag=tag, **fields)

    def to_bytes(self) -> bytes:
        w = IncrementalWriter()
        w.write_u8(self.tag)
        write_fields(w, self.FIELDS, self)
        return w.getvalue()

    @property
    def is_active(self) -> bool:
        return self.tag == Tag.ACTIVE_RECORD


# ---------------------------------------------------------------------------
# SPL token mint (foreign layout, read-only)
# ---------------------------------------------------------------------------

MINT_SIZE = 82
MINT_SUPPLY_OFFSET = 36  # after COption<Pubkey> mint_authority (4 + 32)


def mint_supply(data: bytes) -> int:
    if len(data) < MINT_SIZE:
        raise TruncatedInput(
            f"mint account too short: have {len(data)} bytes, need {MINT_SIZE}"
        )
    return struct.unpack_from("<Q", data, MINT_SUPPLY_OFFSET)[0]


def is_tokenized(mint_data: bytes) -> bool:
    """Whether a tokenizer mint currently has its single NFT in circulation."""
    return mint_supply(mint_data) == 1
