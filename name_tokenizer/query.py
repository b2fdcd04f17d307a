"""Program-account filters and batch decoding for NFT records.

Filters are plain data. ``Client`` turns them into RPC ``memcmp`` options; the
offsets come from the fixed ``NftRecord`` layout.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

import base58  # type: ignore[import-untyped]
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from name_tokenizer.errors import DecodeError, DecodeFailure
from name_tokenizer.state import NftRecord, Tag


@dataclass(frozen=True)
class MemcmpFilter:
    offset: int
    bytes: bytes

    def encoded(self) -> str:
        return base58.b58encode(self.bytes).decode()


def tag_filter(tag: Tag) -> MemcmpFilter:
    return MemcmpFilter(offset=NftRecord.OFFSET_TAG, bytes=bytes([tag]))


def active_records_filters() -> list[MemcmpFilter]:
    return [tag_filter(Tag.ACTIVE_RECORD)]


def records_by_owner_filters(owner: Pubkey) -> list[MemcmpFilter]:
    return [
        tag_filter(Tag.ACTIVE_RECORD),
        MemcmpFilter(offset=NftRecord.OFFSET_OWNER, bytes=bytes(owner)),
    ]


def records_by_name_account_filters(name_account: Pubkey) -> list[MemcmpFilter]:
    return [
        tag_filter(Tag.ACTIVE_RECORD),
        MemcmpFilter(offset=NftRecord.OFFSET_NAME_ACCOUNT, bytes=bytes(name_account)),
    ]


def records_by_mint_filters(mint: Pubkey) -> list[MemcmpFilter]:
    return [
        tag_filter(Tag.ACTIVE_RECORD),
        MemcmpFilter(offset=NftRecord.OFFSET_NFT_MINT, bytes=bytes(mint)),
    ]


def matches(data: bytes, filters: Iterable[MemcmpFilter]) -> bool:
    """Evaluate filters locally, with the same semantics as RPC memcmp."""
    return all(data[f.offset : f.offset + len(f.bytes)] == f.bytes for f in filters)


@dataclass
class RecordBatch:
    """Decoded records plus the accounts that failed to decode."""

    records: list[tuple[Pubkey, NftRecord]] = field(default_factory=list)
    failures: list[DecodeFailure] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)


def decode_records(accounts: Iterable[tuple[Pubkey, bytes]]) -> RecordBatch:
    batch = RecordBatch()
    for address, data in accounts:
        try:
            record = NftRecord.from_bytes(data)
        except DecodeError as e:
            batch.failures.append(DecodeFailure(address=address, data_len=len(data), error=e))
            continue
        batch.records.append((address, record))
    return batch
