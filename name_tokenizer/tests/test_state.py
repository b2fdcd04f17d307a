"""Account layout tests."""

import struct

import pytest
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from name_tokenizer.errors import MalformedPayload, TruncatedInput, UnknownVariant
from name_tokenizer.pda import derive_central_state_pda, derive_nft_record_pda
from name_tokenizer.state import (
    MINT_SIZE,
    CentralState,
    NftRecord,
    Tag,
    is_tokenized,
    mint_supply,
)

PROGRAM_ID = Pubkey.from_string("45gRSRZmK6NDEJrCZ72MMddjA1ozufq9YQpm41poPXCE")

NAME_ACCOUNT = Pubkey.from_bytes(bytes([0x11] * 32))
OWNER = Pubkey.from_bytes(bytes([0x22] * 32))
MINT = Pubkey.from_bytes(bytes([0x33] * 32))


def _record_bytes(tag: int = 2, nonce: int = 254) -> bytes:
    return bytes([tag, nonce]) + bytes(NAME_ACCOUNT) + bytes(OWNER) + bytes(MINT)


def _mint_bytes(supply: int) -> bytes:
    buf = bytearray(MINT_SIZE)
    buf[0:4] = b"\x01\x00\x00\x00"
    buf[36:44] = struct.pack("<Q", supply)
    buf[45] = 1  # is_initialized
    return bytes(buf)


class TestNftRecord:
    def test_decode_fields_at_fixed_offsets(self):
        rec = NftRecord.from_bytes(_record_bytes())
        assert rec.tag == Tag.ACTIVE_RECORD
        assert rec.nonce == 254
        assert rec.name_account == NAME_ACCOUNT
        assert rec.owner == OWNER
        assert rec.nft_mint == MINT

    def test_changing_owner_byte_only_changes_owner(self):
        data = bytearray(_record_bytes())
        data[NftRecord.OFFSET_OWNER] = 0xAA
        rec = NftRecord.from_bytes(bytes(data))
        assert rec.owner != OWNER
        assert bytes(rec.owner)[0] == 0xAA
        assert rec.name_account == NAME_ACCOUNT
        assert rec.nft_mint == MINT
        assert rec.nonce == 254

    def test_last_mint_byte_is_last_record_byte(self):
        data = bytearray(_record_bytes())
        data[NftRecord.STRUCT_SIZE - 1] = 0x00
        rec = NftRecord.from_bytes(bytes(data))
        assert bytes(rec.nft_mint)[31] == 0x00
        assert rec.owner == OWNER

    def test_to_bytes(self):
        rec = NftRecord(
            tag=Tag.INACTIVE_RECORD,
            nonce=7,
            name_account=NAME_ACCOUNT,
            owner=OWNER,
            nft_mint=MINT,
        )
        data = rec.to_bytes()
        assert len(data) == NftRecord.STRUCT_SIZE
        assert data == _record_bytes(tag=3, nonce=7)
        assert not NftRecord.from_bytes(data).is_active

    def test_short_input(self):
        with pytest.raises(TruncatedInput, match="have 97 bytes"):
            NftRecord.from_bytes(_record_bytes()[:-1])

    def test_empty_input(self):
        with pytest.raises(TruncatedInput):
            NftRecord.from_bytes(b"")

    def test_long_input(self):
        with pytest.raises(MalformedPayload, match="too long"):
            NftRecord.from_bytes(_record_bytes() + b"\x00")

    def test_unknown_tag(self):
        with pytest.raises(UnknownVariant, match="unknown account tag 9"):
            NftRecord.from_bytes(_record_bytes(tag=9))

    def test_find_key_matches_pda(self):
        assert NftRecord.find_key(PROGRAM_ID, NAME_ACCOUNT) == derive_nft_record_pda(
            PROGRAM_ID, NAME_ACCOUNT
        )


class TestCentralState:
    def test_from_bytes(self):
        cs = CentralState.from_bytes(bytes([Tag.CENTRAL_STATE]))
        assert cs.tag == Tag.CENTRAL_STATE

    def test_wrong_tag(self):
        with pytest.raises(UnknownVariant):
            CentralState.from_bytes(bytes([Tag.ACTIVE_RECORD]))

    def test_empty(self):
        with pytest.raises(TruncatedInput):
            CentralState.from_bytes(b"")

    def test_find_key(self):
        assert CentralState.find_key(PROGRAM_ID) == derive_central_state_pda(PROGRAM_ID)


class TestTagStrings:
    def test_names(self):
        assert str(Tag.UNINITIALIZED) == "uninitialized"
        assert str(Tag.CENTRAL_STATE) == "central_state"
        assert str(Tag.ACTIVE_RECORD) == "active_record"
        assert str(Tag.INACTIVE_RECORD) == "inactive_record"


class TestMint:
    def test_supply(self):
        assert mint_supply(_mint_bytes(0)) == 0
        assert mint_supply(_mint_bytes(2**63)) == 2**63

    def test_tokenized_when_supply_is_one(self):
        assert is_tokenized(_mint_bytes(1))

    def test_not_tokenized_after_redeem(self):
        assert not is_tokenized(_mint_bytes(0))

    def test_short_mint(self):
        with pytest.raises(TruncatedInput):
            mint_supply(_mint_bytes(1)[:40])
