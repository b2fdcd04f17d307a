"""PDA derivation tests.

Derivations are checked against ``Pubkey.find_program_address`` from solders,
which wraps the runtime's own implementation.
"""

import hashlib

import pytest
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from name_tokenizer import pda
from name_tokenizer.config import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    METADATA_PROGRAM_ID,
    NAME_PROGRAM_ID,
    ROOT_DOMAIN_ACCOUNT,
    TOKEN_PROGRAM_ID,
)
from name_tokenizer.errors import NoValidNonce
from name_tokenizer.pda import (
    create_program_address,
    derive_associated_token_address,
    derive_central_state_pda,
    derive_collection_mint_pda,
    derive_master_edition_pda,
    derive_metadata_pda,
    derive_mint_pda,
    derive_name_account_key,
    derive_nft_record_pda,
    find_program_address,
    get_domain_key,
    get_hashed_name,
)

PROGRAM_ID = Pubkey.from_string("45gRSRZmK6NDEJrCZ72MMddjA1ozufq9YQpm41poPXCE")
NAME_ACCOUNT = Pubkey.from_string("58PwtjSDuFHuUkYjH9BYnnQKHfwo9reZhC2zMJv9JPkx")
OWNER = Pubkey.from_string("ARy9ZzW9qFCb8c8Lxi4NCph1TRNabUaMH5tj4e5pqwHb")


class TestFindProgramAddress:
    def test_deterministic(self):
        seeds = [b"nft_record", bytes(NAME_ACCOUNT)]
        assert find_program_address(seeds, PROGRAM_ID) == find_program_address(
            seeds, PROGRAM_ID
        )

    @pytest.mark.parametrize(
        "seeds",
        [
            [],
            [b""],
            [b"tokenized_name", bytes(NAME_ACCOUNT)],
            [bytes(32)] * 15,
        ],
    )
    def test_matches_runtime(self, seeds):
        assert find_program_address(seeds, PROGRAM_ID) == Pubkey.find_program_address(
            seeds, PROGRAM_ID
        )

    def test_result_is_off_curve(self):
        addr, _ = find_program_address([b"collection", bytes(PROGRAM_ID)], PROGRAM_ID)
        assert not addr.is_on_curve()

    def test_higher_bumps_are_on_curve(self):
        seeds = [b"tokenized_name", bytes(NAME_ACCOUNT)]
        addr, bump = find_program_address(seeds, PROGRAM_ID)
        for higher in range(bump + 1, 256):
            assert create_program_address([*seeds, bytes([higher])], PROGRAM_ID) is None
        assert create_program_address([*seeds, bytes([bump])], PROGRAM_ID) == addr

    def test_no_valid_nonce(self, monkeypatch):
        monkeypatch.setattr(pda, "create_program_address", lambda seeds, program_id: None)
        with pytest.raises(NoValidNonce):
            find_program_address([b"x"], PROGRAM_ID)

    def test_too_many_seeds(self):
        with pytest.raises(ValueError, match="too many seeds"):
            find_program_address([b"a"] * 16, PROGRAM_ID)

    def test_seed_too_long(self):
        with pytest.raises(ValueError, match="seed 1 is 33 bytes"):
            find_program_address([b"a", bytes(33)], PROGRAM_ID)


class TestCreateProgramAddress:
    def test_matches_runtime_for_winning_bump(self):
        seeds = [b"nft_record", bytes(NAME_ACCOUNT)]
        addr, bump = Pubkey.find_program_address(seeds, PROGRAM_ID)
        assert create_program_address([*seeds, bytes([bump])], PROGRAM_ID) == addr

    @pytest.mark.parametrize("length", [33, 40])
    def test_seed_too_long(self, length):
        with pytest.raises(ValueError, match=f"seed 0 is {length} bytes"):
            create_program_address([bytes(length), b"\xff"], PROGRAM_ID)

    def test_too_many_seeds(self):
        create_program_address([b"a"] * 15 + [b"\xff"], PROGRAM_ID)
        with pytest.raises(ValueError, match="too many seeds: 17"):
            create_program_address([b"a"] * 17, PROGRAM_ID)


class TestTokenizerPdas:
    def test_central_state(self):
        assert derive_central_state_pda(PROGRAM_ID) == Pubkey.find_program_address(
            [bytes(PROGRAM_ID)], PROGRAM_ID
        )

    def test_mint(self):
        assert derive_mint_pda(PROGRAM_ID, NAME_ACCOUNT) == Pubkey.find_program_address(
            [b"tokenized_name", bytes(NAME_ACCOUNT)], PROGRAM_ID
        )

    def test_collection_mint(self):
        assert derive_collection_mint_pda(PROGRAM_ID) == Pubkey.find_program_address(
            [b"collection", bytes(PROGRAM_ID)], PROGRAM_ID
        )

    def test_nft_record(self):
        got = derive_nft_record_pda(PROGRAM_ID, NAME_ACCOUNT)
        assert got == Pubkey.find_program_address(
            [b"nft_record", bytes(NAME_ACCOUNT)], PROGRAM_ID
        )

    def test_mint_differs_per_name(self):
        a, _ = derive_mint_pda(PROGRAM_ID, NAME_ACCOUNT)
        b, _ = derive_mint_pda(PROGRAM_ID, OWNER)
        assert a != b

    def test_record_and_mint_differ(self):
        mint, _ = derive_mint_pda(PROGRAM_ID, NAME_ACCOUNT)
        record, _ = derive_nft_record_pda(PROGRAM_ID, NAME_ACCOUNT)
        assert mint != record

    def test_mint_for_domain(self):
        name_account = get_domain_key("example")
        got, _ = derive_mint_pda(PROGRAM_ID, name_account)
        want, _ = Pubkey.find_program_address(
            [b"tokenized_name", bytes(name_account)], PROGRAM_ID
        )
        assert got == want


class TestForeignPdas:
    def test_metadata(self):
        mint, _ = derive_mint_pda(PROGRAM_ID, NAME_ACCOUNT)
        assert derive_metadata_pda(mint) == Pubkey.find_program_address(
            [b"metadata", bytes(METADATA_PROGRAM_ID), bytes(mint)],
            METADATA_PROGRAM_ID,
        )

    def test_master_edition(self):
        mint, _ = derive_collection_mint_pda(PROGRAM_ID)
        assert derive_master_edition_pda(mint) == Pubkey.find_program_address(
            [b"metadata", bytes(METADATA_PROGRAM_ID), bytes(mint), b"edition"],
            METADATA_PROGRAM_ID,
        )

    def test_associated_token_address(self):
        mint, _ = derive_mint_pda(PROGRAM_ID, NAME_ACCOUNT)
        want, _ = Pubkey.find_program_address(
            [bytes(OWNER), bytes(TOKEN_PROGRAM_ID), bytes(mint)],
            ASSOCIATED_TOKEN_PROGRAM_ID,
        )
        assert derive_associated_token_address(OWNER, mint) == want

    def test_associated_token_address_for_pda_owner(self):
        record, _ = derive_nft_record_pda(PROGRAM_ID, NAME_ACCOUNT)
        want, _ = Pubkey.find_program_address(
            [bytes(record), bytes(TOKEN_PROGRAM_ID), bytes(OWNER)],
            ASSOCIATED_TOKEN_PROGRAM_ID,
        )
        assert derive_associated_token_address(record, OWNER) == want


class TestNameService:
    def test_hashed_name(self):
        assert get_hashed_name("bonfida") == hashlib.sha256(
            b"SPL Name Service" + b"bonfida"
        ).digest()

    def test_name_account_key_defaults_to_zero_class_and_parent(self):
        hashed = get_hashed_name("sol")
        want, _ = Pubkey.find_program_address(
            [hashed, bytes(32), bytes(32)], NAME_PROGRAM_ID
        )
        assert derive_name_account_key(hashed) == want

    def test_domain_key(self):
        want, _ = Pubkey.find_program_address(
            [get_hashed_name("bonfida"), bytes(32), bytes(ROOT_DOMAIN_ACCOUNT)],
            NAME_PROGRAM_ID,
        )
        assert get_domain_key("bonfida") == want
        assert get_domain_key("bonfida.sol") == want

    @pytest.mark.parametrize("domain", ["", ".sol", "sub.bonfida", "sub.bonfida.sol"])
    def test_domain_key_rejects(self, domain):
        with pytest.raises(ValueError):
            get_domain_key(domain)
