"""Configuration tests."""

import pytest
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from name_tokenizer.config import (
    PROGRAM_ID_ENV_VAR,
    SOLANA_RPC_URLS,
    program_id_from_env,
)

PROGRAM_ID = "45gRSRZmK6NDEJrCZ72MMddjA1ozufq9YQpm41poPXCE"


def test_program_id_from_env(monkeypatch):
    monkeypatch.setenv(PROGRAM_ID_ENV_VAR, f"  {PROGRAM_ID}\n")
    assert program_id_from_env() == Pubkey.from_string(PROGRAM_ID)


def test_program_id_unset(monkeypatch):
    monkeypatch.delenv(PROGRAM_ID_ENV_VAR, raising=False)
    with pytest.raises(ValueError, match="is not set"):
        program_id_from_env()


def test_program_id_invalid(monkeypatch):
    monkeypatch.setenv(PROGRAM_ID_ENV_VAR, "not-a-key")
    with pytest.raises(ValueError, match="not a valid pubkey"):
        program_id_from_env()


def test_rpc_urls():
    assert set(SOLANA_RPC_URLS) == {"mainnet-beta", "testnet", "devnet", "localnet"}
