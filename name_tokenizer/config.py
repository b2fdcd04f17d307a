"""Network configuration and well-known program ids for the name tokenizer."""

from __future__ import annotations

import os

from solders.pubkey import Pubkey  # type: ignore[import-untyped]
from solders.system_program import ID as SYSTEM_PROGRAM_ID  # type: ignore[import-untyped]
from solders.sysvar import RENT as RENT_SYSVAR_ID  # type: ignore[import-untyped]
from spl.token.constants import (  # type: ignore[import-untyped]
    ASSOCIATED_TOKEN_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
)

# The tokenizer program id is deployment configuration and is never defaulted.
PROGRAM_ID_ENV_VAR = "NAME_TOKENIZER_PROGRAM_ID"

SOLANA_RPC_URLS = {
    "mainnet-beta": "https://api.mainnet-beta.solana.com",
    "testnet": "https://api.testnet.solana.com",
    "devnet": "https://api.devnet.solana.com",
    "localnet": "http://localhost:8899",
}

NAME_PROGRAM_ID = Pubkey.from_string("namesLPneVptA9Z5rqUDD9tMTWEJwofgaYwp8cawRkX")
METADATA_PROGRAM_ID = Pubkey.from_string("metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s")

ROOT_DOMAIN_ACCOUNT = Pubkey.from_string("58PwtjSDuFHuUkYjH9BYnnQKHfwo9reZhC2zMJv9JPkx")
METADATA_SIGNER = Pubkey.from_string("ARy9ZzW9qFCb8c8Lxi4NCph1TRNabUaMH5tj4e5pqwHb")

__all__ = [
    "ASSOCIATED_TOKEN_PROGRAM_ID",
    "METADATA_PROGRAM_ID",
    "METADATA_SIGNER",
    "NAME_PROGRAM_ID",
    "PROGRAM_ID_ENV_VAR",
    "RENT_SYSVAR_ID",
    "ROOT_DOMAIN_ACCOUNT",
    "SOLANA_RPC_URLS",
    "SYSTEM_PROGRAM_ID",
    "TOKEN_PROGRAM_ID",
    "program_id_from_env",
]


def program_id_from_env() -> Pubkey:
    """Read the tokenizer program id from ``NAME_TOKENIZER_PROGRAM_ID``."""
    raw = os.environ.get(PROGRAM_ID_ENV_VAR, "").strip()
    if not raw:
        raise ValueError(f"{PROGRAM_ID_ENV_VAR} is not set")
    try:
        return Pubkey.from_string(raw)
    except ValueError as e:
        raise ValueError(f"{PROGRAM_ID_ENV_VAR} is not a valid pubkey: {raw!r}") from e
