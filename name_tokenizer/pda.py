"""PDA derivation for name tokenizer accounts and the foreign accounts it touches.

All derivations go through :func:`find_program_address`, which runs the
runtime's bump search: candidates run from 255 down to 1 and the first one
``Pubkey.create_program_address`` accepts as off-curve wins.
"""

from __future__ import annotations

import hashlib
from collections.abc import Sequence

from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from name_tokenizer.config import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    METADATA_PROGRAM_ID,
    NAME_PROGRAM_ID,
    ROOT_DOMAIN_ACCOUNT,
    TOKEN_PROGRAM_ID,
)
from name_tokenizer.errors import NoValidNonce

SEED_MINT = b"tokenized_name"
SEED_COLLECTION = b"collection"
SEED_NFT_RECORD = b"nft_record"
SEED_METADATA = b"metadata"
SEED_EDITION = b"edition"

NAME_HASH_PREFIX = "SPL Name Service"

MAX_SEEDS = 16
MAX_SEED_LEN = 32


def _validate_seeds(seeds: Sequence[bytes], max_seeds: int = MAX_SEEDS) -> None:
    if len(seeds) > max_seeds:
        raise ValueError(f"too many seeds: {len(seeds)}, max {max_seeds}")
    for i, s in enumerate(seeds):
        if len(s) > MAX_SEED_LEN:
            raise ValueError(f"seed {i} is {len(s)} bytes, max {MAX_SEED_LEN}")


def create_program_address(
    seeds: Sequence[bytes], program_id: Pubkey
) -> Pubkey | None:
    """Address for a complete seed list (bump included); ``None`` if it lies on the curve."""
    seeds = [bytes(s) for s in seeds]
    _validate_seeds(seeds)
    try:
        return Pubkey.create_program_address(seeds, program_id)
    except ValueError:
        # Seeds are already validated, so the only rejection left is on-curve.
        return None


def find_program_address(
    seeds: Sequence[bytes], program_id: Pubkey
) -> tuple[Pubkey, int]:
    seeds = [bytes(s) for s in seeds]
    # The bump byte occupies one of the MAX_SEEDS slots.
    _validate_seeds(seeds, MAX_SEEDS - 1)
    for bump in range(255, 0, -1):
        addr = create_program_address([*seeds, bytes([bump])], program_id)
        if addr is not None:
            return addr, bump
    raise NoValidNonce(f"no viable bump seed for program {program_id}")


# ---------------------------------------------------------------------------
# Tokenizer program accounts
# ---------------------------------------------------------------------------


def derive_central_state_pda(program_id: Pubkey) -> tuple[Pubkey, int]:
    return find_program_address([bytes(program_id)], program_id)


def derive_mint_pda(program_id: Pubkey, name_account: Pubkey) -> tuple[Pubkey, int]:
    return find_program_address([SEED_MINT, bytes(name_account)], program_id)


def derive_collection_mint_pda(program_id: Pubkey) -> tuple[Pubkey, int]:
    return find_program_address([SEED_COLLECTION, bytes(program_id)], program_id)


def derive_nft_record_pda(
    program_id: Pubkey, name_account: Pubkey
) -> tuple[Pubkey, int]:
    return find_program_address([SEED_NFT_RECORD, bytes(name_account)], program_id)


# ---------------------------------------------------------------------------
# Foreign program accounts
# ---------------------------------------------------------------------------


def derive_metadata_pda(mint: Pubkey) -> tuple[Pubkey, int]:
    return find_program_address(
        [SEED_METADATA, bytes(METADATA_PROGRAM_ID), bytes(mint)],
        METADATA_PROGRAM_ID,
    )


def derive_master_edition_pda(mint: Pubkey) -> tuple[Pubkey, int]:
    return find_program_address(
        [SEED_METADATA, bytes(METADATA_PROGRAM_ID), bytes(mint), SEED_EDITION],
        METADATA_PROGRAM_ID,
    )


def derive_associated_token_address(owner: Pubkey, mint: Pubkey) -> Pubkey:
    """Associated token account of ``owner`` for ``mint``.

    The owner may itself be a PDA (e.g. an NFT record holding tokens).
    """
    addr, _ = find_program_address(
        [bytes(owner), bytes(TOKEN_PROGRAM_ID), bytes(mint)],
        ASSOCIATED_TOKEN_PROGRAM_ID,
    )
    return addr


def get_hashed_name(name: str) -> bytes:
    return hashlib.sha256((NAME_HASH_PREFIX + name).encode("utf-8")).digest()


def derive_name_account_key(
    hashed_name: bytes,
    name_class: Pubkey | None = None,
    parent: Pubkey | None = None,
) -> Pubkey:
    """Name service account key, matching ``get_seeds_and_key`` on-chain."""
    class_bytes = bytes(name_class) if name_class is not None else bytes(32)
    parent_bytes = bytes(parent) if parent is not None else bytes(32)
    addr, _ = find_program_address(
        [hashed_name, class_bytes, parent_bytes], NAME_PROGRAM_ID
    )
    return addr


def get_domain_key(domain: str) -> Pubkey:
    """Name account of a second-level ``.sol`` domain, e.g. ``"bonfida.sol"``."""
    if domain.endswith(".sol"):
        domain = domain[: -len(".sol")]
    if not domain or "." in domain:
        raise ValueError(f"not a second-level .sol domain: {domain!r}")
    return derive_name_account_key(get_hashed_name(domain), parent=ROOT_DOMAIN_ACCOUNT)
