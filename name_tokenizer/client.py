"""RPC client for reading name tokenizer accounts."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Protocol

from solana.rpc.api import Client as SolanaHTTPClient  # type: ignore[import-untyped]
from solana.rpc.types import MemcmpOpts  # type: ignore[import-untyped]
from solders.instruction import Instruction  # type: ignore[import-untyped]
from solders.pubkey import Pubkey  # type: ignore[import-untyped]
from solders.rpc.responses import GetAccountInfoResp  # type: ignore[import-untyped]

from name_tokenizer import bindings
from name_tokenizer.config import SOLANA_RPC_URLS
from name_tokenizer.errors import AccountNotFound
from name_tokenizer.instruction import LATEST_VERSION, ProtocolVersion
from name_tokenizer.pda import derive_mint_pda, derive_nft_record_pda
from name_tokenizer.query import (
    MemcmpFilter,
    RecordBatch,
    active_records_filters,
    decode_records,
    records_by_mint_filters,
    records_by_name_account_filters,
    records_by_owner_filters,
    tag_filter,
)
from name_tokenizer.state import NftRecord, Tag, is_tokenized

logger = logging.getLogger(__name__)


class SolanaClient(Protocol):
    def get_account_info(self, pubkey: Pubkey) -> GetAccountInfoResp: ...

    def get_program_accounts(self, pubkey: Pubkey, **kwargs: Any) -> Any: ...


class Client:
    """Read-only client for name tokenizer program accounts."""

    def __init__(
        self,
        solana_rpc: SolanaClient,
        program_id: Pubkey,
    ) -> None:
        self._solana_rpc = solana_rpc
        self._program_id = program_id

    @property
    def program_id(self) -> Pubkey:
        return self._program_id

    @classmethod
    def from_env(cls, env: str, program_id: Pubkey, timeout: float = 30) -> Client:
        """Create a client for the given environment.

        Args:
            env: Environment name ("mainnet-beta", "testnet", "devnet", "localnet")
            program_id: The deployed tokenizer program. There is no default.
        """
        return cls(SolanaHTTPClient(SOLANA_RPC_URLS[env], timeout=timeout), program_id)

    @classmethod
    def mainnet_beta(cls, program_id: Pubkey) -> Client:
        return cls.from_env("mainnet-beta", program_id)

    @classmethod
    def devnet(cls, program_id: Pubkey) -> Client:
        return cls.from_env("devnet", program_id)

    @classmethod
    def localnet(cls, program_id: Pubkey) -> Client:
        return cls.from_env("localnet", program_id)

    # -- Single accounts --

    def fetch_record(self, address: Pubkey) -> NftRecord:
        data = self._fetch_account_data(address)
        if data is None:
            raise AccountNotFound(address, "nft record")
        return NftRecord.from_bytes(data)

    def fetch_nft_record(self, name_account: Pubkey) -> NftRecord:
        addr, _ = derive_nft_record_pda(self._program_id, name_account)
        return self.fetch_record(addr)

    def is_tokenized(self, name_account: Pubkey) -> bool:
        mint, _ = derive_mint_pda(self._program_id, name_account)
        data = self._fetch_account_data(mint)
        if data is None:
            return False
        return is_tokenized(data)

    # -- Filtered program accounts --

    def fetch_active_records(self) -> RecordBatch:
        return self._fetch_records(active_records_filters())

    def fetch_records_with_tag(self, tag: Tag) -> RecordBatch:
        return self._fetch_records([tag_filter(tag)])

    def fetch_records_for_owner(self, owner: Pubkey) -> RecordBatch:
        return self._fetch_records(records_by_owner_filters(owner))

    def fetch_records_for_name(self, name_account: Pubkey) -> RecordBatch:
        return self._fetch_records(records_by_name_account_filters(name_account))

    def fetch_records_for_mint(self, mint: Pubkey) -> RecordBatch:
        return self._fetch_records(records_by_mint_filters(mint))

    # -- Builders that need ledger state --

    def withdraw_tokens(
        self,
        token_mint: Pubkey,
        nft_owner: Pubkey,
        name_account: Pubkey,
        version: ProtocolVersion = LATEST_VERSION,
    ) -> Instruction:
        """Build a withdraw instruction, reading the NFT mint from the record."""
        record = self.fetch_nft_record(name_account)
        return bindings.withdraw_tokens(
            record.nft_mint,
            token_mint,
            nft_owner,
            name_account,
            self._program_id,
            version,
        )

    # -- Internal helpers --

    def _fetch_account_data(self, addr: Pubkey) -> bytes | None:
        logger.debug("get_account_info %s", addr)
        resp = self._solana_rpc.get_account_info(addr)
        if resp.value is None:
            return None
        return bytes(resp.value.data)

    def _fetch_records(self, filters: Sequence[MemcmpFilter]) -> RecordBatch:
        opts = [MemcmpOpts(offset=f.offset, bytes=f.encoded()) for f in filters]
        logger.debug("get_program_accounts %s with %d filters", self._program_id, len(opts))
        resp = self._solana_rpc.get_program_accounts(
            self._program_id,
            encoding="base64",
            filters=opts,
        )
        batch = decode_records(
            (acct.pubkey, bytes(acct.account.data)) for acct in resp.value
        )
        for failure in batch.failures:
            logger.warning(
                "skipping undecodable record %s (%d bytes): %s",
                failure.address,
                failure.data_len,
                failure.error,
            )
        return batch
