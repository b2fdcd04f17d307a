from name_tokenizer.bindings import (
    create_collection,
    create_mint,
    create_nft,
    edit_data,
    redeem_nft,
    unverify_nft,
    withdraw_tokens,
)
from name_tokenizer.client import Client
from name_tokenizer.config import (
    METADATA_SIGNER,
    PROGRAM_ID_ENV_VAR,
    SOLANA_RPC_URLS,
    program_id_from_env,
)
from name_tokenizer.errors import (
    AccountNotFound,
    DecodeError,
    DecodeFailure,
    MalformedPayload,
    NameTokenizerError,
    NoValidNonce,
    TruncatedInput,
    UnknownVariant,
)
from name_tokenizer.instruction import (
    LATEST_VERSION,
    CreateCollection,
    CreateMint,
    CreateNft,
    EditData,
    ProtocolVersion,
    RedeemNft,
    UnverifyNft,
    WithdrawTokens,
    decode_instruction,
    encode_instruction,
)
from name_tokenizer.pda import (
    derive_associated_token_address,
    derive_central_state_pda,
    derive_collection_mint_pda,
    derive_master_edition_pda,
    derive_metadata_pda,
    derive_mint_pda,
    derive_nft_record_pda,
    derive_name_account_key,
    find_program_address,
    get_domain_key,
    get_hashed_name,
)
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
from name_tokenizer.state import CentralState, NftRecord, Tag, is_tokenized

__all__ = [
    "Client",
    "METADATA_SIGNER",
    "PROGRAM_ID_ENV_VAR",
    "SOLANA_RPC_URLS",
    "program_id_from_env",
    "AccountNotFound",
    "DecodeError",
    "DecodeFailure",
    "MalformedPayload",
    "NameTokenizerError",
    "NoValidNonce",
    "TruncatedInput",
    "UnknownVariant",
    "LATEST_VERSION",
    "CreateCollection",
    "CreateMint",
    "CreateNft",
    "EditData",
    "ProtocolVersion",
    "RedeemNft",
    "UnverifyNft",
    "WithdrawTokens",
    "decode_instruction",
    "encode_instruction",
    "CentralState",
    "NftRecord",
    "Tag",
    "is_tokenized",
    "MemcmpFilter",
    "RecordBatch",
    "active_records_filters",
    "decode_records",
    "records_by_mint_filters",
    "records_by_name_account_filters",
    "records_by_owner_filters",
    "tag_filter",
    "create_collection",
    "create_mint",
    "create_nft",
    "edit_data",
    "redeem_nft",
    "unverify_nft",
    "withdraw_tokens",
    "derive_associated_token_address",
    "derive_central_state_pda",
    "derive_collection_mint_pda",
    "derive_master_edition_pda",
    "derive_metadata_pda",
    "derive_mint_pda",
    "derive_nft_record_pda",
    "derive_name_account_key",
    "find_program_address",
    "get_domain_key",
    "get_hashed_name",
]
