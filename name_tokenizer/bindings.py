"""Instruction builders for the name tokenizer program.

Every builder is pure: it derives the accounts the program expects, in the
order and with the signer/writable flags the program's account structs declare,
and returns a single ``solders`` ``Instruction``. Nothing here touches the
network; ``name_tokenizer.client.Client`` offers variants that resolve inputs
from the ledger first.
"""

from __future__ import annotations

from solders.instruction import AccountMeta, Instruction  # type: ignore[import-untyped]
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from name_tokenizer.config import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    METADATA_PROGRAM_ID,
    NAME_PROGRAM_ID,
    RENT_SYSVAR_ID,
    SYSTEM_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
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
)


def _check_pubkeys(**keys: object) -> None:
    for name, value in keys.items():
        if not isinstance(value, Pubkey):
            raise TypeError(f"{name} must be a Pubkey, got {type(value).__name__}")


def _meta(pubkey: Pubkey, signer: bool = False, writable: bool = False) -> AccountMeta:
    return AccountMeta(pubkey=pubkey, is_signer=signer, is_writable=writable)


def create_mint(
    name_account: Pubkey,
    fee_payer: Pubkey,
    program_id: Pubkey,
    version: ProtocolVersion = LATEST_VERSION,
) -> Instruction:
    """Create the tokenizer mint for a domain. Same layout in every version."""
    _check_pubkeys(name_account=name_account, fee_payer=fee_payer, program_id=program_id)
    data = encode_instruction(CreateMint(), version)
    central_state, _ = derive_central_state_pda(program_id)
    mint, _ = derive_mint_pda(program_id, name_account)

    accounts = [
        _meta(mint, writable=True),  # 0. mint
        _meta(name_account, writable=True),  # 1. name_account
        _meta(central_state),  # 2. central_state
        _meta(TOKEN_PROGRAM_ID),  # 3. spl_token_program
        _meta(SYSTEM_PROGRAM_ID),  # 4. system_program
        _meta(RENT_SYSVAR_ID),  # 5. rent_account
        _meta(fee_payer),  # 6. fee_payer
    ]
    return Instruction(program_id=program_id, data=data, accounts=accounts)


def create_collection(
    fee_payer: Pubkey,
    program_id: Pubkey,
    version: ProtocolVersion = LATEST_VERSION,
) -> Instruction:
    """Create the verified collection NFT held by the central state."""
    _check_pubkeys(fee_payer=fee_payer, program_id=program_id)
    data = encode_instruction(CreateCollection(), version)
    central_state, _ = derive_central_state_pda(program_id)
    collection_mint, _ = derive_collection_mint_pda(program_id)
    edition, _ = derive_master_edition_pda(collection_mint)
    metadata, _ = derive_metadata_pda(collection_mint)
    central_state_ata = derive_associated_token_address(central_state, collection_mint)

    accounts = [
        _meta(collection_mint, writable=True),  # 0. collection_mint
        _meta(edition, writable=True),  # 1. edition
        _meta(metadata, writable=True),  # 2. metadata_account
        _meta(central_state),  # 3. central_state
        _meta(central_state_ata, writable=True),  # 4. central_state_nft_ata
        _meta(fee_payer),  # 5. fee_payer
        _meta(TOKEN_PROGRAM_ID),  # 6. spl_token_program
        _meta(METADATA_PROGRAM_ID),  # 7. metadata_program
        _meta(SYSTEM_PROGRAM_ID),  # 8. system_program
        _meta(NAME_PROGRAM_ID),  # 9. spl_name_service_program
        _meta(ASSOCIATED_TOKEN_PROGRAM_ID),  # 10. ata_program
        _meta(RENT_SYSVAR_ID),  # 11. rent_account
    ]
    return Instruction(program_id=program_id, data=data, accounts=accounts)


def create_nft(
    name: str,
    uri: str,
    name_account: Pubkey,
    name_owner: Pubkey,
    fee_payer: Pubkey,
    program_id: Pubkey,
    version: ProtocolVersion = LATEST_VERSION,
) -> Instruction:
    """Tokenize a domain: transfer it to the record PDA and mint the NFT to its owner.

    Args:
        name: Domain name without the ``.sol`` suffix.
        uri: Off-chain metadata URI.
        name_account: The domain's name service account.
        name_owner: Current domain owner; signs and receives the NFT.
        fee_payer: Pays for the record, metadata and token accounts.
        program_id: Deployed tokenizer program.
        version: Protocol version of the deployed program.
    """
    _check_pubkeys(
        name_account=name_account,
        name_owner=name_owner,
        fee_payer=fee_payer,
        program_id=program_id,
    )
    data = encode_instruction(CreateNft(name=name, uri=uri), version)
    central_state, _ = derive_central_state_pda(program_id)
    mint, _ = derive_mint_pda(program_id, name_account)
    nft_record, _ = derive_nft_record_pda(program_id, name_account)
    nft_destination = derive_associated_token_address(name_owner, mint)
    metadata, _ = derive_metadata_pda(mint)

    if version == ProtocolVersion.V1:
        accounts = [
            _meta(mint, writable=True),  # 0. mint
            _meta(nft_destination, writable=True),  # 1. nft_destination
            _meta(name_account, writable=True),  # 2. name_account
            _meta(nft_record, writable=True),  # 3. nft_record
            _meta(name_owner, signer=True, writable=True),  # 4. name_owner
            _meta(metadata, writable=True),  # 5. metadata_account
            _meta(central_state),  # 6. central_state
            _meta(fee_payer, writable=True),  # 7. fee_payer
            _meta(TOKEN_PROGRAM_ID),  # 8. spl_token_program
            _meta(METADATA_PROGRAM_ID),  # 9. metadata_program
            _meta(SYSTEM_PROGRAM_ID),  # 10. system_program
            _meta(NAME_PROGRAM_ID),  # 11. spl_name_service_program
            _meta(RENT_SYSVAR_ID),  # 12. rent_account
        ]
        return Instruction(program_id=program_id, data=data, accounts=accounts)

    collection_mint, _ = derive_collection_mint_pda(program_id)
    collection_metadata, _ = derive_metadata_pda(collection_mint)
    edition, _ = derive_master_edition_pda(collection_mint)

    accounts = [
        _meta(mint, writable=True),  # 0. mint
        _meta(nft_destination, writable=True),  # 1. nft_destination
        _meta(name_account, writable=True),  # 2. name_account
        _meta(nft_record, writable=True),  # 3. nft_record
        _meta(name_owner, signer=True, writable=True),  # 4. name_owner
        _meta(metadata, writable=True),  # 5. metadata_account
        _meta(edition),  # 6. edition_account (collection master edition)
        _meta(collection_metadata),  # 7. collection_metadata
        _meta(collection_mint),  # 8. collection_mint
        _meta(central_state, writable=True),  # 9. central_state
        _meta(fee_payer, writable=True),  # 10. fee_payer
        _meta(TOKEN_PROGRAM_ID),  # 11. spl_token_program
        _meta(METADATA_PROGRAM_ID),  # 12. metadata_program
        _meta(SYSTEM_PROGRAM_ID),  # 13. system_program
        _meta(NAME_PROGRAM_ID),  # 14. spl_name_service_program
        _meta(RENT_SYSVAR_ID),  # 15. rent_account
    ]
    return Instruction(program_id=program_id, data=data, accounts=accounts)


def redeem_nft(
    name_account: Pubkey,
    nft_owner: Pubkey,
    program_id: Pubkey,
    version: ProtocolVersion = LATEST_VERSION,
) -> Instruction:
    """Burn the NFT and return the domain to ``nft_owner``."""
    _check_pubkeys(name_account=name_account, nft_owner=nft_owner, program_id=program_id)
    data = encode_instruction(RedeemNft(), version)
    mint, _ = derive_mint_pda(program_id, name_account)
    nft_record, _ = derive_nft_record_pda(program_id, name_account)
    nft_source = derive_associated_token_address(nft_owner, mint)

    accounts = [
        _meta(mint, writable=True),  # 0. mint
        _meta(nft_source, writable=True),  # 1. nft_source
        _meta(nft_owner, signer=True, writable=True),  # 2. nft_owner
        _meta(nft_record, writable=True),  # 3. nft_record
        _meta(name_account, writable=True),  # 4. name_account
        _meta(TOKEN_PROGRAM_ID),  # 5. spl_token_program
        _meta(NAME_PROGRAM_ID),  # 6. spl_name_service_program
    ]
    return Instruction(program_id=program_id, data=data, accounts=accounts)


def withdraw_tokens(
    nft_mint: Pubkey,
    token_mint: Pubkey,
    nft_owner: Pubkey,
    name_account: Pubkey,
    program_id: Pubkey,
    version: ProtocolVersion = LATEST_VERSION,
) -> Instruction:
    """Withdraw ``token_mint`` tokens that were sent to a tokenized domain's record.

    ``nft_mint`` is the record's NFT mint; the NFT holder proves ownership by
    signing with the account that holds it.
    """
    _check_pubkeys(
        nft_mint=nft_mint,
        token_mint=token_mint,
        nft_owner=nft_owner,
        name_account=name_account,
        program_id=program_id,
    )
    data = encode_instruction(WithdrawTokens(), version)
    nft_record, _ = derive_nft_record_pda(program_id, name_account)
    nft = derive_associated_token_address(nft_owner, nft_mint)
    token_destination = derive_associated_token_address(nft_owner, token_mint)
    token_source = derive_associated_token_address(nft_record, token_mint)

    accounts = [
        _meta(nft, writable=True),  # 0. nft
        _meta(nft_owner, signer=True, writable=True),  # 1. nft_owner
        _meta(nft_record, writable=True),  # 2. nft_record
        _meta(token_destination, writable=True),  # 3. token_destination
        _meta(token_source, writable=True),  # 4. token_source
        _meta(TOKEN_PROGRAM_ID),  # 5. spl_token_program
    ]
    if version == ProtocolVersion.V1:
        accounts.append(_meta(SYSTEM_PROGRAM_ID))  # 6. system_program
    return Instruction(program_id=program_id, data=data, accounts=accounts)


def edit_data(
    nft_owner: Pubkey,
    name_account: Pubkey,
    offset: int,
    data: bytes,
    program_id: Pubkey,
    version: ProtocolVersion = LATEST_VERSION,
) -> Instruction:
    """Write ``data`` at ``offset`` into a tokenized domain's registry data."""
    _check_pubkeys(nft_owner=nft_owner, name_account=name_account, program_id=program_id)
    payload = encode_instruction(EditData(offset=offset, data=bytes(data)), version)
    mint, _ = derive_mint_pda(program_id, name_account)
    nft_record, _ = derive_nft_record_pda(program_id, name_account)
    nft_account = derive_associated_token_address(nft_owner, mint)

    accounts = [
        _meta(nft_owner, signer=True),  # 0. nft_owner
        _meta(nft_account),  # 1. nft_account
        _meta(nft_record),  # 2. nft_record
        _meta(name_account, writable=True),  # 3. name_account
        _meta(TOKEN_PROGRAM_ID),  # 4. spl_token_program
        _meta(NAME_PROGRAM_ID),  # 5. spl_name_service_program
    ]
    return Instruction(program_id=program_id, data=payload, accounts=accounts)


def unverify_nft(
    name_account: Pubkey,
    fee_payer: Pubkey,
    metadata_signer: Pubkey | None,
    program_id: Pubkey,
    version: ProtocolVersion = LATEST_VERSION,
) -> Instruction:
    """Remove a domain NFT from the verified collection.

    ``metadata_signer`` is the authority the mainnet program checks
    (``config.METADATA_SIGNER``); devnet builds take no such account, pass ``None``.
    """
    _check_pubkeys(name_account=name_account, fee_payer=fee_payer, program_id=program_id)
    if metadata_signer is not None:
        _check_pubkeys(metadata_signer=metadata_signer)
    data = encode_instruction(UnverifyNft(), version)
    central_state, _ = derive_central_state_pda(program_id)
    mint, _ = derive_mint_pda(program_id, name_account)
    metadata, _ = derive_metadata_pda(mint)
    collection_mint, _ = derive_collection_mint_pda(program_id)
    collection_metadata, _ = derive_metadata_pda(collection_mint)
    edition, _ = derive_master_edition_pda(collection_mint)

    accounts = [
        _meta(metadata, writable=True),  # 0. metadata_account
        _meta(edition),  # 1. edition_account (collection master edition)
        _meta(collection_metadata),  # 2. collection_metadata
        _meta(collection_mint),  # 3. collection_mint
        _meta(central_state, writable=True),  # 4. central_state
        _meta(fee_payer, signer=True, writable=True),  # 5. fee_payer
        _meta(METADATA_PROGRAM_ID),  # 6. metadata_program
        _meta(SYSTEM_PROGRAM_ID),  # 7. system_program
        _meta(RENT_SYSVAR_ID),  # 8. rent_account
    ]
    if metadata_signer is not None:
        accounts.append(_meta(metadata_signer, signer=True))  # 9. metadata_signer
    return Instruction(program_id=program_id, data=data, accounts=accounts)

