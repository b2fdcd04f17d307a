#!/usr/bin/env python3
"""Example CLI that looks up tokenized .sol domains."""

import argparse
import sys

from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from name_tokenizer import Client, get_domain_key, program_id_from_env


def main() -> None:
    parser = argparse.ArgumentParser(description="Fetch name tokenizer records")
    parser.add_argument(
        "--env",
        default="mainnet-beta",
        choices=["mainnet-beta", "testnet", "devnet", "localnet"],
        help="Environment to connect to",
    )
    parser.add_argument(
        "--program-id",
        default=None,
        help="Tokenizer program id (defaults to $NAME_TOKENIZER_PROGRAM_ID)",
    )
    parser.add_argument("--domain", help="Domain to inspect, e.g. bonfida.sol")
    parser.add_argument("--owner", help="List records held by this wallet")
    args = parser.parse_args()

    try:
        program_id = (
            Pubkey.from_string(args.program_id) if args.program_id else program_id_from_env()
        )
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    client = Client.from_env(args.env, program_id)
    print(f"Fetching name tokenizer data from {args.env} ({program_id})...\n")

    if args.domain:
        name_account = get_domain_key(args.domain)
        print(f"=== {args.domain} ===")
        print(f"Name Account:   {name_account}")
        print(f"Tokenized:      {client.is_tokenized(name_account)}")
        try:
            record = client.fetch_nft_record(name_account)
            print(f"Record Tag:     {record.tag}")
            print(f"Owner:          {record.owner}")
            print(f"NFT Mint:       {record.nft_mint}")
        except Exception as e:
            print(f"  Not found or error: {e}")
        print()

    if args.owner:
        batch = client.fetch_records_for_owner(Pubkey.from_string(args.owner))
        print(f"=== Records for {args.owner} ({len(batch)}) ===")
        for addr, record in batch.records[:10]:
            print(f"  {str(addr)[:16]}...: name {record.name_account} mint {record.nft_mint}")
        if len(batch) > 10:
            print(f"  ... and {len(batch) - 10} more")
        for failure in batch.failures:
            print(f"  undecodable {failure.address}: {failure.error}")
        print()

    print("Done.")


if __name__ == "__main__":
    main()
