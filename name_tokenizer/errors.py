"""Exceptions raised by the name tokenizer SDK."""

from __future__ import annotations

from dataclasses import dataclass

from solders.pubkey import Pubkey  # type: ignore[import-untyped]


class NameTokenizerError(Exception):
    """Base class for all SDK errors."""


class DecodeError(NameTokenizerError, ValueError):
    """Bytes could not be turned into a typed value."""


class MalformedPayload(DecodeError):
    """Structurally invalid bytes (bad length prefix, invalid UTF-8, trailing data)."""


class TruncatedInput(DecodeError):
    """Fewer bytes remain than a fixed-size field needs."""


class UnknownVariant(DecodeError):
    """Discriminant not defined for the schema or protocol version in use."""


class NoValidNonce(NameTokenizerError):
    """No bump seed produced an off-curve address. Not retryable."""


class AccountNotFound(NameTokenizerError, LookupError):
    """The ledger returned no account at the requested address."""

    def __init__(self, address: Pubkey, what: str = "account") -> None:
        super().__init__(f"{what} not found: {address}")
        self.address = address


@dataclass
class DecodeFailure:
    """A single account in a batch query that failed to decode."""

    address: Pubkey
    data_len: int
    error: DecodeError
