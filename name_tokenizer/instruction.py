"""Instruction payloads for the name tokenizer program.

Each variant declares its field schema as static data. The wire tag is not a
property of the variant: the deployed program renumbered its instructions
between releases, so tags are looked up in a per-version table.

Payload layout: ``tag: u8`` followed by the variant's fields in order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Union

from name_tokenizer.borsh import (
    FieldKind,
    IncrementalReader,
    IncrementalWriter,
    Schema,
    read_fields,
    write_fields,
)
from name_tokenizer.errors import MalformedPayload, TruncatedInput, UnknownVariant


class ProtocolVersion(IntEnum):
    V1 = 1  # mint / nft / redeem / withdraw only
    V2 = 2  # adds verified collection, edit_data and unverify_nft

    def __str__(self) -> str:
        return f"v{self.value}"


LATEST_VERSION = ProtocolVersion.V2


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CreateMint:
    FIELDS: ClassVar[Schema] = ()


@dataclass(frozen=True)
class CreateCollection:
    FIELDS: ClassVar[Schema] = ()


@dataclass(frozen=True)
class CreateNft:
    name: str  # domain name without the .sol suffix
    uri: str  # metadata URI

    FIELDS: ClassVar[Schema] = (
        ("name", FieldKind.STRING),
        ("uri", FieldKind.STRING),
    )


@dataclass(frozen=True)
class RedeemNft:
    FIELDS: ClassVar[Schema] = ()


@dataclass(frozen=True)
class WithdrawTokens:
    FIELDS: ClassVar[Schema] = ()


@dataclass(frozen=True)
class EditData:
    offset: int  # u32, byte offset into the name registry data
    data: bytes

    FIELDS: ClassVar[Schema] = (
        ("offset", FieldKind.U32),
        ("data", FieldKind.BYTES),
    )


@dataclass(frozen=True)
class UnverifyNft:
    FIELDS: ClassVar[Schema] = ()


TokenizerInstruction = Union[
    CreateMint,
    CreateCollection,
    CreateNft,
    RedeemNft,
    WithdrawTokens,
    EditData,
    UnverifyNft,
]

INSTRUCTION_TAGS: dict[ProtocolVersion, dict[type, int]] = {
    ProtocolVersion.V1: {
        CreateMint: 0,
        CreateNft: 1,
        RedeemNft: 2,
        WithdrawTokens: 3,
    },
    ProtocolVersion.V2: {
        CreateMint: 0,
        CreateCollection: 1,
        CreateNft: 2,
        RedeemNft: 3,
        WithdrawTokens: 4,
        EditData: 5,
        UnverifyNft: 6,
    },
}

_VARIANTS_BY_TAG: dict[ProtocolVersion, dict[int, type]] = {
    version: {tag: cls for cls, tag in tags.items()}
    for version, tags in INSTRUCTION_TAGS.items()
}


def instruction_tag(cls: type, version: ProtocolVersion = LATEST_VERSION) -> int:
    try:
        return INSTRUCTION_TAGS[version][cls]
    except KeyError:
        raise UnknownVariant(
            f"{cls.__name__} is not part of protocol {version}"
        ) from None


def encode_instruction(
    ix: TokenizerInstruction, version: ProtocolVersion = LATEST_VERSION
) -> bytes:
    w = IncrementalWriter()
    w.write_u8(instruction_tag(type(ix), version))
    write_fields(w, ix.FIELDS, ix)
    return w.getvalue()


def decode_instruction(
    data: bytes, version: ProtocolVersion = LATEST_VERSION
) -> TokenizerInstruction:
    if not data:
        raise TruncatedInput("instruction data is empty")
    r = IncrementalReader(data)
    tag = r.read_u8()
    cls = _VARIANTS_BY_TAG[version].get(tag)
    if cls is None:
        raise UnknownVariant(f"unknown instruction tag {tag} for protocol {version}")
    fields = read_fields(r, cls.FIELDS)
    if r.remaining:
        raise MalformedPayload(
            f"{r.remaining} trailing bytes after {cls.__name__} payload"
        )
    return cls(**fields)
