"""
Instruction Factory
===================
Pure, deterministic construction of the `update_price` instruction.

100% testable without RPC or wallet connections.

Payload layout (20 bytes, little-endian):

    offset  0  len 8   command tag (Anchor discriminator)
    offset  8  len 8   scaled price   i64
    offset 16  len 4   exponent       i32
"""

from __future__ import annotations

import hashlib
import struct
from dataclasses import dataclass

from solders.instruction import Instruction, AccountMeta
from solders.pubkey import Pubkey

from feed_updater.execution.execution_result import EncodingError, EncodingErrorKind
from feed_updater.shared.system.logging import Logger


PAYLOAD_FORMAT = "<8sqi"
PAYLOAD_SIZE = struct.calcsize(PAYLOAD_FORMAT)  # 20

I64_MIN, I64_MAX = -(2 ** 63), 2 ** 63 - 1
I32_MIN, I32_MAX = -(2 ** 31), 2 ** 31 - 1


def anchor_discriminator(name: str) -> bytes:
    """First 8 bytes of sha256("global:<name>")."""
    return hashlib.sha256(f"global:{name}".encode()).digest()[:8]


# [61, 34, 117, 155, 75, 34, 123, 208]
UPDATE_PRICE_DISCRIMINATOR = anchor_discriminator("update_price")


def _command_tag(tag: bytes) -> bytes:
    if len(tag) != 8:
        raise ValueError(f"Command tag must be 8 bytes, got {len(tag)}")
    return bytes(tag)


@dataclass(frozen=True)
class InstructionPayload:
    """Immutable update_price payload."""

    tag: bytes
    amount: int
    exponent: int
    data: bytes

    def __len__(self) -> int:
        return len(self.data)

    def __bytes__(self) -> bytes:
        return self.data

    def hex(self) -> str:
        return self.data.hex()


class InstructionPayloadBuilder:
    """
    Serializes tag ‖ amount ‖ exponent into the fixed payload.

    The layout is versionless: the on-chain program and this builder agree
    on byte offsets out-of-band.
    """

    def __init__(self, tag: bytes = UPDATE_PRICE_DISCRIMINATOR):
        self.tag = _command_tag(tag)

    def build(self, amount: int, exponent: int) -> InstructionPayload:
        return build_payload(self.tag, amount, exponent)


def build_payload(tag: bytes, amount: int, exponent: int) -> InstructionPayload:
    """
    Build the 20-byte payload.

    Raises:
        ValueError: tag is not exactly 8 bytes
        EncodingError(OVERFLOW): amount outside i64 or exponent outside i32
    """
    tag = _command_tag(tag)

    if not I64_MIN <= amount <= I64_MAX:
        raise EncodingError(
            EncodingErrorKind.OVERFLOW,
            f"Scaled price {amount} does not fit in a signed 64-bit integer",
        )

    if not I32_MIN <= exponent <= I32_MAX:
        raise EncodingError(
            EncodingErrorKind.OVERFLOW,
            f"Exponent {exponent} does not fit in a signed 32-bit integer",
        )

    data = struct.pack(PAYLOAD_FORMAT, tag, amount, exponent)
    return InstructionPayload(tag=tag, amount=amount, exponent=exponent, data=data)


def parse_payload(data: bytes) -> InstructionPayload:
    """Read a payload back into its fields."""
    if len(data) != PAYLOAD_SIZE:
        raise ValueError(f"Payload must be {PAYLOAD_SIZE} bytes, got {len(data)}")

    tag, amount, exponent = struct.unpack(PAYLOAD_FORMAT, data)
    return InstructionPayload(tag=tag, amount=amount, exponent=exponent, data=bytes(data))


def build_update_price_instruction(
    program_id: Pubkey,
    feed_address: Pubkey,
    payload: InstructionPayload,
) -> Instruction:
    """
    Wrap the payload into the program instruction.

    The feed account is the only account: writable, not a signer.
    """
    accounts = [
        AccountMeta(feed_address, is_signer=False, is_writable=True),
    ]

    Logger.debug(
        f"[BUILDER] update_price ix: feed={feed_address} "
        f"amount={payload.amount} expo={payload.exponent}"
    )

    return Instruction(
        program_id=program_id,
        accounts=accounts,
        data=payload.data,
    )
