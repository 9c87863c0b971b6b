"""
Price Update Service
====================
The single entry point a front end calls:

    signature = await service.request_price_update("SOL/USD", "123.45")

Input problems (bad number, too many decimals, unknown symbol, overflow)
are raised before any network call. Everything surfaced is a
FeedUpdateError subclass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from solders.pubkey import Pubkey

from feed_updater.execution.execution_result import ValidationError, ValidationErrorKind
from feed_updater.execution.fixed_point import FixedPointEncoder
from feed_updater.execution.instruction_factory import InstructionPayload, InstructionPayloadBuilder
from feed_updater.execution.transaction_assembler import TransactionAssembler
from feed_updater.execution.transaction_submitter import RetryPolicy, TransactionSubmitter
from feed_updater.execution.wallet import Credential
from feed_updater.shared.infrastructure.feed_registry import FeedRegistry
from feed_updater.shared.system.logging import Logger


@dataclass
class FeedContext:
    """Everything a price update needs; passed explicitly, never global."""

    rpc: Any
    credential: Credential
    registry: FeedRegistry
    program_id: Pubkey
    exponent: int = -8
    policy: RetryPolicy = field(default_factory=RetryPolicy)
    priority_fee: int = 10_000
    compute_units: int = 200_000


@dataclass(frozen=True)
class PreparedUpdate:
    """Validated, encoded request ready for submission."""

    symbol: str
    display_value: str
    feed_address: Pubkey
    payload: InstructionPayload


class PriceUpdateService:
    """
    Encodes, validates and submits price updates for one context.

    One service per concurrent submission stream: the credential and RPC
    connection are not shared across in-flight submissions.
    """

    def __init__(self, context: FeedContext):
        self.context = context
        self.encoder = FixedPointEncoder(context.exponent)
        self.builder = InstructionPayloadBuilder()
        self.submitter = TransactionSubmitter(
            rpc=context.rpc,
            assembler=TransactionAssembler(context.priority_fee, context.compute_units),
            program_id=context.program_id,
            policy=context.policy,
        )

    def prepare(self, symbol: str, display_value: str) -> PreparedUpdate:
        """
        Pure validation + encoding step; no network I/O.

        Raises:
            ValidationError: BAD_FORMAT, PRECISION_EXCEEDED or UNKNOWN_SYMBOL
            EncodingError: OVERFLOW
        """
        if not symbol:
            raise ValidationError(ValidationErrorKind.UNKNOWN_SYMBOL, "Please select a price feed symbol.")

        display_value = (display_value or "").strip()
        amount = self.encoder.encode(display_value)
        payload = self.builder.build(amount, self.context.exponent)

        feed_address = self.context.registry.lookup(symbol)
        if feed_address is None:
            raise ValidationError(
                ValidationErrorKind.UNKNOWN_SYMBOL,
                f"Price feed address not found for {symbol}",
            )

        return PreparedUpdate(
            symbol=symbol,
            display_value=display_value,
            feed_address=feed_address,
            payload=payload,
        )

    async def request_price_update(
        self,
        symbol: str,
        display_value: str,
        policy: Optional[RetryPolicy] = None,
    ) -> str:
        """
        Update `symbol` to `display_value`.

        Returns:
            Transaction signature

        Raises:
            ValidationError, EncodingError: before any network call
            SubmissionError: transient (attempts exhausted) or fatal
        """
        update = self.prepare(symbol, display_value)

        Logger.info(
            f"[SERVICE] Building transaction for {symbol} to {update.display_value} "
            f"(raw: {update.payload.amount}, exponent: {update.payload.exponent})..."
        )

        signature = await self.submitter.submit(
            update.payload,
            update.feed_address,
            self.context.credential,
            policy,
        )

        Logger.success(f"[SERVICE] Successfully updated price for {symbol}!")
        return signature
