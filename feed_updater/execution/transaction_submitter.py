"""
Transaction Submitter
=====================
Signs, sends and confirms the update_price transaction with bounded retry.

The "Pilot" of the execution pipeline.

State machine per logical submission:

    IDLE -> BUILDING -> SIGNING -> SENT -> CONFIRMING -> CONFIRMED
                ^                                     \-> RETRYING -> BUILDING
                                                      \-> FAILED

Every attempt fetches a fresh blockhash; attempts never overlap.

Caveat: an attempt classified as failed may still land on-chain. The
submitter does not deduplicate; a caller that resubmits after a fatal
error can apply the update twice.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from solders.message import to_bytes_versioned
from solders.pubkey import Pubkey
from solders.transaction import VersionedTransaction

from feed_updater.execution.error_classifier import ErrorClass, categorize, classify, describe
from feed_updater.execution.execution_result import (
    AttemptOutcome,
    ErrorCode,
    SubmissionAttempt,
    SubmissionError,
    SubmissionErrorKind,
)
from feed_updater.execution.instruction_factory import (
    InstructionPayload,
    build_update_price_instruction,
)
from feed_updater.execution.transaction_assembler import TransactionAssembler
from feed_updater.execution.wallet import Credential
from feed_updater.shared.system.logging import Logger


# ═══════════════════════════════════════════════════════════════════════════════
# CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RetryPolicy:
    """Retry configuration; not mutated at runtime."""

    max_attempts: int = 3
    inter_attempt_delay_s: float = 2.0
    commitment: str = "confirmed"
    retry_on_confirmation_failure: bool = True

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.inter_attempt_delay_s < 0:
            raise ValueError("inter_attempt_delay_s must be >= 0")


class SubmissionState(Enum):
    IDLE = "IDLE"
    BUILDING = "BUILDING"
    SIGNING = "SIGNING"
    SENT = "SENT"
    CONFIRMING = "CONFIRMING"
    CONFIRMED = "CONFIRMED"
    RETRYING = "RETRYING"
    FAILED = "FAILED"


# ═══════════════════════════════════════════════════════════════════════════════
# SUBMITTER
# ═══════════════════════════════════════════════════════════════════════════════

class TransactionSubmitter:
    """
    Submission engine for a single update_price transaction.

    Usage:
        submitter = TransactionSubmitter(rpc, assembler, program_id)
        signature = await submitter.submit(payload, feed_address, credential)
    """

    def __init__(
        self,
        rpc: Any,
        assembler: TransactionAssembler,
        program_id: Pubkey,
        policy: Optional[RetryPolicy] = None,
    ):
        """
        Args:
            rpc: LedgerRpc (or anything with the same three coroutines)
            assembler: Compute-budget + ordering configuration
            program_id: Mock price feed program
            policy: Default retry policy
        """
        self.rpc = rpc
        self.assembler = assembler
        self.program_id = program_id
        self.policy = policy or RetryPolicy()

        self.state = SubmissionState.IDLE
        self.last_attempt: Optional[SubmissionAttempt] = None

        # Statistics
        self._submissions = 0
        self._confirmations = 0
        self._failures = 0
        self._attempts = 0

    def _transition(self, state: SubmissionState) -> None:
        Logger.debug(f"[SUBMIT] {self.state.value} -> {state.value}")
        self.state = state

    async def submit(
        self,
        payload: InstructionPayload,
        target_address: Pubkey,
        credential: Credential,
        policy: Optional[RetryPolicy] = None,
    ) -> str:
        """
        Submit the payload to `target_address` and wait for confirmation.

        Returns:
            Transaction signature (base58)

        Raises:
            SubmissionError: TRANSIENT after exhausting attempts, FATAL immediately
        """
        policy = policy or self.policy
        self._submissions += 1
        self.state = SubmissionState.IDLE
        self.last_attempt = None

        domain_ix = build_update_price_instruction(self.program_id, target_address, payload)
        instructions = self.assembler.build_instructions(domain_ix)

        last_error: Optional[Exception] = None

        for attempt_index in range(1, policy.max_attempts + 1):
            attempt = SubmissionAttempt(attempt_index=attempt_index)
            self.last_attempt = attempt
            self._attempts += 1

            try:
                signature = await self._run_attempt(attempt, instructions, credential, policy)
            except Exception as e:
                attempt.latency_ms = (time.time() - attempt.started_at) * 1000
                attempt.reason = describe(e)
                attempt.error_code = categorize(e)
                error_class = classify(e, policy.retry_on_confirmation_failure)

                if error_class == ErrorClass.FATAL:
                    attempt.outcome = AttemptOutcome.FATAL_FAILURE
                    self._fail()
                    Logger.error(f"[SUBMIT] Non-retryable error (attempt {attempt_index}): {attempt.reason}")
                    raise SubmissionError(
                        SubmissionErrorKind.FATAL, attempt.reason, attempt_index, attempt
                    ) from e

                attempt.outcome = AttemptOutcome.TRANSIENT_FAILURE

                if attempt.error_code == ErrorCode.CONFIRMATION_FAILED:
                    Logger.warning(
                        f"[SUBMIT] Confirmation reported failure for {attempt.signature}; "
                        "retrying may duplicate the update if it landed"
                    )

                last_error = e
                if attempt_index < policy.max_attempts:
                    self._transition(SubmissionState.RETRYING)
                    Logger.warning(
                        f"[SUBMIT] Attempt {attempt_index}/{policy.max_attempts} failed: {attempt.reason}. "
                        f"Retrying in {policy.inter_attempt_delay_s:.1f}s..."
                    )
                    await asyncio.sleep(policy.inter_attempt_delay_s)
                continue

            attempt.outcome = AttemptOutcome.CONFIRMED
            attempt.latency_ms = (time.time() - attempt.started_at) * 1000
            self._confirmations += 1
            self._transition(SubmissionState.CONFIRMED)
            Logger.success(f"[SUBMIT] Transaction confirmed: {signature}")
            return signature

        attempt = self.last_attempt
        self._fail()
        Logger.error(f"[SUBMIT] Transaction failed after {policy.max_attempts} attempts: {attempt.reason}")
        raise SubmissionError(
            SubmissionErrorKind.TRANSIENT, attempt.reason, attempt.attempt_index, attempt
        ) from last_error

    async def _run_attempt(
        self,
        attempt: SubmissionAttempt,
        instructions: list,
        credential: Credential,
        policy: RetryPolicy,
    ) -> str:
        """One BUILDING -> SIGNING -> SENT -> CONFIRMING cycle."""
        self._transition(SubmissionState.BUILDING)
        anchor = await self.rpc.fetch_freshness_anchor(policy.commitment)
        attempt.blockhash = str(anchor.blockhash)
        attempt.last_valid_block_height = anchor.last_valid_block_height

        tx = self.assembler.assemble(instructions, credential.pubkey(), anchor)

        self._transition(SubmissionState.SIGNING)
        message = tx.compile()
        signed = VersionedTransaction.populate(
            message, [credential.sign_message(to_bytes_versioned(message))]
        )
        attempt.signature = str(signed.signatures[0])

        # Inputs are validated locally, so preflight simulation is skipped
        await self.rpc.submit_signed_transaction(bytes(signed), True, policy.commitment)
        self._transition(SubmissionState.SENT)
        Logger.info(
            f"[SUBMIT] Transaction sent (attempt {attempt.attempt_index}/{policy.max_attempts}): "
            f"{attempt.signature}"
        )

        self._transition(SubmissionState.CONFIRMING)
        await self.rpc.await_confirmation(signed.signatures[0], anchor, policy.commitment)
        return attempt.signature

    def _fail(self) -> None:
        self._failures += 1
        self._transition(SubmissionState.FAILED)

    def get_stats(self) -> dict:
        """Get submission statistics."""
        success_rate = (
            self._confirmations / self._submissions * 100
            if self._submissions > 0
            else 0
        )

        return {
            "submissions": self._submissions,
            "confirmations": self._confirmations,
            "failures": self._failures,
            "attempts": self._attempts,
            "success_rate_pct": round(success_rate, 2),
        }
