"""
Execution Result & Error Taxonomy
=================================
Standardized failure types for every price update path.

Every failure surfaced to a caller is a FeedUpdateError subclass:

    ValidationError   - bad caller input (never retried, no network I/O)
    EncodingError     - value cannot be represented in the payload
    SubmissionError   - network / consensus outcome (transient or fatal)

ConfirmationError is raised by the RPC layer when the network reports an
execution error for a landed transaction; the submitter classifies it like
any other attempt failure.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Any, Dict


class ValidationErrorKind(Enum):
    """Caller input problems."""

    BAD_FORMAT = "BAD_FORMAT"
    PRECISION_EXCEEDED = "PRECISION_EXCEEDED"
    UNKNOWN_SYMBOL = "UNKNOWN_SYMBOL"


class EncodingErrorKind(Enum):
    """Payload representation problems."""

    OVERFLOW = "OVERFLOW"


class SubmissionErrorKind(Enum):
    """Terminal submission outcome category."""

    TRANSIENT = "TRANSIENT"
    FATAL = "FATAL"


class ErrorCode(Enum):
    """Failure categories recognized by the error classifier."""

    # Freshness anchor
    BLOCKHASH_NOT_FOUND = "BLOCKHASH_NOT_FOUND"
    BLOCK_HEIGHT_EXCEEDED = "BLOCK_HEIGHT_EXCEEDED"

    # Confirmation
    CONFIRMATION_TIMEOUT = "CONFIRMATION_TIMEOUT"
    CONFIRMATION_FAILED = "CONFIRMATION_FAILED"

    # Network
    NODE_BEHIND = "NODE_BEHIND"
    TRANSPORT = "TRANSPORT"

    # General
    UNKNOWN = "UNKNOWN"


class FeedUpdateError(Exception):
    """Base class for every error surfaced by the feed updater."""


class ValidationError(FeedUpdateError):
    def __init__(self, kind: ValidationErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


class EncodingError(FeedUpdateError):
    def __init__(self, kind: EncodingErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


class SubmissionError(FeedUpdateError):
    """
    Terminal submission failure.

    `reason` is the last concrete error description received from the
    network; the raw exception is chained as __cause__.
    """

    def __init__(
        self,
        kind: SubmissionErrorKind,
        reason: str,
        attempts: int = 0,
        attempt: Optional["SubmissionAttempt"] = None,
    ):
        super().__init__(f"{kind.value.lower()} submission failure after {attempts} attempt(s): {reason}")
        self.kind = kind
        self.reason = reason
        self.attempts = attempts
        self.attempt = attempt

    @property
    def is_transient(self) -> bool:
        return self.kind == SubmissionErrorKind.TRANSIENT


class ConfirmationError(Exception):
    """The network reported an execution error at confirmation time."""

    def __init__(self, signature: str, err: Any):
        super().__init__(f"Transaction {signature} failed confirmation: {err}")
        self.signature = signature
        self.err = err


# ═══════════════════════════════════════════════════════════════════════════════
# SUBMISSION ATTEMPT
# ═══════════════════════════════════════════════════════════════════════════════

class AttemptOutcome(Enum):
    """Outcome of a single submission cycle."""

    CONFIRMED = "CONFIRMED"
    TRANSIENT_FAILURE = "TRANSIENT_FAILURE"
    FATAL_FAILURE = "FATAL_FAILURE"


@dataclass
class SubmissionAttempt:
    """Record of one build → sign → send → confirm cycle."""

    attempt_index: int
    blockhash: Optional[str] = None
    last_valid_block_height: Optional[int] = None
    signature: Optional[str] = None
    outcome: Optional[AttemptOutcome] = None
    reason: Optional[str] = None
    error_code: Optional[ErrorCode] = None
    started_at: float = field(default_factory=time.time)
    latency_ms: float = 0.0

    @property
    def success(self) -> bool:
        return self.outcome == AttemptOutcome.CONFIRMED

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "attempt": self.attempt_index,
            "blockhash": self.blockhash,
            "last_valid_block_height": self.last_valid_block_height,
            "signature": self.signature,
            "outcome": self.outcome.value if self.outcome else None,
            "reason": self.reason,
            "error_code": self.error_code.value if self.error_code else None,
            "latency_ms": round(self.latency_ms, 1),
        }
