"""
Execution Pipeline
==================
Price update encoding and submission.

Components:
- fixed_point: Decimal string -> scaled integer (The Encoder)
- InstructionPayloadBuilder: Pure payload/instruction building (The Architect)
- TransactionAssembler: Compute budget + ordering
- TransactionSubmitter: Sign, send, confirm, retry (The Pilot)
- error_classifier: Retryable vs fatal
"""

from feed_updater.execution.execution_result import (
    FeedUpdateError,
    ValidationError,
    ValidationErrorKind,
    EncodingError,
    EncodingErrorKind,
    SubmissionError,
    SubmissionErrorKind,
    ConfirmationError,
    ErrorCode,
    AttemptOutcome,
    SubmissionAttempt,
)

from feed_updater.execution.fixed_point import (
    FixedPointEncoder,
    encode,
    decode,
    normalize,
)

from feed_updater.execution.instruction_factory import (
    InstructionPayload,
    InstructionPayloadBuilder,
    UPDATE_PRICE_DISCRIMINATOR,
    anchor_discriminator,
    build_payload,
    parse_payload,
    build_update_price_instruction,
)

from feed_updater.execution.transaction_assembler import (
    AssembledTransaction,
    FreshnessAnchor,
    TransactionAssembler,
)

from feed_updater.execution.error_classifier import (
    ErrorClass,
    classify,
    categorize,
)

from feed_updater.execution.transaction_submitter import (
    RetryPolicy,
    SubmissionState,
    TransactionSubmitter,
)

from feed_updater.execution.wallet import (
    Credential,
    KeypairCredential,
    load_credential,
)


__all__ = [
    # Errors
    "FeedUpdateError",
    "ValidationError",
    "ValidationErrorKind",
    "EncodingError",
    "EncodingErrorKind",
    "SubmissionError",
    "SubmissionErrorKind",
    "ConfirmationError",
    "ErrorCode",
    "AttemptOutcome",
    "SubmissionAttempt",
    # Encoder
    "FixedPointEncoder",
    "encode",
    "decode",
    "normalize",
    # Factory
    "InstructionPayload",
    "InstructionPayloadBuilder",
    "UPDATE_PRICE_DISCRIMINATOR",
    "anchor_discriminator",
    "build_payload",
    "parse_payload",
    "build_update_price_instruction",
    # Assembler
    "AssembledTransaction",
    "FreshnessAnchor",
    "TransactionAssembler",
    # Classifier
    "ErrorClass",
    "classify",
    "categorize",
    # Submitter
    "RetryPolicy",
    "SubmissionState",
    "TransactionSubmitter",
    # Wallet
    "Credential",
    "KeypairCredential",
    "load_credential",
]
