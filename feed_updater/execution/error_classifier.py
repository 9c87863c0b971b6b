"""
Error Classifier
================
Partitions submission failures into retryable and fatal.

Pure functions of the error description: the exception's type name and
message are matched against known transient signatures. Anything not
recognized is fatal.
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple

from feed_updater.execution.execution_result import ConfirmationError, ErrorCode


class ErrorClass(Enum):
    RETRYABLE = "RETRYABLE"
    FATAL = "FATAL"


# Checked in order; first match wins.
TRANSIENT_SIGNATURES: Tuple[Tuple[ErrorCode, Tuple[str, ...]], ...] = (
    (ErrorCode.BLOCKHASH_NOT_FOUND, (
        "blockhash not found",
    )),
    (ErrorCode.BLOCK_HEIGHT_EXCEEDED, (
        "block height exceeded",
        "transactionexpiredblockheightexceedederror",
    )),
    (ErrorCode.CONFIRMATION_FAILED, (
        "failed confirmation",
        "confirmationerror",
    )),
    (ErrorCode.CONFIRMATION_TIMEOUT, (
        "timeouterror",
        "unconfirmedtxerror",
        "unable to confirm transaction",
        "timed out",
    )),
    (ErrorCode.NODE_BEHIND, (
        "node is behind",
        "node is unhealthy",
    )),
    (ErrorCode.TRANSPORT, (
        "network request failed",
        "solanarpcexception",
        "connecterror",
        "connecttimeout",
        "readtimeout",
        "writetimeout",
        "pooltimeout",
        "remoteprotocolerror",
        "connection refused",
        "connection reset",
    )),
)


def describe(error: BaseException) -> str:
    """
    Concrete description used for matching and for the caller-visible reason.

    Wrapper exceptions with no message of their own (solana-py's
    SolanaRpcException keeps its text in `error_msg`) are described together
    with the exception they were raised from.
    """
    name = type(error).__name__
    message = str(error)
    if message:
        return f"{name}: {message}"

    text = name
    error_msg = getattr(error, "error_msg", "")
    if error_msg:
        text = f"{name}: {error_msg}"

    cause = error.__cause__
    if cause is not None:
        text = f"{text} ({describe(cause)})"
    return text


def categorize(error: BaseException) -> ErrorCode:
    if isinstance(error, ConfirmationError):
        return ErrorCode.CONFIRMATION_FAILED

    text = describe(error).lower()
    for code, needles in TRANSIENT_SIGNATURES:
        if any(needle in text for needle in needles):
            return code
    return ErrorCode.UNKNOWN


def classify(error: BaseException, retry_on_confirmation_failure: bool = True) -> ErrorClass:
    """
    Retryable: blockhash not found, block height exceeded, confirmation
    timeout, node behind, transport failure and (by policy) a failure
    reported at confirmation time. Everything else is fatal.
    """
    code = categorize(error)
    if code == ErrorCode.UNKNOWN:
        return ErrorClass.FATAL
    if code == ErrorCode.CONFIRMATION_FAILED and not retry_on_confirmation_failure:
        return ErrorClass.FATAL
    return ErrorClass.RETRYABLE
