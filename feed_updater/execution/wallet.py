"""
Wallet / Credential Provider
============================
Signing identity for the fee payer.

The submitter only needs something that can name its public key and
sign bytes; secret material stays inside this module and is never logged.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Optional, Protocol, Union

import base58
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.signature import Signature

from feed_updater.shared.system.logging import Logger


class Credential(Protocol):
    """Capability: produce a signature over arbitrary bytes."""

    def pubkey(self) -> Pubkey:
        ...

    def sign_message(self, message: bytes) -> Signature:
        ...


class KeypairCredential:
    """Credential backed by an in-memory ed25519 keypair."""

    SECRET_KEY_LENGTH = 64

    def __init__(self, keypair: Keypair):
        self._keypair = keypair

    def pubkey(self) -> Pubkey:
        return self._keypair.pubkey()

    def sign_message(self, message: bytes) -> Signature:
        return self._keypair.sign_message(message)

    def __repr__(self) -> str:
        return f"KeypairCredential({self.pubkey()})"

    # =========================================================================
    # LOADERS
    # =========================================================================

    @classmethod
    def from_secret(cls, secret: Union[str, bytes, list]) -> "KeypairCredential":
        """
        Accepts a base58 string, a JSON byte-array string ("[185, 5, ...]"),
        a list of ints, or raw bytes. Must decode to 64 bytes.
        """
        if isinstance(secret, str):
            text = secret.strip()
            if text.startswith("["):
                try:
                    secret = json.loads(text)
                except json.JSONDecodeError as e:
                    raise ValueError(f"Invalid keypair byte array: {e.msg}") from None
            else:
                try:
                    secret = base58.b58decode(text)
                except ValueError:
                    raise ValueError("Invalid base58 secret key") from None

        raw = bytes(secret)
        if len(raw) != cls.SECRET_KEY_LENGTH:
            raise ValueError(
                f"Invalid secret key length: expected {cls.SECRET_KEY_LENGTH} bytes, got {len(raw)}"
            )
        return cls(Keypair.from_bytes(raw))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "KeypairCredential":
        """Load a Solana CLI keypair file (JSON array of 64 ints)."""
        text = Path(path).expanduser().read_text(encoding="utf-8")
        return cls.from_secret(text)


def load_credential(
    private_key: Optional[str] = None,
    keypair_path: Optional[str] = None,
) -> KeypairCredential:
    """
    Resolve the fee-payer credential.

    Priority: explicit key -> explicit path -> SOLANA_PRIVATE_KEY -> SOLANA_KEYPAIR_PATH.
    """
    private_key = private_key or os.getenv("SOLANA_PRIVATE_KEY")
    keypair_path = keypair_path or os.getenv("SOLANA_KEYPAIR_PATH")

    if private_key:
        credential = KeypairCredential.from_secret(private_key)
    elif keypair_path:
        credential = KeypairCredential.from_file(keypair_path)
    else:
        raise ValueError("No signing key configured (set SOLANA_PRIVATE_KEY or SOLANA_KEYPAIR_PATH)")

    Logger.info(f"[WALLET] Authority/payer: {credential.pubkey()}")
    return credential
