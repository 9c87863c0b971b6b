"""
Ledger RPC Adapter
==================
The three network operations the submitter needs, over solana-py's AsyncClient:

    fetch_freshness_anchor   getLatestBlockhash
    submit_signed_transaction sendTransaction (raw bytes)
    await_confirmation       getSignatureStatuses polling up to lastValidBlockHeight

Errors from the client propagate unchanged; the submitter classifies them.
"""

from __future__ import annotations

from typing import Optional

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment
from solana.rpc.types import TxOpts
from solders.signature import Signature

from feed_updater.execution.execution_result import ConfirmationError
from feed_updater.execution.transaction_assembler import FreshnessAnchor
from feed_updater.shared.system.logging import Logger


class LedgerRpc:
    """
    Thin async wrapper around a solana-py AsyncClient.

    Usage:
        async with LedgerRpc.connect("http://127.0.0.1:8900") as rpc:
            anchor = await rpc.fetch_freshness_anchor("confirmed")
    """

    def __init__(self, client: AsyncClient, poll_interval_s: float = 0.5):
        self.client = client
        self.poll_interval_s = poll_interval_s

    @classmethod
    def connect(cls, rpc_url: str, commitment: str = "confirmed", poll_interval_s: float = 0.5) -> "LedgerRpc":
        return cls(AsyncClient(rpc_url, commitment=Commitment(commitment)), poll_interval_s)

    async def close(self) -> None:
        await self.client.close()

    async def __aenter__(self) -> "LedgerRpc":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    async def check_connection(self) -> str:
        """Return the node's solana-core version; raises if unreachable."""
        resp = await self.client.get_version()
        version = resp.value.solana_core
        Logger.info(f"[RPC] Connection successful (solana-core {version})")
        return version

    async def fetch_freshness_anchor(self, commitment: str) -> FreshnessAnchor:
        resp = await self.client.get_latest_blockhash(Commitment(commitment))
        anchor = FreshnessAnchor(
            blockhash=resp.value.blockhash,
            last_valid_block_height=resp.value.last_valid_block_height,
        )
        Logger.debug(f"[RPC] Fresh blockhash: {anchor}")
        return anchor

    async def submit_signed_transaction(
        self,
        raw_transaction: bytes,
        skip_simulation: bool,
        commitment: str,
    ) -> Signature:
        # maxRetries=0: the submitter owns retry
        opts = TxOpts(
            skip_preflight=skip_simulation,
            preflight_commitment=Commitment(commitment),
            max_retries=0,
        )
        resp = await self.client.send_raw_transaction(raw_transaction, opts=opts)
        return resp.value

    async def await_confirmation(
        self,
        signature: Signature,
        anchor: FreshnessAnchor,
        commitment: str,
    ) -> None:
        """
        Poll until the signature reaches `commitment` or the anchor expires.

        Raises:
            ConfirmationError: the transaction landed with an execution error
            TransactionExpiredBlockheightExceededError: anchor expired first
        """
        resp = await self.client.confirm_transaction(
            signature,
            commitment=Commitment(commitment),
            sleep_seconds=self.poll_interval_s,
            last_valid_block_height=anchor.last_valid_block_height,
        )

        status: Optional[object] = resp.value[0] if resp.value else None
        if status is None:
            raise ConfirmationError(str(signature), "signature status not found")

        err = getattr(status, "err", None)
        if err is not None:
            raise ConfirmationError(str(signature), err)
