"""
Solana Explorer Endpoints
=========================
Cluster detection from the RPC endpoint and explorer link builders.

Links:
- https://solscan.io/{tx|account}/{id}?cluster=...
- https://explorer.solana.com/{tx|address}/{id}?cluster=...
"""

from dataclasses import dataclass
from urllib.parse import quote


@dataclass(frozen=True)
class ClusterInfo:
    """Cluster query parameters for each explorer."""

    explorer_cluster_param: str
    solscan_cluster_param: str


class ExplorerEndpoints:
    """
    Explorer link builder bound to one RPC endpoint.

    Usage:
        links = ExplorerEndpoints("https://api.devnet.solana.com")
        links.solscan_url("tx", signature)
    """

    SOLSCAN_URL = "https://solscan.io/{kind}/{id}?cluster={cluster}"
    SOLANA_EXPLORER_URL = "https://explorer.solana.com/{kind}/{id}?cluster={cluster}"

    # Known clusters by substring of the RPC URL
    KNOWN_CLUSTERS = (
        ("devnet", "devnet"),
        ("testnet", "testnet"),
        ("mainnet", "mainnet-beta"),
    )

    def __init__(self, rpc_url: str):
        self.rpc_url = rpc_url
        self.cluster = self.get_cluster_info(rpc_url)

    @classmethod
    def get_cluster_info(cls, rpc_url: str) -> ClusterInfo:
        for needle, cluster in cls.KNOWN_CLUSTERS:
            if needle in rpc_url:
                return ClusterInfo(cluster, cluster)

        # Local validator or private endpoint
        custom = f"custom&customUrl={quote(rpc_url, safe='')}"
        return ClusterInfo(custom, custom)

    def solscan_url(self, kind: str, identifier: str) -> str:
        """kind is 'tx' or 'account'."""
        if kind not in ("tx", "account"):
            raise ValueError(f"Unknown link kind: {kind}")
        return self.SOLSCAN_URL.format(
            kind=kind, id=identifier, cluster=self.cluster.solscan_cluster_param
        )

    def explorer_url(self, kind: str, identifier: str) -> str:
        """kind is 'tx' or 'account'."""
        if kind not in ("tx", "account"):
            raise ValueError(f"Unknown link kind: {kind}")
        path = "tx" if kind == "tx" else "address"
        return self.SOLANA_EXPLORER_URL.format(
            kind=path, id=identifier, cluster=self.cluster.explorer_cluster_param
        )


def short_address(address: str) -> str:
    """'AbCd...WxYz' form for display."""
    address = str(address)
    if len(address) <= 8:
        return address
    return f"{address[:4]}...{address[-4:]}"
