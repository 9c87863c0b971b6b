"""
Price Feed Registry
===================
Symbol -> feed account mapping, loaded from the JSON written by the mock
price feed program's test run:

    {"BTC/USD": "<base58 address>", "SOL/USD": "<base58 address>"}
"""

import json
from pathlib import Path
from typing import Dict, List, Optional, Union

from solders.pubkey import Pubkey

from feed_updater.shared.system.logging import Logger


class FeedRegistry:
    """
    Immutable symbol registry.

    Usage:
        registry = FeedRegistry.from_file(Settings.PRICE_FEEDS_FILE)
        address = registry.lookup("SOL/USD")
    """

    def __init__(self, feeds: Dict[str, Pubkey]):
        self._feeds = dict(feeds)

    @classmethod
    def from_mapping(cls, mapping: Dict[str, str]) -> "FeedRegistry":
        """Parse addresses; invalid entries are skipped with a warning."""
        feeds: Dict[str, Pubkey] = {}
        for symbol, address in mapping.items():
            try:
                feeds[symbol] = Pubkey.from_string(str(address))
            except ValueError:
                Logger.warning(f"[REGISTRY] Skipping {symbol}: invalid address {address!r}")
        return cls(feeds)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "FeedRegistry":
        """
        Raises:
            FileNotFoundError: registry file missing
            ValueError: file is not a JSON object or holds no valid feeds
        """
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Price feed file {path} must contain a JSON object")

        registry = cls.from_mapping(data)
        if not registry:
            raise ValueError(f"Price feed file {path} holds no valid feed addresses")

        Logger.info(f"[REGISTRY] Loaded {len(registry)} price feeds from {path.name}")
        return registry

    def lookup(self, symbol: str) -> Optional[Pubkey]:
        return self._feeds.get(symbol)

    def symbols(self) -> List[str]:
        return sorted(self._feeds)

    def items(self):
        return sorted(self._feeds.items())

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._feeds

    def __len__(self) -> int:
        return len(self._feeds)
