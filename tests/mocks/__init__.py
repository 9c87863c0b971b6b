"""
Feed Updater Test Mocks
=======================
Reusable mock classes for isolated testing.
"""

from tests.mocks.mock_rpc import MockLedgerRpc

__all__ = [
    "MockLedgerRpc",
]
