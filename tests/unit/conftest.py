"""
Unit Test Configuration
=======================
Fixtures for pure logic tests - NO I/O ALLOWED.

All unit tests should be completely isolated from:
- Network (RPC, HTTP)
- File system (except tmp_path)
"""

import pytest

from tests.mocks import MockLedgerRpc


# ============================================================================
# AUTOUSE: ENFORCE I/O ISOLATION
# ============================================================================


@pytest.fixture(autouse=True)
def isolate_unit_tests(monkeypatch):
    """
    Automatically disable all network I/O for unit tests.
    Any test that accidentally tries to make a network call will fail.
    """
    def block_network(*args, **kwargs):
        raise RuntimeError(
            "Network I/O detected in unit test! "
            "Unit tests must be pure logic with no external dependencies. "
            "Use integration tests for network-dependent code."
        )

    # solana-py's AsyncClient goes through httpx
    monkeypatch.setattr("httpx.AsyncClient.get", block_network)
    monkeypatch.setattr("httpx.AsyncClient.post", block_network)
    monkeypatch.setattr("httpx.AsyncClient.send", block_network)


@pytest.fixture(autouse=True)
def no_credential_env(monkeypatch):
    """Keep a developer's real signing key out of unit tests."""
    monkeypatch.delenv("SOLANA_PRIVATE_KEY", raising=False)
    monkeypatch.delenv("SOLANA_KEYPAIR_PATH", raising=False)


# ============================================================================
# SUBMISSION FIXTURES
# ============================================================================


@pytest.fixture
def mock_rpc():
    """Ledger RPC that succeeds on every attempt."""
    return MockLedgerRpc()


@pytest.fixture
def transient_errors():
    """Retryable failures as the RPC layer surfaces them."""
    return {
        "blockhash": Exception("Transaction simulation failed: Blockhash not found"),
        "node_behind": Exception("RPC error: Node is behind by 42 slots"),
        "timeout": TimeoutError("Request timed out"),
    }


@pytest.fixture
def rpc_transport_error():
    """SolanaRpcException as solana-py raises it: empty str(), httpx error as __cause__."""
    import httpx
    from solana.exceptions import SolanaRpcException

    async def make_request(provider, body):
        pass

    cause = httpx.ConnectError("All connection attempts failed")
    error = SolanaRpcException(cause, make_request, None, object())
    error.__cause__ = cause
    return error
