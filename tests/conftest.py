"""
Feed Updater Test Configuration
===============================
Shared fixtures and pytest markers for the test suite.
"""

import pytest
import os
import sys
import tempfile

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Keep test runs out of the real log directory and off the console
os.environ.setdefault("FEED_UPDATER_LOG_DIR", tempfile.mkdtemp(prefix="feed_updater_logs_"))
os.environ.setdefault("SILENT_MODE", "true")


# ============================================================================
# PYTEST MARKERS
# ============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "network: marks tests that require network access"
    )
    config.addinivalue_line(
        "markers", "integration: marks integration tests"
    )


# ============================================================================
# SHARED FIXTURES
# ============================================================================

@pytest.fixture
def keypair():
    from solders.keypair import Keypair
    return Keypair()


@pytest.fixture
def credential(keypair):
    from feed_updater.execution.wallet import KeypairCredential
    return KeypairCredential(keypair)


@pytest.fixture
def program_id():
    from solders.pubkey import Pubkey
    return Pubkey.new_unique()


@pytest.fixture
def feed_addresses():
    """Symbol -> address strings, as written by the feed program's test run."""
    from solders.pubkey import Pubkey
    return {
        "BTC/USD": str(Pubkey.new_unique()),
        "ETH/USD": str(Pubkey.new_unique()),
        "SOL/USD": str(Pubkey.new_unique()),
    }


@pytest.fixture
def registry(feed_addresses):
    from feed_updater.shared.infrastructure.feed_registry import FeedRegistry
    return FeedRegistry.from_mapping(feed_addresses)


@pytest.fixture
def feeds_file(tmp_path, feed_addresses):
    import json
    path = tmp_path / "mockPriceFeeds.json"
    path.write_text(json.dumps(feed_addresses))
    return path


@pytest.fixture
def fast_policy():
    """Retry policy with no inter-attempt delay."""
    from feed_updater.execution.transaction_submitter import RetryPolicy
    return RetryPolicy(max_attempts=3, inter_attempt_delay_s=0.0, commitment="confirmed")
