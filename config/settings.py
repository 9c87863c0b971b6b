import os
from dotenv import load_dotenv

# Load Environment Variables from project root .env
env_path = os.path.join(os.path.dirname(__file__), "../.env")
load_dotenv(env_path)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    # ═══════════════════════════════════════════════════════════════════
    # FEED UPDATER CONFIGURATION (env-based)
    # ═══════════════════════════════════════════════════════════════════

    # Console output (file log is always written)
    SILENT_MODE = _env_bool("SILENT_MODE", False)

    # Paths
    DATA_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../data"))
    PRICE_FEEDS_FILE = os.getenv(
        "PRICE_FEEDS_FILE", os.path.join(DATA_DIR, "mockPriceFeeds.json")
    )

    # RPC
    RPC_URL = os.getenv("RPC_URL", "http://127.0.0.1:8900")
    TX_COMMITMENT = os.getenv("TX_COMMITMENT", "confirmed")
    CONFIRM_POLL_INTERVAL_S = float(os.getenv("CONFIRM_POLL_INTERVAL_S", "0.5"))

    # Mock price feed program (Anchor program id from its IDL)
    FEED_PROGRAM_ID = os.getenv("FEED_PROGRAM_ID", "")

    # Fixed-point exponent used for every update (price × 10^8)
    PRICE_EXPONENT = int(os.getenv("PRICE_EXPONENT", "-8"))

    # ═══════════════════════════════════════════════════════════════════
    # COMPUTE BUDGET
    # ═══════════════════════════════════════════════════════════════════
    PRIORITY_FEE_MICRO_LAMPORTS = int(os.getenv("PRIORITY_FEE_MICRO_LAMPORTS", "10000"))
    COMPUTE_UNIT_LIMIT = int(os.getenv("COMPUTE_UNIT_LIMIT", "200000"))

    # ═══════════════════════════════════════════════════════════════════
    # SUBMISSION RETRY POLICY
    # ═══════════════════════════════════════════════════════════════════
    TX_MAX_ATTEMPTS = int(os.getenv("TX_MAX_ATTEMPTS", "3"))
    TX_RETRY_DELAY_S = float(os.getenv("TX_RETRY_DELAY_S", "2.0"))

    # A failed confirmation may still have changed state; see DESIGN.md
    RETRY_ON_CONFIRMATION_FAILURE = _env_bool("RETRY_ON_CONFIRMATION_FAILURE", True)

    # Authority / fee payer (never logged)
    SOLANA_PRIVATE_KEY = os.getenv("SOLANA_PRIVATE_KEY", "")
    SOLANA_KEYPAIR_PATH = os.getenv("SOLANA_KEYPAIR_PATH", "")

    @staticmethod
    def retry_policy():
        """Build the frozen RetryPolicy from the current settings."""
        from feed_updater.execution.transaction_submitter import RetryPolicy

        return RetryPolicy(
            max_attempts=Settings.TX_MAX_ATTEMPTS,
            inter_attempt_delay_s=Settings.TX_RETRY_DELAY_S,
            commitment=Settings.TX_COMMITMENT,
            retry_on_confirmation_failure=Settings.RETRY_ON_CONFIRMATION_FAILURE,
        )
