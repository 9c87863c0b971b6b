"""
Feed Updater - CLI Entrypoint
=============================
Push a new price to a mock Solana price feed account.

Commands:
    python main.py update SOL/USD 123.45
    python main.py update BTC/USD 64000.5 --max-attempts 5
    python main.py feeds
    python main.py encode 123.45
"""

import asyncio
import sys

from feed_updater.interface.cli import main


if __name__ == "__main__":
    # Windows async event loop fix
    if sys.platform == 'win32':
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

    main()
