"""Feed Updater - push prices to a mock Solana price feed program."""

__version__ = "0.1.0"
