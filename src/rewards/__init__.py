"""Employee rewards points ledger and redemption workflow."""

__version__ = "0.1.0"
