"""Stores resolving aggregates by identifier within one session."""

from .event_store import EventStore
from .ledger_entry_store import LedgerEntryStore
from .product_store import ProductStore
from .redemption_request_store import RedemptionRequestStore
from .user_store import UserStore

__all__ = [
    "EventStore",
    "LedgerEntryStore",
    "ProductStore",
    "RedemptionRequestStore",
    "UserStore",
]
