"""SQLAlchemy models for the rewards service."""

from .event import Event
from .ledger_entry import LedgerEntry, LedgerEntryType
from .product import Product
from .redemption_request import RedemptionRequest, RedemptionStatus
from .user import PointsBalance, User

__all__ = [
    "Event",
    "LedgerEntry",
    "LedgerEntryType",
    "PointsBalance",
    "Product",
    "RedemptionRequest",
    "RedemptionStatus",
    "User",
]
