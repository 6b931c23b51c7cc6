"""Public schema exports."""

from .admin import AdminIdentifierCreate, AdminIdentifiers
from .event import EventCreate, EventRead, EventUpdate
from .leaderboard import LeaderboardEmployee
from .points import EarnPointsCreate, LedgerEntryRead, LedgerPage, PointsAmount
from .product import ProductCreate, ProductRead, ProductUpdate, RestockRequest
from .redemption import RedemptionCreate, RedemptionRead
from .user import BalanceRead, UserCreate, UserPage, UserRead, UserUpdate

__all__ = [
	"AdminIdentifierCreate",
	"AdminIdentifiers",
	"BalanceRead",
	"EarnPointsCreate",
	"EventCreate",
	"EventRead",
	"EventUpdate",
	"LeaderboardEmployee",
	"LedgerEntryRead",
	"LedgerPage",
	"PointsAmount",
	"ProductCreate",
	"ProductRead",
	"ProductUpdate",
	"RedemptionCreate",
	"RedemptionRead",
	"RestockRequest",
	"UserCreate",
	"UserPage",
	"UserRead",
	"UserUpdate",
]
