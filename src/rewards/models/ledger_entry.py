"""Append-only ledger of completed point movements."""

import enum
import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, Enum as SAEnum, ForeignKey, Index, Integer, Uuid, event as sa_event

from ..core.database import Base
from ..core.errors import InvalidStateError, ValidationError
from ..utils.datetime import utcnow
from ..utils.validation import require_positive


class LedgerEntryType(str, enum.Enum):
    """Ledger event classification."""

    EARN = "EARN"
    REDEEM = "REDEEM"


class LedgerEntry(Base):
    """Immutable record linked to exactly one cause: an event or a redemption request."""

    __tablename__ = "ledger_entries"
    __table_args__ = (
        CheckConstraint("points > 0", name="ledger_entries_points_positive"),
        CheckConstraint(
            "(entry_type = 'EARN' AND event_id IS NOT NULL AND redemption_request_id IS NULL) "
            "OR (entry_type = 'REDEEM' AND redemption_request_id IS NOT NULL AND event_id IS NULL)",
            name="ledger_entries_single_cause",
        ),
        Index("ledger_entries_user_timestamp", "user_id", "timestamp"),
    )

    entry_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.user_id", ondelete="RESTRICT"), nullable=False)
    entry_type = Column(SAEnum(LedgerEntryType, name="ledger_entry_type"), nullable=False)
    points = Column(Integer, nullable=False)
    timestamp = Column(DateTime, nullable=False, default=utcnow)
    event_id = Column(Uuid(as_uuid=True), ForeignKey("events.event_id", ondelete="RESTRICT"))
    redemption_request_id = Column(
        Uuid(as_uuid=True), ForeignKey("redemption_requests.request_id", ondelete="RESTRICT")
    )

    def __init__(self, **kwargs) -> None:
        kwargs.setdefault("entry_id", uuid.uuid4())
        kwargs.setdefault("timestamp", utcnow())
        if kwargs.get("user_id") is None:
            raise ValidationError("UserId is required for a transaction.")
        require_positive(kwargs.get("points"), "Transaction points must be a positive number.")

        entry_type = kwargs.get("entry_type")
        event_id = kwargs.get("event_id")
        redemption_request_id = kwargs.get("redemption_request_id")
        if entry_type == LedgerEntryType.EARN:
            if event_id is None:
                raise ValidationError("'Earn' transaction must be linked to an event.")
            if redemption_request_id is not None:
                raise ValidationError("'Earn' transaction cannot reference a redemption request.")
        elif entry_type == LedgerEntryType.REDEEM:
            if redemption_request_id is None:
                raise ValidationError("'Redeem' transaction must be linked to a redemption request.")
            if event_id is not None:
                raise ValidationError("'Redeem' transaction cannot reference an event.")
        else:
            raise ValidationError("Unknown ledger entry type.")
        super().__init__(**kwargs)

    @classmethod
    def earn(cls, *, user_id, event_id, points: int, timestamp=None) -> "LedgerEntry":
        return cls(
            user_id=user_id,
            entry_type=LedgerEntryType.EARN,
            points=points,
            event_id=event_id,
            timestamp=timestamp or utcnow(),
        )

    @classmethod
    def redeem(cls, *, user_id, redemption_request_id, points: int, timestamp=None) -> "LedgerEntry":
        return cls(
            user_id=user_id,
            entry_type=LedgerEntryType.REDEEM,
            points=points,
            redemption_request_id=redemption_request_id,
            timestamp=timestamp or utcnow(),
        )

    def __repr__(self) -> str:
        return f"<LedgerEntry {self.entry_id} user={self.user_id} {self.entry_type.value} {self.points} pts>"


@sa_event.listens_for(LedgerEntry, "before_update")
def _reject_ledger_update(mapper, connection, target) -> None:
    raise InvalidStateError("Ledger entries are append-only.")
