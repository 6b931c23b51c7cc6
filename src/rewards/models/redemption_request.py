"""Redemption request state machine."""

import enum
import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, Enum as SAEnum, ForeignKey, Index, Integer, Uuid

from ..core.database import Base
from ..core.errors import InvalidStateError
from ..utils.datetime import utcnow
from ..utils.validation import require_positive


class RedemptionStatus(str, enum.Enum):
    """Possible redemption request states."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    DELIVERED = "DELIVERED"
    REJECTED = "REJECTED"
    CANCELED = "CANCELED"

    @property
    def is_terminal(self) -> bool:
        return self in (RedemptionStatus.DELIVERED, RedemptionStatus.REJECTED, RedemptionStatus.CANCELED)


class RedemptionRequest(Base):
    """A user's request to exchange points for a product.

    Pending -> Approved -> Delivered, or Pending -> Rejected | Canceled.
    Users and products are referenced by id only. ``points_reserved`` is the
    product cost locked on the user when the request was made; delivery
    captures and rejection releases exactly that amount.
    """

    __tablename__ = "redemption_requests"
    __table_args__ = (
        Index("redemption_requests_user_product_status", "user_id", "product_id", "status"),
        CheckConstraint("points_reserved > 0", name="redemption_requests_points_positive"),
    )

    request_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.user_id", ondelete="RESTRICT"), nullable=False)
    product_id = Column(Uuid(as_uuid=True), nullable=False)
    status = Column(
        SAEnum(RedemptionStatus, name="redemption_status"),
        nullable=False,
        default=RedemptionStatus.PENDING,
    )
    points_reserved = Column(Integer, nullable=False)
    requested_at = Column(DateTime, nullable=False, default=utcnow)
    approved_at = Column(DateTime)
    delivered_at = Column(DateTime)
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    def __init__(self, **kwargs) -> None:
        kwargs.setdefault("request_id", uuid.uuid4())
        require_positive(kwargs.get("points_reserved"), "Reserved points must be a positive number.")
        kwargs.setdefault("status", RedemptionStatus.PENDING)
        kwargs.setdefault("requested_at", utcnow())
        super().__init__(**kwargs)

    def _require(self, expected: RedemptionStatus, message: str) -> None:
        if self.status != expected:
            raise InvalidStateError(message)

    def ensure_can_approve(self) -> None:
        self._require(RedemptionStatus.PENDING, "Only a 'Pending' redemption request can be approved.")

    def ensure_can_deliver(self) -> None:
        self._require(RedemptionStatus.APPROVED, "Only an 'Approved' redemption request can be delivered.")

    def ensure_can_reject(self) -> None:
        self._require(RedemptionStatus.PENDING, "Only a 'Pending' redemption request can be rejected.")

    def ensure_can_cancel(self) -> None:
        self._require(RedemptionStatus.PENDING, "Only a 'Pending' redemption request can be canceled.")

    def approve(self) -> None:
        self.ensure_can_approve()
        self.status = RedemptionStatus.APPROVED
        self.approved_at = utcnow()

    def deliver(self) -> None:
        self.ensure_can_deliver()
        self.status = RedemptionStatus.DELIVERED
        self.delivered_at = utcnow()

    def reject(self) -> None:
        self.ensure_can_reject()
        self.status = RedemptionStatus.REJECTED

    def cancel(self) -> None:
        self.ensure_can_cancel()
        self.status = RedemptionStatus.CANCELED

    def __repr__(self) -> str:
        return f"<RedemptionRequest {self.request_id} user={self.user_id} status={self.status.value}>"
