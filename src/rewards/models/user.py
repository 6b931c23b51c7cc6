"""User aggregate: identity plus the points balance it exclusively owns."""

from __future__ import annotations

import uuid
from typing import NamedTuple

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import validates

from ..core.database import Base
from ..core.errors import InsufficientFundsError, InvalidStateError
from ..utils.datetime import advance, utcnow
from ..utils.validation import (
    checked_add,
    normalize_email,
    normalize_employee_id,
    require_positive,
    require_text,
)


class PointsBalance(NamedTuple):
    """Read-only snapshot of a user's balance."""

    total: int
    locked: int
    available: int


class User(Base):
    """An employee holding points.

    Invariant: ``0 <= locked_points <= total_points``. Balance fields change
    only through :meth:`credit_points`, :meth:`reserve_points`,
    :meth:`release_points` and :meth:`capture_points`.
    """

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("email", name="users_email_unique"),
        UniqueConstraint("employee_id", name="users_employee_id_unique"),
        CheckConstraint(
            "total_points >= 0 AND locked_points >= 0 AND total_points >= locked_points",
            name="users_points_state",
        ),
    )

    user_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=False)
    employee_id = Column(String(50), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    total_points = Column(Integer, nullable=False, default=0)
    locked_points = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    def __init__(self, **kwargs) -> None:
        kwargs.setdefault("user_id", uuid.uuid4())
        kwargs.setdefault("is_active", True)
        kwargs.setdefault("total_points", 0)
        kwargs.setdefault("locked_points", 0)
        now = utcnow()
        kwargs.setdefault("created_at", now)
        kwargs.setdefault("updated_at", kwargs["created_at"])
        if kwargs["total_points"] < 0 or kwargs["locked_points"] < 0 or kwargs["locked_points"] > kwargs["total_points"]:
            raise InvalidStateError(
                "Invalid points state. Total points cannot be less than locked points."
            )
        if kwargs["updated_at"] < kwargs["created_at"]:
            raise InvalidStateError("Updated timestamp cannot be earlier than created timestamp.")
        super().__init__(**kwargs)

    @validates("name")
    def _validate_name(self, key, value):
        return require_text(value, "Name is required.")

    @validates("email")
    def _validate_email(self, key, value):
        return normalize_email(value)

    @validates("employee_id")
    def _validate_employee_id(self, key, value):
        return normalize_employee_id(value)

    @property
    def available_points(self) -> int:
        return self.total_points - self.locked_points

    def get_balance(self) -> PointsBalance:
        return PointsBalance(self.total_points, self.locked_points, self.available_points)

    def touch(self) -> None:
        """Advance ``updated_at`` strictly past its previous value."""

        self.updated_at = advance(self.updated_at)

    # Profile

    def rename(self, name: str) -> None:
        self.name = name
        self.touch()

    def change_email(self, email: str) -> None:
        self.email = email
        self.touch()

    def change_employee_id(self, employee_id: str) -> None:
        self.employee_id = employee_id
        self.touch()

    def activate(self) -> None:
        self.is_active = True
        self.touch()

    def deactivate(self) -> None:
        self.is_active = False
        self.touch()

    # Balance ledger

    def credit_points(self, amount: int) -> None:
        require_positive(amount, "Credit points must be a positive number.")
        self.total_points = checked_add(
            self.total_points, amount, "Crediting these points would overflow the balance."
        )
        self.touch()

    def reserve_points(self, amount: int) -> None:
        require_positive(amount, "Points to lock must be positive.")
        self.ensure_can_reserve(amount)
        self.locked_points += amount
        self.touch()

    def ensure_can_reserve(self, amount: int) -> None:
        if self.available_points < amount:
            raise InsufficientFundsError("Insufficient available points to lock.")

    def release_points(self, amount: int) -> None:
        require_positive(amount, "Points to unlock must be positive.")
        if self.locked_points < amount:
            raise InvalidStateError("Cannot unlock more points than are locked.")
        self.locked_points -= amount
        self.touch()

    def capture_points(self, amount: int) -> None:
        """Spend previously reserved points, removing them from the total."""

        require_positive(amount, "Points to commit must be positive.")
        if self.locked_points < amount:
            raise InvalidStateError("Cannot commit more points than are locked.")
        self.total_points -= amount
        self.locked_points -= amount
        self.touch()

    def __repr__(self) -> str:
        return (
            f"<User {self.user_id} {self.email!r} total={self.total_points} "
            f"locked={self.locked_points} active={self.is_active}>"
        )
