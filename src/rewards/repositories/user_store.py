"""User persistence."""

from __future__ import annotations

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from ..models import User


class UserStore:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: UUID) -> Optional[User]:
        return self.session.get(User, user_id)

    def get_for_update(self, user_id: UUID) -> Optional[User]:
        stmt = (
            select(User)
            .where(User.user_id == user_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email.strip().lower())
        return self.session.execute(stmt).scalar_one_or_none()

    def get_by_employee_id(self, employee_id: str) -> Optional[User]:
        stmt = select(User).where(User.employee_id == employee_id.strip())
        return self.session.execute(stmt).scalar_one_or_none()

    def _filtered(self, stmt, *, is_active: Optional[bool], search: Optional[str]):
        if is_active is not None:
            stmt = stmt.where(User.is_active.is_(is_active))
        if search:
            pattern = f"%{search.strip().lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(User.name).like(pattern),
                    func.lower(User.email).like(pattern),
                    func.lower(User.employee_id).like(pattern),
                )
            )
        return stmt

    def list(
        self,
        *,
        skip: int = 0,
        take: Optional[int] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> Sequence[User]:
        stmt = self._filtered(select(User), is_active=is_active, search=search)
        stmt = stmt.order_by(User.name.asc(), User.user_id.asc()).offset(skip)
        if take is not None:
            stmt = stmt.limit(take)
        return self.session.execute(stmt).scalars().all()

    def count(self, *, is_active: Optional[bool] = None, search: Optional[str] = None) -> int:
        stmt = self._filtered(select(func.count(User.user_id)), is_active=is_active, search=search)
        return self.session.execute(stmt).scalar_one()

    def top_by_total_points(self, *, only_active: bool = True) -> Sequence[User]:
        """Users ordered by total points descending, ties broken by id."""

        stmt = select(User).order_by(User.total_points.desc(), User.user_id.asc())
        if only_active:
            stmt = stmt.where(User.is_active.is_(True))
        return self.session.execute(stmt).scalars().all()

    def add(self, user: User) -> None:
        self.session.add(user)

    def update(self, user: User) -> None:
        # Loaded users are tracked; merge covers detached instances.
        if user not in self.session:
            self.session.merge(user)
