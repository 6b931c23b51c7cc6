"""Redemption request persistence."""

from __future__ import annotations

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import exists, select
from sqlalchemy.orm import Session

from ..models import RedemptionRequest, RedemptionStatus


class RedemptionRequestStore:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, request_id: UUID) -> Optional[RedemptionRequest]:
        return self.session.get(RedemptionRequest, request_id)

    def get_for_update(self, request_id: UUID) -> Optional[RedemptionRequest]:
        stmt = (
            select(RedemptionRequest)
            .where(RedemptionRequest.request_id == request_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def has_pending_for(self, user_id: UUID, product_id: UUID) -> bool:
        stmt = select(
            exists().where(
                RedemptionRequest.user_id == user_id,
                RedemptionRequest.product_id == product_id,
                RedemptionRequest.status == RedemptionStatus.PENDING,
            )
        )
        return bool(self.session.execute(stmt).scalar())

    def has_pending_for_product(self, product_id: UUID) -> bool:
        stmt = select(
            exists().where(
                RedemptionRequest.product_id == product_id,
                RedemptionRequest.status == RedemptionStatus.PENDING,
            )
        )
        return bool(self.session.execute(stmt).scalar())

    def list_by_user(self, user_id: UUID) -> Sequence[RedemptionRequest]:
        stmt = (
            select(RedemptionRequest)
            .where(RedemptionRequest.user_id == user_id)
            .order_by(RedemptionRequest.requested_at.desc(), RedemptionRequest.request_id.asc())
        )
        return self.session.execute(stmt).scalars().all()

    def add(self, request: RedemptionRequest) -> None:
        self.session.add(request)

    def update(self, request: RedemptionRequest) -> None:
        if request not in self.session:
            self.session.merge(request)
