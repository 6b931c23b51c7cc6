"""Append-only ledger entry persistence."""

from __future__ import annotations

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..models import LedgerEntry


class LedgerEntryStore:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entry: LedgerEntry) -> None:
        self.session.add(entry)

    def list_by_user(self, user_id: UUID, *, skip: int = 0, take: int = 25) -> Sequence[LedgerEntry]:
        """Most recent first; identical timestamps fall back to id order."""

        stmt = (
            select(LedgerEntry)
            .where(LedgerEntry.user_id == user_id)
            .order_by(LedgerEntry.timestamp.desc(), LedgerEntry.entry_id.asc())
            .offset(skip)
            .limit(take)
        )
        return self.session.execute(stmt).scalars().all()

    def count_by_user(self, user_id: UUID) -> int:
        stmt = select(func.count(LedgerEntry.entry_id)).where(LedgerEntry.user_id == user_id)
        return self.session.execute(stmt).scalar_one()
