"""Event persistence."""

from __future__ import annotations

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import Event


class EventStore:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, event_id: UUID) -> Optional[Event]:
        return self.session.get(Event, event_id)

    def list(self, *, only_active: bool = False) -> Sequence[Event]:
        stmt = select(Event).order_by(Event.occurs_at.desc(), Event.event_id.asc())
        if only_active:
            stmt = stmt.where(Event.is_active.is_(True))
        return self.session.execute(stmt).scalars().all()

    def add(self, event: Event) -> None:
        self.session.add(event)

    def update(self, event: Event) -> None:
        if event not in self.session:
            self.session.merge(event)
