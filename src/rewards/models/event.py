"""Company event that points are earned for."""

import uuid

from sqlalchemy import Boolean, Column, DateTime, String, Uuid
from sqlalchemy.orm import validates

from ..core.database import Base
from ..core.errors import ValidationError
from ..utils.datetime import is_default_timestamp, to_naive_utc
from ..utils.validation import require_text


class Event(Base):
    """Hackathons, town halls and similar occasions that drive Earn entries."""

    __tablename__ = "events"

    event_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    occurs_at = Column(DateTime, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)

    def __init__(self, **kwargs) -> None:
        kwargs.setdefault("event_id", uuid.uuid4())
        kwargs.setdefault("is_active", True)
        if kwargs.get("occurs_at") is None:
            raise ValidationError("Event occurrence timestamp is required.")
        super().__init__(**kwargs)

    @validates("name")
    def _validate_name(self, key, value):
        return require_text(value, "Event name is required.")

    @validates("occurs_at")
    def _validate_occurs_at(self, key, value):
        if is_default_timestamp(value):
            raise ValidationError("Event occurrence timestamp is required.")
        return to_naive_utc(value)

    def rename(self, name: str) -> None:
        self.name = name

    def reschedule(self, occurs_at) -> None:
        self.occurs_at = occurs_at

    def activate(self) -> None:
        self.is_active = True

    def deactivate(self) -> None:
        self.is_active = False

    def __repr__(self) -> str:
        return f"<Event {self.event_id} {self.name!r} at {self.occurs_at:%Y-%m-%d %H:%M} active={self.is_active}>"
