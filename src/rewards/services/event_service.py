"""Domain logic for company events."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from ..core.admin_registry import AdminRegistry
from ..core.unit_of_work import UnitOfWork
from ..models import Event
from .guards import ensure_active_admin, ensure_event

logger = logging.getLogger(__name__)


def create_event(
    uow: UnitOfWork,
    registry: AdminRegistry,
    *,
    admin_id: UUID,
    name: str,
    occurs_at: datetime,
    is_active: bool = True,
) -> Event:
    ensure_active_admin(uow, registry, admin_id)

    event = Event(name=name, occurs_at=occurs_at, is_active=is_active)
    uow.events.add(event)
    uow.commit()

    logger.info("event %s created (%r)", event.event_id, event.name)
    return event


def update_event(
    uow: UnitOfWork,
    registry: AdminRegistry,
    *,
    admin_id: UUID,
    event_id: UUID,
    name: Optional[str] = None,
    occurs_at: Optional[datetime] = None,
) -> Event:
    """Rename and/or reschedule an event."""

    ensure_active_admin(uow, registry, admin_id)
    event = ensure_event(uow, event_id)

    if name is not None:
        event.rename(name)
    if occurs_at is not None:
        event.reschedule(occurs_at)

    uow.events.update(event)
    uow.commit()

    logger.info("event %s updated", event_id)
    return event


def set_event_active(
    uow: UnitOfWork,
    registry: AdminRegistry,
    *,
    admin_id: UUID,
    event_id: UUID,
    is_active: bool,
) -> Event:
    ensure_active_admin(uow, registry, admin_id)
    event = ensure_event(uow, event_id)

    if is_active:
        event.activate()
    else:
        event.deactivate()

    uow.events.update(event)
    uow.commit()

    logger.info("event %s %s", event_id, "activated" if is_active else "deactivated")
    return event


def activate_event(uow: UnitOfWork, registry: AdminRegistry, *, admin_id: UUID, event_id: UUID) -> Event:
    return set_event_active(uow, registry, admin_id=admin_id, event_id=event_id, is_active=True)


def deactivate_event(uow: UnitOfWork, registry: AdminRegistry, *, admin_id: UUID, event_id: UUID) -> Event:
    return set_event_active(uow, registry, admin_id=admin_id, event_id=event_id, is_active=False)


def get_event(uow: UnitOfWork, *, event_id: UUID) -> Event:
    return ensure_event(uow, event_id)


def list_events(uow: UnitOfWork, *, only_active: bool = True) -> Sequence[Event]:
    return uow.events.list(only_active=only_active)
