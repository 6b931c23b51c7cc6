"""Domain logic for point balances and the earn ledger."""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple
from uuid import UUID

from ..core.admin_registry import AdminRegistry
from ..core.config import get_settings
from ..core.errors import InvalidStateError
from ..core.unit_of_work import UnitOfWork
from ..models import LedgerEntry, PointsBalance, User
from ..utils.validation import require_positive, validate_page
from .guards import ensure_active_admin, ensure_active_user, ensure_event, ensure_user

logger = logging.getLogger(__name__)

_INACTIVE = "Points cannot be allocated to an inactive user account."


def credit_points(uow: UnitOfWork, *, user_id: UUID, points: int) -> User:
    """Add points to an active user's total."""

    require_positive(points, "Credit points must be a positive number.")
    user = ensure_active_user(uow, user_id, for_update=True, message=_INACTIVE)
    user.credit_points(points)
    uow.users.update(user)
    uow.commit()
    logger.info("credited %s points to user %s", points, user_id)
    return user


def reserve_points(uow: UnitOfWork, *, user_id: UUID, points: int) -> User:
    require_positive(points, "Points to lock must be positive.")
    user = ensure_active_user(uow, user_id, for_update=True, message="Inactive users cannot lock points.")
    user.reserve_points(points)
    uow.users.update(user)
    uow.commit()
    return user


def release_points(uow: UnitOfWork, *, user_id: UUID, points: int) -> User:
    require_positive(points, "Points to unlock must be positive.")
    user = ensure_active_user(uow, user_id, for_update=True, message="Inactive users cannot unlock points.")
    user.release_points(points)
    uow.users.update(user)
    uow.commit()
    return user


def capture_points(uow: UnitOfWork, *, user_id: UUID, points: int) -> User:
    require_positive(points, "Points to commit must be positive.")
    user = ensure_active_user(uow, user_id, for_update=True, message="Inactive users cannot commit points.")
    user.capture_points(points)
    uow.users.update(user)
    uow.commit()
    return user


def get_balance(uow: UnitOfWork, *, user_id: UUID) -> PointsBalance:
    """Return ``(total, locked, available)`` without mutating anything."""

    return ensure_user(uow, user_id).get_balance()


def allocate_event_points(
    uow: UnitOfWork,
    registry: AdminRegistry,
    *,
    admin_id: UUID,
    user_id: UUID,
    event_id: UUID,
    points: int,
) -> LedgerEntry:
    """Credit points earned at an event and record the matching Earn entry."""

    ensure_active_admin(uow, registry, admin_id)
    require_positive(points, "Points must be a positive amount.")

    user = ensure_user(uow, user_id, for_update=True, message="Cannot allocate points to a non-existent user.")
    event = ensure_event(uow, event_id, message="Cannot allocate points for a non-existent event.")
    if not user.is_active:
        raise InvalidStateError(_INACTIVE)
    if not event.is_active:
        raise InvalidStateError("Points cannot be allocated for an inactive event.")

    user.credit_points(points)
    entry = LedgerEntry.earn(user_id=user.user_id, event_id=event.event_id, points=points)
    uow.ledger.add(entry)
    uow.users.update(user)
    uow.commit()

    logger.info("allocated %s points to user %s for event %s", points, user_id, event_id)
    return entry


def get_ledger_history(
    uow: UnitOfWork,
    *,
    user_id: UUID,
    skip: int = 0,
    take: Optional[int] = None,
) -> Tuple[Sequence[LedgerEntry], int]:
    """Return one page of a user's ledger, most recent first, and the total count."""

    settings = get_settings()
    take = take if take is not None else settings.default_page_size
    validate_page(skip, take, settings.max_page_size)

    ensure_user(uow, user_id, message="Cannot fetch history for a non-existent user.")
    entries = uow.ledger.list_by_user(user_id, skip=skip, take=take)
    total = uow.ledger.count_by_user(user_id)
    return entries, total
