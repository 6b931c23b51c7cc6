"""Domain logic for product redemption requests.

Points are reserved when a request is made, captured when it is delivered
and released when it is rejected or canceled. Every guard runs before the
first mutation, so a failed use case leaves request, balance and stock as
they were.
"""

from __future__ import annotations

import logging
from typing import Sequence
from uuid import UUID

from ..core.admin_registry import AdminRegistry
from ..core.errors import InsufficientStockError, InvalidStateError
from ..core.unit_of_work import UnitOfWork
from ..models import LedgerEntry, RedemptionRequest
from .guards import ensure_active_admin, ensure_product, ensure_redemption, ensure_user

logger = logging.getLogger(__name__)


def request_redemption(uow: UnitOfWork, *, user_id: UUID, product_id: UUID) -> RedemptionRequest:
    """Reserve the product's cost on the user and open a Pending request."""

    user = ensure_user(uow, user_id, for_update=True)
    if not user.is_active:
        raise InvalidStateError("Inactive users cannot request redemptions.")

    product = ensure_product(uow, product_id, for_update=True)
    if not product.is_active:
        raise InvalidStateError("Cannot redeem an inactive product.")

    user.ensure_can_reserve(product.points_cost)

    if uow.redemptions.has_pending_for(user.user_id, product.product_id):
        raise InvalidStateError("A pending redemption request for this product already exists.")

    user.reserve_points(product.points_cost)
    redemption = RedemptionRequest(
        user_id=user.user_id,
        product_id=product.product_id,
        points_reserved=product.points_cost,
    )
    uow.redemptions.add(redemption)
    uow.users.update(user)
    uow.commit()

    logger.info(
        "redemption %s requested by user %s for product %s (%s points reserved)",
        redemption.request_id,
        user_id,
        product_id,
        product.points_cost,
    )
    return redemption


def approve_redemption(
    uow: UnitOfWork,
    registry: AdminRegistry,
    *,
    admin_id: UUID,
    request_id: UUID,
) -> RedemptionRequest:
    ensure_active_admin(uow, registry, admin_id)
    redemption = ensure_redemption(uow, request_id, for_update=True)

    redemption.approve()
    uow.redemptions.update(redemption)
    uow.commit()

    logger.info("redemption %s approved by admin %s", request_id, admin_id)
    return redemption


def deliver_redemption(
    uow: UnitOfWork,
    registry: AdminRegistry,
    *,
    admin_id: UUID,
    request_id: UUID,
) -> RedemptionRequest:
    """Capture the reserved points, take one unit of stock and log a Redeem entry."""

    ensure_active_admin(uow, registry, admin_id)
    redemption = ensure_redemption(uow, request_id, for_update=True)
    redemption.ensure_can_deliver()

    user = ensure_user(
        uow, redemption.user_id, for_update=True, message="User associated with redemption not found."
    )
    product = ensure_product(
        uow, redemption.product_id, for_update=True, message="Product associated with redemption not found."
    )
    if not product.is_available():
        raise InsufficientStockError("Insufficient stock.")
    if user.locked_points < redemption.points_reserved:
        raise InvalidStateError("Cannot commit more points than are locked.")

    user.capture_points(redemption.points_reserved)
    product.decrement_stock()
    uow.ledger.add(
        LedgerEntry.redeem(
            user_id=user.user_id,
            redemption_request_id=redemption.request_id,
            points=redemption.points_reserved,
        )
    )
    redemption.deliver()

    uow.users.update(user)
    uow.products.update(product)
    uow.redemptions.update(redemption)
    uow.commit()

    logger.info(
        "redemption %s delivered by admin %s (%s points captured)",
        request_id,
        admin_id,
        redemption.points_reserved,
    )
    return redemption


def _release(uow: UnitOfWork, redemption: RedemptionRequest) -> None:
    user = ensure_user(uow, redemption.user_id, for_update=True)
    if user.locked_points < redemption.points_reserved:
        raise InvalidStateError("Cannot unlock more points than are locked.")
    user.release_points(redemption.points_reserved)
    uow.users.update(user)


def reject_redemption(
    uow: UnitOfWork,
    registry: AdminRegistry,
    *,
    admin_id: UUID,
    request_id: UUID,
) -> RedemptionRequest:
    """Return the reserved points to the user's available balance."""

    ensure_active_admin(uow, registry, admin_id)
    redemption = ensure_redemption(uow, request_id, for_update=True)
    redemption.ensure_can_reject()

    _release(uow, redemption)
    redemption.reject()
    uow.redemptions.update(redemption)
    uow.commit()

    logger.info("redemption %s rejected by admin %s", request_id, admin_id)
    return redemption


def cancel_redemption(
    uow: UnitOfWork,
    registry: AdminRegistry,
    *,
    admin_id: UUID,
    request_id: UUID,
) -> RedemptionRequest:
    """Withdraw a Pending request; same effect as rejecting, distinct final state."""

    ensure_active_admin(uow, registry, admin_id)
    redemption = ensure_redemption(uow, request_id, for_update=True)
    redemption.ensure_can_cancel()

    _release(uow, redemption)
    redemption.cancel()
    uow.redemptions.update(redemption)
    uow.commit()

    logger.info("redemption %s canceled by admin %s", request_id, admin_id)
    return redemption


def get_redemption(uow: UnitOfWork, *, request_id: UUID) -> RedemptionRequest:
    return ensure_redemption(uow, request_id)


def list_user_redemptions(uow: UnitOfWork, *, user_id: UUID) -> Sequence[RedemptionRequest]:
    ensure_user(uow, user_id)
    return uow.redemptions.list_by_user(user_id)
