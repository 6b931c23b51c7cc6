"""Shared lookups and guards used by the use cases."""

from __future__ import annotations

from uuid import UUID

from ..core.admin_registry import AdminRegistry
from ..core.errors import AuthorizationError, InvalidStateError, NotFoundError
from ..core.unit_of_work import UnitOfWork
from ..models import Event, Product, RedemptionRequest, User


def ensure_active_admin(uow: UnitOfWork, registry: AdminRegistry, admin_id: UUID | None) -> User:
    """Resolve the acting admin, who must exist, be registered and be active."""

    admin = uow.users.get(admin_id) if admin_id is not None else None
    if admin is None or not registry.is_admin(admin.email, admin.employee_id):
        raise AuthorizationError("Only an administrator can perform this action.")
    if not admin.is_active:
        raise AuthorizationError("Administrator account is inactive.")
    return admin


def ensure_user(uow: UnitOfWork, user_id: UUID, *, for_update: bool = False, message: str = "User not found.") -> User:
    user = uow.users.get_for_update(user_id) if for_update else uow.users.get(user_id)
    if user is None:
        raise NotFoundError(message)
    return user


def ensure_active_user(uow: UnitOfWork, user_id: UUID, *, for_update: bool = False, message: str) -> User:
    user = ensure_user(uow, user_id, for_update=for_update)
    if not user.is_active:
        raise InvalidStateError(message)
    return user


def ensure_product(
    uow: UnitOfWork, product_id: UUID, *, for_update: bool = False, message: str = "Product not found."
) -> Product:
    product = uow.products.get_for_update(product_id) if for_update else uow.products.get(product_id)
    if product is None:
        raise NotFoundError(message)
    return product


def ensure_event(uow: UnitOfWork, event_id: UUID, message: str = "Event not found.") -> Event:
    event = uow.events.get(event_id)
    if event is None:
        raise NotFoundError(message)
    return event


def ensure_redemption(uow: UnitOfWork, request_id: UUID, *, for_update: bool = False) -> RedemptionRequest:
    request = uow.redemptions.get_for_update(request_id) if for_update else uow.redemptions.get(request_id)
    if request is None:
        raise NotFoundError("Redemption request not found.")
    return request
