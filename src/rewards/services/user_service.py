"""Domain logic for employee accounts."""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple
from uuid import UUID

from ..core.config import get_settings
from ..core.errors import ConflictError
from ..core.unit_of_work import UnitOfWork
from ..models import User
from ..utils.validation import normalize_email, normalize_employee_id, validate_page
from .guards import ensure_user

logger = logging.getLogger(__name__)


def _ensure_unique(
    uow: UnitOfWork,
    *,
    email: Optional[str] = None,
    employee_id: Optional[str] = None,
    exclude: Optional[UUID] = None,
) -> None:
    if email is not None:
        existing = uow.users.get_by_email(email)
        if existing is not None and existing.user_id != exclude:
            raise ConflictError("A user with this email already exists.")
    if employee_id is not None:
        existing = uow.users.get_by_employee_id(employee_id)
        if existing is not None and existing.user_id != exclude:
            raise ConflictError("A user with this employee ID already exists.")


def create_user(uow: UnitOfWork, *, name: str, email: str, employee_id: str) -> User:
    """Create an account with a zero balance; e-mail and employee id must be unique."""

    email = normalize_email(email)
    employee_id = normalize_employee_id(employee_id)
    user = User(name=name, email=email, employee_id=employee_id)

    _ensure_unique(uow, email=email, employee_id=employee_id)

    uow.users.add(user)
    uow.commit()

    logger.info("user %s created (%s)", user.user_id, user.email)
    return user


def provision_user(uow: UnitOfWork, *, name: str, email: str, employee_id: str) -> User:
    """Return the account matching the e-mail or employee id, creating it when absent."""

    email = normalize_email(email)
    employee_id = normalize_employee_id(employee_id)

    existing = uow.users.get_by_email(email) or uow.users.get_by_employee_id(employee_id)
    if existing is not None:
        return existing
    return create_user(uow, name=name, email=email, employee_id=employee_id)


def get_user(uow: UnitOfWork, *, user_id: UUID) -> User:
    return ensure_user(uow, user_id)


def list_users(
    uow: UnitOfWork,
    *,
    skip: int = 0,
    take: Optional[int] = None,
    is_active: Optional[bool] = None,
    search: Optional[str] = None,
) -> Tuple[Sequence[User], int]:
    settings = get_settings()
    take = take if take is not None else settings.default_page_size
    validate_page(skip, take, settings.max_page_size)

    search = search.strip() if search and search.strip() else None
    users = uow.users.list(skip=skip, take=take, is_active=is_active, search=search)
    total = uow.users.count(is_active=is_active, search=search)
    return users, total


def update_user(
    uow: UnitOfWork,
    *,
    user_id: UUID,
    name: Optional[str] = None,
    email: Optional[str] = None,
    employee_id: Optional[str] = None,
    is_active: Optional[bool] = None,
) -> User:
    """Patch profile fields; omitted fields keep their value."""

    user = ensure_user(uow, user_id, for_update=True)

    email = normalize_email(email) if email is not None else None
    employee_id = normalize_employee_id(employee_id) if employee_id is not None else None
    _ensure_unique(uow, email=email, employee_id=employee_id, exclude=user.user_id)

    if name is not None:
        user.rename(name)
    if email is not None and email != user.email:
        user.change_email(email)
    if employee_id is not None and employee_id != user.employee_id:
        user.change_employee_id(employee_id)
    if is_active is True and not user.is_active:
        user.activate()
    elif is_active is False and user.is_active:
        user.deactivate()

    uow.users.update(user)
    uow.commit()

    logger.info("user %s updated", user_id)
    return user


def activate_user(uow: UnitOfWork, *, user_id: UUID) -> User:
    return update_user(uow, user_id=user_id, is_active=True)


def deactivate_user(uow: UnitOfWork, *, user_id: UUID) -> User:
    return update_user(uow, user_id=user_id, is_active=False)
