"""Request-scoped dependencies shared by the routers."""

from typing import Generator, Optional
from uuid import UUID

from fastapi import Header

from ..core.admin_registry import AdminRegistry, get_admin_registry
from ..core.unit_of_work import UnitOfWork


def get_uow() -> Generator[UnitOfWork, None, None]:
    """Yield a unit of work for request lifetime."""

    with UnitOfWork() as uow:
        yield uow


def get_registry() -> AdminRegistry:
    return get_admin_registry()


def get_admin_id(x_admin_id: Optional[UUID] = Header(None, description="Id of the acting administrator")) -> Optional[UUID]:
    return x_admin_id
