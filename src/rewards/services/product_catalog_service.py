"""Domain logic for the reward catalog."""

from __future__ import annotations

import logging
from typing import Optional, Sequence
from uuid import UUID

from ..core.admin_registry import AdminRegistry
from ..core.errors import InvalidStateError
from ..core.unit_of_work import UnitOfWork
from ..models import Product
from .guards import ensure_active_admin, ensure_product

logger = logging.getLogger(__name__)


def create_product(
    uow: UnitOfWork,
    registry: AdminRegistry,
    *,
    admin_id: UUID,
    name: str,
    points_cost: int,
    stock: Optional[int] = None,
    description: Optional[str] = None,
    image_url: Optional[str] = None,
    is_active: bool = True,
) -> Product:
    ensure_active_admin(uow, registry, admin_id)

    product = Product(
        name=name,
        points_cost=points_cost,
        stock=stock,
        description=description,
        image_url=image_url,
        is_active=is_active,
    )
    uow.products.add(product)
    uow.commit()

    logger.info("product %s created (%r, %s points)", product.product_id, product.name, product.points_cost)
    return product


def update_product(
    uow: UnitOfWork,
    registry: AdminRegistry,
    *,
    admin_id: UUID,
    product_id: UUID,
    name: Optional[str] = None,
    points_cost: Optional[int] = None,
    stock: Optional[int] = None,
    clear_stock: bool = False,
    description: Optional[str] = None,
    image_url: Optional[str] = None,
    is_active: Optional[bool] = None,
) -> Product:
    """Patch a product; omitted fields keep their value.

    ``clear_stock`` switches the product to untracked (unlimited) stock.
    """

    ensure_active_admin(uow, registry, admin_id)
    product = ensure_product(uow, product_id, for_update=True)

    product.update_details(
        name=name if name is not None else product.name,
        points_cost=points_cost if points_cost is not None else product.points_cost,
        stock=None if clear_stock else (stock if stock is not None else product.stock),
        description=description if description is not None else product.description,
        image_url=image_url if image_url is not None else product.image_url,
    )
    if is_active is True:
        product.activate()
    elif is_active is False:
        product.deactivate()

    uow.products.update(product)
    uow.commit()

    logger.info("product %s updated", product_id)
    return product


def activate_product(uow: UnitOfWork, registry: AdminRegistry, *, admin_id: UUID, product_id: UUID) -> Product:
    ensure_active_admin(uow, registry, admin_id)
    product = ensure_product(uow, product_id, for_update=True)
    product.activate()
    uow.products.update(product)
    uow.commit()
    logger.info("product %s activated", product_id)
    return product


def deactivate_product(uow: UnitOfWork, registry: AdminRegistry, *, admin_id: UUID, product_id: UUID) -> Product:
    ensure_active_admin(uow, registry, admin_id)
    product = ensure_product(uow, product_id, for_update=True)
    product.deactivate()
    uow.products.update(product)
    uow.commit()
    logger.info("product %s deactivated", product_id)
    return product


def restock_product(
    uow: UnitOfWork,
    registry: AdminRegistry,
    *,
    admin_id: UUID,
    product_id: UUID,
    quantity: int,
) -> Product:
    """Add units to tracked stock; untracked products are left unchanged."""

    ensure_active_admin(uow, registry, admin_id)
    product = ensure_product(uow, product_id, for_update=True)
    product.increment_stock(quantity)
    uow.products.update(product)
    uow.commit()
    logger.info("product %s restocked by %s", product_id, quantity)
    return product


def delete_product(uow: UnitOfWork, registry: AdminRegistry, *, admin_id: UUID, product_id: UUID) -> None:
    ensure_active_admin(uow, registry, admin_id)
    product = ensure_product(uow, product_id, for_update=True)
    if uow.redemptions.has_pending_for_product(product_id):
        raise InvalidStateError("Product cannot be deleted as it has pending redemptions.")

    uow.products.delete(product)
    uow.commit()
    logger.info("product %s deleted", product_id)


def get_product(uow: UnitOfWork, *, product_id: UUID) -> Product:
    return ensure_product(uow, product_id)


def list_products(uow: UnitOfWork, *, only_active: bool = True) -> Sequence[Product]:
    return uow.products.list(only_active=only_active)
