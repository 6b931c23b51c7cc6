"""Product catalog endpoints."""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ...core.admin_registry import AdminRegistry
from ...core.errors import RewardsRuleViolation
from ...core.unit_of_work import UnitOfWork
from ...schemas import ProductCreate, ProductRead, ProductUpdate, RestockRequest
from ...services import product_catalog_service
from ..deps import get_admin_id, get_registry, get_uow

router = APIRouter(prefix="/products", tags=["products"])


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add a product to the catalog",
    responses={
        400: {"description": "Invalid name, cost or stock"},
        403: {"description": "Caller is not an active admin"},
    },
)
def create_product(
    payload: ProductCreate,
    uow: UnitOfWork = Depends(get_uow),
    registry: AdminRegistry = Depends(get_registry),
    admin_id: Optional[UUID] = Depends(get_admin_id),
) -> ProductRead:
    """Create a product.

    Example request body::

        {
            "name": "Coffee mug",
            "points_cost": 150,
            "stock": 20
        }
    """

    try:
        return product_catalog_service.create_product(
            uow,
            registry,
            admin_id=admin_id,
            name=payload.name,
            points_cost=payload.points_cost,
            stock=payload.stock,
            description=payload.description,
            image_url=payload.image_url,
            is_active=payload.is_active,
        )
    except RewardsRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.get("", response_model=List[ProductRead], summary="List products")
def list_products(
    only_active: bool = Query(True, description="Hide deactivated products"),
    uow: UnitOfWork = Depends(get_uow),
) -> List[ProductRead]:
    return product_catalog_service.list_products(uow, only_active=only_active)


@router.get("/{product_id}", response_model=ProductRead, summary="Fetch a product")
def get_product(product_id: UUID, uow: UnitOfWork = Depends(get_uow)) -> ProductRead:
    try:
        return product_catalog_service.get_product(uow, product_id=product_id)
    except RewardsRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.patch("/{product_id}", response_model=ProductRead, summary="Update a product")
def update_product(
    product_id: UUID,
    payload: ProductUpdate,
    uow: UnitOfWork = Depends(get_uow),
    registry: AdminRegistry = Depends(get_registry),
    admin_id: Optional[UUID] = Depends(get_admin_id),
) -> ProductRead:
    try:
        return product_catalog_service.update_product(
            uow,
            registry,
            admin_id=admin_id,
            product_id=product_id,
            name=payload.name,
            points_cost=payload.points_cost,
            stock=payload.stock,
            clear_stock=payload.clear_stock,
            description=payload.description,
            image_url=payload.image_url,
            is_active=payload.is_active,
        )
    except RewardsRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.post("/{product_id}/restock", response_model=ProductRead, summary="Add units to tracked stock")
def restock_product(
    product_id: UUID,
    payload: RestockRequest,
    uow: UnitOfWork = Depends(get_uow),
    registry: AdminRegistry = Depends(get_registry),
    admin_id: Optional[UUID] = Depends(get_admin_id),
) -> ProductRead:
    try:
        return uow.run(
            lambda unit: product_catalog_service.restock_product(
                unit, registry, admin_id=admin_id, product_id=product_id, quantity=payload.quantity
            )
        )
    except RewardsRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a product",
    responses={409: {"description": "Product has pending redemption requests"}},
)
def delete_product(
    product_id: UUID,
    uow: UnitOfWork = Depends(get_uow),
    registry: AdminRegistry = Depends(get_registry),
    admin_id: Optional[UUID] = Depends(get_admin_id),
) -> Response:
    try:
        product_catalog_service.delete_product(uow, registry, admin_id=admin_id, product_id=product_id)
    except RewardsRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
