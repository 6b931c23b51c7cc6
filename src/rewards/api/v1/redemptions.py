"""Endpoints for product redemption requests."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from ...core.admin_registry import AdminRegistry
from ...core.errors import RewardsRuleViolation
from ...core.unit_of_work import UnitOfWork
from ...schemas import RedemptionCreate, RedemptionRead
from ...services import redemption_service
from ..deps import get_admin_id, get_registry, get_uow

router = APIRouter(prefix="/redemptions", tags=["redemptions"])

_TRANSITIONS = {
    "approve": redemption_service.approve_redemption,
    "deliver": redemption_service.deliver_redemption,
    "reject": redemption_service.reject_redemption,
    "cancel": redemption_service.cancel_redemption,
}


@router.post(
    "",
    response_model=RedemptionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Request a product",
    responses={
        201: {
            "description": "Points reserved and request opened",
            "content": {
                "application/json": {
                    "example": {
                        "request_id": "88888888-8888-8888-8888-888888888888",
                        "user_id": "bbbbbbbb-bbbb-bbbb-bbbb-bbbbbbbbbbbb",
                        "product_id": "cccccccc-cccc-cccc-cccc-cccccccccccc",
                        "status": "PENDING",
                        "points_reserved": 150,
                        "requested_at": "2025-11-12T14:30:00",
                        "approved_at": None,
                        "delivered_at": None,
                    }
                }
            },
        },
        404: {"description": "User or product not found"},
        409: {"description": "Inactive user or product, or a pending request already exists"},
        422: {"description": "Insufficient available points"},
    },
)
def request_redemption(payload: RedemptionCreate, uow: UnitOfWork = Depends(get_uow)) -> RedemptionRead:
    """Reserve the product's cost and open a Pending request.

    Example request body::

        {
            "user_id": "bbbbbbbb-bbbb-bbbb-bbbb-bbbbbbbbbbbb",
            "product_id": "cccccccc-cccc-cccc-cccc-cccccccccccc"
        }
    """

    try:
        return uow.run(
            lambda unit: redemption_service.request_redemption(
                unit, user_id=payload.user_id, product_id=payload.product_id
            )
        )
    except RewardsRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.get("/{request_id}", response_model=RedemptionRead, summary="Fetch a redemption request")
def get_redemption(request_id: UUID, uow: UnitOfWork = Depends(get_uow)) -> RedemptionRead:
    try:
        return redemption_service.get_redemption(uow, request_id=request_id)
    except RewardsRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.post(
    "/{request_id}/{action}",
    response_model=RedemptionRead,
    summary="Approve, deliver, reject or cancel a request",
    responses={
        403: {"description": "Caller is not an active admin"},
        404: {"description": "Request not found"},
        409: {"description": "Transition not allowed from the current status"},
        422: {"description": "Insufficient stock at delivery"},
    },
)
def transition_redemption(
    request_id: UUID,
    action: str,
    uow: UnitOfWork = Depends(get_uow),
    registry: AdminRegistry = Depends(get_registry),
    admin_id: Optional[UUID] = Depends(get_admin_id),
) -> RedemptionRead:
    handler = _TRANSITIONS.get(action)
    if handler is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown redemption action.")

    try:
        return uow.run(lambda unit: handler(unit, registry, admin_id=admin_id, request_id=request_id))
    except RewardsRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
