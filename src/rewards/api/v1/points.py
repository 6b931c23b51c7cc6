"""Points allocation and direct balance endpoints."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from ...core.admin_registry import AdminRegistry
from ...core.errors import RewardsRuleViolation
from ...core.unit_of_work import UnitOfWork
from ...schemas import BalanceRead, EarnPointsCreate, LedgerEntryRead, PointsAmount
from ...services import points_service
from ...services.guards import ensure_active_admin
from ..deps import get_admin_id, get_registry, get_uow

router = APIRouter(prefix="/points", tags=["points"])

_BALANCE_OPERATIONS = {
    "credit": points_service.credit_points,
    "reserve": points_service.reserve_points,
    "release": points_service.release_points,
    "capture": points_service.capture_points,
}


@router.post(
    "/earn",
    response_model=LedgerEntryRead,
    status_code=status.HTTP_201_CREATED,
    summary="Allocate event points",
    responses={
        201: {
            "description": "Points credited and Earn entry recorded",
            "content": {
                "application/json": {
                    "example": {
                        "entry_id": "44444444-4444-4444-4444-444444444444",
                        "user_id": "bbbbbbbb-bbbb-bbbb-bbbb-bbbbbbbbbbbb",
                        "entry_type": "EARN",
                        "points": 50,
                        "timestamp": "2025-11-12T14:30:00",
                        "event_id": "eeeeeeee-eeee-eeee-eeee-eeeeeeeeeeee",
                        "redemption_request_id": None,
                    }
                }
            },
        },
        403: {"description": "Caller is not an active admin"},
        404: {"description": "User or event not found"},
        409: {"description": "User or event inactive"},
    },
)
def allocate_event_points(
    payload: EarnPointsCreate,
    uow: UnitOfWork = Depends(get_uow),
    registry: AdminRegistry = Depends(get_registry),
    admin_id: Optional[UUID] = Depends(get_admin_id),
) -> LedgerEntryRead:
    """Credit points a user earned at an event.

    Example request body::

        {
            "user_id": "bbbbbbbb-bbbb-bbbb-bbbb-bbbbbbbbbbbb",
            "event_id": "eeeeeeee-eeee-eeee-eeee-eeeeeeeeeeee",
            "points": 50
        }
    """

    try:
        return uow.run(
            lambda unit: points_service.allocate_event_points(
                unit,
                registry,
                admin_id=admin_id,
                user_id=payload.user_id,
                event_id=payload.event_id,
                points=payload.points,
            )
        )
    except RewardsRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.post(
    "/{user_id}/{operation}",
    response_model=BalanceRead,
    summary="Credit, reserve, release or capture points",
)
def change_balance(
    user_id: UUID,
    operation: str,
    payload: PointsAmount,
    uow: UnitOfWork = Depends(get_uow),
    registry: AdminRegistry = Depends(get_registry),
    admin_id: Optional[UUID] = Depends(get_admin_id),
) -> BalanceRead:
    """Admin-only direct balance adjustment without a ledger entry."""

    handler = _BALANCE_OPERATIONS.get(operation)
    if handler is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown points operation.")

    def _apply(unit: UnitOfWork):
        ensure_active_admin(unit, registry, admin_id)
        return handler(unit, user_id=user_id, points=payload.points)

    try:
        user = uow.run(_apply)
    except RewardsRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    balance = user.get_balance()
    return BalanceRead(total=balance.total, locked=balance.locked, available=balance.available)
