"""User account endpoints."""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...core.errors import RewardsRuleViolation
from ...core.unit_of_work import UnitOfWork
from ...schemas import (
    BalanceRead,
    LedgerEntryRead,
    LedgerPage,
    RedemptionRead,
    UserCreate,
    UserPage,
    UserRead,
    UserUpdate,
)
from ...services import points_service, redemption_service, user_service
from ..deps import get_uow

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
    responses={
        400: {"description": "Invalid name, e-mail or employee id"},
        409: {"description": "E-mail or employee id already in use"},
    },
)
def create_user(payload: UserCreate, uow: UnitOfWork = Depends(get_uow)) -> UserRead:
    """Register an employee with an empty balance.

    Example request body::

        {
            "name": "Asha Verma",
            "email": "asha.verma@example.com",
            "employee_id": "EMP-1001"
        }
    """

    try:
        return user_service.create_user(
            uow,
            name=payload.name,
            email=payload.email,
            employee_id=payload.employee_id,
        )
    except RewardsRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.post("/provision", response_model=UserRead, summary="Return or create the account for a sign-in")
def provision_user(payload: UserCreate, uow: UnitOfWork = Depends(get_uow)) -> UserRead:
    try:
        return user_service.provision_user(
            uow,
            name=payload.name,
            email=payload.email,
            employee_id=payload.employee_id,
        )
    except RewardsRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.get("", response_model=UserPage, summary="List users")
def list_users(
    *,
    skip: int = Query(0, ge=0, description="Items to skip for pagination"),
    take: int = Query(25, ge=1, description="Maximum items to return"),
    is_active: Optional[bool] = Query(None, description="Filter by account state"),
    search: Optional[str] = Query(None, description="Match name, e-mail or employee id"),
    uow: UnitOfWork = Depends(get_uow),
) -> UserPage:
    try:
        users, total = user_service.list_users(uow, skip=skip, take=take, is_active=is_active, search=search)
    except RewardsRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return UserPage(
        items=[UserRead.model_validate(user) for user in users],
        total_count=total,
        skip=skip,
        take=take,
    )


@router.get("/{user_id}", response_model=UserRead, summary="Fetch a user")
def get_user(user_id: UUID, uow: UnitOfWork = Depends(get_uow)) -> UserRead:
    try:
        return user_service.get_user(uow, user_id=user_id)
    except RewardsRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.patch("/{user_id}", response_model=UserRead, summary="Update a user")
def update_user(user_id: UUID, payload: UserUpdate, uow: UnitOfWork = Depends(get_uow)) -> UserRead:
    try:
        return user_service.update_user(
            uow,
            user_id=user_id,
            name=payload.name,
            email=payload.email,
            employee_id=payload.employee_id,
            is_active=payload.is_active,
        )
    except RewardsRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.get("/{user_id}/balance", response_model=BalanceRead, summary="Points balance")
def get_balance(user_id: UUID, uow: UnitOfWork = Depends(get_uow)) -> BalanceRead:
    try:
        balance = points_service.get_balance(uow, user_id=user_id)
    except RewardsRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return BalanceRead(total=balance.total, locked=balance.locked, available=balance.available)


@router.get("/{user_id}/ledger", response_model=LedgerPage, summary="Ledger history, most recent first")
def get_ledger_history(
    user_id: UUID,
    skip: int = Query(0, description="Items to skip for pagination"),
    take: int = Query(25, description="Maximum items to return"),
    uow: UnitOfWork = Depends(get_uow),
) -> LedgerPage:
    try:
        entries, total = points_service.get_ledger_history(uow, user_id=user_id, skip=skip, take=take)
    except RewardsRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return LedgerPage(
        items=[LedgerEntryRead.model_validate(entry) for entry in entries],
        total_count=total,
        skip=skip,
        take=take,
    )


@router.get("/{user_id}/redemptions", response_model=List[RedemptionRead], summary="Redemption requests of a user")
def list_user_redemptions(user_id: UUID, uow: UnitOfWork = Depends(get_uow)) -> List[RedemptionRead]:
    try:
        return redemption_service.list_user_redemptions(uow, user_id=user_id)
    except RewardsRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
