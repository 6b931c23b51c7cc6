"""Admin registry endpoints."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from ...core.admin_registry import AdminRegistry
from ...core.errors import RewardsRuleViolation
from ...core.unit_of_work import UnitOfWork
from ...schemas import AdminIdentifierCreate, AdminIdentifiers
from ...services.guards import ensure_active_admin
from ..deps import get_admin_id, get_registry, get_uow

router = APIRouter(prefix="/admins", tags=["admins"])


@router.get("", response_model=AdminIdentifiers, summary="List admin identifiers")
def list_admins(
    uow: UnitOfWork = Depends(get_uow),
    registry: AdminRegistry = Depends(get_registry),
    admin_id: Optional[UUID] = Depends(get_admin_id),
) -> AdminIdentifiers:
    try:
        ensure_active_admin(uow, registry, admin_id)
    except RewardsRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return AdminIdentifiers(identifiers=registry.identifiers())


@router.post("", response_model=AdminIdentifiers, status_code=status.HTTP_201_CREATED, summary="Grant admin rights")
def add_admin(
    payload: AdminIdentifierCreate,
    uow: UnitOfWork = Depends(get_uow),
    registry: AdminRegistry = Depends(get_registry),
    admin_id: Optional[UUID] = Depends(get_admin_id),
) -> AdminIdentifiers:
    try:
        ensure_active_admin(uow, registry, admin_id)
        registry.add_admin(payload.identifier)
    except RewardsRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return AdminIdentifiers(identifiers=registry.identifiers())


@router.delete("/{identifier}", response_model=AdminIdentifiers, summary="Revoke admin rights")
def remove_admin(
    identifier: str,
    uow: UnitOfWork = Depends(get_uow),
    registry: AdminRegistry = Depends(get_registry),
    admin_id: Optional[UUID] = Depends(get_admin_id),
) -> AdminIdentifiers:
    """Remove an identifier; the last remaining admin cannot be removed."""

    try:
        ensure_active_admin(uow, registry, admin_id)
        registry.remove_admin(identifier)
    except RewardsRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return AdminIdentifiers(identifiers=registry.identifiers())
