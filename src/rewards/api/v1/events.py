"""Event endpoints."""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...core.admin_registry import AdminRegistry
from ...core.errors import RewardsRuleViolation
from ...core.unit_of_work import UnitOfWork
from ...schemas import EventCreate, EventRead, EventUpdate
from ...services import event_service
from ..deps import get_admin_id, get_registry, get_uow

router = APIRouter(prefix="/events", tags=["events"])


@router.post("", response_model=EventRead, status_code=status.HTTP_201_CREATED, summary="Create an event")
def create_event(
    payload: EventCreate,
    uow: UnitOfWork = Depends(get_uow),
    registry: AdminRegistry = Depends(get_registry),
    admin_id: Optional[UUID] = Depends(get_admin_id),
) -> EventRead:
    try:
        return event_service.create_event(
            uow,
            registry,
            admin_id=admin_id,
            name=payload.name,
            occurs_at=payload.occurs_at,
            is_active=payload.is_active,
        )
    except RewardsRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.get("", response_model=List[EventRead], summary="List events")
def list_events(
    only_active: bool = Query(True, description="Hide deactivated events"),
    uow: UnitOfWork = Depends(get_uow),
) -> List[EventRead]:
    return event_service.list_events(uow, only_active=only_active)


@router.get("/{event_id}", response_model=EventRead, summary="Fetch an event")
def get_event(event_id: UUID, uow: UnitOfWork = Depends(get_uow)) -> EventRead:
    try:
        return event_service.get_event(uow, event_id=event_id)
    except RewardsRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.patch("/{event_id}", response_model=EventRead, summary="Rename or reschedule an event")
def update_event(
    event_id: UUID,
    payload: EventUpdate,
    uow: UnitOfWork = Depends(get_uow),
    registry: AdminRegistry = Depends(get_registry),
    admin_id: Optional[UUID] = Depends(get_admin_id),
) -> EventRead:
    try:
        return event_service.update_event(
            uow,
            registry,
            admin_id=admin_id,
            event_id=event_id,
            name=payload.name,
            occurs_at=payload.occurs_at,
        )
    except RewardsRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.post("/{event_id}/activate", response_model=EventRead, summary="Activate an event")
def activate_event(
    event_id: UUID,
    uow: UnitOfWork = Depends(get_uow),
    registry: AdminRegistry = Depends(get_registry),
    admin_id: Optional[UUID] = Depends(get_admin_id),
) -> EventRead:
    try:
        return event_service.activate_event(uow, registry, admin_id=admin_id, event_id=event_id)
    except RewardsRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.post("/{event_id}/deactivate", response_model=EventRead, summary="Deactivate an event")
def deactivate_event(
    event_id: UUID,
    uow: UnitOfWork = Depends(get_uow),
    registry: AdminRegistry = Depends(get_registry),
    admin_id: Optional[UUID] = Depends(get_admin_id),
) -> EventRead:
    try:
        return event_service.deactivate_event(uow, registry, admin_id=admin_id, event_id=event_id)
    except RewardsRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
