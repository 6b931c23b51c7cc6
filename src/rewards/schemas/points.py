"""Pydantic schemas for points and ledger endpoints."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ..models import LedgerEntryType


class PointsAmount(BaseModel):
    """Amount for a direct credit/reserve/release/capture call."""

    points: int = Field(..., description="Positive number of points.")


class EarnPointsCreate(BaseModel):
    """Allocate points to a user for an event."""

    user_id: UUID
    event_id: UUID
    points: int = Field(..., description="Positive number of points earned.")


class LedgerEntryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    entry_id: UUID
    user_id: UUID
    entry_type: LedgerEntryType
    points: int
    timestamp: datetime
    event_id: Optional[UUID]
    redemption_request_id: Optional[UUID]


class LedgerPage(BaseModel):
    items: List[LedgerEntryRead]
    total_count: int
    skip: int
    take: int
