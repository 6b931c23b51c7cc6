"""Pydantic schemas for redemption workflows."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from ..models import RedemptionStatus


class RedemptionCreate(BaseModel):
    """Incoming payload for requesting a product."""

    user_id: UUID
    product_id: UUID


class RedemptionRead(BaseModel):
    """Represents a redemption request."""

    model_config = ConfigDict(from_attributes=True)

    request_id: UUID
    user_id: UUID
    product_id: UUID
    status: RedemptionStatus
    points_reserved: int
    requested_at: datetime
    approved_at: Optional[datetime]
    delivered_at: Optional[datetime]
