"""Pydantic schemas for event endpoints."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class EventCreate(BaseModel):
    name: str = Field(..., max_length=200)
    occurs_at: datetime
    is_active: bool = True


class EventUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=200)
    occurs_at: Optional[datetime] = None


class EventRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    event_id: UUID
    name: str
    occurs_at: datetime
    is_active: bool
