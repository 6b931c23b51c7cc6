"""Pydantic schemas for user endpoints."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """Request body for creating or provisioning a user."""

    name: str = Field(..., max_length=200)
    email: str = Field(..., max_length=255)
    employee_id: str = Field(..., max_length=50)


class UserUpdate(BaseModel):
    """Partial profile update; omitted fields are left unchanged."""

    name: Optional[str] = Field(None, max_length=200)
    email: Optional[str] = Field(None, max_length=255)
    employee_id: Optional[str] = Field(None, max_length=50)
    is_active: Optional[bool] = None


class UserRead(BaseModel):
    """Public view of a user and its balance."""

    model_config = ConfigDict(from_attributes=True)

    user_id: UUID
    name: str
    email: str
    employee_id: str
    is_active: bool
    total_points: int
    locked_points: int
    available_points: int
    created_at: datetime
    updated_at: datetime


class UserPage(BaseModel):
    items: List[UserRead]
    total_count: int
    skip: int
    take: int


class BalanceRead(BaseModel):
    total: int = Field(..., ge=0)
    locked: int = Field(..., ge=0)
    available: int = Field(..., ge=0)
