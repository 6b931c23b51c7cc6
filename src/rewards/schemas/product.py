"""Pydantic schemas for catalog endpoints."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ProductCreate(BaseModel):
    name: str = Field(..., max_length=200)
    points_cost: int = Field(..., description="Points needed to redeem one unit.")
    stock: Optional[int] = Field(None, description="Units on hand; null means unlimited.")
    description: Optional[str] = Field(None, max_length=1000)
    image_url: Optional[str] = Field(None, max_length=500)
    is_active: bool = True


class ProductUpdate(BaseModel):
    """Partial update; ``clear_stock`` switches to unlimited stock."""

    name: Optional[str] = Field(None, max_length=200)
    points_cost: Optional[int] = None
    stock: Optional[int] = None
    clear_stock: bool = False
    description: Optional[str] = Field(None, max_length=1000)
    image_url: Optional[str] = Field(None, max_length=500)
    is_active: Optional[bool] = None


class RestockRequest(BaseModel):
    quantity: int = Field(..., description="Units to add to tracked stock.")


class ProductRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_id: UUID
    name: str
    description: Optional[str]
    image_url: Optional[str]
    points_cost: int
    stock: Optional[int]
    is_active: bool
    created_at: datetime
    updated_at: datetime
