"""Leaderboard response schemas."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class LeaderboardEmployee(BaseModel):
    """Ranked employee entry."""

    model_config = ConfigDict(from_attributes=True)

    user_id: UUID
    name: str
    email: str
    employee_id: str
    total_points: int = Field(..., ge=0)
