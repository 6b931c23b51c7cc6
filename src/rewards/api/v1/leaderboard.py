"""Leaderboard endpoint."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ...core.admin_registry import AdminRegistry
from ...core.unit_of_work import UnitOfWork
from ...schemas import LeaderboardEmployee
from ...services import leaderboard_service
from ..deps import get_registry, get_uow

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get(
    "",
    response_model=List[LeaderboardEmployee],
    summary="Top employees by total points",
    responses={
        200: {
            "description": "Active non-admin employees ordered by total points",
            "content": {
                "application/json": {
                    "example": [
                        {
                            "user_id": "bbbbbbbb-bbbb-bbbb-bbbb-bbbbbbbbbbbb",
                            "name": "Asha Verma",
                            "email": "asha.verma@example.com",
                            "employee_id": "EMP-1001",
                            "total_points": 420,
                        }
                    ]
                }
            },
        }
    },
)
def get_leaderboard(
    limit: Optional[int] = Query(None, ge=1, le=100, description="Number of employees to return"),
    uow: UnitOfWork = Depends(get_uow),
    registry: AdminRegistry = Depends(get_registry),
) -> List[LeaderboardEmployee]:
    """Return the ranked list of employees."""

    return leaderboard_service.top_employees(uow, registry, limit=limit)
