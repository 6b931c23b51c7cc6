"""Leaderboard aggregation services."""

from __future__ import annotations

from typing import List, Optional

from ..core.admin_registry import AdminRegistry
from ..core.config import get_settings
from ..core.unit_of_work import UnitOfWork
from ..models import User


def top_employees(uow: UnitOfWork, registry: AdminRegistry, *, limit: Optional[int] = None) -> List[User]:
    """Return active non-admin users ordered by total points and user id."""

    settings = get_settings()
    limit = limit if limit is not None else settings.leaderboard_size
    limit = max(1, min(limit, settings.max_page_size))

    ranked: List[User] = []
    for user in uow.users.top_by_total_points(only_active=True):
        if registry.is_admin(user.email, user.employee_id):
            continue
        ranked.append(user)
        if len(ranked) == limit:
            break
    return ranked
