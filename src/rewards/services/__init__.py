"""Service layer exports."""

from . import (
	event_service,
	leaderboard_service,
	points_service,
	product_catalog_service,
	redemption_service,
	user_service,
)

__all__ = [
	"event_service",
	"leaderboard_service",
	"points_service",
	"product_catalog_service",
	"redemption_service",
	"user_service",
]
