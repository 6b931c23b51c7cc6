"""Primary API router definition."""

from fastapi import APIRouter

from . import admins, events, leaderboard, points, products, redemptions, users

api_router = APIRouter()

api_router.include_router(users.router)
api_router.include_router(points.router)
api_router.include_router(products.router)
api_router.include_router(events.router)
api_router.include_router(redemptions.router)
api_router.include_router(leaderboard.router)
api_router.include_router(admins.router)


@api_router.get("/health", tags=["health"])
async def healthcheck() -> dict[str, str]:
    """Basic health probe endpoint."""
    return {"status": "ok"}
