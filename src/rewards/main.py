"""FastAPI application entrypoint for the rewards service."""

import logging

from fastapi import FastAPI

from . import __version__
from .api.v1.router import api_router
from .core.config import get_settings


def create_app() -> FastAPI:
    """Instantiate and configure the FastAPI application."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(title="Rewards API", version=__version__)
    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
