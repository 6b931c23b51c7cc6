"""Run the API with uvicorn: ``python -m rewards``."""

import uvicorn

from .core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("rewards.main:app", host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()
