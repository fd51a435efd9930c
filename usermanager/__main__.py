"""
Run the API server:

  python -m usermanager

Listens on HOST:PORT from settings (default 0.0.0.0:3000).
"""

import logging

import uvicorn

from usermanager.core.config import get_settings


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    uvicorn.run("usermanager.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
