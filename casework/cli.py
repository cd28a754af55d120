"""Command line entry for Casework."""

from __future__ import annotations

import logging

import uvicorn

from casework.core.config import settings


def run_server() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("casework.api.main:app", host=settings.HOST, port=settings.PORT)


def main() -> None:
    run_server()


if __name__ == "__main__":
    main()
