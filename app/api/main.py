"""
Server entrypoint for the goal orchestrator.

Architectural role:
- Configures process-wide logging from `LOG_LEVEL`.
- Runs `app.api.http_api.app` under uvicorn on the fixed port.

Side effects:
- Binds `HOST:PORT` (default `0.0.0.0:5000`).
"""

from dotenv import load_dotenv

load_dotenv()

import logging
import os

import uvicorn

DEFAULT_PORT = 5000


def configure_logging(level: str | None = None) -> None:
    """Install a root handler; unknown level names fall back to INFO."""
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main():
    configure_logging()

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", str(DEFAULT_PORT)))

    logging.getLogger(__name__).info("Server running on http://%s:%d", host, port)
    uvicorn.run("app.api.http_api:app", host=host, port=port)


if __name__ == "__main__":
    main()
