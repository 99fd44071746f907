from __future__ import annotations

import argparse

import uvicorn

from petapp.config import get_settings
from petapp.observability.logging import configure_logging


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Pet Board HTMX server")
    parser.add_argument("--host", default=settings.host, help="Interface to bind")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to listen on (defaults to $PORT)")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes (development)")
    args = parser.parse_args()

    configure_logging(level=settings.log_level, log_file=settings.log_path)

    # uvicorn traps SIGINT/SIGTERM and drains in-flight requests before exiting.
    uvicorn.run(
        "petapp.main:app",
        host=args.host,
        port=args.port,
        reload=bool(args.reload),
        log_config=None,
        timeout_graceful_shutdown=settings.shutdown_timeout_seconds,
    )


if __name__ == "__main__":
    main()
