"""
Start the user record service.

Usage:
  python -m user_api [--host 127.0.0.1] [--port 3000] [--users-file users.json] [--log-level info]
"""
from __future__ import annotations

import argparse
import logging

from uvicorn import Config, Server

from user_api.app import create_app
from user_api.core.config import get_settings
from user_api.core.logging_config import LEVEL_NAMES, parse_level

logger = logging.getLogger("user_api")


def main(argv: list[str] | None = None) -> None:
    settings = get_settings()
    ap = argparse.ArgumentParser(description="User record service (JSON file backed)")
    ap.add_argument("--host", help=f"Bind address (default: {settings.host})")
    ap.add_argument("--port", type=int, help=f"Listening port (default: {settings.port})")
    ap.add_argument("--users-file", help=f"JSON store path (default: {settings.users_file})")
    ap.add_argument("--log-level", help=f"One of {', '.join(LEVEL_NAMES)} (default: {settings.log_level})")
    args = ap.parse_args(argv)

    if args.port is not None and (args.port <= 0 or args.port > 65535):
        ap.error("Port must be between 1 and 65535.")

    settings = settings.with_overrides(
        host=args.host,
        port=args.port,
        users_file=args.users_file,
        log_level=args.log_level,
    )
    if parse_level(settings.log_level) is None:
        ap.error(f"Unknown log level {settings.log_level!r}; use one of {', '.join(LEVEL_NAMES)}.")
    log_level = settings.log_level.strip().lower()

    app = create_app(settings)
    logger.info("Server is running on http://%s:%s", settings.host, settings.port)
    logger.info("Users will be stored in: %s", settings.users_file)
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=log_level)
    Server(config).run()


if __name__ == "__main__":
    main()
