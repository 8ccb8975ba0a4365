#!/usr/bin/env python3
"""
Auth API -- minimal registration and JWT login service.

Usage:
  python main.py
  python main.py --port 8080
  python main.py --host 127.0.0.1 --reload

Environment variables:
  JWT_SECRET   Required. HMAC key used to sign login tokens. The server
               refuses to start without it.
  PORT         Optional listen port (default 5000). --port overrides it.
"""

import argparse
import logging
import sys
from typing import Optional

import uvicorn
from pydantic import ValidationError

from core.config import Settings, get_settings

logger = logging.getLogger("miniauth.config")


def _load_settings() -> Optional[Settings]:
    """Return Settings, or None after logging why they could not be built."""
    try:
        return get_settings()
    except ValidationError as e:
        for err in e.errors():
            logger.critical("FATAL: %s", err.get("msg", err))
        return None


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run the Auth API server.")
    parser.add_argument("--host", help="Bind address (default: HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Listen port (default: PORT or 5000)")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (development only)")
    args = parser.parse_args(argv)

    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s %(message)s")

    settings = _load_settings()
    if settings is None:
        return 1
    # basicConfig is a no-op once the root logger has handlers.
    logging.getLogger().setLevel(settings.log_level.upper())

    host = args.host or settings.host
    port = args.port or settings.port
    logger.info("Auth server running on http://%s:%d", host, port)
    uvicorn.run("api.main:app", host=host, port=port, reload=args.reload, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
