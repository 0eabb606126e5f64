"""Command line entry point.

    python -m kcnotes serve [--host HOST] [--port PORT]
    python -m kcnotes migrate
"""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import Optional, Sequence

import uvicorn

from kcnotes.config import Settings, configure_logging, load_env
from kcnotes.errors import MigrationError
from kcnotes.main import create_app
from kcnotes.storage.database import Database
from kcnotes.storage.migrations import apply_migrations

logger = logging.getLogger("kcnotes")


def _settings() -> Settings:
    settings = Settings.from_env()
    if settings.env != "production" and load_env():
        settings = Settings.from_env()
    return settings


def migrate(settings: Settings) -> int:
    db = Database(settings.database_path)
    try:
        applied = apply_migrations(db.connect())
    except MigrationError:
        logger.exception("Migrations failed")
        return 1
    finally:
        db.close()

    for name in applied:
        print(name)
    logger.info("Migrations applied successfully.")
    return 0


def serve(settings: Settings) -> int:
    if not settings.secret:
        logger.error("SECRET is not set; refusing to start")
        return 1
    logger.info("Server running on %s:%s", settings.host, settings.port)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        lifespan="on",
    )
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="kcnotes", description="KC Notes API")
    sub = parser.add_subparsers(dest="command")

    p_serve = sub.add_parser("serve", help="run the HTTP server (default)")
    p_serve.add_argument("--host", default=None)
    p_serve.add_argument("--port", type=int, default=None)

    sub.add_parser("migrate", help="apply pending schema migrations and exit")

    args = parser.parse_args(argv)
    settings = _settings()
    configure_logging(settings.log_level)

    if args.command == "migrate":
        return migrate(settings)

    overrides = {}
    if getattr(args, "host", None):
        overrides["host"] = args.host
    if getattr(args, "port", None):
        overrides["port"] = args.port
    return serve(replace(settings, **overrides))


if __name__ == "__main__":
    sys.exit(main())
