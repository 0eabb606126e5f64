from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from kcnotes.api.index import build_router
from kcnotes.config import Settings
from kcnotes.http.context import Services
from kcnotes.http.dispatcher import Dispatcher
from kcnotes.storage.database import Database
from kcnotes.storage.migrations import apply_migrations

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Build the ASGI app.

    FastAPI owns the process lifecycle; every HTTP request is handed to the
    ``Dispatcher`` and its route table. The database is opened and migrated
    before the first request and closed on shutdown. A failed migration aborts
    startup.
    """
    settings = settings or Settings.from_env()
    dispatcher = Dispatcher(build_router())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not settings.secret:
            raise RuntimeError("SECRET is not set")
        db = database or Database(settings.database_path)
        try:
            db.connect()
            apply_migrations(db)
        except Exception:
            logger.exception("Startup failed")
            db.close()
            raise

        services = Services.build(settings, db)
        dispatcher.services = services
        app.state.services = services
        try:
            yield
        finally:
            logger.info("Shutting down server...")
            dispatcher.services = None
            db.close()

    app = FastAPI(title="KC Notes API", lifespan=lifespan, docs_url=None, redoc_url=None, openapi_url=None)
    app.mount("", dispatcher)
    return app
