"""
Application factory.

``create_app`` wires settings, database, event dispatcher, exception handlers
and routers.  The lifespan hook resets and seeds the database before the
server accepts requests and disposes the engine on shutdown.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from sqlalchemy.engine import Engine

from todoboard.config import Settings, get_settings
from todoboard.data import initialise_database
from todoboard.database import create_db_engine, create_session_factory
from todoboard.endpoints import ROUTERS
from todoboard.event_handlers import build_event_dispatcher
from todoboard.exceptions.handlers import setup_exception_handlers
from todoboard.identity.tokens import TokenService
from todoboard.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[Engine] = None,
    initialise: bool = True,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use (defaults to ``get_settings()``)
        engine: Engine to use (defaults to one built from ``settings``)
        initialise: Reset and seed the database during startup
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)

    engine = engine or create_db_engine(settings.database_url, echo=settings.sql_echo)
    session_factory = create_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if initialise:
            logger.info("Initialising database")
            initialise_database(engine, session_factory)
        yield
        engine.dispose()
        logger.info("Database engine disposed")

    app = FastAPI(
        title="Todoboard",
        description="To-do lists with an identity API",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.token_service = TokenService(settings)
    app.state.dispatcher = build_event_dispatcher()

    setup_exception_handlers(app)

    @app.get("/health", tags=["Health"])
    def health():
        return {"status": "healthy", "environment": settings.environment}

    for router in ROUTERS:
        app.include_router(router)

    return app
