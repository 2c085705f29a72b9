"""
Main FastAPI application entry point for FriendsBets.

This is the core application file that:
- Builds the FastAPI app around one Database handle
- Configures CORS for the frontend
- Sets up Logfire observability
- Maps ledger errors to HTTP responses
- Provides health check endpoints
"""

import logging
from contextlib import asynccontextmanager
from typing import Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from friendsbets import __version__
from friendsbets.api.routes import events_router, trades_router, users_router
from friendsbets.config import Settings, get_settings
from friendsbets.database import Database
from friendsbets.exceptions import LedgerError
from friendsbets.observability import configure_logging, initialize_logfire
from friendsbets.schemas import ErrorResponse

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the API application for the given settings."""
    settings = settings or get_settings()
    configure_logging(settings)
    database = Database(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan manager.
        Handles startup and shutdown events.
        """
        logger.info(
            f"Starting FriendsBets API Server "
            f"(environment={settings.environment}, debug={settings.debug})"
        )

        await database.create_all()

        db_info = database.info()
        if await database.check_connection():
            logger.info(f"Database connection successful: {db_info['url']}")
        else:
            logger.error(f"Database connection failed: {db_info['url']}")

        logger.info("FriendsBets API Server startup complete")

        yield

        logger.info("Shutting down FriendsBets API Server")
        await database.dispose()

    app = FastAPI(
        title="FriendsBets API",
        description="Peer-betting ledger for yes/no events among friends",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(LedgerError)
    async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
        body = ErrorResponse(detail=exc.message, error=type(exc).__name__)
        return JSONResponse(status_code=exc.status_code, content=body.model_dump())

    # ========================================================================
    # Health Check Endpoints
    # ========================================================================

    @app.get("/health", tags=["Health"])
    async def health_check() -> Dict[str, str]:
        """
        Health check endpoint for load balancers and monitoring.

        Returns:
            dict: Health status of the application and database
        """
        db_connected = await database.check_connection()

        return {
            "status": "healthy" if db_connected else "degraded",
            "service": "friendsbets-api",
            "version": __version__,
            "database": "connected" if db_connected else "disconnected",
            "environment": settings.environment,
        }

    @app.get("/", tags=["Root"])
    async def root() -> Dict[str, str]:
        """API information."""
        return {
            "name": "FriendsBets API",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    # ========================================================================
    # API Routers
    # ========================================================================

    app.include_router(users_router)
    app.include_router(events_router)
    app.include_router(trades_router)

    initialize_logfire(settings, app=app, engine=database.engine)

    return app


if __name__ == "__main__":
    import uvicorn

    current = get_settings()
    uvicorn.run(
        "friendsbets.main:create_app",
        factory=True,
        host=current.host,
        port=current.port,
        reload=current.is_development,
        log_level=current.log_level.lower(),
    )
