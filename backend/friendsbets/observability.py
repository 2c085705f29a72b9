"""Logging setup and Logfire instrumentation."""

import logging

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from friendsbets import __version__
from friendsbets.config import Settings

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure stdlib logging for the process."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def initialize_logfire(
    settings: Settings,
    app: FastAPI | None = None,
    engine: AsyncEngine | None = None,
) -> bool:
    """
    Initialize Logfire and instrument the ledger's moving parts.

    Instruments:
    - FastAPI request handling (when an app is given)
    - SQLAlchemy statements (when an engine is given)
    - Python logging (bridged to Logfire through the root logger)

    Returns True when Logfire was configured.
    """
    if not settings.logfire_token:
        logger.warning("Logfire token not set - observability disabled")
        return False

    try:
        logfire.configure(
            token=settings.logfire_token,
            service_name="friendsbets",
            service_version=__version__,
            environment=settings.environment,
        )

        if app is not None:
            logfire.instrument_fastapi(app)

        if engine is not None:
            logfire.instrument_sqlalchemy(engine=engine.sync_engine)

        root_logger = logging.getLogger()
        root_logger.addHandler(logfire.LogfireLoggingHandler())

        logger.info("Logfire tracking initialized")
        return True

    except Exception as e:
        logger.warning(f"Failed to initialize Logfire: {e}")
        return False
