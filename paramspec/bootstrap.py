"""Composition Root: one-time process initialization for applications using paramspec.

Invariants:
    - init() configures logging at most once per process; later calls are no-ops
    - Nothing is configured at import time

Design Decisions:
    - Explicit init() called by the host application (or its lifespan) instead of
      import-time side effects scattered across modules
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from paramspec.config import Settings, get_settings
from paramspec.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)

_initialized = False


def init(settings: Settings | None = None) -> Settings:
    """Configure logging from settings once; return the settings in effect."""
    global _initialized
    settings = settings or get_settings()
    if _initialized:
        return settings
    setup_logging(settings.log_level, settings.log_format)
    _initialized = True
    logger.info("paramspec initialized (log_format=%s)", settings.log_format)
    return settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI lifespan that runs init() on startup."""
    init()
    yield
