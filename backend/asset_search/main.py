"""Application bootstrap for the Asset Search API.

This module wires the FastAPI application, attaches middleware and error handlers, and owns the
process-wide embedder.

Functions:
    lifespan(app: FastAPI): Configure logging, initialise the database and build the embedder on startup.
    health_check(): Lightweight readiness probe used by monitoring and local smoke tests.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from asset_search.api import api_router
from asset_search.core.config import get_settings
from asset_search.core.exceptions import register_exception_handlers
from asset_search.core.logging import configure_logging
from asset_search.db.session import init_db
from asset_search.services import Embedder

settings = get_settings()
_LOGGER = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    # missing provider settings abort startup here
    embedder = Embedder.from_settings(settings)
    await init_db()
    app.state.embedder = embedder
    _LOGGER.info("Started %s with embedding deployment %s", settings.app_name, embedder.deployment)
    try:
        yield
    finally:
        await embedder.close()
        _LOGGER.info("Stopped %s", settings.app_name)


app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(api_router)


@app.get("/health")
async def health_check():
    return {"status": "ok"}
