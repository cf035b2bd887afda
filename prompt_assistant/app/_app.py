# -*- coding: utf-8 -*-
"""FastAPI application factory."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..constant import (
    DOCS_ENABLED,
    ENV_FILE,
    LOG_LEVEL_ENV,
    MODEL_CACHE_MAX_AGE_MS,
)
from ..providers import (
    FilterStore,
    ModelCache,
    ModelLister,
    ModelService,
    ProviderRegistry,
    ProviderStore,
    StorageCorruptError,
)
from .routers import models_router, providers_router

logger = logging.getLogger(__name__)


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging from *level* or the env log level."""
    level = (level or os.environ.get(LOG_LEVEL_ENV, "info")).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def _storage_corrupt_handler(
    request: Request,
    exc: StorageCorruptError,
) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": str(exc)})


def create_app(
    store: Optional[ProviderStore] = None,
    cache: Optional[ModelCache] = None,
    lister: Optional[ModelLister] = None,
    environ: Optional[Mapping[str, str]] = None,
    home: Optional[Path] = None,
) -> FastAPI:
    """Build the API app around one store, one cache and one lister."""
    if ENV_FILE.exists():
        load_dotenv(ENV_FILE)
        logger.debug(f"Loaded environment variables from {ENV_FILE}")

    store = store or ProviderStore()
    cache = cache or ModelCache(default_max_age_ms=MODEL_CACHE_MAX_AGE_MS)
    owns_lister = lister is None
    lister = lister or ModelLister(environ=environ)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store.ensure_initialized()
        logger.info(f"Provider storage: {store.path}")
        yield
        if owns_lister:
            lister.close()

    app = FastAPI(
        title="Prompt Assistant",
        lifespan=lifespan,
        docs_url="/docs" if DOCS_ENABLED else None,
        redoc_url="/redoc" if DOCS_ENABLED else None,
        openapi_url="/openapi.json" if DOCS_ENABLED else None,
    )

    registry = ProviderRegistry(store)
    filters = FilterStore(store)
    app.state.store = store
    app.state.registry = registry
    app.state.filters = filters
    app.state.cache = cache
    app.state.model_service = ModelService(
        registry,
        filters,
        cache,
        lister,
        environ=environ,
        home=home,
    )

    app.add_exception_handler(StorageCorruptError, _storage_corrupt_handler)
    app.include_router(providers_router)
    app.include_router(models_router)

    @app.get("/health")
    async def health() -> dict:
        return {"ok": True}

    return app
