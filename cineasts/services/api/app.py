from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cineasts.common.logging import get_logger
from cineasts.common.settings import get_settings
from cineasts.database.core.main import close_driver, get_driver
from cineasts.database.core.schema import apply_schema
from cineasts.services.api.routers import health, people

cfg = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if cfg.neo4j.apply_schema_on_startup:
        with get_driver().session(database=cfg.neo4j.database) as session:
            statements = apply_schema(session)
        logger.info("Graph schema ensured (%d statements)", len(statements))
    try:
        yield
    finally:
        close_driver()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Cineasts API",
        version="0.1.0",
        docs_url=f"{cfg.api.prefix}/docs",
        openapi_url=f"{cfg.api.prefix}/openapi.json",
        lifespan=lifespan,
    )

    allow_origins = ["*"] if cfg.is_dev else cfg.api.cors_allow_origins
    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_methods=cfg.api.cors_allow_methods,
        allow_headers=cfg.api.cors_allow_headers,
        allow_credentials=cfg.api.cors_allow_credentials,
    )

    # Routers
    app.include_router(health.router)
    app.include_router(people.router)
    return app

app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run(
        "cineasts.services.api.app:app",
        host=cfg.api.host,
        port=cfg.api.port,
        log_level=cfg.log_level.lower(),
    )
