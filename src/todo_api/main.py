from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .db import close_pool, create_pool
from .errors import register_exception_handlers
from .repositories import PostgresRepository, Repository
from .routers import health as health_router
from .routers import todos as todos_router
from .settings import Settings, get_settings


openapi_tags = [
    {"name": "health", "description": "Database reachability probe."},
    {"name": "todos", "description": "Create, read, update and delete Todo items."},
]


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, repository: Optional[Repository] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: configuration; read from the environment when omitted.
        repository: storage to serve from. When omitted, the lifespan opens a
            PostgreSQL pool from DATABASE_URL (failing startup if it is unset
            or the database does not answer) and closes it on shutdown.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if repository is not None:
            yield
            return

        pool = await create_pool(settings)
        app.state.repository = PostgresRepository(pool)
        try:
            yield
        finally:
            await close_pool(pool)

    app = FastAPI(
        title="Todo Backend",
        description="HTTP API for managing todo items stored in PostgreSQL.",
        version="0.1.0",
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    if repository is not None:
        app.state.repository = repository

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(health_router.router)
    app.include_router(todos_router.router)
    return app


def __getattr__(name: str) -> FastAPI:
    """
    Build the module-level ``app`` (``uvicorn todo_api.main:app``) on first
    access, so importing this module never reads the environment.
    """
    if name == "app":
        app = create_app()
        globals()["app"] = app
        return app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
