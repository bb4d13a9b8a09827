from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from personal_expense.api.errors import register_exception_handlers
from personal_expense.api.routers.categories import router as categories_router
from personal_expense.api.routers.health import router as health_router
from personal_expense.api.routers.summary import router as summary_router
from personal_expense.api.routers.transactions import router as transactions_router
from personal_expense.config import LedgerSettings, get_settings
from personal_expense.db import Database
from personal_expense.imports.init_categories import initialize
from personal_expense.logging_utils import configure_logging, get_logger

logger = get_logger(__name__)


def create_app(settings: LedgerSettings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    db = Database(settings.database_url, echo=settings.echo_sql)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await db.init()
        # A failed seed is logged inside initialize(); serving continues.
        await initialize(db)
        try:
            yield
        finally:
            await db.dispose()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.db = db
    app.state.settings = settings

    app.include_router(transactions_router)
    app.include_router(summary_router)
    app.include_router(categories_router)
    app.include_router(health_router)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    return app


def serve() -> None:
    import uvicorn

    settings = get_settings()
    logger.info("Server is running on http://%s:%d", settings.host, settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    serve()
