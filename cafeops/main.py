import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cafeops.core.config import Settings, settings as default_settings
from cafeops.core.errors import install_error_handlers
from cafeops.core.logging import configure_logging
from cafeops.db.database import Database
from cafeops.routers.flags import router as flags_router
from cafeops.routers.inventory import router as inventory_router
from cafeops.routers.notices import router as notices_router
from cafeops.routers.shifts import router as shifts_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = Database(settings.database_url, echo=settings.database_echo)
        try:
            await db.create_all()
            app.state.db = db
            logger.info("Database ready: %s", settings.database_url)
            yield
        finally:
            await db.dispose()

    app = FastAPI(
        title="Cafe Operations API",
        description="Shifts, inventory, notices and daily flags for the shop",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.info("CORS origins: %s", ", ".join(settings.cors_origins))

    install_error_handlers(app, settings)

    app.include_router(shifts_router, prefix="/api/shifts", tags=["shifts"])
    app.include_router(inventory_router, prefix="/api/inventory", tags=["inventory"])
    app.include_router(notices_router, prefix="/api/notices", tags=["notices"])
    app.include_router(flags_router, prefix="/api/flags", tags=["flags"])

    @app.get("/api/health", tags=["health"])
    async def health():
        return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}

    return app


app = create_app()


def run() -> None:
    uvicorn.run("cafeops.main:app", host=default_settings.host, port=default_settings.port)


if __name__ == "__main__":
    run()
