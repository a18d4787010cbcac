import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from dto_dashboard.config import get_settings
from dto_dashboard.dashboard import Dashboard, build_dashboard
from dto_dashboard.api.routes.documents import router as documents_router
from dto_dashboard.api.routes.pipeline import router as pipeline_router
from dto_dashboard.api.routes.system import router as system_router
from dto_dashboard.api.routes.uploads import router as uploads_router

logger = logging.getLogger(__name__)


def create_app(dashboard: Dashboard | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        settings = get_settings()

        logging.basicConfig(
            level=getattr(logging, settings.log_level.upper(), logging.INFO),
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )

        logger.info("Starting dto-dashboard API")

        state = dashboard or build_dashboard(settings)
        app.state.dashboard = state

        # Initial catalog load; a failure is kept on the cache, not raised
        await state.start()

        yield

        state.close()
        logger.info("Shutting down dto-dashboard API")

    app = FastAPI(
        title="DTO Control Room",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(system_router, prefix="/api")
    app.include_router(documents_router, prefix="/api")
    app.include_router(uploads_router, prefix="/api")
    app.include_router(pipeline_router, prefix="/api")

    return app


app = create_app()


def main():
    """Entry point for dto-dashboard-api script."""
    uvicorn.run(
        "dto_dashboard.api.app:app",
        host="0.0.0.0",
        port=8000,
        reload=False,
    )
