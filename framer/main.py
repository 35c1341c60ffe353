from fastapi import FastAPI

from framer.api.routes.frames import router as frames_router
from framer.api.routes.health import router as health_router
from framer.config import settings
from framer.log import configure_logging


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.app_name)

    app.include_router(health_router, prefix="/api/v1")
    app.include_router(frames_router, prefix="/api/v1")
    return app


app = create_app()
