from contextlib import asynccontextmanager
from datetime import datetime
from typing import Callable, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.endpoints.health import router as health_router
from .api.errors import register_exception_handlers
from .api.router import router as api_router
from .core.config import DEFAULT_SECRET_KEY, Settings, get_settings
from .core.logger import configure_logging, setup_logger
from .db.session import create_db_and_tables, create_db_engine
from .models.base import utcnow

logger = setup_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create tables on startup
    create_db_and_tables(app.state.engine)
    logger.info("%s startup complete", app.title)
    yield
    app.state.engine.dispose()
    logger.info("%s shutdown complete", app.title)


def create_app(
    settings: Optional[Settings] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    if settings.SECRET_KEY == DEFAULT_SECRET_KEY:
        logger.warning("SECRET_KEY is not set; tokens are signed with the development placeholder")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Task management REST service with token authentication",
        version=settings.VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = create_db_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)
    app.state.clock = clock or utcnow

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include API routers
    app.include_router(health_router, tags=["health"])
    app.include_router(api_router, prefix=settings.API_PREFIX)

    return app


def run() -> None:
    """Entry point of the ``task-api`` console script."""
    settings = get_settings()
    app = create_app(settings)
    logger.info("Starting %s on %s:%s", settings.PROJECT_NAME, settings.HOST, settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
