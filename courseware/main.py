"""
courseware/main.py
Application factory

Run locally:  python -m courseware.main
Deploy:       gunicorn -c deploy/gunicorn.conf.py courseware.main:app
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from courseware.config import settings
from courseware.database import AsyncSessionLocal, init_db, close_db
from courseware.errors import register_exception_handlers
from courseware.routes import api_router
from courseware.seed.seed_catalog import seed_catalog
from courseware.services import build_services

APP_VERSION = "1.0.0"

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)

DEFAULT_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:8000",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
    "http://127.0.0.1:8000",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting application...")
    try:
        await init_db()
        if settings.SEED_ON_STARTUP:
            async with AsyncSessionLocal() as session:
                await seed_catalog(session)
    except Exception as e:
        logger.error(f"Failed to initialize database: {str(e)}")
        raise

    yield

    logger.info("Shutting down application...")
    try:
        await close_db()
    except Exception as e:
        logger.error(f"Error closing database connection: {str(e)}")


def create_app(use_lifespan: bool = True) -> FastAPI:
    """
    Build the FastAPI application.

    Tests pass use_lifespan=False and swap `get_db` for an in-memory
    database through dependency_overrides.
    """
    app = FastAPI(
        title="Courseware API",
        description="Courses, ordered chapters and lessons, lesson progress and achievements",
        version=APP_VERSION,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan if use_lifespan else None
    )

    app.state.services = build_services()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=DEFAULT_ORIGINS + settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get("/health", tags=["Health"])
    async def health_check():
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "database": "sqlite" if settings.is_sqlite else "external",
            "version": APP_VERSION
        }

    app.include_router(api_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    reload = settings.is_development

    logger.info(f"Starting server on {settings.HOST}:{settings.PORT}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Auto-reload: {reload}")

    uvicorn.run(
        "courseware.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=reload,
        log_level=settings.LOG_LEVEL.lower()
    )
