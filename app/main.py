from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api_routers.v1 import api_router
from app.features.health.routes.health import router as health_router
from app.middlewares.rate_limit import RateLimitMiddleware
from app.platform.config import settings
from app.platform.db.session import build_engine, build_sessionmaker, create_tables
from app.platform.exceptions import add_exception_handlers
from app.platform.logger import get_logger
from app.platform.services.email import Mailer

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = build_engine()
    app.state.engine = engine
    app.state.sessionmaker = build_sessionmaker(engine)
    app.state.mailer = Mailer()

    if settings.AUTO_CREATE_TABLES:
        await create_tables(engine)
        logger.info("Database tables created")

    logger.info(f"{settings.APP_NAME} started ({settings.ENVIRONMENT})")
    try:
        yield
    finally:
        await engine.dispose()
        logger.info(f"{settings.APP_NAME} stopped")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description="Backend for a rental company website: admin accounts, properties, contact inbox and page content",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Root endpoint for basic info
    @app.get("/", tags=["Info"])
    def root():
        return {
            "app_name": settings.APP_NAME,
            "version": "1.0.0",
            "docs_url": "/docs",
            "api_base": "/api/v1",
        }

    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    add_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()
