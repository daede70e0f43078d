"""
REST Client - FastAPI Application Entry Point

A Postman-like REST client backend: sends composed HTTP requests, keeps a
searchable history, and stores collections and environments.
"""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, settings as default_settings
from .database import Database
from .exceptions import register_exception_handlers
from .routers import backup, collections, environments, execute, history
from .services.document_store import DocumentStore

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format=LOG_FORMAT)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use; defaults to the environment-derived ones

    Returns:
        The configured FastAPI application
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler for startup and shutdown events."""
        configure_logging(settings)
        logger.info("Starting %s v%s", settings.APP_NAME, settings.APP_VERSION)
        database = Database(settings.DATABASE_URL, echo=settings.SQL_ECHO)
        database.init()
        app.state.database = database
        app.state.document_store = DocumentStore(settings.DATA_DIR)
        app.state.http_client = httpx.AsyncClient(timeout=settings.REQUEST_TIMEOUT)
        try:
            yield
        finally:
            await app.state.http_client.aclose()
            database.dispose()
            logger.info("Shutting down %s", settings.APP_NAME)

    app = FastAPI(
        title=settings.APP_NAME,
        description="A Postman-like REST client for sending requests and browsing history",
        version=settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get("/")
    async def root():
        """Root endpoint returning API information."""
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "docs": "/docs"
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    app.include_router(execute.router)
    app.include_router(history.router)
    app.include_router(collections.router)
    app.include_router(environments.router)
    app.include_router(backup.router)

    return app


app = create_app()
