from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from vidto.config import Settings, settings as default_settings
from vidto.database import Database
from vidto.logger import app_logger, configure_logging, db_logger
from vidto.routers import tags, videos


def create_app(config: Settings | None = None, database: Database | None = None) -> FastAPI:
    """
    Build the API application.

    Args:
        config: Settings override (defaults to environment settings)
        database: Store handle to use; when omitted one is created at
            startup from ``config.database_url`` and disposed at shutdown
    """
    config = config or default_settings
    configure_logging(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Own the store handle for the lifetime of the process."""
        app_logger.info(f"Starting {config.app_name}")
        app_logger.info(f"Environment: {config.environment}")
        app_logger.info(f"Debug mode: {config.debug}")

        owned = app.state.database is None
        if owned:
            app.state.database = Database.from_settings(config)
        if config.auto_create_tables and not config.is_production:
            app.state.database.create_all()

        # Test database connection
        try:
            app.state.database.ping()
            db_logger.info("Database connection successful")
        except Exception as e:
            db_logger.error(f"Database connection failed: {e}")

        yield

        app_logger.info("Shutting down application")
        if owned:
            app.state.database.dispose()
            app.state.database = None

    app = FastAPI(
        title=config.app_name,
        debug=config.debug,
        docs_url=f"{config.api_prefix}/docs" if not config.is_production else None,
        redoc_url=f"{config.api_prefix}/redoc" if not config.is_production else None,
        openapi_url=f"{config.api_prefix}/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Include routers
    app.include_router(videos.router, prefix=config.api_prefix, tags=["Videos"])
    app.include_router(tags.router, prefix=config.api_prefix, tags=["Tags"])

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "app": config.app_name,
            "environment": config.environment,
        }

    @app.get("/health")
    async def health_check(request: Request):
        """Detailed health check endpoint."""
        db_status = "connected"
        try:
            request.app.state.database.ping()
        except Exception as e:
            db_status = f"error: {str(e)}"

        return {
            "status": "healthy",
            "app": config.app_name,
            "version": "1.0.0",
            "environment": config.environment,
            "database": db_status,
        }

    return app


app = create_app()
