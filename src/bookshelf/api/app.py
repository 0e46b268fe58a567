"""
Main FastAPI application for the Bookshelf API
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..auth.middleware import SessionMiddleware
from ..auth.service import AuthService
from ..config import Settings
from ..database.connection import Database
from ..errors import StoreUnavailable
from ..graphql.schema import create_graphql_router, validate_schema
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware

logger = get_logger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Explicit configuration; read from the environment when omitted.
    """
    if settings is None:
        settings = Settings()

    configure_logging(debug=settings.debug, log_level=settings.log_level)

    database = Database.from_settings(settings)
    auth_service = AuthService.from_settings(settings, database)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting Bookshelf API...")

        ok, error_message = await database.check_connection()
        if not ok:
            logger.error("Store connection failed", error=error_message)
            await database.dispose()
            raise StoreUnavailable(f"Cannot start without a store: {error_message}")
        logger.info("Connected to store", database_url=database.safe_url)
        logger.info(
            "Server is running",
            url=f"http://{settings.host}:{settings.port}/graphql",
        )

        yield

        logger.info("Shutting down Bookshelf API...")
        await database.dispose()

    app = FastAPI(
        title="Bookshelf API",
        description="Books and user sessions over GraphQL",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.auth_service = auth_service

    # Starlette runs the last-added middleware first: CORS, logging, then session
    app.add_middleware(SessionMiddleware, tokens=auth_service.tokens)
    app.add_middleware(LoggingContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    logger.info("Validating GraphQL schema...")
    validate_schema()
    graphql_router = create_graphql_router(
        database,
        auth_service,
        graphiql=settings.graphiql and not settings.is_production,
    )
    app.include_router(graphql_router, prefix="")
    logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")

    return app
