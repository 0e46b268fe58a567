"""
Database connection management
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import DataError, DBAPIError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from ..config import Settings
from ..dbmodels import Base
from ..errors import StoreError, StoreUnavailable, ValidationError
from ..logging import get_logger

logger = get_logger(__name__)


def to_async_url(url: str) -> str:
    """Rewrite a plain store URI to the async driver SQLAlchemy needs."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


def _is_memory_sqlite(url: str) -> bool:
    return url.startswith("sqlite") and (":memory:" in url or url.rstrip("/").endswith("sqlite+aiosqlite:"))


class Database:
    """Async engine and session factory for one store URI.

    Constructed once at process start from the configured ``STORE_URI``; the
    engine is created lazily on first use.
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 10,
        max_overflow: int = 20,
        echo: bool = False,
    ):
        self.url = to_async_url(url)
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.echo = echo
        self._engine: AsyncEngine | None = None
        self._session_local: async_sessionmaker[AsyncSession] | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.store_uri,
            pool_size=settings.store_pool_size,
            max_overflow=settings.store_max_overflow,
            echo=settings.sql_echo,
        )

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = self._create_engine()
            self._session_local = async_sessionmaker(
                self._engine,
                class_=AsyncSession,
                autoflush=False,
                expire_on_commit=False,
            )
            logger.info("Database engine created", database_url=self.safe_url)
        return self._engine

    def _get_session_local(self) -> async_sessionmaker[AsyncSession]:
        _ = self.engine
        assert self._session_local is not None
        return self._session_local

    @property
    def safe_url(self) -> str:
        """Store URL with any password masked, for logs."""
        return make_url(self.url).render_as_string(hide_password=True)

    def _create_engine(self) -> AsyncEngine:
        if _is_memory_sqlite(self.url):
            # One shared connection, otherwise every session sees an empty database
            return create_async_engine(
                self.url,
                echo=self.echo,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        if self.url.startswith("sqlite"):
            return create_async_engine(self.url, echo=self.echo)
        return create_async_engine(
            self.url,
            pool_size=self.pool_size,
            max_overflow=self.max_overflow,
            echo=self.echo,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get a database session that commits on success and rolls back on failure.

        Store errors are mapped to coded errors without SQL text: DataError to
        ValidationError, connection failures to StoreUnavailable, any other
        DBAPIError to StoreError.
        """
        session_local = self._get_session_local()

        try:
            async with session_local() as session:
                try:
                    yield session
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise
        except DataError as e:
            logger.warning("Store rejected a value", error=str(e.orig))
            raise ValidationError("Value does not fit the store column") from e
        except (OperationalError, InterfaceError) as e:
            logger.error("Store operation failed", error=str(e.orig))
            raise StoreUnavailable() from e
        except DBAPIError as e:
            logger.error("Store error", error_type=type(e).__name__, error=str(e.orig))
            raise StoreError() from e
        except OSError as e:
            logger.error("Store connection failed", error=str(e))
            raise StoreUnavailable() from e

    async def check_connection(self) -> tuple[bool, str | None]:
        """
        Test the database connection and return helpful error messages.

        Returns:
            tuple: (success: bool, error_message: str | None)
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
                return True, None
        except (DBAPIError, OSError) as e:
            error_str = str(e)
            error_type = type(e).__name__

            if "does not exist" in error_str:
                db_name = self.url.split("/")[-1].split("?")[0]
                return False, (
                    f"Cannot connect to store: {error_str}\n"
                    f"This usually means:\n"
                    f"  1. The database server is not running\n"
                    f"  2. The database '{db_name}' doesn't exist\n"
                    f"  3. The database user/role doesn't exist\n"
                    f"Please check STORE_URI and run migrations if needed."
                )
            elif "Connection refused" in error_str or "could not connect" in error_str:
                return False, (
                    f"Cannot connect to store server: {error_str}\n"
                    f"The database server appears to be down or unreachable."
                )
            elif "password authentication failed" in error_str:
                return False, (
                    f"Store authentication failed: {error_str}\n"
                    f"Please check the credentials in STORE_URI."
                )
            else:
                return False, f"Store connection error ({error_type}): {error_str}"

    async def create_all(self) -> None:
        """Create all tables directly from the ORM metadata (tests and local bootstrap)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_local = None
