"""Async engine and session lifecycle for the user store."""
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine
)
from sqlalchemy.pool import NullPool

from tresor.infrastructure.logging import get_logger

logger = get_logger(__name__)

# Sync driver names as they appear in settings, mapped to their async driver
ASYNC_DRIVERS = {
    "sqlite": "sqlite+aiosqlite",
    "postgresql": "postgresql+asyncpg",
}


def to_async_url(url: str) -> str:
    """Swap a plain dialect for its async driver; explicit drivers are kept."""
    parsed = make_url(url)
    driver = ASYNC_DRIVERS.get(parsed.drivername)
    if driver is None:
        return url
    return parsed.set(drivername=driver).render_as_string(hide_password=False)


class DatabaseConnection:
    """Owns the engine; hands out one session per unit of work."""
    
    def __init__(
        self,
        database_url: str,
        pool_size: int = 10,
        max_overflow: int = 20,
        echo: bool = False
    ):
        self.database_url = to_async_url(database_url)
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker[AsyncSession]] = None
    
    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")
    
    def _engine_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"echo": self.echo}
        if self.is_sqlite:
            # One file, no server: a fresh connection per session
            options["poolclass"] = NullPool
        else:
            options.update(
                pool_size=self.pool_size,
                max_overflow=self.max_overflow,
                pool_pre_ping=True,
            )
        return options
    
    async def connect(self) -> None:
        if self._engine is not None:
            return
        self._engine = create_async_engine(self.database_url, **self._engine_options())
        self._sessionmaker = async_sessionmaker(self._engine, expire_on_commit=False)
        logger.info("database_connected", dialect=self._engine.dialect.name)
    
    async def create_schema(self) -> None:
        """Create the users table if it does not exist yet."""
        from tresor.infrastructure.database.models import Base
        
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("database_schema_ready")
    
    async def ping(self) -> bool:
        """True when the store answers a trivial query."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning("database_ping_failed", error=str(e))
            return False
        return True
    
    async def disconnect(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        logger.info("database_disconnected")
    
    @asynccontextmanager
    async def get_session(self) -> AsyncIterator[AsyncSession]:
        """Session that commits on clean exit and rolls back on error."""
        if self._sessionmaker is None:
            raise RuntimeError("Database not connected")
        
        async with self._sessionmaker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
    
    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database not connected")
        return self._engine
