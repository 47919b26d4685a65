from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from urllib.parse import urlparse

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from lessons_api.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
  pass


def database_url(dsn: str | None) -> str | None:
  """Normalize a Postgres DSN so SQLAlchemy picks the asyncpg driver."""
  if dsn and dsn.startswith("postgres://"):
    dsn = dsn.replace("postgres://", "postgresql://", 1)
  if dsn and dsn.startswith("postgresql://"):
    dsn = dsn.replace("postgresql://", "postgresql+asyncpg://", 1)

  return dsn


def redact_dsn(raw: str | None) -> str:
  """Redact credentials from a DSN while keeping host/db visible."""
  # Provide a stable placeholder when the DSN is missing.
  if not raw:
    return "<unset>"

  parsed = urlparse(raw)
  # Guard against malformed DSNs without a scheme.
  if not parsed.scheme:
    return "<invalid>"

  user = parsed.username or ""
  host = parsed.hostname or ""
  port = f":{parsed.port}" if parsed.port else ""
  netloc = f"{user}@{host}{port}" if user else f"{host}{port}"
  database = parsed.path.lstrip("/")
  path = f"/{database}" if database else ""
  return f"{parsed.scheme}://{netloc}{path}"


class Database:
  """Pooled store handle owned by the application lifespan."""

  def __init__(self, engine: AsyncEngine) -> None:
    self.engine = engine
    self.session_factory = async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)

  @classmethod
  def from_settings(cls, settings: Settings) -> Database:
    url = database_url(settings.pg_dsn)
    if not url:
      raise RuntimeError("Database connection is not configured (PG_CONNECTION_STRING is missing).")
    engine = create_async_engine(url, echo=settings.debug, pool_size=settings.pg_pool_size, pool_pre_ping=True)
    logger.info("Database engine created for %s", redact_dsn(settings.pg_dsn))
    return cls(engine)

  async def dispose(self) -> None:
    """Close every pooled connection."""
    await self.engine.dispose()
    logger.info("Database engine disposed.")


async def get_db(request: Request) -> AsyncGenerator[AsyncSession]:
  """Dependency to get a database session."""
  database: Database | None = getattr(request.app.state, "database", None)
  if database is None:
    raise RuntimeError("Database connection is not configured (PG_CONNECTION_STRING is missing).")

  async with database.session_factory() as session:
    try:
      yield session
    finally:
      await session.close()
