import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from lessons_api.config import get_settings
from lessons_api.core.database import Database
from lessons_api.core.env_contract import EnvContractError, validate_runtime_env_or_raise
from lessons_api.core.logging import initialize_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
  """Own the store handle for the lifetime of the process."""
  settings = get_settings()
  logger = logging.getLogger("lessons_api.core.lifespan")

  initialize_logging(settings)
  try:
    validate_runtime_env_or_raise(logger=logger, target="service")
  except EnvContractError:
    logger.error("Environment contract failed; refusing to start the service.")
    raise

  database = Database.from_settings(settings)
  app.state.database = database
  logger.info("Startup complete environment=%s", settings.environment)
  try:
    yield
  finally:
    # Release pooled connections on shutdown.
    app.state.database = None
    await database.dispose()
