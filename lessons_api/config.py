"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from lessons_api.utils.env import default_env_path, load_env_file

load_env_file(default_env_path(), override=False)

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class Settings:
  """Typed settings for the lessons service."""

  environment: str
  debug: bool
  host: str
  port: int
  pg_dsn: str | None
  pg_pool_size: int
  log_level: str
  log_dir: str | None
  log_max_bytes: int
  log_backup_count: int
  allowed_origins: tuple[str, ...]


def _parse_bool(raw: str | None) -> bool:
  """Parse a boolean-ish string from environment variables."""

  if raw is None:
    return False

  normalized = raw.strip().lower()
  return normalized in {"1", "true", "yes", "on"}


def _optional_str(raw: str | None) -> str | None:
  if raw is None:
    return None
  stripped = raw.strip()
  return stripped or None


def _parse_int(name: str, default: str) -> int:
  raw = os.getenv(name, default).strip()
  try:
    return int(raw)
  except ValueError:
    raise ValueError(f"{name} must be an integer.") from None


def _parse_origins(raw: str | None) -> tuple[str, ...]:
  # CORS stays disabled unless origins are configured.
  if not raw:
    return ()

  origins = [origin.strip() for origin in raw.split(",") if origin.strip()]

  if "*" in origins:
    raise ValueError("LESSONS_ALLOWED_ORIGINS must not include wildcard origins.")

  return tuple(origins)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
  """Load settings once per process."""

  environment = os.getenv("LESSONS_ENV", "development").strip().lower()
  debug = _parse_bool(os.getenv("LESSONS_DEBUG"))

  port = _parse_int("PORT", "3000")
  if not 0 < port < 65536:
    raise ValueError("PORT must be between 1 and 65535.")

  pg_pool_size = _parse_int("LESSONS_PG_POOL_SIZE", "5")
  if pg_pool_size <= 0:
    raise ValueError("LESSONS_PG_POOL_SIZE must be a positive integer.")

  log_level = os.getenv("LESSONS_LOG_LEVEL", "INFO").strip().upper()
  if log_level not in _LOG_LEVELS:
    raise ValueError(f"LESSONS_LOG_LEVEL must be one of: {', '.join(sorted(_LOG_LEVELS))}.")

  log_max_bytes = _parse_int("LESSONS_LOG_MAX_BYTES", "5242880")  # 5MB default
  if log_max_bytes <= 0:
    raise ValueError("LESSONS_LOG_MAX_BYTES must be a positive integer.")

  log_backup_count = _parse_int("LESSONS_LOG_BACKUP_COUNT", "10")
  if log_backup_count < 0:
    raise ValueError("LESSONS_LOG_BACKUP_COUNT must be zero or a positive integer.")

  return Settings(
    environment=environment,
    debug=debug,
    host=os.getenv("LESSONS_HOST", "0.0.0.0").strip(),
    port=port,
    pg_dsn=_optional_str(os.getenv("PG_CONNECTION_STRING")),
    pg_pool_size=pg_pool_size,
    log_level="DEBUG" if debug else log_level,
    log_dir=_optional_str(os.getenv("LESSONS_LOG_DIR")),
    log_max_bytes=log_max_bytes,
    log_backup_count=log_backup_count,
    allowed_origins=_parse_origins(os.getenv("LESSONS_ALLOWED_ORIGINS")),
  )
