"""Runtime environment contract checks for the service and migrator processes.

Missing or malformed configuration fails startup instead of surfacing later as
request errors. Secret values are never logged.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

EnvUseTarget = Literal["service", "migrator", "both"]
EnvValidator = Callable[[str], str | None]


@dataclass(frozen=True)
class EnvVarDefinition:
  """Describe how and where an environment variable must be validated."""

  name: str
  required: bool
  secret: bool
  used_by: EnvUseTarget
  validator: EnvValidator | None = None


class EnvContractError(RuntimeError):
  """Raised when required runtime environment keys are missing or invalid."""


def _validate_postgres_dsn(value: str) -> str | None:
  if value.startswith(("postgres://", "postgresql://", "postgresql+asyncpg://")):
    return None

  return "must be a postgres:// or postgresql:// connection string."


def _validate_port(value: str) -> str | None:
  if value.strip().isdigit() and 0 < int(value) < 65536:
    return None

  return "must be an integer between 1 and 65535."


def _validate_no_wildcard_origins(value: str) -> str | None:
  origins = [origin.strip() for origin in value.split(",") if origin.strip()]
  if "*" in origins:
    return "must not include wildcard origins."

  return None


REQUIRED_ENV_REGISTRY: tuple[EnvVarDefinition, ...] = (
  EnvVarDefinition(name="PG_CONNECTION_STRING", required=True, secret=True, used_by="both", validator=_validate_postgres_dsn),
  EnvVarDefinition(name="PORT", required=False, secret=False, used_by="service", validator=_validate_port),
  EnvVarDefinition(name="LESSONS_ENV", required=False, secret=False, used_by="service"),
  EnvVarDefinition(name="LESSONS_ALLOWED_ORIGINS", required=False, secret=False, used_by="service", validator=_validate_no_wildcard_origins),
)


def _iter_applicable_definitions(*, target: Literal["service", "migrator"]) -> tuple[EnvVarDefinition, ...]:
  """Filter registry entries so each process validates only relevant keys."""
  return tuple(definition for definition in REQUIRED_ENV_REGISTRY if definition.used_by in {"both", target})


def validate_env_values(*, target: Literal["service", "migrator"], env_map: dict[str, str]) -> list[str]:
  """Validate a provided env map against contract rules for a target process."""
  errors: list[str] = []
  for definition in _iter_applicable_definitions(target=target):
    value = env_map.get(definition.name, "")
    if definition.required and value.strip() == "":
      errors.append(f"{definition.name}: required variable is missing.")
      continue

    if definition.validator and value.strip() != "":
      validation_error = definition.validator(value.strip())
      if validation_error:
        errors.append(f"{definition.name}: {validation_error}")

  return errors


def validate_runtime_env_or_raise(*, logger: logging.Logger, target: Literal["service", "migrator"]) -> None:
  """Validate and log runtime env values using the centralized contract."""
  resolved_values: dict[str, str] = {}
  applicable_definitions = _iter_applicable_definitions(target=target)
  for definition in applicable_definitions:
    value = os.getenv(definition.name, "")
    resolved_values[definition.name] = value
    if definition.secret:
      logger.info("ENV_CHECK key=%s value=<redacted>", definition.name)
    elif value == "":
      logger.info("ENV_CHECK key=%s value=<missing>", definition.name)
    else:
      logger.info("ENV_CHECK key=%s value=%s", definition.name, value)

  errors = validate_env_values(target=target, env_map=resolved_values)
  if not errors:
    logger.info("ENV_CHECK status=ok target=%s checked=%d", target, len(applicable_definitions))
    return

  message = "ENV_CHECK status=failed target={target} violations:\n- {errors}".format(target=target, errors="\n- ".join(errors))
  logger.error(message)
  raise EnvContractError(message)
