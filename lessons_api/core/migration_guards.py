"""Guarded Alembic operations for databases that may already hold the tables."""

from __future__ import annotations

from typing import Any

from alembic import op
from sqlalchemy import text


def table_exists(*, table_name: str, schema: str | None = None) -> bool:
  """Return True when a table exists in the target schema."""
  statement = text(
    """
    SELECT 1
    FROM information_schema.tables
    WHERE table_schema = :schema
      AND table_name = :table_name
      AND table_type = 'BASE TABLE'
    LIMIT 1
    """
  )
  result = op.get_bind().execute(statement, {"schema": schema or "public", "table_name": table_name})
  return result.first() is not None


def guarded_create_table(table_name: str, *args: Any, **kwargs: Any) -> bool:
  """Create a table only when it does not already exist; return whether it was created."""
  if table_exists(table_name=table_name, schema=kwargs.get("schema")):
    return False

  op.create_table(table_name, *args, **kwargs)
  return True


def guarded_drop_table(table_name: str, *args: Any, **kwargs: Any) -> None:
  """Drop a table only when it exists."""
  if not table_exists(table_name=table_name, schema=kwargs.get("schema")):
    return

  op.drop_table(table_name, *args, **kwargs)
