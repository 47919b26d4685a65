import logging
import os
import subprocess
import sys

from lessons_api.config import get_settings

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("entrypoint")


def _parse_env_bool(value: str | None) -> bool:
  if value is None:
    return False
  return value.strip().lower() in {"1", "true", "yes", "on"}


def main() -> None:
  """Optionally migrate, then replace this process with uvicorn."""
  settings = get_settings()

  if _parse_env_bool(os.getenv("LESSONS_AUTO_APPLY_MIGRATIONS")):
    logger.info("Running database migrations...")
    try:
      subprocess.run([sys.executable, "-m", "alembic", "upgrade", "head"], check=True)
    except subprocess.CalledProcessError as e:
      logger.error("Migration failed with exit code %s", e.returncode)
      sys.exit(e.returncode)

  logger.info("Starting application on %s:%s", settings.host, settings.port)
  # execvp keeps uvicorn as PID 1 so it receives SIGTERM directly.
  args = ["uvicorn", "lessons_api.main:app", "--host", settings.host, "--port", str(settings.port), "--no-server-header"]
  os.execvp("uvicorn", args)


if __name__ == "__main__":
  main()
