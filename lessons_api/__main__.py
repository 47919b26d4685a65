import uvicorn

from lessons_api.config import get_settings


def main() -> None:
  """Serve the app with host and port from settings."""
  settings = get_settings()
  uvicorn.run("lessons_api.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower(), server_header=False)


if __name__ == "__main__":
  main()
