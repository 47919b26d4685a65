from __future__ import annotations

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException

from lessons_api.api.models import HealthResponse
from lessons_api.api.routes import lessons
from lessons_api.config import get_settings
from lessons_api.core.exceptions import global_exception_handler, http_exception_handler, lesson_fetch_exception_handler, lesson_query_exception_handler, request_validation_exception_handler
from lessons_api.core.lifespan import lifespan
from lessons_api.core.middleware import RequestLoggingMiddleware
from lessons_api.services.lesson_filters import LessonQueryError
from lessons_api.services.lessons import LessonFetchError


def create_app() -> FastAPI:
  """Build the application; the store handle is attached by the lifespan."""
  settings = get_settings()
  application = FastAPI(title="Lessons API", version="0.1.0", lifespan=lifespan)

  if settings.allowed_origins:
    application.add_middleware(CORSMiddleware, allow_origins=list(settings.allowed_origins), allow_methods=["GET", "OPTIONS"], allow_headers=["content-type"])

  application.add_exception_handler(Exception, global_exception_handler)
  application.add_exception_handler(HTTPException, http_exception_handler)
  application.add_exception_handler(RequestValidationError, request_validation_exception_handler)
  application.add_exception_handler(LessonQueryError, lesson_query_exception_handler)
  application.add_exception_handler(LessonFetchError, lesson_fetch_exception_handler)

  application.add_middleware(RequestLoggingMiddleware)

  @application.get("/health", response_model=HealthResponse)
  async def health_check() -> HealthResponse:
    """Liveness probe; never touches the store."""
    return HealthResponse(status="ok")

  application.include_router(lessons.router, prefix="/lessons", tags=["lessons"])
  return application


app = create_app()
