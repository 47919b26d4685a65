from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from lessons_api.api.deps import get_lesson_filters, get_lessons_repo
from lessons_api.api.models import ErrorResponse, LessonListResponse
from lessons_api.services.lesson_filters import LessonFilters
from lessons_api.services.lessons import LessonFetchError, list_lessons
from lessons_api.storage.lessons_repo import LessonsRepository

router = APIRouter()
logger = logging.getLogger(__name__)


# Filters are declared first so bad input is rejected before a session is opened.
@router.get("", response_model=LessonListResponse, responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def get_lessons(filters: LessonFilters = Depends(get_lesson_filters), repo: LessonsRepository = Depends(get_lessons_repo)) -> LessonListResponse:  # noqa: B008
  """List lessons with their teachers, students and attendance count."""
  try:
    return await list_lessons(repo, filters)
  except Exception as exc:  # noqa: BLE001
    logger.error("Failed to fetch lessons filters=%s", filters, exc_info=True)
    raise LessonFetchError(str(exc)) from exc
