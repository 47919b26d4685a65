"""Shared FastAPI dependencies."""

from __future__ import annotations

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from lessons_api.core.database import get_db
from lessons_api.services.lesson_filters import LessonFilters, parse_lesson_filters
from lessons_api.storage.lessons_repo import LessonsRepository
from lessons_api.storage.postgres_lessons_repo import PostgresLessonsRepository


def get_lesson_filters(
  date: str | None = Query(None, description="YYYY-MM-DD or YYYY-MM-DD,YYYY-MM-DD (inclusive range)."),
  status: str | None = Query(None, description="Exact lesson status."),
  teacher_ids: str | None = Query(None, alias="teacherIds", description="Comma-separated teacher ids."),
  students_count: str | None = Query(None, alias="studentsCount", description="Exact number of distinct students."),
  page: str | None = Query(None, description="1-indexed page number, default 1."),
  lessons_per_page: str | None = Query(None, alias="lessonsPerPage", description="Page size, default 5."),
) -> LessonFilters:
  """Parse the lesson listing query string; raises LessonQueryError on bad input."""
  # Parameters stay raw strings here so every rejection carries its own message.
  return parse_lesson_filters(date=date, status=status, teacher_ids=teacher_ids, students_count=students_count, page=page, lessons_per_page=lessons_per_page)


async def get_lessons_repo(session: AsyncSession = Depends(get_db)) -> LessonsRepository:  # noqa: B008
  """Bind the lessons repository to the request session."""
  return PostgresLessonsRepository(session)
