"""Postgres-backed repository for lesson listing using SQLAlchemy."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lessons_api.schema.sql import LessonStudent, LessonTeacher, Student, Teacher
from lessons_api.services.lesson_filters import LessonFilters
from lessons_api.storage.lesson_query import build_lessons_query, paginate
from lessons_api.storage.lessons_repo import LessonPage, LessonRow, LessonsRepository, StudentAssignmentRecord, TeacherAssignmentRecord

logger = logging.getLogger(__name__)


class PostgresLessonsRepository(LessonsRepository):
  """Read lessons from Postgres within one request-scoped session."""

  def __init__(self, session: AsyncSession) -> None:
    self._session = session

  async def fetch_lesson_page(self, filters: LessonFilters) -> LessonPage:
    """Run the filtered, grouped lesson query for one page."""
    query = paginate(build_lessons_query(filters), filters)
    result = await self._session.execute(query)
    rows = [LessonRow(id=row.id, date=row.date, title=row.title, status=row.status) for row in result.all()]
    logger.debug("Fetched %d lessons for page=%d per_page=%d", len(rows), filters.page, filters.lessons_per_page)
    return LessonPage(rows=rows, current_page=filters.page)

  async def fetch_teacher_assignments(self, lesson_ids: Sequence[int]) -> list[TeacherAssignmentRecord]:
    """Return teacher assignments for the given lessons."""
    if not lesson_ids:
      return []
    query = (
      select(LessonTeacher.lesson_id, Teacher.id, Teacher.name)
      .join(Teacher, LessonTeacher.teacher_id == Teacher.id)
      .where(LessonTeacher.lesson_id.in_(lesson_ids))
      .order_by(LessonTeacher.lesson_id, Teacher.id)
    )
    result = await self._session.execute(query)
    return [TeacherAssignmentRecord(lesson_id=row.lesson_id, teacher_id=row.id, name=row.name) for row in result.all()]

  async def fetch_student_assignments(self, lesson_ids: Sequence[int]) -> list[StudentAssignmentRecord]:
    """Return student assignments, with attendance, for the given lessons."""
    if not lesson_ids:
      return []
    query = (
      select(LessonStudent.lesson_id, Student.id, Student.name, LessonStudent.visit)
      .join(Student, LessonStudent.student_id == Student.id)
      .where(LessonStudent.lesson_id.in_(lesson_ids))
      .order_by(LessonStudent.lesson_id, Student.id)
    )
    result = await self._session.execute(query)
    return [StudentAssignmentRecord(lesson_id=row.lesson_id, student_id=row.id, name=row.name, visit=bool(row.visit)) for row in result.all()]
