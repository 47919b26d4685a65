"""Lesson listing: page fetch, in-memory enrichment and response shaping."""

from __future__ import annotations

import datetime
import logging
from collections import defaultdict

from lessons_api.api.models import LessonListResponse, LessonView, StudentView, TeacherView
from lessons_api.services.lesson_filters import LessonFilters
from lessons_api.storage.lessons_repo import LessonRow, LessonsRepository, StudentAssignmentRecord, TeacherAssignmentRecord

logger = logging.getLogger(__name__)

LESSON_DATE_FORMAT = "%Y-%m-%d"
FETCH_ERROR_MESSAGE = "An error occurred while fetching lessons."


class LessonFetchError(RuntimeError):
  """Raised when the store fails while listing lessons."""

  def __init__(self, details: str) -> None:
    super().__init__(details)
    self.details = details


def format_lesson_date(value: datetime.date) -> str:
  return value.strftime(LESSON_DATE_FORMAT)


def assemble_lesson_views(rows: list[LessonRow], teachers: list[TeacherAssignmentRecord], students: list[StudentAssignmentRecord]) -> list[LessonView]:
  """Attach teachers and students to each lesson row.

  Assignments are grouped by lesson id in the order they were fetched;
  lessons keep the order of `rows`. Assignments for lessons that are not in
  `rows` are ignored.
  """
  teachers_by_lesson: dict[int, list[TeacherView]] = defaultdict(list)
  for teacher in teachers:
    teachers_by_lesson[teacher.lesson_id].append(TeacherView(id=teacher.teacher_id, name=teacher.name))

  students_by_lesson: dict[int, list[StudentView]] = defaultdict(list)
  for student in students:
    students_by_lesson[student.lesson_id].append(StudentView(id=student.student_id, name=student.name, visit=student.visit))

  views: list[LessonView] = []
  for row in rows:
    lesson_students = students_by_lesson.get(row.id, [])
    views.append(
      LessonView(
        id=row.id,
        date=format_lesson_date(row.date),
        title=row.title,
        status=row.status,
        visit_count=sum(1 for student in lesson_students if student.visit),
        students=lesson_students,
        teachers=teachers_by_lesson.get(row.id, []),
      )
    )
  return views


async def list_lessons(repo: LessonsRepository, filters: LessonFilters) -> LessonListResponse:
  """Fetch one page of lessons and shape the response body."""
  page = await repo.fetch_lesson_page(filters)
  lesson_ids = [row.id for row in page.rows]
  # Assignment reads stay sequential; one AsyncSession runs one statement at a time.
  teachers = await repo.fetch_teacher_assignments(lesson_ids)
  students = await repo.fetch_student_assignments(lesson_ids)

  lessons = assemble_lesson_views(page.rows, teachers, students)
  logger.info("Listed %d lessons page=%d", len(lessons), page.current_page)
  # totalCount counts the current page only, not every matching lesson.
  return LessonListResponse(current_page=page.current_page, total_count=len(lessons), lessons=lessons)
