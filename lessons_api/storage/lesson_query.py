"""SQL construction for the lesson listing."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from sqlalchemy import Select, func, select

from lessons_api.schema.sql import Lesson, LessonStudent, LessonTeacher, Student, Teacher
from lessons_api.services.lesson_filters import LessonFilters

LessonQueryFilter = Callable[[Select, LessonFilters], Select]


def base_lessons_query() -> Select:
  """Lessons left-joined to teachers and students, one row per lesson."""
  return (
    select(Lesson.id, Lesson.date, Lesson.title, Lesson.status)
    .select_from(Lesson)
    .outerjoin(LessonTeacher, Lesson.id == LessonTeacher.lesson_id)
    .outerjoin(Teacher, LessonTeacher.teacher_id == Teacher.id)
    .outerjoin(LessonStudent, Lesson.id == LessonStudent.lesson_id)
    .outerjoin(Student, LessonStudent.student_id == Student.id)
    .group_by(Lesson.id)
    .order_by(Lesson.id)
  )


def filter_by_date(query: Select, filters: LessonFilters) -> Select:
  if filters.date_from is None or filters.date_to is None:
    return query
  if filters.is_date_range:
    return query.where(Lesson.date.between(filters.date_from, filters.date_to))
  return query.where(Lesson.date == filters.date_from)


def filter_by_status(query: Select, filters: LessonFilters) -> Select:
  if filters.status is None:
    return query
  return query.where(Lesson.status == filters.status)


def filter_by_teachers(query: Select, filters: LessonFilters) -> Select:
  # Applied before grouping, so only lessons with a matching assignment survive.
  if not filters.teacher_ids:
    return query
  return query.where(LessonTeacher.teacher_id.in_(filters.teacher_ids))


def filter_by_students_count(query: Select, filters: LessonFilters) -> Select:
  if filters.students_count is None:
    return query
  return query.having(func.count(LessonStudent.student_id.distinct()) == filters.students_count)


LESSON_QUERY_FILTERS: Sequence[LessonQueryFilter] = (filter_by_date, filter_by_status, filter_by_teachers, filter_by_students_count)


def build_lessons_query(filters: LessonFilters) -> Select:
  """Apply every filter in turn to the base query."""
  query = base_lessons_query()
  for apply_filter in LESSON_QUERY_FILTERS:
    query = apply_filter(query, filters)
  return query


def paginate(query: Select, filters: LessonFilters) -> Select:
  return query.limit(filters.lessons_per_page).offset(filters.offset)
