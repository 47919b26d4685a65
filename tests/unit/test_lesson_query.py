"""Unit tests for the lesson listing SQL."""

from __future__ import annotations

import datetime

from sqlalchemy.dialects import postgresql

from lessons_api.services.lesson_filters import parse_lesson_filters
from lessons_api.storage.lesson_query import build_lessons_query, paginate


def _compile(query) -> tuple[str, dict]:
  compiled = query.compile(dialect=postgresql.dialect())
  return " ".join(str(compiled).split()), compiled.params


def test_base_query_left_joins_and_groups_by_lesson() -> None:
  sql, params = _compile(build_lessons_query(parse_lesson_filters()))
  assert sql.startswith("SELECT lessons.id, lessons.date, lessons.title, lessons.status FROM lessons")
  assert "LEFT OUTER JOIN lesson_teachers ON lessons.id = lesson_teachers.lesson_id" in sql
  assert "LEFT OUTER JOIN teachers ON lesson_teachers.teacher_id = teachers.id" in sql
  assert "LEFT OUTER JOIN lesson_students ON lessons.id = lesson_students.lesson_id" in sql
  assert "LEFT OUTER JOIN students ON lesson_students.student_id = students.id" in sql
  assert "GROUP BY lessons.id" in sql
  assert "ORDER BY lessons.id" in sql
  assert "WHERE" not in sql
  assert "HAVING" not in sql
  assert params == {}


def test_single_date_filters_by_equality() -> None:
  sql, params = _compile(build_lessons_query(parse_lesson_filters(date="2022-01-01")))
  assert "WHERE lessons.date = " in sql
  assert "BETWEEN" not in sql
  assert list(params.values()) == [datetime.date(2022, 1, 1)]


def test_date_range_filters_with_between() -> None:
  sql, params = _compile(build_lessons_query(parse_lesson_filters(date="2022-01-01,2022-01-31")))
  assert "lessons.date BETWEEN" in sql
  assert sorted(params.values()) == [datetime.date(2022, 1, 1), datetime.date(2022, 1, 31)]


def test_status_filters_by_equality() -> None:
  sql, params = _compile(build_lessons_query(parse_lesson_filters(status="done")))
  assert "lessons.status = " in sql
  assert list(params.values()) == ["done"]


def test_teacher_ids_filter_the_join_before_grouping() -> None:
  sql, params = _compile(build_lessons_query(parse_lesson_filters(teacher_ids="1,2")))
  assert "lesson_teachers.teacher_id IN" in sql
  assert sql.index("lesson_teachers.teacher_id IN") < sql.index("GROUP BY")
  assert [list(value) for value in params.values()] == [[1, 2]]


def test_students_count_is_an_exact_having_filter() -> None:
  sql, params = _compile(build_lessons_query(parse_lesson_filters(students_count="2")))
  assert "HAVING count(DISTINCT lesson_students.student_id) = " in sql
  assert sql.index("GROUP BY") < sql.index("HAVING")
  assert list(params.values()) == [2]


def test_filters_combine() -> None:
  filters = parse_lesson_filters(date="2022-01-01,2022-01-02", status="done", teacher_ids="3", students_count="0")
  sql, _params = _compile(build_lessons_query(filters))
  assert "lessons.date BETWEEN" in sql
  assert "lessons.status = " in sql
  assert "lesson_teachers.teacher_id IN" in sql
  assert "HAVING count(DISTINCT lesson_students.student_id) = " in sql


def test_paginate_applies_limit_and_offset() -> None:
  filters = parse_lesson_filters(page="3", lessons_per_page="7")
  sql, params = _compile(paginate(build_lessons_query(filters), filters))
  assert "LIMIT" in sql
  assert "OFFSET" in sql
  assert sorted(params.values()) == [7, 14]
