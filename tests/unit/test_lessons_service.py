"""Unit tests for lesson enrichment and response shaping."""

from __future__ import annotations

import datetime
from unittest.mock import AsyncMock

import pytest

from lessons_api.services.lesson_filters import parse_lesson_filters
from lessons_api.services.lessons import assemble_lesson_views, format_lesson_date, list_lessons
from lessons_api.storage.lessons_repo import LessonPage, LessonRow, StudentAssignmentRecord, TeacherAssignmentRecord


def test_format_lesson_date() -> None:
  assert format_lesson_date(datetime.date(2022, 1, 1)) == "2022-01-01"
  assert format_lesson_date(datetime.datetime(2022, 3, 9, 23, 59)) == "2022-03-09"


def test_assemble_groups_assignments_per_lesson_in_fetch_order() -> None:
  rows = [
    LessonRow(id=2, date=datetime.date(2022, 1, 2), title="Geometry", status="planned"),
    LessonRow(id=1, date=datetime.date(2022, 1, 1), title="Algebra", status="done"),
  ]
  teachers = [TeacherAssignmentRecord(lesson_id=1, teacher_id=5, name="A"), TeacherAssignmentRecord(lesson_id=2, teacher_id=6, name="D"), TeacherAssignmentRecord(lesson_id=1, teacher_id=4, name="E")]
  students = [
    StudentAssignmentRecord(lesson_id=1, student_id=10, name="C", visit=False),
    StudentAssignmentRecord(lesson_id=1, student_id=9, name="B", visit=True),
    StudentAssignmentRecord(lesson_id=3, student_id=11, name="X", visit=True),
  ]

  views = assemble_lesson_views(rows, teachers, students)

  assert [view.id for view in views] == [2, 1]
  geometry, algebra = views
  assert [teacher.id for teacher in geometry.teachers] == [6]
  assert geometry.students == []
  assert geometry.visit_count == 0
  assert [teacher.id for teacher in algebra.teachers] == [5, 4]
  assert [student.id for student in algebra.students] == [10, 9]
  assert algebra.visit_count == 1


def test_lesson_without_assignments_has_empty_lists() -> None:
  rows = [LessonRow(id=7, date=datetime.date(2023, 5, 6), title=None, status="cancelled")]
  (view,) = assemble_lesson_views(rows, [], [])
  assert view.model_dump(by_alias=True) == {"id": 7, "date": "2023-05-06", "title": None, "status": "cancelled", "visitCount": 0, "students": [], "teachers": []}


@pytest.mark.anyio
async def test_list_lessons_builds_the_page_response(lessons_repo: AsyncMock) -> None:
  filters = parse_lesson_filters(date="2022-01-01")
  response = await list_lessons(lessons_repo, filters)

  lessons_repo.fetch_lesson_page.assert_awaited_once_with(filters)
  lessons_repo.fetch_teacher_assignments.assert_awaited_once_with([1])
  lessons_repo.fetch_student_assignments.assert_awaited_once_with([1])
  payload = response.model_dump(by_alias=True)
  assert payload["currentPage"] == 1
  assert payload["totalCount"] == 1
  (lesson,) = payload["lessons"]
  assert lesson["date"] == "2022-01-01"
  assert lesson["visitCount"] == 1
  assert lesson["students"] == [{"id": 9, "name": "B", "visit": True}, {"id": 10, "name": "C", "visit": False}]
  assert lesson["teachers"] == [{"id": 5, "name": "A"}]


@pytest.mark.anyio
async def test_total_count_is_the_number_of_rows_on_the_page() -> None:
  rows = [LessonRow(id=lesson_id, date=datetime.date(2022, 1, lesson_id), title=f"L{lesson_id}", status="done") for lesson_id in (4, 5)]
  repo = AsyncMock()
  repo.fetch_lesson_page.return_value = LessonPage(rows=rows, current_page=3)
  repo.fetch_teacher_assignments.return_value = []
  repo.fetch_student_assignments.return_value = []

  response = await list_lessons(repo, parse_lesson_filters(page="3", lessons_per_page="3"))

  assert response.current_page == 3
  assert response.total_count == 2


@pytest.mark.anyio
async def test_empty_page_is_a_normal_response() -> None:
  repo = AsyncMock()
  repo.fetch_lesson_page.return_value = LessonPage(rows=[], current_page=9)
  repo.fetch_teacher_assignments.return_value = []
  repo.fetch_student_assignments.return_value = []

  response = await list_lessons(repo, parse_lesson_filters(page="9"))

  assert response.model_dump(by_alias=True) == {"currentPage": 9, "totalCount": 0, "lessons": []}
