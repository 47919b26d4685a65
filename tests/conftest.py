"""Test configuration for importing the application package."""

from __future__ import annotations

import datetime
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
  sys.path.insert(0, str(ROOT))

from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from lessons_api.api.deps import get_lessons_repo  # noqa: E402
from lessons_api.main import app  # noqa: E402
from lessons_api.storage.lessons_repo import LessonPage, LessonRow, StudentAssignmentRecord, TeacherAssignmentRecord  # noqa: E402


@pytest.fixture
def algebra_lesson() -> LessonRow:
  return LessonRow(id=1, date=datetime.date(2022, 1, 1), title="Algebra", status="done")


@pytest.fixture
def lessons_repo(algebra_lesson: LessonRow) -> AsyncMock:
  """Repository double holding one lesson with one teacher and two students."""
  repo = AsyncMock()
  repo.fetch_lesson_page.return_value = LessonPage(rows=[algebra_lesson], current_page=1)
  repo.fetch_teacher_assignments.return_value = [TeacherAssignmentRecord(lesson_id=1, teacher_id=5, name="A")]
  repo.fetch_student_assignments.return_value = [
    StudentAssignmentRecord(lesson_id=1, student_id=9, name="B", visit=True),
    StudentAssignmentRecord(lesson_id=1, student_id=10, name="C", visit=False),
  ]
  return repo


@pytest.fixture
def client(lessons_repo: AsyncMock):
  app.dependency_overrides[get_lessons_repo] = lambda: lessons_repo
  yield TestClient(app)
  app.dependency_overrides.clear()


@pytest.fixture
async def async_client(lessons_repo: AsyncMock):
  app.dependency_overrides[get_lessons_repo] = lambda: lessons_repo
  async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
    yield ac
  app.dependency_overrides.clear()
