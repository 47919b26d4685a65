"""Storage interfaces and records for lesson listing."""

from __future__ import annotations

import datetime
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from lessons_api.services.lesson_filters import LessonFilters


@dataclass(frozen=True)
class LessonRow:
  """One grouped row of the filtered lesson query."""

  id: int
  date: datetime.date
  title: str | None
  status: str


@dataclass(frozen=True)
class LessonPage:
  """Rows of the requested page plus the page number they belong to."""

  rows: list[LessonRow]
  current_page: int


@dataclass(frozen=True)
class TeacherAssignmentRecord:
  """Lesson-teacher association joined with the teacher name."""

  lesson_id: int
  teacher_id: int
  name: str | None


@dataclass(frozen=True)
class StudentAssignmentRecord:
  """Lesson-student association joined with the student name and attendance."""

  lesson_id: int
  student_id: int
  name: str | None
  visit: bool


class LessonsRepository(Protocol):
  """Read-only access to lessons and their assignments."""

  async def fetch_lesson_page(self, filters: LessonFilters) -> LessonPage: ...

  async def fetch_teacher_assignments(self, lesson_ids: Sequence[int]) -> list[TeacherAssignmentRecord]: ...

  async def fetch_student_assignments(self, lesson_ids: Sequence[int]) -> list[StudentAssignmentRecord]: ...
