"""Parse raw `/lessons` query parameters into a typed filter set.

Every value arrives as an optional string. Parsing happens before any store
access so the query layer only ever sees typed, normalized values.
"""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass

DEFAULT_PAGE = 1
DEFAULT_LESSONS_PER_PAGE = 5

INVALID_DATE_FORMAT = "Invalid date format. Expected: 2022-01-01 or 2022-01-01,2022-01-02"
INVALID_DATE_RANGE = "Invalid date range. Start date must be before end date."
INVALID_PAGE = "Invalid page number."
INVALID_LESSONS_PER_PAGE = "Invalid lessons per page."
INVALID_TEACHER_IDS = "Invalid teacher IDs."
INVALID_STUDENTS_COUNT = "Invalid students count."

_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}(,[0-9]{4}-[0-9]{2}-[0-9]{2})?")
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


class LessonQueryError(ValueError):
  """Raised when a `/lessons` query parameter is malformed or out of range."""


@dataclass(frozen=True)
class LessonFilters:
  """Validated filters and pagination for a lesson listing."""

  date_from: datetime.date | None = None
  date_to: datetime.date | None = None
  status: str | None = None
  teacher_ids: tuple[int, ...] | None = None
  students_count: int | None = None
  page: int = DEFAULT_PAGE
  lessons_per_page: int = DEFAULT_LESSONS_PER_PAGE

  @property
  def is_date_range(self) -> bool:
    return self.date_from is not None and self.date_to is not None and self.date_from != self.date_to

  @property
  def offset(self) -> int:
    return (self.page - 1) * self.lessons_per_page


def _parse_date_filter(raw: str) -> tuple[datetime.date, datetime.date]:
  """Return inclusive (start, end) bounds; a single date yields equal bounds."""
  if not _DATE_PATTERN.fullmatch(raw):
    raise LessonQueryError(INVALID_DATE_FORMAT)

  try:
    bounds = [datetime.date.fromisoformat(part) for part in raw.split(",")]
  except ValueError:
    # Shape is right but the calendar date does not exist, e.g. 2022-02-30.
    raise LessonQueryError(INVALID_DATE_FORMAT) from None

  start, end = bounds[0], bounds[-1]
  if start > end:
    raise LessonQueryError(INVALID_DATE_RANGE)
  return start, end


def _parse_integer(raw: str) -> int | None:
  value = raw.strip()
  if not _INTEGER_PATTERN.fullmatch(value):
    return None
  return int(value)


def _parse_positive(raw: str | None, default: int, message: str) -> int:
  if raw is None:
    return default
  value = _parse_integer(raw)
  if value is None or value < 1:
    raise LessonQueryError(message)
  return value


def _parse_teacher_ids(raw: str) -> tuple[int, ...]:
  ids = [_parse_integer(token) for token in raw.split(",")]
  if any(teacher_id is None for teacher_id in ids):
    raise LessonQueryError(INVALID_TEACHER_IDS)
  return tuple(ids)  # type: ignore[arg-type]


def parse_lesson_filters(
  *,
  date: str | None = None,
  status: str | None = None,
  teacher_ids: str | None = None,
  students_count: str | None = None,
  page: str | None = None,
  lessons_per_page: str | None = None,
) -> LessonFilters:
  """Validate raw query parameters and build a `LessonFilters`.

  Checks run in a fixed order (date, page, lessonsPerPage, teacherIds,
  studentsCount) and the first failure raises `LessonQueryError`.
  An empty `date` is rejected; empty `status`, `teacherIds` and
  `studentsCount` values mean "no filter".
  """
  date_from = date_to = None
  if date is not None:
    date_from, date_to = _parse_date_filter(date)

  page_number = _parse_positive(page, DEFAULT_PAGE, INVALID_PAGE)
  per_page = _parse_positive(lessons_per_page, DEFAULT_LESSONS_PER_PAGE, INVALID_LESSONS_PER_PAGE)

  parsed_teacher_ids = _parse_teacher_ids(teacher_ids) if teacher_ids else None

  parsed_students_count = None
  if students_count:
    parsed_students_count = _parse_integer(students_count)
    if parsed_students_count is None or parsed_students_count < 0:
      raise LessonQueryError(INVALID_STUDENTS_COUNT)

  return LessonFilters(
    date_from=date_from,
    date_to=date_to,
    status=status or None,
    teacher_ids=parsed_teacher_ids,
    students_count=parsed_students_count,
    page=page_number,
    lessons_per_page=per_page,
  )
