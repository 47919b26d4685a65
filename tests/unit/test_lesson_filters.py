"""Unit tests for lesson query parameter validation."""

from __future__ import annotations

import datetime

import pytest

from lessons_api.services.lesson_filters import (
  INVALID_DATE_FORMAT,
  INVALID_DATE_RANGE,
  INVALID_LESSONS_PER_PAGE,
  INVALID_PAGE,
  INVALID_STUDENTS_COUNT,
  INVALID_TEACHER_IDS,
  LessonFilters,
  LessonQueryError,
  parse_lesson_filters,
)


def test_defaults_when_nothing_is_given() -> None:
  filters = parse_lesson_filters()
  assert filters == LessonFilters()
  assert filters.page == 1
  assert filters.lessons_per_page == 5
  assert filters.offset == 0


def test_single_date_yields_equal_bounds() -> None:
  filters = parse_lesson_filters(date="2022-01-01")
  assert filters.date_from == filters.date_to == datetime.date(2022, 1, 1)
  assert not filters.is_date_range


def test_date_range_is_inclusive_and_ordered() -> None:
  filters = parse_lesson_filters(date="2022-01-01,2022-01-31")
  assert filters.date_from == datetime.date(2022, 1, 1)
  assert filters.date_to == datetime.date(2022, 1, 31)
  assert filters.is_date_range


def test_same_start_and_end_is_accepted() -> None:
  filters = parse_lesson_filters(date="2022-01-01,2022-01-01")
  assert filters.date_from == filters.date_to


@pytest.mark.parametrize(
  "raw",
  ["", "2022-1-1", "01-01-2022", "2022/01/01", "2022-01-01;2022-01-02", "2022-01-01,2022-01-02,2022-01-03", "2022-01-01,", " 2022-01-01", "2022-01-01\n", "2022-02-30", "2022-13-01", "２０２２-01-01"],
)
def test_malformed_dates_are_rejected(raw: str) -> None:
  with pytest.raises(LessonQueryError) as exc_info:
    parse_lesson_filters(date=raw)
  assert str(exc_info.value) == INVALID_DATE_FORMAT


def test_reversed_range_is_rejected() -> None:
  with pytest.raises(LessonQueryError) as exc_info:
    parse_lesson_filters(date="2022-02-01,2022-01-01")
  assert str(exc_info.value) == INVALID_DATE_RANGE


@pytest.mark.parametrize("raw", ["0", "-1", "abc", "", "5abc", "1.5"])
def test_invalid_page_is_rejected(raw: str) -> None:
  with pytest.raises(LessonQueryError) as exc_info:
    parse_lesson_filters(page=raw)
  assert str(exc_info.value) == INVALID_PAGE


@pytest.mark.parametrize("raw", ["0", "-3", "many", "5abc"])
def test_invalid_lessons_per_page_is_rejected(raw: str) -> None:
  with pytest.raises(LessonQueryError) as exc_info:
    parse_lesson_filters(lessons_per_page=raw)
  assert str(exc_info.value) == INVALID_LESSONS_PER_PAGE


def test_page_and_size_compute_offset() -> None:
  filters = parse_lesson_filters(page="3", lessons_per_page=" 10 ")
  assert filters.page == 3
  assert filters.lessons_per_page == 10
  assert filters.offset == 20


def test_teacher_ids_are_parsed() -> None:
  assert parse_lesson_filters(teacher_ids="1, 2,3").teacher_ids == (1, 2, 3)


@pytest.mark.parametrize("raw", ["1,a", "x", "1,,2", "1,2.5"])
def test_non_integer_teacher_ids_are_rejected(raw: str) -> None:
  with pytest.raises(LessonQueryError) as exc_info:
    parse_lesson_filters(teacher_ids=raw)
  assert str(exc_info.value) == INVALID_TEACHER_IDS


def test_empty_optional_filters_mean_no_filter() -> None:
  filters = parse_lesson_filters(status="", teacher_ids="", students_count="")
  assert filters.status is None
  assert filters.teacher_ids is None
  assert filters.students_count is None


def test_students_count_zero_is_a_filter() -> None:
  assert parse_lesson_filters(students_count="0").students_count == 0


@pytest.mark.parametrize("raw", ["two", "-1", "2.0"])
def test_invalid_students_count_is_rejected(raw: str) -> None:
  with pytest.raises(LessonQueryError) as exc_info:
    parse_lesson_filters(students_count=raw)
  assert str(exc_info.value) == INVALID_STUDENTS_COUNT


def test_date_is_checked_before_page() -> None:
  with pytest.raises(LessonQueryError) as exc_info:
    parse_lesson_filters(date="bad", page="0", lessons_per_page="0", teacher_ids="x")
  assert str(exc_info.value) == INVALID_DATE_FORMAT


def test_page_is_checked_before_lessons_per_page_and_teacher_ids() -> None:
  with pytest.raises(LessonQueryError) as exc_info:
    parse_lesson_filters(page="0", lessons_per_page="0", teacher_ids="x")
  assert str(exc_info.value) == INVALID_PAGE


def test_status_is_kept_verbatim() -> None:
  assert parse_lesson_filters(status="done").status == "done"
