from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt


class StudentView(BaseModel):
  """Student attached to a lesson, with attendance."""

  id: StrictInt
  name: str | None
  visit: StrictBool


class TeacherView(BaseModel):
  """Teacher attached to a lesson."""

  id: StrictInt
  name: str | None


class LessonView(BaseModel):
  """Lesson with embedded teachers, students and attendance count."""

  id: StrictInt
  date: str = Field(description="Lesson date formatted as YYYY-MM-DD.", examples=["2022-01-01"])
  title: str | None
  status: str
  visit_count: StrictInt = Field(alias="visitCount", ge=0, description="Number of students with visit=true.")
  students: list[StudentView]
  teachers: list[TeacherView]
  model_config = ConfigDict(populate_by_name=True)


class LessonListResponse(BaseModel):
  """One page of lessons."""

  current_page: StrictInt = Field(alias="currentPage", ge=1)
  total_count: StrictInt = Field(alias="totalCount", ge=0, description="Number of lessons on this page.")
  lessons: list[LessonView]
  model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
  """Error body returned for rejected or failed requests."""

  error: str
  details: str | None = None


class HealthResponse(BaseModel):
  status: str
