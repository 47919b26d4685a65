from __future__ import annotations

import datetime

from sqlalchemy import Boolean, Date, ForeignKey, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from lessons_api.core.database import Base


class Lesson(Base):
  __tablename__ = "lessons"

  id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
  date: Mapped[datetime.date] = mapped_column(Date, nullable=False, index=True)
  title: Mapped[str | None] = mapped_column(String, nullable=True)
  status: Mapped[str] = mapped_column(String, nullable=False, index=True)


class Teacher(Base):
  __tablename__ = "teachers"

  id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
  name: Mapped[str | None] = mapped_column(String, nullable=True)


class Student(Base):
  __tablename__ = "students"

  id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
  name: Mapped[str | None] = mapped_column(String, nullable=True)


class LessonTeacher(Base):
  __tablename__ = "lesson_teachers"

  lesson_id: Mapped[int] = mapped_column(ForeignKey("lessons.id"), primary_key=True)
  teacher_id: Mapped[int] = mapped_column(ForeignKey("teachers.id"), primary_key=True, index=True)


class LessonStudent(Base):
  __tablename__ = "lesson_students"

  lesson_id: Mapped[int] = mapped_column(ForeignKey("lessons.id"), primary_key=True)
  student_id: Mapped[int] = mapped_column(ForeignKey("students.id"), primary_key=True, index=True)
  visit: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("false"))
