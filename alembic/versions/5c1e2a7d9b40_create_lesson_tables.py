"""Create lessons, teachers, students and their association tables.

Revision ID: 5c1e2a7d9b40
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

from lessons_api.core.migration_guards import guarded_create_table, guarded_drop_table

revision = "5c1e2a7d9b40"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
  """Upgrade schema."""
  if guarded_create_table(
    "lessons",
    sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
    sa.Column("date", sa.Date(), nullable=False),
    sa.Column("title", sa.String(), nullable=True),
    sa.Column("status", sa.String(), nullable=False),
    sa.PrimaryKeyConstraint("id"),
  ):
    op.create_index(op.f("ix_lessons_date"), "lessons", ["date"], unique=False)
    op.create_index(op.f("ix_lessons_status"), "lessons", ["status"], unique=False)

  guarded_create_table(
    "teachers",
    sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
    sa.Column("name", sa.String(), nullable=True),
    sa.PrimaryKeyConstraint("id"),
  )
  guarded_create_table(
    "students",
    sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
    sa.Column("name", sa.String(), nullable=True),
    sa.PrimaryKeyConstraint("id"),
  )

  if guarded_create_table(
    "lesson_teachers",
    sa.Column("lesson_id", sa.Integer(), nullable=False),
    sa.Column("teacher_id", sa.Integer(), nullable=False),
    sa.ForeignKeyConstraint(["lesson_id"], ["lessons.id"]),
    sa.ForeignKeyConstraint(["teacher_id"], ["teachers.id"]),
    sa.PrimaryKeyConstraint("lesson_id", "teacher_id"),
  ):
    op.create_index(op.f("ix_lesson_teachers_teacher_id"), "lesson_teachers", ["teacher_id"], unique=False)

  if guarded_create_table(
    "lesson_students",
    sa.Column("lesson_id", sa.Integer(), nullable=False),
    sa.Column("student_id", sa.Integer(), nullable=False),
    sa.Column("visit", sa.Boolean(), server_default=sa.text("false"), nullable=False),
    sa.ForeignKeyConstraint(["lesson_id"], ["lessons.id"]),
    sa.ForeignKeyConstraint(["student_id"], ["students.id"]),
    sa.PrimaryKeyConstraint("lesson_id", "student_id"),
  ):
    op.create_index(op.f("ix_lesson_students_student_id"), "lesson_students", ["student_id"], unique=False)


def downgrade() -> None:
  """Downgrade schema."""
  # Association tables first; they reference the entity tables.
  for table_name in ("lesson_students", "lesson_teachers", "students", "teachers", "lessons"):
    guarded_drop_table(table_name)
