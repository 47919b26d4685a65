"""Schema package exports."""

from .sql import Lesson, LessonStudent, LessonTeacher, Student, Teacher

__all__ = ["Lesson", "LessonStudent", "LessonTeacher", "Student", "Teacher"]
