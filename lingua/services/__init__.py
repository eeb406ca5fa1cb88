from .content_resolver import ContentResolver, resolve_lesson
from .exercise_session import ExerciseSession
from .lesson_catalog import LessonCatalog, LessonSummary
from .speech_assessment_service import assess, assess_rubric

__all__ = [
    "ContentResolver",
    "ExerciseSession",
    "LessonCatalog",
    "LessonSummary",
    "assess",
    "assess_rubric",
    "resolve_lesson",
]
