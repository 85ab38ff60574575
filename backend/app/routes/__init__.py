"""Aggregate import for all API route modules."""

from . import (
    auth,
    users,
    admin,
    courses,
    lessons,
    quizzes,
    mandatory,
    services,
    settings,
)

__all__ = [
    "auth",
    "users",
    "admin",
    "courses",
    "lessons",
    "quizzes",
    "mandatory",
    "services",
    "settings",
]
