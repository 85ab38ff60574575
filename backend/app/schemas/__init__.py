"""Convenience imports for all schema classes used by the API."""

from .user import UserCreate, UserResponse, UserLogin, UserUpdate, AdminUserCreate
from .course import (
    CourseCreate,
    CourseUpdate,
    CourseRead,
    CourseDetail,
    LessonCreate,
    LessonUpdate,
    LessonRead,
)
from .quiz import (
    QuizCreate,
    QuizRead,
    QuizAdminRead,
    QuestionCreate,
    QuestionRead,
    QuestionAdminRead,
    QuizSubmission,
    QuizResult,
    QuizAttemptRead,
)
from .progress import LessonProgressRead, CourseProgressRead
from .mandatory import (
    MandatoryCourseStatus,
    MandatoryStatus,
    MandatoryAssign,
    MandatoryAssignmentRead,
)
from .service import ServiceCreate, ServiceRead
from .settings import SettingsRead, SettingsUpdate

__all__ = [
    "UserCreate",
    "UserResponse",
    "UserLogin",
    "UserUpdate",
    "AdminUserCreate",
    "CourseCreate",
    "CourseUpdate",
    "CourseRead",
    "CourseDetail",
    "LessonCreate",
    "LessonUpdate",
    "LessonRead",
    "QuizCreate",
    "QuizRead",
    "QuizAdminRead",
    "QuestionCreate",
    "QuestionRead",
    "QuestionAdminRead",
    "QuizSubmission",
    "QuizResult",
    "QuizAttemptRead",
    "LessonProgressRead",
    "CourseProgressRead",
    "MandatoryCourseStatus",
    "MandatoryStatus",
    "MandatoryAssign",
    "MandatoryAssignmentRead",
    "ServiceCreate",
    "ServiceRead",
    "SettingsRead",
    "SettingsUpdate",
]
