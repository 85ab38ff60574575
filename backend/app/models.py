"""Database models for the training platform.

The models are defined with SQLModel (built on SQLAlchemy and Pydantic)
and cover users, course content (courses, lessons, quizzes, questions),
per-user progress records and the gated AI service catalog.  Comments
are kept concise to avoid distracting from the field definitions.
"""

from typing import Optional, List
from datetime import datetime
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, JSON, UniqueConstraint


class User(SQLModel, table=True):
    """Platform user; the role decides which mandatory courses apply."""

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(unique=True, index=True)
    password_hash: str
    role: str = "USER"  # 'USER' or 'ADMIN'
    created_at: datetime = Field(default_factory=datetime.utcnow)


class Course(SQLModel, table=True):
    """Course authored by an administrator, made of ordered lessons."""

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    description: str
    category: str
    duration_minutes: int = 0
    is_published: bool = False
    is_mandatory: bool = False
    mandatory_for_role: str = "USER"  # 'USER', 'ADMIN' or 'ALL'
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    lessons: List["Lesson"] = Relationship(
        back_populates="course",
        sa_relationship_kwargs={
            "order_by": "Lesson.order_index",
            "cascade": "all, delete-orphan",
        },
    )


class Lesson(SQLModel, table=True):
    """Single step of a course; ``has_quiz`` lessons complete via their quiz."""

    __table_args__ = (UniqueConstraint("course_id", "order_index"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    course_id: int = Field(foreign_key="course.id", index=True)
    title: str
    content: str
    order_index: int
    duration_minutes: int = 0
    has_quiz: bool = False
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    course: Course = Relationship(back_populates="lessons")
    quiz: Optional["Quiz"] = Relationship(
        back_populates="lesson",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "uselist": False},
    )


class Quiz(SQLModel, table=True):
    """Quiz attached to a lesson (at most one per lesson)."""

    id: Optional[int] = Field(default=None, primary_key=True)
    lesson_id: int = Field(foreign_key="lesson.id", unique=True)
    title: str
    description: Optional[str] = None
    passing_score: int = 80  # percent, 0..100
    time_limit_minutes: Optional[int] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    lesson: Lesson = Relationship(back_populates="quiz")
    questions: List["Question"] = Relationship(
        back_populates="quiz",
        sa_relationship_kwargs={
            "order_by": "Question.order_index",
            "cascade": "all, delete-orphan",
        },
    )


class Question(SQLModel, table=True):
    """Quiz question; ``correct_answers`` holds one value or a set of values."""

    __table_args__ = (UniqueConstraint("quiz_id", "order_index"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    quiz_id: int = Field(foreign_key="quiz.id", index=True)
    question: str
    question_type: str  # single_choice, multiple_choice, true_false, text
    options: List[str] = Field(sa_column=Column(JSON), default_factory=list)
    correct_answers: List[str] = Field(sa_column=Column(JSON), default_factory=list)
    explanation: Optional[str] = None
    order_index: int

    quiz: Quiz = Relationship(back_populates="questions")


class QuizAttempt(SQLModel, table=True):
    """Immutable record of one graded submission."""

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    quiz_id: int = Field(foreign_key="quiz.id", index=True)
    attempt_number: int
    answers: List[dict] = Field(sa_column=Column(JSON), default_factory=list)
    score: int
    correct_count: int
    total_questions: int
    passed: bool
    completed_at: datetime = Field(default_factory=datetime.utcnow)


class LessonProgress(SQLModel, table=True):
    """Per-user lesson state, updated in place."""

    __table_args__ = (UniqueConstraint("user_id", "lesson_id"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    lesson_id: int = Field(foreign_key="lesson.id", index=True)
    course_id: int = Field(foreign_key="course.id", index=True)
    is_completed: bool = False
    completed_at: Optional[datetime] = None
    quiz_score: Optional[int] = None
    quiz_attempts: int = 0
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class CourseProgress(SQLModel, table=True):
    """Per-user course roll-up derived from ``LessonProgress`` rows."""

    __table_args__ = (UniqueConstraint("user_id", "course_id"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    course_id: int = Field(foreign_key="course.id", index=True)
    progress_percentage: int = 0
    is_completed: bool = False
    completed_at: Optional[datetime] = None
    lessons_completed: int = 0
    total_lessons: int = 0
    started_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class MandatoryAssignment(SQLModel, table=True):
    """Explicit assignment of a course a user must complete."""

    __table_args__ = (UniqueConstraint("user_id", "course_id"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    course_id: int = Field(foreign_key="course.id", index=True)
    assigned_by: Optional[int] = Field(default=None, foreign_key="user.id")
    assigned_at: datetime = Field(default_factory=datetime.utcnow)


class Service(SQLModel, table=True):
    """AI tool listed in the catalog behind the mandatory training gate."""

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    description: str
    category: str
    url: Optional[str] = None
    api_endpoint: Optional[str] = None
    pricing: dict = Field(sa_column=Column(JSON), default_factory=dict)
    features: List[str] = Field(sa_column=Column(JSON), default_factory=list)
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.utcnow)


class Settings(SQLModel, table=True):
    """Singleton table storing site-wide configuration values."""

    id: Optional[int] = Field(default=1, primary_key=True)
    site_name: str = "Training Center"
    default_passing_score: int = 80
    public_registration_disabled: bool = False
