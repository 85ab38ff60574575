"""Quiz authoring, quiz taking and attempt models."""

from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

QuestionType = Literal["single_choice", "multiple_choice", "true_false", "text"]


class QuizCreate(BaseModel):
    lesson_id: int
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    passing_score: Optional[int] = Field(default=None, ge=0, le=100)
    time_limit_minutes: Optional[int] = Field(default=None, ge=1)


class QuestionCreate(BaseModel):
    question: str = Field(min_length=1)
    question_type: QuestionType
    options: list[str] = Field(default_factory=list)
    correct_answers: list[str] = Field(min_length=1)
    explanation: Optional[str] = None
    order_index: Optional[int] = Field(default=None, ge=0)


class QuestionRead(BaseModel):
    """Question as shown to a learner; correct answers are never included."""

    id: int
    question: str
    question_type: str
    options: list[str]
    order_index: int

    model_config = ConfigDict(from_attributes=True)


class QuestionAdminRead(QuestionRead):
    correct_answers: list[str]
    explanation: Optional[str] = None


class QuizRead(BaseModel):
    id: int
    lesson_id: int
    title: str
    description: Optional[str] = None
    passing_score: int
    time_limit_minutes: Optional[int] = None
    questions: list[QuestionRead] = []

    model_config = ConfigDict(from_attributes=True)


class QuizAdminRead(QuizRead):
    questions: list[QuestionAdminRead] = []


class SubmittedAnswer(BaseModel):
    question_id: int
    user_answer: Union[str, list[str]]


class QuizSubmission(BaseModel):
    answers: list[SubmittedAnswer]


class QuizResult(BaseModel):
    attempt_id: int
    attempt_number: int
    score: int
    passed: bool
    correct_answers: int
    total_questions: int
    passing_score: int
    question_results: dict[int, bool]
    lesson_completed: bool


class QuizAttemptRead(BaseModel):
    id: int
    quiz_id: int
    attempt_number: int
    score: int
    correct_count: int
    total_questions: int
    passed: bool
    answers: list[dict]
    completed_at: datetime

    model_config = ConfigDict(from_attributes=True)
