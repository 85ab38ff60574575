"""Request and response models for courses and lessons."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class CourseCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=1000)
    category: str = Field(min_length=1)
    duration_minutes: int = Field(ge=1, le=10000)
    is_published: bool = False
    is_mandatory: bool = False
    mandatory_for_role: Literal["USER", "ADMIN", "ALL"] = "USER"


class CourseUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1, max_length=1000)
    category: str | None = Field(default=None, min_length=1)
    duration_minutes: int | None = Field(default=None, ge=1, le=10000)
    is_published: bool | None = None
    is_mandatory: bool | None = None
    mandatory_for_role: Literal["USER", "ADMIN", "ALL"] | None = None


class CourseRead(BaseModel):
    id: int
    title: str
    description: str
    category: str
    duration_minutes: int
    is_published: bool
    is_mandatory: bool
    mandatory_for_role: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LessonCreate(BaseModel):
    course_id: int
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    order_index: Optional[int] = Field(default=None, ge=0)
    duration_minutes: int = Field(ge=1, le=1000)


class LessonUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    content: str | None = Field(default=None, min_length=1)
    order_index: int | None = Field(default=None, ge=0)
    duration_minutes: int | None = Field(default=None, ge=1, le=1000)


class LessonRead(BaseModel):
    id: int
    course_id: int
    title: str
    content: str
    order_index: int
    duration_minutes: int
    has_quiz: bool

    model_config = ConfigDict(from_attributes=True)


class CourseDetail(CourseRead):
    lessons: list[LessonRead]
