from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class LessonProgressRead(BaseModel):
    lesson_id: int
    course_id: int
    is_completed: bool
    completed_at: Optional[datetime] = None
    quiz_score: Optional[int] = None
    quiz_attempts: int = 0

    model_config = ConfigDict(from_attributes=True)


class CourseProgressRead(BaseModel):
    course_id: int
    progress_percentage: int = 0
    is_completed: bool = False
    completed_at: Optional[datetime] = None
    lessons_completed: int = 0
    total_lessons: int = 0
    lesson_progress: list[LessonProgressRead] = []
