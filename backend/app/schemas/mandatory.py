"""Mandatory training status returned by the catalog gate."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

STATUS_NOT_STARTED = "NOT_STARTED"
STATUS_IN_PROGRESS = "IN_PROGRESS"
STATUS_COMPLETED = "COMPLETED"


class MandatoryCourseStatus(BaseModel):
    course_id: int
    title: str
    description: str
    category: str
    duration_minutes: int
    mandatory_for_role: str
    status: str
    progress_percentage: int
    is_completed: bool
    completed_at: Optional[datetime] = None


class MandatoryStatus(BaseModel):
    courses: list[MandatoryCourseStatus]
    total_mandatory: int
    completed_mandatory: int
    all_courses_completed: bool
    can_access_catalog: bool


class MandatoryAssign(BaseModel):
    course_id: int
    user_ids: list[int]


class MandatoryAssignmentRead(BaseModel):
    id: int
    user_id: int
    course_id: int
    assigned_by: Optional[int] = None
    assigned_at: datetime

    model_config = ConfigDict(from_attributes=True)
