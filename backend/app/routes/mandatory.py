"""Mandatory training status and assignment."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.acl import ROLE_ADMIN
from app.auth import get_current_user, require_role
from app.database import get_session
from app.models import User
from app.schemas import MandatoryStatus, MandatoryAssign, MandatoryAssignmentRead
from app.crud import assign_mandatory_course, evaluate_mandatory_gate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/mandatory-courses", tags=["mandatory"])


@router.get("/", response_model=MandatoryStatus)
async def read_mandatory_courses(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    """Mandatory courses for the caller and whether the catalog is unlocked."""
    return await evaluate_mandatory_gate(db, current_user.id, current_user.role)


@router.post(
    "/",
    response_model=list[MandatoryAssignmentRead],
    status_code=status.HTTP_201_CREATED,
)
async def assign_mandatory_courses(
    data: MandatoryAssign,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    assignments = await assign_mandatory_course(
        db, data.course_id, data.user_ids, assigned_by=current_user.id
    )
    logger.info(
        "Course %s assigned to %d user(s) by %s",
        data.course_id,
        len(assignments),
        current_user.email,
    )
    return assignments
