"""Course catalog endpoints and per-user course progress."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.acl import ROLE_ADMIN, is_admin
from app.auth import get_current_user, require_role
from app.database import get_session
from app.models import Course, User
from app.schemas import (
    CourseCreate,
    CourseUpdate,
    CourseRead,
    CourseDetail,
    CourseProgressRead,
    LessonRead,
    LessonProgressRead,
)
from app.crud import (
    create_course,
    delete_course,
    get_course,
    get_course_with_lessons,
    get_course_progress,
    get_lesson_progress_for_course,
    list_courses,
    refresh_course_progress,
    save_course,
)

router = APIRouter(prefix="/courses", tags=["courses"])


async def get_visible_course(
    db: AsyncSession, course_id: int, user: User, with_lessons: bool = False
) -> Course:
    """Load a course the user may see; drafts are hidden from non-admins."""
    if with_lessons:
        course = await get_course_with_lessons(db, course_id)
    else:
        course = await get_course(db, course_id)
    if not course or (not course.is_published and not is_admin(user.role)):
        raise HTTPException(status_code=404, detail="Course not found")
    return course


@router.get("/", response_model=list[CourseRead])
async def read_courses(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    """Admins see every course, everyone else only published ones."""
    return await list_courses(db, include_unpublished=is_admin(current_user.role))


@router.post("/", response_model=CourseRead, status_code=status.HTTP_201_CREATED)
async def create_course_route(
    data: CourseCreate,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    return await create_course(db, Course(**data.model_dump()))


@router.get("/{course_id}", response_model=CourseDetail)
async def read_course(
    course_id: int,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    course = await get_visible_course(db, course_id, current_user, with_lessons=True)
    return CourseDetail(
        **CourseRead.model_validate(course).model_dump(),
        lessons=[LessonRead.model_validate(lesson) for lesson in course.lessons],
    )


@router.put("/{course_id}", response_model=CourseRead)
async def update_course(
    course_id: int,
    data: CourseUpdate,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    course = await get_course(db, course_id)
    if not course:
        raise HTTPException(status_code=404, detail="Course not found")
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(course, field, value)
    return await save_course(db, course)


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_course_route(
    course_id: int,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    course = await get_course(db, course_id)
    if not course:
        raise HTTPException(status_code=404, detail="Course not found")
    await delete_course(db, course)


@router.get("/{course_id}/progress", response_model=CourseProgressRead)
async def read_course_progress(
    course_id: int,
    refresh: bool = False,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    """Return the caller's progress; ``refresh=true`` recomputes it first.

    Without any recorded activity an empty progress object is returned
    and nothing is stored.
    """
    await get_visible_course(db, course_id, current_user)
    if refresh:
        progress = await refresh_course_progress(db, current_user.id, course_id)
    else:
        progress = await get_course_progress(db, current_user.id, course_id)
    lessons = await get_lesson_progress_for_course(db, current_user.id, course_id)
    lesson_progress = [LessonProgressRead.model_validate(p) for p in lessons]
    if progress is None:
        return CourseProgressRead(course_id=course_id, lesson_progress=lesson_progress)
    return CourseProgressRead(
        course_id=course_id,
        progress_percentage=progress.progress_percentage,
        is_completed=progress.is_completed,
        completed_at=progress.completed_at,
        lessons_completed=progress.lessons_completed,
        total_lessons=progress.total_lessons,
        lesson_progress=lesson_progress,
    )
