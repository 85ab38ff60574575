"""Lesson endpoints: authoring, completion and the learner's quiz flow."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.acl import ROLE_ADMIN
from app.auth import get_current_user, require_role
from app.database import get_session
from app.models import Lesson, User
from app.routes.courses import get_visible_course
from app.schemas import (
    LessonCreate,
    LessonUpdate,
    LessonRead,
    LessonProgressRead,
    QuizRead,
    QuestionRead,
    QuizSubmission,
    QuizResult,
)
from app.crud import (
    complete_lesson_direct,
    create_lesson,
    get_lesson,
    get_lesson_progress,
    get_quiz_for_lesson,
    save_lesson,
    submit_quiz,
)

router = APIRouter(prefix="/lessons", tags=["lessons"])


async def get_visible_lesson(db: AsyncSession, lesson_id: int, user: User) -> Lesson:
    lesson = await get_lesson(db, lesson_id)
    if not lesson:
        raise HTTPException(status_code=404, detail="Lesson not found")
    await get_visible_course(db, lesson.course_id, user)
    return lesson


@router.post("/", response_model=LessonRead, status_code=status.HTTP_201_CREATED)
async def create_lesson_route(
    data: LessonCreate,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    """Add a lesson; omit ``order_index`` to append it to the course."""
    return await create_lesson(db, Lesson(**data.model_dump()))


@router.get("/{lesson_id}", response_model=LessonRead)
async def read_lesson(
    lesson_id: int,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return await get_visible_lesson(db, lesson_id, current_user)


@router.put("/{lesson_id}", response_model=LessonRead)
async def update_lesson(
    lesson_id: int,
    data: LessonUpdate,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    lesson = await get_lesson(db, lesson_id)
    if not lesson:
        raise HTTPException(status_code=404, detail="Lesson not found")
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(lesson, field, value)
    return await save_lesson(db, lesson)


@router.post("/{lesson_id}/complete", response_model=LessonProgressRead)
async def complete_lesson(
    lesson_id: int,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    """Mark a lesson without a quiz as completed for the caller."""
    await get_visible_lesson(db, lesson_id, current_user)
    return await complete_lesson_direct(db, current_user.id, lesson_id)


@router.get("/{lesson_id}/progress", response_model=LessonProgressRead)
async def read_lesson_progress(
    lesson_id: int,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    lesson = await get_visible_lesson(db, lesson_id, current_user)
    progress = await get_lesson_progress(db, current_user.id, lesson_id)
    if progress is None:
        return LessonProgressRead(
            lesson_id=lesson.id, course_id=lesson.course_id, is_completed=False
        )
    return progress


@router.get("/{lesson_id}/quiz", response_model=QuizRead)
async def read_lesson_quiz(
    lesson_id: int,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    """Return the lesson's quiz with its questions but without the answers."""
    await get_visible_lesson(db, lesson_id, current_user)
    quiz = await get_quiz_for_lesson(db, lesson_id)
    if not quiz:
        raise HTTPException(status_code=404, detail="Quiz not found for this lesson")
    return QuizRead(
        id=quiz.id,
        lesson_id=quiz.lesson_id,
        title=quiz.title,
        description=quiz.description,
        passing_score=quiz.passing_score,
        time_limit_minutes=quiz.time_limit_minutes,
        questions=[QuestionRead.model_validate(q) for q in quiz.questions],
    )


@router.post("/{lesson_id}/quiz/submit", response_model=QuizResult)
async def submit_lesson_quiz(
    lesson_id: int,
    submission: QuizSubmission,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    await get_visible_lesson(db, lesson_id, current_user)
    attempt, grade, progress = await submit_quiz(
        db,
        current_user.id,
        lesson_id,
        [(a.question_id, a.user_answer) for a in submission.answers],
    )
    return QuizResult(
        attempt_id=attempt.id,
        attempt_number=attempt.attempt_number,
        score=grade.score,
        passed=grade.passed,
        correct_answers=grade.correct_count,
        total_questions=grade.total_questions,
        passing_score=grade.passing_score,
        question_results=grade.per_question_correctness,
        lesson_completed=progress.is_completed,
    )
