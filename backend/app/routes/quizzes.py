"""Quiz authoring endpoints (admin) and the learner's attempt history."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.acl import ROLE_ADMIN
from app.auth import get_current_user, require_role
from app.database import get_session
from app.exceptions import NotFoundError
from app.models import Question, Quiz, User
from app.schemas import (
    QuizCreate,
    QuizAdminRead,
    QuestionCreate,
    QuestionAdminRead,
    QuizAttemptRead,
)
from app.crud import (
    add_question,
    create_quiz,
    get_attempts_for_user,
    get_lesson,
    get_quiz,
    get_settings,
    list_quizzes_for_lesson,
)

router = APIRouter(prefix="/quizzes", tags=["quizzes"])
attempts_router = APIRouter(prefix="/quiz-attempts", tags=["quizzes"])


def _to_admin_read(quiz: Quiz) -> QuizAdminRead:
    return QuizAdminRead(
        id=quiz.id,
        lesson_id=quiz.lesson_id,
        title=quiz.title,
        description=quiz.description,
        passing_score=quiz.passing_score,
        time_limit_minutes=quiz.time_limit_minutes,
        questions=[QuestionAdminRead.model_validate(q) for q in quiz.questions],
    )


@router.post("/", response_model=QuizAdminRead, status_code=status.HTTP_201_CREATED)
async def create_quiz_route(
    data: QuizCreate,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    """Attach a quiz to a lesson; the lesson then requires passing it."""
    values = data.model_dump()
    if values["passing_score"] is None:
        settings = await get_settings(db)
        values["passing_score"] = settings.default_passing_score
    quiz = await create_quiz(db, Quiz(**values))
    return _to_admin_read(await get_quiz(db, quiz.id))


@router.get("/", response_model=list[QuizAdminRead])
async def read_quizzes_for_lesson(
    lesson_id: int,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    """Quizzes attached to a lesson, with their answers, for authoring."""
    if await get_lesson(db, lesson_id) is None:
        raise NotFoundError("Lesson", lesson_id)
    return [_to_admin_read(q) for q in await list_quizzes_for_lesson(db, lesson_id)]


@router.get("/{quiz_id}", response_model=QuizAdminRead)

async def read_quiz(
    quiz_id: int,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    quiz = await get_quiz(db, quiz_id)
    if not quiz:
        raise HTTPException(status_code=404, detail="Quiz not found")
    return _to_admin_read(quiz)


@router.post(
    "/{quiz_id}/questions",
    response_model=QuestionAdminRead,
    status_code=status.HTTP_201_CREATED,
)
async def add_question_route(
    quiz_id: int,
    data: QuestionCreate,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    return await add_question(db, Question(quiz_id=quiz_id, **data.model_dump()))


@attempts_router.get("/", response_model=list[QuizAttemptRead])
async def my_attempts(
    quiz_id: int | None = None,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    """List the caller's attempts, newest first."""
    return await get_attempts_for_user(db, current_user.id, quiz_id)
