"""Asynchronous CRUD helpers and progress logic for the application's models.

Each function in this module encapsulates a specific database operation
using SQLModel and SQLAlchemy.  Centralizing the logic keeps route
handlers light and makes behavior easier to test.

Progress is tracked in three steps.  ``complete_lesson_direct`` and
``record_quiz_result`` upsert a ``LessonProgress`` row, then
``recompute_course_progress`` rebuilds the ``CourseProgress`` row for the
lesson's course from scratch.  ``evaluate_mandatory_gate`` only reads
those rows to decide whether the AI catalog is unlocked.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime

from sqlalchemy import func, or_, and_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlmodel import select, delete

from app.acl import mandatory_roles_for
from app.auth import get_password_hash
from app.exceptions import (
    ConflictError,
    LearningError,
    NotFoundError,
    OrderIndexConflictError,
    PersistenceError,
    QuizRequiredError,
)
from app.grading import (
    AnswerValue,
    GradeResult,
    collect_answers,
    grade_quiz,
    round_percentage,
)
from app.models import (
    User,
    Course,
    Lesson,
    Quiz,
    Question,
    QuizAttempt,
    LessonProgress,
    CourseProgress,
    MandatoryAssignment,
    Service,
    Settings,
)
from app.schemas.mandatory import (
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    STATUS_NOT_STARTED,
    MandatoryCourseStatus,
    MandatoryStatus,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def unit_of_work(db: AsyncSession, action: str):
    """Commit everything done inside the block, or nothing at all.

    Database failures are rolled back and surface as ``PersistenceError``;
    domain errors are rolled back and re-raised unchanged.
    """
    try:
        yield
        await db.commit()
    except LearningError:
        await db.rollback()
        raise
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.warning("Database failure while trying to %s: %s", action, exc)
        raise PersistenceError(f"Failed to {action}") from exc


@asynccontextmanager
async def storage_reads(db: AsyncSession, action: str):
    """Surface database failures of read-only work as ``PersistenceError``."""
    try:
        yield
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.warning("Database failure while trying to %s: %s", action, exc)
        raise PersistenceError(f"Failed to {action}") from exc


# --- settings ---------------------------------------------------------------


async def get_settings(db: AsyncSession) -> Settings:
    """Fetch the singleton settings record, creating it if necessary."""
    result = await db.execute(select(Settings).where(Settings.id == 1))
    settings = result.scalar_one_or_none()
    if not settings:
        settings = Settings()
        db.add(settings)
        await db.commit()
        await db.refresh(settings)
    return settings


async def save_settings(db: AsyncSession, settings: Settings) -> Settings:
    """Persist settings changes and return the refreshed object."""

    db.add(settings)
    await db.commit()
    await db.refresh(settings)
    return settings


# --- users ------------------------------------------------------------------


async def create_user(db: AsyncSession, user: User) -> User:
    """Create a new user, hashing the password if it is still plain text."""

    if not user.password_hash.startswith("$2b$"):
        user.password_hash = get_password_hash(user.password_hash)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def count_users(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(User))
    return result.scalar()


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Return a user by email or ``None`` if not found."""
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def get_user(db: AsyncSession, user_id: int) -> User | None:
    """Load a user by primary key."""
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_all_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).order_by(User.id))
    return result.scalars().all()


async def save_user(db: AsyncSession, user: User) -> User:
    """Persist changes to an existing user."""

    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


# --- courses ----------------------------------------------------------------


async def create_course(db: AsyncSession, course: Course) -> Course:
    db.add(course)
    await db.commit()
    await db.refresh(course)
    return course


async def get_course(db: AsyncSession, course_id: int) -> Course | None:
    result = await db.execute(select(Course).where(Course.id == course_id))
    return result.scalar_one_or_none()


async def get_course_with_lessons(db: AsyncSession, course_id: int) -> Course | None:
    """Load a course with its lessons eagerly loaded in ``order_index`` order."""
    result = await db.execute(
        select(Course)
        .where(Course.id == course_id)
        .options(selectinload(Course.lessons))
    )
    return result.scalar_one_or_none()


async def list_courses(
    db: AsyncSession, include_unpublished: bool = False
) -> list[Course]:
    """Return courses newest first; unpublished ones only when asked for."""
    query = select(Course).order_by(Course.created_at.desc(), Course.id.desc())
    if not include_unpublished:
        query = query.where(Course.is_published == True)  # noqa: E712
    result = await db.execute(query)
    return result.scalars().all()


async def save_course(db: AsyncSession, course: Course) -> Course:
    course.updated_at = datetime.utcnow()
    db.add(course)
    await db.commit()
    await db.refresh(course)
    return course


async def delete_course(db: AsyncSession, course: Course) -> None:
    """Remove a course together with its content and every progress record."""

    async with unit_of_work(db, "delete course"):
        lesson_ids = select(Lesson.id).where(Lesson.course_id == course.id)
        quiz_ids = select(Quiz.id).where(Quiz.lesson_id.in_(lesson_ids))
        await db.execute(delete(QuizAttempt).where(QuizAttempt.quiz_id.in_(quiz_ids)))
        await db.execute(delete(Question).where(Question.quiz_id.in_(quiz_ids)))
        await db.execute(delete(Quiz).where(Quiz.lesson_id.in_(lesson_ids)))
        await db.execute(
            delete(LessonProgress).where(LessonProgress.course_id == course.id)
        )
        await db.execute(
            delete(CourseProgress).where(CourseProgress.course_id == course.id)
        )
        await db.execute(
            delete(MandatoryAssignment).where(
                MandatoryAssignment.course_id == course.id
            )
        )
        await db.execute(delete(Lesson).where(Lesson.course_id == course.id))
        await db.execute(delete(Course).where(Course.id == course.id))
    logger.info("Course %s deleted", course.id)


# --- lessons ----------------------------------------------------------------


async def _ensure_lesson_position_free(
    db: AsyncSession, course_id: int, order_index: int, lesson_id: int | None = None
) -> None:
    query = select(Lesson.id).where(
        Lesson.course_id == course_id, Lesson.order_index == order_index
    )
    if lesson_id is not None:
        query = query.where(Lesson.id != lesson_id)
    result = await db.execute(query)
    if result.first() is not None:
        raise OrderIndexConflictError("course", course_id, order_index)


async def create_lesson(db: AsyncSession, lesson: Lesson) -> Lesson:
    """Add a lesson to its course.

    Without an ``order_index`` the lesson is appended after the last one;
    an index already used in the course is rejected.
    """
    if await get_course(db, lesson.course_id) is None:
        raise NotFoundError("Course", lesson.course_id)
    if lesson.order_index is None:
        result = await db.execute(
            select(func.max(Lesson.order_index)).where(
                Lesson.course_id == lesson.course_id
            )
        )
        last = result.scalar()
        lesson.order_index = 0 if last is None else last + 1
    else:
        await _ensure_lesson_position_free(db, lesson.course_id, lesson.order_index)
    async with unit_of_work(db, "create lesson"):
        db.add(lesson)
        await db.flush()
        # everyone who started the course now has one more lesson to do
        await _recompute_course_for_all_users(db, lesson.course_id)
    await db.refresh(lesson)
    return lesson


async def get_lesson(db: AsyncSession, lesson_id: int) -> Lesson | None:
    result = await db.execute(select(Lesson).where(Lesson.id == lesson_id))
    return result.scalar_one_or_none()


async def save_lesson(db: AsyncSession, lesson: Lesson) -> Lesson:
    await _ensure_lesson_position_free(
        db, lesson.course_id, lesson.order_index, lesson_id=lesson.id
    )
    lesson.updated_at = datetime.utcnow()
    async with unit_of_work(db, "update lesson"):
        db.add(lesson)
    await db.refresh(lesson)
    return lesson


# --- quizzes ----------------------------------------------------------------


async def create_quiz(db: AsyncSession, quiz: Quiz) -> Quiz:
    """Attach a quiz to a lesson and mark the lesson as quiz-gated.

    Users who had already completed the lesson directly must now pass the
    quiz, so their lesson progress is reopened and their course progress
    recomputed in the same transaction.
    """
    lesson = await get_lesson(db, quiz.lesson_id)
    if lesson is None:
        raise NotFoundError("Lesson", quiz.lesson_id)
    if await get_quiz_for_lesson(db, lesson.id) is not None:
        raise ConflictError(f"Lesson {lesson.id} already has a quiz")
    async with unit_of_work(db, "create quiz"):
        now = datetime.utcnow()
        lesson.has_quiz = True
        lesson.updated_at = now
        db.add(lesson)
        db.add(quiz)
        result = await db.execute(
            select(LessonProgress).where(
                LessonProgress.lesson_id == lesson.id,
                LessonProgress.is_completed == True,  # noqa: E712
            )
        )
        reopened = result.scalars().all()
        for progress in reopened:
            progress.is_completed = False
            progress.completed_at = None
            progress.updated_at = now
            db.add(progress)
        await db.flush()
        for progress in reopened:
            await recompute_course_progress(db, progress.user_id, lesson.course_id)
        if reopened:
            logger.info(
                "Quiz added to lesson %s reopened it for %d user(s)",
                lesson.id,
                len(reopened),
            )
    await db.refresh(quiz)
    return quiz


async def list_quizzes_for_lesson(db: AsyncSession, lesson_id: int) -> list[Quiz]:
    result = await db.execute(
        select(Quiz)
        .where(Quiz.lesson_id == lesson_id)
        .options(selectinload(Quiz.questions))
        .order_by(Quiz.id)
    )
    return result.scalars().all()


async def get_quiz(db: AsyncSession, quiz_id: int) -> Quiz | None:
    """Load a quiz with its questions in ``order_index`` order."""
    result = await db.execute(
        select(Quiz).where(Quiz.id == quiz_id).options(selectinload(Quiz.questions))
    )
    return result.scalar_one_or_none()


async def get_quiz_for_lesson(db: AsyncSession, lesson_id: int) -> Quiz | None:
    result = await db.execute(
        select(Quiz)
        .where(Quiz.lesson_id == lesson_id)
        .options(selectinload(Quiz.questions))
    )
    return result.scalar_one_or_none()


async def add_question(db: AsyncSession, question: Question) -> Question:
    """Append a question to a quiz, rejecting a duplicate ``order_index``."""
    result = await db.execute(select(Quiz.id).where(Quiz.id == question.quiz_id))
    if result.first() is None:
        raise NotFoundError("Quiz", question.quiz_id)
    if question.order_index is None:
        result = await db.execute(
            select(func.max(Question.order_index)).where(
                Question.quiz_id == question.quiz_id
            )
        )
        last = result.scalar()
        question.order_index = 0 if last is None else last + 1
    else:
        result = await db.execute(
            select(Question.id).where(
                Question.quiz_id == question.quiz_id,
                Question.order_index == question.order_index,
            )
        )
        if result.first() is not None:
            raise OrderIndexConflictError("quiz", question.quiz_id, question.order_index)
    async with unit_of_work(db, "add question"):
        db.add(question)
    await db.refresh(question)
    return question


async def count_attempts(db: AsyncSession, user_id: int, quiz_id: int) -> int:
    result = await db.execute(
        select(func.count())
        .select_from(QuizAttempt)
        .where(QuizAttempt.user_id == user_id, QuizAttempt.quiz_id == quiz_id)
    )
    return result.scalar()


async def get_attempts_for_user(
    db: AsyncSession, user_id: int, quiz_id: int | None = None
) -> list[QuizAttempt]:
    query = select(QuizAttempt).where(QuizAttempt.user_id == user_id)
    if quiz_id is not None:
        query = query.where(QuizAttempt.quiz_id == quiz_id)
    result = await db.execute(
        query.order_by(QuizAttempt.completed_at.desc(), QuizAttempt.id.desc())
    )
    return result.scalars().all()


# --- progress ---------------------------------------------------------------


async def get_lesson_progress(
    db: AsyncSession, user_id: int, lesson_id: int
) -> LessonProgress | None:
    result = await db.execute(
        select(LessonProgress).where(
            LessonProgress.user_id == user_id, LessonProgress.lesson_id == lesson_id
        )
    )
    return result.scalar_one_or_none()


async def get_lesson_progress_for_course(
    db: AsyncSession, user_id: int, course_id: int
) -> list[LessonProgress]:
    result = await db.execute(
        select(LessonProgress)
        .where(
            LessonProgress.user_id == user_id, LessonProgress.course_id == course_id
        )
        .order_by(LessonProgress.lesson_id)
    )
    return result.scalars().all()


async def get_course_progress(
    db: AsyncSession, user_id: int, course_id: int
) -> CourseProgress | None:
    result = await db.execute(
        select(CourseProgress).where(
            CourseProgress.user_id == user_id, CourseProgress.course_id == course_id
        )
    )
    return result.scalar_one_or_none()


async def _get_or_start_lesson_progress(
    db: AsyncSession, user_id: int, lesson: Lesson
) -> LessonProgress:
    progress = await get_lesson_progress(db, user_id, lesson.id)
    if progress is None:
        progress = LessonProgress(
            user_id=user_id, lesson_id=lesson.id, course_id=lesson.course_id
        )
    return progress


async def recompute_course_progress(
    db: AsyncSession, user_id: int, course_id: int
) -> CourseProgress:
    """Rebuild the user's ``CourseProgress`` row from their lesson progress.

    The result only depends on the course's lessons and the stored
    ``LessonProgress`` rows, so running it again converges to the same
    values.  The original ``completed_at`` is kept while the course stays
    completed.  Changes are flushed, not committed; the caller owns the
    transaction.
    """
    lesson_result = await db.execute(
        select(Lesson.id).where(Lesson.course_id == course_id)
    )
    lesson_ids = list(lesson_result.scalars().all())
    completed_count = 0
    if lesson_ids:
        progress_result = await db.execute(
            select(func.count())
            .select_from(LessonProgress)
            .where(
                LessonProgress.user_id == user_id,
                LessonProgress.lesson_id.in_(lesson_ids),
                LessonProgress.is_completed == True,  # noqa: E712
            )
        )
        completed_count = progress_result.scalar()
    total = len(lesson_ids)
    is_completed = total > 0 and completed_count == total

    progress = await get_course_progress(db, user_id, course_id)
    if progress is None:
        progress = CourseProgress(user_id=user_id, course_id=course_id)
    was_completed = progress.is_completed and progress.completed_at is not None

    now = datetime.utcnow()
    progress.progress_percentage = round_percentage(completed_count, total)
    progress.lessons_completed = completed_count
    progress.total_lessons = total
    progress.is_completed = is_completed
    if not is_completed:
        progress.completed_at = None
    elif not was_completed:
        progress.completed_at = now
        logger.info("User %s completed course %s", user_id, course_id)
    progress.updated_at = now
    db.add(progress)
    await db.flush()
    return progress


async def _recompute_course_for_all_users(db: AsyncSession, course_id: int) -> None:
    """Recompute every stored ``CourseProgress`` row of a course."""
    result = await db.execute(
        select(CourseProgress.user_id).where(CourseProgress.course_id == course_id)
    )
    for user_id in result.scalars().all():
        await recompute_course_progress(db, user_id, course_id)


async def _load_lesson(db: AsyncSession, lesson_id: int) -> Lesson:
    async with storage_reads(db, "load lesson"):
        lesson = await get_lesson(db, lesson_id)
    if lesson is None:
        raise NotFoundError("Lesson", lesson_id)
    return lesson


async def refresh_course_progress(
    db: AsyncSession, user_id: int, course_id: int
) -> CourseProgress:
    """Recompute and commit a user's course progress on its own."""
    async with storage_reads(db, "load course"):
        course = await get_course(db, course_id)
    if course is None:
        raise NotFoundError("Course", course_id)
    async with unit_of_work(db, "update course progress"):
        progress = await recompute_course_progress(db, user_id, course_id)
    return progress


async def complete_lesson_direct(
    db: AsyncSession, user_id: int, lesson_id: int
) -> LessonProgress:
    """Mark a lesson without a quiz as completed.

    Quiz-gated lessons can only be completed by passing their quiz and
    raise ``QuizRequiredError``.  Completing an already completed lesson
    keeps the original completion time.
    """
    lesson = await _load_lesson(db, lesson_id)
    if lesson.has_quiz:
        raise QuizRequiredError(lesson_id)

    async with unit_of_work(db, "complete lesson"):
        progress = await _get_or_start_lesson_progress(db, user_id, lesson)
        now = datetime.utcnow()
        if not progress.is_completed:
            progress.is_completed = True
            progress.completed_at = now
            logger.info("User %s completed lesson %s", user_id, lesson_id)
        progress.updated_at = now
        db.add(progress)
        await db.flush()
        await recompute_course_progress(db, user_id, lesson.course_id)
    return progress


async def _apply_quiz_result(
    db: AsyncSession, user_id: int, lesson: Lesson, attempt: QuizAttempt
) -> LessonProgress:
    progress = await _get_or_start_lesson_progress(db, user_id, lesson)
    now = datetime.utcnow()
    progress.quiz_score = attempt.score
    progress.quiz_attempts = (progress.quiz_attempts or 0) + 1
    # completion is monotonic: a later failing attempt never undoes a pass
    if attempt.passed and not progress.is_completed:
        progress.is_completed = True
        progress.completed_at = now
        logger.info(
            "User %s passed the quiz of lesson %s with %s%%",
            user_id,
            lesson.id,
            attempt.score,
        )
    progress.updated_at = now
    db.add(progress)
    await db.flush()
    await recompute_course_progress(db, user_id, lesson.course_id)
    return progress


async def record_quiz_result(
    db: AsyncSession, user_id: int, lesson_id: int, attempt: QuizAttempt
) -> LessonProgress:
    """Fold a graded attempt into the user's lesson and course progress.

    The attempt must belong to the lesson's quiz.
    """
    lesson = await _load_lesson(db, lesson_id)
    quiz = None
    if lesson.has_quiz:
        async with storage_reads(db, "load quiz"):
            quiz = await get_quiz_for_lesson(db, lesson_id)
    if quiz is None:
        raise NotFoundError("Quiz for lesson", lesson_id)
    if attempt.quiz_id != quiz.id:
        raise ConflictError(
            f"Attempt for quiz {attempt.quiz_id} does not belong to lesson {lesson_id}"
        )
    async with unit_of_work(db, "record quiz result"):
        progress = await _apply_quiz_result(db, user_id, lesson, attempt)
    return progress


async def submit_quiz(
    db: AsyncSession,
    user_id: int,
    lesson_id: int,
    answers: dict[int, AnswerValue] | list[tuple[int, AnswerValue]],
) -> tuple[QuizAttempt, GradeResult, LessonProgress]:
    """Grade a submission for the lesson's quiz and store the attempt.

    The attempt, the lesson progress and the course progress are written
    in one transaction.
    """
    lesson = await _load_lesson(db, lesson_id)
    async with storage_reads(db, "load quiz"):
        quiz = await get_quiz_for_lesson(db, lesson_id)
        prior_attempts = 0
        if quiz is not None:
            prior_attempts = await count_attempts(db, user_id, quiz.id)
    if quiz is None:
        raise NotFoundError("Quiz for lesson", lesson_id)

    submitted = collect_answers(answers)
    grade = grade_quiz(quiz.questions, submitted, quiz.passing_score)
    logger.info(
        "User %s scored %s%% on quiz %s (attempt %s)",
        user_id,
        grade.score,
        quiz.id,
        prior_attempts + 1,
    )

    attempt = QuizAttempt(
        user_id=user_id,
        quiz_id=quiz.id,
        attempt_number=prior_attempts + 1,
        answers=[
            {
                "question_id": q.id,
                "user_answer": submitted.get(q.id),
                "is_correct": grade.per_question_correctness[q.id],
            }
            for q in quiz.questions
        ],
        score=grade.score,
        correct_count=grade.correct_count,
        total_questions=grade.total_questions,
        passed=grade.passed,
    )
    async with unit_of_work(db, "submit quiz"):
        db.add(attempt)
        await db.flush()
        progress = await _apply_quiz_result(db, user_id, lesson, attempt)
    return attempt, grade, progress


# --- mandatory training -----------------------------------------------------


async def get_mandatory_courses(
    db: AsyncSession, user_id: int, role: str
) -> list[Course]:
    """Published courses the user must complete.

    A course is mandatory for the user when it is flagged mandatory for
    their role (or for ``ALL``), or when it was assigned to them.
    """
    assigned = select(MandatoryAssignment.course_id).where(
        MandatoryAssignment.user_id == user_id
    )
    result = await db.execute(
        select(Course)
        .where(
            Course.is_published == True,  # noqa: E712
            or_(
                and_(
                    Course.is_mandatory == True,  # noqa: E712
                    Course.mandatory_for_role.in_(mandatory_roles_for(role)),
                ),
                Course.id.in_(assigned),
            ),
        )
        .order_by(Course.id)
    )
    return result.scalars().all()


async def evaluate_mandatory_gate(
    db: AsyncSession, user_id: int, role: str
) -> MandatoryStatus:
    """Decide whether the user may open the AI catalog.

    Read-only: courses without a progress row count as not started and
    no row is created for them.
    """
    progress_by_course: dict[int, CourseProgress] = {}
    async with storage_reads(db, "evaluate mandatory training"):
        courses = await get_mandatory_courses(db, user_id, role)
        if courses:
            result = await db.execute(
                select(CourseProgress).where(
                    CourseProgress.user_id == user_id,
                    CourseProgress.course_id.in_([c.id for c in courses]),
                )
            )
            progress_by_course = {p.course_id: p for p in result.scalars().all()}

    statuses = []
    for course in courses:
        progress = progress_by_course.get(course.id)
        if progress is None:
            state = STATUS_NOT_STARTED
        elif progress.is_completed:
            state = STATUS_COMPLETED
        else:
            state = STATUS_IN_PROGRESS
        statuses.append(
            MandatoryCourseStatus(
                course_id=course.id,
                title=course.title,
                description=course.description,
                category=course.category,
                duration_minutes=course.duration_minutes,
                mandatory_for_role=course.mandatory_for_role,
                status=state,
                progress_percentage=progress.progress_percentage if progress else 0,
                is_completed=state == STATUS_COMPLETED,
                completed_at=progress.completed_at if progress else None,
            )
        )

    completed = sum(1 for s in statuses if s.is_completed)
    all_completed = completed == len(statuses)
    return MandatoryStatus(
        courses=statuses,
        total_mandatory=len(statuses),
        completed_mandatory=completed,
        all_courses_completed=all_completed,
        can_access_catalog=all_completed,
    )


async def assign_mandatory_course(
    db: AsyncSession, course_id: int, user_ids: list[int], assigned_by: int | None
) -> list[MandatoryAssignment]:
    """Assign a course to users; existing assignments are left untouched."""
    if await get_course(db, course_id) is None:
        raise NotFoundError("Course", course_id)
    assignments = []
    async with unit_of_work(db, "assign mandatory course"):
        for user_id in dict.fromkeys(user_ids):
            if await get_user(db, user_id) is None:
                raise NotFoundError("User", user_id)
            result = await db.execute(
                select(MandatoryAssignment).where(
                    MandatoryAssignment.user_id == user_id,
                    MandatoryAssignment.course_id == course_id,
                )
            )
            assignment = result.scalar_one_or_none()
            if assignment is None:
                assignment = MandatoryAssignment(
                    user_id=user_id, course_id=course_id, assigned_by=assigned_by
                )
                db.add(assignment)
            assignments.append(assignment)
        await db.flush()
    return assignments


# --- AI catalog -------------------------------------------------------------


async def create_service(db: AsyncSession, service: Service) -> Service:
    db.add(service)
    await db.commit()
    await db.refresh(service)
    return service


async def list_active_services(
    db: AsyncSession, category: str | None = None
) -> list[Service]:
    query = select(Service).where(Service.is_active == True)  # noqa: E712
    if category:
        query = query.where(Service.category == category)
    result = await db.execute(query.order_by(Service.created_at.desc(), Service.id.desc()))
    return result.scalars().all()


async def ensure_seed_content(db: AsyncSession) -> None:
    """Seed an empty database with sample courses and catalog entries."""

    from app.seed_content import SEED_COURSES, SEED_SERVICES

    result = await db.execute(select(func.count()).select_from(Course))
    if result.scalar():
        return
    async with unit_of_work(db, "seed content"):
        for data in SEED_COURSES:
            course = Course(
                **{k: v for k, v in data.items() if k != "lessons"}
            )
            db.add(course)
            await db.flush()
            for position, lesson_data in enumerate(data["lessons"]):
                quiz_data = lesson_data.get("quiz")
                lesson = Lesson(
                    course_id=course.id,
                    title=lesson_data["title"],
                    content=lesson_data["content"],
                    duration_minutes=lesson_data["duration_minutes"],
                    order_index=position,
                    has_quiz=quiz_data is not None,
                )
                db.add(lesson)
                await db.flush()
                if quiz_data is None:
                    continue
                quiz = Quiz(
                    lesson_id=lesson.id,
                    title=quiz_data["title"],
                    passing_score=quiz_data["passing_score"],
                )
                db.add(quiz)
                await db.flush()
                for q_position, q in enumerate(quiz_data["questions"]):
                    db.add(Question(quiz_id=quiz.id, order_index=q_position, **q))
        for data in SEED_SERVICES:
            db.add(Service(**data))
    logger.info(
        "Seeded %d courses and %d services", len(SEED_COURSES), len(SEED_SERVICES)
    )
