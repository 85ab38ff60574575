"""Tests for lesson completion, quiz results and course progress roll-up."""

import asyncio
import pathlib
import sys

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlmodel import SQLModel, select

sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))

from app.models import (
    User,
    Course,
    Lesson,
    Quiz,
    Question,
    QuizAttempt,
    LessonProgress,
    CourseProgress,
)
from app.crud import (
    complete_lesson_direct,
    create_lesson,
    create_quiz,
    get_course_progress,
    get_lesson_progress,
    recompute_course_progress,
    record_quiz_result,
    refresh_course_progress,
    submit_quiz,
)
from app.exceptions import (
    ConflictError,
    MalformedQuizError,
    NotFoundError,
    OrderIndexConflictError,
    PersistenceError,
    QuizRequiredError,
)


async def _setup_db():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    return async_sessionmaker(engine, expire_on_commit=False)


async def _create_user(session, email="learner@example.com") -> User:
    user = User(name="Learner", email=email, password_hash="unused", role="USER")
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


async def _create_course(session, lesson_count: int, quiz_lessons=()) -> tuple:
    course = Course(
        title="Security basics",
        description="Intro",
        category="Compliance",
        duration_minutes=60,
        is_published=True,
    )
    session.add(course)
    await session.commit()
    await session.refresh(course)
    lessons = []
    for i in range(lesson_count):
        lesson = Lesson(
            course_id=course.id,
            title=f"Lesson {i + 1}",
            content="...",
            order_index=i,
            duration_minutes=10,
            has_quiz=i in quiz_lessons,
        )
        session.add(lesson)
        lessons.append(lesson)
    await session.commit()
    for lesson in lessons:
        await session.refresh(lesson)
    return course, lessons


async def _attach_quiz(session, lesson: Lesson, passing_score: int = 70) -> Quiz:
    quiz = Quiz(lesson_id=lesson.id, title="Check", passing_score=passing_score)
    session.add(quiz)
    await session.flush()
    session.add_all(
        [
            Question(
                quiz_id=quiz.id,
                question="Capital of France?",
                question_type="single_choice",
                options=["Paris", "Rome"],
                correct_answers=["Paris"],
                order_index=i,
            )
            for i in range(10)
        ]
    )
    await session.commit()
    await session.refresh(quiz)
    return quiz


async def _question_ids(session, quiz: Quiz) -> list[int]:
    result = await session.execute(
        select(Question.id).where(Question.quiz_id == quiz.id).order_by(Question.order_index)
    )
    return list(result.scalars().all())


def _answers(question_ids: list[int], correct: int) -> dict[int, str]:
    return {
        qid: "Paris" if i < correct else "Rome" for i, qid in enumerate(question_ids)
    }


def test_direct_completion_is_idempotent():
    async def run():
        Session = await _setup_db()
        async with Session() as session:
            user = await _create_user(session)
            course, lessons = await _create_course(session, 2)

            first = await complete_lesson_direct(session, user.id, lessons[0].id)
            assert first.is_completed is True
            assert first.completed_at is not None
            completed_at = first.completed_at

            second = await complete_lesson_direct(session, user.id, lessons[0].id)
            assert second.is_completed is True
            assert second.completed_at == completed_at

            result = await session.execute(
                select(LessonProgress).where(LessonProgress.user_id == user.id)
            )
            assert len(result.scalars().all()) == 1
            progress = await get_course_progress(session, user.id, course.id)
            assert progress.lessons_completed == 1
            assert progress.progress_percentage == 50

    asyncio.run(run())


def test_three_of_five_lessons_is_sixty_percent():
    async def run():
        Session = await _setup_db()
        async with Session() as session:
            user = await _create_user(session)
            course, lessons = await _create_course(session, 5)
            for lesson in lessons[:3]:
                await complete_lesson_direct(session, user.id, lesson.id)

            progress = await get_course_progress(session, user.id, course.id)
            assert progress.progress_percentage == 60
            assert progress.is_completed is False
            assert progress.completed_at is None
            assert progress.lessons_completed == 3
            assert progress.total_lessons == 5

    asyncio.run(run())


def test_quiz_gated_lesson_rejects_direct_completion():
    async def run():
        Session = await _setup_db()
        async with Session() as session:
            user = await _create_user(session)
            course, lessons = await _create_course(session, 1, quiz_lessons=(0,))
            with pytest.raises(QuizRequiredError):
                await complete_lesson_direct(session, user.id, lessons[0].id)
            assert await get_lesson_progress(session, user.id, lessons[0].id) is None
            assert await get_course_progress(session, user.id, course.id) is None

    asyncio.run(run())


def test_unknown_lesson_is_not_found():
    async def run():
        Session = await _setup_db()
        async with Session() as session:
            user = await _create_user(session)
            with pytest.raises(NotFoundError):
                await complete_lesson_direct(session, user.id, 404)
            with pytest.raises(NotFoundError):
                await submit_quiz(session, user.id, 404, {})

    asyncio.run(run())


def test_quiz_pass_and_direct_completion_finish_course():
    async def run():
        Session = await _setup_db()
        async with Session() as session:
            user = await _create_user(session)
            course, lessons = await _create_course(session, 2, quiz_lessons=(0,))
            quiz = await _attach_quiz(session, lessons[0], passing_score=70)
            qids = await _question_ids(session, quiz)

            attempt, grade, lesson_progress = await submit_quiz(
                session, user.id, lessons[0].id, _answers(qids, 9)
            )
            assert grade.score == 90
            assert grade.passed is True
            assert attempt.attempt_number == 1
            assert lesson_progress.is_completed is True
            assert lesson_progress.quiz_score == 90

            await complete_lesson_direct(session, user.id, lessons[1].id)
            progress = await get_course_progress(session, user.id, course.id)
            assert progress.progress_percentage == 100
            assert progress.is_completed is True
            completed_at = progress.completed_at
            assert completed_at is not None

            again = await refresh_course_progress(session, user.id, course.id)
            assert again.is_completed is True
            assert again.completed_at == completed_at

            await complete_lesson_direct(session, user.id, lessons[1].id)
            progress = await get_course_progress(session, user.id, course.id)
            assert progress.completed_at == completed_at

    asyncio.run(run())


def test_failed_attempt_does_not_undo_completion():
    async def run():
        Session = await _setup_db()
        async with Session() as session:
            user = await _create_user(session)
            course, lessons = await _create_course(session, 1, quiz_lessons=(0,))
            quiz = await _attach_quiz(session, lessons[0], passing_score=70)
            qids = await _question_ids(session, quiz)

            _, failed, progress = await submit_quiz(
                session, user.id, lessons[0].id, _answers(qids, 5)
            )
            assert failed.passed is False
            assert progress.is_completed is False
            assert progress.quiz_attempts == 1

            _, passed, progress = await submit_quiz(
                session, user.id, lessons[0].id, _answers(qids, 8)
            )
            assert passed.passed is True
            assert progress.is_completed is True
            completed_at = progress.completed_at

            attempt, failed_again, progress = await submit_quiz(
                session, user.id, lessons[0].id, _answers(qids, 2)
            )
            assert failed_again.passed is False
            assert attempt.attempt_number == 3
            assert progress.is_completed is True
            assert progress.completed_at == completed_at
            assert progress.quiz_score == 20
            assert progress.quiz_attempts == 3

            course_progress = await get_course_progress(session, user.id, course.id)
            assert course_progress.is_completed is True

            result = await session.execute(
                select(QuizAttempt).where(QuizAttempt.user_id == user.id)
            )
            attempts = result.scalars().all()
            assert sorted(a.attempt_number for a in attempts) == [1, 2, 3]

    asyncio.run(run())


def test_same_answers_grade_the_same_but_store_two_attempts():
    async def run():
        Session = await _setup_db()
        async with Session() as session:
            user = await _create_user(session)
            _, lessons = await _create_course(session, 1, quiz_lessons=(0,))
            quiz = await _attach_quiz(session, lessons[0])
            qids = await _question_ids(session, quiz)
            answers = _answers(qids, 6)

            first_attempt, first, _ = await submit_quiz(
                session, user.id, lessons[0].id, answers
            )
            second_attempt, second, _ = await submit_quiz(
                session, user.id, lessons[0].id, answers
            )
            assert (first.score, first.passed) == (second.score, second.passed)
            assert first_attempt.id != second_attempt.id
            assert first_attempt.answers == second_attempt.answers

    asyncio.run(run())


def test_quiz_without_questions_is_rejected_before_writing():
    async def run():
        Session = await _setup_db()
        async with Session() as session:
            user = await _create_user(session)
            _, lessons = await _create_course(session, 1, quiz_lessons=(0,))
            session.add(Quiz(lesson_id=lessons[0].id, title="Empty"))
            await session.commit()

            with pytest.raises(MalformedQuizError):
                await submit_quiz(session, user.id, lessons[0].id, {})
            result = await session.execute(select(QuizAttempt))
            assert result.scalars().all() == []

    asyncio.run(run())


def test_record_quiz_result_updates_progress():
    async def run():
        Session = await _setup_db()
        async with Session() as session:
            user = await _create_user(session)
            course, lessons = await _create_course(session, 2, quiz_lessons=(0,))
            quiz = await _attach_quiz(session, lessons[0])
            attempt = QuizAttempt(
                user_id=user.id,
                quiz_id=quiz.id,
                attempt_number=1,
                score=100,
                correct_count=10,
                total_questions=10,
                passed=True,
            )
            session.add(attempt)
            await session.commit()

            progress = await record_quiz_result(session, user.id, lessons[0].id, attempt)
            assert progress.is_completed is True
            assert progress.quiz_score == 100
            course_progress = await get_course_progress(session, user.id, course.id)
            assert course_progress.progress_percentage == 50

    asyncio.run(run())


def test_percentage_matches_completed_share():
    async def run():
        Session = await _setup_db()
        async with Session() as session:
            user = await _create_user(session)
            for total in (1, 3, 6, 7, 8):
                course, lessons = await _create_course(session, total)
                for done, lesson in enumerate(lessons, start=1):
                    await complete_lesson_direct(session, user.id, lesson.id)
                    progress = await get_course_progress(session, user.id, course.id)
                    assert progress.progress_percentage == int(100 * done / total + 0.5)
                    assert progress.is_completed is (done == total)

    asyncio.run(run())


def test_course_without_lessons_is_zero_and_incomplete():
    async def run():
        Session = await _setup_db()
        async with Session() as session:
            user = await _create_user(session)
            course, _ = await _create_course(session, 0)
            progress = await refresh_course_progress(session, user.id, course.id)
            assert progress.progress_percentage == 0
            assert progress.is_completed is False
            assert progress.total_lessons == 0

    asyncio.run(run())


def test_recompute_is_idempotent():
    async def run():
        Session = await _setup_db()
        async with Session() as session:
            user = await _create_user(session)
            course, lessons = await _create_course(session, 3)
            await complete_lesson_direct(session, user.id, lessons[0].id)

            first = await recompute_course_progress(session, user.id, course.id)
            values = (
                first.progress_percentage,
                first.is_completed,
                first.lessons_completed,
                first.total_lessons,
            )
            second = await recompute_course_progress(session, user.id, course.id)
            assert values == (
                second.progress_percentage,
                second.is_completed,
                second.lessons_completed,
                second.total_lessons,
            )
            await session.commit()
            result = await session.execute(
                select(CourseProgress).where(CourseProgress.user_id == user.id)
            )
            assert len(result.scalars().all()) == 1

    asyncio.run(run())


def test_new_lesson_reopens_completed_course():
    async def run():
        Session = await _setup_db()
        async with Session() as session:
            user = await _create_user(session)
            course, lessons = await _create_course(session, 1)
            await complete_lesson_direct(session, user.id, lessons[0].id)
            assert (await get_course_progress(session, user.id, course.id)).is_completed

            await create_lesson(
                session,
                Lesson(course_id=course.id, title="Extra", content="...", duration_minutes=5),
            )
            progress = await get_course_progress(session, user.id, course.id)
            assert progress.progress_percentage == 50
            assert progress.is_completed is False
            assert progress.completed_at is None
            assert progress.total_lessons == 2


    asyncio.run(run())


def test_lesson_positions_are_unique_per_course():
    async def run():
        Session = await _setup_db()
        async with Session() as session:
            course, lessons = await _create_course(session, 2)
            with pytest.raises(OrderIndexConflictError):
                await create_lesson(
                    session,
                    Lesson(
                        course_id=course.id,
                        title="Clash",
                        content="...",
                        order_index=1,
                        duration_minutes=5,
                    ),
                )
            appended = await create_lesson(
                session,
                Lesson(course_id=course.id, title="Tail", content="...", duration_minutes=5),
            )
            assert appended.order_index == 2

    asyncio.run(run())


def test_storage_failure_leaves_progress_unchanged():
    async def run():
        Session = await _setup_db()
        async with Session() as session:
            user = await _create_user(session)
            course, lessons = await _create_course(session, 2)
            user_id, lesson_id, course_id = user.id, lessons[0].id, course.id

        async with Session() as session:

            async def failing_commit():
                raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

            session.commit = failing_commit
            with pytest.raises(PersistenceError):
                await complete_lesson_direct(session, user_id, lesson_id)

        async with Session() as session:
            assert await get_lesson_progress(session, user_id, lesson_id) is None
            assert await get_course_progress(session, user_id, course_id) is None

    asyncio.run(run())


def test_new_lesson_updates_every_learner_of_the_course():
    async def run():
        Session = await _setup_db()
        async with Session() as session:
            finished = await _create_user(session, "finished@example.com")
            halfway = await _create_user(session, "halfway@example.com")
            course, lessons = await _create_course(session, 2)
            for lesson in lessons:
                await complete_lesson_direct(session, finished.id, lesson.id)
            await complete_lesson_direct(session, halfway.id, lessons[0].id)

            await create_lesson(
                session,
                Lesson(course_id=course.id, title="Extra", content="...", duration_minutes=5),
            )
            first = await get_course_progress(session, finished.id, course.id)
            second = await get_course_progress(session, halfway.id, course.id)
            assert (first.lessons_completed, first.total_lessons) == (2, 3)
            assert first.progress_percentage == 67
            assert first.is_completed is False
            assert (second.lessons_completed, second.total_lessons) == (1, 3)
            assert second.progress_percentage == 33

    asyncio.run(run())


def test_adding_a_quiz_reopens_directly_completed_lesson():
    async def run():
        Session = await _setup_db()
        async with Session() as session:
            user = await _create_user(session)
            course, lessons = await _create_course(session, 1)
            await complete_lesson_direct(session, user.id, lessons[0].id)
            assert (await get_course_progress(session, user.id, course.id)).is_completed

            await create_quiz(session, Quiz(lesson_id=lessons[0].id, title="Late quiz"))

            lesson_progress = await get_lesson_progress(session, user.id, lessons[0].id)
            assert lesson_progress.is_completed is False
            assert lesson_progress.completed_at is None
            assert lesson_progress.quiz_attempts == 0
            course_progress = await get_course_progress(session, user.id, course.id)
            assert course_progress.is_completed is False
            assert course_progress.progress_percentage == 0
            with pytest.raises(QuizRequiredError):
                await complete_lesson_direct(session, user.id, lessons[0].id)

    asyncio.run(run())


def test_record_quiz_result_rejects_attempts_from_other_lessons():
    async def run():
        Session = await _setup_db()
        async with Session() as session:
            user = await _create_user(session)
            _, lessons = await _create_course(session, 3, quiz_lessons=(0, 1))
            own_quiz = await _attach_quiz(session, lessons[0])
            other_quiz = await _attach_quiz(session, lessons[1])
            attempt = QuizAttempt(
                user_id=user.id,
                quiz_id=other_quiz.id,
                attempt_number=1,
                score=100,
                correct_count=10,
                total_questions=10,
                passed=True,
            )
            session.add(attempt)
            await session.commit()

            with pytest.raises(ConflictError):
                await record_quiz_result(session, user.id, lessons[0].id, attempt)
            with pytest.raises(NotFoundError):
                await record_quiz_result(session, user.id, lessons[2].id, attempt)
            assert own_quiz.id != other_quiz.id
            assert await get_lesson_progress(session, user.id, lessons[0].id) is None

    asyncio.run(run())


def test_storage_read_failure_surfaces_as_persistence_error():
    async def run():
        Session = await _setup_db()
        async with Session() as session:
            user = await _create_user(session)
            _, lessons = await _create_course(session, 1, quiz_lessons=(0,))
            await _attach_quiz(session, lessons[0])
            user_id, lesson_id = user.id, lessons[0].id

        async with Session() as session:

            async def failing_execute(*args, **kwargs):
                raise OperationalError("SELECT", {}, Exception("database is locked"))

            session.execute = failing_execute
            with pytest.raises(PersistenceError):
                await complete_lesson_direct(session, user_id, lesson_id)
            with pytest.raises(PersistenceError):
                await submit_quiz(session, user_id, lesson_id, {})
            with pytest.raises(PersistenceError):
                await refresh_course_progress(session, user_id, 1)

    asyncio.run(run())
