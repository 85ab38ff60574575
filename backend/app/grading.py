"""Quiz scoring.

Grading is a pure function of the quiz's questions and the submitted
answers; storing the attempt and updating progress happens in
``app.crud.submit_quiz``.
"""

from collections.abc import Iterable, Mapping
from typing import Union

from pydantic import BaseModel

from app.acl import QUESTION_MULTIPLE_CHOICE
from app.exceptions import MalformedQuizError
from app.models import Question

AnswerValue = Union[str, list[str]]


class GradeResult(BaseModel):
    score: int
    passed: bool
    passing_score: int
    correct_count: int
    total_questions: int
    per_question_correctness: dict[int, bool]


def round_percentage(part: int, whole: int) -> int:
    """``round(100 * part / whole)`` with halves rounded up, 0 for ``whole == 0``."""
    if whole <= 0:
        return 0
    # integer arithmetic: exact half-up rounding for non-negative inputs
    return (200 * part + whole) // (2 * whole)


def _normalize(value) -> str:
    return str(value).strip().lower()


def _as_list(value: AnswerValue | None) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def is_answer_correct(question: Question, submitted: AnswerValue | None) -> bool:
    """Compare one submitted answer against the question's correct answer(s)."""
    if submitted is None or not question.correct_answers:
        return False

    if question.question_type == QUESTION_MULTIPLE_CHOICE:
        chosen = {_normalize(v) for v in _as_list(submitted)}
        expected = {_normalize(v) for v in question.correct_answers}
        return chosen == expected

    # single_choice, true_false and text: one value, exact after normalizing
    values = _as_list(submitted)
    if len(values) != 1:
        return False
    return _normalize(values[0]) == _normalize(question.correct_answers[0])


def collect_answers(
    answers: Mapping[int, AnswerValue] | Iterable[tuple[int, AnswerValue]],
) -> dict[int, AnswerValue]:
    """Index submitted answers by question id; later duplicates win."""
    if isinstance(answers, Mapping):
        return dict(answers)
    collected: dict[int, AnswerValue] = {}
    for question_id, value in answers:
        collected[question_id] = value
    return collected


def grade_quiz(
    questions: list[Question],
    answers: Mapping[int, AnswerValue] | Iterable[tuple[int, AnswerValue]],
    passing_score: int,
) -> GradeResult:
    """Score ``answers`` against ``questions``.

    Missing answers count as incorrect and answers for unknown question
    ids are ignored.  A quiz without questions cannot be graded and
    raises :class:`MalformedQuizError`.
    """
    if not questions:
        raise MalformedQuizError("Quiz has no questions to grade")

    submitted = collect_answers(answers)
    correctness = {
        q.id: is_answer_correct(q, submitted.get(q.id)) for q in questions
    }
    correct_count = sum(1 for ok in correctness.values() if ok)
    score = round_percentage(correct_count, len(questions))
    return GradeResult(
        score=score,
        passed=score >= passing_score,
        passing_score=passing_score,
        correct_count=correct_count,
        total_questions=len(questions),
        per_question_correctness=correctness,
    )
