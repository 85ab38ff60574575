"""Tests for quiz scoring."""

import pathlib
import sys

import pytest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))

from app.exceptions import MalformedQuizError
from app.grading import grade_quiz, is_answer_correct, round_percentage
from app.models import Question


def _question(qid: int, question_type: str, correct: list[str]) -> Question:
    return Question(
        id=qid,
        quiz_id=1,
        question=f"Question {qid}",
        question_type=question_type,
        options=[],
        correct_answers=correct,
        order_index=qid,
    )


def _four_question_quiz() -> list[Question]:
    return [
        _question(1, "single_choice", ["Paris"]),
        _question(2, "true_false", ["true"]),
        _question(3, "multiple_choice", ["A", "C"]),
        _question(4, "text", ["photosynthesis"]),
    ]


def test_all_correct_scores_100_and_passes():
    answers = {1: "Paris", 2: "true", 3: ["A", "C"], 4: "photosynthesis"}
    result = grade_quiz(_four_question_quiz(), answers, passing_score=80)
    assert result.score == 100
    assert result.passed is True
    assert result.correct_count == 4
    assert result.total_questions == 4
    assert all(result.per_question_correctness.values())


def test_three_of_four_scores_75_and_fails_at_80():
    answers = {1: "Paris", 2: "false", 3: ["A", "C"], 4: "photosynthesis"}
    result = grade_quiz(_four_question_quiz(), answers, passing_score=80)
    assert result.score == 75
    assert result.passed is False
    assert result.per_question_correctness == {1: True, 2: False, 3: True, 4: True}


def test_score_equal_to_passing_score_passes():
    answers = {1: "Paris", 2: "false", 3: ["A", "C"], 4: "photosynthesis"}
    result = grade_quiz(_four_question_quiz(), answers, passing_score=75)
    assert result.passed is True


def test_multiple_choice_is_order_independent():
    question = _question(1, "multiple_choice", ["A", "C"])
    assert is_answer_correct(question, ["C", "A"]) is True
    assert is_answer_correct(question, ["A", "C"]) is True


def test_multiple_choice_subset_and_superset_are_incorrect():
    question = _question(1, "multiple_choice", ["A", "C"])
    assert is_answer_correct(question, ["A"]) is False
    assert is_answer_correct(question, ["A", "B", "C"]) is False
    assert is_answer_correct(question, []) is False


def test_single_value_comparison_ignores_case_and_whitespace():
    question = _question(1, "single_choice", ["Paris"])
    assert is_answer_correct(question, "  paris ") is True
    assert is_answer_correct(question, "PARIS") is True
    assert is_answer_correct(question, "Pari") is False
    text = _question(2, "text", [" Photosynthesis"])
    assert is_answer_correct(text, "photosynthesis\n") is True
    assert is_answer_correct(text, "photo synthesis") is False


def test_single_value_accepts_one_element_list_only():
    question = _question(1, "true_false", ["false"])
    assert is_answer_correct(question, ["False"]) is True
    assert is_answer_correct(question, ["false", "true"]) is False


def test_missing_answers_count_as_incorrect():
    result = grade_quiz(_four_question_quiz(), {1: "Paris"}, passing_score=50)
    assert result.score == 25
    assert result.passed is False
    assert result.per_question_correctness[2] is False


def test_unknown_question_ids_are_ignored():
    answers = {1: "Paris", 2: "true", 3: ["A", "C"], 4: "photosynthesis", 99: "x"}
    result = grade_quiz(_four_question_quiz(), answers, passing_score=80)
    assert result.score == 100
    assert 99 not in result.per_question_correctness


def test_duplicate_answers_last_one_wins():
    questions = [_question(1, "single_choice", ["Paris"])]
    first_wrong = grade_quiz(questions, [(1, "Rome"), (1, "Paris")], 100)
    assert first_wrong.passed is True
    last_wrong = grade_quiz(questions, [(1, "Paris"), (1, "Rome")], 100)
    assert last_wrong.passed is False


def test_quiz_without_questions_is_malformed():
    with pytest.raises(MalformedQuizError):
        grade_quiz([], {}, passing_score=80)


def test_grading_is_deterministic():
    answers = {1: "Paris", 3: ["C", "A"]}
    first = grade_quiz(_four_question_quiz(), answers, passing_score=50)
    second = grade_quiz(_four_question_quiz(), answers, passing_score=50)
    assert first == second


def test_round_percentage_rounds_halves_up():
    assert round_percentage(0, 0) == 0
    assert round_percentage(1, 8) == 13
    assert round_percentage(1, 3) == 33
    assert round_percentage(2, 3) == 67
    assert round_percentage(3, 5) == 60
    for total in range(1, 13):
        for done in range(total + 1):
            assert round_percentage(done, total) == int(100 * done / total + 0.5)
