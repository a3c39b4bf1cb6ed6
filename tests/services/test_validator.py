from __future__ import annotations

from dataclasses import replace
from uuid import uuid4

import pytest

from quiz_engine.models.question import FillBlank, MultipleChoice, Option, TrueFalse
from quiz_engine.models.quiz import UNLIMITED_ATTEMPTS, QuizDefinition
from quiz_engine.services.validator import (
    WizardStep,
    validate_all,
    validate_basic_info,
    validate_questions,
    validate_settings,
    validate_step,
)
from tests.conftest import make_quiz

# ---- step 1: basic info ----


def test_blank_draft_fails_basic_info() -> None:
    errors = validate_basic_info(QuizDefinition.new())
    assert errors == {
        "title": "Title is required",
        "description": "Description is required",
        "category": "Category is required",
    }


def test_whitespace_title_is_blank() -> None:
    errors = validate_basic_info(replace(make_quiz(), title="   "))
    assert set(errors) == {"title"}


def test_category_must_come_from_fixed_list() -> None:
    errors = validate_basic_info(replace(make_quiz(), category="Cooking"))
    assert set(errors) == {"category"}


def test_complete_basic_info_passes() -> None:
    assert validate_basic_info(make_quiz()) == {}


@pytest.mark.parametrize("difficulty", ["beginner", "intermediate", "advanced"])
def test_known_difficulties_pass(difficulty: str) -> None:
    assert validate_basic_info(replace(make_quiz(), difficulty=difficulty)) == {}


def test_unknown_difficulty_fails_basic_info_and_review() -> None:
    draft = replace(make_quiz(), difficulty="expert")
    assert set(validate_basic_info(draft)) == {"difficulty"}
    assert "difficulty" in validate_all(draft)


# ---- step 2: settings ----


@pytest.mark.parametrize("minutes", [0, -10])
def test_time_limit_must_be_positive(minutes: int) -> None:
    errors = validate_settings(replace(make_quiz(), time_limit_minutes=minutes))
    assert errors == {"time_limit_minutes": "Time limit must be greater than 0"}


@pytest.mark.parametrize("percent", [0, 101, -1])
def test_passing_score_range(percent: int) -> None:
    errors = validate_settings(replace(make_quiz(), passing_score_percent=percent))
    assert set(errors) == {"passing_score_percent"}


@pytest.mark.parametrize("percent", [1, 100])
def test_passing_score_boundaries_are_valid(percent: int) -> None:
    assert validate_settings(replace(make_quiz(), passing_score_percent=percent)) == {}


def test_max_attempts_accepts_unlimited_and_rejects_zero() -> None:
    assert validate_settings(replace(make_quiz(), max_attempts=UNLIMITED_ATTEMPTS)) == {}
    assert set(validate_settings(replace(make_quiz(), max_attempts=0))) == {"max_attempts"}


# ---- step 3: questions ----


def test_questions_required() -> None:
    errors = validate_questions(replace(make_quiz(), questions=()))
    assert errors == {"questions": "At least one question is required"}


def test_question_prompt_required() -> None:
    quiz = make_quiz()
    tf = replace(quiz.questions[1], prompt=" ")
    errors = validate_questions(replace(quiz, questions=(quiz.questions[0], tf)))
    assert errors == {"questions[2].prompt": "Question 2 text is required"}


def test_multiple_choice_needs_two_options() -> None:
    q = MultipleChoice(
        id=uuid4(), prompt="Pick", order=1, options=(Option.new(text="only", is_correct=True),)
    )
    errors = validate_questions(replace(make_quiz(), questions=(q,)))
    assert errors == {"questions[1].options": "Question 1 needs at least 2 options"}


def test_multiple_choice_needs_a_correct_option() -> None:
    q = MultipleChoice(
        id=uuid4(), prompt="Pick", order=1, options=(Option.new(text="a"), Option.new(text="b"))
    )
    errors = validate_questions(replace(make_quiz(), questions=(q,)))
    assert errors == {"questions[1].options": "Question 1 needs at least one correct answer"}


def test_fill_blank_needs_an_answer() -> None:
    q = FillBlank(id=uuid4(), prompt="Say ____", order=1)
    errors = validate_questions(replace(make_quiz(), questions=(q,)))
    assert set(errors) == {"questions[1].acceptable_answers"}


def test_points_must_be_at_least_one() -> None:
    q = TrueFalse(id=uuid4(), prompt="True?", order=1, points=0)
    errors = validate_questions(replace(make_quiz(), questions=(q,)))
    assert set(errors) == {"questions[1].points"}


# ---- step 4 and dispatch ----


def test_review_step_aggregates_all_steps() -> None:
    draft = replace(
        QuizDefinition.new(), time_limit_minutes=0, questions=()
    )
    errors = validate_step(draft, WizardStep.REVIEW)
    assert {"title", "description", "category", "time_limit_minutes", "questions"} <= set(errors)
    assert errors == validate_all(draft)


def test_steps_do_not_revalidate_earlier_steps() -> None:
    draft = replace(make_quiz(), title="")
    assert validate_step(draft, 2) == {}
    assert validate_step(draft, 3) == {}
    assert "title" in validate_step(draft, 4)


def test_validation_is_deterministic_and_does_not_mutate() -> None:
    draft = replace(QuizDefinition.new(), questions=())
    before = replace(draft)
    assert validate_all(draft) == validate_all(draft)
    assert draft == before


def test_unknown_step_is_rejected() -> None:
    with pytest.raises(ValueError):
        validate_step(make_quiz(), 5)
