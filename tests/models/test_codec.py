from __future__ import annotations

import json
from dataclasses import replace
from uuid import uuid4

from quiz_engine.models.attempt import Attempt, UserAnswer
from quiz_engine.models.codec import dump_attempt, dump_quiz, load_attempt, load_quiz
from quiz_engine.models.question import FillBlank, MultipleChoice, TrueFalse
from tests.conftest import make_quiz


def test_quiz_document_round_trips_every_question_kind() -> None:
    base = make_quiz(status="draft")
    blank = FillBlank(
        id=uuid4(),
        prompt="Say ____",
        order=3,
        acceptable_answers=frozenset({"hello", "hi"}),
        explanation="Greeting",
    )
    definition = replace(base, questions=(*base.questions, blank))

    restored = load_quiz(dump_quiz(definition))

    assert restored == definition
    assert [type(q) for q in restored.questions] == [MultipleChoice, TrueFalse, FillBlank]


def test_quiz_document_tags_question_kind() -> None:
    document = json.loads(dump_quiz(make_quiz()))
    assert [q["kind"] for q in document["questions"]] == ["multiple_choice", "true_false"]
    assert document["status"] == "published"


def test_attempt_document_round_trips() -> None:
    attempt = Attempt(
        id=uuid4(),
        quiz_id=uuid4(),
        quiz_version=2,
        user_id="learner-1",
        attempt_number=1,
        started_at=100,
        answers=(
            UserAnswer(question_id=uuid4(), raw_answer="B", time_spent_seconds=7, is_correct=True),
        ),
        submitted_at=160,
        time_spent_seconds=60,
        score=40,
        passed=False,
    )
    assert load_attempt(dump_attempt(attempt)) == attempt
