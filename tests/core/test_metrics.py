"""Engine metrics, asserted as deltas on the global registry.

Counters only go up and cannot be reset between tests, so each test reads
the value before the action and compares after.
"""

from __future__ import annotations

import asyncio

import pytest
from prometheus_client import REGISTRY

from quiz_engine.core.errors import AttemptLimitExceeded
from quiz_engine.repos.attempt_repo import InMemoryAttemptRepo
from quiz_engine.repos.quiz_repo import InMemoryQuizRepo
from quiz_engine.services.assessment import AssessmentSession
from quiz_engine.services.authoring import AuthoringSession
from tests.conftest import FakeClock, make_quiz


def _get_sample(name: str, labels: dict | None = None) -> float:
    value = REGISTRY.get_sample_value(name, labels=labels or {})
    return value if value is not None else 0.0


def test_refused_step_counts_failure() -> None:
    before = _get_sample("quiz_step_validation_failures_total", {"step": "1"})
    AuthoringSession.new(repo=InMemoryQuizRepo()).next()
    after = _get_sample("quiz_step_validation_failures_total", {"step": "1"})
    assert after - before == 1


def test_submitted_attempt_counts_outcome_and_score(clock: FakeClock) -> None:
    repo = InMemoryAttemptRepo()
    quiz = make_quiz()
    started_before = _get_sample("quiz_attempts_started_total")
    failed_before = _get_sample("quiz_attempts_submitted_total", {"outcome": "failed"})
    scores_before = _get_sample("quiz_attempt_score_percent_count")

    session = asyncio.run(
        AssessmentSession.start(quiz, user_id="learner-1", progress=repo, attempts=repo, clock=clock)
    )
    session.select_answer("A")
    asyncio.run(session.submit())

    assert _get_sample("quiz_attempts_started_total") - started_before == 1
    assert (
        _get_sample("quiz_attempts_submitted_total", {"outcome": "failed"}) - failed_before == 1
    )
    assert _get_sample("quiz_attempt_score_percent_count") - scores_before == 1


def test_refused_attempt_counts_reason(clock: FakeClock) -> None:
    repo = InMemoryAttemptRepo()
    quiz = make_quiz(max_attempts=1)
    session = asyncio.run(
        AssessmentSession.start(quiz, user_id="learner-1", progress=repo, attempts=repo, clock=clock)
    )
    session.select_answer("B")
    asyncio.run(session.submit())

    before = _get_sample("quiz_attempts_refused_total", {"reason": "attempt_limit"})
    with pytest.raises(AttemptLimitExceeded):
        asyncio.run(
            AssessmentSession.start(
                quiz, user_id="learner-1", progress=repo, attempts=repo, clock=clock
            )
        )
    after = _get_sample("quiz_attempts_refused_total", {"reason": "attempt_limit"})
    assert after - before == 1
