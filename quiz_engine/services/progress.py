"""Per-learner summary of sealed attempts on one quiz."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from quiz_engine.models.attempt import Attempt
from quiz_engine.models.quiz import UNLIMITED_ATTEMPTS, QuizDefinition
from quiz_engine.repos import registry
from quiz_engine.repos.attempt_repo import AttemptRepo
from quiz_engine.services.scoring import round_half_up_percent


@dataclass(frozen=True, slots=True)
class ProgressSummary:
    total_attempts: int
    best_score: int
    average_score: int
    passed: bool
    time_spent_seconds: int
    remaining_attempts: int | None  # None when unlimited


def remaining_attempts(used: int, max_attempts: int) -> int | None:
    if max_attempts == UNLIMITED_ATTEMPTS:
        return None
    return max(0, max_attempts - used)


def summarize_attempts(attempts: Sequence[Attempt], max_attempts: int) -> ProgressSummary:
    scores = [a.score for a in attempts if a.score is not None]
    return ProgressSummary(
        total_attempts=len(attempts),
        best_score=max(scores, default=0),
        # Mean of integer percents, rounded half-up like the per-attempt score
        average_score=round_half_up_percent(sum(scores), 100 * len(scores))
        if scores
        else 0,
        passed=any(a.passed for a in attempts),
        time_spent_seconds=sum(a.time_spent_seconds for a in attempts),
        remaining_attempts=remaining_attempts(len(attempts), max_attempts),
    )


async def load_progress(
    definition: QuizDefinition, user_id: str, *, attempts: AttemptRepo | None = None
) -> ProgressSummary:
    attempts = attempts if attempts is not None else registry.attempt_repo
    history = await attempts.list_attempts(user_id, definition.id)
    return summarize_attempts(history, definition.max_attempts)
