"""Attempt scoring.

``score`` is a pure function of (definition, answers); equal inputs give
an equal ScoreResult.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from uuid import UUID

from quiz_engine.core.errors import InvalidQuizDefinition
from quiz_engine.models.question import is_answer_correct
from quiz_engine.models.quiz import QuizDefinition

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class QuestionResult:
    question_id: UUID
    raw_answer: str | None
    is_correct: bool
    points: int
    points_earned: int
    explanation: str = ""


@dataclass(frozen=True, slots=True)
class ScoreResult:
    correct_count: int
    total_points: int
    earned_points: int
    percent_score: int
    passed: bool
    question_results: tuple[QuestionResult, ...] = ()


def round_half_up_percent(numerator: int, denominator: int) -> int:
    """round(100 * numerator / denominator) with .5 rounding up, exactly."""
    return (200 * numerator + denominator) // (2 * denominator)


def score(definition: QuizDefinition, answers: Mapping[UUID, str]) -> ScoreResult:
    total_points = definition.total_points
    if total_points <= 0:
        logger.error(
            "Refusing to score a quiz worth %d points",
            total_points,
            extra={"quiz_id": str(definition.id)},
        )
        raise InvalidQuizDefinition(f"quiz {definition.id} has no points to score")

    results: list[QuestionResult] = []
    for q in definition.questions:
        raw = answers.get(q.id)
        answered = raw is not None and raw.strip() != ""
        correct = answered and is_answer_correct(q, raw)  # type: ignore[arg-type]
        results.append(
            QuestionResult(
                question_id=q.id,
                raw_answer=raw if answered else None,
                is_correct=correct,
                points=q.points,
                points_earned=q.points if correct else 0,
                explanation=q.explanation,
            )
        )

    earned = sum(r.points_earned for r in results)
    percent = round_half_up_percent(earned, total_points)
    return ScoreResult(
        correct_count=sum(1 for r in results if r.is_correct),
        total_points=total_points,
        earned_points=earned,
        percent_score=percent,
        passed=percent >= definition.passing_score_percent,
        question_results=tuple(results),
    )
