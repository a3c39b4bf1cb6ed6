from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Literal, get_args
from uuid import UUID, uuid4

from quiz_engine.core.config import SETTINGS
from quiz_engine.models.question import Question

Difficulty = Literal["beginner", "intermediate", "advanced"]
DIFFICULTIES: tuple[str, ...] = get_args(Difficulty)
QuizStatus = Literal["draft", "published"]

# max_attempts value meaning "no limit"
UNLIMITED_ATTEMPTS = 999

CATEGORIES: tuple[str, ...] = (
    "Vowel Sounds",
    "Consonant Sounds",
    "Sentence Reading",
    "Advanced Techniques",
    "Practice Exercises",
)


@dataclass(frozen=True, slots=True)
class QuizDefinition:
    id: UUID
    title: str = ""
    description: str = ""
    detailed_description: str = ""
    category: str = ""
    difficulty: Difficulty = "beginner"
    time_limit_minutes: int = 30
    passing_score_percent: int = 70
    max_attempts: int = 3
    show_results_immediately: bool = True
    shuffle_questions: bool = False
    shuffle_options: bool = False
    questions: tuple[Question, ...] = ()
    status: QuizStatus = "draft"
    version: int = 0

    @staticmethod
    def new(*, title: str = "", category: str = "") -> QuizDefinition:
        return QuizDefinition(
            id=uuid4(),
            title=title,
            category=category,
            time_limit_minutes=SETTINGS.default_time_limit_minutes,
            passing_score_percent=SETTINGS.default_passing_score_percent,
            max_attempts=SETTINGS.default_max_attempts,
        )

    @property
    def is_published(self) -> bool:
        return self.status == "published"

    @property
    def has_unlimited_attempts(self) -> bool:
        return self.max_attempts == UNLIMITED_ATTEMPTS

    @property
    def total_points(self) -> int:
        return sum(q.points for q in self.questions)

    def question(self, question_id: UUID) -> Question | None:
        return next((q for q in self.questions if q.id == question_id), None)


def renumber(questions: Iterable[Question]) -> tuple[Question, ...]:
    """Reassign ``order`` as 1..N following iteration order."""
    return tuple(
        q if q.order == i else replace(q, order=i)
        for i, q in enumerate(questions, start=1)
    )
