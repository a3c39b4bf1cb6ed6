from __future__ import annotations

from dataclasses import dataclass
from typing import Literal
from uuid import UUID, uuid4

AttemptStatus = Literal["in_progress", "submitted"]


@dataclass(frozen=True, slots=True)
class UserAnswer:
    """A graded answer; only created when an attempt is sealed."""

    question_id: UUID
    raw_answer: str
    time_spent_seconds: int
    is_correct: bool


@dataclass(frozen=True, slots=True)
class Attempt:
    id: UUID
    quiz_id: UUID
    quiz_version: int
    user_id: str
    attempt_number: int
    started_at: int
    answers: tuple[UserAnswer, ...] = ()
    submitted_at: int | None = None
    time_spent_seconds: int = 0
    score: int | None = None
    passed: bool | None = None

    @staticmethod
    def new(
        *,
        quiz_id: UUID,
        quiz_version: int,
        user_id: str,
        attempt_number: int,
        started_at: int,
    ) -> Attempt:
        return Attempt(
            id=uuid4(),
            quiz_id=quiz_id,
            quiz_version=quiz_version,
            user_id=user_id,
            attempt_number=attempt_number,
            started_at=started_at,
        )

    @property
    def status(self) -> AttemptStatus:
        return "in_progress" if self.submitted_at is None else "submitted"
