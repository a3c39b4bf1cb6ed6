"""Error taxonomy for the quiz engine.

ValidationError is the only user-correctable error; the rest signal either
a refused precondition (QuizNotPublished, AttemptLimitExceeded) or a caller
breaking the engine's contract.
"""

from __future__ import annotations

from collections.abc import Mapping
from uuid import UUID


class QuizEngineError(Exception):
    pass


class ValidationError(QuizEngineError, ValueError):
    """Field-scoped problems found by the authoring validator."""

    def __init__(self, errors: Mapping[str, str]) -> None:
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"quiz definition is invalid: {fields}")


class InvalidQuestionShape(QuizEngineError):
    pass


class InvalidQuizDefinition(QuizEngineError):
    pass


class QuizNotPublished(QuizEngineError):
    def __init__(self, quiz_id: UUID) -> None:
        self.quiz_id = quiz_id
        super().__init__(f"quiz {quiz_id} is not published")


class AttemptLimitExceeded(QuizEngineError):
    def __init__(self, *, attempts_used: int, max_attempts: int) -> None:
        self.attempts_used = attempts_used
        self.max_attempts = max_attempts
        super().__init__(
            f"attempt limit reached ({attempts_used} of {max_attempts} used)"
        )


class WrongStepError(QuizEngineError):
    pass


class SessionClosedError(QuizEngineError):
    pass
