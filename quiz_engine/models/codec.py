"""JSON document encoding for quiz definitions and attempts.

The Redis and PostgreSQL repositories store whole documents; pydantic's
TypeAdapter validates the dataclasses on the way back in, including the
``kind``-tagged question union.
"""

from __future__ import annotations

from pydantic import TypeAdapter

from quiz_engine.models.attempt import Attempt
from quiz_engine.models.quiz import QuizDefinition

_QUIZ_ADAPTER: TypeAdapter[QuizDefinition] = TypeAdapter(QuizDefinition)
_ATTEMPT_ADAPTER: TypeAdapter[Attempt] = TypeAdapter(Attempt)


def dump_quiz(definition: QuizDefinition) -> str:
    return _QUIZ_ADAPTER.dump_json(definition).decode()


def load_quiz(document: str | bytes) -> QuizDefinition:
    return _QUIZ_ADAPTER.validate_json(document)


def dump_attempt(attempt: Attempt) -> str:
    return _ATTEMPT_ADAPTER.dump_json(attempt).decode()


def load_attempt(document: str | bytes) -> Attempt:
    return _ATTEMPT_ADAPTER.validate_json(document)
