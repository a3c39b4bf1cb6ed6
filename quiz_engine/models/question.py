"""Question variants and their answer-correctness rules.

A question is one of three frozen dataclasses tagged by ``kind``.  The set
is closed: code that needs per-kind behaviour matches on the concrete type
and treats anything else as a contract violation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal
from uuid import UUID, uuid4

from quiz_engine.core.errors import InvalidQuestionShape

logger = logging.getLogger(__name__)

QuestionKind = Literal["multiple_choice", "true_false", "fill_blank"]
QUESTION_KINDS: tuple[QuestionKind, ...] = (
    "multiple_choice",
    "true_false",
    "fill_blank",
)


@dataclass(frozen=True, slots=True)
class Option:
    id: UUID
    text: str = ""
    is_correct: bool = False

    @staticmethod
    def new(*, text: str = "", is_correct: bool = False) -> Option:
        return Option(id=uuid4(), text=text, is_correct=is_correct)


@dataclass(frozen=True, slots=True)
class MultipleChoice:
    id: UUID
    prompt: str
    order: int
    options: tuple[Option, ...] = ()
    points: int = 1
    explanation: str = ""
    kind: Literal["multiple_choice"] = "multiple_choice"

    @property
    def correct_options(self) -> tuple[Option, ...]:
        return tuple(o for o in self.options if o.is_correct)


@dataclass(frozen=True, slots=True)
class TrueFalse:
    id: UUID
    prompt: str
    order: int
    correct_value: bool = True
    points: int = 1
    explanation: str = ""
    kind: Literal["true_false"] = "true_false"


@dataclass(frozen=True, slots=True)
class FillBlank:
    id: UUID
    prompt: str
    order: int
    acceptable_answers: frozenset[str] = frozenset()
    points: int = 1
    explanation: str = ""
    kind: Literal["fill_blank"] = "fill_blank"


Question = MultipleChoice | TrueFalse | FillBlank


def question_factory(kind: QuestionKind, *, order: int) -> Question:
    """Blank question of ``kind`` with the authoring defaults."""
    if kind == "multiple_choice":
        return MultipleChoice(
            id=uuid4(), prompt="", order=order, options=(Option.new(), Option.new())
        )
    if kind == "true_false":
        return TrueFalse(id=uuid4(), prompt="", order=order)
    if kind == "fill_blank":
        return FillBlank(id=uuid4(), prompt="", order=order)
    raise ValueError(f"unknown question kind {kind!r}")


def normalize_text(value: str) -> str:
    return value.strip().casefold()


def parse_bool(raw: str) -> bool | None:
    value = raw.strip().lower()
    if value == "true":
        return True
    if value == "false":
        return False
    return None


def check_shape(question: Question) -> None:
    """Raise InvalidQuestionShape if a MultipleChoice cannot be graded."""
    if not isinstance(question, MultipleChoice):
        return
    if len(question.options) < 2:
        logger.error(
            "Multiple choice question has %d option(s)",
            len(question.options),
            extra={"question_id": str(question.id)},
        )
        raise InvalidQuestionShape(
            f"question {question.id} needs at least 2 options"
        )
    if not question.correct_options:
        logger.error(
            "Multiple choice question has no correct option",
            extra={"question_id": str(question.id)},
        )
        raise InvalidQuestionShape(
            f"question {question.id} has no correct option"
        )


def is_answer_correct(question: Question, raw_answer: str) -> bool:
    if isinstance(question, MultipleChoice):
        check_shape(question)
        return any(o.text == raw_answer for o in question.correct_options)

    if isinstance(question, TrueFalse):
        parsed = parse_bool(raw_answer)
        return parsed is not None and parsed == question.correct_value

    if isinstance(question, FillBlank):
        accepted = {normalize_text(a) for a in question.acceptable_answers}
        return normalize_text(raw_answer) in accepted

    raise InvalidQuestionShape(f"unsupported question type {type(question).__name__}")
