from __future__ import annotations

import sys
from pathlib import Path
from uuid import uuid4

import pytest

# Ensure repo root is on sys.path so `import quiz_engine` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from quiz_engine.models.question import MultipleChoice, Option, TrueFalse  # noqa: E402
from quiz_engine.models.quiz import QuizDefinition  # noqa: E402
from quiz_engine.repos import registry  # noqa: E402


@pytest.fixture(autouse=True)
def reset_quiz_repo() -> None:
    """Clear the in-memory quiz documents between tests."""
    if hasattr(registry.quiz_repo, "_drafts"):
        registry.quiz_repo._drafts.clear()  # type: ignore[union-attr]
        registry.quiz_repo._published.clear()  # type: ignore[union-attr]


@pytest.fixture(autouse=True)
def reset_attempt_repo() -> None:
    """Clear recorded attempts between tests so limits don't bleed."""
    if hasattr(registry.attempt_repo, "_store"):
        registry.attempt_repo._store.clear()  # type: ignore[union-attr]


class FakeClock:
    """Manually advanced stand-in for time.time()."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# ---------------------------------------------------------------------------
# Quiz builders
# ---------------------------------------------------------------------------


def make_quiz(
    *,
    passing_score_percent: int = 70,
    max_attempts: int = 3,
    status: str = "published",
    shuffle_questions: bool = False,
    shuffle_options: bool = False,
) -> QuizDefinition:
    """Two-question quiz: 2-point multiple choice ("B"), 3-point true/false (true)."""
    choice = MultipleChoice(
        id=uuid4(),
        prompt="Which letter shows spread lips?",
        order=1,
        options=(
            Option.new(text="A"),
            Option.new(text="B", is_correct=True),
            Option.new(text="C"),
        ),
        points=2,
        explanation="Spread lips mark the /i/ vowel.",
    )
    true_false = TrueFalse(
        id=uuid4(),
        prompt="The consonant /p/ requires visible lip movement.",
        order=2,
        correct_value=True,
        points=3,
    )
    return QuizDefinition(
        id=uuid4(),
        title="Basic Vowel Recognition",
        description="Vowel shapes on the lips",
        category="Vowel Sounds",
        passing_score_percent=passing_score_percent,
        max_attempts=max_attempts,
        shuffle_questions=shuffle_questions,
        shuffle_options=shuffle_options,
        questions=(choice, true_false),
        status=status,  # type: ignore[arg-type]
        version=1 if status == "published" else 0,
    )


@pytest.fixture
def quiz() -> QuizDefinition:
    return make_quiz()
