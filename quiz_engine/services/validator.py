"""Step-scoped validation for the quiz authoring wizard.

Each step has its own rule set and returns ``{field: message}``; an empty
dict means the gate is open.  Step 4 (review) is the union of steps 1-3 and
is what publishing checks.  The validators only read the draft.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum

from quiz_engine.models.question import FillBlank, MultipleChoice
from quiz_engine.models.quiz import (
    CATEGORIES,
    DIFFICULTIES,
    UNLIMITED_ATTEMPTS,
    QuizDefinition,
)


class WizardStep(IntEnum):
    BASIC_INFO = 1
    SETTINGS = 2
    QUESTIONS = 3
    REVIEW = 4


def validate_basic_info(draft: QuizDefinition) -> dict[str, str]:
    errors: dict[str, str] = {}
    if not draft.title.strip():
        errors["title"] = "Title is required"
    if not draft.description.strip():
        errors["description"] = "Description is required"
    if not draft.category:
        errors["category"] = "Category is required"
    elif draft.category not in CATEGORIES:
        errors["category"] = f"Unknown category {draft.category!r}"
    if draft.difficulty not in DIFFICULTIES:
        errors["difficulty"] = "Difficulty must be beginner, intermediate or advanced"
    return errors


def validate_settings(draft: QuizDefinition) -> dict[str, str]:
    errors: dict[str, str] = {}
    if draft.time_limit_minutes <= 0:
        errors["time_limit_minutes"] = "Time limit must be greater than 0"
    if not 0 < draft.passing_score_percent <= 100:
        errors["passing_score_percent"] = "Passing score must be between 1 and 100"
    if draft.max_attempts < 1 and draft.max_attempts != UNLIMITED_ATTEMPTS:
        errors["max_attempts"] = "Maximum attempts must be at least 1"
    return errors


def validate_questions(draft: QuizDefinition) -> dict[str, str]:
    if not draft.questions:
        return {"questions": "At least one question is required"}

    errors: dict[str, str] = {}
    for q in draft.questions:
        key = f"questions[{q.order}]"
        if not q.prompt.strip():
            errors[f"{key}.prompt"] = f"Question {q.order} text is required"
        if q.points < 1:
            errors[f"{key}.points"] = f"Question {q.order} must be worth at least 1 point"
        if isinstance(q, MultipleChoice):
            if len(q.options) < 2:
                errors[f"{key}.options"] = f"Question {q.order} needs at least 2 options"
            elif not q.correct_options:
                errors[f"{key}.options"] = (
                    f"Question {q.order} needs at least one correct answer"
                )
        elif isinstance(q, FillBlank):
            if not any(a.strip() for a in q.acceptable_answers):
                errors[f"{key}.acceptable_answers"] = (
                    f"Question {q.order} needs at least one acceptable answer"
                )
    return errors


def validate_all(draft: QuizDefinition) -> dict[str, str]:
    errors: dict[str, str] = {}
    errors.update(validate_basic_info(draft))
    errors.update(validate_settings(draft))
    errors.update(validate_questions(draft))
    return errors


_STEP_VALIDATORS: dict[WizardStep, Callable[[QuizDefinition], dict[str, str]]] = {
    WizardStep.BASIC_INFO: validate_basic_info,
    WizardStep.SETTINGS: validate_settings,
    WizardStep.QUESTIONS: validate_questions,
    WizardStep.REVIEW: validate_all,
}


def validate_step(draft: QuizDefinition, step: int) -> dict[str, str]:
    return _STEP_VALIDATORS[WizardStep(step)](draft)
