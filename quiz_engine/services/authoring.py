"""Quiz authoring wizard.

An AuthoringSession walks one draft through four steps (basic info,
settings, questions, review).  ``next()`` is gated on the validator for the
current step; ``previous()`` never is.  The session ends either by saving
the draft (any step, any completeness) or by publishing it from the review
step once every step validates.

The draft is an immutable QuizDefinition that is replaced on every edit,
so a definition handed out earlier (for instance a published version a
learner is taking) is never changed underneath its holder.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable
from dataclasses import fields, replace
from typing import Literal
from uuid import UUID

from quiz_engine.core.errors import (
    QuizNotPublished,
    SessionClosedError,
    ValidationError,
    WrongStepError,
)
from quiz_engine.core.metrics import DRAFTS_SAVED, QUIZ_PUBLISHES, STEP_VALIDATION_FAILURES
from quiz_engine.models.question import (
    MultipleChoice,
    Option,
    Question,
    QuestionKind,
    question_factory,
)
from quiz_engine.models.quiz import DIFFICULTIES, QuizDefinition, renumber
from quiz_engine.repos import registry
from quiz_engine.repos.quiz_repo import QuizRepo
from quiz_engine.services.validator import WizardStep, validate_all, validate_step

logger = logging.getLogger(__name__)

SessionState = Literal["editing", "saved", "published"]

# Fields update_details() may touch; questions/status/version have their own paths
_DETAIL_FIELDS = frozenset(
    {
        "title",
        "description",
        "detailed_description",
        "category",
        "difficulty",
        "time_limit_minutes",
        "passing_score_percent",
        "max_attempts",
        "show_results_immediately",
        "shuffle_questions",
        "shuffle_options",
    }
)
_FIXED_QUESTION_FIELDS = frozenset({"id", "order", "kind", "options"})

# A multiple choice question never drops below this many options
_MIN_OPTIONS = 2


class AuthoringSession:
    def __init__(self, draft: QuizDefinition, *, repo: QuizRepo | None = None) -> None:
        self._draft = draft
        self._repo = repo if repo is not None else registry.quiz_repo
        self.current_step = WizardStep.BASIC_INFO
        self.step_errors: dict[str, str] = {}
        self.state: SessionState = "editing"

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def new(
        cls, *, repo: QuizRepo | None = None, title: str = "", category: str = ""
    ) -> AuthoringSession:
        return cls(QuizDefinition.new(title=title, category=category), repo=repo)

    @classmethod
    async def resume(
        cls, quiz_id: UUID, *, repo: QuizRepo | None = None
    ) -> AuthoringSession:
        repo = repo if repo is not None else registry.quiz_repo
        draft = await repo.load_draft(quiz_id)
        if draft is None:
            raise KeyError(f"no draft for quiz {quiz_id}")
        return cls(draft, repo=repo)

    @classmethod
    async def edit_published(
        cls, quiz_id: UUID, *, repo: QuizRepo | None = None
    ) -> AuthoringSession:
        """Start editing a copy of the published version.

        The published definition keeps being served by ``load_published``
        until this session publishes.
        """
        repo = repo if repo is not None else registry.quiz_repo
        published = await repo.load_published(quiz_id)
        if published is None:
            raise QuizNotPublished(quiz_id)
        draft = replace(copy.deepcopy(published), status="draft")
        logger.info(
            "Editing published quiz v%d", published.version, extra={"quiz_id": str(quiz_id)}
        )
        return cls(draft, repo=repo)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    @property
    def draft(self) -> QuizDefinition:
        return self._draft

    @property
    def is_closed(self) -> bool:
        return self.state != "editing"

    def next(self) -> bool:
        self._ensure_open()
        step = self.current_step
        errors = validate_step(self._draft, step)
        if errors:
            self.step_errors = errors
            STEP_VALIDATION_FAILURES.labels(step=str(int(step))).inc()
            logger.info(
                "Step %d gate refused: %s",
                step,
                ", ".join(sorted(errors)),
                extra=self._log_context(),
            )
            return False

        self.step_errors = {}
        self.current_step = WizardStep(min(step + 1, WizardStep.REVIEW))
        logger.debug("Advanced to step %d", self.current_step, extra=self._log_context())
        return True

    def previous(self) -> bool:
        self._ensure_open()
        if self.current_step == WizardStep.BASIC_INFO:
            return False
        self.current_step = WizardStep(self.current_step - 1)
        return True

    # ------------------------------------------------------------------
    # Basic info / settings
    # ------------------------------------------------------------------

    def update_details(self, **changes: object) -> QuizDefinition:
        self._ensure_open()
        unknown = set(changes) - _DETAIL_FIELDS
        if unknown:
            raise TypeError(f"cannot update {', '.join(sorted(unknown))} here")
        if "difficulty" in changes and changes["difficulty"] not in DIFFICULTIES:
            raise ValidationError(
                {"difficulty": "Difficulty must be beginner, intermediate or advanced"}
            )
        self._draft = replace(self._draft, **changes)  # type: ignore[arg-type]
        return self._draft

    # ------------------------------------------------------------------
    # Questions (step 3 only)
    # ------------------------------------------------------------------

    def add_question(self, kind: QuestionKind) -> UUID:
        self._require_questions_step()
        question = question_factory(kind, order=len(self._draft.questions) + 1)
        self._set_questions((*self._draft.questions, question))
        return question.id

    def remove_question(self, question_id: UUID) -> None:
        self._require_questions_step()
        self._get_question(question_id)
        self._set_questions(q for q in self._draft.questions if q.id != question_id)

    def move_question(self, from_index: int, to_index: int) -> None:
        self._require_questions_step()
        questions = list(self._draft.questions)
        for index in (from_index, to_index):
            if not 0 <= index < len(questions):
                raise IndexError(f"question index {index} out of range")
        moved = questions.pop(from_index)
        questions.insert(to_index, moved)
        self._set_questions(questions)

    def update_question(self, question_id: UUID, **changes: object) -> Question:
        self._require_questions_step()
        question = self._get_question(question_id)
        allowed = {f.name for f in fields(question)} - _FIXED_QUESTION_FIELDS
        unknown = set(changes) - allowed
        if unknown:
            raise TypeError(
                f"{question.kind} question has no editable {', '.join(sorted(unknown))}"
            )
        if "acceptable_answers" in changes:
            answers = changes["acceptable_answers"]
            if isinstance(answers, str):
                raise TypeError("acceptable_answers takes a collection of strings, not a str")
            changes["acceptable_answers"] = frozenset(answers)  # type: ignore[arg-type]
        updated = replace(question, **changes)  # type: ignore[arg-type]
        self._put_question(updated)
        return updated

    def add_option(self, question_id: UUID, text: str = "") -> UUID:
        self._require_questions_step()
        question = self._get_choice_question(question_id)
        option = Option.new(text=text)
        self._put_question(replace(question, options=(*question.options, option)))
        return option.id

    def update_option(self, question_id: UUID, option_id: UUID, *, text: str) -> None:
        self._require_questions_step()
        question = self._get_choice_question(question_id)
        self._get_option(question, option_id)
        options = tuple(
            replace(o, text=text) if o.id == option_id else o for o in question.options
        )
        self._put_question(replace(question, options=options))

    def remove_option(self, question_id: UUID, option_id: UUID) -> bool:
        """Drop an option; refused (False) when it would leave fewer than two."""
        self._require_questions_step()
        question = self._get_choice_question(question_id)
        self._get_option(question, option_id)
        if len(question.options) <= _MIN_OPTIONS:
            return False
        options = tuple(o for o in question.options if o.id != option_id)
        self._put_question(replace(question, options=options))
        return True

    def mark_correct_option(self, question_id: UUID, option_id: UUID) -> None:
        self._require_questions_step()
        question = self._get_choice_question(question_id)
        self._get_option(question, option_id)
        options = tuple(
            replace(o, is_correct=(o.id == option_id)) for o in question.options
        )
        self._put_question(replace(question, options=options))

    # ------------------------------------------------------------------
    # Terminal transitions
    # ------------------------------------------------------------------

    async def save_draft(self) -> QuizDefinition:
        self._ensure_open()
        draft = replace(self._draft, status="draft")
        await self._repo.save_draft(draft)
        self._draft = draft
        self.state = "saved"
        DRAFTS_SAVED.inc()
        logger.info(
            "Saved quiz draft at step %d", self.current_step, extra=self._log_context()
        )
        return draft

    async def publish(self) -> QuizDefinition:
        self._ensure_open()
        if self.current_step != WizardStep.REVIEW:
            raise WrongStepError(
                f"publish is only available from step {int(WizardStep.REVIEW)}"
            )

        errors = validate_all(self._draft)
        if errors:
            self.step_errors = errors
            QUIZ_PUBLISHES.labels(result="rejected").inc()
            logger.info(
                "Publish refused: %s", ", ".join(sorted(errors)), extra=self._log_context()
            )
            raise ValidationError(errors)

        published = replace(
            self._draft, status="published", version=self._draft.version + 1
        )
        await self._repo.save_published(published)
        await self._repo.delete_draft(published.id)
        self._draft = published
        self.step_errors = {}
        self.state = "published"
        QUIZ_PUBLISHES.labels(result="published").inc()
        logger.info("Published quiz v%d", published.version, extra=self._log_context())
        return published

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _ensure_open(self) -> None:
        if self.is_closed:
            raise SessionClosedError(f"authoring session already {self.state}")

    def _require_questions_step(self) -> None:
        self._ensure_open()
        if self.current_step != WizardStep.QUESTIONS:
            raise WrongStepError(
                f"questions can only be edited on step {int(WizardStep.QUESTIONS)}"
            )

    def _get_question(self, question_id: UUID) -> Question:
        question = self._draft.question(question_id)
        if question is None:
            raise KeyError(f"question {question_id} not found")
        return question

    def _get_choice_question(self, question_id: UUID) -> MultipleChoice:
        question = self._get_question(question_id)
        if not isinstance(question, MultipleChoice):
            raise TypeError(f"{question.kind} question has no options")
        return question

    @staticmethod
    def _get_option(question: MultipleChoice, option_id: UUID) -> Option:
        for option in question.options:
            if option.id == option_id:
                return option
        raise KeyError(f"option {option_id} not found")

    def _put_question(self, updated: Question) -> None:
        self._draft = replace(
            self._draft,
            questions=tuple(
                updated if q.id == updated.id else q for q in self._draft.questions
            ),
        )

    def _set_questions(self, questions: Iterable[Question]) -> None:
        self._draft = replace(self._draft, questions=renumber(questions))

    def _log_context(self) -> dict[str, object]:
        return {"quiz_id": str(self._draft.id), "step": int(self.current_step)}
