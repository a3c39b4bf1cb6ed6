"""Quiz-taking session.

One AssessmentSession drives one Attempt through a published quiz:
questions are delivered one at a time, selections can be changed freely
until submission, and grading happens once, in ``submit()``.

Delivery order (and multiple choice option order) is drawn once when the
session starts, so navigating back and forth always shows the same
sequence.  Time spent per question is tracked for reporting only.
"""

from __future__ import annotations

import asyncio
import logging
import random
import time
from collections.abc import Callable
from dataclasses import replace
from uuid import UUID

from quiz_engine.core.errors import (
    AttemptLimitExceeded,
    QuizNotPublished,
    SessionClosedError,
)
from quiz_engine.core.metrics import (
    ATTEMPT_SCORE,
    ATTEMPTS_REFUSED,
    ATTEMPTS_STARTED,
    ATTEMPTS_SUBMITTED,
)
from quiz_engine.models.attempt import Attempt, AttemptStatus, UserAnswer
from quiz_engine.models.question import MultipleChoice, Question, is_answer_correct
from quiz_engine.models.quiz import QuizDefinition
from quiz_engine.repos import registry
from quiz_engine.repos.attempt_repo import AttemptRepo, ProgressTracker
from quiz_engine.services.scoring import ScoreResult, round_half_up_percent, score

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def _deliver(definition: QuizDefinition, rng: random.Random) -> tuple[Question, ...]:
    questions = list(definition.questions)
    if definition.shuffle_questions:
        rng.shuffle(questions)
    if definition.shuffle_options:
        questions = [
            replace(q, options=tuple(rng.sample(q.options, len(q.options))))
            if isinstance(q, MultipleChoice)
            else q
            for q in questions
        ]
    return tuple(questions)


class AssessmentSession:
    def __init__(
        self,
        definition: QuizDefinition,
        attempt: Attempt,
        questions: tuple[Question, ...],
        *,
        attempts: AttemptRepo,
        clock: Clock,
        started_at: float,
    ) -> None:
        self._definition = definition
        self._attempt = attempt
        self._questions = questions
        self._attempts = attempts
        self._clock = clock
        self._started_at = started_at
        self._index = 0
        self._selections: dict[UUID, str] = {}
        self._time_spent: dict[UUID, float] = {}
        self._question_started_at = started_at
        self._results: ScoreResult | None = None
        self._submission: asyncio.Future[ScoreResult] | None = None

    @classmethod
    async def start(
        cls,
        definition: QuizDefinition,
        *,
        user_id: str,
        progress: ProgressTracker | None = None,
        attempts: AttemptRepo | None = None,
        clock: Clock = time.time,
        rng: random.Random | None = None,
    ) -> AssessmentSession:
        """Open a new attempt for ``user_id``.

        Raises QuizNotPublished for drafts and AttemptLimitExceeded when the
        learner has used every attempt the quiz allows.
        """
        context = {"quiz_id": str(definition.id), "user_id": user_id}
        if not definition.is_published:
            ATTEMPTS_REFUSED.labels(reason="not_published").inc()
            logger.warning("Refused attempt on unpublished quiz", extra=context)
            raise QuizNotPublished(definition.id)

        progress = progress if progress is not None else registry.progress_tracker
        attempts = attempts if attempts is not None else registry.attempt_repo

        used = await progress.attempts_used(user_id, definition.id)
        if not definition.has_unlimited_attempts and used >= definition.max_attempts:
            ATTEMPTS_REFUSED.labels(reason="attempt_limit").inc()
            logger.info(
                "Refused attempt: %d of %d used", used, definition.max_attempts, extra=context
            )
            raise AttemptLimitExceeded(
                attempts_used=used, max_attempts=definition.max_attempts
            )

        started_at = clock()
        attempt = Attempt.new(
            quiz_id=definition.id,
            quiz_version=definition.version,
            user_id=user_id,
            attempt_number=used + 1,
            started_at=int(started_at),
        )
        questions = _deliver(definition, rng if rng is not None else random.Random())
        ATTEMPTS_STARTED.inc()
        logger.info(
            "Started attempt %d",
            attempt.attempt_number,
            extra={**context, "attempt_number": attempt.attempt_number},
        )
        return cls(
            definition,
            attempt,
            questions,
            attempts=attempts,
            clock=clock,
            started_at=started_at,
        )

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def definition(self) -> QuizDefinition:
        return self._definition

    @property
    def attempt(self) -> Attempt:
        return self._attempt

    @property
    def state(self) -> AttemptStatus:
        return "in_progress" if self._results is None else "submitted"

    @property
    def index(self) -> int:
        return self._index

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    @property
    def current_question(self) -> Question:
        return self._questions[self._index]

    @property
    def selected_answer(self) -> str | None:
        return self._selections.get(self.current_question.id)

    @property
    def results(self) -> ScoreResult | None:
        return self._results

    @property
    def progress_percent(self) -> int:
        return round_half_up_percent(self._index + 1, len(self._questions))

    def peek_correctness(self) -> bool | None:
        """Correctness of the current selection, without grading anything."""
        selection = self.selected_answer
        if selection is None or not selection.strip():
            return None
        return is_answer_correct(self.current_question, selection)

    def seconds_remaining(self) -> int:
        limit = self._definition.time_limit_minutes * 60
        if self._results is not None:
            elapsed = float(self._attempt.time_spent_seconds)
        else:
            elapsed = self._clock() - self._started_at
        return max(0, int(limit - elapsed))

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def select_answer(self, raw_answer: str) -> None:
        self._ensure_in_progress()
        self._selections[self.current_question.id] = raw_answer

    async def next(self) -> bool:
        """Advance past an answered question; the last one submits.

        Without a non-blank selection for the current question this is a
        no-op returning False.
        """
        if self._results is not None or self._submission is not None:
            return False
        selection = self.selected_answer
        if selection is None or not selection.strip():
            return False
        if self._index == len(self._questions) - 1:
            await self.submit()
            return True
        self._leave_current()
        self._index += 1
        return True

    def previous(self) -> bool:
        self._ensure_in_progress()
        if self._index == 0:
            return False
        self._leave_current()
        self._index -= 1
        return True

    async def submit(self) -> ScoreResult:
        """Grade and record the attempt once.

        Overlapping calls share the first call's grading; later calls return
        the same ScoreResult.  If recording fails the session stays open and
        submit() can be retried.
        """
        if self._results is not None:
            return self._results
        if self._submission is None or self._submission.cancelled():
            self._submission = asyncio.ensure_future(self._seal())
        try:
            return await asyncio.shield(self._submission)
        except Exception:
            if self._submission is not None and self._submission.done():
                self._submission = None
            raise

    async def _seal(self) -> ScoreResult:
        self._leave_current()
        answers = {
            qid: raw for qid, raw in self._selections.items() if raw.strip()
        }
        results = score(self._definition, answers)
        correctness = {r.question_id: r.is_correct for r in results.question_results}

        submitted_at = int(self._clock())
        sealed = replace(
            self._attempt,
            answers=tuple(
                UserAnswer(
                    question_id=q.id,
                    raw_answer=answers[q.id],
                    time_spent_seconds=int(self._time_spent.get(q.id, 0.0)),
                    is_correct=correctness[q.id],
                )
                for q in self._questions
                if q.id in answers
            ),
            submitted_at=submitted_at,
            time_spent_seconds=submitted_at - self._attempt.started_at,
            score=results.percent_score,
            passed=results.passed,
        )
        await self._attempts.record_attempt(sealed)

        self._attempt = sealed
        self._results = results
        ATTEMPTS_SUBMITTED.labels(outcome="passed" if results.passed else "failed").inc()
        ATTEMPT_SCORE.observe(results.percent_score)
        logger.info(
            "Submitted attempt: %d%% (%d/%d points), passed=%s",
            results.percent_score,
            results.earned_points,
            results.total_points,
            results.passed,
            extra={
                "quiz_id": str(self._definition.id),
                "user_id": sealed.user_id,
                "attempt_number": sealed.attempt_number,
            },
        )
        return results

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _ensure_in_progress(self) -> None:
        if self._results is not None or self._submission is not None:
            raise SessionClosedError("attempt already submitted")

    def _leave_current(self) -> None:
        now = self._clock()
        qid = self.current_question.id
        self._time_spent[qid] = self._time_spent.get(qid, 0.0) + (
            now - self._question_started_at
        )
        self._question_started_at = now
