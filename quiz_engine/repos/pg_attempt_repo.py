"""PostgreSQL implementation of AttemptRepo and ProgressTracker."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from quiz_engine.db.engine import session_scope
from quiz_engine.db.tables import QuizAttemptRow
from quiz_engine.models.attempt import Attempt
from quiz_engine.models.codec import dump_attempt, load_attempt


class PgAttemptRepo:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def record_attempt(self, attempt: Attempt) -> None:
        if attempt.submitted_at is None or attempt.score is None:
            raise ValueError("only sealed attempts can be recorded")
        row = QuizAttemptRow(
            id=attempt.id,
            quiz_id=attempt.quiz_id,
            quiz_version=attempt.quiz_version,
            user_id=attempt.user_id,
            attempt_number=attempt.attempt_number,
            started_at=attempt.started_at,
            submitted_at=attempt.submitted_at,
            time_spent_seconds=attempt.time_spent_seconds,
            score=attempt.score,
            passed=bool(attempt.passed),
            document=dump_attempt(attempt),
        )
        async with session_scope(self._session_factory) as session:
            session.add(row)

    async def list_attempts(self, user_id: str, quiz_id: UUID) -> list[Attempt]:
        stmt = (
            select(QuizAttemptRow.document)
            .where(QuizAttemptRow.user_id == user_id, QuizAttemptRow.quiz_id == quiz_id)
            .order_by(QuizAttemptRow.attempt_number)
        )
        async with session_scope(self._session_factory) as session:
            documents = (await session.execute(stmt)).scalars().all()
        return [load_attempt(d) for d in documents]

    async def attempts_used(self, user_id: str, quiz_id: UUID) -> int:
        stmt = select(func.count()).where(
            QuizAttemptRow.user_id == user_id, QuizAttemptRow.quiz_id == quiz_id
        )
        async with session_scope(self._session_factory) as session:
            return (await session.execute(stmt)).scalar_one()
