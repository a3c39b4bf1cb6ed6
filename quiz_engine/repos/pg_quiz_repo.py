"""PostgreSQL implementation of QuizRepo."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from quiz_engine.db.engine import session_scope
from quiz_engine.db.tables import QuizDefinitionRow
from quiz_engine.models.codec import dump_quiz, load_quiz
from quiz_engine.models.quiz import QuizDefinition


class PgQuizRepo:
    """Satisfies the QuizRepo Protocol; one unit of work per call."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def _load(self, quiz_id: UUID, status: str) -> QuizDefinition | None:
        stmt = select(QuizDefinitionRow).where(
            QuizDefinitionRow.quiz_id == quiz_id, QuizDefinitionRow.status == status
        )
        async with session_scope(self._session_factory) as session:
            row = (await session.execute(stmt)).scalar_one_or_none()
        if row is None:
            return None
        return load_quiz(row.document)

    async def _store(self, definition: QuizDefinition) -> None:
        row = QuizDefinitionRow(
            quiz_id=definition.id,
            status=definition.status,
            version=definition.version,
            title=definition.title,
            document=dump_quiz(definition),
        )
        async with session_scope(self._session_factory) as session:
            await session.merge(row)

    async def load_draft(self, quiz_id: UUID) -> QuizDefinition | None:
        return await self._load(quiz_id, "draft")

    async def save_draft(self, definition: QuizDefinition) -> None:
        if definition.status != "draft":
            raise ValueError("save_draft expects a draft definition")
        await self._store(definition)

    async def load_published(self, quiz_id: UUID) -> QuizDefinition | None:
        return await self._load(quiz_id, "published")

    async def save_published(self, definition: QuizDefinition) -> None:
        if definition.status != "published":
            raise ValueError("save_published expects a published definition")
        await self._store(definition)

    async def delete_draft(self, quiz_id: UUID) -> None:
        stmt = delete(QuizDefinitionRow).where(
            QuizDefinitionRow.quiz_id == quiz_id, QuizDefinitionRow.status == "draft"
        )
        async with session_scope(self._session_factory) as session:
            await session.execute(stmt)
