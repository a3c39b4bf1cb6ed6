"""Redis-backed QuizRepo.

Each definition is one JSON document (see models/codec.py) under
``quiz:draft:<id>`` or ``quiz:published:<id>``.  Publishing is a single SET
on the published key, so concurrent readers of ``load_published`` get
either the previous version or the new one, never a mix.
"""

from __future__ import annotations

import logging
from uuid import UUID

from quiz_engine.models.codec import dump_quiz, load_quiz
from quiz_engine.models.quiz import QuizDefinition

logger = logging.getLogger(__name__)


class RedisQuizRepo:
    _PREFIX = "quiz:"

    def __init__(self, redis_client) -> None:
        self._redis = redis_client

    def _key(self, status: str, quiz_id: UUID) -> str:
        return f"{self._PREFIX}{status}:{quiz_id}"

    async def _load(self, status: str, quiz_id: UUID) -> QuizDefinition | None:
        document = await self._redis.get(self._key(status, quiz_id))
        if document is None:
            return None
        definition = load_quiz(document)
        if definition.status != status:
            logger.warning(
                "Stored %s document has status %s",
                status,
                definition.status,
                extra={"quiz_id": str(quiz_id)},
            )
            return None
        return definition

    async def load_draft(self, quiz_id: UUID) -> QuizDefinition | None:
        return await self._load("draft", quiz_id)

    async def save_draft(self, definition: QuizDefinition) -> None:
        if definition.status != "draft":
            raise ValueError("save_draft expects a draft definition")
        await self._redis.set(self._key("draft", definition.id), dump_quiz(definition))

    async def load_published(self, quiz_id: UUID) -> QuizDefinition | None:
        return await self._load("published", quiz_id)

    async def save_published(self, definition: QuizDefinition) -> None:
        if definition.status != "published":
            raise ValueError("save_published expects a published definition")
        await self._redis.set(
            self._key("published", definition.id), dump_quiz(definition)
        )

    async def delete_draft(self, quiz_id: UUID) -> None:
        await self._redis.delete(self._key("draft", quiz_id))
