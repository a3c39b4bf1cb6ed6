from __future__ import annotations

from typing import Protocol, runtime_checkable
from uuid import UUID

from quiz_engine.models.quiz import QuizDefinition


@runtime_checkable
class QuizRepo(Protocol):
    async def load_draft(self, quiz_id: UUID) -> QuizDefinition | None: ...
    async def save_draft(self, definition: QuizDefinition) -> None: ...
    async def load_published(self, quiz_id: UUID) -> QuizDefinition | None: ...
    async def save_published(self, definition: QuizDefinition) -> None: ...
    async def delete_draft(self, quiz_id: UUID) -> None: ...


class InMemoryQuizRepo:
    """Drafts and published versions live side by side, keyed by quiz id."""

    def __init__(self) -> None:
        self._drafts: dict[UUID, QuizDefinition] = {}
        self._published: dict[UUID, QuizDefinition] = {}

    async def load_draft(self, quiz_id: UUID) -> QuizDefinition | None:
        return self._drafts.get(quiz_id)

    async def save_draft(self, definition: QuizDefinition) -> None:
        if definition.status != "draft":
            raise ValueError("save_draft expects a draft definition")
        self._drafts[definition.id] = definition

    async def load_published(self, quiz_id: UUID) -> QuizDefinition | None:
        return self._published.get(quiz_id)

    async def save_published(self, definition: QuizDefinition) -> None:
        if definition.status != "published":
            raise ValueError("save_published expects a published definition")
        # Single assignment: readers see the old version or the new one
        self._published[definition.id] = definition

    async def delete_draft(self, quiz_id: UUID) -> None:
        self._drafts.pop(quiz_id, None)
