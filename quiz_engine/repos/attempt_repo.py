from __future__ import annotations

from typing import Protocol, runtime_checkable
from uuid import UUID

from quiz_engine.models.attempt import Attempt


@runtime_checkable
class AttemptRepo(Protocol):
    async def record_attempt(self, attempt: Attempt) -> None: ...
    async def list_attempts(self, user_id: str, quiz_id: UUID) -> list[Attempt]: ...


@runtime_checkable
class ProgressTracker(Protocol):
    async def attempts_used(self, user_id: str, quiz_id: UUID) -> int: ...


class InMemoryAttemptRepo:
    """Satisfies both AttemptRepo and ProgressTracker."""

    def __init__(self) -> None:
        self._store: dict[UUID, Attempt] = {}

    async def record_attempt(self, attempt: Attempt) -> None:
        if attempt.submitted_at is None:
            raise ValueError("only sealed attempts can be recorded")
        self._store[attempt.id] = attempt

    async def list_attempts(self, user_id: str, quiz_id: UUID) -> list[Attempt]:
        return sorted(
            (
                a
                for a in self._store.values()
                if a.user_id == user_id and a.quiz_id == quiz_id
            ),
            key=lambda a: a.attempt_number,
        )

    async def attempts_used(self, user_id: str, quiz_id: UUID) -> int:
        return len(await self.list_attempts(user_id, quiz_id))
