"""Redis-backed AttemptRepo and ProgressTracker.

Sealed attempts for one learner on one quiz are JSON documents (see
models/codec.py) appended to the list ``attempts:<quiz_id>:<user_id>``.
The list length is the number of attempts used, so the limit check sees
every process sharing the Redis instance and survives restarts.
"""

from __future__ import annotations

from uuid import UUID

from quiz_engine.models.attempt import Attempt
from quiz_engine.models.codec import dump_attempt, load_attempt


class RedisAttemptRepo:
    _PREFIX = "attempts:"

    def __init__(self, redis_client) -> None:
        self._redis = redis_client

    def _key(self, user_id: str, quiz_id: UUID) -> str:
        return f"{self._PREFIX}{quiz_id}:{user_id}"

    async def record_attempt(self, attempt: Attempt) -> None:
        if attempt.submitted_at is None:
            raise ValueError("only sealed attempts can be recorded")
        await self._redis.rpush(
            self._key(attempt.user_id, attempt.quiz_id), dump_attempt(attempt)
        )

    async def list_attempts(self, user_id: str, quiz_id: UUID) -> list[Attempt]:
        documents = await self._redis.lrange(self._key(user_id, quiz_id), 0, -1)
        return sorted(
            (load_attempt(d) for d in documents), key=lambda a: a.attempt_number
        )

    async def attempts_used(self, user_id: str, quiz_id: UUID) -> int:
        return await self._redis.llen(self._key(user_id, quiz_id))
