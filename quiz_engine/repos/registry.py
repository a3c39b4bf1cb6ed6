"""Module-level repository singletons.

Backend selection follows configuration: PostgreSQL when DATABASE_URL is
set, Redis for quiz documents and attempts when only REDIS_URL is set,
otherwise the in-memory implementations (tests, local use).
"""

from __future__ import annotations

from quiz_engine.db.engine import async_session_factory
from quiz_engine.db.redis import redis_pool
from quiz_engine.repos.attempt_repo import (
    AttemptRepo,
    InMemoryAttemptRepo,
    ProgressTracker,
)
from quiz_engine.repos.quiz_repo import InMemoryQuizRepo, QuizRepo

quiz_repo: QuizRepo
attempt_repo: AttemptRepo
progress_tracker: ProgressTracker

if async_session_factory is not None:
    from quiz_engine.repos.pg_attempt_repo import PgAttemptRepo
    from quiz_engine.repos.pg_quiz_repo import PgQuizRepo

    quiz_repo = PgQuizRepo(async_session_factory)
    _pg_attempts = PgAttemptRepo(async_session_factory)
    attempt_repo = _pg_attempts
    progress_tracker = _pg_attempts
elif redis_pool is not None:
    from quiz_engine.repos.redis_attempt_repo import RedisAttemptRepo
    from quiz_engine.repos.redis_quiz_repo import RedisQuizRepo

    quiz_repo = RedisQuizRepo(redis_pool)
    _redis_attempts = RedisAttemptRepo(redis_pool)
    attempt_repo = _redis_attempts
    progress_tracker = _redis_attempts
else:
    quiz_repo = InMemoryQuizRepo()
    _memory_attempts = InMemoryAttemptRepo()
    attempt_repo = _memory_attempts
    progress_tracker = _memory_attempts
