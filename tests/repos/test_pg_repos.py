"""PostgreSQL repositories against a live database.

Run with DATABASE_URL pointing at a disposable database:
    DATABASE_URL=postgresql+asyncpg://... pytest -m docker
"""

from __future__ import annotations

import asyncio
from dataclasses import replace
from uuid import uuid4

import pytest

from quiz_engine.core.config import SETTINGS
from quiz_engine.db.engine import async_session_factory, lifespan_db
from quiz_engine.models.attempt import Attempt, UserAnswer
from tests.conftest import make_quiz

pytestmark = [
    pytest.mark.docker,
    pytest.mark.skipif(SETTINGS.database_url is None, reason="DATABASE_URL not set"),
]


def _run(coro_fn):
    async def wrapper():
        async with lifespan_db():
            return await coro_fn()

    return asyncio.run(wrapper())


def test_quiz_draft_and_published_rows() -> None:
    from quiz_engine.repos.pg_quiz_repo import PgQuizRepo

    repo = PgQuizRepo(async_session_factory)
    published = make_quiz()
    draft = replace(published, status="draft", title="Edited")

    async def scenario():
        await repo.save_published(published)
        await repo.save_draft(draft)
        loaded = (await repo.load_draft(draft.id), await repo.load_published(draft.id))
        await repo.delete_draft(draft.id)
        return loaded, await repo.load_draft(draft.id)

    (loaded_draft, loaded_published), after_delete = _run(scenario)
    assert loaded_draft == draft
    assert loaded_published == published
    assert after_delete is None


def test_attempts_recorded_and_counted() -> None:
    from quiz_engine.repos.pg_attempt_repo import PgAttemptRepo

    repo = PgAttemptRepo(async_session_factory)
    quiz_id = uuid4()
    user_id = f"learner-{uuid4()}"
    attempt = Attempt(
        id=uuid4(),
        quiz_id=quiz_id,
        quiz_version=1,
        user_id=user_id,
        attempt_number=1,
        started_at=1_700_000_000,
        answers=(
            UserAnswer(question_id=uuid4(), raw_answer="B", time_spent_seconds=5, is_correct=True),
        ),
        submitted_at=1_700_000_030,
        time_spent_seconds=30,
        score=40,
        passed=False,
    )

    async def scenario():
        await repo.record_attempt(attempt)
        return await repo.list_attempts(user_id, quiz_id), await repo.attempts_used(
            user_id, quiz_id
        )

    listed, used = _run(scenario)
    assert listed == [attempt]
    assert used == 1
