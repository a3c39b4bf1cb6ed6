from __future__ import annotations

import asyncio
import logging

from quiz_engine.core.config import SETTINGS
from quiz_engine.runtime import configure, lifespan


def test_configure_applies_log_level() -> None:
    configure()
    expected = getattr(logging, SETTINGS.log_level.upper(), logging.INFO)
    assert logging.getLogger().level == expected


def test_lifespan_enters_and_exits() -> None:
    entered = []

    async def run() -> None:
        async with lifespan():
            entered.append(True)

    if SETTINGS.database_url is None and SETTINGS.redis_url is None:
        asyncio.run(run())
        assert entered == [True]
