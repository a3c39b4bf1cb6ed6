"""Process-level setup for hosts embedding the quiz engine.

Call ``configure()`` once at startup, then run the host inside
``async with lifespan():`` so configured backends are checked on entry
and released on exit.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from quiz_engine.core.config import SETTINGS
from quiz_engine.core.logging import setup_logging
from quiz_engine.db.engine import lifespan_db
from quiz_engine.db.redis import lifespan_redis

logger = logging.getLogger(__name__)


def configure() -> None:
    setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)
    logger.info("quiz engine configured (env=%s)", SETTINGS.app_env)


@asynccontextmanager
async def lifespan() -> AsyncGenerator[None, None]:
    # Teardown runs in reverse order: Redis first, then the database
    async with lifespan_db():
        async with lifespan_redis():
            yield
