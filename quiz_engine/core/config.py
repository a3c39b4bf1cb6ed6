from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

AppEnv = Literal["dev", "test", "prod"]
LogLevel = Literal["debug", "info", "warning", "error"]


def _getenv(name: str, default: str) -> str:
    return os.environ.get(name, default).strip()


def _getint(name: str, default: str) -> int:
    raw = _getenv(name, default)
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer (got {raw!r})") from None


@dataclass(frozen=True)
class Settings:
    app_env: AppEnv
    log_level: LogLevel
    log_json: bool
    database_url: str | None
    redis_url: str | None
    # Seed values for a brand-new quiz draft
    default_time_limit_minutes: int = 30
    default_passing_score_percent: int = 70
    default_max_attempts: int = 3

    @property
    def is_dev(self) -> bool:
        return self.app_env == "dev"

    @property
    def is_test(self) -> bool:
        return self.app_env == "test"

    @property
    def is_prod(self) -> bool:
        return self.app_env == "prod"


def load_settings() -> Settings:
    app_env_raw = _getenv("APP_ENV", "dev").lower()
    log_level_raw = _getenv("LOG_LEVEL", "info").lower()
    log_json_raw = _getenv("LOG_JSON", "false").lower()

    if app_env_raw not in ("dev", "test", "prod"):
        raise ValueError(f"APP_ENV must be dev|test|prod (got {app_env_raw!r})")

    if log_level_raw not in ("debug", "info", "warning", "error"):
        raise ValueError(
            f"LOG_LEVEL must be debug|info|warning|error (got {log_level_raw!r})"
        )

    if log_json_raw not in ("true", "false", "1", "0"):
        raise ValueError(f"LOG_JSON must be true|false (got {log_json_raw!r})")

    time_limit = _getint("QUIZ_DEFAULT_TIME_LIMIT", "30")
    if time_limit <= 0:
        raise ValueError(
            f"QUIZ_DEFAULT_TIME_LIMIT must be greater than 0 (got {time_limit})"
        )

    passing_score = _getint("QUIZ_DEFAULT_PASSING_SCORE", "70")
    if not 0 < passing_score <= 100:
        raise ValueError(
            f"QUIZ_DEFAULT_PASSING_SCORE must be between 1 and 100 (got {passing_score})"
        )

    max_attempts = _getint("QUIZ_DEFAULT_MAX_ATTEMPTS", "3")
    if max_attempts < 1:
        raise ValueError(
            f"QUIZ_DEFAULT_MAX_ATTEMPTS must be at least 1 (got {max_attempts})"
        )

    database_url = _getenv("DATABASE_URL", "") or None
    redis_url = _getenv("REDIS_URL", "") or None

    return Settings(  # type: ignore[arg-type]
        app_env=app_env_raw,
        log_level=log_level_raw,
        log_json=log_json_raw in ("true", "1"),
        database_url=database_url,
        redis_url=redis_url,
        default_time_limit_minutes=time_limit,
        default_passing_score_percent=passing_score,
        default_max_attempts=max_attempts,
    )


SETTINGS = load_settings()
