"""Environment-driven settings."""

from __future__ import annotations

import logging
from os import getenv


class Settings:
    DEFAULT_TASK_TIME = getenv("TIMEHUB_DEFAULT_TASK_TIME", "09:00")
    DEFAULT_DURATION_MIN = int(getenv("TIMEHUB_DEFAULT_DURATION_MIN", "30"))
    COURSE_BLOCK_MIN = int(getenv("TIMEHUB_COURSE_BLOCK_MIN", "90"))
    ASSIGNMENT_LEAD_MIN = int(getenv("TIMEHUB_ASSIGNMENT_LEAD_MIN", "60"))
    VIEW_PADDING_DAYS = int(getenv("TIMEHUB_VIEW_PADDING_DAYS", "7"))
    COURSE_WEEKS = getenv("TIMEHUB_COURSE_WEEKS", "current")  # "current" or "window"
    LOG_LEVEL = getenv("TIMEHUB_LOG_LEVEL", "WARNING")


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Install a basic stderr handler; entry-point scripts only."""

    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
