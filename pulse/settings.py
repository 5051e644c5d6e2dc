"""
Centralised settings for the analytics engine (env-first, code-light).
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class PulseSettings:
    top_topics: int = 15
    min_topic_count: int = 3
    recent_limit: int = 20
    active_sources_limit: int = 5
    week_days: int = 7
    month_days: int = 30
    keywords_path: Optional[Path] = None
    timeline_year: Optional[int] = None


def _int_from_env(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or str(raw).strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int value for %s=%s; using default %s", key, raw, default)
        return default
    if value <= 0:
        logger.warning("Non-positive value for %s=%s; using default %s", key, raw, default)
        return default
    return value


def _optional_int_from_env(key: str) -> Optional[int]:
    raw = os.getenv(key)
    if raw is None or str(raw).strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid int value for %s=%s; ignoring.", key, raw)
        return None


def load_settings() -> PulseSettings:
    keywords_env = os.getenv("PULSE_KEYWORDS_PATH")
    return PulseSettings(
        top_topics=_int_from_env("PULSE_TOP_TOPICS", 15),
        min_topic_count=_int_from_env("PULSE_MIN_TOPIC_COUNT", 3),
        recent_limit=_int_from_env("PULSE_RECENT_LIMIT", 20),
        active_sources_limit=_int_from_env("PULSE_ACTIVE_SOURCES_LIMIT", 5),
        week_days=_int_from_env("PULSE_WEEK_DAYS", 7),
        month_days=_int_from_env("PULSE_MONTH_DAYS", 30),
        keywords_path=Path(keywords_env) if keywords_env else None,
        timeline_year=_optional_int_from_env("PULSE_TIMELINE_YEAR"),
    )
