"""
Public API for the dashboard analytics engine.
"""
from __future__ import annotations

import dataclasses
import logging
from datetime import datetime
from typing import Optional, Sequence

from pulse.engine import AnalyticsEngine, analyze_data
from pulse.models import AnalyticsData
from pulse.settings import PulseSettings, load_settings
from pulse.timeline import filter_timeline_year

logger = logging.getLogger(__name__)

SETTINGS: PulseSettings = load_settings()
_engine: Optional[AnalyticsEngine] = None


def get_engine() -> AnalyticsEngine:
    global _engine
    if _engine is None:
        _engine = AnalyticsEngine.from_settings(SETTINGS)
    return _engine


def get_analytics(articles: Sequence, papers: Sequence, now: Optional[datetime] = None) -> AnalyticsData:
    """
    Run the configured engine and apply the optional single-year timeline filter.
    """
    logger.info("Analyzing %d articles and %d papers", len(articles), len(papers))
    data = get_engine().analyze(articles, papers, now=now)
    if SETTINGS.timeline_year is not None:
        data = dataclasses.replace(data, timeline=filter_timeline_year(data.timeline, SETTINGS.timeline_year))
    return data


__all__ = ["AnalyticsEngine", "SETTINGS", "analyze_data", "get_analytics", "get_engine"]
