"""
Display-level helpers applied to an already aggregated timeline.
"""
from __future__ import annotations

import calendar
from typing import List

from pulse.models import TimelineBucket


def filter_timeline_year(timeline: List[TimelineBucket], year: int, month_names: bool = False) -> List[TimelineBucket]:
    """Keep only the buckets of ``year``; optionally relabel them "Jan".."Dec"."""
    prefix = f"{year:04d}-"
    selected = [bucket for bucket in timeline if bucket.month.startswith(prefix)]
    if not month_names:
        return selected
    return [
        TimelineBucket(
            month=calendar.month_abbr[int(bucket.month[len(prefix):])],
            articles=bucket.articles,
            papers=bucket.papers,
        )
        for bucket in selected
    ]
