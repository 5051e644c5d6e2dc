"""
Source-family grouping for breakdown charts.
"""
from __future__ import annotations

SOURCE_FAMILY_PREFIXES = [
    ("News API -", "News API"),
    ("Semantic Scholar -", "Semantic Scholar"),
    ("ArXiv -", "ArXiv"),
    ("Reddit -", "Reddit"),
]

HACKER_NEWS = "Hacker News"


def normalize_source(source: str) -> str:
    """Collapse per-feed labels ("Reddit - r/artificial") into their family ("Reddit")."""
    for prefix, family in SOURCE_FAMILY_PREFIXES:
        if source.startswith(prefix):
            return family
    return source


def is_social_source(source: str) -> bool:
    return source.startswith("Reddit -") or source == HACKER_NEWS
