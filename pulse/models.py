"""
Core data structures shared by the analytics engine.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from enum import Enum
from typing import List, Optional, Union


class ItemType(str, Enum):
    ARTICLE = "article"
    PAPER = "paper"


def parse_pub_date(value: Union[str, datetime, None]) -> datetime:
    """
    Parse an ISO-8601 or RFC-822 publication date into an aware UTC datetime.

    Naive values are treated as UTC. Raises ValueError when nothing parses.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value or "").strip()
        if not text:
            raise ValueError("Empty publication date")
        iso_text = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
        try:
            parsed = datetime.fromisoformat(iso_text)
        except ValueError:
            try:
                parsed = parsedate_to_datetime(text)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"Unparseable publication date: {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


@dataclass
class ContentItem:
    """
    Normalized, type-tagged article or paper as seen by the aggregations.
    """

    title: str
    link: str
    pub_date: str
    content: str
    source: str
    item_type: ItemType
    published_at: datetime
    categories: List[str] = field(default_factory=list)
    authors: List[str] = field(default_factory=list)

    @classmethod
    def from_record(cls, record, item_type: ItemType) -> "ContentItem":
        return cls(
            title=record.title,
            link=record.link,
            pub_date=record.pub_date,
            content=record.content,
            source=record.source,
            item_type=item_type,
            published_at=parse_pub_date(record.pub_date),
            categories=list(record.categories or []),
            authors=list(getattr(record, "authors", None) or []),
        )

    @property
    def text(self) -> str:
        return f"{self.title} {self.content}"


@dataclass
class TopicTrend:
    keyword: str
    count: int
    percentage: float


@dataclass
class SourceShare:
    source: str
    count: int
    percentage: float


@dataclass
class TimelineBucket:
    month: str
    articles: int = 0
    papers: int = 0

    @property
    def total(self) -> int:
        return self.articles + self.papers


@dataclass
class DateRange:
    earliest: Optional[datetime] = None
    latest: Optional[datetime] = None


@dataclass
class ActiveSource:
    source: str
    count: int
    last_published: datetime


@dataclass(frozen=True)
class AnalyticsData:
    total_articles: int
    total_papers: int
    total_social_posts: int
    topic_trends: List[TopicTrend]
    source_breakdown: List[SourceShare]
    recent_items: List[ContentItem]
    timeline: List[TimelineBucket]
    date_range: DateRange
    most_active_sources_week: List[ActiveSource]
    most_active_sources_month: List[ActiveSource]
