"""
Batch aggregation of articles + papers into dashboard analytics.

Every call rebuilds the result from its inputs; the engine keeps no state
between calls.
"""
from __future__ import annotations

import dataclasses
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from pulse.keywords import KeywordCatalog, load_keyword_catalog
from pulse.models import (
    ActiveSource,
    AnalyticsData,
    ContentItem,
    DateRange,
    ItemType,
    SourceShare,
    TimelineBucket,
    TopicTrend,
)
from pulse.schemas import ArticleRecord, PaperRecord
from pulse.settings import PulseSettings
from pulse.sources import is_social_source, normalize_source


class AnalyticsEngine:
    def __init__(
        self,
        catalog: Optional[KeywordCatalog] = None,
        *,
        top_topics: int = 15,
        min_topic_count: int = 3,
        recent_limit: int = 20,
        active_sources_limit: int = 5,
        week_days: int = 7,
        month_days: int = 30,
    ) -> None:
        self.catalog = catalog or KeywordCatalog.default()
        self.top_topics = top_topics
        self.min_topic_count = min_topic_count
        self.recent_limit = recent_limit
        self.active_sources_limit = active_sources_limit
        self.week_days = week_days
        self.month_days = month_days

    @classmethod
    def from_settings(cls, settings: PulseSettings, catalog: Optional[KeywordCatalog] = None) -> "AnalyticsEngine":
        if catalog is None and settings.keywords_path:
            catalog = load_keyword_catalog(settings.keywords_path)
        return cls(
            catalog,
            top_topics=settings.top_topics,
            min_topic_count=settings.min_topic_count,
            recent_limit=settings.recent_limit,
            active_sources_limit=settings.active_sources_limit,
            week_days=settings.week_days,
            month_days=settings.month_days,
        )

    def analyze(self, articles: Sequence, papers: Sequence, *, now: Optional[datetime] = None) -> AnalyticsData:
        now = _as_utc(now or datetime.now(timezone.utc))
        items = tag_items(articles, ItemType.ARTICLE) + tag_items(papers, ItemType.PAPER)
        timeline, date_range = self.compute_timeline(items)
        return AnalyticsData(
            total_articles=len(articles),
            total_papers=len(papers),
            total_social_posts=sum(1 for item in items if is_social_source(item.source)),
            topic_trends=self.compute_topic_trends(items),
            source_breakdown=self.compute_source_breakdown(items),
            recent_items=self.recent_items(items),
            timeline=timeline,
            date_range=date_range,
            most_active_sources_week=self.compute_active_sources(items, self.week_days, now=now),
            most_active_sources_month=self.compute_active_sources(items, self.month_days, now=now),
        )

    def compute_topic_trends(self, items: Sequence[ContentItem]) -> List[TopicTrend]:
        total = len(items)
        if not total:
            return []
        counts: Counter = Counter()
        for item in items:
            counts.update(self.catalog.extract(item.text))
        # catalog order first, so the stable sort leaves ties in catalog order
        ranked = [
            TopicTrend(keyword=label, count=counts[label], percentage=counts[label] / total * 100)
            for label in self.catalog.labels
            if counts[label] >= self.min_topic_count
        ]
        ranked.sort(key=lambda trend: trend.count, reverse=True)
        return ranked[: self.top_topics]

    def compute_source_breakdown(self, items: Sequence[ContentItem]) -> List[SourceShare]:
        total = len(items)
        if not total:
            return []
        counts = Counter(normalize_source(item.source) for item in items)
        return [
            SourceShare(source=source, count=count, percentage=count / total * 100)
            for source, count in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
        ]

    def recent_items(self, items: Sequence[ContentItem]) -> List[ContentItem]:
        return sorted(items, key=lambda item: item.published_at, reverse=True)[: self.recent_limit]

    def compute_timeline(self, items: Sequence[ContentItem]) -> Tuple[List[TimelineBucket], DateRange]:
        buckets: Dict[str, TimelineBucket] = {}
        date_range = DateRange()
        for item in items:
            published = item.published_at
            if date_range.earliest is None or published < date_range.earliest:
                date_range.earliest = published
            if date_range.latest is None or published > date_range.latest:
                date_range.latest = published

            month = f"{published.year:04d}-{published.month:02d}"
            bucket = buckets.setdefault(month, TimelineBucket(month=month))
            if item.item_type is ItemType.ARTICLE:
                bucket.articles += 1
            else:
                bucket.papers += 1
        return [buckets[month] for month in sorted(buckets)], date_range

    def compute_active_sources(
        self, items: Sequence[ContentItem], window_days: int, *, now: datetime
    ) -> List[ActiveSource]:
        cutoff = _as_utc(now) - timedelta(days=window_days)
        ranking: Dict[str, ActiveSource] = {}
        for item in items:
            if item.published_at < cutoff:
                continue
            entry = ranking.get(item.source)
            if entry is None:
                ranking[item.source] = ActiveSource(source=item.source, count=1, last_published=item.published_at)
                continue
            entry.count += 1
            if item.published_at > entry.last_published:
                entry.last_published = item.published_at
        ordered = sorted(
            ranking.values(),
            key=lambda entry: (-entry.count, -entry.last_published.timestamp(), entry.source),
        )
        return ordered[: self.active_sources_limit]


def tag_items(records: Iterable, item_type: ItemType) -> List[ContentItem]:
    """Validate mappings, then tag every record as an article or a paper."""
    model = PaperRecord if item_type is ItemType.PAPER else ArticleRecord
    items: List[ContentItem] = []
    for record in records:
        if isinstance(record, ContentItem):
            items.append(dataclasses.replace(record, item_type=item_type))
            continue
        if isinstance(record, Mapping):
            record = model.model_validate(record)
        elif not isinstance(record, ArticleRecord):
            raise ValueError(f"Unsupported {item_type.value} entry of type {type(record).__name__}; expected a mapping or record")
        items.append(ContentItem.from_record(record, item_type))
    return items


def analyze_data(
    articles: Sequence,
    papers: Sequence,
    *,
    now: Optional[datetime] = None,
    catalog: Optional[KeywordCatalog] = None,
) -> AnalyticsData:
    return AnalyticsEngine(catalog).analyze(articles, papers, now=now)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
