"""
JSON-ready views of analytics results, keyed the way the dashboard expects.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pulse.models import ActiveSource, AnalyticsData, ContentItem, ItemType, TimelineBucket


def _iso(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def item_to_dict(item: ContentItem) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "title": item.title,
        "link": item.link,
        "pubDate": item.pub_date,
        "content": item.content,
        "source": item.source,
        "categories": list(item.categories),
        "type": item.item_type.value,
    }
    if item.item_type is ItemType.PAPER:
        payload["authors"] = list(item.authors)
    return payload


def _bucket_to_dict(bucket: TimelineBucket) -> Dict[str, Any]:
    return {
        "month": bucket.month,
        "articles": bucket.articles,
        "papers": bucket.papers,
        "total": bucket.total,
    }


def _active_to_dict(entry: ActiveSource) -> Dict[str, Any]:
    return {
        "source": entry.source,
        "count": entry.count,
        "lastPublished": _iso(entry.last_published),
    }


def analytics_to_dict(data: AnalyticsData) -> Dict[str, Any]:
    return {
        "totalArticles": data.total_articles,
        "totalPapers": data.total_papers,
        "totalSocialPosts": data.total_social_posts,
        "topicTrends": [
            {"keyword": trend.keyword, "count": trend.count, "percentage": trend.percentage}
            for trend in data.topic_trends
        ],
        "sourceBreakdown": [
            {"source": share.source, "count": share.count, "percentage": share.percentage}
            for share in data.source_breakdown
        ],
        "recentItems": [item_to_dict(item) for item in data.recent_items],
        "timeline": [_bucket_to_dict(bucket) for bucket in data.timeline],
        "dateRange": {
            "earliest": _iso(data.date_range.earliest),
            "latest": _iso(data.date_range.latest),
        },
        "mostActiveSourcesWeek": [_active_to_dict(entry) for entry in data.most_active_sources_week],
        "mostActiveSourcesMonth": [_active_to_dict(entry) for entry in data.most_active_sources_month],
    }


def build_payload(data: AnalyticsData, generated_at: datetime) -> Dict[str, Any]:
    return {
        "success": True,
        "data": analytics_to_dict(data),
        "lastRefresh": _iso(generated_at),
    }
