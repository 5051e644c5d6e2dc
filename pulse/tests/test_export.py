import dataclasses
import json
import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pulse
from pulse.engine import analyze_data
from pulse.export import analytics_to_dict, build_payload
from pulse.models import TimelineBucket
from pulse.timeline import filter_timeline_year

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def _record(title, source, published, **extra):
    return {
        "title": title,
        "link": f"https://example.com/{title}",
        "pubDate": published,
        "content": "Reinforcement Learning",
        "source": source,
        **extra,
    }


class ExportTests(unittest.TestCase):
    def test_payload_uses_dashboard_keys_and_is_json_ready(self):
        articles = [_record("post", "Reddit - r/artificial", (NOW - timedelta(days=1)).isoformat())]
        papers = [_record("paper", "ArXiv - AI", "2024-06-10T00:00:00Z", authors=["Ada"], categories=["cs.AI"])]
        data = analyze_data(articles, papers, now=NOW)

        payload = build_payload(data, NOW)
        body = payload["data"]

        self.assertTrue(payload["success"])
        self.assertEqual(payload["lastRefresh"], "2024-06-15T12:00:00Z")
        self.assertEqual(
            set(body),
            {
                "totalArticles",
                "totalPapers",
                "totalSocialPosts",
                "topicTrends",
                "sourceBreakdown",
                "recentItems",
                "timeline",
                "dateRange",
                "mostActiveSourcesWeek",
                "mostActiveSourcesMonth",
            },
        )
        self.assertEqual(body["totalSocialPosts"], 1)
        self.assertEqual(body["timeline"], [{"month": "2024-06", "articles": 1, "papers": 1, "total": 2}])
        self.assertEqual(body["recentItems"][0]["type"], "article")
        self.assertNotIn("authors", body["recentItems"][0])
        self.assertEqual(body["recentItems"][1]["authors"], ["Ada"])
        self.assertEqual(body["recentItems"][1]["pubDate"], "2024-06-10T00:00:00Z")
        self.assertEqual(body["dateRange"]["earliest"], "2024-06-10T00:00:00Z")
        self.assertEqual(body["mostActiveSourcesWeek"][0]["lastPublished"], "2024-06-14T12:00:00Z")
        json.dumps(payload)

    def test_empty_date_range_serializes_to_null(self):
        body = analytics_to_dict(analyze_data([], [], now=NOW))
        self.assertEqual(body["dateRange"], {"earliest": None, "latest": None})
        self.assertEqual(body["topicTrends"], [])

    def test_results_are_not_mutated_in_place(self):
        data = analyze_data([_record("a", "Feed", "2024-05-01T00:00:00Z")], [], now=NOW)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            data.timeline = []


class TimelineFilterTests(unittest.TestCase):
    def setUp(self) -> None:
        self.timeline = [
            TimelineBucket(month="2023-11", articles=2),
            TimelineBucket(month="2024-01", articles=1, papers=1),
            TimelineBucket(month="2024-03", papers=4),
        ]

    def test_keeps_only_requested_year(self):
        filtered = filter_timeline_year(self.timeline, 2024)
        self.assertEqual([bucket.month for bucket in filtered], ["2024-01", "2024-03"])

    def test_month_name_labels(self):
        filtered = filter_timeline_year(self.timeline, 2024, month_names=True)
        self.assertEqual([(bucket.month, bucket.total) for bucket in filtered], [("Jan", 2), ("Mar", 4)])
        self.assertEqual(self.timeline[1].month, "2024-01")

    def test_get_analytics_applies_configured_year(self):
        articles = [
            _record("old", "Feed", "2023-05-01T00:00:00Z"),
            _record("new", "Feed", "2024-05-01T00:00:00Z"),
        ]
        with patch.object(pulse.SETTINGS, "timeline_year", 2024):
            data = pulse.get_analytics(articles, [], now=NOW)
        self.assertEqual([bucket.month for bucket in data.timeline], ["2024-05"])
        self.assertEqual(data.total_articles, 2)


if __name__ == "__main__":
    unittest.main()
