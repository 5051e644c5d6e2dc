"""
Turn stored vector-store documents back into article/paper records.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from pulse.schemas import ArticleRecord, PaperRecord

logger = logging.getLogger(__name__)


def split_documents(
    documents: Iterable[Any], *, now: Optional[datetime] = None
) -> Tuple[List[ArticleRecord], List[PaperRecord]]:
    """
    Split stored documents into articles and papers by their ``metadata.type``.

    Missing fields get the same defaults the fetchers use (``"No title"``,
    ``"Unknown"`` source, current time as publication date). Documents without
    metadata are skipped; records that still fail validation raise.
    """
    fallback_date = (now or datetime.now(timezone.utc)).isoformat()
    articles: List[ArticleRecord] = []
    papers: List[PaperRecord] = []
    skipped = 0

    for document in documents:
        metadata = _metadata_of(document)
        if not metadata:
            skipped += 1
            continue
        fields = {
            "title": metadata.get("title") or "No title",
            "link": metadata.get("link") or "",
            "pubDate": metadata.get("pubDate") or fallback_date,
            "content": metadata.get("content") or "",
            "source": metadata.get("source") or "Unknown",
            "categories": metadata.get("categories") or [],
        }
        if metadata.get("type") == "paper":
            papers.append(PaperRecord.model_validate({**fields, "authors": metadata.get("authors") or []}))
        else:
            articles.append(ArticleRecord.model_validate(fields))

    if skipped:
        logger.debug("Skipped %d documents without metadata", skipped)
    logger.info("Retrieved %d articles and %d papers from stored documents", len(articles), len(papers))
    return articles, papers


def _metadata_of(document: Any) -> Optional[Mapping[str, Any]]:
    if isinstance(document, Mapping):
        return document.get("metadata")
    return getattr(document, "metadata", None)
