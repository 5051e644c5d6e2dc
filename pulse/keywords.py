"""
Keyword catalog + whole-phrase matching used for topic trends.
"""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Optional, Pattern

import yaml

from utils.keywords import DEFAULT_AI_KEYWORDS

logger = logging.getLogger(__name__)

_PUNCTUATION = re.compile(r"[^\w\s]|_")


def normalize_text(text: str) -> str:
    """Lowercase and turn punctuation into spaces so "Fine-tuning" reads as "fine tuning"."""
    return _PUNCTUATION.sub(" ", (text or "").lower())


@dataclass(frozen=True)
class KeywordPhrase:
    label: str
    key: str
    pattern: Pattern[str]

    @classmethod
    def build(cls, label: str) -> "KeywordPhrase":
        words = normalize_text(label).split()
        if not words:
            raise ValueError(f"Keyword {label!r} has no matchable characters")
        pattern = re.compile(r"\b" + r"\s+".join(re.escape(word) for word in words) + r"\b")
        return cls(label=label, key=" ".join(words), pattern=pattern)

    def matches(self, normalized_text: str) -> bool:
        return self.pattern.search(normalized_text) is not None


class KeywordCatalog:
    """
    Ordered set of domain phrases. Order decides extraction order and breaks topic ties.
    """

    def __init__(self, labels: Iterable[str]) -> None:
        phrases: List[KeywordPhrase] = []
        seen = set()
        for label in labels:
            phrase = KeywordPhrase.build(label)
            if phrase.key in seen:
                continue
            seen.add(phrase.key)
            phrases.append(phrase)
        self.phrases = phrases

    @classmethod
    def default(cls) -> "KeywordCatalog":
        return cls(DEFAULT_AI_KEYWORDS)

    @property
    def labels(self) -> List[str]:
        return [phrase.label for phrase in self.phrases]

    def extract(self, text: str) -> List[str]:
        normalized = normalize_text(text)
        return [phrase.label for phrase in self.phrases if phrase.matches(normalized)]

    def __len__(self) -> int:
        return len(self.phrases)


def extract_keywords(text: str, catalog: Optional[KeywordCatalog] = None) -> List[str]:
    return (catalog or KeywordCatalog.default()).extract(text)


def load_keyword_catalog(path: Path | str) -> KeywordCatalog:
    config_path = Path(path)
    if not config_path.exists():
        raise ValueError(f"Keyword catalog not found at {config_path}")
    try:
        data = _expand_env(yaml.safe_load(config_path.read_text(encoding="utf-8")))
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid keyword catalog at {config_path}: {exc}") from exc
    if isinstance(data, dict):
        data = data.get("keywords")
    if data is None:
        data = []
    if not isinstance(data, list):
        raise ValueError(f"Keyword catalog at {config_path} must be a list of keywords")
    labels = [str(entry).strip() for entry in data if isinstance(entry, (str, int, float))]
    labels = [label for label in labels if label]
    if not labels:
        raise ValueError(f"Keyword catalog at {config_path} defines no keywords")
    logger.info("Loaded %d keywords from %s", len(labels), config_path)
    return KeywordCatalog(labels)


def _expand_env(data: Any) -> Any:
    if isinstance(data, str) and data.startswith("${") and data.endswith("}"):
        return os.getenv(data[2:-1], "")
    if isinstance(data, dict):
        return {k: _expand_env(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_expand_env(item) for item in data]
    return data
