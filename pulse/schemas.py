"""
Pydantic models for records entering the analytics core.
These carry only the fields the dashboard stores per document.
"""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pulse.models import parse_pub_date


class ArticleRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    link: str
    pub_date: str = Field(alias="pubDate")
    content: str
    source: str
    categories: List[str] = []

    @field_validator("title", "source", mode="before")
    @classmethod
    def _trim(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("categories", mode="before")
    @classmethod
    def _default_categories(cls, value):
        return value or []

    @field_validator("pub_date")
    @classmethod
    def _check_pub_date(cls, value: str) -> str:
        parse_pub_date(value)
        return value


class PaperRecord(ArticleRecord):
    authors: List[str] = []

    @field_validator("authors", mode="before")
    @classmethod
    def _default_authors(cls, value):
        return value or []
