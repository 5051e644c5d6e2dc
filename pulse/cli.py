"""
Simple CLI to run the analytics engine over a JSON dump.
"""
from __future__ import annotations

import dataclasses
import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import click
from dotenv import load_dotenv

from pulse.documents import split_documents
from pulse.engine import AnalyticsEngine
from pulse.export import build_payload
from pulse.keywords import KeywordCatalog, load_keyword_catalog
from pulse.models import parse_pub_date
from pulse.settings import load_settings
from pulse.timeline import filter_timeline_year

logger = logging.getLogger(__name__)


def _load_records(blob: Any, now: datetime):
    if isinstance(blob, dict) and ("articles" in blob or "papers" in blob):
        return blob.get("articles") or [], blob.get("papers") or []
    if isinstance(blob, dict):
        blob = blob.get("documents") or []
    if not isinstance(blob, list):
        raise ValueError("Input must be {articles, papers}, {documents} or a list of documents")
    return split_documents(blob, now=now)


@click.group()
@click.option("--verbose", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool):
    load_dotenv(os.getenv("PULSE_DOTENV", ".env"))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--now", "now_text", default=None, help="Anchor time for the active-source windows (ISO-8601).")
@click.option("--year", type=int, default=None, help="Only show timeline buckets of this year.")
@click.option("--month-names", is_flag=True, help="Label filtered timeline buckets Jan..Dec.")
@click.option("--keywords", "keywords_path", type=click.Path(exists=True, dir_okay=False), default=None)
@click.option("--indent", type=int, default=2)
def analyze(input_path: str, now_text: Optional[str], year: Optional[int], month_names: bool, keywords_path: Optional[str], indent: int):
    settings = load_settings()
    try:
        now = parse_pub_date(now_text) if now_text else datetime.now(timezone.utc)
        blob = json.loads(Path(input_path).read_text(encoding="utf-8"))
        articles, papers = _load_records(blob, now)
        catalog = load_keyword_catalog(keywords_path) if keywords_path else None
        data = AnalyticsEngine.from_settings(settings, catalog).analyze(articles, papers, now=now)
    except ValueError as exc:
        logger.error("Analytics failed for %s: %s", input_path, exc)
        raise click.ClickException(str(exc)) from exc

    year = year if year is not None else settings.timeline_year
    if year is not None:
        data = dataclasses.replace(data, timeline=filter_timeline_year(data.timeline, year, month_names=month_names))
    click.echo(json.dumps(build_payload(data, datetime.now(timezone.utc)), ensure_ascii=False, indent=indent))


@cli.command("keywords")
@click.argument("text")
@click.option("--keywords", "keywords_path", type=click.Path(exists=True, dir_okay=False), default=None)
def keywords_command(text: str, keywords_path: Optional[str]):
    """Print the catalog keywords found in TEXT."""
    path = keywords_path or load_settings().keywords_path
    try:
        catalog = load_keyword_catalog(path) if path else KeywordCatalog.default()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    for label in catalog.extract(text):
        click.echo(label)


if __name__ == "__main__":  # pragma: no cover
    cli()
