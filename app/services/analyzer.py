"""The analysis flow: fetch → extract → score → store."""

import logging
from typing import NamedTuple

from app.config import Settings
from app.models.analysis import AnalysisRecord, NewAnalysis
from app.models.blog_content import BlogContent
from app.services.extractor import extract_blog_content
from app.services.fetcher import FetchError, fetch_url
from app.services.scorer import Scorer
from app.services.storage import AnalysisStorage

logger = logging.getLogger(__name__)


class ContentExtractionError(RuntimeError):
    """The blog page could not be fetched or its URL was rejected."""


class AnalysisResult(NamedTuple):
    record: AnalysisRecord
    insights: str


async def fetch_blog_content(url: str) -> BlogContent:
    """Fetch *url* and extract its :class:`BlogContent`.

    Raises:
        ContentExtractionError: for a rejected URL or any fetch failure.
    """
    try:
        html = await fetch_url(url)
    except (ValueError, FetchError) as exc:
        logger.error("Scraping error for %s: %s", url, exc)
        raise ContentExtractionError(f"Failed to extract blog content: {exc}") from exc
    return extract_blog_content(html)


async def run_analysis(
    url: str,
    *,
    scorer: Scorer,
    storage: AnalysisStorage,
    settings: Settings,
) -> AnalysisResult:
    """Analyse *url* end to end and persist the result.

    Nothing is stored unless both extraction and scoring succeed.
    """
    content = await fetch_blog_content(url)
    logger.info(
        "Extracted blog content",
        extra={"url": url, "word_count": content.word_count, "headings": len(content.headings)},
    )

    scored = await scorer.score(content)

    record = storage.create(
        NewAnalysis(
            url=url,
            title=content.title,
            meta_description=content.meta_description or None,
            content=content.content[: settings.stored_content_max_chars] or None,
            overall_score=scored.overall_score,
            metrics=scored.metrics,
            recommendations=scored.recommendations,
        )
    )
    logger.info("Stored analysis %d for %s (score %d)", record.id, url, record.overall_score)
    return AnalysisResult(record=record, insights=scored.insights)
