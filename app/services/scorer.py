"""SEO scoring via an external LLM.

The analysis flow only depends on the :class:`Scorer` capability; the OpenAI
implementation below is the production one and tests inject doubles.
"""

import json
import logging
import os
from functools import lru_cache
from typing import Optional, Protocol

from openai import AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from app.config import Settings, get_settings
from app.models.analysis import ScoredResult
from app.models.blog_content import BlogContent

logger = logging.getLogger(__name__)

DEFAULT_SEO_SYSTEM_PROMPT = (
    "You are an expert SEO analyst. Provide detailed, actionable SEO analysis "
    "in the exact JSON format requested."
)

_RESPONSE_SHAPE = """{
  "overallScore": number (0-100),
  "metrics": {
    "titleTag": {"score": number (0-100), "description": "string", "status": "excellent" | "good" | "needs-work"},
    "metaDescription": {"score": number (0-100), "description": "string", "status": "excellent" | "good" | "needs-work"},
    "headingStructure": {"score": number (0-100), "description": "string", "status": "excellent" | "good" | "needs-work"},
    "keywordDensity": {"score": number (0-100), "description": "string", "status": "excellent" | "good" | "needs-work"},
    "contentLength": {"score": number (0-100), "description": "string", "status": "excellent" | "good" | "needs-work"},
    "readabilityScore": number (0-100),
    "wordCount": number,
    "sentences": number,
    "topKeywords": [{"keyword": "string", "density": number}]
  },
  "recommendations": [
    {"title": "string", "description": "string", "priority": "high" | "medium" | "low", "category": "string"}
  ],
  "insights": "string - overall AI insight about the content"
}"""

_FOCUS_AREAS = (
    "Title tag optimization (length, keywords, readability)",
    "Meta description quality and length",
    "Heading structure (H1, H2, H3 hierarchy)",
    "Keyword density and distribution",
    "Content length and depth",
    "Readability and structure",
    "Image optimization (alt text)",
    "Internal linking opportunities",
)


class ScoringError(RuntimeError):
    """The scoring service failed or returned an unusable reply."""


class Scorer(Protocol):
    async def score(self, content: BlogContent) -> ScoredResult:
        ...


def _system_prompt() -> str:
    return os.getenv("OPENAI_SEO_SYSTEM_PROMPT", DEFAULT_SEO_SYSTEM_PROMPT)


def build_prompt(content: BlogContent, max_chars: int) -> str:
    """Render the user prompt for *content*, truncating the body to *max_chars*."""
    images = [image.model_dump() for image in content.images]
    focus = "\n".join(f"{index}. {area}" for index, area in enumerate(_FOCUS_AREAS, start=1))
    return (
        "You are an expert SEO analyst. Analyze the following blog content and "
        "provide a comprehensive SEO analysis in JSON format.\n\n"
        "Blog Content:\n"
        f"- Title: {content.title}\n"
        f"- Meta Description: {content.meta_description}\n"
        f"- Word Count: {content.word_count}\n"
        f"- Content: {content.content[:max_chars]}...\n"
        f"- Headings: {json.dumps(content.headings, ensure_ascii=False)}\n"
        f"- Images: {json.dumps(images, ensure_ascii=False)}\n\n"
        f"Please provide analysis in this exact JSON format:\n{_RESPONSE_SHAPE}\n\n"
        f"Focus on:\n{focus}\n"
    )


class OpenAIScorer:
    """Scores content with a chat-completions model in JSON mode."""

    def __init__(self, settings: Settings, client: Optional[AsyncOpenAI] = None):
        self._settings = settings
        if client is None:
            if settings.uses_placeholder_key:
                logger.warning(
                    "OPENAI_API_KEY is not configured; scoring calls will fail until it is set"
                )
            client = AsyncOpenAI(api_key=settings.openai_api_key)
        self._client = client

    async def score(self, content: BlogContent) -> ScoredResult:
        prompt = build_prompt(content, self._settings.scorer_content_max_chars)
        try:
            response = await self._client.chat.completions.create(
                model=self._settings.openai_model,
                messages=[
                    {"role": "system", "content": _system_prompt()},
                    {"role": "user", "content": prompt},
                ],
                response_format={"type": "json_object"},
                temperature=self._settings.openai_temperature,
            )
        except OpenAIError as exc:
            logger.error("OpenAI API error while scoring %r: %s", content.title, exc)
            raise ScoringError(f"Failed to analyze content with AI: {exc}") from exc

        raw = response.choices[0].message.content if response.choices else None
        try:
            payload = json.loads(raw or "{}")
            if not isinstance(payload, dict):
                raise ValueError("expected a JSON object")
            return ScoredResult.model_validate(payload)
        except (ValueError, ValidationError) as exc:
            logger.error("Unusable scoring reply for %r: %s", content.title, exc)
            raise ScoringError(f"Failed to analyze content with AI: {exc}") from exc


@lru_cache
def get_scorer() -> Scorer:
    return OpenAIScorer(get_settings())
