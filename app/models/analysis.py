"""Scoring results and the stored analysis record."""

import logging
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

MetricStatus = Literal["excellent", "good", "needs-work"]
Priority = Literal["high", "medium", "low"]

_STATUSES = {"excellent", "good", "needs-work"}
_PRIORITIES = {"high", "medium", "low"}


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: object) -> object:
        # The LLM answers `null` for anything it could not score; fall back to defaults.
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class MetricScore(CamelModel):
    score: float = Field(default=0, ge=0, le=100)
    description: str = ""
    status: MetricStatus = "needs-work"

    @field_validator("status", mode="before")
    @classmethod
    def normalise_status(cls, value: object) -> str:
        """Coerce unexpected statuses from the model into ``needs-work``."""
        normalised = str(value or "").strip().lower().replace("_", "-").replace(" ", "-")
        if normalised in _STATUSES:
            return normalised
        logger.debug("Unexpected metric status %r from LLM; coercing to needs-work", value)
        return "needs-work"


class KeywordDensity(CamelModel):
    keyword: str
    density: float = 0


class SeoMetrics(CamelModel):
    title_tag: MetricScore = Field(default_factory=MetricScore)
    meta_description: MetricScore = Field(default_factory=MetricScore)
    heading_structure: MetricScore = Field(default_factory=MetricScore)
    keyword_density: MetricScore = Field(default_factory=MetricScore)
    content_length: MetricScore = Field(default_factory=MetricScore)
    readability_score: float = Field(default=0, ge=0, le=100)
    word_count: int = 0
    sentences: int = 0
    top_keywords: List[KeywordDensity] = []


class Recommendation(CamelModel):
    title: str
    description: str = ""
    priority: Priority = "medium"
    category: str = ""

    @field_validator("priority", mode="before")
    @classmethod
    def normalise_priority(cls, value: object) -> str:
        normalised = str(value or "").strip().lower()
        if normalised in _PRIORITIES:
            return normalised
        logger.debug("Unexpected recommendation priority %r from LLM; using medium", value)
        return "medium"


class ScoredResult(CamelModel):
    """Output of the external SEO scorer."""

    overall_score: int = Field(default=0, ge=0, le=100)
    metrics: SeoMetrics = Field(default_factory=SeoMetrics)
    recommendations: List[Recommendation] = []
    insights: str = ""

    @field_validator("overall_score", mode="before")
    @classmethod
    def round_score(cls, value: object) -> object:
        if isinstance(value, float):
            return round(value)
        return value


class NewAnalysis(CamelModel):
    url: str
    title: Optional[str] = None
    meta_description: Optional[str] = None
    content: Optional[str] = None
    overall_score: int
    metrics: SeoMetrics
    recommendations: List[Recommendation]


class AnalysisRecord(NewAnalysis):
    """A stored analysis.  Created once, never updated."""

    model_config = ConfigDict(frozen=True)

    id: int
    created_at: datetime
