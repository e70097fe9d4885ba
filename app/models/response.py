from typing import Literal

from pydantic import ConfigDict

from app.models.analysis import AnalysisRecord, CamelModel


class AnalysisWithInsights(AnalysisRecord):
    model_config = ConfigDict(frozen=True)

    insights: str = ""


class AnalyzeResponse(CamelModel):
    success: Literal[True] = True
    analysis: AnalysisWithInsights


class AnalyzeErrorResponse(CamelModel):
    success: Literal[False] = False
    error: str


class ErrorResponse(CamelModel):
    error: str
