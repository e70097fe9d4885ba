import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Query, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import Settings, get_settings
from app.models.analysis import AnalysisRecord
from app.models.request import AnalyzeRequest
from app.models.response import (
    AnalysisWithInsights,
    AnalyzeErrorResponse,
    AnalyzeResponse,
    ErrorResponse,
)
from app.services.analyzer import ContentExtractionError, run_analysis
from app.services.scorer import Scorer, ScoringError, get_scorer
from app.services.storage import AnalysisStorage, get_storage

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter(prefix="/api", tags=["Analysis"])

NOT_FOUND = "Analysis not found"


def _analyze_rate_limit() -> str:
    return get_settings().analyze_rate_limit


def _analyze_error(message: str) -> JSONResponse:
    body = AnalyzeErrorResponse(error=message)
    return JSONResponse(status_code=400, content=body.model_dump(by_alias=True))


def _not_found() -> JSONResponse:
    return JSONResponse(status_code=404, content=ErrorResponse(error=NOT_FOUND).model_dump())


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    responses={400: {"model": AnalyzeErrorResponse}},
    summary="Analyse the SEO of a blog post",
)
@limiter.limit(_analyze_rate_limit)
async def analyze(
    request: Request,
    payload: Any = Body(default=None),
    scorer: Scorer = Depends(get_scorer),
    storage: AnalysisStorage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    """Fetch *url*, extract its content, score it and store the result.

    Every failure (bad body, rejected URL, fetch or scoring error) is
    reported as ``400 {"success": false, "error": ...}``.
    """
    try:
        body = AnalyzeRequest.model_validate(payload)
    except ValidationError as exc:
        logger.warning("Rejected analyze request: %s", exc.errors(include_url=False))
        return _analyze_error("Please provide a valid URL")

    url = body.url
    logger.info("Analyze request received", extra={"url": url})

    try:
        result = await run_analysis(url, scorer=scorer, storage=storage, settings=settings)
    except (ContentExtractionError, ScoringError) as exc:
        logger.error("Analysis error for %s: %s", url, exc)
        return _analyze_error(str(exc))

    analysis = AnalysisWithInsights(**result.record.model_dump(), insights=result.insights)
    return AnalyzeResponse(analysis=analysis)


@router.get(
    "/analysis/{analysis_id}",
    response_model=AnalysisRecord,
    responses={404: {"model": ErrorResponse}},
    summary="Fetch a stored analysis by id",
)
async def get_analysis(analysis_id: str, storage: AnalysisStorage = Depends(get_storage)):
    # Plain ASCII digits only; int() alone would accept "1_0" or " 7".
    record = None
    if analysis_id.isascii() and analysis_id.isdigit():
        record = storage.get(int(analysis_id))

    if record is None:
        logger.info("Analysis %s not found", analysis_id)
        return _not_found()
    return record


@router.get(
    "/analyses",
    response_model=List[AnalysisRecord],
    responses={400: {"model": ErrorResponse}},
    summary="List stored analyses for a URL",
)
async def list_analyses(
    url: Optional[str] = Query(default=None, description="Exact URL the analyses were run for."),
    storage: AnalysisStorage = Depends(get_storage),
):
    if not url:
        logger.warning("List analyses request without a url parameter")
        return JSONResponse(
            status_code=400, content=ErrorResponse(error="URL parameter is required").model_dump()
        )
    return storage.list_by_url(url)
