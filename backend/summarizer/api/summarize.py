from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from summarizer.api.responses import outcome_response
from summarizer.api.schemas import (
    ErrorResponse,
    PartialFailureResponse,
    ProcessUrlRequest,
    ProcessUrlResponse,
    SummarizeUrlRequest,
    SummarizeUrlResponse,
)
from summarizer.db.session import get_db
from summarizer.services.pipeline import SummaryPipeline
from summarizer.services.repository import SummaryRepository

router = APIRouter(tags=["summarize"])

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def get_pipeline(request: Request, db: Session = Depends(get_db)) -> SummaryPipeline:
    state = request.app.state
    return SummaryPipeline(
        settings=state.settings,
        repository=SummaryRepository(db),
        fetcher=state.fetcher,
        llm=state.llm,
    )


@router.options("/summerize_url", include_in_schema=False)
@router.options("/process-url", include_in_schema=False)
def preflight():
    return Response(status_code=200, headers=PREFLIGHT_HEADERS)


@router.post(
    "/summerize_url",
    response_model=SummarizeUrlResponse,
    responses={404: {"model": PartialFailureResponse}, 500: {"model": PartialFailureResponse}},
)
def summarize_url(payload: SummarizeUrlRequest, pipeline: SummaryPipeline = Depends(get_pipeline)):
    return outcome_response(pipeline.ingest_and_analyze(payload.url, payload.prompt_id), SummarizeUrlResponse)


@router.post(
    "/process-url",
    response_model=ProcessUrlResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def process_url(payload: ProcessUrlRequest, pipeline: SummaryPipeline = Depends(get_pipeline)):
    return outcome_response(pipeline.analyze_existing(payload.url_id, payload.prompt_id), ProcessUrlResponse)
