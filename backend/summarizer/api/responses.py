"""Renders pipeline outcomes as JSON responses."""
from typing import Optional, Type

from fastapi.responses import JSONResponse
from pydantic import BaseModel

from summarizer.api.schemas import ErrorResponse, PartialFailureResponse
from summarizer.core.result import ErrorKind
from summarizer.services.pipeline import PipelineOutcome


def outcome_response(outcome: PipelineOutcome, success_model: Type[BaseModel]) -> JSONResponse:
    if outcome.ok:
        content = success_model(**outcome.body).model_dump(mode="json")
    else:
        # optional keys are left out of error bodies, success bodies keep their nulls
        model = PartialFailureResponse if "url_id" in outcome.body else ErrorResponse
        content = model(**outcome.body).model_dump(mode="json", exclude_none=True)
    return JSONResponse(status_code=outcome.status_code, content=content)


def validation_error(message: str, details: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(error=message, details=details)
    return JSONResponse(
        status_code=ErrorKind.VALIDATION.status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )
