from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class SummarizeUrlRequest(BaseModel):
    url: StrictStr = Field(min_length=1)
    prompt_id: int = Field(gt=0)


class ProcessUrlRequest(BaseModel):
    url_id: int = Field(gt=0)
    prompt_id: int = Field(gt=0)


class SummarizeUrlResponse(BaseModel):
    success: bool = True
    url_id: int
    url: str
    summary: str
    prompt_used: str
    created_at: Optional[datetime] = None
    processed: bool = True
    summery_id: Optional[int] = None


class ProcessUrlResponse(BaseModel):
    success: bool = True
    url_id: int
    url: str
    original_caption: Optional[str] = None
    scraped_text_length: int
    ai_response: str
    prompt_used: str
    prompt_name: str
    model: str
    summery_id: Optional[int] = None


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None


class PartialFailureResponse(ErrorResponse):
    url_id: int
    url: str
    created_at: Optional[datetime] = None
    processed: bool = False


class UrlOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: Optional[datetime] = None
    url: str
    caption: Optional[str] = None


class PromptOut(BaseModel):
    id: int
    created_at: Optional[datetime] = None
    prompt_name: str
    prompt: str
    description: Optional[str] = None


class SummaryOut(BaseModel):
    id: int
    created_at: Optional[datetime] = None
    url_id: Optional[int] = None
    prompt_id: Optional[int] = None
    scraped_data: Optional[str] = None
    ai_response: Optional[str] = None
    prompt_name: Optional[str] = None
    prompt_description: Optional[str] = None
