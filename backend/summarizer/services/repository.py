import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from summarizer.core.result import Err, ErrorKind, Ok, Result
from summarizer.models.summary import AnalysisResult, PromptTemplate, UrlRecord

logger = logging.getLogger(__name__)


class SummaryRepository:
    """Reads and writes urls, prompts and url_summery rows for one request."""

    def __init__(self, db: Session):
        self.db = db

    def create_url(self, url: str, caption: str) -> Result[UrlRecord]:
        record = UrlRecord(url=url, caption=caption)
        try:
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Database insert error: %s", e)
            return Err(ErrorKind.PERSISTENCE, "Failed to save URL to database", str(e))
        return Ok(record)

    def get_url(self, url_id: int) -> Result[UrlRecord]:
        try:
            record = self.db.get(UrlRecord, url_id)
        except SQLAlchemyError as e:
            logger.error("Database fetch error: %s", e)
            return Err(ErrorKind.NOT_FOUND, "Failed to fetch URL from database", str(e))
        if record is None:
            return Err(ErrorKind.NOT_FOUND, "Failed to fetch URL from database", f"No URL found with id {url_id}")
        return Ok(record)

    def get_prompt(self, prompt_id: int) -> Result[PromptTemplate]:
        try:
            prompt = self.db.get(PromptTemplate, prompt_id)
        except SQLAlchemyError as e:
            logger.error("Prompt fetch error: %s", e)
            return Err(ErrorKind.NOT_FOUND, "Failed to fetch prompt from database", str(e))
        if prompt is None:
            return Err(
                ErrorKind.NOT_FOUND, "Failed to fetch prompt from database", f"No prompt found with id {prompt_id}"
            )
        return Ok(prompt)

    def create_analysis(
        self, url_id: int, prompt_id: int, scraped_text: str, model_output: str
    ) -> Result[AnalysisResult]:
        row = AnalysisResult(
            url_id=url_id,
            prompt_id=prompt_id,
            scraped_text=scraped_text,
            model_output=model_output,
        )
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as e:
            self.db.rollback()
            return Err(ErrorKind.PERSISTENCE, "Failed to save to url_summery", str(e))
        return Ok(row)

    def list_urls(self) -> List[UrlRecord]:
        stmt = select(UrlRecord).order_by(UrlRecord.created_at.desc(), UrlRecord.id.desc())
        return list(self.db.scalars(stmt))

    def list_prompts(self) -> List[PromptTemplate]:
        return list(self.db.scalars(select(PromptTemplate).order_by(PromptTemplate.name.asc())))

    def list_analyses(self, url_id: Optional[int] = None) -> List[AnalysisResult]:
        stmt = select(AnalysisResult).options(joinedload(AnalysisResult.prompt))
        if url_id is not None:
            stmt = stmt.where(AnalysisResult.url_id == url_id)
        stmt = stmt.order_by(AnalysisResult.created_at.desc(), AnalysisResult.id.desc())
        return list(self.db.scalars(stmt))
