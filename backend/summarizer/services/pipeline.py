"""
Ingest-extract-complete-persist pipeline.

Two linear flows share the tail of the chain:

    ingest_and_analyze: insert url -> prompt -> scrape -> complete -> save analysis
    analyze_existing:   read url   -> prompt -> scrape -> complete -> save analysis

Once the url row exists every failure response carries its id. A failed
analysis write is logged and the run still reports success.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from summarizer.core.config import Settings
from summarizer.core.result import Err, Ok, Result
from summarizer.models.summary import PromptTemplate, UrlRecord
from summarizer.services.ai_provider import AI_FAILED, LLM, get_llm
from summarizer.services.extractor import extract_text
from summarizer.services.fetcher import PageFetcher
from summarizer.services.repository import SummaryRepository

logger = logging.getLogger(__name__)

AI_PROCESSING_FAILED = "URL saved but AI processing failed"


def _now_utc():
    return datetime.now(timezone.utc)


def default_caption(now: datetime) -> str:
    return f"URL added at {now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')}"


# Plain copies of the rows a run has read or written. A rollback after a failed
# analysis write expires the ORM instances, and touching them again would query
# a store that may already be gone.
@dataclass(frozen=True)
class SavedUrl:
    id: int
    url: str
    caption: Optional[str]
    created_at: Optional[datetime]

    @classmethod
    def of(cls, record: UrlRecord) -> "SavedUrl":
        return cls(id=record.id, url=record.url, caption=record.caption, created_at=record.created_at)


@dataclass(frozen=True)
class ResolvedPrompt:
    id: int
    name: str
    text: str

    @classmethod
    def of(cls, prompt: PromptTemplate) -> "ResolvedPrompt":
        return cls(id=prompt.id, name=prompt.name, text=prompt.text)


@dataclass(frozen=True)
class PipelineOutcome:
    status_code: int
    body: dict

    @property
    def ok(self) -> bool:
        return self.status_code == 200


def error_outcome(err: Err) -> PipelineOutcome:
    return PipelineOutcome(err.status_code, {"error": err.message, "details": err.details})


def _partial(saved: SavedUrl, err: Err, error: Optional[str] = None) -> PipelineOutcome:
    body = {
        "error": error or err.message,
        "details": err.details,
        "url_id": saved.id,
        "url": saved.url,
        "created_at": saved.created_at,
        "processed": False,
    }
    return PipelineOutcome(err.status_code, body)


class SummaryPipeline:
    def __init__(
        self,
        settings: Settings,
        repository: SummaryRepository,
        fetcher: Optional[PageFetcher] = None,
        llm: Optional[LLM] = None,
    ):
        self.settings = settings
        self.repository = repository
        self.fetcher = fetcher or PageFetcher(settings.scraper_user_agent)
        self.llm = llm or get_llm(settings)

    def scrape(self, url: str) -> Result[str]:
        logger.info("Scraping content from: %s", url)
        fetched = self.fetcher.fetch(url)
        if isinstance(fetched, Err):
            return fetched
        text = extract_text(fetched.value.text)
        logger.info("Scraped text length: %d characters", len(text))
        return Ok(text)

    def _save_analysis(self, url_id: int, prompt_id: int, scraped: str, output: str) -> Optional[int]:
        saved = self.repository.create_analysis(url_id, prompt_id, scraped, output)
        if isinstance(saved, Err):
            logger.error("Failed to save to url_summery: %s", saved.details)
            return None
        summery_id = saved.value.id
        logger.info("Saved to url_summery table with ID: %s", summery_id)
        return summery_id

    def ingest_and_analyze(self, url: str, prompt_id: int) -> PipelineOutcome:
        inserted = self.repository.create_url(url, default_caption(_now_utc()))
        if isinstance(inserted, Err):
            return error_outcome(inserted)
        saved = SavedUrl.of(inserted.value)
        logger.info("URL inserted with ID: %s, now processing...", saved.id)

        found = self.repository.get_prompt(prompt_id)
        if isinstance(found, Err):
            return _partial(saved, found)
        prompt = ResolvedPrompt.of(found.value)

        scraped = self.scrape(url)
        if isinstance(scraped, Err):
            return _partial(saved, scraped)
        scraped = scraped.value

        completed = self.llm.complete(prompt.text, url, scraped)
        if isinstance(completed, Err):
            # a missing key is reported under its own message
            error = AI_PROCESSING_FAILED if completed.message == AI_FAILED else None
            return _partial(saved, completed, error=error)
        output = completed.value

        summery_id = self._save_analysis(saved.id, prompt.id, scraped, output)
        return PipelineOutcome(
            200,
            {
                "success": True,
                "url_id": saved.id,
                "url": saved.url,
                "summary": output,
                "prompt_used": prompt.name,
                "created_at": saved.created_at,
                "processed": True,
                "summery_id": summery_id,
            },
        )

    def analyze_existing(self, url_id: int, prompt_id: int) -> PipelineOutcome:
        logger.info("Processing URL ID: %s with Prompt ID: %s", url_id, prompt_id)
        found_url = self.repository.get_url(url_id)
        if isinstance(found_url, Err):
            return error_outcome(found_url)
        saved = SavedUrl.of(found_url.value)

        found_prompt = self.repository.get_prompt(prompt_id)
        if isinstance(found_prompt, Err):
            return error_outcome(found_prompt)
        prompt = ResolvedPrompt.of(found_prompt.value)
        logger.info("Found URL: %s, using prompt: %s", saved.url, prompt.name)

        scraped = self.scrape(saved.url)
        if isinstance(scraped, Err):
            return error_outcome(scraped)
        scraped = scraped.value

        completed = self.llm.complete(prompt.text, saved.url, scraped)
        if isinstance(completed, Err):
            return error_outcome(completed)
        output = completed.value

        summery_id = self._save_analysis(saved.id, prompt.id, scraped, output)
        return PipelineOutcome(
            200,
            {
                "success": True,
                "url_id": saved.id,
                "url": saved.url,
                "original_caption": saved.caption,
                "scraped_text_length": len(scraped),
                "ai_response": output,
                "prompt_used": prompt.text,
                "prompt_name": prompt.name,
                "model": self.llm.model,
                "summery_id": summery_id,
            },
        )
