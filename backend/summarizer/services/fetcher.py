import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from summarizer.core.result import Err, ErrorKind, Ok, Result

logger = logging.getLogger(__name__)

SCRAPE_FAILED = "Failed to scrape URL content"


@dataclass(frozen=True)
class FetchedPage:
    url: str
    status_code: int
    text: str


def validate_absolute_url(url: str) -> Optional[str]:
    """Returns an error message if `url` is not an absolute http(s) URI, else None."""
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as e:
        return f"Invalid URL: {e}"
    if parsed.scheme not in ("http", "https") or not parsed.host:
        return f"Invalid URL: {url!r} is not an absolute http(s) URL"
    return None


class PageFetcher:
    def __init__(self, user_agent: str, client: Optional[httpx.Client] = None):
        self.user_agent = user_agent
        self.client = client or httpx.Client(follow_redirects=True)

    def fetch(self, url: str) -> Result[FetchedPage]:
        problem = validate_absolute_url(url)
        if problem:
            return Err(ErrorKind.FETCH, SCRAPE_FAILED, problem)

        try:
            r = self.client.get(url, headers={"User-Agent": self.user_agent})
        except httpx.HTTPError as e:
            logger.warning("Scraping %s failed: %s", url, e)
            return Err(ErrorKind.FETCH, SCRAPE_FAILED, str(e) or e.__class__.__name__)

        if not r.is_success:
            logger.warning("Scraping %s returned HTTP %s", url, r.status_code)
            return Err(ErrorKind.FETCH, SCRAPE_FAILED, f"HTTP {r.status_code}: {r.reason_phrase}")

        return Ok(FetchedPage(url=url, status_code=r.status_code, text=r.text))

    def close(self) -> None:
        self.client.close()
