"""Shared fixtures: in-memory store, faked outbound HTTP and app clients."""
import json
from typing import Callable, List

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool

from summarizer.core.config import Settings
from summarizer.db.session import init_db, make_session_factory
from summarizer.main import create_app
from summarizer.models.summary import PromptTemplate
from summarizer.services.ai_provider import OpenAILLM
from summarizer.services.fetcher import PageFetcher

SAMPLE_HTML = "<html><body><script>x</script>Hello <b>World</b></body></html>"


def chat_completion(content) -> dict:
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-3.5-turbo",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite://",
        openai_api_key="sk-test",
        openai_chat_model="gpt-3.5-turbo",
        openai_base_url="https://openai.test/v1",
        scraper_user_agent="Mozilla/5.0 (compatible; UrlSummarizerBot/1.0)",
        log_level="INFO",
        cors_origins="*",
        auto_create_tables=False,
    )


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    init_db(engine, seed=False)
    yield engine
    engine.dispose()


@pytest.fixture
def store_goes_down_at_analysis_write(engine):
    """Fail the url_summery INSERT and every statement after it."""
    down = []

    def fail(conn, cursor, statement, parameters, context, executemany):
        if "url_summery" in statement:
            down.append(statement)
        if down:
            raise OperationalError(statement, parameters, Exception("server closed the connection"))

    event.listen(engine, "before_cursor_execute", fail)
    yield down
    event.remove(engine, "before_cursor_execute", fail)


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def prompt(db) -> PromptTemplate:
    p = PromptTemplate(
        name="General Summary",
        text="Please provide a concise summary of this webpage in 2-3 sentences.",
        description="General purpose summary for any webpage",
    )
    db.add(p)
    db.commit()
    db.refresh(p)
    return p


@pytest.fixture
def site_requests() -> List[httpx.Request]:
    return []


@pytest.fixture
def fetcher_for(settings, site_requests) -> Callable[..., PageFetcher]:
    """Build a PageFetcher whose every GET is answered with `body`/`status`."""

    def _make(body: str = SAMPLE_HTML, status: int = 200, handler=None) -> PageFetcher:
        def default_handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status, text=body, headers={"content-type": "text/html"})

        def recording(request: httpx.Request) -> httpx.Response:
            site_requests.append(request)
            return (handler or default_handler)(request)

        client = httpx.Client(transport=httpx.MockTransport(recording), follow_redirects=True)
        return PageFetcher(settings.scraper_user_agent, client=client)

    return _make


@pytest.fixture
def openai_requests() -> List[dict]:
    return []


@pytest.fixture
def llm_for(settings, openai_requests) -> Callable[..., OpenAILLM]:
    """Build an OpenAILLM talking to a fake chat completions endpoint."""

    def _make(content="A short page.", status: int = 200, api_key=None, handler=None) -> OpenAILLM:
        def default_handler(request: httpx.Request) -> httpx.Response:
            if status != 200:
                return httpx.Response(status, json={"error": {"message": "upstream exploded"}})
            return httpx.Response(200, json=chat_completion(content))

        def recording(request: httpx.Request) -> httpx.Response:
            openai_requests.append(json.loads(request.content))
            return (handler or default_handler)(request)

        return OpenAILLM(
            api_key=settings.openai_api_key if api_key is None else api_key,
            model=settings.openai_chat_model,
            base_url=settings.openai_base_url,
            http_client=httpx.Client(transport=httpx.MockTransport(recording)),
        )

    return _make


@pytest.fixture
def client_for(settings, session_factory, fetcher_for, llm_for) -> Callable[..., TestClient]:
    def _make(fetcher=None, llm=None) -> TestClient:
        app = create_app(
            settings=settings,
            session_factory=session_factory,
            fetcher=fetcher or fetcher_for(),
            llm=llm or llm_for(),
        )
        return TestClient(app)

    return _make
