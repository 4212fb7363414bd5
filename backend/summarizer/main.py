import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from dotenv import load_dotenv
from sqlalchemy.orm import sessionmaker

from summarizer.api.browse import router as browse_router
from summarizer.api.errors import unexpected_exception_handler, validation_exception_handler
from summarizer.api.summarize import router as summarize_router
from summarizer.core.config import Settings
from summarizer.db.session import init_db, make_engine, make_session_factory
from summarizer.services.ai_provider import LLM, get_llm
from summarizer.services.fetcher import PageFetcher

logger = logging.getLogger(__name__)


class EmptyPreflightCORSMiddleware(CORSMiddleware):
    """CORSMiddleware whose successful preflight answers carry no body."""

    def preflight_response(self, request_headers):
        response = super().preflight_response(request_headers=request_headers)
        if response.status_code != 200:
            return response
        headers = {
            k: v for k, v in response.headers.items() if k.lower() not in ("content-length", "content-type")
        }
        return Response(status_code=200, headers=headers)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    for name in ("httpx", "httpcore", "openai"):
        logging.getLogger(name).setLevel(logging.WARNING)


def create_app(
    settings: Optional[Settings] = None,
    session_factory: Optional[sessionmaker] = None,
    fetcher: Optional[PageFetcher] = None,
    llm: Optional[LLM] = None,
) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.log_level)

    engine = None
    if session_factory is None:
        engine = make_engine(settings.database_url)
        session_factory = make_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if engine is not None and settings.auto_create_tables:
            init_db(engine)
        yield
        app.state.fetcher.close()
        if engine is not None:
            engine.dispose()

    app = FastAPI(title="URL Summarizer", lifespan=lifespan)
    app.state.settings = settings
    app.state.session_factory = session_factory
    app.state.fetcher = fetcher or PageFetcher(settings.scraper_user_agent)
    app.state.llm = llm or get_llm(settings)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(summarize_router)
    app.include_router(browse_router)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unexpected_exception_handler)
    app.add_middleware(
        EmptyPreflightCORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


load_dotenv()

app = create_app()
