import logging
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from summarizer.db.base import Base
from summarizer.models.summary import PromptTemplate

logger = logging.getLogger(__name__)

DEFAULT_PROMPTS = [
    (
        "General Summary",
        "Please provide a concise summary of this webpage in 2-3 sentences, focusing on the main points and key information.",
        "General purpose summary for any webpage",
    ),
    (
        "Key Insights",
        "Analyze this webpage and extract the top 3-5 key insights or takeaways. Present them as bullet points.",
        "Focuses on extracting actionable insights",
    ),
    (
        "Technical Analysis",
        "Provide a technical analysis of this webpage, focusing on any technical concepts, methodologies, or implementations discussed.",
        "Best for technical content and documentation",
    ),
    (
        "Business Analysis",
        "Analyze this webpage from a business perspective. What are the business implications, opportunities, or strategies mentioned?",
        "Business-focused analysis for commercial content",
    ),
]


def make_engine(database_url: str) -> Engine:
    connect_args = {}
    if database_url.startswith("sqlite"):
        # handlers run in the threadpool
        connect_args["check_same_thread"] = False
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


def init_db(engine: Engine, seed: bool = True) -> None:
    """Create the urls/prompts/url_summery tables and seed default prompts into an empty store."""
    Base.metadata.create_all(engine)
    if not seed:
        return

    with Session(engine) as db:
        if db.scalars(select(PromptTemplate.id).limit(1)).first() is not None:
            return
        for name, text, description in DEFAULT_PROMPTS:
            db.add(PromptTemplate(name=name, text=text, description=description))
        db.commit()
        logger.info("Seeded %d default prompts", len(DEFAULT_PROMPTS))


def get_db(request: Request) -> Generator[Session, None, None]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
