from sqlalchemy import (
    BigInteger, Column, DateTime, ForeignKey, Integer, String, Text, func
)
from sqlalchemy.orm import relationship
from summarizer.db.base import Base

# BIGSERIAL on Postgres; SQLite only autoincrements a plain INTEGER primary key
Id = BigInteger().with_variant(Integer, "sqlite")


class UrlRecord(Base):
    __tablename__ = "urls"

    id = Column(Id, primary_key=True, autoincrement=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    url = Column(Text, nullable=False)
    caption = Column(Text, nullable=True)

    analyses = relationship("AnalysisResult", back_populates="url_record", cascade="all,delete-orphan", passive_deletes=True)


class PromptTemplate(Base):
    __tablename__ = "prompts"

    id = Column(Id, primary_key=True, autoincrement=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    name = Column("prompt_name", String, nullable=False)
    text = Column("prompt", Text, nullable=False)
    description = Column(Text, nullable=True)

    analyses = relationship("AnalysisResult", back_populates="prompt", cascade="all,delete-orphan", passive_deletes=True)


class AnalysisResult(Base):
    # table name kept as the store already has it
    __tablename__ = "url_summery"

    id = Column(Id, primary_key=True, autoincrement=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    url_id = Column(Id, ForeignKey("urls.id", ondelete="CASCADE"), nullable=True, index=True)
    prompt_id = Column(Id, ForeignKey("prompts.id", ondelete="CASCADE"), nullable=True, index=True)
    scraped_text = Column("scraped_data", Text, nullable=True)
    model_output = Column("ai_response", Text, nullable=True)

    url_record = relationship("UrlRecord", back_populates="analyses")
    prompt = relationship("PromptTemplate", back_populates="analyses")
