import os
from dataclasses import dataclass, field


def _env(name: str, default: str = ""):
    return field(default_factory=lambda: os.getenv(name, default))


@dataclass(frozen=True)
class Settings:
    database_url: str = _env("DATABASE_URL", "sqlite:///./summarizer.db")
    openai_api_key: str = _env("OPENAI_API_KEY", "")
    openai_chat_model: str = _env("OPENAI_CHAT_MODEL", "gpt-3.5-turbo")
    openai_base_url: str = _env("OPENAI_BASE_URL", "")
    scraper_user_agent: str = _env("SCRAPER_USER_AGENT", "Mozilla/5.0 (compatible; UrlSummarizerBot/1.0)")
    log_level: str = _env("LOG_LEVEL", "INFO")
    cors_origins: str = _env("CORS_ORIGINS", "*")
    auto_create_tables: bool = field(default_factory=lambda: os.getenv("AUTO_CREATE_TABLES", "1") == "1")

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
