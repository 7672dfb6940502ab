from pydantic_settings import BaseSettings
from functools import lru_cache
import logging

import httpx
from openai import AsyncOpenAI

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    # API Keys
    openai_api_key: str = ""

    # Model
    openai_model: str = "gpt-4.1-mini-2025-04-14"
    openai_temperature: float = 0.7
    openai_max_tokens: int = 1500
    openai_timeout: float = 60.0

    # App
    frontend_url: str = "http://localhost:3000"
    debug: bool = False
    log_level: str = "INFO"
    rate_limit: str = "10/minute"
    allowed_hosts: list[str] = []

    # Browser sessions (in-memory only)
    session_cookie: str = "bb_session"
    max_sessions: int = 1000

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_openai_client(settings: Settings) -> AsyncOpenAI:
    """Build an OpenAI client for a single generation call."""
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY not configured. Generation calls will fail.")
    return AsyncOpenAI(
        api_key=settings.openai_api_key or None,
        timeout=httpx.Timeout(settings.openai_timeout, connect=10.0),
        max_retries=0,
    )
