"""Application configuration."""
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings from env."""

    # Shared SerpAPI key; per-provider keys below override it
    serpapi_api_key: str = ""
    web_search_api_key: str = ""
    news_search_api_key: str = ""
    image_search_api_key: str = ""

    serpapi_base_url: str = "https://serpapi.com/search"
    search_language: str = "en"

    web_result_limit: int = 10
    news_result_limit: int = 10
    image_result_limit: int = 12

    provider_timeout_seconds: float = 10.0
    join_grace_seconds: float = 2.0  # extra wait on top of the request timeout
    progress_flush_seconds: float = 1.0  # how long the API waits for progress delivery

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"

    def api_key_for(self, provider: str) -> str:
        """Key for "web" | "news" | "image", falling back to the shared key."""
        specific = getattr(self, f"{provider}_search_api_key", "")
        return (specific or self.serpapi_api_key).strip()


@lru_cache
def get_settings() -> Settings:
    return Settings()
