"""
Ingestion configuration settings.

Chunking parameters and source extractor tuning (crawler depth, GitHub token).

Dependencies: pydantic, pydantic_settings
System role: Document ingestion configuration
"""

from pydantic import AliasChoices, Field
from pydantic_settings import SettingsConfigDict

from chatbot_rag.configs.base import EnvSettings


class IngestionSettings(EnvSettings):
    """Chunker and source extractor configuration."""

    model_config = SettingsConfigDict(env_prefix="INGESTION_")

    chunk_size: int = Field(default=1000, description="Target chunk size in characters")
    chunk_overlap: int = Field(default=200, description="Sentence overlap budget in characters")

    crawl_max_depth: int = Field(default=2, description="BFS depth limit for website crawling")
    crawl_min_content_chars: int = Field(
        default=100,
        description="Pages with less extracted text are skipped",
    )
    crawl_timeout_seconds: float = Field(default=10.0, description="Per-page fetch timeout")
    user_agent: str = Field(
        default="Mozilla/5.0 (compatible; ChatbotRAGCrawler/1.0)",
        description="User-Agent header sent by the crawler",
    )

    github_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_TOKEN", "INGESTION_GITHUB_TOKEN"),
        description="GitHub personal access token for repository ingestion",
    )
    github_api_url: str = Field(default="https://api.github.com", description="GitHub REST base URL")
