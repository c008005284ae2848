"""
Aggregated application settings.

Settings holds the service-wide values plus one nested group per concern.
Each group is built when Settings is instantiated, so environment changes
made before the first get_settings() call are picked up.

Dependencies: pydantic, chatbot_rag.configs
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from chatbot_rag.configs.base import ServiceSettings
from chatbot_rag.configs.database import DatabaseSettings
from chatbot_rag.configs.ingestion import IngestionSettings
from chatbot_rag.configs.providers import ProviderSettings
from chatbot_rag.configs.vector_store import VectorStoreSettings


class Settings(ServiceSettings):
    """Service settings with database, provider, vector store and ingestion groups."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    providers: ProviderSettings = Field(default_factory=ProviderSettings)
    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Return the process-wide Settings instance.

    Cached after the first call; tests call get_settings.cache_clear()
    after changing the environment.
    """
    return Settings()
