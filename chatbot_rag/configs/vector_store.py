"""
Vector store configuration settings.

Selects the vector search engine and pins the embedding dimension.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from chatbot_rag.configs.base import EnvSettings


class VectorStoreSettings(EnvSettings):
    """Vector store configuration (local NumPy ranking for dev, pgvector for prod)."""

    model_config = SettingsConfigDict(env_prefix="VECTOR_STORE_")

    store_type: str = Field(
        default="local",
        description="Vector store type: 'local' for SQLite/dev, 'pgvector' for PostgreSQL",
    )
    embedding_dimension: int = Field(
        default=768,
        description="Embedding vector dimension enforced on write and query",
    )
    default_top_k: int = Field(default=3, description="Chunks retrieved per chat message")
