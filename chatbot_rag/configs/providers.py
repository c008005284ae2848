"""
Model provider configuration settings.

API keys, model ids, and endpoints for the embedding and generation
providers. Presence of a key decides whether a provider takes part in
the fallback chain; missing keys are reported at call time.

Dependencies: pydantic, pydantic_settings
System role: Provider credentials and tuning for the RAG pipeline
"""

from pydantic import Field

from chatbot_rag.configs.base import EnvSettings


class ProviderSettings(EnvSettings):
    """OpenAI (primary) and Google Generative AI (secondary) settings."""

    openai_api_key: str | None = Field(default=None, description="OpenAI API key")
    openai_base_url: str = Field(
        default="https://api.openai.com/v1",
        description="OpenAI-compatible REST base URL",
    )
    openai_embedding_model: str = Field(
        default="text-embedding-3-small",
        description="OpenAI embedding model (called with dimensions=768)",
    )
    openai_chat_model: str = Field(default="gpt-4o-mini", description="OpenAI chat model")

    google_generative_ai_api_key: str | None = Field(
        default=None,
        description="Google Generative Language API key",
    )
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Google Generative Language REST base URL",
    )
    gemini_embedding_model: str = Field(
        default="text-embedding-004",
        description="Gemini embedding model",
    )
    gemini_chat_model: str = Field(default="gemini-2.0-flash", description="Gemini chat model")

    request_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout applied to every provider HTTP call",
    )
    temperature: float = Field(default=0.7, description="Generation temperature")
    max_output_tokens: int = Field(default=1000, description="Maximum generated tokens")
