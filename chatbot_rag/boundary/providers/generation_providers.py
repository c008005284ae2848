"""
Generation provider implementations.

OpenAI chat completions (system + user messages) and Google Gemini
generateContent (systemInstruction + user content).

Dependencies: httpx, chatbot_rag.boundary.providers.base
System role: Text generation backends behind the generation chain
"""

from abc import ABC, abstractmethod

import httpx

from chatbot_rag.boundary.providers.base import HTTPProvider


class GenerationProvider(ABC):
    """Interface for a single text generation backend."""

    name: str

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """Whether credentials are present."""

    @abstractmethod
    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        """Generate a reply. Raises ProviderError on failure."""


class OpenAIGenerationProvider(HTTPProvider, GenerationProvider):
    """OpenAI /chat/completions client."""

    name = "openai"

    def __init__(
        self,
        api_key: str | None,
        model: str = "gpt-4o-mini",
        temperature: float = 0.7,
        max_tokens: int = 1000,
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(api_key, base_url, timeout, http_client)
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        payload = await self._post_json(
            "chat/completions",
            {
                "model": self.model,
                "messages": [
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                "temperature": self.temperature,
                "max_tokens": self.max_tokens,
            },
        )
        try:
            content = payload["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise self._malformed("response is missing choices[0].message.content") from e
        if not isinstance(content, str) or not content.strip():
            raise self._malformed("response content is empty")
        return content


class GeminiGenerationProvider(HTTPProvider, GenerationProvider):
    """Google Generative Language generateContent client."""

    name = "gemini"

    def __init__(
        self,
        api_key: str | None,
        model: str = "gemini-2.0-flash",
        temperature: float = 0.7,
        max_tokens: int = 1000,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(api_key, base_url, timeout, http_client)
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key or "",
        }

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        payload = await self._post_json(
            f"models/{self.model}:generateContent",
            {
                "systemInstruction": {"parts": [{"text": system_prompt}]},
                "contents": [{"role": "user", "parts": [{"text": user_prompt}]}],
                "generationConfig": {
                    "temperature": self.temperature,
                    "maxOutputTokens": self.max_tokens,
                },
            },
        )
        try:
            parts = payload["candidates"][0]["content"]["parts"]
            text = "".join(part.get("text", "") for part in parts)
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise self._malformed("response is missing candidates[0].content.parts") from e
        if not text.strip():
            raise self._malformed("response content is empty")
        return text
