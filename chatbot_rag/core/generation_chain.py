"""
Generation provider chain.

Runs a rendered prompt through configured generation providers in
priority order; the first success wins.

Dependencies: chatbot_rag.boundary.providers, chatbot_rag.core.chat_prompt
System role: Text generation for the chat orchestrator
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from chatbot_rag.boundary.providers.generation_providers import GenerationProvider
from chatbot_rag.core.chat_prompt import RenderedPrompt
from chatbot_rag.core.exceptions import (
    GenerationError,
    ProviderConfigurationError,
    ProviderError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    """Generated text and the provider that produced it."""

    text: str
    provider: str


class GenerationChain:
    """Prioritized generation provider chain."""

    def __init__(self, providers: Sequence[GenerationProvider]) -> None:
        self.providers = list(providers)

    async def generate(self, prompt: RenderedPrompt) -> GenerationResult:
        """
        Generate a reply for the prompt.

        Args:
            prompt: System/user prompt pair

        Returns:
            GenerationResult: Text from the first provider that succeeded

        Raises:
            ProviderConfigurationError: No provider has an API key
            GenerationError: Every configured provider failed
        """
        configured = [provider for provider in self.providers if provider.is_configured]
        if not configured:
            raise ProviderConfigurationError("generation")

        failures: list[ProviderError] = []
        for provider in configured:
            try:
                text = await provider.generate(prompt.system, prompt.user)
            except ProviderError as e:
                logger.warning(
                    f"{__name__}:generate - {provider.name} failed ({e.kind.value}): {e.message}",
                    extra={"provider": provider.name, "kind": e.kind.value},
                )
                failures.append(e)
                continue

            logger.info(f"{__name__}:generate - Generated {len(text)} chars via {provider.name}")
            return GenerationResult(text=text, provider=provider.name)

        raise GenerationError(failures)
