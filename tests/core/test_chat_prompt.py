"""
Test suite for chat prompt construction and greeting handling.

System role: Verification of prompt templates
"""

import pytest

from chatbot_rag.core.chat_prompt import (
    build_answer_prompt,
    build_greeting_prompt,
    is_greeting,
    truncate_sentences,
)


class TestIsGreeting:
    """Greeting classification."""

    @pytest.mark.parametrize(
        "message",
        ["hi", "Hello", "  HEY  ", "greetings", "Good Morning", "good evening"],
    )
    def test_bare_greetings_should_match(self, message):
        assert is_greeting(message)

    @pytest.mark.parametrize(
        "message",
        ["hello there", "hi, what is X?", "hey!", "morning", "What is a greeting?"],
    )
    def test_other_messages_should_not_match(self, message):
        assert not is_greeting(message)


class TestTruncateSentences:
    """Greeting reply truncation."""

    def test_long_reply_should_keep_three_sentences(self):
        text = "One. Two. Three. Four. Five."
        assert truncate_sentences(text) == "One. Two. Three...."

    def test_short_reply_should_be_unchanged(self):
        text = "Hello! I am the Acme assistant. How can I help?"
        assert truncate_sentences(text) == text


class TestBuildAnswerPrompt:
    """Grounded answer prompt."""

    def test_prompt_should_embed_name_context_and_question(self):
        prompt = build_answer_prompt("Acme Docs", "X is a protocol for Y", "What is X?")

        assert "Acme Docs" in prompt.system
        assert "markdown" in prompt.system
        assert "X is a protocol for Y" in prompt.user
        assert "What is X?" in prompt.user
        assert "Keep explanations clear and concise" in prompt.user
        assert prompt.context == "X is a protocol for Y"

    def test_empty_context_should_still_render(self):
        prompt = build_answer_prompt("Acme Docs", "", "What is X?")
        assert "Context:" in prompt.user
        assert prompt.context == ""


class TestBuildGreetingPrompt:
    """Ungrounded greeting prompt."""

    def test_greeting_prompt_should_carry_no_context(self):
        prompt = build_greeting_prompt("Acme Docs", " hello ")

        assert prompt.context == ""
        assert "Context:" not in prompt.user
        assert '"hello"' in prompt.user
        assert "Acme Docs" in prompt.user
