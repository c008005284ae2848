"""
Chat prompt templates and message classification.

Defines the grounded answer prompt, the short greeting prompt, greeting
detection, and greeting response truncation.

Dependencies: langchain_core.prompts, chatbot_rag.core.chunker
System role: Prompt construction for the chat orchestrator
"""

import re
from dataclasses import dataclass

from langchain_core.prompts import ChatPromptTemplate

from chatbot_rag.core.chunker import split_sentences

GREETING_PATTERN = re.compile(
    r"^(hi|hello|hey|greetings|good morning|good afternoon|good evening)$"
)

MAX_GREETING_SENTENCES = 3

SYSTEM_PROMPT = """You are a helpful assistant for {chatbot_name}. Always format your responses using markdown with proper headers, code blocks with language specification, and lists where appropriate. Include code examples when discussing technical topics."""

ANSWER_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    ("human", """You are an AI assistant for {chatbot_name}. Answer the user's question based on the provided context.

Context:
{context}

User Question:
{question}

Please provide a helpful and accurate response based on the context provided. Format your response using the following guidelines:
1. Use markdown headers (#, ##, ###) for section headings
2. Use code blocks with language specification for code snippets (e.g. ```python ... ```)
3. Use bullet points or numbered lists for itemized information
4. Use bold or italic text for emphasis where appropriate
5. Include relevant code examples when discussing technical topics
6. Keep explanations clear and concise

Your response should be informative, well-structured, and easy to read."""),
])

GREETING_PROMPT = ChatPromptTemplate.from_messages([
    ("system", "You are a friendly assistant for {chatbot_name}. Reply to greetings briefly."),
    ("human", """The user greeted you with: "{message}"

Reply with a short, friendly greeting of at most two sentences that introduces you as the {chatbot_name} assistant and asks how you can help."""),
])


@dataclass(frozen=True)
class RenderedPrompt:
    """System/user prompt pair handed to a generation provider."""

    system: str
    user: str
    context: str = ""


def is_greeting(message: str) -> bool:
    """Whether the trimmed, lowercased message is a bare greeting."""
    return GREETING_PATTERN.match(message.strip().lower()) is not None


def truncate_sentences(text: str, max_sentences: int = MAX_GREETING_SENTENCES) -> str:
    """
    Keep the first max_sentences sentences of text, marking the cut with "...".

    Text with max_sentences sentences or fewer is returned unchanged.
    """
    sentences = split_sentences(text)
    if len(sentences) <= max_sentences:
        return text
    return " ".join(sentences[:max_sentences]) + "..."


def _render(template: ChatPromptTemplate, context: str = "", **values: str) -> RenderedPrompt:
    if "context" in template.input_variables:
        values["context"] = context
    system_message, human_message = template.format_messages(**values)
    return RenderedPrompt(
        system=system_message.content,
        user=human_message.content,
        context=context,
    )


def build_answer_prompt(chatbot_name: str, context: str, question: str) -> RenderedPrompt:
    """
    Build the grounded answer prompt.

    Args:
        chatbot_name: Chatbot display name used as assistant identity
        context: Retrieved chunk contents joined by blank lines (may be empty)
        question: Literal user message

    Returns:
        RenderedPrompt: System and user prompt text plus the context used
    """
    return _render(
        ANSWER_PROMPT,
        context=context,
        chatbot_name=chatbot_name,
        question=question,
    )


def build_greeting_prompt(chatbot_name: str, message: str) -> RenderedPrompt:
    """Build the ungrounded short-reply prompt for greetings."""
    return _render(GREETING_PROMPT, chatbot_name=chatbot_name, message=message.strip())
