"""
Sentence-bounded text chunker.

Splits document text into overlapping chunks that never cut a sentence.
Sentences end at `.`, `!` or `?` followed by whitespace. Consecutive
chunks share trailing sentences up to the overlap budget.

Dependencies: re (stdlib)
System role: First stage of document ingestion (text -> chunks)
"""

import re

_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")

DEFAULT_CHUNK_SIZE = 1000
DEFAULT_CHUNK_OVERLAP = 200


def split_sentences(text: str) -> list[str]:
    """
    Split text into sentence units.

    Args:
        text: Raw text

    Returns:
        list[str]: Non-empty sentences in document order
    """
    return [sentence for sentence in _SENTENCE_BOUNDARY.split(text.strip()) if sentence]


def _joined_length(sentences: list[str]) -> int:
    if not sentences:
        return 0
    return sum(len(sentence) for sentence in sentences) + len(sentences) - 1


def _overlap_tail(sentences: list[str], overlap: int) -> list[str]:
    """Trailing sentences whose space-joined length fits within overlap."""
    tail: list[str] = []
    length = 0
    for sentence in reversed(sentences):
        added = len(sentence) + (1 if tail else 0)
        if length + added > overlap:
            break
        tail.insert(0, sentence)
        length += added
    return tail


def chunk_text(
    text: str,
    target_size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_CHUNK_OVERLAP,
) -> list[str]:
    """
    Chunk text into sentence-aligned pieces of at most target_size characters.

    A chunk is closed when the next sentence would push it past target_size.
    The next chunk is seeded with the closed chunk's trailing sentences that
    fit within overlap; seed sentences are dropped from the front until the
    seed plus the incoming sentence fits. A single sentence longer than
    target_size is emitted whole as its own chunk.

    Args:
        text: Document text
        target_size: Maximum chunk length in characters
        overlap: Maximum length of the sentence overlap between chunks

    Returns:
        list[str]: Chunks in document order; empty for blank input
    """
    if not text or not text.strip():
        return []
    if len(text) <= target_size:
        return [text]

    chunks: list[str] = []
    current: list[str] = []

    for sentence in split_sentences(text):
        if current and _joined_length(current + [sentence]) > target_size:
            chunks.append(" ".join(current))
            current = _overlap_tail(current, overlap)
            while current and _joined_length(current + [sentence]) > target_size:
                current.pop(0)
        current.append(sentence)

    if current:
        chunks.append(" ".join(current))

    return chunks
