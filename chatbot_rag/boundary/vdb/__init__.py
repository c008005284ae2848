"""Vector storage and cosine similarity search."""

from chatbot_rag.boundary.vdb.local_vector_store import LocalVectorStore
from chatbot_rag.boundary.vdb.pgvector_store import PgVectorStore
from chatbot_rag.boundary.vdb.vector_schemas import ChunkRecord, SimilarChunk, VectorSearchResult
from chatbot_rag.boundary.vdb.vector_store_base import VectorStore
from chatbot_rag.boundary.vdb.vector_store_factory import get_vector_store

__all__ = [
    "ChunkRecord",
    "LocalVectorStore",
    "PgVectorStore",
    "SimilarChunk",
    "VectorSearchResult",
    "VectorStore",
    "get_vector_store",
]
