"""Document source extractors: GitHub repositories and websites."""

from chatbot_rag.boundary.sources.github_extractor import GitHubDocsExtractor
from chatbot_rag.boundary.sources.source_schemas import SourceDocument, content_type_for_extension
from chatbot_rag.boundary.sources.website_crawler import WebsiteCrawler

__all__ = [
    "GitHubDocsExtractor",
    "SourceDocument",
    "WebsiteCrawler",
    "content_type_for_extension",
]
