"""
GitHub documentation extractor.

Walks a repository with the GitHub REST contents API and collects
documentation files: matching files at the root plus everything under
well-known documentation directories.

Dependencies: httpx, chatbot_rag.boundary.sources.source_schemas
System role: Repository source for ingestion
"""

import base64
import logging
from typing import Any

import httpx

from chatbot_rag.boundary.sources.source_schemas import SourceDocument, content_type_for_extension
from chatbot_rag.core.exceptions import SourceConfigurationError, SourceExtractionError

logger = logging.getLogger(__name__)

DOC_DIRECTORIES = {"docs", "documentation", "doc", "guide", "guides"}

DOC_EXTENSIONS = {
    "md", "mdx", "txt", "html", "htm", "rst", "adoc", "asciidoc",
    "wiki", "mediawiki", "tex", "latex",
}

DOC_FILENAMES = {
    "readme", "license", "changelog", "contributing", "authors",
    "code_of_conduct", "security",
}


def is_documentation_file(filename: str) -> bool:
    """Whether a file name looks like documentation (PDFs are not extracted)."""
    lowered = filename.lower()
    stem, _, extension = lowered.rpartition(".")
    if not stem:
        return lowered in DOC_FILENAMES
    return extension in DOC_EXTENSIONS or stem in DOC_FILENAMES


def parse_repo(repo: str) -> tuple[str, str] | None:
    """Split "owner/repo" into its parts; None when malformed."""
    parts = repo.strip().strip("/").split("/")
    if len(parts) != 2 or not all(parts):
        return None
    return parts[0], parts[1]


class GitHubDocsExtractor:
    """Collect documentation files from a GitHub repository."""

    def __init__(
        self,
        token: str | None,
        api_url: str = "https://api.github.com",
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._http_client = http_client

    async def extract(self, owner: str, repo: str) -> list[SourceDocument]:
        """
        Extract documentation files from owner/repo.

        Args:
            owner: Repository owner
            repo: Repository name

        Returns:
            list[SourceDocument]: One document per non-empty documentation file

        Raises:
            SourceConfigurationError: GITHUB_TOKEN is not set
            SourceExtractionError: Bad token, unknown repository, or API failure
        """
        if not self.token:
            raise SourceConfigurationError(
                "GitHub integration is not configured. Set GITHUB_TOKEN to enable repository ingestion."
            )

        if self._http_client is not None:
            return await self._walk(self._http_client, owner, repo)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await self._walk(client, owner, repo)

    async def _walk(self, client: httpx.AsyncClient, owner: str, repo: str) -> list[SourceDocument]:
        documents: list[SourceDocument] = []
        for item in await self._list(client, owner, repo, ""):
            if item.get("type") == "dir" and item.get("name", "").lower() in DOC_DIRECTORIES:
                await self._walk_directory(client, owner, repo, item["path"], documents)
            elif item.get("type") == "file" and is_documentation_file(item.get("name", "")):
                await self._collect(client, owner, repo, item, documents)

        logger.info(
            f"{__name__}:extract - Extracted {len(documents)} documentation files from {owner}/{repo}"
        )
        return documents

    async def _walk_directory(
        self,
        client: httpx.AsyncClient,
        owner: str,
        repo: str,
        path: str,
        documents: list[SourceDocument],
    ) -> None:
        try:
            items = await self._list(client, owner, repo, path)
        except SourceExtractionError as e:
            logger.warning(f"{__name__}:_walk_directory - Skipping {path}: {e.message}")
            return

        for item in items:
            if item.get("type") == "dir":
                await self._walk_directory(client, owner, repo, item["path"], documents)
            elif item.get("type") == "file" and is_documentation_file(item.get("name", "")):
                await self._collect(client, owner, repo, item, documents)

    async def _collect(
        self,
        client: httpx.AsyncClient,
        owner: str,
        repo: str,
        item: dict[str, Any],
        documents: list[SourceDocument],
    ) -> None:
        path = item["path"]
        content = await self._file_content(client, owner, repo, path)
        if not content.strip():
            return
        extension = item["name"].rpartition(".")[2] if "." in item["name"] else ""
        documents.append(
            SourceDocument(
                url=f"https://github.com/{owner}/{repo}/blob/main/{path}",
                content=content,
                content_type=content_type_for_extension(extension),
                metadata={
                    "source": "github",
                    "repository": f"{owner}/{repo}",
                    "path": path,
                    "fileType": extension or "unknown",
                },
            )
        )

    async def _get(self, client: httpx.AsyncClient, owner: str, repo: str, path: str) -> Any:
        url = f"{self.api_url}/repos/{owner}/{repo}/contents/{path}".rstrip("/")
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
        }
        try:
            response = await client.get(url, headers=headers)
        except httpx.HTTPError as e:
            raise SourceExtractionError(
                f"GitHub request failed: {type(e).__name__}",
                source=f"{owner}/{repo}/{path}",
            ) from e

        if response.status_code == 401:
            raise SourceExtractionError(
                "Invalid GitHub token. Check the GITHUB_TOKEN environment variable.",
                source=f"{owner}/{repo}",
                status_code=401,
            )
        if response.status_code == 404:
            target = f"{owner}/{repo}/{path}" if path else f"{owner}/{repo}"
            raise SourceExtractionError(
                f"GitHub repository or path not found: {target}",
                source=target,
                status_code=404,
            )
        if not response.is_success:
            raise SourceExtractionError(
                f"GitHub API returned HTTP {response.status_code}",
                source=f"{owner}/{repo}/{path}",
                status_code=response.status_code,
            )
        return response.json()

    async def _list(
        self,
        client: httpx.AsyncClient,
        owner: str,
        repo: str,
        path: str,
    ) -> list[dict[str, Any]]:
        data = await self._get(client, owner, repo, path)
        return data if isinstance(data, list) else []

    async def _file_content(self, client: httpx.AsyncClient, owner: str, repo: str, path: str) -> str:
        data = await self._get(client, owner, repo, path)
        if not isinstance(data, dict) or "content" not in data:
            return ""
        raw = base64.b64decode(data["content"])
        return raw.decode("utf-8", errors="replace")
