"""
Depth-limited website crawler.

Breadth-first crawl from a base URL over same-host links. Each page is
fetched once; its text (minus script, style, nav, footer, header) becomes
a document when long enough, and its links seed the next depth.

Dependencies: httpx, bs4, chatbot_rag.boundary.sources.source_schemas
System role: Website source for ingestion
"""

import logging
from urllib.parse import urljoin, urlparse

import httpx
from bs4 import BeautifulSoup

from chatbot_rag.boundary.sources.source_schemas import SourceDocument

logger = logging.getLogger(__name__)

STRIPPED_TAGS = ["script", "style", "nav", "footer", "header"]


def extract_page(html: str) -> tuple[str, str, str]:
    """
    Extract (title, description, text) from an HTML page.

    Whitespace runs in the body text are collapsed to single spaces.
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(STRIPPED_TAGS):
        tag.decompose()

    title = soup.title.get_text(strip=True) if soup.title else ""
    description_tag = soup.find("meta", attrs={"name": "description"})
    description = description_tag.get("content", "") if description_tag else ""
    body = soup.body if soup.body else soup
    text = " ".join(body.get_text(separator=" ").split())
    return title, description, text


def extract_links(html: str, page_url: str) -> list[str]:
    """Absolute http(s) links on the page, skipping mailto:, tel: and fragments."""
    soup = BeautifulSoup(html, "html.parser")
    links: list[str] = []
    seen: set[str] = set()
    for anchor in soup.find_all("a", href=True):
        href = anchor["href"].strip()
        if not href or "#" in href or href.startswith(("mailto:", "tel:")):
            continue
        absolute = urljoin(page_url, href)
        if not absolute.startswith(("http://", "https://")) or absolute in seen:
            continue
        seen.add(absolute)
        links.append(absolute)
    return links


class WebsiteCrawler:
    """Breadth-first, same-host, depth-limited crawler."""

    def __init__(
        self,
        max_depth: int = 2,
        min_content_chars: int = 100,
        timeout: float = 10.0,
        user_agent: str = "Mozilla/5.0 (compatible; ChatbotRAGCrawler/1.0)",
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.max_depth = max_depth
        self.min_content_chars = min_content_chars
        self.timeout = timeout
        self.user_agent = user_agent
        self._http_client = http_client

    async def crawl(self, base_url: str) -> list[SourceDocument]:
        """
        Crawl base_url and same-host pages up to max_depth levels.

        Pages that fail to load are logged and skipped.

        Args:
            base_url: Starting URL (depth 0)

        Returns:
            list[SourceDocument]: Pages with more than min_content_chars of text
        """
        if self._http_client is not None:
            return await self._crawl(self._http_client, base_url)
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers={"User-Agent": self.user_agent},
        ) as client:
            return await self._crawl(client, base_url)

    async def _crawl(self, client: httpx.AsyncClient, base_url: str) -> list[SourceDocument]:
        host = urlparse(base_url).hostname
        visited: set[str] = set()
        documents: list[SourceDocument] = []
        frontier = [base_url]

        for depth in range(self.max_depth):
            next_frontier: list[str] = []
            for url in frontier:
                if url in visited:
                    continue
                visited.add(url)

                html = await self._fetch(client, url)
                if html is None:
                    continue

                title, description, text = extract_page(html)
                if len(text) > self.min_content_chars:
                    documents.append(
                        SourceDocument(
                            url=url,
                            content=text,
                            content_type="web_page",
                            metadata={
                                "source": "website",
                                "title": title,
                                "description": description,
                                "crawledFrom": base_url,
                                "depth": depth,
                            },
                        )
                    )

                if depth < self.max_depth - 1:
                    next_frontier.extend(
                        link for link in extract_links(html, url)
                        if urlparse(link).hostname == host and link not in visited
                    )
            frontier = next_frontier
            if not frontier:
                break

        logger.info(
            f"{__name__}:crawl - Crawled {len(visited)} pages from {base_url}, "
            f"kept {len(documents)}"
        )
        return documents

    async def _fetch(self, client: httpx.AsyncClient, url: str) -> str | None:
        try:
            response = await client.get(url, headers={"User-Agent": self.user_agent})
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"{__name__}:_fetch - Skipping {url}: {type(e).__name__}: {e}")
            return None
        return response.text
