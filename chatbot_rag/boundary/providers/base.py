"""
Shared HTTP plumbing for model providers.

Posts JSON with httpx and classifies every failure into a ProviderErrorKind
(timeout, network, quota, auth, non-2xx, HTML or non-JSON body) so the
gateways can fall back and the API can pick a status code.

Dependencies: httpx, chatbot_rag.core.exceptions
System role: Transport layer for embedding and generation providers
"""

import logging
from typing import Any

import httpx

from chatbot_rag.core.exceptions import ProviderError, ProviderErrorKind

logger = logging.getLogger(__name__)

_QUOTA_MARKERS = ("insufficient_quota", "RESOURCE_EXHAUSTED", "rate_limit_exceeded")
_AUTH_MARKERS = ("API_KEY_INVALID", "invalid_api_key", "PERMISSION_DENIED")


def _looks_like_html(body: str) -> bool:
    head = body.lstrip()[:15].lower()
    return head.startswith("<!doctype") or head.startswith("<html")


def classify_response(provider: str, response: httpx.Response) -> dict[str, Any]:
    """
    Validate a provider response and decode its JSON body.

    Args:
        provider: Provider name for error attribution
        response: Raw httpx response

    Returns:
        dict: Decoded JSON object

    Raises:
        ProviderError: On quota, auth, non-2xx, HTML, or non-JSON responses
    """
    body = response.text
    status_code = response.status_code
    failed = not response.is_success

    if status_code == 429 or (failed and any(marker in body for marker in _QUOTA_MARKERS)):
        raise ProviderError(
            provider,
            ProviderErrorKind.QUOTA,
            f"quota exceeded (HTTP {status_code})",
            status_code=status_code,
        )
    if status_code in (401, 403) or (failed and any(marker in body for marker in _AUTH_MARKERS)):
        raise ProviderError(
            provider,
            ProviderErrorKind.AUTH,
            f"authentication rejected (HTTP {status_code})",
            status_code=status_code,
        )
    if _looks_like_html(body):
        raise ProviderError(
            provider,
            ProviderErrorKind.MALFORMED,
            f"returned an HTML page instead of JSON (HTTP {status_code})",
            status_code=status_code,
        )
    if failed:
        raise ProviderError(
            provider,
            ProviderErrorKind.TRANSIENT,
            f"HTTP {status_code}: {body[:200]}",
            status_code=status_code,
        )

    try:
        payload = response.json()
    except ValueError as e:
        raise ProviderError(
            provider,
            ProviderErrorKind.MALFORMED,
            "response body is not valid JSON",
            status_code=status_code,
        ) from e

    if not isinstance(payload, dict):
        raise ProviderError(
            provider,
            ProviderErrorKind.MALFORMED,
            "response body is not a JSON object",
            status_code=status_code,
        )
    return payload


class HTTPProvider:
    """
    Base class for providers reached over HTTP.

    A provider without an API key reports is_configured=False and is skipped
    by the gateways. An injected http_client is reused (tests pass one backed
    by httpx.MockTransport); otherwise each call opens a short-lived client.
    """

    name = "provider"

    def __init__(
        self,
        api_key: str | None,
        base_url: str,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http_client = http_client

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json"}

    async def _post_json(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        """
        POST a JSON payload and return the validated JSON response.

        Raises:
            ProviderError: TIMEOUT, TRANSIENT (network), or any response classification
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            if self._http_client is not None:
                response = await self._http_client.post(
                    url, json=payload, headers=self._headers(), timeout=self.timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(url, json=payload, headers=self._headers())
        except httpx.TimeoutException as e:
            raise ProviderError(
                self.name,
                ProviderErrorKind.TIMEOUT,
                f"no response within {self.timeout}s",
            ) from e
        except httpx.HTTPError as e:
            raise ProviderError(
                self.name,
                ProviderErrorKind.TRANSIENT,
                f"network error: {type(e).__name__}: {e}",
            ) from e

        logger.debug(f"{__name__}:_post_json - {self.name} {path} -> {response.status_code}")
        return classify_response(self.name, response)

    def _malformed(self, message: str) -> ProviderError:
        return ProviderError(self.name, ProviderErrorKind.MALFORMED, message)
