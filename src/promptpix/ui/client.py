"""HTTP client used by the UI to talk to the generation proxy.

:class:`ProxyClient` wraps an :class:`httpx.Client`.  Any failure (network
error, non-2xx status, unparsable body, missing image URL) is raised as
:class:`ProxyRequestError` whose message is safe to show to the user: it is
the proxy's own ``error`` field when one was returned.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

GENERATE_PATH = "/generate-image"
FALLBACK_ERROR = "Failed to generate image"


class ProxyRequestError(Exception):
    """A proxy or download request failed.

    Attributes:
        message: User-facing description of the failure.
        status_code: HTTP status, when a response was received.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ProxyClient:
    """Client for ``POST /generate-image`` and for fetching image bytes."""

    def __init__(self, base_url: str, http_client: httpx.Client | None = None) -> None:
        """Initialise the client.

        Args:
            base_url: Proxy base URL, e.g. ``http://127.0.0.1:8000``.
            http_client: Optional pre-configured client (tests pass one with
                an :class:`httpx.MockTransport`).
        """
        self._base_url = base_url.rstrip("/")
        # Generation regularly outlasts httpx's 5 second default.
        self._http = http_client or httpx.Client(timeout=None)

    @property
    def generate_url(self) -> str:
        return f"{self._base_url}{GENERATE_PATH}"

    def generate(self, prompt: str, size: str, quality: str) -> dict[str, Any]:
        """Ask the proxy for one image.

        Args:
            prompt: Trimmed, non-empty prompt.
            size: Selected size value.
            quality: Selected quality value.

        Returns:
            The proxy's JSON body (``imageUrl``, ``originalPrompt``, optional
            ``revisedPrompt``).

        Raises:
            ProxyRequestError: On any failure.
        """
        logger.info(f"Sending generation request to {self.generate_url}")

        try:
            response = self._http.post(
                self.generate_url,
                json={"prompt": prompt, "size": size, "quality": quality},
            )
        except httpx.HTTPError as e:
            logger.error(f"Proxy request failed: {e}")
            raise ProxyRequestError(str(e) or FALLBACK_ERROR) from e

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if not response.is_success:
            message = data.get("error") or FALLBACK_ERROR
            logger.warning(f"Proxy returned {response.status_code}: {message}")
            raise ProxyRequestError(message, status_code=response.status_code)

        if not data.get("imageUrl"):
            raise ProxyRequestError(FALLBACK_ERROR, status_code=response.status_code)

        return data

    def fetch_image(self, url: str) -> bytes:
        """Download the bytes of a generated image.

        Raises:
            ProxyRequestError: If the request fails or returns a non-2xx status.
        """
        try:
            response = self._http.get(url, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Image download failed for {url}: {e}")
            raise ProxyRequestError("Failed to download the image.") from e
        return response.content

    def close(self) -> None:
        self._http.close()
