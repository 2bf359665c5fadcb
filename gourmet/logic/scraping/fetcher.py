"""Outbound HTTP for recipe pages and their images (httpx.AsyncClient)."""
import base64
import logging
from typing import Optional

import httpx

from gourmet.utilities import config
from gourmet.utilities.errors import ExtractionError

logger = logging.getLogger(__name__)

# Status codes sites use to refuse automated clients
BLOCKED_STATUS = {401, 403, 429, 451}

HEADERS = {
    "User-Agent": config.USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "de-DE,de;q=0.9,en;q=0.8",
}


class PageFetcher:
    """Fetches recipe pages and images with a browser-like User-Agent.

    A transport can be injected (httpx.MockTransport in tests).
    """

    def __init__(self, timeout: float = config.HTTP_TIMEOUT,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self._client = httpx.AsyncClient(
            headers=HEADERS, timeout=timeout, follow_redirects=True, transport=transport,
        )

    async def fetch_page(self, url: str) -> str:
        try:
            response = await self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Fetching %s failed: %s", url, e)
            raise ExtractionError(ExtractionError.FETCH_FAILED, f"Could not reach {url}: {e}") from e
        if response.status_code in BLOCKED_STATUS:
            raise ExtractionError(ExtractionError.BLOCKED,
                                  f"The site refused access (HTTP {response.status_code})")
        if response.status_code != 200:
            raise ExtractionError(ExtractionError.FETCH_FAILED,
                                  f"Unexpected HTTP {response.status_code} for {url}")
        return response.text

    async def fetch_image(self, url: str) -> str:
        """Returns the image as a data: URI, or "" when it cannot be loaded."""
        if not url:
            return ""
        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Image %s could not be loaded: %s", url, e)
            return ""
        content_type = response.headers.get("content-type", "image/jpeg").split(";")[0].strip()
        if not content_type.startswith("image/"):
            logger.warning("Image %s has content type %s, skipping", url, content_type)
            return ""
        encoded = base64.b64encode(response.content).decode("ascii")
        return f"data:{content_type};base64,{encoded}"

    async def aclose(self):
        await self._client.aclose()
