"""HTTP access to GitHub-hosted color scheme catalogs.

This module provides the async client used to read catalog listings from the
GitHub contents API and raw scheme files from ``raw.githubusercontent.com``.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import HttpGetError, ParseJsonError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "colortty"
DEFAULT_TIMEOUT = 30.0


class CatalogEntry(BaseModel):
    """One record of a GitHub contents API listing"""

    model_config = ConfigDict(extra="ignore")

    name: str
    path: Optional[str] = None
    type: str = "file"
    download_url: Optional[str] = None


def parse_catalog_listing(payload: Any) -> List[CatalogEntry]:
    """Validate a decoded listing payload.

    Args:
        payload: Decoded JSON returned by the listing endpoint

    Returns:
        Catalog entries in listing order

    Raises:
        ParseJsonError: If the payload is not a list of records with a name
    """
    if not isinstance(payload, list):
        raise ParseJsonError(
            f"Expected a list of catalog entries, got {type(payload).__name__}"
        )
    try:
        return [CatalogEntry.model_validate(item) for item in payload]
    except ValidationError as e:
        raise ParseJsonError(f"Malformed catalog entry: {e}") from e


class CatalogClient:
    """Async HTTP client for catalog listings and raw scheme files."""

    def __init__(self, user_agent: str = DEFAULT_USER_AGENT,
                 timeout: float = DEFAULT_TIMEOUT,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        """Initialize the catalog client.

        Args:
            user_agent: Value of the ``User-Agent`` header; GitHub rejects
                API requests without one
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used to stub the network
        """
        self.headers: Dict[str, str] = {"User-Agent": user_agent}
        self.client = httpx.AsyncClient(
            timeout=timeout,
            headers=self.headers,
            transport=transport,
            follow_redirects=True,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def get_text(self, url: str) -> str:
        """Fetch ``url`` and return the response body.

        Raises:
            HttpGetError: On a transport failure or a non-success status
        """
        logger.debug(f"GET {url}")
        try:
            response = await self.client.get(url)
        except httpx.TimeoutException as e:
            raise HttpGetError(f"HTTP request to {url} timed out") from e
        except httpx.RequestError as e:
            raise HttpGetError(f"Failed to send an HTTP request to {url}: {e}") from e

        if not response.is_success:
            raise HttpGetError(
                f"Received non-success status code {response.status_code} from {url}"
            )
        return response.text

    async def get_json(self, url: str) -> Any:
        """Fetch ``url`` and decode the body as JSON.

        Raises:
            HttpGetError: If the request fails
            ParseJsonError: If the body is not valid JSON
        """
        body = await self.get_text(url)
        try:
            return json.loads(body)
        except ValueError as e:
            raise ParseJsonError(f"Failed to parse JSON from {url}: {e}") from e
