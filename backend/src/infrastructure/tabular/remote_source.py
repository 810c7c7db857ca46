"""Remote catalog source - fetches a catalog spreadsheet over HTTP(S)."""

import logging
import time
from typing import Optional
from urllib.parse import urlparse

import httpx

from domain.catalog.ports import RemoteSourceError

logger = logging.getLogger(__name__)


class RemoteCatalogSource:
    """Downloads the catalog file published at a fixed URL.

    A cache-busting ``t`` query parameter is added so that CDN copies of an
    updated file are not served stale.
    """

    def __init__(self, url: str, timeout_seconds: float = 15.0, client: Optional[httpx.Client] = None):
        self.url = url
        self.timeout_seconds = timeout_seconds
        self._client = client

    @property
    def filename(self) -> str:
        """Last path segment of the URL, used to pick a reader."""
        path = urlparse(self.url).path
        return path.rsplit("/", 1)[-1] or "catalog"

    def fetch(self) -> bytes:
        """Download the file.

        Returns:
            Raw file bytes

        Raises:
            RemoteSourceError: On network errors or non-2xx responses
        """
        params = {"t": str(int(time.time() * 1000))}
        logger.info(f"Fetching catalog file from {self.url}")

        try:
            if self._client is not None:
                response = self._client.get(self.url, params=params)
            else:
                with httpx.Client(timeout=self.timeout_seconds, follow_redirects=True) as client:
                    response = client.get(self.url, params=params)
        except httpx.HTTPError as e:
            raise RemoteSourceError(f"Failed to fetch {self.url}: {e}") from e

        if response.status_code != 200:
            raise RemoteSourceError(f"Failed to fetch {self.url}: HTTP {response.status_code}")

        return response.content
