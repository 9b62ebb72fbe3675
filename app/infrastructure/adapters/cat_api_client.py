from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional

import aiohttp
from pydantic import ValidationError

from app.application.interfaces.image_source import ICatImageSource
from app.core.config import settings
from app.core.exceptions import (
    EmptyResultError,
    MalformedResponseError,
    RemoteApiError,
    TransportError,
)
from app.core.pyd_schemas import CatImageSearchResult

logger = logging.getLogger(__name__)


class TheCatApiImageSource(ICatImageSource):
    """ICatImageSource implementation using TheCatAPI image search.

    The session is owned by the caller and shared across requests; this class
    only borrows it. No retries: the first failure surfaces to the caller.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        *,
        api_url: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> None:
        self.session = session
        self.api_url = api_url or settings.cat_api_url
        self.api_key = settings.cat_api_key if api_key is None else api_key

    async def fetch_random_image_bytes(self) -> bytes:
        image_url = await self.search_image_url()
        return await self.download_image(image_url)

    async def search_image_url(self) -> str:
        """Ask the search endpoint for images and return the first url."""
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["x-api-key"] = self.api_key

        body = await self._get_bytes(self.api_url, headers=headers)
        try:
            records = CatImageSearchResult.validate_json(body)
        except ValidationError as e:
            raise MalformedResponseError(
                f"{self.api_url} returned an unexpected body: {e.error_count()} "
                f"validation error(s), first: {e.errors()[0]['msg']}",
                url=self.api_url,
            ) from e

        if not records:
            raise EmptyResultError(url=self.api_url)

        logger.debug("Cat API returned %d image(s); using %s", len(records), records[0].url)
        return records[0].url

    async def download_image(self, url: str) -> bytes:
        """Retrieve the raw image bytes at url."""
        data = await self._get_bytes(url)
        logger.debug("Downloaded %d bytes from %s", len(data), url)
        return data

    async def _get_bytes(self, url: str, headers: Optional[Dict[str, str]] = None) -> bytes:
        try:
            async with self.session.get(url, headers=headers) as response:
                if not 200 <= response.status < 300:
                    raise RemoteApiError(response.status, url=url)
                return await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(
                f"Failed to reach {url}: {type(e).__name__}: {e}", url=url
            ) from e
        except RuntimeError as e:
            # aiohttp raises RuntimeError once the shared session is closed
            raise TransportError(f"HTTP session unusable for {url}: {e}", url=url) from e
