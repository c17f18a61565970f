"""Wikimedia Commons provider — Image search via the MediaWiki Action API.

Lists the images used on the pages whose titles match the search term
(``generator=images``) and fetches their ``imageinfo`` in the same call:
full URL, a 300px thumbnail, dimensions and the ``extmetadata`` block that
carries artist and license fields.

Usage::

    provider = WikimediaCommonsProvider()
    await provider.initialize()
    first = await provider.search("Mount Kenya", 0, "en")
    second = await provider.search("Mount Kenya", 1, "en")

API Reference: https://www.mediawiki.org/wiki/API:Imageinfo
"""

from __future__ import annotations

import logging
import re
import time
from datetime import UTC, datetime
from importlib import resources
from pathlib import Path
from typing import Any

import httpx

from imagesift import __version__
from imagesift.models.image import ImageDescriptor, SearchResult
from imagesift.providers.base.exceptions import ConfigurationError, ConnectionError, FetchError
from imagesift.providers.base.provider import ImageCollectionProvider, ProviderHealth
from imagesift.providers.wikimedia.continuation import ContinuationState

logger = logging.getLogger(__name__)

WIKIMEDIA_API_URL = "https://commons.wikimedia.org/w/api.php"
COMMONS_LICENSING_URL = "https://commons.wikimedia.org/wiki/Commons:Licensing"
FALLBACK_LICENSE = "Wikimedia Commons"

_USER_AGENT = f"imagesift/{__version__} (https://commons.wikimedia.org/wiki/Commons:API)"
_LOGO = "wikimedia-commons.svg"
_TAG_RE = re.compile(r"<[^>]*>")


def strip_tags(value: str) -> str:
    """Remove ``<...>`` sequences from an extmetadata value."""
    return _TAG_RE.sub("", value)


class WikimediaCommonsProvider(ImageCollectionProvider):
    """Image provider for Wikimedia Commons.

    Paging is cursor based: ``page_zero_indexed`` is not turned into an
    offset. Instead the provider keeps the ``gimcontinue`` cursor from the
    previous response and sends it back while the search term stays the
    same. Calls on one instance must therefore be awaited one at a time.

    Args:
        api_url: MediaWiki ``api.php`` endpoint.
        thumbnail_width: Width in pixels of the requested thumbnail.
        page_size: Number of images per request (``gimlimit``).
        timeout: HTTP request timeout in seconds.
        user_agent: User-agent header sent with every request.
        **kwargs: Extra keyword arguments (ignored, for config compat).
    """

    def __init__(
        self,
        api_url: str = WIKIMEDIA_API_URL,
        thumbnail_width: int = 300,
        page_size: int = 20,
        timeout: float = 30.0,
        user_agent: str = _USER_AGENT,
        **kwargs: Any,
    ) -> None:
        if thumbnail_width <= 0:
            raise ConfigurationError(f"thumbnail_width must be positive, got {thumbnail_width}")
        if not 1 <= page_size <= 500:
            raise ConfigurationError(f"page_size must be between 1 and 500, got {page_size}")

        self._api_url = api_url
        self._thumbnail_width = thumbnail_width
        self._page_size = page_size
        self._timeout = timeout
        self._user_agent = user_agent
        self._extra_kwargs = kwargs
        self._client: httpx.AsyncClient | None = None
        self._state = ContinuationState()

    @property
    def label(self) -> str:
        return "Wikimedia Commons"

    @property
    def id(self) -> str:
        return "wikipedia"

    @property
    def logo(self) -> str:
        return _LOGO

    @staticmethod
    def logo_path() -> Path:
        """Filesystem path of the packaged logo."""
        return Path(str(resources.files("imagesift.providers.wikimedia").joinpath("assets", _LOGO)))

    @property
    def state(self) -> ContinuationState:
        return self._state

    async def initialize(self) -> None:
        """Create the ``httpx.AsyncClient`` used for all requests."""
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout),
            headers={"User-Agent": self._user_agent},
        )
        logger.info(
            "Wikimedia Commons provider initialized (page_size=%d, thumbnail_width=%d)",
            self._page_size,
            self._thumbnail_width,
        )

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    # ── Search ───────────────────────────────────────────────────────────

    async def search(self, search_term: str, page_zero_indexed: int, language: str) -> SearchResult:
        """Fetch the next page of Commons images for *search_term*.

        ``language`` is not sent: the images generator has no language filter.

        Returns:
            SearchResult with up to ``page_size`` images. An empty list
            without error means the term has no further pages. Failures are
            reported in ``error`` and never raised.
        """
        if self._state.is_exhausted_for(search_term):
            logger.debug("Wikimedia search exhausted: query=%s, page=%d", search_term, page_zero_indexed)
            return SearchResult(images=[])

        state = self._state.start(search_term)
        try:
            start = time.monotonic()
            data = await self._fetch(self._build_params(search_term, state.token))
            next_state = state.advance(self._continue_token(data))
            images = self._map_pages(data)
            took_ms = int((time.monotonic() - start) * 1000)
        except Exception as e:
            logger.warning("Wikimedia search failed: query=%s, error=%s", search_term, e)
            return SearchResult(images=[], error=f"Error fetching from Wikimedia: {e}")

        self._state = next_state
        logger.debug(
            "Wikimedia search: query=%s, page=%d, results=%d, phase=%s, took=%dms",
            search_term,
            page_zero_indexed,
            len(images),
            next_state.phase,
            took_ms,
        )
        return SearchResult(images=images)

    def _build_params(self, search_term: str, token: str | None) -> dict[str, Any]:
        params: dict[str, Any] = {
            "action": "query",
            "generator": "images",
            "iiprop": "url|thumburl|size|extmetadata",
            "prop": "imageinfo",
            "iiurlwidth": self._thumbnail_width,
            "format": "json",
            "origin": "*",
            "titles": search_term,
            "gimlimit": self._page_size,
        }
        if token:
            params["gimcontinue"] = token
        return params

    async def _fetch(self, params: dict[str, Any]) -> dict[str, Any]:
        if self._client is None:
            raise ConnectionError("Wikimedia provider not initialized.")

        try:
            resp = await self._client.get(self._api_url, params=params)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as e:
            raise FetchError(f"HTTP request failed: {e}") from e
        except ValueError as e:
            raise FetchError(f"Invalid JSON in response: {e}") from e

        if not isinstance(data, dict):
            raise FetchError(f"Unexpected response payload of type {type(data).__name__}")
        return data

    @staticmethod
    def _continue_token(data: dict[str, Any]) -> str | None:
        token = (data.get("continue") or {}).get("gimcontinue")
        return str(token) if token else None

    def _map_pages(self, data: dict[str, Any]) -> list[ImageDescriptor]:
        pages = (data.get("query") or {}).get("pages") or {}
        images: list[ImageDescriptor] = []
        for page in pages.values():
            infos = page.get("imageinfo")
            if not infos:
                continue
            images.append(self.map_image_info(infos[0]))
        return images

    # ── Schema mapping ───────────────────────────────────────────────────

    def map_image_info(self, info: dict[str, Any]) -> ImageDescriptor:
        """Map one ``imageinfo`` record to ``ImageDescriptor``."""
        extmetadata = info.get("extmetadata") or {}
        url = info.get("url", "")

        artist = self._meta_value(extmetadata, "Artist")
        license_name = (
            self._meta_value(extmetadata, "LicenseShortName")
            or self._meta_value(extmetadata, "License")
            or FALLBACK_LICENSE
        )

        return ImageDescriptor(
            thumbnail_url=info.get("thumburl") or url,
            reasonable_size_url=url,
            web_site_url=info.get("descriptionurl", ""),
            size=0,
            width=info.get("width") or 0,
            height=info.get("height") or 0,
            license=license_name,
            license_url=COMMONS_LICENSING_URL,
            creator=(strip_tags(artist) or None) if artist else None,
            raw=info,
        )

    @staticmethod
    def _meta_value(extmetadata: dict[str, Any], key: str) -> str | None:
        entry = extmetadata.get(key)
        if not isinstance(entry, dict):
            return None
        value = entry.get("value")
        return str(value) if value is not None else None

    # ── Health ───────────────────────────────────────────────────────────

    async def health_check(self) -> ProviderHealth:
        """Query ``meta=siteinfo`` to check API reachability."""
        if self._client is None:
            return ProviderHealth(status="unhealthy", message="Client not initialized")

        try:
            start = time.monotonic()
            resp = await self._client.get(
                self._api_url,
                params={"action": "query", "meta": "siteinfo", "format": "json", "origin": "*"},
            )
            latency_ms = int((time.monotonic() - start) * 1000)

            if resp.status_code == 200:
                return ProviderHealth(
                    status="healthy",
                    latency_ms=latency_ms,
                    last_check=datetime.now(UTC).isoformat(),
                    message="Wikimedia Commons API OK",
                )
            return ProviderHealth(
                status="degraded",
                latency_ms=latency_ms,
                last_check=datetime.now(UTC).isoformat(),
                message=f"Wikimedia returned HTTP {resp.status_code}",
            )
        except Exception as e:
            return ProviderHealth(status="unhealthy", message=str(e))
