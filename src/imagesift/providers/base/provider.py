"""Base image collection provider — Abstract interface for all image sources.

Every image source must implement this interface to plug into the
aggregator. A provider is responsible for:
  1. Exposing a static identity (label, id, logo) for provider selection
  2. Translating ``search(term, page, language)`` into requests against its API
  3. Mapping raw results to the shared ``ImageDescriptor`` shape
  4. Reporting health status
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel, Field

from imagesift.models.image import ImageDescriptor, SearchResult


class ProviderHealth(BaseModel):
    """Health status of an image provider."""

    status: str = Field(description="Health status: healthy, degraded, unhealthy")
    latency_ms: int = Field(default=0, description="Latency of last health check in ms")
    last_check: str | None = Field(default=None, description="ISO timestamp of last health check")
    message: str | None = Field(default=None, description="Additional health message")


class ProviderIdentity(BaseModel):
    """Static fields the aggregator uses to list and select providers."""

    id: str = Field(description="Stable provider identifier")
    label: str = Field(description="Display label")
    logo: str = Field(description="Logo asset reference")


class ImageCollectionProvider(ABC):
    """Abstract base class for image collection providers.

    All providers must implement:
      - label / id / logo: Static identity fields
      - search(): Fetch one page of images for a term
      - health_check(): Report provider health status

    ``search()`` never raises: failures are reported through
    ``SearchResult.error``. Providers may hold paging state between calls,
    so callers must await each call before issuing the next one on the
    same instance.
    """

    @property
    @abstractmethod
    def label(self) -> str:
        """Human-readable provider name shown in the UI."""

    @property
    @abstractmethod
    def id(self) -> str:
        """Stable identifier used for registration and selection."""

    @property
    @abstractmethod
    def logo(self) -> str:
        """Logo asset reference."""

    @property
    def identity(self) -> ProviderIdentity:
        return ProviderIdentity(id=self.id, label=self.label, logo=self.logo)

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the provider (HTTP clients, etc.).

        Called once before the first search.
        """

    @abstractmethod
    async def shutdown(self) -> None:
        """Release resources held by the provider."""

    @abstractmethod
    async def search(self, search_term: str, page_zero_indexed: int, language: str) -> SearchResult:
        """Fetch one page of images matching *search_term*.

        Args:
            search_term: Free text to search for.
            page_zero_indexed: Page number requested by the caller.
            language: Caller's language code.

        Returns:
            A SearchResult. An empty ``images`` list without ``error`` means
            there are no more results.
        """

    @abstractmethod
    async def health_check(self) -> ProviderHealth:
        """Check the health of the remote API."""

    async def search_all(self, search_term: str, language: str = "en", max_pages: int = 1) -> SearchResult:
        """Call ``search()`` page by page and accumulate the images.

        Stops at the first empty page, the first error, or after
        *max_pages* calls. An error is returned together with the images
        gathered before it.
        """
        images: list[ImageDescriptor] = []
        for page in range(max_pages):
            result = await self.search(search_term, page, language)
            images.extend(result.images)
            if result.error is not None:
                return SearchResult(images=images, error=result.error)
            if not result.images:
                break
        return SearchResult(images=images)
