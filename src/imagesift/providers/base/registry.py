"""Provider Registry — Manages registration and retrieval of image providers.

The registry is a central place to register provider classes and hold the
single live instance of each provider. Paging state lives on the provider
instance, so the aggregator should always fetch providers from here rather
than constructing new ones per request.
"""

from __future__ import annotations

import logging
from typing import Any

from imagesift.providers.base.provider import ImageCollectionProvider, ProviderHealth, ProviderIdentity

logger = logging.getLogger(__name__)


class ProviderNotFoundError(Exception):
    """Raised when a requested provider is not registered."""


class ProviderRegistry:
    """Registry for managing image provider instances.

    Example:
        >>> registry = ProviderRegistry()
        >>> registry.register("wikipedia", WikimediaCommonsProvider)
        >>> await registry.initialize_provider("wikipedia", page_size=20)
        >>> provider = registry.get("wikipedia")
    """

    def __init__(self) -> None:
        self._classes: dict[str, type[ImageCollectionProvider]] = {}
        self._instances: dict[str, ImageCollectionProvider] = {}

    def register(self, provider_id: str, provider_class: type[ImageCollectionProvider]) -> None:
        """Register a provider class.

        Args:
            provider_id: Unique id for this provider type.
            provider_class: The provider class to register.
        """
        if provider_id in self._classes:
            logger.warning("Overwriting existing provider registration: %s", provider_id)
        self._classes[provider_id] = provider_class
        logger.info("Registered provider: %s", provider_id)

    async def initialize_provider(self, provider_id: str, **kwargs: Any) -> ImageCollectionProvider:
        """Create and initialize a provider instance.

        Args:
            provider_id: The registered provider id.
            **kwargs: Configuration parameters passed to the provider constructor.

        Returns:
            The initialized provider instance.

        Raises:
            ProviderNotFoundError: If no provider is registered under this id.
        """
        if provider_id not in self._classes:
            raise ProviderNotFoundError(
                f"No provider registered with id '{provider_id}'. "
                f"Available providers: {list(self._classes.keys())}"
            )

        provider = self._classes[provider_id](**kwargs)
        await provider.initialize()
        self._instances[provider_id] = provider
        logger.info("Initialized provider: %s", provider_id)
        return provider

    def get(self, provider_id: str) -> ImageCollectionProvider:
        """Get an initialized provider instance by id.

        Raises:
            ProviderNotFoundError: If the provider is not initialized.
        """
        if provider_id not in self._instances:
            raise ProviderNotFoundError(
                f"Provider '{provider_id}' is not initialized. "
                f"Call initialize_provider() first."
            )
        return self._instances[provider_id]

    def get_default(self) -> ImageCollectionProvider:
        """Get the first initialized provider.

        Raises:
            ProviderNotFoundError: If no providers are initialized.
        """
        if not self._instances:
            raise ProviderNotFoundError("No providers are initialized.")
        return next(iter(self._instances.values()))

    def identities(self) -> list[ProviderIdentity]:
        """Identity fields of every initialized provider, in initialization order."""
        return [provider.identity for provider in self._instances.values()]

    async def health_check_all(self) -> dict[str, ProviderHealth]:
        """Run health checks on all initialized providers."""
        results: dict[str, ProviderHealth] = {}
        for provider_id, provider in self._instances.items():
            try:
                results[provider_id] = await provider.health_check()
            except Exception as e:
                results[provider_id] = ProviderHealth(status="unhealthy", message=str(e))
        return results

    async def shutdown_all(self) -> None:
        """Gracefully shut down all initialized providers."""
        for provider_id, provider in self._instances.items():
            try:
                await provider.shutdown()
                logger.info("Shut down provider: %s", provider_id)
            except Exception:
                logger.warning("Error shutting down provider: %s", provider_id, exc_info=True)
        self._instances.clear()

    @property
    def registered_providers(self) -> list[str]:
        """List all registered provider ids."""
        return list(self._classes.keys())

    @property
    def active_providers(self) -> list[str]:
        """List all initialized provider ids."""
        return list(self._instances.keys())
