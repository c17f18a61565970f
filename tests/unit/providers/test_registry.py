"""Tests for the provider registry."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from imagesift.models.image import SearchResult
from imagesift.providers import create_registry
from imagesift.providers.base.provider import ImageCollectionProvider, ProviderHealth
from imagesift.providers.base.registry import ProviderNotFoundError, ProviderRegistry
from imagesift.providers.wikimedia.provider import WikimediaCommonsProvider


class StubProvider(ImageCollectionProvider):
    """Minimal in-memory provider for registry tests."""

    def __init__(self, label: str = "Stub", **kwargs) -> None:
        self._label = label
        self.initialized = False
        self.kwargs = kwargs

    @property
    def label(self) -> str:
        return self._label

    @property
    def id(self) -> str:
        return "stub"

    @property
    def logo(self) -> str:
        return "stub.png"

    async def initialize(self) -> None:
        self.initialized = True

    async def shutdown(self) -> None:
        self.initialized = False

    async def search(self, search_term: str, page_zero_indexed: int, language: str) -> SearchResult:
        return SearchResult(images=[])

    async def health_check(self) -> ProviderHealth:
        return ProviderHealth(status="healthy")


@pytest.fixture
def registry() -> ProviderRegistry:
    registry = ProviderRegistry()
    registry.register("stub", StubProvider)
    return registry


class TestProviderRegistry:
    def test_register(self, registry: ProviderRegistry) -> None:
        assert registry.registered_providers == ["stub"]
        assert registry.active_providers == []

    async def test_initialize_provider_passes_kwargs(self, registry: ProviderRegistry) -> None:
        provider = await registry.initialize_provider("stub", label="Custom", page_size=5)
        assert isinstance(provider, StubProvider)
        assert provider.initialized
        assert provider.label == "Custom"
        assert provider.kwargs == {"page_size": 5}
        assert registry.get("stub") is provider
        assert registry.get_default() is provider

    async def test_initialize_unknown_provider(self, registry: ProviderRegistry) -> None:
        with pytest.raises(ProviderNotFoundError, match="Available providers"):
            await registry.initialize_provider("flickr")

    def test_get_uninitialized(self, registry: ProviderRegistry) -> None:
        with pytest.raises(ProviderNotFoundError, match="not initialized"):
            registry.get("stub")

    def test_get_default_empty(self, registry: ProviderRegistry) -> None:
        with pytest.raises(ProviderNotFoundError):
            registry.get_default()

    async def test_identities(self, registry: ProviderRegistry) -> None:
        await registry.initialize_provider("stub")
        identities = registry.identities()
        assert [(i.id, i.label, i.logo) for i in identities] == [("stub", "Stub", "stub.png")]

    async def test_health_check_all(self, registry: ProviderRegistry) -> None:
        await registry.initialize_provider("stub")
        results = await registry.health_check_all()
        assert results["stub"].status == "healthy"

    async def test_health_check_all_contains_exceptions(self, registry: ProviderRegistry) -> None:
        provider = await registry.initialize_provider("stub")
        provider.health_check = AsyncMock(side_effect=RuntimeError("boom"))  # type: ignore[method-assign]
        results = await registry.health_check_all()
        assert results["stub"].status == "unhealthy"
        assert results["stub"].message == "boom"

    async def test_shutdown_all(self, registry: ProviderRegistry) -> None:
        provider = await registry.initialize_provider("stub")
        await registry.shutdown_all()
        assert not provider.initialized
        assert registry.active_providers == []

    async def test_shutdown_all_continues_after_error(self, registry: ProviderRegistry) -> None:
        provider = await registry.initialize_provider("stub")
        provider.shutdown = AsyncMock(side_effect=RuntimeError("boom"))  # type: ignore[method-assign]
        await registry.shutdown_all()
        assert registry.active_providers == []

    def test_overwrite_registration(self, registry: ProviderRegistry) -> None:
        registry.register("stub", WikimediaCommonsProvider)
        assert registry.registered_providers == ["stub"]


class TestCreateRegistry:
    async def test_wikimedia_is_builtin(self) -> None:
        registry = create_registry()
        assert registry.registered_providers == ["wikipedia"]

        provider = await registry.initialize_provider("wikipedia", page_size=10)
        try:
            assert isinstance(provider, WikimediaCommonsProvider)
            assert provider.identity.label == "Wikimedia Commons"
        finally:
            await registry.shutdown_all()
