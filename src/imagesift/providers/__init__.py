"""Image provider layer — Pluggable connectors for public media APIs.

Built-in providers:
  - wikipedia: Wikimedia Commons (MediaWiki Action API, cursor paging)

Implement ``ImageCollectionProvider`` to add another image source.
"""

from __future__ import annotations

from imagesift.providers.base.registry import ProviderRegistry
from imagesift.providers.wikimedia.provider import WikimediaCommonsProvider


def create_registry() -> ProviderRegistry:
    """Return a registry with every built-in provider registered."""
    registry = ProviderRegistry()
    registry.register("wikipedia", WikimediaCommonsProvider)
    return registry


__all__ = ["ProviderRegistry", "WikimediaCommonsProvider", "create_registry"]
