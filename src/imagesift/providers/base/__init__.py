"""Base provider interface — Abstract classes for image collection providers."""

from imagesift.providers.base.provider import ImageCollectionProvider, ProviderHealth, ProviderIdentity
from imagesift.providers.base.registry import ProviderRegistry

__all__ = ["ImageCollectionProvider", "ProviderHealth", "ProviderIdentity", "ProviderRegistry"]
