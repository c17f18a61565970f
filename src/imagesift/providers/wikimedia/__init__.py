"""Wikimedia Commons image provider."""

from imagesift.providers.wikimedia.provider import WikimediaCommonsProvider

__all__ = ["WikimediaCommonsProvider"]
