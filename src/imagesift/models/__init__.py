"""Shared image-result models."""

from imagesift.models.image import ImageDescriptor, SearchResult

__all__ = ["ImageDescriptor", "SearchResult"]
