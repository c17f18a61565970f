"""Image result models — The shared shape every provider maps its results to.

The aggregation UI consumes these with camelCase keys (``thumbnailUrl``,
``licenseUrl`` ...), so the models serialize by alias while Python code
uses snake_case attributes.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ImageDescriptor(BaseModel):
    """A single normalized image from any provider."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    thumbnail_url: str = Field(description="Small preview image URL")
    reasonable_size_url: str = Field(description="URL of an image large enough for display")
    web_site_url: str = Field(description="Page describing the image on the provider's site")
    width: int = Field(default=0, ge=0, description="Width in pixels as reported by the provider")
    height: int = Field(default=0, ge=0, description="Height in pixels as reported by the provider")
    size: int = Field(default=0, description="File size in bytes (0 when the provider does not report it)")
    type: Literal["image"] = Field(default="image", description="Media type tag")
    license: str = Field(description="License name")
    license_url: str = Field(description="URL describing the license terms")
    creator: str | None = Field(default=None, description="Plain-text author / artist")
    raw: dict[str, Any] = Field(default_factory=dict, description="Original provider-specific record")


class SearchResult(BaseModel):
    """One page of images returned by a provider ``search()`` call."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    images: list[ImageDescriptor] = Field(default_factory=list, description="Images in provider order")
    error: str | None = Field(default=None, description="Human-readable failure message")

    @property
    def ok(self) -> bool:
        return self.error is None
