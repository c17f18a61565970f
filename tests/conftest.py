"""Shared test fixtures and configuration."""

from __future__ import annotations

from typing import Any

import pytest

from imagesift.config.settings import Settings


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        debug=True,
    )


@pytest.fixture
def sample_image_info() -> dict[str, Any]:
    """A complete ``imageinfo`` record as returned by the Commons API."""
    return {
        "thumburl": "https://upload.wikimedia.org/wikipedia/commons/thumb/a/a1/Mount_Kenya.jpg/300px-Mount_Kenya.jpg",
        "thumbwidth": 300,
        "thumbheight": 200,
        "url": "https://upload.wikimedia.org/wikipedia/commons/a/a1/Mount_Kenya.jpg",
        "descriptionurl": "https://commons.wikimedia.org/wiki/File:Mount_Kenya.jpg",
        "descriptionshorturl": "https://commons.wikimedia.org/w/index.php?curid=1234",
        "width": 3000,
        "height": 2000,
        "size": 1843211,
        "extmetadata": {
            "Artist": {"value": "<a href='//commons.wikimedia.org/wiki/User:Jane'>Jane</a>", "source": "commons-desc-page"},
            "License": {"value": "cc-by-sa-4.0", "source": "commons-templates"},
            "LicenseShortName": {"value": "CC BY-SA 4.0", "source": "commons-desc-page"},
        },
    }


@pytest.fixture
def minimal_image_info() -> dict[str, Any]:
    """An ``imageinfo`` record with no thumbnail and no extmetadata."""
    return {
        "url": "https://upload.wikimedia.org/wikipedia/commons/b/b2/Map.svg",
        "descriptionurl": "https://commons.wikimedia.org/wiki/File:Map.svg",
        "width": 512,
        "height": 512,
    }


def _make_commons_response(
    *infos: dict[str, Any],
    gimcontinue: str | None = None,
    extra_pages: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a ``generator=images`` response with one page per image-info record."""
    pages: dict[str, Any] = {}
    for i, info in enumerate(infos):
        pages[str(1000 + i)] = {
            "pageid": 1000 + i,
            "ns": 6,
            "title": f"File:Image_{i}.jpg",
            "imagerepository": "local",
            "imageinfo": [info],
        }
    if extra_pages:
        pages.update(extra_pages)

    data: dict[str, Any] = {"batchcomplete": "", "query": {"pages": pages}}
    if gimcontinue is not None:
        data["continue"] = {"gimcontinue": gimcontinue, "continue": "gimcontinue||"}
    return data


@pytest.fixture
def commons_response():
    """Factory for Commons ``generator=images`` responses."""
    return _make_commons_response
