"""
Gallery Service

Lists the landing page's images from the static images directory.

Two categories are listed, each from its own sub-directory:
- ``ais`` - school life photos (about, gallery, why-choose-us sections)
- ``hero`` - hero carousel slides

Any read failure yields empty lists rather than an error.
"""

import logging
from pathlib import Path
from urllib.parse import quote

from app.modules.gallery.schemas import ImageListing

logger = logging.getLogger(__name__)

IMAGE_CATEGORIES = ("ais", "hero")
IMAGES_URL_PREFIX = "/images"

# Characters left unescaped by JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


def _list_category(base_dir: Path, category: str) -> list[str]:
    directory = base_dir / category
    if not directory.is_dir():
        return []

    names = sorted(
        entry.name
        for entry in directory.iterdir()
        if entry.is_file() and not entry.name.startswith(".")
    )
    return [
        f"{IMAGES_URL_PREFIX}/{category}/{quote(name, safe=_URI_COMPONENT_SAFE)}"
        for name in names
    ]


def list_images(base_dir: Path) -> ImageListing:
    """
    List image URL paths for each category.

    Args:
        base_dir: The static images directory

    Returns:
        ImageListing with one ordered, URL-encoded path list per category
    """
    try:
        return ImageListing(
            **{category: _list_category(base_dir, category) for category in IMAGE_CATEGORIES}
        )
    except OSError as e:
        logger.warning(f"Could not list images in {base_dir}: {e}")
        return ImageListing()
