"""Data model and constants for the bookmark store."""

from dataclasses import dataclass
from typing import Dict

FILE_EXT = ".yaml"
ROOT_SLUG = "root"
DEFAULT_CATEGORY = "other"
DEFAULT_DIR_NAME = "bookmarks"
# Directory name used by early releases; removed on init when a different name is configured.
LEGACY_DIR_NAME = "bookmarks"
CONFIG_FILE_NAME = ".stribor.yaml"

AUTHOR_NAME = "stribor"
AUTHOR_EMAIL = "stribor@local.store"


@dataclass
class Bookmark:
    """A saved URL.

    Field order is the on-disk order.
    """

    url: str
    title: str = ""
    category: str = DEFAULT_CATEGORY

    def to_meta(self) -> Dict[str, str]:
        return {"url": self.url, "title": self.title, "category": self.category}
