"""Helpers: process exit, URL parsing and slugs."""

import re
import sys
from pathlib import PurePosixPath
from typing import NamedTuple
from urllib.parse import unquote, urlsplit, urlunsplit

from slugify import slugify as _make_slug

from .errors import MalformedURLError
from .models import FILE_EXT, ROOT_SLUG

PROG = "stribor"

_UNSAFE_CHARS = re.compile(r"[\s\x00-\x1f\x7f]")
_NON_SLUG = r"[^-a-z0-9_]+"


def die(msg: str, code: int = 1) -> None:
    print(f"{PROG}: {msg}", file=sys.stderr)
    sys.exit(code)


def warn(msg: str) -> None:
    print(f"{PROG}: warning: {msg}", file=sys.stderr)


class ParsedURL(NamedTuple):
    url: str
    scheme: str
    host: str
    path: str


def parse_url(raw: str) -> ParsedURL:
    """Split ``raw`` into its canonical form, host folder and path.

    Raises MalformedURLError unless the URL is absolute (scheme and host).
    """
    text = (raw or "").strip()
    if not text:
        raise MalformedURLError("Cannot parse url", ValueError("empty url"))
    if _UNSAFE_CHARS.search(text):
        raise MalformedURLError(
            "Cannot parse url", ValueError(f"invalid character in {text!r}")
        )
    try:
        parts = urlsplit(text)
        # port is validated lazily by urllib
        parts.port
    except ValueError as exc:
        raise MalformedURLError("Cannot parse url", exc) from exc
    if not parts.scheme or not parts.netloc:
        raise MalformedURLError(
            "Cannot parse url", ValueError(f"not an absolute url: {text!r}")
        )
    host = parts.netloc.rpartition("@")[2].lower()
    if not host or host in (".", ".."):
        raise MalformedURLError("Cannot parse url", ValueError(f"missing host in {text!r}"))
    # slug the decoded path; the stored url keeps its escapes
    return ParsedURL(urlunsplit(parts), parts.scheme, host, unquote(parts.path))


def slugify(text: str) -> str:
    """Transliterated lowercase slug of letters, digits, ``-`` and ``_``.

    Never contains a path separator.
    """
    return _make_slug(text, regex_pattern=_NON_SLUG).strip("-_")


def bookmark_filename(path: str) -> str:
    slug = slugify(path or ROOT_SLUG)
    return (slug or ROOT_SLUG) + FILE_EXT


def bookmark_relpath(parsed: ParsedURL) -> PurePosixPath:
    """Storage location of a bookmark relative to the repository root."""
    return PurePosixPath(parsed.host) / bookmark_filename(parsed.path)
