"""Writing bookmark files."""

import os
from pathlib import Path

import yaml

from .errors import BookmarkWriteError, SerializationError
from .models import Bookmark


class _BookmarkDumper(yaml.SafeDumper):
    pass


def _represent_str(dumper, data):
    # empty strings as "" rather than ''
    if data == "":
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style='"')
    return dumper.represent_str(data)


_BookmarkDumper.add_representer(str, _represent_str)


def dump_bookmark(bookmark: Bookmark) -> str:
    try:
        return yaml.dump(
            bookmark.to_meta(),
            Dumper=_BookmarkDumper,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
    except yaml.YAMLError as exc:
        raise SerializationError("Cannot convert to yaml", exc) from exc


def atomic_write(path: Path, data: str) -> None:
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(data, encoding="utf-8")
    os.replace(tmp, path)


def write_if_absent(path: Path, data: str) -> bool:
    """Write ``data`` to ``path`` unless a file is already there.

    Returns True when the file was written.
    """
    if path.exists():
        return False
    try:
        atomic_write(path, data)
    except OSError as exc:
        raise BookmarkWriteError("Cannot write file", exc) from exc
    return True
