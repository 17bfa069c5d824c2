"""Command implementations for the bookmark manager."""

import shutil
from pathlib import Path
from typing import Optional

from .config import Config, save_config
from .errors import (
    DirectoryExistsError,
    NotARepositoryError,
    RepositoryInitError,
    WorktreeUnavailableError,
)
from .io import dump_bookmark, write_if_absent
from .models import AUTHOR_EMAIL, AUTHOR_NAME, DEFAULT_CATEGORY, LEGACY_DIR_NAME, Bookmark
from .utils import bookmark_relpath, parse_url, warn
from .vcs import Backend, Commit, GitBackend, Repository, Signature


def cmd_init(
    config: Config,
    force: bool = False,
    backend: Optional[Backend] = None,
    config_path: Optional[Path] = None,
) -> Repository:
    """Create the bookmark directory and make it a git repository.

    With ``force`` an existing directory is deleted first. When no config
    file was read, the effective settings are saved to ``config_path``
    (default ``~/.stribor.yaml``) unless that file already exists.

    Args:
        config: Resolved configuration.
        force: Replace an existing bookmark directory.
        backend: Version-control backend, git by default.
        config_path: Where to save settings on first run.
    """
    backend = backend or GitBackend()
    directory = config.directory

    legacy = config.dir_home / f".{LEGACY_DIR_NAME}"
    if config.dir_name != LEGACY_DIR_NAME and legacy.exists():
        shutil.rmtree(legacy, ignore_errors=True)

    if force:
        print("Using --force, I hope you know what you're doing")
        try:
            if directory.is_symlink() or directory.is_file():
                directory.unlink()
            elif directory.exists():
                shutil.rmtree(directory)
        except OSError as exc:
            raise RepositoryInitError(f"Cannot remove {directory}", exc) from exc

    try:
        directory.mkdir(parents=True)
    except FileExistsError as exc:
        raise DirectoryExistsError(
            "Folder already exist, use --force to overwrite", exc
        ) from exc
    except OSError as exc:
        raise RepositoryInitError(f"Cannot create {directory}", exc) from exc

    repo = backend.init(directory)
    repo.set_identity(AUTHOR_NAME, AUTHOR_EMAIL)
    print("Bookmarks folder initialized, add your first bookmark now!")

    if config.config_file is None:
        save_config(config, config_path)
    return repo


def cmd_add(
    config: Config,
    url: str,
    category: str = DEFAULT_CATEGORY,
    backend: Optional[Backend] = None,
) -> Optional[Commit]:
    """Save ``url`` as ``<host>/<slug>.yaml`` and commit it.

    Adding a URL whose file already exists is a no-op. Returns the new
    commit, or None when nothing was committed.
    """
    backend = backend or GitBackend()
    directory = config.directory
    if not directory.is_dir():
        raise NotARepositoryError(
            f"bookmarks folder not found: {directory}. Run `stribor init` first."
        )

    parsed = parse_url(url)
    bookmark = Bookmark(url=parsed.url, title="", category=category or DEFAULT_CATEGORY)
    data = dump_bookmark(bookmark)

    relpath = bookmark_relpath(parsed)
    site_folder = directory / relpath.parent
    try:
        site_folder.mkdir(exist_ok=True)
    except OSError as exc:
        warn(f"cannot create {site_folder}: {exc}")

    if not write_if_absent(directory / relpath, data):
        print(f"Bookmark already exists: {relpath}")
        return None

    repo = backend.open(directory)
    status = repo.status()
    if not status.is_untracked(relpath.as_posix()):
        return None

    repo.stage(relpath.as_posix())
    commit = repo.commit(f"added {parsed.url}", Signature(AUTHOR_NAME, AUTHOR_EMAIL))
    print(commit)
    return commit


def cmd_status(config: Config, backend: Optional[Backend] = None) -> None:
    """Report whether the bookmark directory exists."""
    directory = config.directory
    if not directory.exists():
        print("Bookmarks folder haven't been created, run stribor init to create it")
        return
    try:
        repo = (backend or GitBackend()).open(directory)
    except (NotARepositoryError, WorktreeUnavailableError):
        print(f"Bookmarks folder: {directory}")
        return
    print(f"Bookmarks folder: {directory} ({len(repo.log())} commits)")
