"""Shared fixtures: an in-memory version-control backend."""

from pathlib import Path
from typing import Dict, List

import pytest

from stribor.config import Config
from stribor.errors import NotARepositoryError, StageOrCommitError
from stribor.vcs import Backend, Commit, Repository, Signature, Status


class MemoryRepository(Repository):
    """Tracks the index and history in memory; files live on the real disk."""

    def __init__(self, root: Path):
        super().__init__(root)
        self.identity = None
        self.index = set()
        self.commits: List[Commit] = []
        self.staged = set()

    def set_identity(self, name, email):
        self.identity = (name, email)

    def _files(self):
        return {p.relative_to(self.root).as_posix() for p in self.root.rglob("*") if p.is_file()}

    def status(self):
        tracked = frozenset(self.index)
        return Status(untracked=frozenset(self._files() - tracked), tracked=tracked)

    def stage(self, relpath):
        if not (self.root / relpath).is_file():
            raise StageOrCommitError("Cannot stage file", FileNotFoundError(relpath))
        self.index.add(relpath)
        self.staged.add(relpath)

    def commit(self, message, author: Signature):
        if not self.staged:
            raise StageOrCommitError("Cannot commit file", RuntimeError("nothing to commit"))
        self.staged.clear()
        c = Commit(sha=f"{len(self.commits) + 1:040x}", author=author, message=message)
        self.commits.append(c)
        return c

    def log(self):
        return list(reversed(self.commits))


class MemoryBackend(Backend):
    def __init__(self):
        self.repos: Dict[Path, MemoryRepository] = {}

    def init(self, path):
        repo = MemoryRepository(path)
        self.repos[Path(path)] = repo
        return repo

    def open(self, path):
        repo = self.repos.get(Path(path))
        if repo is None or not Path(path).is_dir():
            raise NotARepositoryError("Not a git repo", FileNotFoundError(str(path)))
        return repo


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def config(tmp_path):
    home = tmp_path / "home"
    home.mkdir()
    return Config(dir_home=home, dir_name="bookmarks")


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "stribor.yaml"
