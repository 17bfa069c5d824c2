"""Version control for the bookmark directory.

Commands only talk to ``Backend`` and ``Repository``; ``GitBackend`` drives
the ``git`` executable, tests substitute an in-memory implementation.
"""

import os
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import FrozenSet, List, Optional, Sequence, Type

from .errors import (
    NotARepositoryError,
    RepositoryInitError,
    StageOrCommitError,
    StatusUnavailableError,
    StriborError,
    WorktreeUnavailableError,
)


def local_now() -> datetime:
    return datetime.now(timezone.utc).astimezone().replace(microsecond=0)


@dataclass(frozen=True)
class Signature:
    name: str
    email: str
    when: datetime = field(default_factory=local_now)

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


@dataclass(frozen=True)
class Commit:
    sha: str
    author: Signature
    message: str

    def __str__(self) -> str:
        when = self.author.when
        date = f"{when:%a %b} {when.day} {when:%H:%M:%S %Y %z}"
        body = "\n".join(f"    {line}" for line in self.message.rstrip("\n").splitlines())
        return f"commit {self.sha}\nAuthor: {self.author}\nDate:   {date}\n\n{body}\n"


@dataclass(frozen=True)
class Status:
    """Working-tree paths, POSIX-style and relative to the repository root."""

    untracked: FrozenSet[str] = frozenset()
    tracked: FrozenSet[str] = frozenset()

    def is_untracked(self, relpath: str) -> bool:
        return str(relpath) in self.untracked


class Repository(ABC):
    def __init__(self, root: Path):
        self.root = Path(root)

    @abstractmethod
    def set_identity(self, name: str, email: str) -> None:
        ...

    @abstractmethod
    def status(self) -> Status:
        ...

    @abstractmethod
    def stage(self, relpath: str) -> None:
        ...

    @abstractmethod
    def commit(self, message: str, author: Signature) -> Commit:
        ...

    @abstractmethod
    def log(self) -> List[Commit]:
        """Commits reachable from HEAD, newest first."""


class Backend(ABC):
    @abstractmethod
    def init(self, path: Path) -> Repository:
        """Create a non-bare repository in the existing directory ``path``."""

    @abstractmethod
    def open(self, path: Path) -> Repository:
        """Open the repository whose root is ``path``."""


# ---------------------------
# git executable
# ---------------------------


def _run_git(
    cwd: Path,
    args: Sequence[str],
    error: Type[StriborError],
    message: str,
    env: Optional[dict] = None,
) -> str:
    try:
        r = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            env=env,
        )
    except OSError as exc:
        raise error(message, exc) from exc
    if r.returncode != 0:
        detail = (r.stderr or r.stdout).strip() or f"git exited with {r.returncode}"
        raise error(message, RuntimeError(detail))
    return r.stdout


class GitRepository(Repository):
    def _git(self, args, error, message, env=None) -> str:
        return _run_git(self.root, args, error, message, env=env)

    def set_identity(self, name: str, email: str) -> None:
        self._git(["config", "user.name", name], RepositoryInitError, "Cannot set identity")
        self._git(["config", "user.email", email], RepositoryInitError, "Cannot set identity")

    def status(self) -> Status:
        out = self._git(
            ["status", "--porcelain=v1", "-z", "--untracked-files=all"],
            StatusUnavailableError,
            "Cannot get status",
        )
        untracked = set()
        entries = iter(out.split("\0"))
        for entry in entries:
            if not entry:
                continue
            code, path = entry[:2], entry[3:]
            if code == "??":
                untracked.add(path)
            elif code[0] in "RC":
                # rename/copy entries are followed by the source path
                next(entries, None)
        listed = self._git(["ls-files", "-z"], StatusUnavailableError, "Cannot get status")
        tracked = {p for p in listed.split("\0") if p}
        return Status(untracked=frozenset(untracked), tracked=frozenset(tracked))

    def stage(self, relpath: str) -> None:
        self._git(["add", "--", str(relpath)], StageOrCommitError, "Cannot stage file")

    def commit(self, message: str, author: Signature) -> Commit:
        when = author.when.isoformat()
        env = dict(os.environ)
        env.update(
            GIT_AUTHOR_NAME=author.name,
            GIT_AUTHOR_EMAIL=author.email,
            GIT_AUTHOR_DATE=when,
            GIT_COMMITTER_NAME=author.name,
            GIT_COMMITTER_EMAIL=author.email,
            GIT_COMMITTER_DATE=when,
        )
        self._git(
            ["-c", "commit.gpgsign=false", "commit", "--no-verify", "-m", message],
            StageOrCommitError,
            "Cannot commit file",
            env=env,
        )
        sha = self._git(["rev-parse", "HEAD"], StageOrCommitError, "Cannot read HEAD").strip()
        return Commit(sha=sha, author=author, message=message)

    def log(self) -> List[Commit]:
        try:
            self._git(
                ["rev-parse", "--verify", "-q", "HEAD"], StatusUnavailableError, "No commits yet"
            )
        except StatusUnavailableError:
            return []
        out = self._git(
            ["log", "--format=%H%x00%an%x00%ae%x00%aI%x00%B%x1e"],
            StatusUnavailableError,
            "Cannot read log",
        )
        commits = []
        for record in out.split("\x1e"):
            record = record.strip("\n")
            if not record:
                continue
            sha, name, email, date, body = record.split("\0", 4)
            author = Signature(name, email, datetime.fromisoformat(date))
            commits.append(Commit(sha=sha, author=author, message=body.rstrip("\n")))
        return commits


class GitBackend(Backend):
    def init(self, path: Path) -> Repository:
        _run_git(path, ["init", "--quiet"], RepositoryInitError, "Cannot initialize repository")
        return GitRepository(path)

    def open(self, path: Path) -> Repository:
        path = Path(path)
        if not path.is_dir():
            raise NotARepositoryError("Not a git repo", FileNotFoundError(str(path)))
        bare = _run_git(
            path, ["rev-parse", "--is-bare-repository"], NotARepositoryError, "Not a git repo"
        ).strip()
        if bare == "true":
            raise WorktreeUnavailableError(
                "Cannot get work tree", RuntimeError(f"{path} is a bare repository")
            )
        top = _run_git(
            path, ["rev-parse", "--show-toplevel"], WorktreeUnavailableError, "Cannot get work tree"
        ).strip()
        if Path(top).resolve() != path.resolve():
            # path sits inside some other repository
            raise NotARepositoryError(
                "Not a git repo", RuntimeError(f"{path} is inside {top}")
            )
        return GitRepository(path)
