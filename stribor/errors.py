"""Exceptions raised by stribor commands.

Commands never exit the process; ``stribor.cli.main`` maps these to a
message on stderr and the exception's ``exit_code``.
"""

from typing import Optional


class StriborError(Exception):
    exit_code = 1

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


class MalformedURLError(StriborError):
    pass


class SerializationError(StriborError):
    pass


class BookmarkWriteError(StriborError):
    pass


class DirectoryExistsError(StriborError):
    pass


class RepositoryInitError(StriborError):
    pass


class NotARepositoryError(StriborError):
    exit_code = 2


class WorktreeUnavailableError(StriborError):
    pass


class StatusUnavailableError(StriborError):
    pass


class StageOrCommitError(StriborError):
    pass


class ConfigReadError(StriborError):
    pass


class ConfigWriteError(ConfigReadError):
    pass
