"""Exception hierarchy and result types for gish.

Fatal conditions are exceptions. An empty directory is not necessarily
fatal, so tree building reports it as a HashOutcome instead and only the
top-level caller turns it into EmptyDirectoryError.
"""

import stat
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class GishError(Exception):
    """Base class for all gish errors."""


def _describe_mode(st_mode: int) -> str:
    if stat.S_ISCHR(st_mode):
        return "character device"
    if stat.S_ISBLK(st_mode):
        return "block device"
    if stat.S_ISFIFO(st_mode):
        return "FIFO"
    if stat.S_ISSOCK(st_mode):
        return "socket"
    return f"file type {stat.S_IFMT(st_mode):o}"


class UnhashableEntryError(GishError):
    """Path is not a regular file, executable, symlink or directory."""

    def __init__(self, path: str, st_mode: int):
        super().__init__(
            f"Cannot hash '{path}': it is a {_describe_mode(st_mode)}. "
            f"Only regular files, symlinks and directories are supported."
        )
        self.path = path
        self.st_mode = st_mode


class EmptyDirectoryError(GishError):
    """Directory has nothing hashable once metadata directories are excluded."""

    def __init__(self, path: str):
        super().__init__(
            f"Directory '{path}' has no hashable entries. "
            f"Git does not record empty directories, so it has no tree id."
        )
        self.path = path


class OutcomeStatus(Enum):
    """Status of hashing one path."""
    OK = "ok"
    EMPTY = "empty"


@dataclass(frozen=True)
class HashOutcome:
    """Result of hashing a path: a digest, or an empty directory marker."""
    path: str
    status: OutcomeStatus
    digest: Optional[bytes] = None

    @classmethod
    def ok(cls, path: str, digest: bytes) -> "HashOutcome":
        return cls(path=path, status=OutcomeStatus.OK, digest=digest)

    @classmethod
    def empty(cls, path: str) -> "HashOutcome":
        return cls(path=path, status=OutcomeStatus.EMPTY)

    @property
    def is_empty(self) -> bool:
        return self.status is OutcomeStatus.EMPTY

    def unwrap(self) -> bytes:
        """Return the digest, raising EmptyDirectoryError for an empty tree."""
        if self.is_empty:
            raise EmptyDirectoryError(self.path)
        return self.digest
