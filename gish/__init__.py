# gish - Git-compatible content hashing for files and directory trees
#
# Computes the same object ids git would (`git hash-object` for files and
# symlinks, `git write-tree` for directories) without touching a repository.
#
# Core concepts:
# - Blob: a file's bytes or a symlink's target text, framed as "blob <len>\0"
# - Tree: a directory's sorted (mode, name, digest) entries, framed as "tree <len>\0"
# - Hasher: owns the stat cache and concurrency gates for one hashing run

from .config import HasherConfig
from .engine import (
    Hasher,
    hash_anything,
    hash_file,
    hash_link,
    hash_path,
    hash_tree,
    tree_entry,
)
from .errors import (
    EmptyDirectoryError,
    GishError,
    HashOutcome,
    OutcomeStatus,
    UnhashableEntryError,
)
from .gate import Gate, gate
from .objects import EntryKind
from .stat_cache import CacheStats, StatCache

__all__ = [
    # Engine
    "Hasher",
    "HasherConfig",
    "hash_anything",
    "hash_tree",
    "hash_file",
    "hash_link",
    "tree_entry",
    "hash_path",
    # Errors
    "GishError",
    "EmptyDirectoryError",
    "UnhashableEntryError",
    "HashOutcome",
    "OutcomeStatus",
    # Building blocks
    "EntryKind",
    "Gate",
    "gate",
    "StatCache",
    "CacheStats",
]

__version__ = "0.1.0"
