# gish/tree.py
"""
Tree digests for directories.

A tree is built by:
1. Listing the directory (under the tree gate)
2. Dropping the metadata directory (".git" by default)
3. Sorting children in git order (directories sort with a trailing "/")
4. Hashing every child concurrently through the dispatcher
5. Dropping children that turned out to be empty directories
6. Concatenating entries in sorted order and framing them as a tree object

Git never records empty directories, so a directory whose children all
vanish is itself reported as empty rather than hashed.
"""

import asyncio
import logging
import os
from typing import List, Optional, Tuple

from .errors import EmptyDirectoryError, HashOutcome
from .objects import EntryKind, encode_entry, encode_tree, kind_of, sort_entries

logger = logging.getLogger(__name__)


async def list_entries(hasher, dir_path: str) -> List[Tuple[str, EntryKind]]:
    """
    Hashable children of dir_path as (name, kind), in git tree order.

    Raises:
        UnhashableEntryError: if any child is not a file, symlink or directory
    """
    async with hasher.tree_gate.slot():
        names = await asyncio.to_thread(os.listdir, dir_path)

    # Exact match, and only among this directory's own children.
    names = [name for name in names if name != hasher.config.metadata_dir]

    paths = [os.path.join(dir_path, name) for name in names]
    stats = await asyncio.gather(*(hasher.stat_cache.lstat(p) for p in paths))
    return sort_entries(
        (name, kind_of(st, p)) for name, p, st in zip(names, paths, stats)
    )


async def build_entry(hasher, dir_path: str, name: str) -> Optional[bytes]:
    """
    Entry bytes for one child, or None if the child is an empty directory.
    """
    child = os.path.join(dir_path, name)
    st = await hasher.stat_cache.lstat(child)
    kind = kind_of(st, child)

    outcome = await hasher.outcome(child)
    if outcome.is_empty:
        logger.debug(f"Omitting empty directory {child}")
        return None
    return encode_entry(kind, name, outcome.digest)


async def tree_outcome(hasher, dir_path) -> HashOutcome:
    """Hash a directory, reporting emptiness as an outcome instead of raising."""
    dir_path = os.fspath(dir_path)
    entries = await list_entries(hasher, dir_path)
    if not entries:
        return HashOutcome.empty(dir_path)

    # gather() returns results in argument order, whatever order they finish in.
    built = await asyncio.gather(
        *(build_entry(hasher, dir_path, name) for name, _ in entries)
    )
    surviving = [entry for entry in built if entry is not None]
    if not surviving:
        return HashOutcome.empty(dir_path)

    return HashOutcome.ok(dir_path, encode_tree(surviving))


async def hash_tree(hasher, dir_path) -> bytes:
    """
    Tree digest of a directory.

    Raises:
        EmptyDirectoryError: if nothing hashable is left in the directory
    """
    outcome = await tree_outcome(hasher, dir_path)
    return outcome.unwrap()


async def tree_entry(hasher, dir_path, name: str) -> bytes:
    """
    Raw tree entry bytes for dir_path/name, hashing the child recursively.

    Raises:
        EmptyDirectoryError: if the child is an empty directory
    """
    dir_path = os.fspath(dir_path)
    entry = await build_entry(hasher, dir_path, name)
    if entry is None:
        raise EmptyDirectoryError(os.path.join(dir_path, name))
    return entry
