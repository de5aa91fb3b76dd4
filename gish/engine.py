# gish/engine.py
"""
Hashing engine.

A Hasher owns everything one hashing run shares:
1. A StatCache (lstat memoization with periodic flush)
2. A tree gate bounding concurrent directory listings
3. A blob gate bounding concurrent file/symlink reads

and dispatches each path to the blob or tree encoder by its lstat() kind.
"""

import asyncio
import logging
import os
from typing import Optional

from . import blob, tree
from .config import HasherConfig
from .errors import HashOutcome
from .gate import Gate
from .objects import EntryKind, kind_of
from .stat_cache import CacheStats, StatCache

logger = logging.getLogger(__name__)


class Hasher:
    """
    Git-compatible digests for files, symlinks and directory trees.

    Usage:
        async with Hasher() as hasher:
            digest = await hasher.hash_anything("/path/to/dir")
    """

    def __init__(self, config: Optional[HasherConfig] = None):
        self.config = config or HasherConfig()
        errors = self.config.validate()
        if errors:
            raise ValueError(f"Invalid config: {errors}")
        self.stat_cache = StatCache(self.config.stat_flush_interval)
        self.tree_gate = Gate(self.config.tree_concurrency, name="tree")
        self.blob_gate = Gate(self.config.blob_concurrency, name="blob")

    async def __aenter__(self) -> "Hasher":
        self.stat_cache.start()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        """Stop the stat cache flush loop."""
        await self.stat_cache.close()

    async def outcome(self, path) -> HashOutcome:
        """
        Hash any supported path, reporting an empty directory as an outcome.

        Raises:
            UnhashableEntryError: for unsupported file types
            OSError: for I/O failures
        """
        path = os.fspath(path)
        st = await self.stat_cache.lstat(path)
        kind = kind_of(st, path)

        if kind is EntryKind.DIRECTORY:
            return await tree.tree_outcome(self, path)
        if kind is EntryKind.SYMLINK:
            return HashOutcome.ok(path, await self.hash_link(path))
        async with self.blob_gate.slot():
            digest = await blob.hash_file(path, st.st_size, self.config.chunk_size)
        return HashOutcome.ok(path, digest)

    async def hash_anything(self, path) -> bytes:
        """
        Digest of a file, symlink or directory.

        Raises:
            EmptyDirectoryError: if path is a directory with nothing hashable
            UnhashableEntryError: for unsupported file types
        """
        outcome = await self.outcome(path)
        return outcome.unwrap()

    async def hash_tree(self, path) -> bytes:
        """Tree digest of a directory."""
        return await tree.hash_tree(self, path)

    async def hash_file(self, path) -> bytes:
        """Blob digest of a regular file's contents."""
        st = await self.stat_cache.lstat(path)
        async with self.blob_gate.slot():
            return await blob.hash_file(path, st.st_size, self.config.chunk_size)

    async def hash_link(self, path) -> bytes:
        """Blob digest of a symlink's target text."""
        async with self.blob_gate.slot():
            return await blob.hash_link(path)

    async def tree_entry(self, dir_path, name: str) -> bytes:
        """Raw tree entry bytes for one child of dir_path."""
        return await tree.tree_entry(self, dir_path, name)

    def get_cache_stats(self) -> CacheStats:
        """Get stat cache statistics."""
        return self.stat_cache.stats


async def hash_anything(path, config: Optional[HasherConfig] = None) -> bytes:
    """Digest of a file, symlink or directory, using a fresh Hasher."""
    async with Hasher(config) as hasher:
        return await hasher.hash_anything(path)


async def hash_tree(path, config: Optional[HasherConfig] = None) -> bytes:
    async with Hasher(config) as hasher:
        return await hasher.hash_tree(path)


async def hash_file(path, config: Optional[HasherConfig] = None) -> bytes:
    async with Hasher(config) as hasher:
        return await hasher.hash_file(path)


async def hash_link(path, config: Optional[HasherConfig] = None) -> bytes:
    async with Hasher(config) as hasher:
        return await hasher.hash_link(path)


async def tree_entry(dir_path, name: str, config: Optional[HasherConfig] = None) -> bytes:
    async with Hasher(config) as hasher:
        return await hasher.tree_entry(dir_path, name)


def hash_path(path, config: Optional[HasherConfig] = None) -> bytes:
    """
    Blocking wrapper around hash_anything().

    Must not be called from inside a running event loop.
    """
    logger.debug(f"Hashing {path}")
    return asyncio.run(hash_anything(path, config))
