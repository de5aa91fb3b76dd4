# gish/blob.py
"""
Blob digests for file contents and symlink targets.

digest = SHA-1("blob " + <byte length> + "\\0" + <raw bytes>)

File contents are streamed in fixed-size chunks so large files are never
held in memory. Reads happen in a worker thread to keep the event loop free.
"""

import asyncio
import hashlib
import os

from .objects import OBJ_BLOB, header, hash_object

DEFAULT_CHUNK_SIZE = 65536


def hash_bytes(data: bytes) -> bytes:
    """Blob digest of an in-memory buffer."""
    return hash_object(OBJ_BLOB, data)


def _hash_file_sync(path: str, size: int, chunk_size: int) -> bytes:
    hasher = hashlib.sha1()
    hasher.update(header(OBJ_BLOB, size))
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            hasher.update(chunk)
    return hasher.digest()


async def hash_file(path, size: int, chunk_size: int = DEFAULT_CHUNK_SIZE) -> bytes:
    """
    Blob digest of a regular file.

    Args:
        path: File to read (opened in binary mode)
        size: Byte length for the header, taken from lstat()
        chunk_size: Read buffer size

    Returns:
        20-byte SHA-1 digest
    """
    return await asyncio.to_thread(_hash_file_sync, os.fspath(path), size, chunk_size)


async def hash_link(path) -> bytes:
    """
    Blob digest of a symlink's target text.

    The link is never followed, so dangling links hash fine.
    """
    target = await asyncio.to_thread(os.readlink, os.fsencode(path))
    return hash_bytes(target)
