# gish/objects.py
"""
Git object model encoding.

Objects are content-addressed: digest = SHA-1(type + " " + length + "\\0" + body)
Only blobs and trees are produced. Their byte layout must match git exactly,
otherwise digests stop agreeing with `git hash-object` / `git write-tree`.
"""

import hashlib
import os
import stat
from enum import Enum
from typing import Iterable, List, Tuple

from .errors import UnhashableEntryError

DIGEST_SIZE = 20

OBJ_BLOB = b"blob"
OBJ_TREE = b"tree"


class EntryKind(Enum):
    """Filesystem entry kinds that can be hashed, valued by their git mode."""
    REGULAR_FILE = b"100644"
    EXECUTABLE_FILE = b"100755"
    SYMLINK = b"120000"
    DIRECTORY = b"40000"  # git writes 040000 without the leading zero

    @property
    def mode(self) -> bytes:
        return self.value


def kind_of(st: os.stat_result, path: str = "") -> EntryKind:
    """
    Classify lstat() metadata.

    Regular files are executable when the owner execute bit is set; all
    other permission bits are ignored, as git does.

    Raises:
        UnhashableEntryError: for devices, sockets, FIFOs and the like
    """
    mode = st.st_mode
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    if stat.S_ISLNK(mode):
        return EntryKind.SYMLINK
    if stat.S_ISREG(mode):
        if mode & stat.S_IXUSR:
            return EntryKind.EXECUTABLE_FILE
        return EntryKind.REGULAR_FILE
    raise UnhashableEntryError(path, mode)


def header(obj_type: bytes, length: int) -> bytes:
    """Object framing header, e.g. b"blob 6\\0"."""
    return b"%s %d\0" % (obj_type, length)


def hash_object(obj_type: bytes, body: bytes) -> bytes:
    """Digest of a fully in-memory object."""
    hasher = hashlib.sha1()
    hasher.update(header(obj_type, len(body)))
    hasher.update(body)
    return hasher.digest()


def encode_entry(kind: EntryKind, name: str, digest: bytes) -> bytes:
    """Serialize one tree entry: <mode> SP <name> NUL <raw digest>."""
    if len(digest) != DIGEST_SIZE:
        raise ValueError(f"Expected {DIGEST_SIZE}-byte digest, got {len(digest)}")
    return kind.mode + b" " + os.fsencode(name) + b"\0" + digest


def sort_key(name: str, kind: EntryKind) -> bytes:
    """
    Git tree ordering key.

    Directories sort as if their name ended in "/", so "a.x/" comes
    before "a/" but "a" (a file) comes before "a.x".
    """
    key = os.fsencode(name)
    if kind is EntryKind.DIRECTORY:
        key += b"/"
    return key


def sort_entries(entries: Iterable[Tuple[str, EntryKind]]) -> List[Tuple[str, EntryKind]]:
    """Order (name, kind) pairs the way git orders tree entries."""
    return sorted(entries, key=lambda e: sort_key(e[0], e[1]))


def encode_tree(entries: Iterable[bytes]) -> bytes:
    """Digest a tree from already-ordered entry bytes."""
    return hash_object(OBJ_TREE, b"".join(entries))
