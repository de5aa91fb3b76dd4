#!/usr/bin/env python3
"""
Compare gish against the git binary for a path.

Files and symlinks are checked with `git hash-object`; directories are
staged into a throwaway repository and checked with `git write-tree`.
Ignore rules are bypassed (`git add -f`) so both see the same files.
"""

import os
import subprocess
import sys
import tempfile
from pathlib import Path

from gish import hash_path


def git(*args: str, cwd: Path = None) -> str:
    result = subprocess.run(
        ["git", "-c", "core.autocrlf=false", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def git_object_id(path: Path) -> str:
    """Object id according to git itself."""
    if path.is_symlink():
        target = os.readlink(os.fsencode(path))
        result = subprocess.run(
            ["git", "hash-object", "--stdin"],
            input=target,
            capture_output=True,
            check=True,
        )
        return result.stdout.decode().strip()

    if not path.is_dir():
        return git("hash-object", "--no-filters", str(path))

    with tempfile.TemporaryDirectory() as scratch:
        repo = Path(scratch) / "repo"
        git("init", "-q", str(repo))
        git_dir = str(repo / ".git")
        git("--git-dir", git_dir, "--work-tree", str(path), "add", "-A", "-f", ".", cwd=path)
        return git("--git-dir", git_dir, "write-tree")


def main():
    if len(sys.argv) > 1:
        path = Path(sys.argv[1])
    else:
        path = Path.cwd()

    ours = hash_path(path).hex()
    theirs = git_object_id(path)
    print(f"Path: {path}")
    print(f"gish: {ours}")
    print(f"git:  {theirs}")
    if ours != theirs:
        print("MISMATCH")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
