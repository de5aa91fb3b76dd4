#!/usr/bin/env python3
"""
gish CLI

Prints the git object id of a file, symlink or directory tree.

Usage:
  gish <path> [--config <file.yaml>] [--tree-concurrency N] [--blob-concurrency N] [-v]
"""

import argparse
import logging
import sys
import traceback
from dataclasses import replace
from typing import List, Optional

from .config import HasherConfig
from .engine import hash_path


def build_config(args) -> HasherConfig:
    """Config file first, then command line overrides."""
    config = HasherConfig.from_file(args.config) if args.config else HasherConfig()
    overrides = {}
    if args.tree_concurrency is not None:
        overrides["tree_concurrency"] = args.tree_concurrency
    if args.blob_concurrency is not None:
        overrides["blob_concurrency"] = args.blob_concurrency
    if overrides:
        config = replace(config, **overrides)
        errors = config.validate()
        if errors:
            raise ValueError(f"Invalid config: {errors}")
    return config


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="gish",
        description="Compute git-compatible object ids for files and directory trees",
    )
    parser.add_argument("path", help="File, symlink or directory to hash")
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--tree-concurrency", type=int,
                        help="Max concurrent directory listings (default: 100)")
    parser.add_argument("--blob-concurrency", type=int,
                        help="Max concurrent file reads (default: 100)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log debug output to stderr")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        config = build_config(args)
        digest = hash_path(args.path, config)
    except Exception:
        traceback.print_exc(file=sys.stderr)
        return 1

    sys.stdout.write(digest.hex() + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
