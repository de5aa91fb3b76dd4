# gish/config.py
"""
Hasher configuration.

Defaults reproduce git's behaviour. A YAML file can override them:

    tree_concurrency: 50
    blob_concurrency: 200
    stat_flush_interval: 1.0
    metadata_dir: .git
    chunk_size: 65536
"""

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .blob import DEFAULT_CHUNK_SIZE
from .gate import DEFAULT_LIMIT
from .stat_cache import DEFAULT_FLUSH_INTERVAL

METADATA_DIR = ".git"


@dataclass
class HasherConfig:
    """
    Tunables for a Hasher.

    Attributes:
        tree_concurrency: Max directory listings in flight
        blob_concurrency: Max file/symlink reads in flight
        stat_flush_interval: Seconds between stat cache flushes
        metadata_dir: Child name skipped in every directory listing
        chunk_size: Read buffer size when streaming file contents
    """
    tree_concurrency: int = DEFAULT_LIMIT
    blob_concurrency: int = DEFAULT_LIMIT
    stat_flush_interval: float = DEFAULT_FLUSH_INTERVAL
    metadata_dir: str = METADATA_DIR
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def validate(self) -> List[str]:
        """Validate settings. Returns list of errors (empty if valid)."""
        errors = []
        for name in ("tree_concurrency", "blob_concurrency", "chunk_size"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                errors.append(f"{name} must be a positive integer, got {value!r}")
        if not isinstance(self.stat_flush_interval, (int, float)) or self.stat_flush_interval <= 0:
            errors.append(
                f"stat_flush_interval must be a positive number, got {self.stat_flush_interval!r}"
            )
        if not isinstance(self.metadata_dir, str) or not self.metadata_dir:
            errors.append(f"metadata_dir must be a non-empty string, got {self.metadata_dir!r}")
        elif "/" in self.metadata_dir:
            errors.append(f"metadata_dir must be a single name, got {self.metadata_dir!r}")
        return errors

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HasherConfig":
        """Build a config, rejecting unknown keys and invalid values."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {unknown}")
        config = cls(**data)
        errors = config.validate()
        if errors:
            raise ValueError(f"Invalid config: {errors}")
        return config

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "HasherConfig":
        data = yaml.safe_load(yaml_content)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError("Config YAML must be a mapping")
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: Path | str) -> "HasherConfig":
        with open(path) as f:
            return cls.from_yaml(f.read())
