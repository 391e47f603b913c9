"""
Disk-backed key/value storage.

Wraps the diskcache library so the persistence layer can keep the
invoice collection between runs. diskcache is thread-safe and
process-safe, which keeps concurrent readers of the same directory
consistent.
"""

from pathlib import Path
from typing import Any

import diskcache


class DiskCache:
    """
    Thin wrapper over diskcache.Cache scoped to one directory.

    Attributes:
        cache_dir: Path to the cache directory.
    """

    def __init__(self, cache_dir: str | Path) -> None:
        """
        Open (or create) the cache directory.

        Args:
            cache_dir: Directory path for storing cache files.
        """
        self.cache_dir = Path(cache_dir)
        self._cache = diskcache.Cache(str(self.cache_dir))

    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value for key, or default when absent."""
        return self._cache.get(key, default=default)

    def set(self, key: str, value: Any) -> None:
        """Store value under key without expiration."""
        self._cache.set(key, value)

    def close(self) -> None:
        """Close the cache and release resources."""
        self._cache.close()

