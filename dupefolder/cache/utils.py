"""
Shared utilities for the folder content cache.

Provides:
- CacheStats: Hit/miss statistics for an analysis run
- CacheLoadStats: Outcome of loading a cache file
- Validation helpers for cached folder entries
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from ..config import CACHE_MTIME_TOLERANCE
from ..models import FolderContent
from ..scanner.file_discovery import has_image_files


@dataclass
class CacheStats:
    """Statistics about cache usage during an analysis run."""
    cache_hits: int = 0
    cache_misses: int = 0

    @property
    def total_folders(self) -> int:
        return self.cache_hits + self.cache_misses

    @property
    def hit_rate(self) -> float:
        """Return cache hit rate as percentage."""
        if self.total_folders == 0:
            return 0.0
        return (self.cache_hits / self.total_folders) * 100


@dataclass
class CacheLoadStats:
    """Result of loading a cache file from disk."""
    found: bool = False
    discarded: bool = False
    valid_entries: int = 0
    invalid_entries: int = 0
    reason: str = ""


def get_folder_mtime(folder: str) -> Optional[float]:
    """Folder modification time in epoch seconds, or None if it does not exist."""
    try:
        return os.stat(folder).st_mtime
    except OSError:
        return None


def is_content_plausible(folder: str, content: FolderContent) -> bool:
    """
    Basic sanity check of a cached entry against the live folder.

    Rejects entries that claim no files while the folder directly contains
    supported images, and entries whose signature table does not match the
    file list.
    """
    if not os.path.isdir(folder):
        return False

    if set(content.file_info) != set(content.all_files):
        return False

    if content.is_empty and has_image_files(folder):
        return False

    return True


def is_mtime_current(folder: str, recorded_mtime: float) -> bool:
    """True if the folder has not been modified after recorded_mtime (with tolerance)."""
    current = get_folder_mtime(folder)
    if current is None:
        return False
    return current <= recorded_mtime + CACHE_MTIME_TOLERANCE


__all__ = [
    'CacheStats',
    'CacheLoadStats',
    'get_folder_mtime',
    'is_content_plausible',
    'is_mtime_current',
]
