"""
Folder content cache for Duplicate Folder Finder.

Keeps FolderContent snapshots across analysis runs so unchanged folders are
not fingerprinted again:
- In-memory map of folder path -> FolderContent
- Versioned binary cache file, discarded entirely on version mismatch
- Entries validated on load against folder mtime and a plausibility check

Public API:
- FolderContentCache: Main cache class
- CacheStats / CacheLoadStats: Statistics dataclasses
- CacheFormatError: Raised by the stream reader on malformed files
- default_cache_file(): Cache file location for a project directory
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from ..config import CACHE_FILE_NAME
from .core import FolderContentCache
from .stream import CacheFormatError
from .utils import CacheStats, CacheLoadStats


def default_cache_file(project_dir: Optional[str | Path] = None) -> str:
    """
    Get the cache file path.

    Args:
        project_dir: Project directory to store the cache in. Uses the user
            configured location if None.

    Example:
        cache.load_from_disk(default_cache_file('/photos/project'))
    """
    if project_dir is not None:
        return os.path.join(str(project_dir), CACHE_FILE_NAME)

    from ..user_config import get_user_config
    return get_user_config().cache_file


__all__ = [
    'FolderContentCache',
    'CacheStats',
    'CacheLoadStats',
    'CacheFormatError',
    'default_cache_file',
]
