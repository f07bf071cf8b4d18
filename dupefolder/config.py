"""
Configuration constants for Duplicate Folder Finder.

This module contains all configurable settings including:
- Supported image extensions
- Fingerprinting and classification thresholds
- Folder content cache file format and locations
"""

import os

# Supported image extensions (case-insensitive suffix match)
IMAGE_EXTENSIONS = {
    # Common formats
    '.jpg', '.jpeg', '.png', '.bmp', '.gif', '.tiff', '.tif', '.webp',
    # RAW formats
    '.raw', '.cr2', '.nef', '.arw',
}

# Partial hash window: first 16 KiB, plus last 16 KiB for files larger than 32 KiB
PARTIAL_HASH_CHUNK_SIZE = 16 * 1024

# Minimum Jaccard similarity for a partial duplicate (inclusive)
PARTIAL_DUPLICATE_THRESHOLD = 0.90

# Folder content cache format tag - any mismatch discards the whole cache file
CACHE_FORMAT_VERSION = "FolderContentCache_v2.0"

# Slack allowed between a folder's current mtime and the cached one (seconds)
CACHE_MTIME_TOLERANCE = 1.0

# Cache file name when stored inside a project directory
CACHE_FILE_NAME = '.folder_analysis_cache'

# Default cache file location when no project directory is given
CACHE_FILE = os.path.join(os.path.expanduser('~'), '.dupefolder_cache')

# Default comparison mode name ('quick' or 'deep')
DEFAULT_MODE = 'quick'
