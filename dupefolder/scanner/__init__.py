"""
Scanner package for the Duplicate Folder Finder.

Provides folder walking, per-file fingerprinting and folder pair
classification.

Public API:
- collect_folders: Expand top-level folders into every folder to compare
- count_image_files: Count supported images in a folder tree
- compute_signature: Fingerprint a single image file
- calculate_partial_hash: MD5 over the head and tail of a file
- scan_folder: Build a FolderContent snapshot for a folder tree
- classify_pair: Classify two folders into a duplicate category
- calculate_similarity: Jaccard similarity of two folders
- has_tqdm_support: Check if tqdm progress bars are available
"""

from __future__ import annotations

from .file_discovery import (
    is_supported_image,
    list_directory,
    has_image_files,
    count_image_files,
    collect_folders,
)
from .fingerprint import (
    read_image_dimensions,
    calculate_partial_hash,
    compute_signature,
)
from .folder_scan import ScanCancelled, scan_folder
from .classification import (
    are_signatures_identical,
    is_exact_complete_duplicate,
    is_exact_files_only_duplicate,
    calculate_similarity,
    classify_pair,
)

from .dependencies import HAS_TQDM


def has_tqdm_support() -> bool:
    """Check if tqdm progress bars are available."""
    return HAS_TQDM


__all__ = [
    # File discovery
    'is_supported_image',
    'list_directory',
    'has_image_files',
    'count_image_files',
    'collect_folders',
    # Fingerprinting
    'read_image_dimensions',
    'calculate_partial_hash',
    'compute_signature',
    # Folder scanning
    'ScanCancelled',
    'scan_folder',
    # Classification
    'are_signatures_identical',
    'is_exact_complete_duplicate',
    'is_exact_files_only_duplicate',
    'calculate_similarity',
    'classify_pair',
    # Feature detection
    'has_tqdm_support',
]
