"""
Duplicate Folder Finder
=======================
Finds folders of images that duplicate each other.

Features:
- Recursive comparison of every folder and subfolder of the given trees
- Quick mode: file size + image dimensions
- Deep mode: adds a partial MD5 over the first/last 16 KiB of each file
- Three duplicate categories: exact complete, exact files only, partial (90%+)
- Versioned cache file so unchanged folders are not fingerprinted again
- Cooperative progress reporting and cancellation
- CLI for automation

Author: Zach
"""

__version__ = "1.0.0"
__author__ = "Zedidence"

from .models import (
    ComparisonMode,
    ContentKey,
    DuplicateIssue,
    DuplicateType,
    FileSignature,
    FolderContent,
    Severity,
)
from .config import IMAGE_EXTENSIONS, PARTIAL_DUPLICATE_THRESHOLD, CACHE_FORMAT_VERSION
from .scanner import (
    ScanCancelled,
    calculate_partial_hash,
    calculate_similarity,
    classify_pair,
    collect_folders,
    compute_signature,
    count_image_files,
    scan_folder,
)
from .cache import FolderContentCache, CacheStats, CacheLoadStats, default_cache_file
from .state import AnalysisPhase, AnalysisSession
from .orchestrator import (
    AnalysisOutcome,
    AnalysisResult,
    DuplicateFolderAnalyzer,
    FolderSource,
    ProgressSink,
    StaticFolderSource,
)

__all__ = [
    "ComparisonMode",
    "ContentKey",
    "DuplicateIssue",
    "DuplicateType",
    "FileSignature",
    "FolderContent",
    "Severity",
    "IMAGE_EXTENSIONS",
    "PARTIAL_DUPLICATE_THRESHOLD",
    "CACHE_FORMAT_VERSION",
    "ScanCancelled",
    "calculate_partial_hash",
    "calculate_similarity",
    "classify_pair",
    "collect_folders",
    "compute_signature",
    "count_image_files",
    "scan_folder",
    "FolderContentCache",
    "CacheStats",
    "CacheLoadStats",
    "default_cache_file",
    "AnalysisPhase",
    "AnalysisSession",
    "AnalysisOutcome",
    "AnalysisResult",
    "DuplicateFolderAnalyzer",
    "FolderSource",
    "ProgressSink",
    "StaticFolderSource",
]
