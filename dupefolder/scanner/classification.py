"""
Classification module for the scanner package.

Decides which duplicate category, if any, applies to a pair of folders.
Rules are evaluated strictest first and the first match wins:

1. both folders empty           -> no issue
2. exact complete duplicate     -> same relative files, subfolders and signatures
3. exact files-only duplicate   -> same multiset of content keys
4. partial duplicate            -> Jaccard similarity of content key sets >= 0.90
"""

from __future__ import annotations

import math
from typing import Optional

from ..config import PARTIAL_DUPLICATE_THRESHOLD
from ..models import (
    ComparisonMode,
    DuplicateIssue,
    DuplicateType,
    FileSignature,
    FolderContent,
)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def are_signatures_identical(
    sig1: FileSignature,
    sig2: FileSignature,
    mode: ComparisonMode,
) -> bool:
    """
    Compare two file signatures.

    Quick mode compares size and dimensions only; Deep mode also requires
    equal partial hashes.
    """
    if (sig1.file_size != sig2.file_size
            or sig1.width != sig2.width
            or sig1.height != sig2.height):
        return False

    if mode is ComparisonMode.DEEP and sig1.partial_hash != sig2.partial_hash:
        return False

    return True


def is_exact_complete_duplicate(
    folder1: FolderContent,
    folder2: FolderContent,
    mode: ComparisonMode,
) -> bool:
    """Same relative file paths, same subfolders and identical signatures."""
    if (folder1.file_count != folder2.file_count
            or folder1.subfolder_count != folder2.subfolder_count):
        return False

    files1 = sorted(folder1.all_files)
    if files1 != sorted(folder2.all_files):
        return False

    for relative_path in files1:
        if not are_signatures_identical(
            folder1.signature(relative_path),
            folder2.signature(relative_path),
            mode,
        ):
            return False

    return sorted(folder1.all_subfolders) == sorted(folder2.all_subfolders)


def is_exact_files_only_duplicate(
    folder1: FolderContent,
    folder2: FolderContent,
    mode: ComparisonMode,
) -> bool:
    """
    Same multiset of content keys, ignoring paths and folder structure.

    Identical files inside one folder count separately: {a, a} does not
    match {a, b}.
    """
    if folder1.file_count != folder2.file_count:
        return False

    keys1 = folder1.content_keys(mode)
    return bool(keys1) and keys1 == folder2.content_keys(mode)


def calculate_similarity(
    folder1: FolderContent,
    folder2: FolderContent,
    mode: ComparisonMode,
) -> float:
    """
    Jaccard similarity between the content key sets of two folders.

    Returns:
        |intersection| / |union|; 1.0 if both folders are empty,
        0.0 if only one is
    """
    if folder1.is_empty and folder2.is_empty:
        return 1.0
    if folder1.is_empty or folder2.is_empty:
        return 0.0

    keys1 = folder1.content_key_set(mode)
    keys2 = folder2.content_key_set(mode)
    union = keys1 | keys2
    if not union:
        return 0.0
    return len(keys1 & keys2) / len(union)


def classify_pair(
    primary_path: str,
    primary: FolderContent,
    duplicate_path: str,
    duplicate: FolderContent,
    mode: ComparisonMode,
    threshold: float = PARTIAL_DUPLICATE_THRESHOLD,
) -> Optional[DuplicateIssue]:
    """
    Classify a folder pair into at most one duplicate category.

    Args:
        primary_path: Path of the folder discovered first
        primary: Content of the primary folder
        duplicate_path: Path of the folder discovered second
        duplicate: Content of the duplicate folder
        mode: Comparison mode of the run
        threshold: Minimum similarity for a partial duplicate

    Returns:
        DuplicateIssue, or None if the pair is not a duplicate
    """
    if primary_path == duplicate_path:
        return None

    if primary.is_empty and duplicate.is_empty:
        return None

    if is_exact_complete_duplicate(primary, duplicate, mode):
        return DuplicateIssue(
            type=DuplicateType.EXACT_COMPLETE,
            primary_folder=primary_path,
            duplicate_folder=duplicate_path,
            similarity=1.0,
            total_files=primary.file_count,
            duplicate_files=primary.file_count,
            wasted_space=min(primary.total_size, duplicate.total_size),
        )

    if is_exact_files_only_duplicate(primary, duplicate, mode):
        return DuplicateIssue(
            type=DuplicateType.EXACT_FILES_ONLY,
            primary_folder=primary_path,
            duplicate_folder=duplicate_path,
            similarity=1.0,
            total_files=primary.file_count,
            duplicate_files=primary.file_count,
            wasted_space=min(primary.total_size, duplicate.total_size),
        )

    similarity = calculate_similarity(primary, duplicate, mode)
    if similarity >= threshold:
        total_files = max(primary.file_count, duplicate.file_count)
        return DuplicateIssue(
            type=DuplicateType.PARTIAL_DUPLICATE,
            primary_folder=primary_path,
            duplicate_folder=duplicate_path,
            similarity=similarity,
            total_files=total_files,
            duplicate_files=round_half_away(similarity * total_files),
            wasted_space=round_half_away(similarity * min(primary.total_size, duplicate.total_size)),
        )

    return None


__all__ = [
    'round_half_away',
    'are_signatures_identical',
    'is_exact_complete_duplicate',
    'is_exact_files_only_duplicate',
    'calculate_similarity',
    'classify_pair',
]
