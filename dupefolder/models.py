"""
Data models for Duplicate Folder Finder.

Contains dataclasses and enums for file signatures, folder content snapshots
and duplicate folder issues.
"""

from __future__ import annotations

import os
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


def format_size(size_bytes: int) -> str:
    """Format file size in human-readable form."""
    for unit in ['B', 'KB', 'MB', 'GB']:
        if size_bytes < 1024:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} TB"


class ComparisonMode(Enum):
    """
    Fingerprinting strength for an analysis run.

    The integer value is the mode marker written to the cache file.
    """
    QUICK = 0
    DEEP = 1

    @property
    def display_name(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_name(cls, name: str) -> 'ComparisonMode':
        """Parse 'quick' / 'deep' (case-insensitive)."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown comparison mode: {name!r}. Use 'quick' or 'deep'.")


class Severity(Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def rank(self) -> int:
        """Sort rank, lower is more severe."""
        return {Severity.HIGH: 0, Severity.MEDIUM: 1, Severity.LOW: 2}[self]


class DuplicateType(Enum):
    """The three mutually exclusive duplicate folder categories, strictest first."""
    EXACT_COMPLETE = "exact_complete"
    EXACT_FILES_ONLY = "exact_files_only"
    PARTIAL_DUPLICATE = "partial_duplicate"

    @property
    def display_name(self) -> str:
        return {
            DuplicateType.EXACT_COMPLETE: "Exact Complete Duplicate",
            DuplicateType.EXACT_FILES_ONLY: "Exact Files Duplicate",
            DuplicateType.PARTIAL_DUPLICATE: "Partial Duplicate",
        }[self]

    @property
    def long_description(self) -> str:
        return {
            DuplicateType.EXACT_COMPLETE:
                "Folders are identical in every way - same files and same folder structure",
            DuplicateType.EXACT_FILES_ONLY:
                "Folders contain exactly the same image files, but organized differently",
            DuplicateType.PARTIAL_DUPLICATE:
                "Folders share 90% or more of their image files",
        }[self]

    @property
    def severity(self) -> Severity:
        return {
            DuplicateType.EXACT_COMPLETE: Severity.HIGH,
            DuplicateType.EXACT_FILES_ONLY: Severity.MEDIUM,
            DuplicateType.PARTIAL_DUPLICATE: Severity.LOW,
        }[self]

    @property
    def strength(self) -> int:
        """Higher = stricter category."""
        return {
            DuplicateType.EXACT_COMPLETE: 3,
            DuplicateType.EXACT_FILES_ONLY: 2,
            DuplicateType.PARTIAL_DUPLICATE: 1,
        }[self]


@dataclass(frozen=True)
class ContentKey:
    """
    Comparison identity of a file, independent of its path.

    partial_hash is None for Quick mode keys so that Quick and Deep keys
    never compare equal.
    """
    width: int
    height: int
    file_size: int
    partial_hash: Optional[str] = None

    def __str__(self) -> str:
        key = f"{self.width}x{self.height}_{self.file_size}"
        if self.partial_hash is not None:
            key += f"_{self.partial_hash}"
        return key


@dataclass(frozen=True)
class FileSignature:
    """
    Content signature of a single image file.

    Attributes:
        file_size: Size in bytes
        width: Image width in pixels (0 if unreadable)
        height: Image height in pixels (0 if unreadable)
        partial_hash: MD5 hex digest of the head/tail windows, empty when
            not computed (Quick mode or unreadable file)
    """
    file_size: int = 0
    width: int = 0
    height: int = 0
    partial_hash: str = ""

    @property
    def resolution(self) -> str:
        """Return resolution as 'WxH' string."""
        return f"{self.width}x{self.height}"

    def content_key(self, mode: ComparisonMode) -> ContentKey:
        return ContentKey(
            width=self.width,
            height=self.height,
            file_size=self.file_size,
            partial_hash=self.partial_hash if mode is ComparisonMode.DEEP else None,
        )


@dataclass
class FolderContent:
    """
    Snapshot of one directory subtree.

    Attributes:
        all_files: Image file paths relative to the subtree root, in scan order
        all_subfolders: Every nested directory, relative to the subtree root
        file_info: Relative file path -> FileSignature
        total_size: Sum of all file sizes in bytes
        mode: Comparison mode the signatures were computed with
        folder_mtime: Folder modification time (epoch seconds) when scanned
    """
    all_files: list[str] = field(default_factory=list)
    all_subfolders: list[str] = field(default_factory=list)
    file_info: dict[str, FileSignature] = field(default_factory=dict)
    total_size: int = 0
    mode: ComparisonMode = ComparisonMode.QUICK
    folder_mtime: Optional[float] = None

    @property
    def file_count(self) -> int:
        return len(self.all_files)

    @property
    def subfolder_count(self) -> int:
        return len(self.all_subfolders)

    @property
    def is_empty(self) -> bool:
        return not self.all_files

    def signature(self, relative_path: str) -> FileSignature:
        """Signature for a file, zeroed if the snapshot has no entry for it."""
        return self.file_info.get(relative_path, FileSignature())

    def content_keys(self, mode: ComparisonMode) -> Counter:
        """Multiset of content keys, one per file."""
        return Counter(self.signature(path).content_key(mode) for path in self.all_files)

    def content_key_set(self, mode: ComparisonMode) -> set[ContentKey]:
        return {self.signature(path).content_key(mode) for path in self.all_files}


@dataclass
class DuplicateIssue:
    """
    A duplicate relation between two folders.

    Attributes:
        type: Duplicate category
        primary_folder: Folder discovered first
        duplicate_folder: Folder discovered second
        similarity: Similarity in [0, 1]
        total_files: Files taken into account for the comparison
        duplicate_files: Files considered duplicated
        wasted_space: Bytes that could be reclaimed
    """
    type: DuplicateType
    primary_folder: str
    duplicate_folder: str
    similarity: float = 1.0
    total_files: int = 0
    duplicate_files: int = 0
    wasted_space: int = 0

    @property
    def severity(self) -> Severity:
        return self.type.severity

    @property
    def similarity_percent(self) -> int:
        return int(self.similarity * 100 + 0.5)

    @property
    def wasted_space_formatted(self) -> str:
        """Human-readable wasted space."""
        return format_size(self.wasted_space)

    @property
    def description(self) -> str:
        """One-line human-readable summary of the issue."""
        primary = os.path.basename(os.path.normpath(self.primary_folder))
        duplicate = os.path.basename(os.path.normpath(self.duplicate_folder))
        if self.type is DuplicateType.EXACT_COMPLETE:
            return f"'{primary}' and '{duplicate}' are exact duplicates (same files and folder structure)"
        if self.type is DuplicateType.EXACT_FILES_ONLY:
            return f"'{primary}' and '{duplicate}' contain the same files in different folder structures"
        return f"'{primary}' and '{duplicate}' have {self.similarity_percent}% file overlap"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'type': self.type.value,
            'type_name': self.type.display_name,
            'type_description': self.type.long_description,
            'severity': self.severity.value,
            'primary_folder': self.primary_folder,
            'duplicate_folder': self.duplicate_folder,
            'similarity': round(self.similarity, 4),
            'total_files': self.total_files,
            'duplicate_files': self.duplicate_files,
            'wasted_space': self.wasted_space,
            'wasted_space_formatted': self.wasted_space_formatted,
            'description': self.description,
        }


def sort_issues_for_display(issues: list[DuplicateIssue]) -> list[DuplicateIssue]:
    """Most severe first, then largest wasted space."""
    return sorted(issues, key=lambda issue: (issue.severity.rank, -issue.wasted_space))
