"""
Folder scanning module for the scanner package.

Walks one directory tree depth-first and fingerprints every supported image,
producing a FolderContent snapshot whose paths are relative to the root.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Optional

from ..models import ComparisonMode, FolderContent
from .dependencies import _logger
from .file_discovery import list_directory
from .fingerprint import compute_signature


class ScanCancelled(Exception):
    """Raised when a scan is cancelled before it completes."""


def _relative(path: str, root: str) -> str:
    return os.path.relpath(path, root).replace(os.sep, '/')


def _scan_recursive(
    folder: str,
    root: str,
    content: FolderContent,
    mode: ComparisonMode,
    depth: int,
    file_callback: Optional[Callable[[str], None]],
    cancel_check: Optional[Callable[[], bool]],
) -> None:
    indent = "  " * depth
    _logger.debug(f"{indent}Scanning folder: {folder}")

    files, subdirs = list_directory(folder)

    for name in files:
        if cancel_check is not None and cancel_check():
            raise ScanCancelled(folder)

        full_path = os.path.join(folder, name)
        relative_path = _relative(full_path, root)

        signature = compute_signature(full_path, mode)
        content.all_files.append(relative_path)
        content.file_info[relative_path] = signature
        content.total_size += signature.file_size

        if file_callback is not None:
            file_callback(relative_path)

    for name in subdirs:
        if cancel_check is not None and cancel_check():
            raise ScanCancelled(folder)

        subdir_path = os.path.join(folder, name)
        content.all_subfolders.append(_relative(subdir_path, root))
        _scan_recursive(subdir_path, root, content, mode, depth + 1, file_callback, cancel_check)


def scan_folder(
    root_path: str | Path,
    mode: ComparisonMode,
    file_callback: Optional[Callable[[str], None]] = None,
    cancel_check: Optional[Callable[[], bool]] = None,
) -> FolderContent:
    """
    Scan a directory tree and fingerprint its image files.

    Files of each directory are processed before its subdirectories, and each
    subdirectory is fully scanned before the next sibling. There is no depth
    limit.

    Args:
        root_path: Directory to scan
        mode: Comparison mode used for every signature
        file_callback: Optional callback(relative_path) after each file
        cancel_check: Optional predicate polled before each file and each
            subdirectory

    Returns:
        FolderContent for the tree (empty if the root does not exist)

    Raises:
        ScanCancelled: If cancel_check returned True; no partial content
            is returned
    """
    root = os.path.abspath(root_path)
    content = FolderContent(mode=mode)

    try:
        content.folder_mtime = os.stat(root).st_mtime
    except OSError:
        _logger.debug(f"Folder does not exist: {root}")
        return content

    _scan_recursive(root, root, content, mode, 0, file_callback, cancel_check)

    _logger.debug(
        f"Folder analysis complete: {root} ({content.file_count} files, "
        f"{content.subfolder_count} subfolders, {content.total_size} bytes)"
    )
    return content


__all__ = ['ScanCancelled', 'scan_folder']
