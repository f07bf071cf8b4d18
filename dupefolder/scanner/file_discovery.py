"""
File discovery module for the scanner package.

Provides directory listing, image counting and recursive folder expansion.
Listings are sorted by name so every walk visits entries in the same order.
"""

from __future__ import annotations

import os
from pathlib import Path

from ..config import IMAGE_EXTENSIONS
from .dependencies import _logger


def is_supported_image(filename: str) -> bool:
    """Check the file name against the extension allow-list (case-insensitive)."""
    return os.path.splitext(filename)[1].lower() in IMAGE_EXTENSIONS


def list_directory(folder: str | Path) -> tuple[list[str], list[str]]:
    """
    List the supported image files and subdirectories of one folder.

    Args:
        folder: Directory to list

    Returns:
        Tuple of (image file names, subdirectory names), each sorted by name.
        Both are empty if the folder cannot be read.

    Notes:
        - Symlinked directories are not returned, so walks cannot loop
        - Hidden entries (names starting with ".") are skipped
    """
    files: list[str] = []
    subdirs: list[str] = []
    try:
        with os.scandir(folder) as entries:
            for entry in entries:
                if entry.name.startswith('.'):
                    continue
                try:
                    if entry.is_dir(follow_symlinks=False):
                        subdirs.append(entry.name)
                    elif entry.is_file() and is_supported_image(entry.name):
                        files.append(entry.name)
                except OSError as e:
                    _logger.debug(f"Skipping unreadable entry {entry.path}: {e}")
    except OSError as e:
        _logger.debug(f"Cannot list directory {folder}: {e}")
        return [], []

    files.sort()
    subdirs.sort()
    return files, subdirs


def has_image_files(folder: str | Path) -> bool:
    """Check whether a folder directly contains at least one supported image."""
    files, _ = list_directory(folder)
    return bool(files)


def count_image_files(folder: str | Path) -> int:
    """
    Count supported image files in a folder and all of its subfolders.

    Args:
        folder: Root directory

    Returns:
        Number of image files (0 if the folder does not exist)
    """
    files, subdirs = list_directory(folder)
    count = len(files)
    for name in subdirs:
        count += count_image_files(os.path.join(folder, name))
    return count


def _collect_subfolders(parent: str, folders: list[str]) -> None:
    _, subdirs = list_directory(parent)
    for name in subdirs:
        path = os.path.join(parent, name)
        folders.append(path)
        _collect_subfolders(path, folders)


def collect_folders(top_level_folders: list[str]) -> list[str]:
    """
    Expand top-level folders into every folder to compare.

    Each top-level folder is followed by all of its nested subfolders in
    depth-first, name-sorted order.

    Args:
        top_level_folders: Folders supplied by the caller

    Returns:
        Absolute folder paths, first occurrence kept when roots overlap
    """
    expanded: list[str] = []
    for top in top_level_folders:
        top = os.path.abspath(top)
        if not os.path.isdir(top):
            _logger.warning(f"Folder does not exist: {top}")
        expanded.append(top)
        _collect_subfolders(top, expanded)

    seen = set()
    folders = []
    for path in expanded:
        if path not in seen:
            seen.add(path)
            folders.append(path)
    return folders


__all__ = [
    'is_supported_image',
    'list_directory',
    'has_image_files',
    'count_image_files',
    'collect_folders',
]
