"""
Fingerprinting module for the scanner package.

Computes the per-file content signature used for folder comparison:
file size, pixel dimensions read from the image header, and in Deep mode a
bounded partial hash over the head and tail of the file.
"""

from __future__ import annotations

import hashlib
import os
from pathlib import Path

from ..config import PARTIAL_HASH_CHUNK_SIZE
from ..models import ComparisonMode, FileSignature
from .dependencies import Image, _logger


def read_image_dimensions(filepath: str | Path) -> tuple[int, int]:
    """
    Read pixel dimensions from the image header.

    Image.open only parses the header; pixel data is never decoded here.

    Args:
        filepath: Path to the image

    Returns:
        (width, height), or (0, 0) if the header cannot be read
    """
    try:
        with Image.open(filepath) as img:
            return img.width, img.height
    except Exception as e:
        _logger.debug(f"Failed to read image dimensions for {filepath}: {e}")
        return 0, 0


def calculate_partial_hash(
    filepath: str | Path,
    chunk_size: int = PARTIAL_HASH_CHUNK_SIZE,
) -> str:
    """
    Calculate an MD5 digest over the first and last chunk of a file.

    Files no larger than two chunks only contribute their first chunk, so the
    same bytes are never hashed twice.

    Args:
        filepath: Path to the file
        chunk_size: Window size in bytes (default 16 KiB)

    Returns:
        Hex digest, or empty string if the file cannot be read
    """
    hasher = hashlib.md5()
    try:
        with open(filepath, 'rb') as f:
            file_size = os.fstat(f.fileno()).st_size
            hasher.update(f.read(chunk_size))
            if file_size > chunk_size * 2:
                f.seek(file_size - chunk_size)
                hasher.update(f.read(chunk_size))
        return hasher.hexdigest()
    except OSError as e:
        _logger.warning(f"Failed to open file for partial hashing: {filepath}: {e}")
        return ""


def compute_signature(filepath: str | Path, mode: ComparisonMode) -> FileSignature:
    """
    Compute the content signature of an image file.

    Never raises for I/O problems: an unreadable file still gets a signature
    (size from directory metadata, zeroed dimensions and hash) so it keeps
    participating in folder comparisons.

    Args:
        filepath: Path to an image with a supported extension
        mode: QUICK skips the partial hash, DEEP computes it

    Returns:
        FileSignature for the file
    """
    try:
        file_size = os.stat(filepath).st_size
    except OSError as e:
        _logger.debug(f"Cannot stat {filepath}: {e}")
        file_size = 0

    width, height = read_image_dimensions(filepath)

    partial_hash = ""
    if mode is ComparisonMode.DEEP:
        partial_hash = calculate_partial_hash(filepath)

    return FileSignature(
        file_size=file_size,
        width=width,
        height=height,
        partial_hash=partial_hash,
    )


__all__ = [
    'read_image_dimensions',
    'calculate_partial_hash',
    'compute_signature',
]
