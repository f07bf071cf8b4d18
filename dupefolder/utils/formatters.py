"""
Formatting utilities for the Duplicate Folder Finder.

Human-readable counts, durations, percentages and file ratios for reports and
progress messages.
"""

from __future__ import annotations

# Re-export format_size from models for convenience
from ..models import format_size


def format_number(n: int) -> str:
    """
    Format a count with thousands separators.

    Examples:
        >>> format_number(1234567)
        '1,234,567'
    """
    return f"{n:,}"


def format_elapsed(seconds: float) -> str:
    """
    Format an elapsed wall-clock time.

    Examples:
        >>> format_elapsed(4.25)
        '4.2s'
        >>> format_elapsed(150)
        '2m 30s'
        >>> format_elapsed(3665)
        '1h 01m'
    """
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, secs = divmod(int(seconds), 60)
    if minutes < 60:
        return f"{minutes}m {secs}s"
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h {minutes:02d}m"


def format_percent(fraction: float) -> str:
    """
    Format a fraction in [0, 1] as a whole percentage, halves rounded up.

    Examples:
        >>> format_percent(0.9)
        '90%'
        >>> format_percent(1 / 3)
        '33%'
    """
    return f"{int(fraction * 100 + 0.5)}%"


def format_file_ratio(duplicate_files: int, total_files: int) -> str:
    """
    Format the duplicated share of a folder's files.

    Examples:
        >>> format_file_ratio(9, 10)
        '9/10 files'
    """
    noun = "file" if total_files == 1 else "files"
    return f"{format_number(duplicate_files)}/{format_number(total_files)} {noun}"


__all__ = ['format_number', 'format_elapsed', 'format_size', 'format_percent', 'format_file_ratio']
