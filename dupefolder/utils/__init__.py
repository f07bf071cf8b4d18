"""
Utilities package for the Duplicate Folder Finder.

Provides:
- formatters: Human-readable counts, durations, sizes and percentages
- exporters: Export duplicate folder issues to files
"""

from __future__ import annotations

# Import submodules for convenient access
from . import formatters
from . import exporters

# Export commonly used functions
from .formatters import format_number, format_elapsed, format_size, format_percent, format_file_ratio
from .exporters import export_results

__all__ = [
    # Submodules
    'formatters',
    'exporters',
    # Formatters
    'format_number',
    'format_elapsed',
    'format_file_ratio',
    'format_size',
    'format_percent',
    # Exporters
    'export_results',
]
