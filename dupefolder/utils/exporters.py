"""
Export functionality for the Duplicate Folder Finder.

Provides functions to export duplicate folder issues to various file formats
including TXT, CSV and JSON.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import TextIO

from ..models import DuplicateIssue, ComparisonMode, sort_issues_for_display
from .formatters import format_file_ratio

EXPORT_FORMATS = ('txt', 'csv', 'json')


def _export_txt(issues: list[DuplicateIssue], mode: ComparisonMode, file_handle: TextIO) -> None:
    """
    Export issues to TXT format.

    Args:
        issues: Issues sorted for display
        mode: Comparison mode of the analysis
        file_handle: Open file handle to write to
    """
    file_handle.write("DUPLICATE FOLDER REPORT\n")
    file_handle.write("=" * 70 + "\n")
    file_handle.write(f"{len(issues)} duplicate folder issues found ({mode.display_name} mode)\n")

    for i, issue in enumerate(issues, 1):
        file_handle.write(f"\nIssue {i}: [{issue.severity.value}] {issue.type.display_name}\n")
        file_handle.write(f"  {issue.description}\n")
        file_handle.write(f"  {issue.type.long_description}\n")
        file_handle.write(f"  Primary:    {issue.primary_folder}\n")
        file_handle.write(f"  Duplicate:  {issue.duplicate_folder}\n")
        file_handle.write(
            f"  Similarity: {issue.similarity_percent}% | "
            f"{format_file_ratio(issue.duplicate_files, issue.total_files)} | "
            f"Wasted: {issue.wasted_space_formatted}\n"
        )


def _export_csv(issues: list[DuplicateIssue], mode: ComparisonMode, file_handle: TextIO) -> None:
    """
    Export issues to CSV format.

    Notes:
        CSV includes: issue_id, mode, severity, type, primary_folder,
                     duplicate_folder, similarity, total_files,
                     duplicate_files, wasted_space
    """
    writer = csv.writer(file_handle)
    writer.writerow([
        'issue_id', 'mode', 'severity', 'type', 'primary_folder', 'duplicate_folder',
        'similarity', 'total_files', 'duplicate_files', 'wasted_space',
    ])
    for i, issue in enumerate(issues, 1):
        writer.writerow([
            i, mode.name.lower(), issue.severity.value, issue.type.value,
            issue.primary_folder, issue.duplicate_folder,
            f"{issue.similarity:.4f}", issue.total_files, issue.duplicate_files,
            issue.wasted_space,
        ])


def _export_json(issues: list[DuplicateIssue], mode: ComparisonMode, file_handle: TextIO) -> None:
    json.dump(
        {
            'mode': mode.name.lower(),
            'issue_count': len(issues),
            'issues': [issue.to_dict() for issue in issues],
        },
        file_handle,
        indent=2,
    )


def export_results(
    issues: list[DuplicateIssue],
    mode: ComparisonMode,
    output_path: Path,
    export_format: str = 'txt'
) -> None:
    """
    Export duplicate folder issues to a file.

    Issues are written most severe first.

    Args:
        issues: Issues from an analysis run
        mode: Comparison mode of the run
        output_path: Path to output file
        export_format: Export format ('txt', 'csv' or 'json'). Default: 'txt'

    Raises:
        ValueError: If export_format is not supported
        IOError: If file cannot be written

    Examples:
        >>> export_results(result.issues, result.mode, Path('issues.csv'), 'csv')
    """
    if export_format not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {export_format}. Use 'txt', 'csv' or 'json'.")

    ordered = sort_issues_for_display(issues)
    with open(output_path, 'w', encoding='utf-8', newline='') as f:
        if export_format == 'txt':
            _export_txt(ordered, mode, f)
        elif export_format == 'csv':
            _export_csv(ordered, mode, f)
        else:
            _export_json(ordered, mode, f)


__all__ = ['EXPORT_FORMATS', 'export_results']
