"""
Report formatting and display for the CLI interface.

Provides functions to format and print duplicate folder issues in a
human-readable format.
"""

from __future__ import annotations

from ..models import ComparisonMode, DuplicateIssue, Severity, format_size, sort_issues_for_display
from ..utils.formatters import format_file_ratio, format_percent


def _calculate_statistics(issues: list[DuplicateIssue]) -> dict[str, int]:
    """
    Calculate statistics for a list of issues.

    Returns:
        Dictionary with issue counts per severity and total wasted space
    """
    return {
        'high': sum(1 for i in issues if i.severity is Severity.HIGH),
        'medium': sum(1 for i in issues if i.severity is Severity.MEDIUM),
        'low': sum(1 for i in issues if i.severity is Severity.LOW),
        'total_waste': sum(i.wasted_space for i in issues),
    }


def _print_section_header(title: str) -> None:
    """Print a section header with divider lines."""
    print("\n" + "-" * 70)
    print(title)
    print("-" * 70)


def _print_issue(number: int, issue: DuplicateIssue) -> None:
    print(f"\n{number}. [{issue.severity.value}] {issue.type.display_name}")
    print(f"   {issue.description}")
    print(f"   Primary:   {issue.primary_folder}")
    print(f"   Duplicate: {issue.duplicate_folder}")
    print(f"   Similarity: {format_percent(issue.similarity)} | "
          f"{format_file_ratio(issue.duplicate_files, issue.total_files)} | "
          f"Wasted: {issue.wasted_space_formatted}")


def print_issue_report(issues: list[DuplicateIssue], mode: ComparisonMode) -> None:
    """
    Print a report of duplicate folder issues.

    Issues are sorted most severe first, then by wasted space.
    """
    print("\n" + "=" * 70)
    print("DUPLICATE FOLDER REPORT")
    print("=" * 70)

    if not issues:
        print("\nNo duplicate folder issues found")
        return

    stats = _calculate_statistics(issues)
    print(f"\n{len(issues)} duplicate folder issues found ({mode.display_name} mode)")
    print(f"High: {stats['high']} | Medium: {stats['medium']} | Low: {stats['low']}")

    _print_section_header("ISSUES")
    for number, issue in enumerate(sort_issues_for_display(issues), 1):
        _print_issue(number, issue)

    print("\n" + "=" * 70)
    print(f"Total wasted space: {format_size(stats['total_waste'])}")
    print("=" * 70)


__all__ = ['print_issue_report']
