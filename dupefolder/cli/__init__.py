"""
CLI package for the Duplicate Folder Finder.

Provides the command-line interface for analyzing folder trees and reporting
duplicate folders.

Public API:
- main: Entry point for CLI execution
- CLIOrchestrator: CLI workflow orchestration class
- print_issue_report: Function to display results report
"""

from __future__ import annotations

from .orchestrator import CLIOrchestrator, ConsoleProgress, setup_logging
from .arg_parser import create_parser, parse_arguments
from .reporting import print_issue_report


def main(argv=None) -> int:
    """
    Main entry point for the CLI.

    Delegates to CLIOrchestrator to execute the complete workflow.

    Returns:
        Exit code (0 for success, 1 for error, 130 if cancelled)

    Examples:
        >>> # Called from __main__.py
        >>> exit_code = main()
        >>> sys.exit(exit_code)
    """
    orchestrator = CLIOrchestrator()
    return orchestrator.run(argv)


__all__ = [
    # Main entry point
    'main',
    # Core classes
    'CLIOrchestrator',
    'ConsoleProgress',
    # Utilities
    'setup_logging',
    'create_parser',
    'parse_arguments',
    'print_issue_report',
]
