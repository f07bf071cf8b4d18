"""
CLI workflow orchestration for the Duplicate Folder Finder.

Provides the CLIOrchestrator class that coordinates the CLI workflow from
argument parsing through analysis, reporting and export.
"""

from __future__ import annotations

import logging
import signal
from typing import Any, Optional

from ..models import ComparisonMode
from ..orchestrator import AnalysisOutcome, DuplicateFolderAnalyzer, StaticFolderSource
from ..scanner import has_tqdm_support
from ..scanner.dependencies import _tqdm_class
from ..state import AnalysisPhase, AnalysisSession
from ..user_config import get_user_config
from ..utils.exporters import export_results
from ..utils.formatters import format_elapsed, format_number
from .arg_parser import parse_arguments
from .reporting import print_issue_report

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CANCELLED = 130

_PHASE_LABELS = {
    AnalysisPhase.COUNTING: ("Counting files", "folder"),
    AnalysisPhase.SCANNING: ("Analyzing files", "img"),
    AnalysisPhase.COMPARING: ("Comparing folders", "pair"),
}


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure logging for the CLI.

    Args:
        verbose: Enable verbose (DEBUG level) logging

    Returns:
        Configured logger instance
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    return logging.getLogger(__name__)


class ConsoleProgress(AnalysisSession):
    """AnalysisSession that mirrors progress on a tqdm bar per phase."""

    def __init__(self, show_progress: bool = True):
        self.show_progress = show_progress and has_tqdm_support()
        self._pbar: Optional[Any] = None
        super().__init__()

    def _close_bar(self) -> None:
        if self._pbar is not None:
            self._pbar.close()
            self._pbar = None

    def on_phase(self, phase: AnalysisPhase) -> None:
        super().on_phase(phase)
        self._close_bar()
        if self.show_progress and phase in _PHASE_LABELS:
            desc, unit = _PHASE_LABELS[phase]
            self._pbar = _tqdm_class(total=0, desc=desc, unit=unit, ncols=80)

    def on_progress(self, current: int, total: int) -> None:
        super().on_progress(current, total)
        if self._pbar is not None:
            if self._pbar.total != total:
                self._pbar.total = total
            self._pbar.n = current
            self._pbar.refresh()

    def close(self) -> None:
        self._close_bar()


class CLIOrchestrator:
    """
    Orchestrates the CLI analysis workflow.

    Ctrl-C is turned into a cancellation request that the analyzer honors
    at the next file or folder pair.
    """

    def __init__(self):
        """Initialize the orchestrator."""
        self.logger = None
        self.args = None
        self.mode = ComparisonMode.QUICK
        self.cache_file = None
        self.progress: Optional[ConsoleProgress] = None

    def run(self, argv=None) -> int:
        """
        Execute the complete CLI workflow.

        Returns:
            Exit code (0 for success, 1 for error, 130 if cancelled)
        """
        self.args = parse_arguments(argv)
        self.logger = setup_logging(self.args.verbose)

        exit_code = self._validate_phase()
        if exit_code != EXIT_OK:
            return exit_code

        self._configure_phase()
        return self._analyze_phase()

    def _validate_phase(self) -> int:
        """Check that every folder given on the command line exists."""
        for folder in self.args.folders:
            if not folder.is_dir():
                self.logger.error(f"Directory not found: {folder}")
                return EXIT_ERROR
        return EXIT_OK

    def _configure_phase(self) -> None:
        """Resolve mode and cache location from arguments and user config."""
        config = get_user_config()
        if self.args.mode:
            self.mode = ComparisonMode.from_name(self.args.mode)
        else:
            self.mode = config.default_mode

        if self.args.no_cache:
            self.cache_file = None
            self.logger.info("Cache disabled - analyzing all folders fresh")
        else:
            self.cache_file = self.args.cache_file or config.cache_file

        self.progress = ConsoleProgress(show_progress=not self.args.no_progress)

    def _handle_interrupt(self, signum, frame) -> None:
        if self.progress is not None:
            self.progress.request_cancel()

    def _analyze_phase(self) -> int:
        analyzer = DuplicateFolderAnalyzer(
            StaticFolderSource(self.args.folders),
            cache_file=self.cache_file,
        )
        if not self.args.refresh:
            analyzer.load_cache()

        previous_handler = signal.signal(signal.SIGINT, self._handle_interrupt)
        try:
            if self.args.refresh:
                result = analyzer.refresh(self.mode, self.progress)
            else:
                result = analyzer.analyze(self.mode, self.progress)
        finally:
            signal.signal(signal.SIGINT, previous_handler)
            self.progress.close()

        if result.outcome is AnalysisOutcome.INSUFFICIENT_FOLDERS:
            self.logger.error(
                "Need at least 2 folders to compare (including all subfolders). "
                "Add more folders and try again."
            )
            return EXIT_ERROR

        if result.outcome is AnalysisOutcome.CANCELLED:
            self.logger.warning("Analysis cancelled - no results")
            return EXIT_CANCELLED

        self.logger.info(
            f"Compared {format_number(len(result.folders))} folders in {format_elapsed(result.elapsed)} "
            f"({format_number(result.files_scanned)} files fingerprinted, "
            f"{result.cache_stats.cache_hits:,} folders from cache)"
        )
        print_issue_report(result.issues, result.mode)

        if self.args.export:
            try:
                export_results(result.issues, result.mode, self.args.export, self.args.export_format)
            except OSError as e:
                self.logger.error(f"Cannot write export file {self.args.export}: {e}")
                return EXIT_ERROR
            self.logger.info(f"Results exported to: {self.args.export}")

        return EXIT_OK


__all__ = ['CLIOrchestrator', 'ConsoleProgress', 'setup_logging']
