"""
Analysis orchestration for the Duplicate Folder Finder.

Provides the DuplicateFolderAnalyzer class that runs the three analysis
phases over every folder of the configured trees:

1. Counting  - estimate the files that need fingerprinting (uncached folders)
2. Scanning  - make sure every folder has a FolderContent snapshot
3. Comparing - classify every unordered folder pair

Execution is single-threaded and cooperative: the caller's ProgressSink is
notified after every file and folder pair, and its is_cancelled() predicate
is polled at the same points.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Protocol

from .cache import CacheLoadStats, CacheStats, FolderContentCache
from .models import ComparisonMode, DuplicateIssue, FolderContent
from .scanner import ScanCancelled, classify_pair, collect_folders, count_image_files, scan_folder
from .state import AnalysisPhase

# Module logger
_logger = logging.getLogger(__name__)


class ProgressSink(Protocol):
    """
    Receives progress and answers cancellation polls.

    Implementations may also define on_phase(phase) and
    on_file_scanned(relative_path); both are called when present.
    """

    def on_progress(self, current: int, total: int) -> None: ...

    def is_cancelled(self) -> bool: ...


class FolderSource(Protocol):
    """Supplies the top-level folders to analyze."""

    def list_top_level_folders(self) -> list[str]: ...


class StaticFolderSource:
    """FolderSource backed by a fixed list of paths."""

    def __init__(self, folders: list[str | Path]):
        self.folders = [str(folder) for folder in folders]

    def list_top_level_folders(self) -> list[str]:
        return list(self.folders)


class _NullProgress:
    def on_progress(self, current: int, total: int) -> None:
        pass

    def is_cancelled(self) -> bool:
        return False


class AnalysisOutcome(Enum):
    COMPLETED = 'completed'
    INSUFFICIENT_FOLDERS = 'insufficient_folders'
    CANCELLED = 'cancelled'


@dataclass
class AnalysisResult:
    """
    Outcome of one analysis run.

    Attributes:
        outcome: How the run ended
        mode: Comparison mode of the run
        issues: Issues in folder pair order (empty unless completed)
        folders: Every folder that took part, in discovery order
        files_scanned: Files fingerprinted during this run
        cache_stats: Folder cache hits/misses
        elapsed: Wall-clock seconds
    """
    outcome: AnalysisOutcome
    mode: ComparisonMode
    issues: list[DuplicateIssue] = field(default_factory=list)
    folders: list[str] = field(default_factory=list)
    files_scanned: int = 0
    cache_stats: CacheStats = field(default_factory=CacheStats)
    elapsed: float = 0.0

    @property
    def completed(self) -> bool:
        return self.outcome is AnalysisOutcome.COMPLETED

    @property
    def issue_count(self) -> int:
        return len(self.issues)

    @property
    def folders_scanned(self) -> int:
        """Folders fingerprinted during this run (cache misses)."""
        return self.cache_stats.cache_misses


class DuplicateFolderAnalyzer:
    """
    Finds duplicate folders across the trees supplied by a FolderSource.

    Usage:
        analyzer = DuplicateFolderAnalyzer(
            StaticFolderSource(['/photos']),
            cache_file='/photos/.folder_analysis_cache',
        )
        analyzer.load_cache()
        result = analyzer.analyze(ComparisonMode.QUICK, progress=session)
    """

    def __init__(
        self,
        folder_source: FolderSource,
        cache: Optional[FolderContentCache] = None,
        cache_file: Optional[str | Path] = None,
        on_complete: Optional[Callable[[int, ComparisonMode], None]] = None,
        on_reveal_folder: Optional[Callable[[str], None]] = None,
    ):
        """
        Initialize the analyzer.

        Args:
            folder_source: Supplies the top-level folders
            cache: Folder content cache (a new empty one if None)
            cache_file: Where the cache is persisted; None disables persistence
            on_complete: Called with (issue count, mode) after a completed run
            on_reveal_folder: Called with a folder path to reveal it to the user
        """
        self.folder_source = folder_source
        self.cache = cache if cache is not None else FolderContentCache()
        self.cache_file = cache_file
        self.on_complete = on_complete
        self.on_reveal_folder = on_reveal_folder
        self._phase = AnalysisPhase.IDLE
        self._last_result: Optional[AnalysisResult] = None

    @property
    def phase(self) -> AnalysisPhase:
        return self._phase

    @property
    def issues(self) -> list[DuplicateIssue]:
        """Issues of the last completed run."""
        if self._last_result is None:
            return []
        return list(self._last_result.issues)

    def load_cache(self) -> Optional[CacheLoadStats]:
        """Load the persisted cache file, if one is configured."""
        if self.cache_file is None:
            return None
        return self.cache.load_from_disk(self.cache_file)

    def refresh(self, mode: ComparisonMode, progress: Optional[ProgressSink] = None) -> AnalysisResult:
        """Drop every cached folder and run a full analysis."""
        self.cache.invalidate_all()
        _logger.info("Cache cleared for fresh analysis")
        return self.analyze(mode, progress)

    def reveal_primary(self, issue: DuplicateIssue) -> None:
        self._reveal(issue.primary_folder)

    def reveal_duplicate(self, issue: DuplicateIssue) -> None:
        self._reveal(issue.duplicate_folder)

    def _reveal(self, folder: str) -> None:
        if self.on_reveal_folder is not None:
            self.on_reveal_folder(folder)

    def _enter_phase(self, phase: AnalysisPhase, progress: ProgressSink) -> None:
        self._phase = phase
        on_phase = getattr(progress, 'on_phase', None)
        if on_phase is not None:
            on_phase(phase)

    def analyze(self, mode: ComparisonMode, progress: Optional[ProgressSink] = None) -> AnalysisResult:
        """
        Run a complete analysis.

        Args:
            mode: Comparison mode for fingerprinting and classification
            progress: Optional progress sink / cancellation source

        Returns:
            AnalysisResult. With fewer than two folders the outcome is
            INSUFFICIENT_FOLDERS and nothing is scanned or saved. A cancelled
            run returns no issues and does not write the cache file.
        """
        progress = progress if progress is not None else _NullProgress()
        start_time = time.time()

        folders = collect_folders(self.folder_source.list_top_level_folders())
        _logger.debug(f"Total folders found (including subfolders): {len(folders)}")

        if len(folders) < 2:
            _logger.info("Not enough folders to compare - need at least 2 folders")
            return AnalysisResult(
                outcome=AnalysisOutcome.INSUFFICIENT_FOLDERS,
                mode=mode,
                folders=folders,
            )

        _logger.info(f"Starting {mode.display_name} analysis of {len(folders):,} folders")
        result = AnalysisResult(outcome=AnalysisOutcome.COMPLETED, mode=mode, folders=folders)

        try:
            total_files = self._count_phase(folders, mode, progress)
            contents = self._scan_phase(folders, mode, progress, total_files, result)
            result.issues = self._compare_phase(folders, contents, mode, progress)
        except ScanCancelled:
            _logger.info("Analysis cancelled")
            self._enter_phase(AnalysisPhase.CANCELLED, progress)
            self._enter_phase(AnalysisPhase.IDLE, progress)
            result.outcome = AnalysisOutcome.CANCELLED
            result.issues = []
            result.elapsed = time.time() - start_time
            return result

        if self.cache_file is not None:
            self.cache.save_to_disk(self.cache_file, mode)

        result.elapsed = time.time() - start_time
        self._last_result = result
        self._enter_phase(AnalysisPhase.IDLE, progress)

        _logger.info(
            f"{mode.display_name} analysis complete: {result.issue_count} issues found "
            f"({result.elapsed:.1f}s)"
        )
        if self.on_complete is not None:
            self.on_complete(result.issue_count, mode)
        return result

    def _count_phase(self, folders: list[str], mode: ComparisonMode, progress: ProgressSink) -> int:
        """Phase 1: count files in folders that are not cached for this mode."""
        self._enter_phase(AnalysisPhase.COUNTING, progress)
        total_files = 0
        folders_to_scan = 0

        for i, folder in enumerate(folders, 1):
            if progress.is_cancelled():
                raise ScanCancelled(folder)

            if self.cache.get(folder, mode) is None:
                file_count = count_image_files(folder)
                total_files += file_count
                folders_to_scan += 1
                _logger.debug(f"Folder needs scanning: {folder} with {file_count} files")
            else:
                _logger.debug(f"Folder already cached: {folder}")
            progress.on_progress(i, len(folders))

        _logger.info(f"Files to analyze: {total_files:,} in {folders_to_scan:,} folders")
        return total_files

    def _scan_phase(
        self,
        folders: list[str],
        mode: ComparisonMode,
        progress: ProgressSink,
        total_files: int,
        result: AnalysisResult,
    ) -> list[FolderContent]:
        """Phase 2: resolve every folder of every pair to a FolderContent."""
        self._enter_phase(AnalysisPhase.SCANNING, progress)
        contents: dict[str, FolderContent] = {}
        on_file_scanned = getattr(progress, 'on_file_scanned', None)

        def file_done(relative_path: str) -> None:
            result.files_scanned += 1
            if on_file_scanned is not None:
                on_file_scanned(relative_path)
            current = min(result.files_scanned, total_files) if total_files else result.files_scanned
            progress.on_progress(current, total_files)

        def ensure(folder: str) -> None:
            if folder in contents:
                return
            content = self.cache.get(folder, mode)
            if content is None:
                result.cache_stats.cache_misses += 1
                content = scan_folder(folder, mode, file_callback=file_done,
                                      cancel_check=progress.is_cancelled)
                self.cache.put(folder, content)
            else:
                result.cache_stats.cache_hits += 1
            contents[folder] = content

        for i in range(len(folders)):
            for j in range(i + 1, len(folders)):
                if progress.is_cancelled():
                    raise ScanCancelled(folders[i])
                ensure(folders[i])
                ensure(folders[j])

        if result.cache_stats.cache_hits > 0:
            _logger.info(
                f"Cache: {result.cache_stats.cache_hits:,} hits, {result.cache_stats.cache_misses:,} misses "
                f"({result.cache_stats.hit_rate:.1f}% hit rate)"
            )
        return [contents[folder] for folder in folders]

    def _compare_phase(
        self,
        folders: list[str],
        contents: list[FolderContent],
        mode: ComparisonMode,
        progress: ProgressSink,
    ) -> list[DuplicateIssue]:
        """Phase 3: classify every unordered pair (i, j), i < j."""
        self._enter_phase(AnalysisPhase.COMPARING, progress)
        n = len(folders)
        total_pairs = n * (n - 1) // 2
        pairs_done = 0
        issues: list[DuplicateIssue] = []

        for i in range(n):
            for j in range(i + 1, n):
                if progress.is_cancelled():
                    raise ScanCancelled(folders[i])

                issue = classify_pair(folders[i], contents[i], folders[j], contents[j], mode)
                if issue is not None:
                    issues.append(issue)

                pairs_done += 1
                progress.on_progress(pairs_done, total_pairs)

        return issues


__all__ = [
    'ProgressSink',
    'FolderSource',
    'StaticFolderSource',
    'AnalysisOutcome',
    'AnalysisResult',
    'DuplicateFolderAnalyzer',
]
