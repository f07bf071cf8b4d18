"""
Tests for the analysis orchestrator and session state.
"""

import os
import time

import pytest

from dupefolder.cache import default_cache_file
from dupefolder.cache.stream import CacheStreamWriter
from dupefolder.models import ComparisonMode, DuplicateType
from dupefolder.orchestrator import (
    AnalysisOutcome,
    DuplicateFolderAnalyzer,
    StaticFolderSource,
)
from dupefolder.state import AnalysisPhase, AnalysisSession


QUICK = ComparisonMode.QUICK
DEEP = ComparisonMode.DEEP


class RecordingSink:
    """Minimal progress sink without the optional hooks."""

    def __init__(self):
        self.calls = []

    def on_progress(self, current, total):
        self.calls.append((current, total))

    def is_cancelled(self):
        return False


class RecordingSession(AnalysisSession):
    """Session that records phases and can cancel after N files."""

    def __init__(self, cancel_after_files=None):
        self.cancel_after_files = cancel_after_files
        self.phases = []
        super().__init__()

    def on_phase(self, phase):
        super().on_phase(phase)
        self.phases.append(phase)

    def on_file_scanned(self, relative_path):
        super().on_file_scanned(relative_path)
        if self.cancel_after_files is not None and self.files_scanned >= self.cancel_after_files:
            self.request_cancel()


@pytest.fixture
def cache_file(temp_dir):
    return temp_dir / "cache" / "folders.cache"


@pytest.fixture
def make_analyzer(duplicate_trees, cache_file):
    def _make(**kwargs):
        folders = [duplicate_trees['album'], duplicate_trees['copy']]
        kwargs.setdefault('cache_file', cache_file)
        return DuplicateFolderAnalyzer(StaticFolderSource(folders), **kwargs)
    return _make


class TestAnalyze:

    def test_insufficient_folders(self, temp_dir, cache_file):
        lonely = temp_dir / "lonely"
        lonely.mkdir()
        analyzer = DuplicateFolderAnalyzer(StaticFolderSource([lonely]), cache_file=cache_file)

        result = analyzer.analyze(QUICK)
        assert result.outcome is AnalysisOutcome.INSUFFICIENT_FOLDERS
        assert result.issues == []
        assert not cache_file.exists()

    def test_no_folders(self):
        result = DuplicateFolderAnalyzer(StaticFolderSource([])).analyze(QUICK)
        assert result.outcome is AnalysisOutcome.INSUFFICIENT_FOLDERS

    def test_finds_duplicate_trees(self, make_analyzer, duplicate_trees):
        album, copy = str(duplicate_trees['album']), str(duplicate_trees['copy'])
        result = make_analyzer().analyze(QUICK)

        assert result.completed
        assert result.folders == [album, album + '/sub', copy, copy + '/sub']
        assert [(i.primary_folder, i.duplicate_folder) for i in result.issues] == [
            (album, copy),
            (album + '/sub', copy + '/sub'),
        ]
        assert all(i.type is DuplicateType.EXACT_COMPLETE for i in result.issues)
        assert result.files_scanned == 6
        assert result.cache_stats.cache_misses == 4
        assert result.cache_stats.cache_hits == 0

    def test_unrelated_folder_adds_no_issue(self, duplicate_trees, cache_file):
        folders = [duplicate_trees['album'], duplicate_trees['other']]
        analyzer = DuplicateFolderAnalyzer(StaticFolderSource(folders), cache_file=cache_file)
        result = analyzer.analyze(QUICK)
        assert result.completed
        assert result.issues == []

    def test_on_complete_callback(self, make_analyzer):
        calls = []
        make_analyzer(on_complete=lambda count, mode: calls.append((count, mode))).analyze(QUICK)
        assert calls == [(2, QUICK)]

    def test_issues_kept_on_analyzer(self, make_analyzer):
        analyzer = make_analyzer()
        assert analyzer.issues == []
        analyzer.analyze(QUICK)
        assert len(analyzer.issues) == 2
        assert analyzer.phase is AnalysisPhase.IDLE

    def test_progress_reported_per_pair(self, make_analyzer):
        sink = RecordingSink()
        make_analyzer().analyze(QUICK, progress=sink)
        # 4 folders -> 6 pairs, the last call comes from the compare phase
        assert sink.calls[-1] == (6, 6)
        assert all(current <= total for current, total in sink.calls if total)

    def test_session_phases(self, make_analyzer):
        session = RecordingSession()
        make_analyzer().analyze(QUICK, progress=session)
        assert session.phases == [
            AnalysisPhase.COUNTING,
            AnalysisPhase.SCANNING,
            AnalysisPhase.COMPARING,
            AnalysisPhase.IDLE,
        ]
        assert session.files_scanned == 6

    def test_without_cache_file(self, duplicate_trees, cache_file):
        folders = [duplicate_trees['album'], duplicate_trees['copy']]
        analyzer = DuplicateFolderAnalyzer(StaticFolderSource(folders))
        assert analyzer.load_cache() is None
        assert analyzer.analyze(QUICK).issue_count == 2
        assert not cache_file.exists()


class TestCaching:

    def test_cache_file_saved(self, make_analyzer, cache_file):
        make_analyzer().analyze(QUICK)
        assert cache_file.exists()

    def test_second_run_uses_cache(self, make_analyzer):
        make_analyzer().analyze(QUICK)

        analyzer = make_analyzer()
        stats = analyzer.load_cache()
        assert stats.valid_entries == 4

        result = analyzer.analyze(QUICK)
        assert result.files_scanned == 0
        assert result.folders_scanned == 0
        assert result.cache_stats.cache_hits == 4
        assert result.cache_stats.cache_misses == 0
        assert result.issue_count == 2

    def test_deep_run_ignores_quick_cache(self, make_analyzer):
        make_analyzer().analyze(QUICK)

        analyzer = make_analyzer()
        analyzer.load_cache()
        result = analyzer.analyze(DEEP)
        assert result.cache_stats.cache_misses == 4
        assert result.files_scanned == 6
        assert result.issue_count == 2

    def test_project_cache_inside_analyzed_tree(self, duplicate_trees):
        root = duplicate_trees['root']
        # Scan long before the save so the save's own directory update shows
        past = time.time() - 3600
        os.utime(root, (past, past))
        project_cache = default_cache_file(root)

        first = DuplicateFolderAnalyzer(StaticFolderSource([root]), cache_file=project_cache)
        result = first.analyze(QUICK)
        assert result.completed
        assert len(result.folders) == 6

        second = DuplicateFolderAnalyzer(StaticFolderSource([root]), cache_file=project_cache)
        stats = second.load_cache()
        assert stats.valid_entries == 6
        assert stats.invalid_entries == 0

        rerun = second.analyze(QUICK)
        assert rerun.cache_stats.cache_misses == 0
        assert rerun.files_scanned == 0

    def test_stale_version_forces_full_rescan(self, make_analyzer, cache_file):
        cache_file.parent.mkdir(parents=True)
        with open(cache_file, 'wb') as f:
            writer = CacheStreamWriter(f)
            writer.write_string("FolderContentCache_v1.0")
            writer.write_int32(QUICK.value)
            writer.write_int32(0)

        analyzer = make_analyzer()
        stats = analyzer.load_cache()
        assert stats.discarded

        result = analyzer.analyze(QUICK)
        assert result.outcome is AnalysisOutcome.COMPLETED
        assert result.cache_stats.cache_misses == len(result.folders)
        assert result.cache_stats.cache_hits == 0
        assert result.issue_count == 2

        # rewritten in the current format
        reloaded = make_analyzer().load_cache()
        assert not reloaded.discarded
        assert reloaded.valid_entries == len(result.folders)

    def test_refresh_rescans(self, make_analyzer):
        analyzer = make_analyzer()
        analyzer.analyze(QUICK)
        result = analyzer.refresh(QUICK)
        assert result.cache_stats.cache_misses == 4
        assert result.files_scanned == 6

    def test_new_files_are_picked_up(self, make_analyzer, duplicate_trees, image_factory):
        make_analyzer().analyze(QUICK)
        copy = duplicate_trees['copy']
        image_factory(copy / 'extra.png', (10, 10))
        future = time.time() + 60
        os.utime(copy, (future, future))

        analyzer = make_analyzer()
        analyzer.load_cache()
        result = analyzer.analyze(QUICK)
        types = {(i.primary_folder, i.type) for i in result.issues}
        assert (str(duplicate_trees['album']), DuplicateType.EXACT_COMPLETE) not in types


class TestCancellation:

    def test_cancel_mid_scan(self, make_analyzer, cache_file):
        session = RecordingSession(cancel_after_files=1)
        analyzer = make_analyzer()

        result = analyzer.analyze(QUICK, progress=session)
        assert result.outcome is AnalysisOutcome.CANCELLED
        assert result.issues == []
        assert analyzer.issues == []
        assert analyzer.phase is AnalysisPhase.IDLE
        assert session.phases[-2:] == [AnalysisPhase.CANCELLED, AnalysisPhase.IDLE]
        assert not cache_file.exists()

    def test_cancel_before_start(self, make_analyzer):
        session = RecordingSession()
        session.request_cancel()
        result = make_analyzer().analyze(QUICK, progress=session)
        assert result.outcome is AnalysisOutcome.CANCELLED
        assert session.files_scanned == 0

    def test_cancel_keeps_previous_cache_file(self, make_analyzer, cache_file):
        make_analyzer().analyze(QUICK)
        before = cache_file.read_bytes()

        analyzer = make_analyzer()
        result = analyzer.refresh(QUICK, progress=RecordingSession(cancel_after_files=2))
        assert result.outcome is AnalysisOutcome.CANCELLED
        assert cache_file.read_bytes() == before

    def test_no_completion_callback_when_cancelled(self, make_analyzer):
        calls = []
        analyzer = make_analyzer(on_complete=lambda count, mode: calls.append(count))
        analyzer.analyze(QUICK, progress=RecordingSession(cancel_after_files=1))
        assert calls == []


class TestReveal:

    def test_reveal_callbacks(self, make_analyzer, duplicate_trees):
        revealed = []
        analyzer = make_analyzer(on_reveal_folder=revealed.append)
        issue = analyzer.analyze(QUICK).issues[0]

        analyzer.reveal_primary(issue)
        analyzer.reveal_duplicate(issue)
        assert revealed == [str(duplicate_trees['album']), str(duplicate_trees['copy'])]

    def test_reveal_without_callback(self, make_analyzer):
        analyzer = make_analyzer()
        issue = analyzer.analyze(QUICK).issues[0]
        analyzer.reveal_primary(issue)


class TestAnalysisSession:

    def test_initial_state(self):
        session = AnalysisSession()
        assert session.phase is AnalysisPhase.IDLE
        assert session.progress == 0
        assert not session.is_cancelled()

    def test_cancel_and_reset(self):
        session = AnalysisSession()
        session.request_cancel()
        assert session.is_cancelled()
        session.reset()
        assert not session.is_cancelled()

    def test_overall_progress_by_phase(self):
        session = AnalysisSession()
        session.on_phase(AnalysisPhase.COUNTING)
        session.on_progress(5, 10)
        assert session.progress == 5

        session.on_phase(AnalysisPhase.SCANNING)
        session.on_progress(50, 100)
        assert session.progress == 40
        assert session.message == 'Processing files: 50/100'

        session.on_phase(AnalysisPhase.COMPARING)
        session.on_progress(10, 10)
        assert session.progress == 100

    def test_stage_progress_with_zero_total(self):
        session = AnalysisSession()
        session.on_phase(AnalysisPhase.SCANNING)
        session.on_progress(0, 0)
        assert session.stage_progress == 0

    def test_status_dict(self):
        session = AnalysisSession()
        session.on_phase(AnalysisPhase.COUNTING)
        session.on_file_scanned('a/b.jpg')
        status = session.to_status_dict()
        assert status['phase'] == 'counting'
        assert status['current_file'] == 'a/b.jpg'
        assert status['files_scanned'] == 1
        assert status['cancel_requested'] is False
