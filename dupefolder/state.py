"""
Analysis state for Duplicate Folder Finder.

Tracks the phase and progress of a running analysis and carries the
cancellation flag that the analyzer polls.
"""

import threading
import time
from enum import Enum
from typing import Optional

from .utils import formatters


class AnalysisPhase(Enum):
    IDLE = 'idle'
    COUNTING = 'counting'
    SCANNING = 'scanning'
    COMPARING = 'comparing'
    CANCELLED = 'cancelled'


# Overall progress range (percent) covered by each phase
PHASE_PROGRESS_RANGES = {
    AnalysisPhase.COUNTING: (0, 10),
    AnalysisPhase.SCANNING: (10, 70),
    AnalysisPhase.COMPARING: (70, 100),
}


class AnalysisSession:
    """
    Progress sink that records the state of one analysis run.

    The cancel flag is guarded by a lock so a UI or signal handler on another
    thread can request cancellation while the analysis polls it.
    """

    def __init__(self):
        self._cancel_requested = False
        self._lock = threading.Lock()
        self.reset()

    def reset(self):
        """Reset state to initial values."""
        with self._lock:
            self._cancel_requested = False

        self.phase = AnalysisPhase.IDLE
        self.current = 0
        self.total = 0
        self.message = ''
        self.files_scanned = 0
        self.current_file = ''
        self.start_time: Optional[float] = None

    @property
    def cancel_requested(self) -> bool:
        """Check if cancel has been requested."""
        with self._lock:
            return self._cancel_requested

    def request_cancel(self):
        """Request cancellation of the current analysis."""
        with self._lock:
            self._cancel_requested = True

    # ProgressSink interface

    def is_cancelled(self) -> bool:
        return self.cancel_requested

    def on_phase(self, phase: AnalysisPhase) -> None:
        self.phase = phase
        self.current = 0
        self.total = 0
        if phase is AnalysisPhase.COUNTING:
            self.start_time = time.time()
        self.message = f'{phase.value.capitalize()}...'

    def on_progress(self, current: int, total: int) -> None:
        self.current = current
        self.total = total
        if self.phase is AnalysisPhase.SCANNING:
            self.message = (
                f'Processing files: {formatters.format_number(current)}/'
                f'{formatters.format_number(total)}'
            )
        elif self.phase is AnalysisPhase.COMPARING:
            self.message = (
                f'Comparing folder pairs: {formatters.format_number(current)}/'
                f'{formatters.format_number(total)}'
            )

    def on_file_scanned(self, relative_path: str) -> None:
        self.files_scanned += 1
        self.current_file = relative_path

    @property
    def stage_progress(self) -> int:
        """Progress within the current phase (0-100)."""
        if self.total <= 0:
            return 0
        return min(100, int(self.current * 100 / self.total))

    @property
    def progress(self) -> int:
        """Overall progress (0-100)."""
        if self.phase not in PHASE_PROGRESS_RANGES:
            return 0
        low, high = PHASE_PROGRESS_RANGES[self.phase]
        return low + (high - low) * self.stage_progress // 100

    @property
    def elapsed_seconds(self) -> float:
        if self.start_time is None:
            return 0.0
        return time.time() - self.start_time

    def to_status_dict(self) -> dict:
        """Return current status for display."""
        return {
            'phase': self.phase.value,
            'progress': self.progress,
            'stage_progress': self.stage_progress,
            'current': self.current,
            'total': self.total,
            'message': self.message,
            'files_scanned': self.files_scanned,
            'current_file': self.current_file,
            'elapsed': formatters.format_elapsed(self.elapsed_seconds),
            'cancel_requested': self.cancel_requested,
        }
