"""
FolderContentCache: in-memory folder snapshots with on-disk persistence.

File layout (see stream.py for primitive encodings):

    header:  format version tag (string)
             mode marker (int32, Quick=0 / Deep=1)
             entry count (int32)
    entry:   folder path (string)
             folder modification time (date-time)
             all_files (string list)
             all_subfolders (string list)
             total size (int64)
             signature count (int32), then per file:
                 relative path (string), file size (int64),
                 width (int32), height (int32), partial hash (string)
"""

from __future__ import annotations

import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Optional

from ..config import CACHE_FORMAT_VERSION
from ..models import ComparisonMode, FileSignature, FolderContent
from .stream import CacheFormatError, CacheStreamReader, CacheStreamWriter
from .utils import CacheLoadStats, get_folder_mtime, is_content_plausible, is_mtime_current


logger = logging.getLogger(__name__)


class FolderContentCache:
    """
    Maps absolute folder paths to FolderContent snapshots.

    put() and invalidate_all() are serialized by a lock so one cache can be
    shared between callers.

    Usage:
        cache = FolderContentCache()
        cache.load_from_disk(cache_file)

        content = cache.get(folder, mode)
        if content is None:
            content = scan_folder(folder, mode)
            cache.put(folder, content)

        cache.save_to_disk(cache_file, mode)
    """

    def __init__(self):
        self._entries: dict[str, FolderContent] = {}
        self._lock = threading.Lock()

    def get(self, folder: str, mode: Optional[ComparisonMode] = None) -> Optional[FolderContent]:
        """
        Get the cached content of a folder.

        Args:
            folder: Absolute folder path
            mode: If given, only content computed in this mode is returned

        Returns:
            FolderContent if cached (and produced by mode), None otherwise
        """
        content = self._entries.get(folder)
        if content is None:
            return None
        if mode is not None and content.mode is not mode:
            return None
        return content

    def put(self, folder: str, content: FolderContent) -> None:
        """Store content for a folder, replacing any previous entry."""
        with self._lock:
            self._entries[folder] = content

    def invalidate(self, folder: str) -> None:
        """Remove a single folder from the cache."""
        with self._lock:
            self._entries.pop(folder, None)

    def invalidate_all(self) -> None:
        """Drop every in-memory entry."""
        with self._lock:
            self._entries.clear()
        logger.debug("Folder content cache cleared")

    def paths(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, folder: object) -> bool:
        return folder in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    # Persistence

    def save_to_disk(self, cache_file: str | Path, mode: ComparisonMode) -> bool:
        """
        Write entries computed in `mode` to the cache file.

        The file is written to a temporary sibling and renamed into place so
        an interrupted save never leaves a truncated cache behind.

        Writing the file touches its own directory, so an entry for that
        directory records the directory's modification time taken after the
        temporary file exists instead of the time of its scan.

        Args:
            cache_file: Destination path
            mode: Mode marker of the file; entries from other modes are skipped

        Returns:
            True if the file was written, False on I/O error
        """
        cache_path = Path(cache_file)
        entries = [(folder, content) for folder, content in self._entries.items()
                   if content.mode is mode]

        try:
            cache_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=cache_path.name + '.', dir=str(cache_path.parent))
            cache_dir = os.path.abspath(str(cache_path.parent))
            cache_dir_mtime = get_folder_mtime(cache_dir)
            try:
                with os.fdopen(fd, 'wb') as f:
                    writer = CacheStreamWriter(f)
                    writer.write_string(CACHE_FORMAT_VERSION)
                    writer.write_int32(mode.value)
                    writer.write_int32(len(entries))
                    for folder, content in entries:
                        mtime = cache_dir_mtime if folder == cache_dir else None
                        self._write_entry(writer, folder, content, mtime)
                os.replace(tmp_name, cache_path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.remove(tmp_name)
                raise
        except OSError as e:
            logger.warning(f"Failed to save folder content cache {cache_path}: {e}")
            return False

        logger.debug(f"Saved folder content cache with {len(entries)} entries to {cache_path}")
        return True

    @staticmethod
    def _write_entry(
        writer: CacheStreamWriter,
        folder: str,
        content: FolderContent,
        mtime: Optional[float] = None,
    ) -> None:
        if mtime is None:
            mtime = content.folder_mtime
        if mtime is None:
            mtime = get_folder_mtime(folder) or 0.0

        writer.write_string(folder)
        writer.write_datetime(mtime)
        writer.write_string_list(content.all_files)
        writer.write_string_list(content.all_subfolders)
        writer.write_int64(content.total_size)

        writer.write_int32(len(content.file_info))
        for relative_path, sig in content.file_info.items():
            writer.write_string(relative_path)
            writer.write_int64(sig.file_size)
            writer.write_int32(sig.width)
            writer.write_int32(sig.height)
            writer.write_string(sig.partial_hash)

    def load_from_disk(self, cache_file: str | Path) -> CacheLoadStats:
        """
        Load valid entries from a cache file into memory.

        A version mismatch or a truncated/corrupt file discards the whole
        file. Otherwise each entry is kept only if its folder still exists,
        has not been modified since it was cached, and passes the content
        plausibility check.

        Args:
            cache_file: Cache file path

        Returns:
            CacheLoadStats describing what was loaded
        """
        stats = CacheLoadStats()
        cache_path = Path(cache_file)

        try:
            with open(cache_path, 'rb') as f:
                stats.found = True
                mode, records = self._read_file(CacheStreamReader(f))
        except FileNotFoundError:
            logger.debug(f"No folder content cache found at {cache_path}")
            return stats
        except CacheFormatError as e:
            stats.discarded = True
            stats.reason = str(e)
            logger.warning(f"Discarding folder content cache {cache_path}: {e}")
            return stats
        except OSError as e:
            stats.discarded = True
            stats.reason = str(e)
            logger.warning(f"Failed to read folder content cache {cache_path}: {e}")
            return stats

        for folder, recorded_mtime, content in records:
            content.mode = mode
            if not is_content_plausible(folder, content):
                stats.invalid_entries += 1
                logger.debug(f"Cache entry invalid (content check failed): {folder}")
            elif not is_mtime_current(folder, recorded_mtime):
                stats.invalid_entries += 1
                logger.debug(f"Cache entry invalid (folder modified): {folder}")
            else:
                content.folder_mtime = recorded_mtime
                self.put(folder, content)
                stats.valid_entries += 1

        logger.info(
            f"Loaded folder content cache: {stats.valid_entries} valid, "
            f"{stats.invalid_entries} invalid entries ({mode.display_name} mode)"
        )
        return stats

    @staticmethod
    def _read_file(reader: CacheStreamReader) -> tuple[ComparisonMode, list[tuple[str, float, FolderContent]]]:
        version = reader.read_string()
        if version != CACHE_FORMAT_VERSION:
            raise CacheFormatError(f"Invalid cache version: {version!r}")

        marker = reader.read_int32()
        try:
            mode = ComparisonMode(marker)
        except ValueError:
            raise CacheFormatError(f"Invalid mode marker: {marker}")

        records = []
        for _ in range(reader.read_count()):
            folder = reader.read_string()
            mtime = reader.read_datetime()
            content = FolderContent(
                all_files=reader.read_string_list(),
                all_subfolders=reader.read_string_list(),
                total_size=reader.read_int64(),
            )
            for _ in range(reader.read_count()):
                relative_path = reader.read_string()
                content.file_info[relative_path] = FileSignature(
                    file_size=reader.read_int64(),
                    width=reader.read_int32(),
                    height=reader.read_int32(),
                    partial_hash=reader.read_string(),
                )
            records.append((folder, mtime, content))

        return mode, records


__all__ = ['FolderContentCache']
