"""
Binary stream encoding for the folder content cache file.

All integers are big-endian. Strings are a uint32 byte length followed by
UTF-8 bytes, string lists a uint32 count followed by strings, and date-times
an int64 count of milliseconds since the Unix epoch.
"""

from __future__ import annotations

import struct
from typing import BinaryIO

_INT32 = struct.Struct('>i')
_UINT32 = struct.Struct('>I')
_INT64 = struct.Struct('>q')


class CacheFormatError(ValueError):
    """Raised when the cache file is truncated or malformed."""


class CacheStreamWriter:
    """Writes cache primitives to a binary file handle."""

    def __init__(self, file_handle: BinaryIO):
        self._fh = file_handle

    def write_int32(self, value: int) -> None:
        self._fh.write(_INT32.pack(value))

    def write_int64(self, value: int) -> None:
        self._fh.write(_INT64.pack(value))

    def write_string(self, value: str) -> None:
        data = value.encode('utf-8')
        self._fh.write(_UINT32.pack(len(data)))
        self._fh.write(data)

    def write_string_list(self, values: list[str]) -> None:
        self._fh.write(_UINT32.pack(len(values)))
        for value in values:
            self.write_string(value)

    def write_datetime(self, epoch_seconds: float) -> None:
        self.write_int64(int(epoch_seconds * 1000))


class CacheStreamReader:
    """Reads cache primitives from a binary file handle."""

    def __init__(self, file_handle: BinaryIO):
        self._fh = file_handle

    def _read_exact(self, size: int) -> bytes:
        data = self._fh.read(size)
        if len(data) != size:
            raise CacheFormatError(f"Unexpected end of cache file (wanted {size} bytes, got {len(data)})")
        return data

    def read_int32(self) -> int:
        return _INT32.unpack(self._read_exact(_INT32.size))[0]

    def read_count(self) -> int:
        """Read an int32 element count, rejecting negative values."""
        count = self.read_int32()
        if count < 0:
            raise CacheFormatError(f"Negative element count in cache file: {count}")
        return count

    def read_int64(self) -> int:
        return _INT64.unpack(self._read_exact(_INT64.size))[0]

    def read_string(self) -> str:
        length = _UINT32.unpack(self._read_exact(_UINT32.size))[0]
        try:
            return self._read_exact(length).decode('utf-8')
        except UnicodeDecodeError as e:
            raise CacheFormatError(f"Invalid string in cache file: {e}") from e

    def read_string_list(self) -> list[str]:
        count = _UINT32.unpack(self._read_exact(_UINT32.size))[0]
        return [self.read_string() for _ in range(count)]

    def read_datetime(self) -> float:
        """Return epoch seconds."""
        return self.read_int64() / 1000.0


__all__ = ['CacheFormatError', 'CacheStreamWriter', 'CacheStreamReader']
