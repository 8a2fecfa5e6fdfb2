"""Timestamps and the artifact writer."""

from __future__ import annotations

import datetime
import os
from pathlib import Path

from squirrel.core.errors import ArtifactError

_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S_%f_%Z"


def timestamp() -> str:
    """Current UTC time formatted for logs and file names."""
    return datetime.datetime.now(datetime.timezone.utc).strftime(_TIMESTAMP_FORMAT)


class Clock:
    """
    Timestamp source whose values never repeat.

    Two calls within the same microsecond would otherwise produce the same
    artifact file name, so a collision is bumped by one microsecond.
    """

    def __init__(self) -> None:
        self._last: datetime.datetime | None = None

    def now(self) -> str:
        current = datetime.datetime.now(datetime.timezone.utc)
        if self._last is not None and current <= self._last:
            current = self._last + datetime.timedelta(microseconds=1)
        self._last = current
        return current.strftime(_TIMESTAMP_FORMAT)


def write_file(directory: str, file_name: str, data: bytes) -> str:
    """Write ``data`` to ``directory/file_name``, creating the directory if needed."""
    dest_dir = Path(directory)
    dest_dir.mkdir(parents=True, exist_ok=True)
    path = dest_dir / file_name
    path.write_bytes(data)
    return str(os.path.abspath(path))


class ArtifactWriter:
    """Writes screenshot bytes, reporting I/O problems as ``ArtifactError``."""

    def write(self, directory: str, file_name: str, data: bytes) -> str:
        try:
            return write_file(directory, file_name, data)
        except OSError as exc:
            raise ArtifactError(f"Failed writing {file_name!r} to {directory!r}: {exc}") from exc
