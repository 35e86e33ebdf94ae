"""
Directory index of songs currently held by a playlist.

The directory is process-wide: create it once at startup with
init_directory() and tear it down with shutdown_directory(). Songs
normally receive it by injection; current_directory() is the fallback
for songs created without one.
"""

import threading
from collections import Counter
from typing import Optional

from loguru import logger

from .exceptions import DirectoryNotInitializedError


class Directory:
    """Thread-safe multiset of URIs that are in at least one playlist."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._uris: Counter = Counter()

    def added_to_playlist(self, uri: str) -> None:
        with self._lock:
            self._uris[uri] += 1

    def removed_from_playlist(self, uri: str) -> None:
        with self._lock:
            if self._uris[uri] <= 0:
                logger.warning(f"Directory asked to remove {uri} which is not in a playlist")
                return

            self._uris[uri] -= 1
            if self._uris[uri] == 0:
                del self._uris[uri]

    def in_playlist(self, uri: str) -> bool:
        with self._lock:
            return self._uris[uri] > 0

    def path_in_playlist(self, path: str) -> bool:
        """Check whether any song beneath a directory path is in a playlist.

        Args:
            path: Directory path relative to the music root ("" for the root)

        Returns:
            True if at least one URI under the path is held by a playlist
        """
        prefix = path.rstrip("/") + "/" if path else ""
        with self._lock:
            return any(uri.startswith(prefix) for uri in self._uris)

    def playlist_uris(self) -> list[str]:
        with self._lock:
            return sorted(self._uris)

    def clear(self) -> None:
        with self._lock:
            self._uris.clear()


_directory: Optional[Directory] = None
_directory_lock = threading.Lock()


def init_directory() -> Directory:
    """Create the process-wide directory, or return the existing one."""
    global _directory
    with _directory_lock:
        if _directory is None:
            _directory = Directory()
            logger.debug("Directory initialized")
        return _directory


def current_directory() -> Optional[Directory]:
    """Get the process-wide directory, or None before init_directory()."""
    with _directory_lock:
        return _directory


def get_directory() -> Directory:
    """Get the process-wide directory.

    Raises:
        DirectoryNotInitializedError: If init_directory() has not been called
    """
    directory = current_directory()
    if directory is None:
        raise DirectoryNotInitializedError("init_directory() must be called first")
    return directory


def shutdown_directory() -> None:
    """Tear down the process-wide directory."""
    global _directory
    with _directory_lock:
        if _directory is not None:
            _directory.clear()
            logger.debug("Directory shut down")
        _directory = None
