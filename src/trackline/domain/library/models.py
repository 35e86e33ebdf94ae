"""
Music library domain models.

Contains the Song entity: track metadata, the playlist reference count
that drives library/directory notifications, and a cached renderer for
display templates.
"""

import threading
import weakref
from typing import Optional, Protocol

from loguru import logger

from .exceptions import ReferenceCountError
from .formatting import render_template

UNKNOWN_ARTIST = "Unknown Artist"
UNKNOWN_ALBUM = "Unknown Album"
UNKNOWN_TITLE = "Unknown"
UNKNOWN_URI = "Unknown"
UNKNOWN_GENRE = "Unknown"
UNKNOWN_DATE = "Unknown"
UNKNOWN_TRACK = ""


class PlaylistEntryListener(Protocol):
    """Library node notified when its song enters or leaves every playlist."""

    song: Optional["Song"]

    def added_to_playlist(self) -> None: ...

    def removed_from_playlist(self) -> None: ...


class PlaylistDirectoryListener(Protocol):
    """Directory index notified with the URI of a song entering/leaving playlists."""

    def added_to_playlist(self, uri: str) -> None: ...

    def removed_from_playlist(self, uri: str) -> None: ...


def format_duration(duration: int) -> str:
    """Format a duration in seconds as M:SS (65 -> "1:05")."""
    minutes, seconds = divmod(duration, 60)
    return f"{minutes}:{seconds:02d}"


class Song:
    """A single track and its playlist membership.

    Every field is guarded by a per-song reentrant lock, so a UI thread can
    render while another thread adjusts the reference count. Rendering
    re-enters the field getters while the lock is held.

    The library entry owns the song; the song only keeps a weak reference
    back to it. Call destroy() when the song is released so the entry no
    longer points at it.
    """

    def __init__(self, directory: Optional[PlaylistDirectoryListener] = None):
        self._lock = threading.RLock()
        self._reference = 0
        self._artist = UNKNOWN_ARTIST
        self._album = UNKNOWN_ALBUM
        self._title = UNKNOWN_TITLE
        self._track = UNKNOWN_TRACK
        self._uri = UNKNOWN_URI
        self._genre = UNKNOWN_GENRE
        self._date = UNKNOWN_DATE
        self._duration = 0
        self._duration_string = format_duration(0)
        self._last_format: Optional[str] = None
        self._formatted = ""
        self._entry: Optional[weakref.ReferenceType] = None
        self._directory = directory

    def __repr__(self) -> str:
        with self._lock:
            return f"Song(uri={self._uri!r}, reference={self._reference})"

    def copy(self) -> "Song":
        """Copy the metadata into a new, unreferenced and unattached song."""
        with self._lock:
            song = Song(directory=self._directory)
            song.artist = self._artist
            song.album = self._album
            song.title = self._title
            song.track = self._track
            song.uri = self._uri
            song.genre = self._genre
            song.date = self._date
            song.duration = self._duration
            return song

    __copy__ = copy

    # Reference counting

    @property
    def reference(self) -> int:
        with self._lock:
            return self._reference

    def increment_reference(self) -> None:
        """Record one more playlist holding this song.

        Only the 0 -> 1 transition notifies the library entry and directory.
        """
        with self._lock:
            self._reference += 1

            entry = self._entry() if self._entry is not None else None
            if entry is not None and self._reference == 1:
                logger.debug(f"Song added to playlist: {self._uri}")
                entry.added_to_playlist()
                directory = self._resolve_directory()
                if directory is not None:
                    directory.added_to_playlist(self._uri)

    def decrement_reference(self) -> None:
        """Record one fewer playlist holding this song.

        Only the 1 -> 0 transition notifies the library entry and directory.

        Raises:
            ReferenceCountError: If the count is already zero
        """
        with self._lock:
            if self._reference <= 0:
                logger.error(f"Reference count underflow for {self._uri}")
                raise ReferenceCountError(self._uri)

            self._reference -= 1

            entry = self._entry() if self._entry is not None else None
            if entry is not None and self._reference == 0:
                logger.debug(f"Song removed from playlist: {self._uri}")
                entry.removed_from_playlist()
                directory = self._resolve_directory()
                if directory is not None:
                    directory.removed_from_playlist(self._uri)

    def _resolve_directory(self) -> Optional[PlaylistDirectoryListener]:
        if self._directory is not None:
            return self._directory

        from .directory import current_directory

        return current_directory()

    # Library back-reference

    @property
    def entry(self) -> Optional[PlaylistEntryListener]:
        with self._lock:
            return self._entry() if self._entry is not None else None

    @entry.setter
    def entry(self, entry: Optional[PlaylistEntryListener]) -> None:
        with self._lock:
            self._entry = weakref.ref(entry) if entry is not None else None

    @property
    def directory(self) -> Optional[PlaylistDirectoryListener]:
        with self._lock:
            return self._directory

    def destroy(self) -> None:
        """Release the song: zero the count and clear the entry's pointer to it."""
        with self._lock:
            self._reference = 0

            entry = self._entry() if self._entry is not None else None
            if entry is not None and entry.song is self:
                logger.debug(f"Detaching destroyed song from library entry: {self._uri}")
                entry.song = None
            self._entry = None

    # Fields

    @property
    def artist(self) -> str:
        with self._lock:
            return self._artist

    @artist.setter
    def artist(self, artist: Optional[str]) -> None:
        with self._lock:
            self._last_format = None
            self._artist = artist if artist is not None else UNKNOWN_ARTIST

    @property
    def album(self) -> str:
        with self._lock:
            return self._album

    @album.setter
    def album(self, album: Optional[str]) -> None:
        with self._lock:
            self._last_format = None
            self._album = album if album is not None else UNKNOWN_ALBUM

    @property
    def title(self) -> str:
        with self._lock:
            return self._title

    @title.setter
    def title(self, title: Optional[str]) -> None:
        with self._lock:
            self._last_format = None
            self._title = title if title is not None else UNKNOWN_TITLE

    @property
    def track(self) -> str:
        with self._lock:
            return self._track

    @track.setter
    def track(self, track: Optional[str]) -> None:
        with self._lock:
            self._last_format = None
            self._track = track if track is not None else UNKNOWN_TRACK

    @property
    def uri(self) -> str:
        with self._lock:
            return self._uri

    @uri.setter
    def uri(self, uri: Optional[str]) -> None:
        with self._lock:
            self._last_format = None
            self._uri = uri if uri is not None else UNKNOWN_URI

    # Genre and date never invalidate the render cache

    @property
    def genre(self) -> str:
        with self._lock:
            return self._genre

    @genre.setter
    def genre(self, genre: Optional[str]) -> None:
        with self._lock:
            self._genre = genre if genre is not None else UNKNOWN_GENRE

    @property
    def date(self) -> str:
        with self._lock:
            return self._date

    @date.setter
    def date(self, date: Optional[str]) -> None:
        with self._lock:
            self._date = date if date is not None else UNKNOWN_DATE

    @property
    def duration(self) -> int:
        with self._lock:
            return self._duration

    @duration.setter
    def duration(self, duration: int) -> None:
        with self._lock:
            self._last_format = None
            self._duration = duration
            self._duration_string = format_duration(duration)

    @property
    def duration_string(self) -> str:
        with self._lock:
            return self._duration_string

    # Rendering

    def format_string(self, template: str) -> str:
        """Render the song with a display template, reusing the last result.

        Args:
            template: Format string, e.g. "{%a - }%t {(%l)|}"

        Returns:
            Rendered text
        """
        with self._lock:
            if self._last_format == template:
                return self._formatted

            self._last_format = template
            self._formatted = render_template(self, template)
            return self._formatted
