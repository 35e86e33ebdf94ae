"""
Library tree entries (artist -> album -> song).

Song entries own their Song; the Song only holds a weak reference back.
Playlist membership counts bubble up the tree so an album or artist row
can show whether its songs are partly or fully queued.
"""

import threading
from enum import Enum
from typing import Iterator, Optional

from loguru import logger

from .models import Song


class EntryKind(Enum):
    ARTIST = "artist"
    ALBUM = "album"
    SONG = "song"


class LibraryEntry:
    """A node in the library tree."""

    def __init__(
        self,
        kind: EntryKind,
        name: str,
        parent: Optional["LibraryEntry"] = None,
    ):
        self.kind = kind
        self.name = name
        self.parent = parent
        self.children: list["LibraryEntry"] = []
        self.song: Optional[Song] = None
        self._playlist_count = 0
        self._lock = threading.Lock()

        if parent is not None:
            parent.children.append(self)

    def __repr__(self) -> str:
        return f"LibraryEntry({self.kind.value}, {self.name!r})"

    def attach_song(self, song: Song) -> None:
        """Take ownership of a song and point it back at this entry."""
        if self.song is not None and self.song is not song:
            self.detach_song()

        # A song belongs to one entry at a time
        previous = song.entry
        if previous is not None and previous is not self and previous.song is song:
            previous.detach_song()

        self.song = song
        song.entry = self

    def detach_song(self) -> Optional[Song]:
        """Release the owned song and clear its back-reference."""
        song = self.song
        if song is not None:
            song.entry = None
        self.song = None
        return song

    def added_to_playlist(self) -> None:
        with self._lock:
            self._playlist_count += 1
        if self.parent is not None:
            self.parent.added_to_playlist()

    def removed_from_playlist(self) -> None:
        with self._lock:
            if self._playlist_count == 0:
                logger.warning(f"{self!r} removed from playlist while not in one")
                return
            self._playlist_count -= 1
        if self.parent is not None:
            self.parent.removed_from_playlist()

    @property
    def playlist_count(self) -> int:
        with self._lock:
            return self._playlist_count

    def songs(self) -> Iterator["LibraryEntry"]:
        """Iterate over song entries at or below this node."""
        if self.kind is EntryKind.SONG:
            yield self
            return
        for child in self.children:
            yield from child.songs()

    def song_count(self) -> int:
        return sum(1 for _ in self.songs())

    @property
    def partially_in_playlist(self) -> bool:
        return self.playlist_count > 0

    @property
    def fully_in_playlist(self) -> bool:
        total = self.song_count()
        return total > 0 and self.playlist_count >= total
