"""
In-memory playlist of songs.

Every insertion takes a playlist reference on the song and every removal
releases it, so library entries and the directory learn when a song
enters or leaves its last playlist.
"""

import threading
from typing import Iterator, Optional

from loguru import logger

from trackline.domain.library.exceptions import ReferenceCountError
from trackline.domain.library.models import Song


class Playlist:
    """Ordered, thread-safe list of songs that holds a reference on each."""

    def __init__(self, name: str = "playlist"):
        self.name = name
        self._songs: list[Song] = []
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._songs)

    def __iter__(self) -> Iterator[Song]:
        with self._lock:
            return iter(list(self._songs))

    def add(self, song: Song) -> int:
        """Append a song and return its position."""
        with self._lock:
            song.increment_reference()
            self._songs.append(song)
            return len(self._songs) - 1

    def insert(self, index: int, song: Song) -> None:
        with self._lock:
            song.increment_reference()
            self._songs.insert(index, song)

    def get(self, index: int) -> Song:
        with self._lock:
            return self._songs[index]

    def index_of(self, song: Song) -> Optional[int]:
        """Position of a song by identity, or None if not present."""
        with self._lock:
            for i, candidate in enumerate(self._songs):
                if candidate is song:
                    return i
            return None

    def remove(self, index: int) -> Song:
        """Remove the song at a position and release its reference.

        Raises:
            IndexError: If the position is out of range
            ReferenceCountError: If the song holds no reference; it stays listed
        """
        with self._lock:
            song = self._songs[index]
            song.decrement_reference()
            del self._songs[index]
            return song

    def remove_song(self, song: Song) -> bool:
        """Remove the first occurrence of a song; False if it was not present."""
        with self._lock:
            index = self.index_of(song)
            if index is None:
                return False
            self.remove(index)
            return True

    def clear(self) -> None:
        """Remove every song, releasing each reference.

        Raises:
            ReferenceCountError: After all other songs are released, if any
                song held no reference
        """
        with self._lock:
            songs, self._songs = self._songs, []
            errors: list[ReferenceCountError] = []
            for song in songs:
                try:
                    song.decrement_reference()
                except ReferenceCountError as e:
                    errors.append(e)
            logger.debug(f"Cleared {len(songs)} songs from {self.name}")

            if errors:
                logger.error(f"{len(errors)} songs in {self.name} held no reference")
                raise errors[0]

    def describe(self, index: int, template: str) -> str:
        """Render the song at a position for display or search."""
        return self.get(index).format_string(template)
