"""
Populate songs from metadata sources.

Two sources are supported: MPD-style tag mappings (as returned by an MPD
client for `listallinfo` / `playlistinfo`) and local audio files read with
Mutagen.
"""

from pathlib import Path
from typing import Any, Mapping, Optional

from loguru import logger
from mutagen import File as MutagenFile
from mutagen import MutagenError

from .models import PlaylistDirectoryListener, Song


def _first(value: Any) -> Optional[str]:
    # MP4 track numbers arrive as [(number, total)]
    while isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return None
    return str(value)


def _parse_seconds(value: Optional[str]) -> int:
    if not value:
        return 0
    try:
        return int(float(value))
    except (ValueError, TypeError):
        logger.debug(f"Ignoring unparseable duration: {value!r}")
        return 0


def populate_song(song: Song, tags: Mapping[str, Any]) -> Song:
    """Copy MPD-style tags onto a song.

    Keys are matched case-insensitively. Missing tags install the song's
    "Unknown" sentinels. Multi-valued tags keep their first value.

    Args:
        song: Song to populate
        tags: Mapping such as {"file": ..., "Artist": ..., "Time": "245"}

    Returns:
        The same song, for chaining
    """
    lowered = {str(key).lower(): value for key, value in tags.items()}

    song.uri = _first(lowered.get("file"))
    song.artist = _first(lowered.get("artist"))
    song.album = _first(lowered.get("album"))
    song.title = _first(lowered.get("title"))
    song.track = _first(lowered.get("track"))
    song.genre = _first(lowered.get("genre"))
    song.date = _first(lowered.get("date"))

    duration = _first(lowered.get("time")) or _first(lowered.get("duration"))
    song.duration = _parse_seconds(duration)
    return song


def song_from_tags(
    tags: Mapping[str, Any], directory: Optional[PlaylistDirectoryListener] = None
) -> Song:
    """Create a song from an MPD-style tag mapping."""
    return populate_song(Song(directory=directory), tags)


def get_tag_value(audio_file: Any, tag_names: list[str]) -> Optional[str]:
    """Get tag value, trying multiple possible tag names."""
    for tag_name in tag_names:
        try:
            value = audio_file.get(tag_name)
            if value:
                return _first(value)
        except (KeyError, ValueError):
            # Vorbis comments raise ValueError for some missing keys
            continue
    return None


def extract_metadata_from_filename(local_path: str) -> dict[str, Optional[str]]:
    """Extract artist/title from an "Artist - Title" filename."""
    title = Path(local_path).stem
    artist = None

    if " - " in title:
        artist, title = (part.strip() for part in title.split(" - ", 1))

    return {"artist": artist, "title": title}


def song_from_file(
    local_path: str, directory: Optional[PlaylistDirectoryListener] = None
) -> Song:
    """Create a song from a local audio file's tags.

    Falls back to the filename when Mutagen cannot read the file.
    """
    song = Song(directory=directory)
    song.uri = local_path

    try:
        audio_file = MutagenFile(local_path)
    except (MutagenError, OSError) as e:
        logger.warning(f"Could not read metadata from {local_path}: {e}")
        audio_file = None

    if audio_file is None:
        fallback = extract_metadata_from_filename(local_path)
        song.artist = fallback["artist"]
        song.title = fallback["title"]
        return song

    # ID3 (MP3), MP4, and Vorbis/Opus tags
    song.artist = get_tag_value(audio_file, ["TPE1", "\xa9ART", "ARTIST", "artist"])
    song.album = get_tag_value(audio_file, ["TALB", "\xa9alb", "ALBUM", "album"])
    song.title = get_tag_value(
        audio_file, ["TIT2", "\xa9nam", "TITLE", "title"]
    ) or Path(local_path).stem
    song.track = get_tag_value(audio_file, ["TRCK", "trkn", "TRACKNUMBER", "tracknumber"])
    song.genre = get_tag_value(audio_file, ["TCON", "\xa9gen", "GENRE", "genre"])
    song.date = get_tag_value(audio_file, ["TDRC", "\xa9day", "DATE", "date"])

    info = getattr(audio_file, "info", None)
    length = getattr(info, "length", None)
    song.duration = int(length) if length else 0
    return song
