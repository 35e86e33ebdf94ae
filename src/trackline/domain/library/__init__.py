"""Library domain - songs, library entries, and the playlist directory.

This domain handles:
- The Song entity and its playlist reference count
- Display templates for rendering songs
- Library tree entries and the directory index notified by songs
- Populating songs from MPD tags or local files
"""

# Models
from .models import (
    UNKNOWN_ALBUM,
    UNKNOWN_ARTIST,
    UNKNOWN_DATE,
    UNKNOWN_GENRE,
    UNKNOWN_TITLE,
    UNKNOWN_TRACK,
    UNKNOWN_URI,
    PlaylistDirectoryListener,
    PlaylistEntryListener,
    Song,
    format_duration,
)

# Display templates
from .formatting import render_template, swap_the

# Collaborators
from .directory import (
    Directory,
    current_directory,
    get_directory,
    init_directory,
    shutdown_directory,
)
from .entry import EntryKind, LibraryEntry
from .exceptions import DirectoryNotInitializedError, LibraryError, ReferenceCountError

# Metadata sources
from .metadata import populate_song, song_from_file, song_from_tags

__all__ = [
    # Models
    "Song",
    "PlaylistEntryListener",
    "PlaylistDirectoryListener",
    "format_duration",
    "UNKNOWN_ARTIST",
    "UNKNOWN_ALBUM",
    "UNKNOWN_TITLE",
    "UNKNOWN_TRACK",
    "UNKNOWN_URI",
    "UNKNOWN_GENRE",
    "UNKNOWN_DATE",
    # Display templates
    "render_template",
    "swap_the",
    # Collaborators
    "Directory",
    "init_directory",
    "current_directory",
    "get_directory",
    "shutdown_directory",
    "EntryKind",
    "LibraryEntry",
    # Exceptions
    "LibraryError",
    "ReferenceCountError",
    "DirectoryNotInitializedError",
    # Metadata
    "populate_song",
    "song_from_tags",
    "song_from_file",
]
