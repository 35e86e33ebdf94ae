"""Tests for populating songs from MPD tags and audio files."""

from unittest.mock import MagicMock, patch

import pytest
from mutagen import MutagenError

from trackline.domain.library.metadata import (
    extract_metadata_from_filename,
    get_tag_value,
    populate_song,
    song_from_file,
    song_from_tags,
)
from trackline.domain.library.models import Song


class TestMpdTags:
    """MPD-style tag mappings."""

    def test_song_from_tags(self) -> None:
        song = song_from_tags(
            {
                "file": "jazz/so_what.flac",
                "Artist": "Miles Davis",
                "Album": "Kind of Blue",
                "Title": "So What",
                "Track": "1",
                "Genre": "Jazz",
                "Date": "1959",
                "Time": "562",
            }
        )

        assert song.uri == "jazz/so_what.flac"
        assert song.artist == "Miles Davis"
        assert song.album == "Kind of Blue"
        assert song.title == "So What"
        assert song.track == "1"
        assert song.genre == "Jazz"
        assert song.date == "1959"
        assert song.duration == 562
        assert song.duration_string == "9:22"

    def test_lowercase_keys_and_lists(self) -> None:
        song = song_from_tags(
            {
                "file": "a.mp3",
                "artist": ["First Artist", "Second Artist"],
                "duration": "245.871",
            }
        )

        assert song.artist == "First Artist"
        assert song.duration == 245

    def test_missing_tags_use_sentinels(self) -> None:
        song = song_from_tags({"file": "a.mp3"})

        assert song.artist == "Unknown Artist"
        assert song.album == "Unknown Album"
        assert song.title == "Unknown"
        assert song.track == ""
        assert song.duration == 0

    def test_bad_duration_is_zero(self) -> None:
        song = song_from_tags({"file": "a.mp3", "Time": "n/a"})
        assert song.duration == 0

    def test_populate_resets_previous_values(self) -> None:
        song = Song()
        song.artist = "Someone"

        populate_song(song, {"file": "a.mp3"})

        assert song.artist == "Unknown Artist"

    def test_directory_is_injected(self) -> None:
        directory = MagicMock()
        song = song_from_tags({"file": "a.mp3"}, directory=directory)
        assert song.directory is directory


class TestFilenameFallback:
    """Filename parsing when tags cannot be read."""

    def test_artist_title_filename(self) -> None:
        assert extract_metadata_from_filename("/music/Miles Davis - So What.mp3") == {
            "artist": "Miles Davis",
            "title": "So What",
        }

    def test_plain_filename(self) -> None:
        assert extract_metadata_from_filename("/music/track01.mp3") == {
            "artist": None,
            "title": "track01",
        }


class TestGetTagValue:
    """Tag lookup across tag naming schemes."""

    def test_first_matching_name(self) -> None:
        audio = {"ARTIST": ["Miles Davis"], "TPE1": None}
        assert get_tag_value(audio, ["TPE1", "ARTIST"]) == "Miles Davis"

    def test_mp4_track_pair(self) -> None:
        audio = {"trkn": [(3, 9)]}
        assert get_tag_value(audio, ["trkn"]) == "3"

    def test_missing(self) -> None:
        assert get_tag_value({}, ["TPE1"]) is None


class TestSongFromFile:
    """Reading local files through Mutagen."""

    def test_reads_tags(self) -> None:
        audio = MagicMock()
        tags = {
            "artist": ["The Beatles"],
            "album": ["Abbey Road"],
            "title": ["Something"],
            "tracknumber": ["2"],
            "genre": ["Rock"],
            "date": ["1969"],
        }
        audio.get.side_effect = tags.get
        audio.info.length = 182.9

        with patch(
            "trackline.domain.library.metadata.MutagenFile", return_value=audio
        ):
            song = song_from_file("/music/something.ogg")

        assert song.uri == "/music/something.ogg"
        assert song.artist == "The Beatles"
        assert song.album == "Abbey Road"
        assert song.title == "Something"
        assert song.track == "2"
        assert song.genre == "Rock"
        assert song.date == "1969"
        assert song.duration == 182
        assert song.format_string("%A - %t") == "Beatles, The - Something"

    def test_missing_title_uses_filename(self) -> None:
        audio = MagicMock()
        audio.get.return_value = None
        audio.info.length = 0

        with patch(
            "trackline.domain.library.metadata.MutagenFile", return_value=audio
        ):
            song = song_from_file("/music/untitled.flac")

        assert song.title == "untitled"
        assert song.artist == "Unknown Artist"

    @pytest.mark.parametrize("side_effect", [MutagenError("bad"), OSError("gone")])
    def test_unreadable_file_uses_filename(self, side_effect: Exception) -> None:
        with patch(
            "trackline.domain.library.metadata.MutagenFile", side_effect=side_effect
        ):
            song = song_from_file("/music/Miles Davis - So What.mp3")

        assert song.artist == "Miles Davis"
        assert song.title == "So What"
        assert song.uri == "/music/Miles Davis - So What.mp3"

    def test_unsupported_format_uses_filename(self) -> None:
        with patch(
            "trackline.domain.library.metadata.MutagenFile", return_value=None
        ):
            song = song_from_file("/music/notes.txt")

        assert song.title == "notes"
        assert song.artist == "Unknown Artist"
