"""Tests for Song field storage, sentinels and copying."""

import copy

import pytest

from trackline.domain.library.models import (
    UNKNOWN_ALBUM,
    UNKNOWN_ARTIST,
    UNKNOWN_DATE,
    UNKNOWN_GENRE,
    UNKNOWN_TITLE,
    UNKNOWN_URI,
    Song,
    format_duration,
)


class TestDefaults:
    """A new song starts with sentinels, no references and no entry."""

    def test_sentinels(self) -> None:
        song = Song()
        assert song.artist == UNKNOWN_ARTIST == "Unknown Artist"
        assert song.album == UNKNOWN_ALBUM == "Unknown Album"
        assert song.title == UNKNOWN_TITLE == "Unknown"
        assert song.uri == UNKNOWN_URI
        assert song.genre == UNKNOWN_GENRE
        assert song.date == UNKNOWN_DATE
        assert song.track == ""

    def test_counters_and_links(self) -> None:
        song = Song()
        assert song.reference == 0
        assert song.entry is None
        assert song.duration == 0
        assert song.duration_string == "0:00"


class TestSetters:
    """Setting a field stores it; setting None installs the sentinel."""

    @pytest.mark.parametrize(
        "field_name, sentinel",
        [
            ("artist", "Unknown Artist"),
            ("album", "Unknown Album"),
            ("title", "Unknown"),
            ("uri", "Unknown"),
            ("genre", "Unknown"),
            ("date", "Unknown"),
            ("track", ""),
        ],
    )
    def test_set_then_clear(self, field_name: str, sentinel: str) -> None:
        song = Song()
        setattr(song, field_name, "value")
        assert getattr(song, field_name) == "value"

        setattr(song, field_name, None)
        assert getattr(song, field_name) == sentinel

    def test_empty_track_is_kept(self) -> None:
        song = Song()
        song.track = "7"
        song.track = ""
        assert song.track == ""


class TestDuration:
    """Duration updates the M:SS display string."""

    @pytest.mark.parametrize(
        "seconds, expected",
        [(0, "0:00"), (5, "0:05"), (65, "1:05"), (600, "10:00"), (3725, "62:05")],
    )
    def test_duration_string(self, seconds: int, expected: str) -> None:
        song = Song()
        song.duration = seconds
        assert song.duration == seconds
        assert song.duration_string == expected

    def test_negative_duration_is_not_clamped(self) -> None:
        song = Song()
        song.duration = -5
        assert song.duration == -5
        assert song.duration_string == format_duration(-5)


class TestCopy:
    """Copies share metadata but not membership."""

    def test_copy_keeps_fields(self) -> None:
        song = Song()
        song.artist = "Miles Davis"
        song.album = "Kind of Blue"
        song.title = "So What"
        song.track = "1"
        song.uri = "jazz/so_what.flac"
        song.genre = "Jazz"
        song.date = "1959"
        song.duration = 562

        duplicate = copy.copy(song)

        assert duplicate is not song
        assert duplicate.artist == "Miles Davis"
        assert duplicate.album == "Kind of Blue"
        assert duplicate.title == "So What"
        assert duplicate.track == "1"
        assert duplicate.uri == "jazz/so_what.flac"
        assert duplicate.genre == "Jazz"
        assert duplicate.date == "1959"
        assert duplicate.duration == 562
        assert duplicate.duration_string == "9:22"

    def test_copy_starts_unreferenced(self) -> None:
        song = Song()
        song.increment_reference()

        duplicate = song.copy()

        assert duplicate.reference == 0
        assert duplicate.entry is None
