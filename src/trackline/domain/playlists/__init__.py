"""Playlists domain - ordered song collections that hold playlist references."""

from .playlist import Playlist

__all__ = ["Playlist"]
