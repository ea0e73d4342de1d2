"""Badge service models"""

from now_playing_badge.models.spotify import (
    Album,
    AlbumImage,
    Artist,
    NowPlaying,
    PlaybackState,
    SpotifyCredentials,
    Track,
)

__all__ = [
    "Album",
    "AlbumImage",
    "Artist",
    "NowPlaying",
    "PlaybackState",
    "SpotifyCredentials",
    "Track",
]
