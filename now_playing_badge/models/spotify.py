"""Pydantic models for Spotify credentials and playback data."""

from pydantic import BaseModel, ConfigDict, Field


class SpotifyCredentials(BaseModel):
    """Client identity plus the long-lived refresh token."""

    model_config = ConfigDict(frozen=True)

    client_id: str = Field(min_length=1)
    client_secret: str = Field(min_length=1, repr=False)
    refresh_token: str = Field(min_length=1, repr=False)


class AlbumImage(BaseModel):
    url: str
    width: int | None = None
    height: int | None = None


class Artist(BaseModel):
    name: str


class Album(BaseModel):
    images: list[AlbumImage] = Field(default_factory=list)


class Track(BaseModel):
    name: str
    artists: list[Artist]
    album: Album
    duration_ms: int


class PlaybackState(BaseModel):
    """Subset of the currently-playing response the badge needs."""

    is_playing: bool = False
    item: Track | None = None
    progress_ms: int | None = None


class NowPlaying(BaseModel):
    """Everything the populated badge is rendered from."""

    track_name: str
    artist_name: str
    progress_ms: int
    duration_ms: int
    artwork_url: str
