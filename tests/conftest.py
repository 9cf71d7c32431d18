import pytest
import requests

from config import Config
from errors import SpotifyAPIError, SpotifyAuthError
from music_finder import MusicFinder
from track_catalog import Track, TrackCatalog


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self._payload = payload if payload is not None else {}
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        return self._payload


class FakeSession:
    """Records requests and replays canned responses (or raises canned errors)."""

    def __init__(self, get=None, post=None):
        self.get_responses = list(get or [])
        self.post_responses = list(post or [])
        self.get_calls = []
        self.post_calls = []

    def get(self, url, **kwargs):
        self.get_calls.append((url, kwargs))
        return self._next(self.get_responses)

    def post(self, url, **kwargs):
        self.post_calls.append((url, kwargs))
        return self._next(self.post_responses)

    @staticmethod
    def _next(responses):
        response = responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeSpotify:
    """Stands in for SpotifyClient inside the gateway."""

    def __init__(self, tracks=None, error=None):
        self.tracks = tracks or []
        self.error = error
        self.calls = []

    def recommended_tracks(self, emotion, language="english", limit=10):
        self.calls.append((emotion, language, limit))
        if self.error is not None:
            raise self.error
        return [
            Track(
                title=track.title,
                artist=track.artist,
                duration=track.duration,
                audio_url=track.audio_url,
                cover_url=track.cover_url,
                emotion=emotion,
                language=language,
                spotify_id=track.spotify_id,
                external_url=track.external_url,
            )
            for track in self.tracks
        ]


def spotify_item(name="Song", duration_ms=245000, track_id="sp1"):
    return {
        "id": track_id,
        "name": name,
        "duration_ms": duration_ms,
        "preview_url": "https://p.scdn.co/preview.mp3",
        "artists": [{"name": "First"}, {"name": "Second"}],
        "album": {"images": [{"url": "https://i.scdn.co/cover.jpg"}, {"url": "https://i.scdn.co/small.jpg"}]},
        "external_urls": {"spotify": f"https://open.spotify.com/track/{track_id}"},
    }


def external_track(title="Remote Song"):
    return Track(
        title=title,
        artist="Remote Artist",
        duration="3:00",
        audio_url="",
        cover_url="",
        emotion="joy",
        spotify_id="remote-1",
        external_url="https://open.spotify.com/track/remote-1",
    )


@pytest.fixture
def catalog():
    store = TrackCatalog(":memory:")
    store.seed_if_empty()
    yield store
    store.close()


@pytest.fixture
def empty_catalog():
    store = TrackCatalog(":memory:")
    yield store
    store.close()


@pytest.fixture
def local_finder(catalog):
    return MusicFinder(catalog)


@pytest.fixture
def offline_config():
    return Config(
        SPOTIFY_CLIENT_ID="",
        SPOTIFY_CLIENT_SECRET="",
        DATABASE_PATH=":memory:",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def auth_error():
    return SpotifyAuthError("Failed to get token: 401")


@pytest.fixture
def api_error():
    return SpotifyAPIError("Spotify API error on /recommendations: 503")
