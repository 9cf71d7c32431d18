"""Spotify Web API access: client-credentials token cache and mood-shaped track lookups."""

import logging
import threading
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

import requests

from errors import SpotifyAPIError, SpotifyAuthError
from lexicon import ANGER, JOY, NEUTRAL, SADNESS, SUPPORTED_LANGUAGES
from track_catalog import Track

logger = logging.getLogger(__name__)

SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"
SPOTIFY_API_BASE = "https://api.spotify.com/v1"

TOKEN_EXPIRY_MARGIN = 60

# Seed genres plus audio-feature bounds for the recommendations endpoint
RECOMMENDATION_PARAMS: Dict[str, Dict[str, Any]] = {
    JOY: {"seed_genres": "happy,pop,dance", "min_valence": 0.7, "min_energy": 0.6},
    SADNESS: {"seed_genres": "sad,blues,rainy-day", "max_valence": 0.4, "max_energy": 0.5},
    ANGER: {"seed_genres": "rock,metal,electronic", "min_energy": 0.7, "min_tempo": 120},
    NEUTRAL: {"seed_genres": "ambient,study,acoustic", "min_valence": 0.4, "max_valence": 0.6},
}

# The recommendations endpoint can't target the Indian catalog, so Hindi goes through search
HINDI_SEARCH_QUERIES: Dict[str, str] = {
    JOY: "bollywood happy dance",
    SADNESS: "bollywood sad emotional",
    ANGER: "bollywood intense powerful",
    NEUTRAL: "bollywood relaxing calm",
}
HINDI_MARKET = "IN"


def format_duration(duration_ms: int) -> str:
    minutes, remainder = divmod(int(duration_ms or 0), 60000)
    return f"{minutes}:{remainder // 1000:02d}"


def track_from_spotify(item: Dict[str, Any], emotion: str, language: str) -> Track:
    """Map a Spotify track object onto our Track shape.

    Spotify doesn't classify by emotion, so the emotion and language the query
    was made for are stamped onto the result.
    """
    artists = item.get("artists") or []
    images = (item.get("album") or {}).get("images") or []
    external_urls = item.get("external_urls") or {}

    return Track(
        title=item.get("name", ""),
        artist=", ".join(artist.get("name") for artist in artists if artist.get("name")),
        duration=format_duration(item.get("duration_ms", 0)),
        audio_url=item.get("preview_url") or "",
        cover_url=images[0].get("url", "") if images else "",
        emotion=emotion,
        language=language,
        spotify_id=item.get("id"),
        external_url=external_urls.get("spotify"),
    )


class TokenCache:
    """Process-wide client-credentials token, refreshed under a lock when it expires."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        session: Optional[requests.Session] = None,
        timeout: float = 8,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._client_id = client_id
        self._client_secret = client_secret
        self._session = session or requests.Session()
        self._timeout = timeout
        self._clock = clock
        self._lock = threading.Lock()
        # (token, expires_at) is swapped as one tuple so readers never see half of it
        self._cached: Optional[Tuple[str, float]] = None

    def get_token(self) -> str:
        cached = self._cached
        if cached and cached[1] > self._clock():
            return cached[0]

        with self._lock:
            # Another thread may have refreshed while we waited
            cached = self._cached
            if cached and cached[1] > self._clock():
                return cached[0]

            token, expires_in = self._request_token()
            self._cached = (token, self._clock() + expires_in - TOKEN_EXPIRY_MARGIN)
            logger.info("Fetched new Spotify access token (expires in %ss)", expires_in)
            return token

    def _request_token(self) -> Tuple[str, int]:
        try:
            response = self._session.post(
                SPOTIFY_TOKEN_URL,
                data={"grant_type": "client_credentials"},
                auth=(self._client_id, self._client_secret),
                timeout=self._timeout,
            )
            response.raise_for_status()
            payload = response.json()
            return payload["access_token"], int(payload["expires_in"])
        except (requests.RequestException, ValueError, KeyError) as exc:
            logger.error("Error getting Spotify token: %s", exc)
            raise SpotifyAuthError(f"Failed to get token: {exc}") from exc


class SpotifyClient:
    """Looks up tracks for an emotion, shaped per language the way Spotify allows."""

    def __init__(
        self,
        token_cache: TokenCache,
        session: Optional[requests.Session] = None,
        timeout: float = 8,
    ) -> None:
        self._tokens = token_cache
        self._session = session or requests.Session()
        self._timeout = timeout

    def recommended_tracks(self, emotion: str, language: str = "english", limit: int = 10) -> List[Track]:
        if language not in SUPPORTED_LANGUAGES:
            logger.info("Spotify has no request shape for language %r", language)
            return []

        if language == "hindi":
            items = self._hindi_search(emotion, limit)
        else:
            items = self._recommendations(emotion, limit)

        return [track_from_spotify(item, emotion, language) for item in items]

    def _recommendations(self, emotion: str, limit: int) -> List[Dict[str, Any]]:
        params = {"limit": limit, **RECOMMENDATION_PARAMS.get(emotion, {"seed_genres": "pop"})}
        payload = self._get("/recommendations", params)
        return payload.get("tracks") or []

    def _hindi_search(self, emotion: str, limit: int) -> List[Dict[str, Any]]:
        params = {
            "q": HINDI_SEARCH_QUERIES.get(emotion, "bollywood popular"),
            "type": "track",
            "market": HINDI_MARKET,
            "limit": limit,
        }
        payload = self._get("/search", params)
        return (payload.get("tracks") or {}).get("items") or []

    def _get(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        token = self._tokens.get_token()
        try:
            response = self._session.get(
                f"{SPOTIFY_API_BASE}{path}",
                params=params,
                headers={"Authorization": f"Bearer {token}"},
                timeout=self._timeout,
            )
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as exc:
            raise SpotifyAPIError(f"Spotify API error on {path}: {exc}") from exc
