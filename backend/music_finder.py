import logging
from typing import List, Optional

from errors import SpotifyAPIError, SpotifyAuthError
from lexicon import DEFAULT_LANGUAGE
from spotify_client import SpotifyClient
from track_catalog import Track, TrackCatalog

logger = logging.getLogger(__name__)


class MusicFinder:
    """Finds tracks for an emotion, trying Spotify first and the local catalog after."""

    def __init__(self, catalog: TrackCatalog, spotify: Optional[SpotifyClient] = None) -> None:
        self._catalog = catalog
        # None means no credentials: enrichment is switched off, not broken
        self._spotify = spotify

    @property
    def external_enabled(self) -> bool:
        return self._spotify is not None

    def fetch_tracks(
        self,
        emotion: str,
        language: str = DEFAULT_LANGUAGE,
        prefer_external: bool = False,
        limit: int = 10,
    ) -> List[Track]:
        """Return tracks for ``emotion`` in ``language``.

        Spotify errors and empty Spotify results fall through to the local
        catalog. A failure to obtain the Spotify token is raised to the caller.
        The local lookup is never widened beyond ``language`` here.
        """
        if prefer_external and self._spotify is not None:
            tracks = self._fetch_external(emotion, language, limit)
            if tracks:
                return tracks

        return self._catalog.by_emotion_and_language(emotion, language)

    def local_tracks(self, emotion: str, language: Optional[str] = None) -> List[Track]:
        if language:
            return self._catalog.by_emotion_and_language(emotion, language)
        return self._catalog.by_emotion(emotion)

    def _fetch_external(self, emotion: str, language: str, limit: int) -> List[Track]:
        try:
            tracks = self._spotify.recommended_tracks(emotion, language, limit)
        except SpotifyAuthError:
            raise
        except SpotifyAPIError as exc:
            logger.warning("Error fetching from Spotify, using local catalog: %s", exc)
            return []

        if not tracks:
            logger.info(
                "Spotify returned no tracks for %s/%s, falling back to local catalog",
                emotion,
                language,
            )
        return tracks
