import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List

from emotion_analyzer import ClassificationResult, EmotionAnalyzer
from errors import InvalidInputError, MoodTunesError, SpotifyAuthError
from lexicon import DEFAULT_LANGUAGE, EMOTION_LABELS, SELECTED_DESCRIPTIONS, is_emotion
from music_finder import MusicFinder
from track_catalog import Track

logger = logging.getLogger(__name__)

# Placeholder ids for provider tracks start here, clear of local catalog ids
PLACEHOLDER_ID_OFFSET = 1000


@dataclass
class RecommendationResult:
    emotion: ClassificationResult
    tracks: List[Track] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "emotion": self.emotion.to_dict(),
            "tracks": [track.to_dict() for track in self.tracks],
        }


def backfill_track_ids(tracks: List[Track]) -> List[Track]:
    return [
        track if track.id else replace(track, id=index + PLACEHOLDER_ID_OFFSET)
        for index, track in enumerate(tracks)
    ]


def _checked_language(language: object) -> str:
    if not language:
        return DEFAULT_LANGUAGE
    if not isinstance(language, str):
        raise InvalidInputError("Invalid input: 'language' must be a string.")
    return language


class MoodRecommender:
    """Turns free text, a picked emotion or a snapshot into an emotion plus tracks."""

    def __init__(self, analyzer: EmotionAnalyzer, finder: MusicFinder, limit: int = 10) -> None:
        self._analyzer = analyzer
        self._finder = finder
        self._limit = limit

    def recommend_from_text(self, text: str, language: str = DEFAULT_LANGUAGE) -> RecommendationResult:
        normalized = text.strip() if isinstance(text, str) else ""
        if not normalized:
            raise InvalidInputError("Text is required.")
        language = _checked_language(language)

        emotion = self._analyzer.classify(normalized, language)

        try:
            tracks = self._finder.fetch_tracks(
                emotion.type,
                language,
                prefer_external=self._finder.external_enabled,
                limit=self._limit,
            )
        except SpotifyAuthError as exc:
            logger.warning("Spotify unavailable, falling back to local tracks: %s", exc)
            tracks = self._finder.local_tracks(emotion.type, language)

        if not tracks:
            # Nothing in this language: widen to every language for the emotion
            tracks = self._finder.local_tracks(emotion.type)

        return RecommendationResult(emotion=emotion, tracks=backfill_track_ids(tracks))

    def recommend_for_emotion(self, emotion: str, language: str = DEFAULT_LANGUAGE) -> RecommendationResult:
        if not is_emotion(emotion):
            raise InvalidInputError(
                f"Invalid emotion type {emotion!r}; expected one of {', '.join(EMOTION_LABELS)}."
            )

        classification = ClassificationResult(
            type=emotion,
            score=1.0,
            description=SELECTED_DESCRIPTIONS[emotion],
        )
        tracks = self._tracks_for_emotion(emotion, _checked_language(language))
        return RecommendationResult(emotion=classification, tracks=tracks)

    def recommend_from_snapshot(self, image_data: str, language: str = DEFAULT_LANGUAGE) -> RecommendationResult:
        language = _checked_language(language)
        emotion = self._analyzer.detect_from_snapshot(image_data)
        tracks = self._tracks_for_emotion(emotion.type, language)
        return RecommendationResult(emotion=emotion, tracks=tracks)

    def _tracks_for_emotion(self, emotion: str, language: str) -> List[Track]:
        try:
            tracks = self._finder.fetch_tracks(
                emotion, language, prefer_external=True, limit=self._limit
            )
        except MoodTunesError as exc:
            logger.warning("Spotify lookup failed for %s, retrying locally: %s", emotion, exc)
            tracks = self._finder.fetch_tracks(
                emotion, language, prefer_external=False, limit=self._limit
            )
        return backfill_track_ids(tracks)
