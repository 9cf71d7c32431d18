"""Flask API entrypoint for the MoodTunes experience."""

import logging
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from config import Config
from emotion_analyzer import EmotionAnalyzer
from errors import InvalidInputError, MoodTunesError
from lexicon import DEFAULT_LANGUAGE, EMOTION_LABELS, JOY, is_emotion
from music_finder import MusicFinder
from recommender import MoodRecommender, backfill_track_ids
from spotify_client import SpotifyClient, TokenCache
from track_catalog import TrackCatalog

logger = logging.getLogger(__name__)


def build_spotify_client(config: Config) -> Optional[SpotifyClient]:
    if not config.spotify_configured():
        logger.info("Spotify credentials not configured; serving the local catalog only")
        return None

    tokens = TokenCache(
        config.SPOTIFY_CLIENT_ID,
        config.SPOTIFY_CLIENT_SECRET,
        timeout=config.REQUEST_TIMEOUT,
    )
    return SpotifyClient(tokens, timeout=config.REQUEST_TIMEOUT)


def create_app(
    config: Optional[Config] = None,
    catalog: Optional[TrackCatalog] = None,
    spotify: Optional[SpotifyClient] = None,
    analyzer: Optional[EmotionAnalyzer] = None,
) -> Flask:
    config = config or Config()
    logging.basicConfig(level=config.LOG_LEVEL)

    catalog = catalog or TrackCatalog(config.DATABASE_PATH)
    catalog.seed_if_empty()
    if spotify is None:
        spotify = build_spotify_client(config)

    finder = MusicFinder(catalog, spotify)
    recommender = MoodRecommender(
        analyzer or EmotionAnalyzer(), finder, limit=config.RECOMMENDATION_LIMIT
    )

    app = Flask(__name__)
    CORS(app, resources={r"/api/*": {"origins": "*"}})

    @app.errorhandler(InvalidInputError)
    def handle_invalid_input(exc):
        return jsonify({"error": str(exc)}), 400

    @app.route("/api/health", methods=["GET"])
    def health_check():
        return jsonify(
            {
                "status": "healthy",
                "message": "MoodTunes API is alive!",
                "spotify": finder.external_enabled,
            }
        )

    @app.route("/api/tracks", methods=["GET"])
    def list_tracks():
        return jsonify([track.to_dict() for track in catalog.all_tracks()])

    @app.route("/api/tracks/<track_id>", methods=["GET"])
    def get_track(track_id):
        try:
            parsed_id = int(track_id)
        except ValueError:
            return jsonify({"error": "Invalid track ID"}), 400

        track = catalog.get_track(parsed_id)
        if track is None:
            return jsonify({"error": "Track not found"}), 404
        return jsonify(track.to_dict())

    @app.route("/api/tracks/emotion/<emotion>", methods=["GET"])
    def tracks_by_emotion(emotion):
        if not is_emotion(emotion):
            return jsonify({"error": "Invalid emotion type", "valid": list(EMOTION_LABELS)}), 400

        language = request.args.get("language") or DEFAULT_LANGUAGE
        prefer_external = request.args.get("source", "local") == "spotify"

        try:
            tracks = finder.fetch_tracks(
                emotion, language, prefer_external=prefer_external, limit=config.RECOMMENDATION_LIMIT
            )
        except MoodTunesError as exc:
            logger.warning("Spotify lookup failed, serving local tracks: %s", exc)
            tracks = finder.local_tracks(emotion, language)

        return jsonify([track.to_dict() for track in backfill_track_ids(tracks)])

    @app.route("/api/tracks/language/<language>", methods=["GET"])
    def tracks_by_language(language):
        return jsonify([track.to_dict() for track in catalog.by_language(language)])

    @app.route("/api/analyze/text", methods=["POST"])
    def analyze_text():
        payload = request.get_json(silent=True) or {}
        text = payload.get("text")
        language = payload.get("language") or DEFAULT_LANGUAGE

        if not isinstance(text, str) or not isinstance(language, str):
            return jsonify({"error": "Invalid input: 'text' and 'language' must be strings."}), 400

        result = recommender.recommend_from_text(text, language)
        return jsonify(result.to_dict())

    @app.route("/api/analyze/emotion", methods=["POST"])
    def analyze_selected_emotion():
        payload = request.get_json(silent=True) or {}
        language = payload.get("language") or DEFAULT_LANGUAGE

        result = recommender.recommend_for_emotion(payload.get("emotion"), language)
        return jsonify(result.to_dict())

    @app.route("/api/analyze/snapshot", methods=["POST"])
    def analyze_snapshot():
        payload = request.get_json(silent=True) or {}
        language = payload.get("language") or DEFAULT_LANGUAGE

        result = recommender.recommend_from_snapshot(payload.get("image"), language)
        return jsonify(result.to_dict())

    @app.route("/api/spotify/test", methods=["GET"])
    def spotify_test():
        if not finder.external_enabled:
            return jsonify({"success": False, "message": "Spotify credentials are not configured"}), 400

        emotion = request.args.get("emotion", JOY)
        if not is_emotion(emotion):
            return jsonify({"error": "Invalid emotion type", "valid": list(EMOTION_LABELS)}), 400
        language = request.args.get("language", DEFAULT_LANGUAGE)
        try:
            limit = int(request.args.get("limit", "5"))
        except ValueError:
            return jsonify({"error": "limit must be an integer"}), 400

        try:
            tracks = spotify.recommended_tracks(emotion, language, limit)
        except MoodTunesError as exc:
            logger.error("Spotify test error: %s", exc)
            return (
                jsonify(
                    {
                        "success": False,
                        "message": "Failed to connect to Spotify API",
                        "error": str(exc),
                    }
                ),
                500,
            )

        return jsonify(
            {
                "success": True,
                "credentialsConfigured": True,
                "tracksCount": len(tracks),
                "tracks": [track.to_dict() for track in tracks],
            }
        )

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)
