"""Local SQLite-backed track catalog."""

import logging
import sqlite3
import threading
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, List, Optional

from lexicon import DEFAULT_LANGUAGE

logger = logging.getLogger(__name__)


@dataclass
class Track:
    title: str
    artist: str
    duration: str
    audio_url: str
    cover_url: str
    emotion: str
    language: str = DEFAULT_LANGUAGE
    spotify_id: Optional[str] = None
    external_url: Optional[str] = None
    id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


_COLUMNS = (
    "id",
    "title",
    "artist",
    "duration",
    "audio_url",
    "cover_url",
    "emotion",
    "language",
    "spotify_id",
    "external_url",
)

_SCHEMA = """
    CREATE TABLE IF NOT EXISTS tracks (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL,
        artist TEXT NOT NULL,
        duration TEXT NOT NULL,
        audio_url TEXT NOT NULL,
        cover_url TEXT NOT NULL,
        emotion TEXT NOT NULL,
        language TEXT DEFAULT 'english',
        spotify_id TEXT,
        external_url TEXT
    )
"""

STARTER_TRACKS = (
    Track(
        title="Walking on Sunshine",
        artist="Katrina & The Waves",
        duration="3:54",
        audio_url="https://actions.google.com/sounds/v1/alarms/digital_watch_alarm_long.ogg",
        cover_url="https://images.unsplash.com/photo-1459749411175-04bf5292ceea?auto=format&fit=crop&w=600&h=400",
        emotion="joy",
        language="english",
    ),
    Track(
        title="Happy",
        artist="Pharrell Williams",
        duration="3:53",
        audio_url="https://actions.google.com/sounds/v1/cartoon/cartoon_boing.ogg",
        cover_url="https://images.unsplash.com/photo-1458560871784-56d23406c091?auto=format&fit=crop&w=600&h=400",
        emotion="joy",
        language="english",
    ),
    Track(
        title="Badtameez Dil",
        artist="Benny Dayal",
        duration="4:08",
        audio_url="https://actions.google.com/sounds/v1/cartoon/cartoon_cowbell.ogg",
        cover_url="https://images.unsplash.com/photo-1571330735066-03aaa9429d89?auto=format&fit=crop&w=600&h=400",
        emotion="joy",
        language="hindi",
    ),
    Track(
        title="Nagada Sang Dhol",
        artist="Shreya Ghoshal",
        duration="3:29",
        audio_url="https://actions.google.com/sounds/v1/cartoon/slide_whistle_to_drum.ogg",
        cover_url="https://images.unsplash.com/photo-1493225457124-a3eb161ffa5f?auto=format&fit=crop&w=600&h=400",
        emotion="joy",
        language="hindi",
    ),
    Track(
        title="Someone Like You",
        artist="Adele",
        duration="4:45",
        audio_url="https://actions.google.com/sounds/v1/ambiences/stream_water_flow.ogg",
        cover_url="https://images.unsplash.com/photo-1494253109108-2e30c049369b?auto=format&fit=crop&w=600&h=400",
        emotion="sadness",
        language="english",
    ),
    Track(
        title="Channa Mereya",
        artist="Arijit Singh",
        duration="4:55",
        audio_url="https://actions.google.com/sounds/v1/ambiences/ambient_hum.ogg",
        cover_url="https://images.unsplash.com/photo-1511379938547-c1f69419868d?auto=format&fit=crop&w=600&h=400",
        emotion="sadness",
        language="hindi",
    ),
    Track(
        title="Break Stuff",
        artist="Limp Bizkit",
        duration="2:46",
        audio_url="https://actions.google.com/sounds/v1/alarms/beeps_and_bloops.ogg",
        cover_url="https://images.unsplash.com/photo-1468817814611-b7edf94b5d60?auto=format&fit=crop&w=600&h=400",
        emotion="anger",
        language="english",
    ),
    Track(
        title="Dhoom Machale",
        artist="Sunidhi Chauhan",
        duration="5:13",
        audio_url="https://actions.google.com/sounds/v1/weapons/big_explosion_cut_off.ogg",
        cover_url="https://images.unsplash.com/photo-1523374228107-6e44bd2b524e?auto=format&fit=crop&w=600&h=400",
        emotion="anger",
        language="hindi",
    ),
    Track(
        title="Weightless",
        artist="Marconi Union",
        duration="8:08",
        audio_url="https://actions.google.com/sounds/v1/nature/birds_chirping.ogg",
        cover_url="https://images.unsplash.com/photo-1525362081669-2b476bb628c3?auto=format&fit=crop&w=600&h=400",
        emotion="neutral",
        language="english",
    ),
    Track(
        title="Tum Hi Ho Bandhu",
        artist="Kavita Seth",
        duration="3:42",
        audio_url="https://actions.google.com/sounds/v1/water/day_at_beach.ogg",
        cover_url="https://images.unsplash.com/photo-1516450360452-9312f5e86fc7?auto=format&fit=crop&w=600&h=400",
        emotion="neutral",
        language="hindi",
    ),
)


class TrackCatalog:
    """Queryable track store over a single shared SQLite connection."""

    def __init__(self, database_path: str = ":memory:", timeout: float = 5.0) -> None:
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(database_path, timeout=timeout, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        with self._lock, self._conn:
            self._conn.execute(_SCHEMA)

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def all_tracks(self) -> List[Track]:
        return self._select("")

    def get_track(self, track_id: int) -> Optional[Track]:
        tracks = self._select("WHERE id = ?", (track_id,))
        return tracks[0] if tracks else None

    def by_emotion(self, emotion: str) -> List[Track]:
        return self._select("WHERE emotion = ?", (emotion,))

    def by_language(self, language: str) -> List[Track]:
        return self._select("WHERE language = ?", (language,))

    def by_emotion_and_language(self, emotion: str, language: str) -> List[Track]:
        return self._select("WHERE emotion = ? AND language = ?", (emotion, language))

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def add_track(self, track: Track) -> Track:
        """Insert ``track`` and return a copy carrying its new id."""
        with self._lock, self._conn:
            return self._insert(track)

    def seed_if_empty(self) -> int:
        """Load the starter tracks into an empty catalog; returns how many were added."""
        # Count and inserts run in one write transaction
        with self._lock, self._conn:
            self._conn.execute("BEGIN IMMEDIATE")
            count = self._conn.execute("SELECT COUNT(*) FROM tracks").fetchone()[0]
            if count:
                return 0
            for track in STARTER_TRACKS:
                self._insert(track)

        logger.info("Seeded local catalog with %d starter tracks", len(STARTER_TRACKS))
        return len(STARTER_TRACKS)

    def _insert(self, track: Track) -> Track:
        values = asdict(track)
        values.pop("id")
        values["language"] = values["language"] or DEFAULT_LANGUAGE

        columns = ", ".join(values)
        placeholders = ", ".join("?" for _ in values)
        cursor = self._conn.execute(
            f"INSERT INTO tracks ({columns}) VALUES ({placeholders})",
            tuple(values.values()),
        )
        return replace(track, id=cursor.lastrowid, language=values["language"])

    def _select(self, where: str, params: tuple = ()) -> List[Track]:
        query = f"SELECT {', '.join(_COLUMNS)} FROM tracks {where} ORDER BY id"
        with self._lock:
            rows = self._conn.execute(query, params).fetchall()
        return [Track(**dict(row)) for row in rows]
