import os
from dotenv import load_dotenv

load_dotenv()


def env_flag(name: str, default: bool = False) -> bool:
    return os.getenv(name, '1' if default else '0') == '1'


class Config:
    # Spotify client-credentials pair; leave unset to serve the local catalog only
    SPOTIFY_CLIENT_ID = os.getenv('SPOTIFY_CLIENT_ID', '')
    SPOTIFY_CLIENT_SECRET = os.getenv('SPOTIFY_CLIENT_SECRET', '')

    # Catalog and provider tuning
    DATABASE_PATH = os.getenv('DATABASE_PATH', 'moodtunes.db')
    REQUEST_TIMEOUT = float(os.getenv('REQUEST_TIMEOUT', '8'))
    RECOMMENDATION_LIMIT = int(os.getenv('RECOMMENDATION_LIMIT', '10'))

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # Server config
    # Off unless FLASK_DEBUG=1
    DEBUG = env_flag('FLASK_DEBUG')
    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = int(os.getenv('PORT', '5000'))

    def __init__(self, **overrides) -> None:
        for key, value in overrides.items():
            if not hasattr(type(self), key):
                raise AttributeError(f"Unknown config option: {key}")
            setattr(self, key, value)

    def spotify_configured(self) -> bool:
        return bool(self.SPOTIFY_CLIENT_ID and self.SPOTIFY_CLIENT_SECRET)
