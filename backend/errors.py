"""Exceptions shared by the analyzer, catalog gateway and HTTP layer."""


class MoodTunesError(Exception):
    """Base class for every error raised by the backend."""


class InvalidInputError(MoodTunesError):
    """The caller supplied text, an emotion or a payload we cannot work with."""


class SpotifyAPIError(MoodTunesError):
    """A Spotify request failed, timed out or returned a non-success status."""


class SpotifyAuthError(SpotifyAPIError):
    """The client-credentials token could not be obtained."""
