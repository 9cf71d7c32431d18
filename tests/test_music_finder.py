import pytest

from conftest import FakeSpotify, external_track
from errors import SpotifyAuthError
from music_finder import MusicFinder


def test_without_credentials_prefer_external_matches_local(catalog):
    finder = MusicFinder(catalog)
    assert not finder.external_enabled
    assert finder.fetch_tracks("joy", "hindi", prefer_external=True) == finder.fetch_tracks(
        "joy", "hindi", prefer_external=False
    )


def test_external_tracks_returned_when_available(catalog):
    spotify = FakeSpotify(tracks=[external_track()])
    finder = MusicFinder(catalog, spotify)

    tracks = finder.fetch_tracks("sadness", "english", prefer_external=True, limit=4)

    assert spotify.calls == [("sadness", "english", 4)]
    assert [track.title for track in tracks] == ["Remote Song"]
    assert tracks[0].emotion == "sadness"
    assert tracks[0].id is None


def test_external_skipped_when_not_preferred(catalog):
    spotify = FakeSpotify(tracks=[external_track()])
    finder = MusicFinder(catalog, spotify)

    tracks = finder.fetch_tracks("joy", "english", prefer_external=False)

    assert spotify.calls == []
    assert {track.title for track in tracks} == {"Walking on Sunshine", "Happy"}


def test_empty_external_result_falls_back_to_local(catalog):
    finder = MusicFinder(catalog, FakeSpotify(tracks=[]))
    tracks = finder.fetch_tracks("anger", "hindi", prefer_external=True)
    assert [track.title for track in tracks] == ["Dhoom Machale"]


def test_provider_error_falls_back_to_local(catalog, api_error):
    finder = MusicFinder(catalog, FakeSpotify(error=api_error))
    tracks = finder.fetch_tracks("neutral", "english", prefer_external=True)
    assert [track.title for track in tracks] == ["Weightless"]


def test_token_failure_propagates(catalog, auth_error):
    finder = MusicFinder(catalog, FakeSpotify(error=auth_error))
    with pytest.raises(SpotifyAuthError):
        finder.fetch_tracks("joy", "english", prefer_external=True)


def test_local_lookup_is_not_widened_across_languages(catalog):
    finder = MusicFinder(catalog)
    assert finder.fetch_tracks("sadness", "french") == []
    assert len(finder.local_tracks("sadness")) == 2
