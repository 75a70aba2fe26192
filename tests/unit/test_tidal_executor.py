"""
Tests for the Tidal query executor.
"""
from unittest.mock import Mock

import pytest
import tidalapi
from tidalapi.exceptions import ObjectNotFound

from track_mirror.core.exceptions import SearchError
from track_mirror.core.models import (
    NO_MATCH,
    CandidateCollection,
    CandidateTrack,
    ReferenceTrack,
)
from track_mirror.core.resolver import MirrorResolver
from track_mirror.integrations.tidal.executor import TidalQueryExecutor, to_candidate


def make_artist(name):
    artist = Mock()
    artist.name = name
    return artist


def make_tidal_track(track_id, name, artists, duration, isrc=None, explicit=False):
    """Build a mock shaped like a tidalapi track."""
    track = Mock()
    track.id = track_id
    track.name = name
    track.artists = [make_artist(artist_name) for artist_name in artists]
    track.artist = track.artists[0] if track.artists else None
    track.duration = duration
    track.isrc = isrc
    track.explicit = explicit
    return track


@pytest.fixture
def tidal_tracks():
    return [
        make_tidal_track(
            77646170, "Blinding Lights", ["The Weeknd"], 200, "USUG11902678"
        ),
        make_tidal_track(
            124108391, "Blinding Lights (Chromatics Remix)", ["The Weeknd"], 291
        ),
    ]


@pytest.fixture
def executor(mock_tidal_session):
    return TidalQueryExecutor(mock_tidal_session, limit=10)


def test_to_candidate_converts_fields():
    """Test that a Tidal track becomes a candidate with millisecond duration."""
    tidal_track = make_tidal_track(
        1, "Pressure", ["Sebastian Mullaert", "Eitan Reiter"], 412, "SE5Q51900001", True
    )

    candidate = to_candidate(tidal_track)

    assert candidate == CandidateTrack(
        title="Pressure",
        author="Sebastian Mullaert, Eitan Reiter",
        duration=412000,
        identifier="1",
        uri="https://tidal.com/browse/track/1",
        isrc="SE5Q51900001",
        explicit=True,
    )


def test_to_candidate_without_artists():
    tidal_track = make_tidal_track(2, "Untitled", [], None)

    candidate = to_candidate(tidal_track)

    assert candidate.author == "unknown"
    assert candidate.duration == 0


def test_search_returns_collection(executor, mock_tidal_session, tidal_tracks):
    mock_tidal_session.search.return_value = {"tracks": tidal_tracks}

    result = executor.execute("tdsearch:Blinding Lights The Weeknd")

    assert isinstance(result, CandidateCollection)
    assert [track.identifier for track in result] == ["77646170", "124108391"]
    mock_tidal_session.search.assert_called_once_with(
        "Blinding Lights The Weeknd", models=[tidalapi.Track], limit=10
    )


def test_search_without_tracks_returns_empty_collection(executor, mock_tidal_session):
    mock_tidal_session.search.return_value = {"tracks": []}

    result = executor.execute('tdsearch:"USUG11902678"')

    assert isinstance(result, CandidateCollection)
    assert not result


def test_track_lookup_returns_single_item(executor, mock_tidal_session, tidal_tracks):
    mock_tidal_session.track.return_value = tidal_tracks[0]

    result = executor.execute("tdtrack:77646170")

    assert isinstance(result, CandidateTrack)
    assert result.title == "Blinding Lights"
    mock_tidal_session.track.assert_called_once_with("77646170")


def test_missing_track_returns_no_match(executor, mock_tidal_session):
    mock_tidal_session.track.side_effect = ObjectNotFound("not found")

    assert executor.execute("tdtrack:1") is NO_MATCH


def test_unknown_prefix_raises(executor):
    with pytest.raises(SearchError):
        executor.execute("ytsearch:Blinding Lights")


def test_resolver_with_tidal_executor(executor, mock_tidal_session, tidal_tracks):
    """Test a full resolution where the remix is filtered out by duration."""
    mock_tidal_session.search.return_value = {"tracks": list(reversed(tidal_tracks))}
    resolver = MirrorResolver(executor)
    reference = ReferenceTrack(
        "Blinding Lights", "The Weeknd", 200040, isrc="USUG1-19-02678"
    )

    result = resolver.resolve(reference)

    assert result.identifier == "77646170"
    mock_tidal_session.search.assert_called_once()
