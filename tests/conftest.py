"""
Test configuration and shared fixtures for pytest
"""
import shutil
import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from track_mirror.core.models import CandidateCollection, CandidateTrack, ReferenceTrack


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests"""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def mock_tidal_session():
    """Mock Tidal session for testing"""
    session = MagicMock()
    session.check_login.return_value = True
    session.token_type = "Bearer"
    session.access_token = "test_access_token"
    session.refresh_token = "test_refresh_token"
    return session


@pytest.fixture
def reference_track():
    """Reference track with an ISRC"""
    return ReferenceTrack(
        title="Blinding Lights",
        author="The Weeknd",
        duration=200000,
        isrc="USUG1-19-02678",
        uri="https://open.spotify.com/track/0VjIjW4GlUZAMYd2vXMi3b",
    )


@pytest.fixture
def candidate_collection():
    """Search result with the original and a clean radio edit"""
    return CandidateCollection(
        tracks=[
            CandidateTrack("Blinding Lights", "The Weeknd", 200000, identifier="1"),
            CandidateTrack(
                "Blinding Lights (Clean Radio Edit)",
                "The Weeknd",
                201000,
                identifier="2",
            ),
        ],
        name="Blinding Lights The Weeknd",
    )
