"""
Unit tests for core.models module.
"""
import dataclasses
import unittest

from track_mirror.core.models import (
    NO_MATCH,
    CandidateCollection,
    CandidateTrack,
    NoMatch,
    ReferenceTrack,
    ResolutionSummary,
)


class TestReferenceTrack(unittest.TestCase):
    """Test cases for ReferenceTrack model."""

    def test_creation_minimal(self):
        track = ReferenceTrack(
            title="Test Track", author="Test Artist", duration=180000
        )

        self.assertEqual(track.title, "Test Track")
        self.assertIsNone(track.isrc)
        self.assertIsNone(track.uri)

    def test_negative_duration_rejected(self):
        with self.assertRaises(ValueError):
            ReferenceTrack(title="Test Track", author="Test Artist", duration=-1)

    def test_immutable(self):
        track = ReferenceTrack(title="Test Track", author="Test Artist", duration=1000)

        with self.assertRaises(dataclasses.FrozenInstanceError):
            track.title = "Other"

    def test_explicit_from_uri(self):
        explicit = ReferenceTrack("A", "B", 1000, uri="spotify:track:1?explicit=true")
        clean = ReferenceTrack("A", "B", 1000, uri="spotify:track:1?explicit=false")
        no_uri = ReferenceTrack("A", "B", 1000)

        self.assertTrue(explicit.is_explicit)
        self.assertFalse(clean.is_explicit)
        self.assertFalse(no_uri.is_explicit)

    def test_isrc_query(self):
        self.assertEqual(
            ReferenceTrack("A", "B", 1000, isrc="USUG1-19-02678").isrc_query,
            "USUG11902678",
        )
        self.assertIsNone(ReferenceTrack("A", "B", 1000, isrc="").isrc_query)
        self.assertIsNone(ReferenceTrack("A", "B", 1000).isrc_query)

    def test_search_query(self):
        self.assertEqual(
            ReferenceTrack("Blinding Lights", "The Weeknd", 1000).search_query,
            "Blinding Lights The Weeknd",
        )

    def test_search_query_unknown_author(self):
        self.assertEqual(
            ReferenceTrack("Blinding Lights", "unknown", 1000).search_query,
            "Blinding Lights",
        )

    def test_duration_formatted(self):
        track = ReferenceTrack("A", "B", 200040)

        self.assertEqual(track.duration_formatted, "3:20")

    def test_str_representation(self):
        track = ReferenceTrack("Blinding Lights", "The Weeknd", 1000)

        self.assertEqual(str(track), "Blinding Lights by The Weeknd")


class TestCandidateTrack(unittest.TestCase):
    """Test cases for CandidateTrack model."""

    def test_equality(self):
        track1 = CandidateTrack("A", "B", 1000, identifier="1")
        track2 = CandidateTrack("A", "B", 1000, identifier="1")
        track3 = CandidateTrack("A", "B", 1000, identifier="2")

        self.assertEqual(track1, track2)
        self.assertNotEqual(track1, track3)

    def test_negative_duration_rejected(self):
        with self.assertRaises(ValueError):
            CandidateTrack("A", "B", -5)

    def test_single_track_is_truthy(self):
        self.assertTrue(CandidateTrack("A", "B", 0))


class TestCandidateCollection(unittest.TestCase):
    """Test cases for CandidateCollection model."""

    def test_list_stored_as_tuple(self):
        tracks = [CandidateTrack("A", "B", 1000)]
        collection = CandidateCollection(tracks)
        tracks.append(CandidateTrack("C", "D", 1000))

        self.assertIsInstance(collection.tracks, tuple)
        self.assertEqual(len(collection), 1)

    def test_empty_collection_is_falsy(self):
        self.assertFalse(CandidateCollection())
        self.assertTrue(CandidateCollection([CandidateTrack("A", "B", 1000)]))

    def test_iteration_order(self):
        tracks = [CandidateTrack(str(i), "B", 1000) for i in range(3)]

        self.assertEqual(list(CandidateCollection(tracks)), tracks)

    def test_str_representation(self):
        collection = CandidateCollection([CandidateTrack("A", "B", 1000)], name="A B")

        self.assertEqual(str(collection), "'A B' with 1 tracks")


class TestNoMatch(unittest.TestCase):
    """Test cases for the NO_MATCH sentinel."""

    def test_singleton(self):
        self.assertIs(NoMatch(), NO_MATCH)

    def test_falsy(self):
        self.assertFalse(NO_MATCH)

    def test_repr(self):
        self.assertEqual(repr(NO_MATCH), "NO_MATCH")


class TestResolutionSummary(unittest.TestCase):
    """Test cases for ResolutionSummary model."""

    def test_empty_summary(self):
        summary = ResolutionSummary()

        self.assertEqual(summary.match_rate, 0.0)
        self.assertEqual(summary.failed, 0)

    def test_record(self):
        summary = ResolutionSummary()

        summary.record(CandidateTrack("A", "B", 1000))
        summary.record(NO_MATCH)
        summary.record(CandidateTrack("C", "D", 1000))
        summary.record(NO_MATCH)

        self.assertEqual(summary.total, 4)
        self.assertEqual(summary.matched, 2)
        self.assertEqual(summary.failed, 2)
        self.assertEqual(summary.match_rate, 50.0)

    def test_str_representation(self):
        summary = ResolutionSummary(total=4, matched=3)

        self.assertEqual(str(summary), "Resolution Result: 3/4 tracks (75.0%)")
