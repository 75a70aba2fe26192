"""
Tidal-backed query executor.
"""
import logging
from typing import Any, List

import tidalapi
from tidalapi.exceptions import ObjectNotFound

from ...core.exceptions import SearchError
from ...core.models import NO_MATCH, CandidateCollection, CandidateTrack, SearchResult
from ...core.queries import TIDAL_SEARCH_PREFIX, TIDAL_TRACK_PREFIX

logger = logging.getLogger(__name__)

TIDAL_TRACK_URL = "https://tidal.com/browse/track/{id}"


def _artist_names(tidal_track: Any) -> str:
    artists = getattr(tidal_track, "artists", None) or []
    names = [artist.name for artist in artists if getattr(artist, "name", None)]
    if names:
        return ", ".join(names)
    artist = getattr(tidal_track, "artist", None)
    return artist.name if artist is not None else "unknown"


def to_candidate(tidal_track: Any) -> CandidateTrack:
    """Convert a tidalapi track into a candidate track."""
    duration = getattr(tidal_track, "duration", None) or 0
    return CandidateTrack(
        title=tidal_track.name,
        author=_artist_names(tidal_track),
        duration=int(duration) * 1000,
        identifier=str(tidal_track.id),
        uri=TIDAL_TRACK_URL.format(id=tidal_track.id),
        isrc=getattr(tidal_track, "isrc", None),
        explicit=getattr(tidal_track, "explicit", None),
    )


class TidalQueryExecutor:
    """Executes ``tdsearch:`` and ``tdtrack:`` queries against Tidal."""

    def __init__(self, session: tidalapi.Session, limit: int = 25):
        self.session = session
        self.limit = limit

    def execute(self, query: str) -> SearchResult:
        """
        Run a provider query against Tidal.

        Args:
            query: Provider prefix followed by search text or a track ID

        Returns:
            A collection for searches, a single track for track lookups

        Raises:
            SearchError: If the query prefix is not a Tidal prefix
        """
        if query.startswith(TIDAL_SEARCH_PREFIX):
            return self._search(query[len(TIDAL_SEARCH_PREFIX):])

        if query.startswith(TIDAL_TRACK_PREFIX):
            return self._track(query[len(TIDAL_TRACK_PREFIX):])

        raise SearchError(f"Unsupported Tidal query: {query}")

    def _search(self, text: str) -> CandidateCollection:
        logger.debug(f"  Searching Tidal for: {text}")

        result = self.session.search(text, models=[tidalapi.Track], limit=self.limit)
        tracks: List[Any] = result.get("tracks", []) or []

        if not tracks:
            logger.debug("    No tracks found")

        return CandidateCollection(
            tracks=[to_candidate(track) for track in tracks], name=text
        )

    def _track(self, track_id: str) -> SearchResult:
        logger.debug(f"  Loading Tidal track: {track_id}")

        try:
            tidal_track = self.session.track(track_id.strip())
        except ObjectNotFound:
            logger.debug(f"    Track {track_id} not found on Tidal")
            return NO_MATCH

        return to_candidate(tidal_track)
