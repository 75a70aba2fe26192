"""
Music data utilities.
"""
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core.models import (
    EXPLICIT_MARKER,
    UNKNOWN_AUTHOR,
    CandidateTrack,
    ReferenceTrack,
)


def extract_track_info(track_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Extract common track fields from a JSON track record.

    Accepts ``artist`` as an alias of ``author`` and ``duration_ms`` as an
    alias of ``duration`` (milliseconds).

    Args:
        track_data: Track dictionary

    Returns:
        Dictionary with title, author and duration keys
    """
    if not isinstance(track_data, dict):
        raise ValueError(f"Track entry must be an object, got {type(track_data)}")

    title = track_data.get("title")
    if not title:
        raise ValueError(f"Track entry is missing a title: {track_data}")

    author = track_data.get("author") or track_data.get("artist") or UNKNOWN_AUTHOR
    duration = track_data.get("duration_ms", track_data.get("duration"))
    if duration is None:
        raise ValueError(f"Track entry is missing a duration: {track_data}")

    return {"title": str(title), "author": str(author), "duration": int(duration)}


def reference_from_dict(track_data: Dict[str, Any]) -> ReferenceTrack:
    """Build a reference track from a JSON record."""
    info = extract_track_info(track_data)
    uri: Optional[str] = track_data.get("uri")
    if track_data.get("explicit"):
        if not uri:
            uri = f"?{EXPLICIT_MARKER}"
        elif EXPLICIT_MARKER not in uri:
            uri = f"{uri}{'&' if '?' in uri else '?'}{EXPLICIT_MARKER}"
    return ReferenceTrack(isrc=track_data.get("isrc"), uri=uri, **info)


def candidate_from_dict(track_data: Dict[str, Any]) -> CandidateTrack:
    """Build a candidate track from a JSON record."""
    info = extract_track_info(track_data)
    identifier = track_data.get("id", track_data.get("identifier"))
    return CandidateTrack(
        identifier=str(identifier) if identifier is not None else None,
        uri=track_data.get("uri"),
        isrc=track_data.get("isrc"),
        explicit=track_data.get("explicit"),
        **info,
    )


def load_track_records(path: Path) -> List[Dict[str, Any]]:
    """Load a JSON array of track records from a file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON array of tracks")

    return data
