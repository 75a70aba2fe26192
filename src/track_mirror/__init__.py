"""
Track Mirror - Find playable equivalents of catalog tracks on other providers.

This package provides functionality to:
- Normalize and compare track titles and artist names
- Score and rank candidate tracks returned by a search provider
- Resolve a reference track through an ordered list of provider queries
- Search Tidal as a secondary provider

Example:
    Basic usage from command line:

    $ track-mirror resolve --title "Blinding Lights" --author "The Weeknd" -d 200040

    Programmatic usage:

    >>> from track_mirror import MirrorResolver, ReferenceTrack
    >>> resolver = MirrorResolver(executor, providers=['tdsearch:%QUERY%'])
    >>> reference = ReferenceTrack("Blinding Lights", "The Weeknd", duration=200040)
    >>> match = resolver.resolve(reference)
"""

__version__ = "0.1.0"
__license__ = "MIT"

# CLI interface
from .cli import cli
from .core.config import Config
from .core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    SearchError,
    TrackMirrorError,
)
from .core.matching import calculate_score, find_best_match
from .core.models import (
    NO_MATCH,
    CandidateCollection,
    CandidateTrack,
    NoMatch,
    ReferenceTrack,
    ResolutionSummary,
    ScoredCandidate,
)
from .core.queries import IsrcQuery, TextQuery, UnsupportedQuery, parse_provider
from .core.resolver import MirrorResolver, QueryExecutor

# Integration services
from .integrations import TidalAuth, TidalQueryExecutor
from .utils import normalize_string, similarity

__all__ = [
    "__version__",
    "Config",
    "ReferenceTrack",
    "CandidateTrack",
    "CandidateCollection",
    "NoMatch",
    "NO_MATCH",
    "ScoredCandidate",
    "ResolutionSummary",
    "TrackMirrorError",
    "ConfigurationError",
    "AuthenticationError",
    "SearchError",
    "IsrcQuery",
    "TextQuery",
    "UnsupportedQuery",
    "parse_provider",
    "MirrorResolver",
    "QueryExecutor",
    "calculate_score",
    "find_best_match",
    "normalize_string",
    "similarity",
    "TidalAuth",
    "TidalQueryExecutor",
    "cli",
]
