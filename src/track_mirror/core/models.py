"""
Data models for the track_mirror package.
"""
from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple, Union

UNKNOWN_AUTHOR = "unknown"
EXPLICIT_MARKER = "explicit=true"


def _format_duration(duration_ms: int) -> str:
    seconds = duration_ms // 1000
    return f"{seconds // 60}:{seconds % 60:02d}"


@dataclass(frozen=True)
class ReferenceTrack:
    """A track from the primary catalog that needs a playable equivalent."""

    title: str
    author: str
    duration: int  # Duration in milliseconds
    isrc: Optional[str] = None
    uri: Optional[str] = None

    def __post_init__(self) -> None:
        if self.duration < 0:
            raise ValueError(f"Track duration must be >= 0, got {self.duration}")

    @property
    def is_explicit(self) -> bool:
        """Check whether the source URI flags the track as explicit."""
        return self.uri is not None and EXPLICIT_MARKER in self.uri

    @property
    def isrc_query(self) -> Optional[str]:
        """Get the ISRC without hyphens, or None when the track has none."""
        if not self.isrc:
            return None
        return self.isrc.replace("-", "")

    @property
    def search_query(self) -> str:
        """Get the free-text search string: title, then author if known."""
        if self.author == UNKNOWN_AUTHOR:
            return self.title
        return f"{self.title} {self.author}"

    @property
    def duration_formatted(self) -> str:
        """Get duration in MM:SS format."""
        return _format_duration(self.duration)

    def __str__(self) -> str:
        return f"{self.title} by {self.author}"


@dataclass(frozen=True)
class CandidateTrack:
    """A track returned by a secondary search provider."""

    title: str
    author: str
    duration: int  # Duration in milliseconds
    identifier: Optional[str] = None
    uri: Optional[str] = None
    isrc: Optional[str] = None
    explicit: Optional[bool] = None

    def __post_init__(self) -> None:
        if self.duration < 0:
            raise ValueError(f"Track duration must be >= 0, got {self.duration}")

    @property
    def duration_formatted(self) -> str:
        """Get duration in MM:SS format."""
        return _format_duration(self.duration)

    def __str__(self) -> str:
        return f"{self.title} by {self.author}"


@dataclass(frozen=True)
class CandidateCollection:
    """An ordered set of candidates returned by a single provider query."""

    tracks: Tuple[CandidateTrack, ...] = field(default_factory=tuple)
    name: Optional[str] = None

    def __post_init__(self) -> None:
        # Accept any iterable (usually a list) but store it immutably
        object.__setattr__(self, "tracks", tuple(self.tracks))

    def __len__(self) -> int:
        return len(self.tracks)

    def __iter__(self) -> Iterator[CandidateTrack]:
        return iter(self.tracks)

    def __bool__(self) -> bool:
        return bool(self.tracks)

    def __str__(self) -> str:
        label = f"'{self.name}'" if self.name else "Search result"
        return f"{label} with {len(self.tracks)} tracks"


class NoMatch:
    """Sentinel returned when no provider produced a usable track."""

    _instance: Optional["NoMatch"] = None

    def __new__(cls) -> "NoMatch":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_MATCH"


NO_MATCH = NoMatch()

SearchResult = Union[CandidateTrack, CandidateCollection, NoMatch]


@dataclass(frozen=True)
class ScoredCandidate:
    """A candidate paired with its match score."""

    candidate: CandidateTrack
    score: float


@dataclass
class ResolutionSummary:
    """Represents the outcome of resolving a batch of reference tracks."""

    total: int = 0
    matched: int = 0

    @property
    def failed(self) -> int:
        """Tracks for which no match was found."""
        return self.total - self.matched

    @property
    def match_rate(self) -> float:
        """Get the success rate as a percentage."""
        if self.total == 0:
            return 0.0
        return (self.matched / self.total) * 100

    def record(self, result: Union[CandidateTrack, NoMatch]) -> None:
        """Count one resolution outcome."""
        self.total += 1
        if result:
            self.matched += 1

    def __str__(self) -> str:
        return (
            f"Resolution Result: {self.matched}/{self.total} tracks "
            f"({self.match_rate:.1f}%)"
        )
