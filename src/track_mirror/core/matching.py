"""
Candidate scoring and ranking.
"""
import logging
import re
from typing import Iterable, List, Optional, Set

from ..utils.string_utils import normalize_string, similarity
from .models import CandidateTrack, ReferenceTrack, ScoredCandidate

logger = logging.getLogger(__name__)

DURATION_TOLERANCE = 0.05  # 5% of the reference duration

TITLE_WORD_POINTS = 100
ARTIST_MATCH_POINTS = 100
ARTIST_SIMILARITY_POINTS = 50
EXTRA_WORD_PENALTY = 5
EXPLICIT_CLEAN_PENALTY = 200
CLEAN_VERSION_BONUS = 50

CLEAN_VERSION_MARKERS = ("clean", "radio")
ARTIST_SEPARATOR_PATTERN = re.compile(r"[,&]")


def _words(text: str) -> Set[str]:
    return {word for word in text.split() if word}


def calculate_score(
    candidate: CandidateTrack,
    normalized_title: str,
    normalized_author: str,
    is_explicit: bool,
) -> float:
    """
    Calculate how well a candidate matches the reference track.

    Scoring factors:
    - Title word matching (100 points per shared word)
    - Artist matching (100 points per reference artist found)
    - Artist similarity (up to 50 points) when no artist matched
    - Extra words penalty (-5 points per candidate word not in the reference)
    - Clean/radio versions (-200 if the reference is explicit, +50 otherwise)

    Args:
        candidate: Track to score
        normalized_title: Normalized reference title
        normalized_author: Normalized reference author
        is_explicit: Whether the reference track is explicit

    Returns:
        Score for this candidate (higher is better, may be negative)
    """
    candidate_title = normalize_string(candidate.title)
    candidate_author = normalize_string(candidate.author)

    reference_words = _words(normalized_title)
    candidate_words = _words(candidate_title)

    score = float(len(reference_words & candidate_words) * TITLE_WORD_POINTS)

    author_score = 0
    for artist in ARTIST_SEPARATOR_PATTERN.split(normalized_author):
        artist = artist.strip()
        if artist and artist in candidate_author:
            author_score += ARTIST_MATCH_POINTS

    if author_score > 0:
        score += author_score
    else:
        artist_ratio = similarity(normalized_author, candidate_author)
        score += artist_ratio * ARTIST_SIMILARITY_POINTS

    # Remixes, extended editions and the like carry extra title words
    score -= len(candidate_words - reference_words) * EXTRA_WORD_PENALTY

    if any(marker in candidate_title for marker in CLEAN_VERSION_MARKERS):
        if is_explicit:
            score -= EXPLICIT_CLEAN_PENALTY
        else:
            score += CLEAN_VERSION_BONUS

    return score


def within_duration_tolerance(
    candidate: CandidateTrack, reference: ReferenceTrack
) -> bool:
    """Check whether a candidate's duration is within 5% of the reference."""
    allowed_diff = reference.duration * DURATION_TOLERANCE
    return abs(candidate.duration - reference.duration) <= allowed_diff


def score_candidates(
    candidates: Iterable[CandidateTrack], reference: ReferenceTrack
) -> List[ScoredCandidate]:
    """
    Score every candidate that passes the duration filter.

    Input order is preserved so that ties can be broken by position.
    """
    normalized_title = normalize_string(reference.title)
    normalized_author = normalize_string(reference.author)
    is_explicit = reference.is_explicit

    scored = []
    for candidate in candidates:
        if not within_duration_tolerance(candidate, reference):
            continue
        score = calculate_score(
            candidate, normalized_title, normalized_author, is_explicit
        )
        scored.append(ScoredCandidate(candidate, score))
    return scored


def find_best_match(
    candidates: Iterable[CandidateTrack],
    reference: ReferenceTrack,
    is_retry: bool = False,
) -> Optional[CandidateTrack]:
    """
    Find the best matching track among the candidates.

    Args:
        candidates: Candidate tracks in provider order
        reference: Track to match against
        is_retry: Whether this is the fallback attempt (logging only)

    Returns:
        Best matching candidate, or None if no candidate is eligible
    """
    candidates = list(candidates)
    if not candidates:
        return None

    scored = score_candidates(candidates, reference)
    attempt = "retry" if is_retry else "search"

    if not scored:
        logger.debug(
            f"No candidates within duration tolerance for '{reference.title}' "
            f"({len(candidates)} evaluated, {attempt})"
        )
        return None

    for entry in scored:
        logger.debug(
            f"  Candidate: '{entry.candidate.title}' by '{entry.candidate.author}' "
            f"(score={entry.score:.1f})"
        )

    # max() keeps the first of equally scored candidates
    best = max(scored, key=lambda entry: entry.score)

    logger.debug(
        f"Selected best match for '{reference.title}': {best.candidate.title} "
        f"by {best.candidate.author} (score: {best.score:.1f}, "
        f"explicit: {reference.is_explicit}, {attempt})"
    )
    return best.candidate
