"""
Resolution of reference tracks against secondary search providers.
"""
import logging
from typing import Iterable, List, Mapping, Optional, Protocol, Sequence, Union

from .matching import find_best_match
from .models import (
    NO_MATCH,
    CandidateCollection,
    CandidateTrack,
    NoMatch,
    ReferenceTrack,
    ResolutionSummary,
    SearchResult,
)
from .queries import (
    TIDAL_SEARCH_PREFIX,
    UNSUPPORTED_SEARCH_PREFIXES,
    ProviderQuery,
    parse_providers,
)

logger = logging.getLogger(__name__)

FALLBACK_SUFFIX = " official video"


class QueryExecutor(Protocol):
    """Runs a provider query and returns what the provider found."""

    def execute(self, query: str) -> SearchResult:
        ...


class MirrorResolver:
    """Finds the best secondary-provider match for a reference track."""

    def __init__(
        self,
        executor: QueryExecutor,
        providers: Optional[Sequence[str]] = None,
        fallback_prefix: str = TIDAL_SEARCH_PREFIX,
        unsupported_prefixes: Mapping[str, str] = UNSUPPORTED_SEARCH_PREFIXES,
    ):
        self.executor = executor
        self.fallback_prefix = fallback_prefix
        self.queries: List[ProviderQuery] = parse_providers(
            providers, unsupported_prefixes
        )

    def resolve(self, reference: ReferenceTrack) -> Union[CandidateTrack, NoMatch]:
        """
        Resolve a reference track to a single matching track.

        Provider queries are tried in configured order; the first one that
        yields a match wins. When none does, one fallback search is made.

        Args:
            reference: Track to find a playable equivalent for

        Returns:
            The matching track, or NO_MATCH if nothing suitable was found
        """
        for provider_query in self.queries:
            query = provider_query.build(reference)
            if query is None:
                continue

            item = self._execute(query)
            if not item:
                continue

            if isinstance(item, CandidateCollection):
                best_match = find_best_match(item.tracks, reference, is_retry=False)
                if best_match is not None:
                    return best_match
            else:
                return item

        return self._resolve_fallback(reference)

    def resolve_all(
        self, references: Iterable[ReferenceTrack]
    ) -> ResolutionSummary:
        """Resolve several reference tracks and count the matches."""
        summary = ResolutionSummary()
        for reference in references:
            result = self.resolve(reference)
            summary.record(result)
            if result:
                logger.info(f"✓ FOUND: '{reference}' -> '{result}'")
            else:
                logger.info(f"✗ NOT FOUND: '{reference}'")
        return summary

    def _execute(self, query: str) -> SearchResult:
        """Run a query, turning executor failures into NO_MATCH."""
        try:
            return self.executor.execute(query)
        except Exception as e:
            logger.error(f'Failed to load track from provider "{query}": {e}')
            return NO_MATCH

    def _resolve_fallback(
        self, reference: ReferenceTrack
    ) -> Union[CandidateTrack, NoMatch]:
        """Retry once with an 'official video' search."""
        logger.debug(
            f"No match found, retrying with 'official video' query for track: "
            f"{reference.title}"
        )
        query = f"{self.fallback_prefix}{reference.search_query}{FALLBACK_SUFFIX}"

        item = self._execute(query)
        if isinstance(item, CandidateCollection):
            candidates: Sequence[CandidateTrack] = item.tracks
        elif isinstance(item, CandidateTrack):
            # Unlike a regular query, a single fallback hit must pass ranking too
            candidates = [item]
        else:
            candidates = []

        best_match = find_best_match(candidates, reference, is_retry=True)
        if best_match is not None:
            return best_match

        logger.debug(f"No match found for track: {reference}")
        return NO_MATCH
