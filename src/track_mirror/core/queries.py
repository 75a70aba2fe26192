"""
Typed provider queries built from configured template strings.

A provider template is a string such as ``tdsearch:%QUERY%``: a provider
prefix followed by a query pattern that may contain the ``%ISRC%`` and
``%QUERY%`` placeholders. Templates are parsed once into one of three query
types, each of which knows how to build the final query for a reference track.
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Union

from .models import ReferenceTrack

logger = logging.getLogger(__name__)

ISRC_PLACEHOLDER = "%ISRC%"
QUERY_PLACEHOLDER = "%QUERY%"

TIDAL_SEARCH_PREFIX = "tdsearch:"
TIDAL_TRACK_PREFIX = "tdtrack:"

DEFAULT_PROVIDERS = (
    f'{TIDAL_SEARCH_PREFIX}"{ISRC_PLACEHOLDER}"',
    f"{TIDAL_SEARCH_PREFIX}{QUERY_PLACEHOLDER}",
)

# Catalogs that can not serve as a secondary search provider
UNSUPPORTED_SEARCH_PREFIXES: Dict[str, str] = {
    "spsearch:": "Spotify",
    "amsearch:": "Apple Music",
}


def _fill_query(template: str, reference: ReferenceTrack) -> str:
    return template.replace(QUERY_PLACEHOLDER, reference.search_query)


@dataclass(frozen=True)
class TextQuery:
    """Free-text search; only the ``%QUERY%`` placeholder is substituted."""

    template: str

    def build(self, reference: ReferenceTrack) -> Optional[str]:
        return _fill_query(self.template, reference)


@dataclass(frozen=True)
class IsrcQuery:
    """ISRC-based search, usable only for references that carry an ISRC."""

    template: str

    def build(self, reference: ReferenceTrack) -> Optional[str]:
        isrc = reference.isrc_query
        if isrc is None:
            logger.debug(
                f'Ignoring identifier "{self.template}" because this track '
                f"does not have an ISRC!"
            )
            return None
        return _fill_query(self.template.replace(ISRC_PLACEHOLDER, isrc), reference)


@dataclass(frozen=True)
class UnsupportedQuery:
    """A template addressed to a catalog that can not be searched."""

    template: str
    catalog: str

    def build(self, reference: ReferenceTrack) -> Optional[str]:
        logger.debug(f"Can not use {self.catalog} search as search provider!")
        return None


ProviderQuery = Union[TextQuery, IsrcQuery, UnsupportedQuery]


def parse_provider(
    template: str,
    unsupported_prefixes: Mapping[str, str] = UNSUPPORTED_SEARCH_PREFIXES,
) -> ProviderQuery:
    """
    Parse a provider template string into a typed query.

    Args:
        template: Provider prefix plus query pattern
        unsupported_prefixes: Prefixes mapped to the catalog name they search

    Returns:
        The query type matching the template
    """
    for prefix, catalog in unsupported_prefixes.items():
        if template.startswith(prefix):
            return UnsupportedQuery(template, catalog)

    if ISRC_PLACEHOLDER in template:
        return IsrcQuery(template)

    return TextQuery(template)


def parse_providers(
    templates: Optional[Sequence[str]],
    unsupported_prefixes: Mapping[str, str] = UNSUPPORTED_SEARCH_PREFIXES,
) -> List[ProviderQuery]:
    """Parse provider templates, falling back to the defaults when none given."""
    if not templates:
        templates = DEFAULT_PROVIDERS
    return [parse_provider(template, unsupported_prefixes) for template in templates]
