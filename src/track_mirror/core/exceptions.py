"""
Custom exceptions for the track_mirror package.
"""


class TrackMirrorError(Exception):
    """Base exception for all track_mirror errors."""
    pass


class ConfigurationError(TrackMirrorError):
    """Raised when configuration is invalid."""
    pass


class AuthenticationError(TrackMirrorError):
    """Raised when authentication with a search provider fails."""
    pass


class SearchError(TrackMirrorError):
    """Raised when a provider query cannot be executed."""
    pass
