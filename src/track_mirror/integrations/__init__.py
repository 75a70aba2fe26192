"""
Integration packages for external search providers.
"""
from .tidal import TidalAuth, TidalQueryExecutor

__all__ = ["TidalAuth", "TidalQueryExecutor"]
