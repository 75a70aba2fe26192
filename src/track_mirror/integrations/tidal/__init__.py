"""
Tidal integration package.
"""
from .auth import TidalAuth
from .executor import TidalQueryExecutor

__all__ = ["TidalAuth", "TidalQueryExecutor"]
