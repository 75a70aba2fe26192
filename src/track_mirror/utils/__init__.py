"""
Utilities package.
"""
from .music_utils import candidate_from_dict, extract_track_info, reference_from_dict
from .string_utils import levenshtein_distance, normalize_string, similarity

__all__ = [
    "normalize_string",
    "similarity",
    "levenshtein_distance",
    "extract_track_info",
    "reference_from_dict",
    "candidate_from_dict",
]
