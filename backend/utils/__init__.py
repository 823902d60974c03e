from .parsing import extract_json_block, parse_score, parse_timestamp, strip_code_fence
from .similarity import cosine_similarity
from .text import normalize, within_edit_distance
from .ttl_cache import TTLCache

__all__ = [
    "extract_json_block",
    "parse_score",
    "parse_timestamp",
    "strip_code_fence",
    "cosine_similarity",
    "normalize",
    "within_edit_distance",
    "TTLCache",
]
