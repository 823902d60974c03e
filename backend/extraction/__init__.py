from .facts import ExtractedFacts, extract_facts, parse_facts
from .keywords import KeywordExtractor
from .query_builder import build_queries

__all__ = [
    "ExtractedFacts",
    "extract_facts",
    "parse_facts",
    "KeywordExtractor",
    "build_queries",
]
