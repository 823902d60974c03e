from collections import Counter
from math import sqrt
from typing import Dict, Optional


def term_frequencies(text: str) -> Dict[str, int]:
    """Whitespace tokens of at least two characters, counted."""
    return Counter(t for t in text.split() if len(t) >= 2)


def cosine_similarity(a: Optional[str], b: Optional[str]) -> float:
    """Compute cosine similarity between the raw term-frequency vectors of two texts."""
    if not a or not b or not a.strip() or not b.strip():
        return 0.0

    va = term_frequencies(a)
    vb = term_frequencies(b)

    dot_product = 0.0
    mag_a_sq = 0.0
    mag_b_sq = 0.0

    for term in va.keys() | vb.keys():
        xa = va.get(term, 0)
        xb = vb.get(term, 0)
        dot_product += xa * xb
        mag_a_sq += xa ** 2
        mag_b_sq += xb ** 2

    if mag_a_sq == 0 or mag_b_sq == 0:
        return 0.0

    return dot_product / (sqrt(mag_a_sq) * sqrt(mag_b_sq))
