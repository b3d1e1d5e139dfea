"""
Text normalization for keyword matching.

"Café", "cafe" and "CAFÉ" all normalize to "cafe", so keywords match
regardless of case and accents.
"""

import unicodedata
from functools import lru_cache


@lru_cache(maxsize=4096)
def normalize(text: str) -> str:
    """
    Lower-case text and strip diacritical marks.

    The text is decomposed (NFD) so accented letters become a base letter
    followed by combining marks, and the combining marks are dropped.
    """
    decomposed = unicodedata.normalize("NFD", text.lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))
