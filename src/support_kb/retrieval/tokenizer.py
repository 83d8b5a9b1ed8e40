"""Mixed-script tokenization for lexical matching.

Two token classes are produced:

- alnum tokens: lower-cased maximal runs of ASCII letters/digits, length >= 2.
- CJK n-grams: every 1..4 character substring of each maximal run of CJK
  Unified Ideographs (U+4E00-U+9FA5), since Chinese text has no whitespace
  word boundaries to split on.
"""

from __future__ import annotations

import re

_ALNUM_PATTERN = re.compile(r"[a-z0-9]{2,}")
_CJK_PATTERN = re.compile(r"[\u4e00-\u9fa5]+")

MAX_NGRAM = 4


def alnum_tokens(text: object) -> list[str]:
    """Return lower-cased alnum runs in encounter order (duplicates kept)."""
    if not isinstance(text, str) or not text:
        return []
    return _ALNUM_PATTERN.findall(text.lower())


def cjk_blocks(text: object) -> list[str]:
    """Return maximal ideograph runs in encounter order."""
    if not isinstance(text, str) or not text:
        return []
    return _CJK_PATTERN.findall(text)


def cjk_ngrams(block: str, max_n: int = MAX_NGRAM) -> set[str]:
    grams: set[str] = set()
    for size in range(1, min(max_n, len(block)) + 1):
        for start in range(len(block) - size + 1):
            grams.add(block[start : start + size])
    return grams


def tokenize(text: object) -> set[str]:
    """Extract the deduplicated search-token set of ``text``.

    Non-string or empty input yields an empty set.
    """
    tokens: set[str] = set(alnum_tokens(text))
    for block in cjk_blocks(text):
        tokens |= cjk_ngrams(block)
    return tokens
