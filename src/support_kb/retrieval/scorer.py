"""Additive lexical relevance scoring between a query and a passage."""

from __future__ import annotations

from support_kb.retrieval.tokenizer import alnum_tokens, cjk_blocks

EXACT_MATCH_BONUS = 50.0
CJK_PHRASE_WEIGHT = 3.0
CJK_BIGRAM_WEIGHT = 2.0
CJK_UNIGRAM_WEIGHT = 0.5
ALNUM_TOKEN_WEIGHT = 1.0


def count_occurrences(haystack: str, needle: str) -> int:
    """Count non-overlapping occurrences of ``needle``, scanning left to right.

    ``count_occurrences("aaaa", "aa") == 2``. An empty needle counts as zero.
    """
    if not needle:
        return 0
    count = 0
    position = haystack.find(needle)
    while position != -1:
        count += 1
        position = haystack.find(needle, position + len(needle))
    return count


def score(query: str, passage: str) -> float:
    """Score how well ``passage`` answers ``query``.

    Signals, all case-insensitive and summed:
    1. The whole query appears verbatim in the passage: flat +50.
    2. For each ideograph run of the query: +3 per character when the full run
       appears, +2 per occurrence of each of its bigrams, +0.5 per occurrence
       of each of its characters.
    3. +1 per occurrence of each distinct alnum token of the query.

    A passage with none of these signals scores exactly 0.
    """
    if not isinstance(query, str) or not isinstance(passage, str):
        return 0.0
    if not query or not passage:
        return 0.0

    query_lower = query.lower()
    passage_lower = passage.lower()
    total = 0.0

    if query_lower in passage_lower:
        total += EXACT_MATCH_BONUS

    for block in cjk_blocks(query):
        if block in passage_lower:
            total += CJK_PHRASE_WEIGHT * len(block)
        for start in range(len(block) - 1):
            bigram = block[start : start + 2]
            total += CJK_BIGRAM_WEIGHT * count_occurrences(passage_lower, bigram)
        for char in block:
            total += CJK_UNIGRAM_WEIGHT * count_occurrences(passage_lower, char)

    for token in dict.fromkeys(alnum_tokens(query)):
        total += ALNUM_TOKEN_WEIGHT * count_occurrences(passage_lower, token)

    return total
