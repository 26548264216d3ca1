# /assist/workflows/matcher.py

"""
Fuzzy resolution of free text to one of a fixed set of option strings.

`fuzzy_match_option` tries four strategies in strict priority order and returns
the first hit. Within a strategy, options are scanned in catalog order, so the
first matching option always wins.

All functions are pure and deterministic.
"""

import re
from typing import List, Optional, Sequence
from rapidfuzz import process, fuzz

# Separators for token-level matching: whitespace, hyphens and parentheses
TOKEN_SPLIT_RE = re.compile(r"[\s\-()]+")

# Tokens this short carry no meaning on their own ("of", "or", ...)
MIN_TOKEN_LENGTH = 3

# Minimum rapidfuzz score for a "did you mean" suggestion
SUGGESTION_CUTOFF = 60


def _significant_tokens(text: str) -> List[str]:
    return [token for token in TOKEN_SPLIT_RE.split(text) if len(token) >= MIN_TOKEN_LENGTH]


def fuzzy_match_option(text: str, options: Sequence[str]) -> Optional[str]:
    """
    Resolve `text` to one of `options`, case-insensitively.

    Strategies, in order:
    1. Exact match
    2. The option contains the input
    3. The input contains the option
    4. A significant token of the input is a substring of a significant token
       of the option, or vice versa

    Returns:
        The matched option exactly as written in `options`, or None
    """
    lowered = (text or "").lower().strip()
    if not lowered:
        return None

    for option in options:
        if option.lower() == lowered:
            return option

    for option in options:
        if lowered in option.lower():
            return option

    for option in options:
        if option.lower() in lowered:
            return option

    input_tokens = _significant_tokens(lowered)
    for option in options:
        for keyword in _significant_tokens(option.lower()):
            for token in input_tokens:
                if token in keyword or keyword in token:
                    return option

    return None


def closest_option(text: str, options: Sequence[str]) -> Optional[str]:
    """
    Suggest the option closest to `text` for an error message.

    This never decides an answer; it only helps phrase a re-ask after
    `fuzzy_match_option` has failed (e.g. a typo like "divorsed").
    """
    lowered = (text or "").lower().strip()
    if not lowered or not options:
        return None

    result = process.extractOne(
        lowered,
        list(options),
        scorer=fuzz.WRatio,
        processor=str.lower,
        score_cutoff=SUGGESTION_CUTOFF,
    )
    if result is None:
        return None
    match, _score, _index = result
    return match
