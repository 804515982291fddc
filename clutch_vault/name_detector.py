"""Flag imported team names that probably contain a person's first name."""

import re
from typing import AbstractSet, Iterable, Mapping, Optional

from .constants import COMMON_FIRST_NAMES
from .models import NameCandidate

_TOKEN_SEPARATORS = re.compile(r'[\s_.\-@]+')


def split_name_tokens(name: str) -> list[str]:
    """Split a raw name on whitespace, underscores, dots, dashes and '@'."""
    return [token for token in _TOKEN_SEPARATORS.split(name.strip()) if token]


def match_first_name(name: str, dictionary: AbstractSet[str] = COMMON_FIRST_NAMES) -> Optional[str]:
    """
    Return the first token of name found in the dictionary.

    Matching is case-insensitive; the token is returned as written.

    Example:
        match_first_name('mike_the_commish')  # 'mike'
        match_first_name('Gridiron Gang')     # None
    """
    for token in split_name_tokens(name):
        if token.lower() in dictionary:
            return token
    return None


def detect_names(
    raw_names: Iterable[str],
    name_to_years: Optional[Mapping[str, list[int]]] = None,
    dictionary: AbstractSet[str] = COMMON_FIRST_NAMES,
) -> list[NameCandidate]:
    """
    Suggest which raw names look like real people.

    This is a heuristic suggestion list: names without a dictionary hit are
    simply not suggested, and callers dismiss or accept candidates.

    Args:
        raw_names: Raw team/owner names from imported history
        name_to_years: Optional raw name -> seasons played, copied onto candidates
        dictionary: Lowercase first names to match against

    Returns:
        Candidates sorted alphabetically by name
    """
    name_to_years = name_to_years or {}
    candidates = []
    for name in raw_names:
        matched = match_first_name(name, dictionary)
        if matched:
            candidates.append(
                NameCandidate(name=name, matched_word=matched, seasons=list(name_to_years.get(name, [])))
            )

    candidates.sort(key=lambda c: (c.name.casefold(), c.name))
    return candidates
