"""
Top-K correction selection by edit distance.
"""
import heapq
from typing import Callable, Dict, Iterable, List, Tuple

from spellcheck_service.services.dictionary import Dictionary
from spellcheck_service.services.distance import levenshtein_distance


def needs_correction(word: str, dictionary: Dictionary) -> bool:
    """A word needs correcting unless it is blank or a dictionary entry."""
    if not word or word.isspace():
        return False
    return word not in dictionary


def suggest(
    word: str,
    dictionary: Dictionary,
    k: int,
    distance: Callable[[str, str], int] = levenshtein_distance,
) -> List[str]:
    """
    Return up to ``k`` dictionary words closest to ``word``.

    Candidates are ordered by ascending distance to the entry as loaded; ties
    go to the entry seen first in dictionary order. Suggestions are trimmed of
    surrounding whitespace, each distinct trimmed word is suggested at most
    once (ranked by its first occurrence) and blank entries are never
    suggested.

    Args:
        word: Possibly misspelled word
        dictionary: Known-correct words
        k: Maximum number of suggestions
        distance: Edit distance function

    Returns:
        Suggestions, best first. Empty if the word is blank, already in the
        dictionary, ``k`` is not positive or the dictionary is empty.
    """
    if k <= 0 or not needs_correction(word, dictionary):
        return []

    # Trimmed candidate -> (index, raw entry) of its first occurrence
    first_seen: Dict[str, Tuple[int, str]] = {}
    for index, entry in enumerate(dictionary):
        candidate = entry.strip()
        if candidate and candidate not in first_seen:
            first_seen[candidate] = (index, entry)

    # Distance is measured against the entry as loaded; only the result is trimmed
    ranked: Iterable[Tuple[int, int, str]] = (
        (distance(word, entry), index, candidate)
        for candidate, (index, entry) in first_seen.items()
    )
    return [candidate for _, _, candidate in heapq.nsmallest(k, ranked)]


def suggest_all(
    words: Iterable[str],
    dictionary: Dictionary,
    k: int,
    distance: Callable[[str, str], int] = levenshtein_distance,
) -> List[str]:
    """
    Suggestions for a batch of words, concatenated in input order.

    Args:
        words: Tokens from one line of user text
        dictionary: Known-correct words
        k: Maximum suggestions per word
        distance: Edit distance function

    Returns:
        Flat list of suggestions
    """
    suggestions: List[str] = []
    for word in words:
        suggestions.extend(suggest(word, dictionary, k, distance=distance))
    return suggestions
