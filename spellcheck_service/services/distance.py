"""
Edit distance between two words.
"""
import Levenshtein


def levenshtein_distance(a: str, b: str) -> int:
    """
    Levenshtein distance: the minimum number of single-character insertions,
    deletions or substitutions turning ``a`` into ``b``.

    Characters are Unicode code points, so "café" and "cafe" differ by one
    substitution regardless of how either is encoded on disk.

    Examples:
        >>> levenshtein_distance("hello", "cello")
        1
        >>> levenshtein_distance("", "abc")
        3
    """
    return Levenshtein.distance(a, b)
