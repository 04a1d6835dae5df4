"""
Word dictionary used by the spell-check worker.

A dictionary is a newline-delimited word list loaded once and never modified
afterwards. Entries keep their original case and order; empty lines are kept
as entries and it is up to the caller to ignore them.
"""
from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple, Union

from spellcheck_service.services.spellcheck_base import DictionaryNotFoundError, LoadError
from spellcheck_service.utils.logger import get_logger


logger = get_logger("services.dictionary")


class Dictionary:
    """
    Immutable, ordered collection of known-correct words.

    Args:
        words: Entries in iteration order (duplicates allowed)
        max_suggestions: Maximum suggestions to return per misspelled word
        source: Path the entries were read from, if any
    """

    def __init__(
        self,
        words: Iterable[str] = (),
        max_suggestions: int = 0,
        source: Optional[str] = None,
    ):
        if max_suggestions < 0:
            raise ValueError("max_suggestions must be >= 0")

        self._words: Tuple[str, ...] = tuple(words)
        self._members = frozenset(self._words)
        self._max_suggestions = max_suggestions
        self._source = source

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        max_suggestions: int = 0,
        source: Optional[str] = None,
    ) -> "Dictionary":
        """
        Build a dictionary from raw lines, stripping only the line terminator.

        Args:
            lines: Lines as produced by iterating a text file
            max_suggestions: Maximum suggestions per misspelled word
            source: Where the lines came from (for logging)

        Returns:
            Dictionary with one entry per line
        """
        return cls(
            (line.rstrip("\r\n") for line in lines),
            max_suggestions=max_suggestions,
            source=source,
        )

    @property
    def words(self) -> Tuple[str, ...]:
        return self._words

    @property
    def max_suggestions(self) -> int:
        return self._max_suggestions

    @property
    def source(self) -> Optional[str]:
        return self._source

    def contains(self, word: str) -> bool:
        """Exact, case-sensitive membership test."""
        return word in self._members

    def __contains__(self, word: object) -> bool:
        return word in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def __repr__(self) -> str:
        return f"Dictionary(source={self._source!r}, words={len(self._words)}, max_suggestions={self._max_suggestions})"


def load_dictionary(path: Union[str, Path], max_suggestions: int = 0) -> Dictionary:
    """
    Load a newline-delimited word list.

    Args:
        path: Path to the dictionary file
        max_suggestions: Maximum suggestions per misspelled word

    Returns:
        Loaded Dictionary

    Raises:
        DictionaryNotFoundError: The file does not exist (or no path was given)
        LoadError: The file exists but could not be read or decoded
    """
    path_str = str(path) if path else ""
    if not path_str:
        raise DictionaryNotFoundError(path_str)

    try:
        with open(path_str, "r", encoding="utf-8", newline="") as f:
            dictionary = Dictionary.from_lines(f, max_suggestions=max_suggestions, source=path_str)
    except FileNotFoundError as e:
        raise DictionaryNotFoundError(path_str) from e
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to read dictionary", path=path_str, error=str(e))
        raise LoadError(path_str, str(e)) from e

    logger.info("Dictionary loaded", path=path_str, word_count=len(dictionary))
    return dictionary
