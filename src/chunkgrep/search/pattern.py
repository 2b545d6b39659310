"""Compile a literal search term into whole-word matchers.

The term is always escaped: only its characters matter, never any regular
expression syntax it may contain. Word boundaries are expressed with
lookarounds rather than ``\\b`` so that terms starting or ending with
punctuation (``c++``, ``.net``) still require a non-word character or a
string edge on each side.
"""

from __future__ import annotations

import logging
import re
import unicodedata

from chunkgrep.exceptions import InvalidPatternError
from chunkgrep.search.types import SearchSpec

logger = logging.getLogger(__name__)

_BOUNDARY_BEFORE = r"(?<!\w)"
_BOUNDARY_AFTER = r"(?!\w)"


def compile_search_spec(term: str, *, case_sensitive: bool = True, fuzzy: bool = False) -> SearchSpec:
    """Build the strict and fuzzy matchers for ``term``.

    Parameters
    ----------
    term : str
        Literal word to look for
    case_sensitive : bool, default True
        When False, comparison folds case
    fuzzy : bool, default False
        Use the containment matcher as the acceptance test

    Returns
    -------
    SearchSpec
        Immutable spec shared by every scanner

    Raises
    ------
    InvalidPatternError
        If the term is empty, contains whitespace or control characters, or
        the boundary expression cannot be compiled

    """
    _validate_term(term)

    flags = 0 if case_sensitive else re.IGNORECASE
    word = f"{_BOUNDARY_BEFORE}{re.escape(term)}{_BOUNDARY_AFTER}"
    try:
        strict_pattern = re.compile(word, flags)
        # Anchored at line start and lazily skipping ahead: accepts a line that
        # contains the word anywhere, the same lines the strict search finds.
        fuzzy_pattern = re.compile(f".*?{word}", flags | re.DOTALL)
    except re.error as exc:
        raise InvalidPatternError(
            f"Cannot build a word pattern for {term!r}: {exc}", term=term, original_error=exc
        ) from exc

    logger.debug("Compiled search term %r (case_sensitive=%s, fuzzy=%s)", term, case_sensitive, fuzzy)
    return SearchSpec(
        term=term,
        case_sensitive=case_sensitive,
        fuzzy=fuzzy,
        strict_pattern=strict_pattern,
        fuzzy_pattern=fuzzy_pattern,
    )


def _validate_term(term: str) -> None:
    if not isinstance(term, str):
        raise InvalidPatternError(f"Search term must be a string, got {type(term).__name__}", term=None)
    if not term:
        raise InvalidPatternError("Search term must not be empty", term=term)
    if any(char.isspace() for char in term):
        # Only single-word terms are supported.
        raise InvalidPatternError(f"Search term must be a single word, got {term!r}", term=term)
    if any(unicodedata.category(char) == "Cc" for char in term):
        raise InvalidPatternError(f"Search term contains control characters: {term!r}", term=term)
