"""Test utilities for the chunkgrep test suite.

This module provides helpers for creating sample files and a deliberately
naive, single-threaded reference search that the chunked pipeline is
checked against.
"""

import shutil
import tempfile
from pathlib import Path
from typing import Iterable

POEM_LINES = [
    "the cat sat on the mat",
    "concatenate the strings",
    "",
    "The Cat came back",
    "cat, cat and more cat",
    "scatter brained",
    "dog days",
]


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp())


def cleanup_test_dir(temp_dir: Path) -> None:
    """Clean up test directory and files."""
    if temp_dir.exists():
        shutil.rmtree(temp_dir)


def write_lines(path: Path, lines: Iterable[str], newline: str = "\n", trailing_newline: bool = True) -> Path:
    """Write ``lines`` to ``path`` as UTF-8 bytes joined by ``newline``."""
    text = newline.join(lines)
    if trailing_newline and text:
        text += newline
    path.write_bytes(text.encode("utf-8"))
    return path


def _is_word_char(char: str) -> bool:
    return char.isalnum() or char == "_"


def reference_spans(line: str, term: str, case_sensitive: bool = True) -> list[tuple[int, int]]:
    """Return whole-word occurrences of ``term`` in ``line`` using plain string scanning."""
    haystack = line if case_sensitive else line.lower()
    needle = term if case_sensitive else term.lower()
    spans = []
    start = 0
    while True:
        found = haystack.find(needle, start)
        if found == -1:
            return spans
        end = found + len(needle)
        before_ok = found == 0 or not _is_word_char(line[found - 1])
        after_ok = end == len(line) or not _is_word_char(line[end])
        if before_ok and after_ok:
            spans.append((found, end))
            start = end
        else:
            start = found + 1


def reference_search(lines: list[str], term: str, case_sensitive: bool = True) -> list[tuple[int, str, list]]:
    """Return ``(line_number, line, spans)`` for every line holding ``term`` as a whole word."""
    results = []
    for number, line in enumerate(lines, start=1):
        spans = reference_spans(line, term, case_sensitive)
        if spans:
            results.append((number, line, spans))
    return results


def report_as_tuples(report) -> list[tuple[int, str, list]]:
    """Flatten a ``SearchReport`` into the shape returned by :func:`reference_search`."""
    return [
        (match.line_number, match.line, [(span.start, span.end) for span in match.spans]) for match in report.matches
    ]
