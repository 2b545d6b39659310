"""Shared data structures for the search subsystem."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class TokenSpan:
    """Half-open ``[start, end)`` character range of one whole-word hit in a line."""

    start: int
    end: int

    def contains(self, index: int) -> bool:
        """Return True when ``index`` falls inside the span."""
        return self.start <= index < self.end

    def as_list(self) -> list[int]:
        return [self.start, self.end]


@dataclass(frozen=True)
class SearchSpec:
    """Compiled, immutable description of what to look for.

    Built once per run by :func:`chunkgrep.search.pattern.compile_search_spec`
    and shared read-only by every scanner. Both patterns are plain compiled
    regular expressions, so a spec pickles cleanly across process pools.
    """

    term: str
    case_sensitive: bool
    fuzzy: bool
    strict_pattern: re.Pattern[str] = field(repr=False, compare=False)
    fuzzy_pattern: re.Pattern[str] = field(repr=False, compare=False)

    def accepts(self, line: str) -> bool:
        """Return True when ``line`` should be reported as a match."""
        if self.fuzzy:
            return self.fuzzy_pattern.match(line) is not None
        return self.strict_pattern.search(line) is not None

    def find_spans(self, line: str) -> tuple[TokenSpan, ...]:
        """Return every non-overlapping whole-word occurrence, left to right."""
        return tuple(TokenSpan(m.start(), m.end()) for m in self.strict_pattern.finditer(line))


@dataclass(frozen=True)
class Chunk:
    """Half-open byte range ``[start, end)`` of the input file assigned to one worker."""

    index: int
    start: int
    end: int

    @property
    def length(self) -> int:
        """Return the number of bytes covered by the chunk."""
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        """Return True for chunks that cover no bytes."""
        return self.end <= self.start


@dataclass(frozen=True)
class GlobalMatch:
    """A matching line numbered relative to the whole file."""

    line_number: int
    line: str
    spans: tuple[TokenSpan, ...] = ()


@dataclass(frozen=True)
class LocalMatch:
    """A matching line numbered relative to the start of its chunk."""

    line_number: int
    line: str
    spans: tuple[TokenSpan, ...] = ()

    def to_global(self, base_line: int) -> GlobalMatch:
        """Remap onto file-wide numbering given the lines preceding this chunk."""
        return GlobalMatch(line_number=base_line + self.line_number, line=self.line, spans=self.spans)


@dataclass(frozen=True)
class ChunkResult:
    """Everything one worker learned about its chunk."""

    chunk_index: int
    lines_scanned: int
    matches: tuple[LocalMatch, ...] = ()


@dataclass(frozen=True)
class SearchReport:
    """Outcome of a complete search run; ``matches`` is in final output order."""

    path: Path
    spec: SearchSpec
    chunks: tuple[Chunk, ...]
    matches: tuple[GlobalMatch, ...]
    lines_scanned: int

    @property
    def match_count(self) -> int:
        """Return the number of matching lines."""
        return len(self.matches)

    @property
    def token_count(self) -> int:
        """Return the number of highlighted whole-word occurrences."""
        return sum(len(match.spans) for match in self.matches)
