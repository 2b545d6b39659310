"""Merge per-chunk results into one file-wide, line-ordered match list.

Results may arrive in any order. Everything here is keyed on
``ChunkResult.chunk_index``; arrival order never reaches the prefix sums.
"""

from __future__ import annotations

import logging
from itertools import accumulate
from typing import Iterable, Sequence

from chunkgrep.exceptions import AggregationError
from chunkgrep.search.types import ChunkResult, GlobalMatch

logger = logging.getLogger(__name__)


def order_by_chunk_index(results: Iterable[ChunkResult]) -> list[ChunkResult]:
    """Return ``results`` sorted by chunk index, checking the set is exactly ``0..N-1``.

    Raises
    ------
    AggregationError
        If a chunk index is missing, duplicated or out of range

    """
    ordered = sorted(results, key=lambda result: result.chunk_index)
    indices = [result.chunk_index for result in ordered]
    if indices != list(range(len(ordered))):
        raise AggregationError(
            f"Expected results for chunks 0..{len(ordered) - 1} exactly once, got indices {indices}"
        )
    return ordered


def base_line_offsets(results: Iterable[ChunkResult]) -> list[int]:
    """Return, per chunk index, the number of lines in all lower-indexed chunks."""
    ordered = order_by_chunk_index(results)
    return [0, *accumulate(result.lines_scanned for result in ordered)][: len(ordered)]


def aggregate_results(results: Sequence[ChunkResult]) -> list[GlobalMatch]:
    """Remap every local match onto global line numbers and sort by line.

    Parameters
    ----------
    results : Sequence[ChunkResult]
        One result per chunk, in any order

    Returns
    -------
    list[GlobalMatch]
        Matches sorted by global line number; this order is final

    Raises
    ------
    AggregationError
        If the results do not cover every chunk exactly once

    """
    ordered = order_by_chunk_index(results)
    bases = base_line_offsets(ordered)

    matches = [
        local_match.to_global(base_line)
        for result, base_line in zip(ordered, bases)
        for local_match in result.matches
    ]
    matches.sort(key=lambda match: match.line_number)

    logger.debug("Aggregated %d chunk results into %d matches", len(ordered), len(matches))
    return matches
