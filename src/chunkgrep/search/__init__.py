"""Search subsystem exposed to the public API."""

from __future__ import annotations

from pathlib import Path

from chunkgrep.options.search import SearchOptions
from chunkgrep.progress import ProgressCallback
from chunkgrep.search.aggregator import aggregate_results, base_line_offsets
from chunkgrep.search.pattern import compile_search_spec
from chunkgrep.search.planner import candidate_offsets, plan_chunks, plan_file
from chunkgrep.search.render import match_to_dict, render_match, render_match_rich, render_matches
from chunkgrep.search.scanner import scan_chunk
from chunkgrep.search.service import SearchService
from chunkgrep.search.types import (
    Chunk,
    ChunkResult,
    GlobalMatch,
    LocalMatch,
    SearchReport,
    SearchSpec,
    TokenSpan,
)


def search_file(
    path: str | Path,
    term: str,
    *,
    options: SearchOptions | None = None,
    progress_callback: ProgressCallback | None = None,
) -> SearchReport:
    """Search one file for ``term`` in a single convenience call."""
    return SearchService(options=options).search(path, term, progress_callback=progress_callback)


__all__ = [
    "Chunk",
    "ChunkResult",
    "GlobalMatch",
    "LocalMatch",
    "SearchReport",
    "SearchService",
    "SearchSpec",
    "TokenSpan",
    "aggregate_results",
    "base_line_offsets",
    "candidate_offsets",
    "compile_search_spec",
    "match_to_dict",
    "plan_chunks",
    "plan_file",
    "render_match",
    "render_match_rich",
    "render_matches",
    "scan_chunk",
    "search_file",
]
