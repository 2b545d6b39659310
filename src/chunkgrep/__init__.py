"""chunkgrep - parallel, line-numbered whole-word search over a single file.

chunkgrep splits a file into roughly equal, line-aligned byte ranges, scans
every range on its own worker, and stitches the per-range results back into
one globally numbered, line-ordered stream. Output does not depend on the
order in which workers finish: a run with eight workers renders exactly what
a run with one worker renders.

Examples
--------
Search a file and print annotated matches:

    >>> from chunkgrep import search_file, render_matches
    >>> report = search_file("server.log", "timeout")
    >>> for block in render_matches(report.matches):
    ...     print(block)

Tune the run with options:

    >>> from chunkgrep import SearchOptions
    >>> options = SearchOptions(workers=4, fuzzy=True, case_sensitive=False)
    >>> report = search_file("server.log", "Timeout", options=options)

See Also
--------
chunkgrep.search : planner, scanner, aggregator and renderer components

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "chunkgrep requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from chunkgrep.exceptions import (
    AggregationError,
    ChunkGrepError,
    FileAccessError,
    FileError,
    InvalidPatternError,
    PlanningError,
    ValidationError,
)
from chunkgrep.options import SearchOptions
from chunkgrep.progress import ProgressCallback, ProgressEvent
from chunkgrep.search import (
    Chunk,
    ChunkResult,
    GlobalMatch,
    LocalMatch,
    SearchReport,
    SearchService,
    SearchSpec,
    TokenSpan,
    aggregate_results,
    compile_search_spec,
    plan_chunks,
    plan_file,
    render_match,
    render_matches,
    scan_chunk,
    search_file,
)

__all__ = [
    "__version__",
    # Main API
    "search_file",
    "SearchService",
    "SearchOptions",
    # Components
    "compile_search_spec",
    "plan_chunks",
    "plan_file",
    "scan_chunk",
    "aggregate_results",
    "render_match",
    "render_matches",
    # Records
    "Chunk",
    "ChunkResult",
    "GlobalMatch",
    "LocalMatch",
    "SearchReport",
    "SearchSpec",
    "TokenSpan",
    # Progress
    "ProgressCallback",
    "ProgressEvent",
    # Exceptions
    "ChunkGrepError",
    "ValidationError",
    "InvalidPatternError",
    "PlanningError",
    "FileError",
    "FileAccessError",
    "AggregationError",
]
