#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/chunkgrep/progress.py
"""Progress callback system for chunked searches.

This module provides a standardized way to report search progress to
embedders, enabling UI updates while chunk scans complete on the worker
pool.

Examples
--------
Basic progress tracking:

    >>> from chunkgrep import search_file
    >>> from chunkgrep.progress import ProgressEvent
    >>>
    >>> def my_progress_handler(event: ProgressEvent):
    ...     print(f"{event.event_type}: {event.message} ({event.current}/{event.total})")
    >>>
    >>> report = search_file("big.log", "timeout", progress_callback=my_progress_handler)

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Literal

EventType = Literal["started", "item_done", "finished", "error"]


@dataclass
class ProgressEvent:
    """Progress event emitted during a chunked search.

    Parameters
    ----------
    event_type : EventType
        Type of progress event:

        - "started": Scanning has begun. ``total`` is the number of chunks.

        - "item_done": One chunk finished scanning.
            ``metadata["item_type"]`` is ``"chunk"`` and
            ``metadata["chunk_index"]`` identifies it. Chunks finish in
            arbitrary order; ``current`` counts completions, not indices.

        - "finished": All chunks were scanned and aggregated.
            ``metadata["matches"]`` holds the match count.

        - "error": A chunk failed. Details are in ``metadata["error"]``.
            The run aborts after this event; no results are produced.

    message : str
        Human-readable description of the event
    current : int, default 0
        Number of chunks completed so far
    total : int, default 0
        Total number of chunks. Set to 0 if unknown.
    metadata : dict, default empty
        Additional event-specific information

    Examples
    --------
    Chunk completed:
        >>> event = ProgressEvent(
        ...     "item_done",
        ...     "Chunk 3 scanned",
        ...     current=1,
        ...     total=8,
        ...     metadata={"item_type": "chunk", "chunk_index": 3}
        ... )

    """

    event_type: EventType
    message: str
    current: int = 0
    total: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Return human-readable string representation.

        Returns
        -------
        str
            Formatted event description

        """
        progress = f"({self.current}/{self.total})" if self.total > 0 else ""
        return f"[{self.event_type.upper()}] {self.message} {progress}".strip()


ProgressCallback = Callable[[ProgressEvent], None]
"""Type alias for progress callback functions.

A progress callback is any callable that accepts a ProgressEvent and returns None.
Callbacks run in the coordinating process, never inside pool workers.
"""
