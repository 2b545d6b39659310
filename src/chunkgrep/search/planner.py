"""Split a file into line-aligned byte ranges, one per worker."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import BinaryIO

from chunkgrep.constants import BOUNDARY_SCAN_BLOCK_SIZE, NEWLINE
from chunkgrep.exceptions import FileAccessError, PlanningError
from chunkgrep.exceptions import FileNotFoundError as ChunkGrepFileNotFoundError
from chunkgrep.search.types import Chunk

logger = logging.getLogger(__name__)


def candidate_offsets(file_length: int, worker_count: int) -> list[int]:
    """Return the ``worker_count - 1`` naive split points before line alignment.

    Parameters
    ----------
    file_length : int
        Size of the file in bytes
    worker_count : int
        Number of chunks to produce

    Returns
    -------
    list[int]
        ``i * file_length // worker_count`` for ``i`` in ``1..worker_count-1``

    Raises
    ------
    PlanningError
        If ``file_length`` is negative or ``worker_count`` is below one

    """
    _validate_plan_inputs(file_length, worker_count)
    return [i * file_length // worker_count for i in range(1, worker_count)]


def plan_chunks(handle: BinaryIO, file_length: int, worker_count: int) -> list[Chunk]:
    """Compute exactly ``worker_count`` contiguous, line-aligned chunks.

    Each candidate split point is moved forward to just after the next
    newline (or to end of file), so every chunk but the first starts at the
    beginning of a line. Candidates that resolve to the same boundary yield
    empty chunks; they are kept so results can always be indexed
    ``0..worker_count-1``.

    Parameters
    ----------
    handle : BinaryIO
        Seekable binary handle on the file. Its position is not restored.
    file_length : int
        Size of the file in bytes
    worker_count : int
        Number of chunks to produce

    Returns
    -------
    list[Chunk]
        Chunks ordered by index, covering ``[0, file_length)`` exactly once

    """
    boundaries = [0]
    for candidate in candidate_offsets(file_length, worker_count):
        boundaries.append(_align_to_line_start(handle, candidate, file_length))
    boundaries.append(file_length)

    chunks = [Chunk(index=i, start=boundaries[i], end=boundaries[i + 1]) for i in range(worker_count)]
    logger.debug("Planned %d chunks over %d bytes: %s", worker_count, file_length, boundaries)
    return chunks


def plan_file(path: str | Path, worker_count: int) -> list[Chunk]:
    """Open ``path`` and plan its chunks.

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    FileAccessError
        If the file cannot be read
    PlanningError
        If ``worker_count`` is below one

    """
    file_path = Path(path)
    try:
        with open(file_path, "rb") as handle:
            file_length = os.fstat(handle.fileno()).st_size
            return plan_chunks(handle, file_length, worker_count)
    except FileNotFoundError as exc:
        raise ChunkGrepFileNotFoundError(str(file_path), original_error=exc) from exc
    except OSError as exc:
        raise FileAccessError(
            str(file_path), message=f"Cannot read file {file_path}: {exc}", original_error=exc
        ) from exc


def _align_to_line_start(handle: BinaryIO, offset: int, file_length: int) -> int:
    """Return the offset just past the first newline at or after ``offset``, or ``file_length``."""
    position = offset
    handle.seek(offset)
    while position < file_length:
        block = handle.read(min(BOUNDARY_SCAN_BLOCK_SIZE, file_length - position))
        if not block:
            break
        newline_at = block.find(NEWLINE)
        if newline_at != -1:
            return position + newline_at + 1
        position += len(block)
    return file_length


def _validate_plan_inputs(file_length: int, worker_count: int) -> None:
    if file_length < 0:
        raise PlanningError(
            f"File length must be non-negative, got {file_length}",
            parameter_name="file_length",
            parameter_value=file_length,
        )
    if worker_count < 1:
        raise PlanningError(
            f"Worker count must be at least 1, got {worker_count}",
            parameter_name="worker_count",
            parameter_value=worker_count,
        )
