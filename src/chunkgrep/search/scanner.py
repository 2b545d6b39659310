"""Scan one chunk of a file for matching lines.

``scan_chunk`` is the unit of work submitted to the worker pool. It only
touches its own file handle and returns a fresh :class:`ChunkResult`, so any
number of scans can run side by side in threads or processes.
"""

from __future__ import annotations

import logging
from pathlib import Path

from chunkgrep.constants import (
    CARRIAGE_RETURN,
    DEFAULT_ENCODING,
    DEFAULT_ENCODING_ERRORS,
    DEFAULT_STRIP_CARRIAGE_RETURNS,
    NEWLINE,
)
from chunkgrep.exceptions import FileAccessError
from chunkgrep.exceptions import FileNotFoundError as ChunkGrepFileNotFoundError
from chunkgrep.search.types import Chunk, ChunkResult, LocalMatch, SearchSpec

logger = logging.getLogger(__name__)


def scan_chunk(
    path: str | Path,
    chunk: Chunk,
    spec: SearchSpec,
    *,
    encoding: str = DEFAULT_ENCODING,
    errors: str = DEFAULT_ENCODING_ERRORS,
    strip_carriage_returns: bool = DEFAULT_STRIP_CARRIAGE_RETURNS,
) -> ChunkResult:
    """Read every line starting inside ``chunk`` and collect the matches.

    Lines are read while the read position is strictly before ``chunk.end``.
    Because chunk boundaries sit at line starts, no line ever straddles two
    chunks; the last chunk ends at the file length and so reaches true end of
    file, including a final line without a trailing newline.

    Parameters
    ----------
    path : str or Path
        File to read; opened independently by every call
    chunk : Chunk
        Byte range to scan
    spec : SearchSpec
        Compiled matchers shared by all scanners
    encoding : str, default "utf-8"
        Encoding used to decode each line
    errors : str, default "replace"
        Decode error policy passed to ``bytes.decode``
    strip_carriage_returns : bool, default True
        Drop a trailing ``\\r`` from each line before matching

    Returns
    -------
    ChunkResult
        Lines scanned and matches in increasing local line order

    Raises
    ------
    FileNotFoundError
        If the file vanished before the scan could open it
    FileAccessError
        If opening, seeking, reading or decoding fails

    """
    file_path = str(path)
    lines_scanned = 0
    matches: list[LocalMatch] = []

    try:
        with open(file_path, "rb") as handle:
            handle.seek(chunk.start)
            position = chunk.start
            while position < chunk.end:
                raw = handle.readline()
                if not raw:
                    break
                position += len(raw)
                lines_scanned += 1

                line = _decode_line(raw, encoding, errors, strip_carriage_returns)
                if spec.accepts(line):
                    matches.append(LocalMatch(line_number=lines_scanned, line=line, spans=spec.find_spans(line)))
    except FileNotFoundError as exc:
        raise ChunkGrepFileNotFoundError(file_path, original_error=exc) from exc
    except UnicodeDecodeError as exc:
        raise FileAccessError(
            file_path,
            message=f"Cannot decode line {lines_scanned} of chunk {chunk.index} in {file_path} as {encoding}: {exc}",
            original_error=exc,
        ) from exc
    except OSError as exc:
        raise FileAccessError(
            file_path,
            message=f"Read failed in chunk {chunk.index} of {file_path}: {exc}",
            original_error=exc,
        ) from exc

    logger.debug(
        "Chunk %d [%d, %d) scanned %d lines, %d matches", chunk.index, chunk.start, chunk.end, lines_scanned, len(matches)
    )
    return ChunkResult(chunk_index=chunk.index, lines_scanned=lines_scanned, matches=tuple(matches))


def _decode_line(raw: bytes, encoding: str, errors: str, strip_carriage_returns: bool) -> str:
    if raw.endswith(NEWLINE):
        raw = raw[:-1]
    if strip_carriage_returns and raw.endswith(CARRIAGE_RETURN):
        raw = raw[:-1]
    return raw.decode(encoding, errors)
