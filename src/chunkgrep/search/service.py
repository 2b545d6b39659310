"""High-level orchestration of a chunked, parallel file search."""

from __future__ import annotations

import logging
import time
from concurrent.futures import Executor, Future, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from functools import partial
from pathlib import Path
from typing import Sequence

from chunkgrep.exceptions import FileAccessError
from chunkgrep.exceptions import FileNotFoundError as ChunkGrepFileNotFoundError
from chunkgrep.options.search import SearchOptions
from chunkgrep.progress import ProgressCallback, ProgressEvent
from chunkgrep.search.aggregator import aggregate_results
from chunkgrep.search.pattern import compile_search_spec
from chunkgrep.search.planner import plan_file
from chunkgrep.search.scanner import scan_chunk
from chunkgrep.search.types import Chunk, ChunkResult, SearchReport, SearchSpec

logger = logging.getLogger(__name__)


class SearchService:
    """Service object coordinating planning, parallel scanning and aggregation."""

    def __init__(self, options: SearchOptions | None = None) -> None:
        """Initialise the service with optional search configuration overrides."""
        self.options = options or SearchOptions()

    def search(
        self,
        path: str | Path,
        term: str,
        *,
        progress_callback: ProgressCallback | None = None,
    ) -> SearchReport:
        """Search ``path`` for ``term`` and return matches in final line order.

        The term is compiled and the chunk plan computed before any scanning
        starts. One scan task per chunk is then submitted to the pool and all
        of them are joined before aggregation, so a failure in any chunk
        aborts the run without producing results.

        Parameters
        ----------
        path : str or Path
            File to search
        term : str
            Literal word to look for
        progress_callback : ProgressCallback, optional
            Receives ``started``, per-chunk ``item_done``, ``finished`` and
            ``error`` events

        Returns
        -------
        SearchReport
            Chunk plan, total lines and globally ordered matches

        Raises
        ------
        InvalidPatternError
            If the term cannot be compiled
        PlanningError
            If the chunk plan cannot be computed
        FileNotFoundError
            If the file does not exist or vanishes mid-run
        FileAccessError
            If the file cannot be read
        AggregationError
            If chunk results are incomplete

        """
        file_path = _resolve_input(path)
        spec = compile_search_spec(term, case_sensitive=self.options.case_sensitive, fuzzy=self.options.fuzzy)
        worker_count = self.options.resolved_workers()
        chunks = plan_file(file_path, worker_count)
        logger.info("Searching %s for %r across %d chunks", file_path, term, len(chunks))

        started_at = time.perf_counter()
        results = self.scan_chunks(file_path, chunks, spec, progress_callback=progress_callback)
        matches = aggregate_results(results)
        lines_scanned = sum(result.lines_scanned for result in results)
        logger.debug(
            "Scanned %d lines in %.3fs, %d matching lines", lines_scanned, time.perf_counter() - started_at, len(matches)
        )

        if progress_callback:
            progress_callback(
                ProgressEvent(
                    event_type="finished",
                    message=f"Search of {file_path.name} complete",
                    current=len(chunks),
                    total=len(chunks),
                    metadata={"matches": len(matches), "lines": lines_scanned},
                )
            )

        return SearchReport(
            path=file_path,
            spec=spec,
            chunks=tuple(chunks),
            matches=tuple(matches),
            lines_scanned=lines_scanned,
        )

    def scan_chunks(
        self,
        path: Path,
        chunks: Sequence[Chunk],
        spec: SearchSpec,
        *,
        progress_callback: ProgressCallback | None = None,
    ) -> list[ChunkResult]:
        """Scan every chunk and return the results indexed by chunk index.

        Results are stored in the slot of their chunk index as they complete;
        the returned list is only built once every task has finished.
        """
        scan = partial(
            scan_chunk,
            str(path),
            spec=spec,
            encoding=self.options.encoding,
            errors=self.options.encoding_errors,
            strip_carriage_returns=self.options.strip_carriage_returns,
        )
        total = len(chunks)
        slots: list[ChunkResult | None] = [None] * total

        if progress_callback:
            progress_callback(
                ProgressEvent(
                    event_type="started",
                    message=f"Scanning {path.name}",
                    current=0,
                    total=total,
                    metadata={"item_type": "chunk"},
                )
            )

        def record(chunk_index: int, result: ChunkResult) -> None:
            slots[chunk_index] = result
            if progress_callback:
                completed = sum(slot is not None for slot in slots)
                progress_callback(
                    ProgressEvent(
                        event_type="item_done",
                        message=f"Chunk {chunk_index} scanned",
                        current=completed,
                        total=total,
                        metadata={
                            "item_type": "chunk",
                            "chunk_index": chunk_index,
                            "lines": result.lines_scanned,
                            "matches": len(result.matches),
                        },
                    )
                )

        def report_failure(chunk_index: int, exc: Exception) -> None:
            logger.debug("Chunk %d failed: %s", chunk_index, exc)
            if progress_callback:
                progress_callback(
                    ProgressEvent(
                        event_type="error",
                        message=f"Chunk {chunk_index} failed: {exc}",
                        current=sum(slot is not None for slot in slots),
                        total=total,
                        metadata={"error": str(exc), "stage": "scan", "chunk_index": chunk_index},
                    )
                )

        if self.options.executor == "serial" or total == 1:
            for chunk in chunks:
                try:
                    record(chunk.index, scan(chunk))
                except Exception as exc:
                    report_failure(chunk.index, exc)
                    raise
        else:
            with self._create_executor(total) as executor:
                futures: dict[Future[ChunkResult], int] = {
                    executor.submit(scan, chunk): chunk.index for chunk in chunks
                }
                for future in as_completed(futures):
                    chunk_index = futures[future]
                    try:
                        result = future.result()
                    except Exception as exc:
                        report_failure(chunk_index, exc)
                        for pending in futures:
                            pending.cancel()
                        raise
                    record(chunk_index, result)

        return [slot for slot in slots if slot is not None]

    def _create_executor(self, max_workers: int) -> Executor:
        factory: type[Executor] = (
            ProcessPoolExecutor if self.options.executor == "process" else ThreadPoolExecutor
        )
        logger.debug("Starting %s with %d workers", factory.__name__, max_workers)
        return factory(max_workers=max_workers)


def _resolve_input(path: str | Path) -> Path:
    file_path = Path(path).expanduser()
    if not file_path.exists():
        raise ChunkGrepFileNotFoundError(str(file_path))
    if not file_path.is_file():
        raise FileAccessError(str(file_path), message=f"Not a regular file: {file_path}")
    return file_path
