#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Progress bars and run summaries for the CLI.

Both write to stderr so that stdout carries nothing but matches.
"""

from __future__ import annotations

import sys
from typing import Any

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.table import Table
from tqdm import tqdm

from chunkgrep.progress import ProgressCallback, ProgressEvent
from chunkgrep.search.types import SearchReport


class ProgressContext:
    """Per-chunk progress bar rendered with rich or tqdm.

    Parameters
    ----------
    use_rich : bool
        Render with a rich ``Progress`` instead of tqdm
    total : int
        Expected number of chunks; corrected by the ``started`` event
    description : str
        Label shown next to the bar

    Examples
    --------
    >>> with ProgressContext(use_rich=False, total=4, description="Scanning") as progress:
    ...     service.search(path, "All", progress_callback=create_progress_context_callback(progress))

    """

    def __init__(self, use_rich: bool, total: int, description: str):
        """Initialize progress context."""
        self.use_rich = use_rich
        self.total = total
        self.description = description

        self._progress_obj: Any = None
        self._task_id: Any = None
        self._console: Console | None = None
        self._current = 0

    def __enter__(self) -> ProgressContext:
        """Start the progress bar."""
        if self.use_rich:
            self._console = Console(stderr=True)
            self._progress_obj = Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                console=self._console,
                transient=True,
            )
            self._progress_obj.__enter__()
            self._task_id = self._progress_obj.add_task(f"[cyan]{self.description}...", total=self.total)
        else:
            self._progress_obj = tqdm(total=self.total, desc=self.description, unit="chunk", file=sys.stderr)
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Stop the progress bar."""
        if self._progress_obj is None:
            return
        if self.use_rich:
            self._progress_obj.__exit__(exc_type, exc_val, exc_tb)
        else:
            self._progress_obj.close()
        self._progress_obj = None

    @property
    def current(self) -> int:
        """Number of completed steps."""
        return self._current

    def set_total(self, total: int) -> None:
        """Replace the expected number of steps."""
        self.total = total
        if self._progress_obj is None:
            return
        if self.use_rich:
            self._progress_obj.update(self._task_id, total=total)
        else:
            self._progress_obj.total = total
            self._progress_obj.refresh()

    def update(self, advance: int = 1) -> None:
        """Advance the bar by ``advance`` steps."""
        self._current += advance
        if self._progress_obj is None:
            return
        if self.use_rich:
            self._progress_obj.update(self._task_id, advance=advance)
        else:
            self._progress_obj.update(advance)

    def log(self, message: str, level: str = "info") -> None:
        """Print a message above the bar, colored by ``level`` when using rich."""
        if self.use_rich and self._console is not None:
            style = {"success": "green", "error": "red", "warning": "yellow"}.get(level)
            self._console.print(message, style=style, markup=False, highlight=False)
        elif self._progress_obj is not None:
            tqdm.write(message, file=sys.stderr)
        else:
            print(message, file=sys.stderr)


def create_progress_context_callback(progress: ProgressContext) -> ProgressCallback:
    """Create a callback that feeds search progress events into ``progress``."""

    def callback(event: ProgressEvent) -> None:
        if event.event_type == "started":
            if event.total:
                progress.set_total(event.total)
        elif event.event_type == "item_done":
            if event.metadata.get("item_type") == "chunk":
                progress.update()
        elif event.event_type == "error":
            progress.log(event.message, level="error")

    return callback


class SummaryRenderer:
    """Render a post-search summary on stderr, as a rich table or plain text.

    Parameters
    ----------
    use_rich : bool
        Whether to render a rich table

    """

    def __init__(self, use_rich: bool):
        """Initialize summary renderer."""
        self.use_rich = use_rich
        self._console = Console(stderr=True) if use_rich else None

    def render_search_summary(self, report: SearchReport, elapsed: float, title: str = "Search Summary") -> None:
        """Render file, term, chunk, line and match counts for ``report``.

        Parameters
        ----------
        report : SearchReport
            Completed search
        elapsed : float
            Wall-clock seconds spent searching
        title : str, default="Search Summary"
            Table title

        """
        rows = [
            ("File", str(report.path)),
            ("Term", report.spec.term),
            ("Chunks", str(len(report.chunks))),
            ("Lines scanned", str(report.lines_scanned)),
            ("Matching lines", str(report.match_count)),
            ("Tokens matched", str(report.token_count)),
            ("Elapsed", f"{elapsed:.3f}s"),
        ]

        if self.use_rich and self._console is not None:
            table = Table(title=title)
            table.add_column("Item", style="cyan", no_wrap=True)
            table.add_column("Value", style="magenta")
            for name, value in rows:
                table.add_row(name, value)
            self._console.print(table)
        else:
            print(f"\n{title}", file=sys.stderr)
            print("=" * 40, file=sys.stderr)
            for name, value in rows:
                print(f"  {name + ':':16} {value}", file=sys.stderr)


__all__ = ["ProgressContext", "SummaryRenderer", "create_progress_context_callback"]
