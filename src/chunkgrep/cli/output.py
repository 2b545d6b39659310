#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Output writers for search reports.

Three formats are supported: the plain two-line rendering, a rich-styled
version of the same layout, and a JSON array of match records.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import TextIO

from rich.console import Console

from chunkgrep.search.render import match_to_dict, render_match_rich, render_matches
from chunkgrep.search.types import SearchReport


def should_use_rich_output(args: argparse.Namespace, stream: TextIO | None = None) -> bool:
    """Determine if rich output should be used based on TTY and args.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments
    stream : optional, default None
        Uses sys.stdout unless otherwise specified.

    Returns
    -------
    bool
        True if rich output should be used

    Notes
    -----
    Rich output is used when:
    - The --rich flag is set
    - AND either --force-rich is set OR the stream is a TTY

    """
    if not getattr(args, "rich", False):
        return False

    if getattr(args, "force_rich", False):
        return True

    target = stream or sys.stdout
    isatty = getattr(target, "isatty", None)
    if callable(isatty):
        try:
            return bool(isatty())
        except ValueError:
            # closed stream
            return False
    return False


def write_plain(report: SearchReport, stream: TextIO | None = None) -> None:
    """Write each match as its numbered line followed by the marker row."""
    target = stream or sys.stdout
    for block in render_matches(report.matches):
        target.write(block)
        target.write("\n")
    target.flush()


def write_rich(report: SearchReport, console: Console | None = None) -> None:
    """Write matches with the line number and hit tokens highlighted."""
    console = console or Console()
    for match in report.matches:
        console.print(render_match_rich(match), soft_wrap=True, highlight=False)


def write_json(report: SearchReport, stream: TextIO | None = None) -> None:
    """Write matches as a JSON array of ``{line_number, line, spans}`` records."""
    target = stream or sys.stdout
    json.dump([match_to_dict(match) for match in report.matches], target, indent=2, ensure_ascii=False)
    target.write("\n")
    target.flush()


__all__ = ["should_use_rich_output", "write_json", "write_plain", "write_rich"]
