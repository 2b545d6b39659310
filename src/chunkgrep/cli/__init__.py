#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for chunkgrep.

Usage::

    chunkgrep [TERM] [FILE] [options]

With no arguments the bundled Jabberwocky sample is searched for ``All``.
Matches go to stdout; logging, progress and summaries go to stderr.
"""

from __future__ import annotations

import argparse
import contextlib
import logging
import os
import sys
import time
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterator

from rich.console import Console

from chunkgrep.cli.builder import (
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    create_parser,
    get_exit_code_for_exception,
)
from chunkgrep.cli.config import apply_search_config, load_config_with_priority
from chunkgrep.cli.output import should_use_rich_output, write_json, write_plain, write_rich
from chunkgrep.cli.progress import ProgressContext, SummaryRenderer, create_progress_context_callback
from chunkgrep.constants import CONFIG_ENV_VAR, DEFAULT_SAMPLE_RESOURCE
from chunkgrep.logging_utils import configure_logging
from chunkgrep.options.search import SearchOptions
from chunkgrep.search.service import SearchService
from chunkgrep.search.types import SearchReport

logger = logging.getLogger(__name__)


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    """
    # --trace takes highest precedence, then --verbose, then --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _collect_search_overrides(parsed_args: argparse.Namespace) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for field_name in ("workers", "executor", "encoding", "encoding_errors", "case_sensitive"):
        value = getattr(parsed_args, field_name, None)
        if value is not None:
            overrides[field_name] = value
    if parsed_args.match_mode is not None:
        overrides["fuzzy"] = parsed_args.match_mode == "part"
    return overrides


def _resolve_options(parsed_args: argparse.Namespace) -> SearchOptions:
    """Build search options from defaults, then the config file, then CLI flags.

    Raises
    ------
    argparse.ArgumentTypeError
        If a configuration file cannot be loaded
    ValueError
        If a configured or overridden value is invalid

    """
    config_data = load_config_with_priority(
        explicit_path=parsed_args.config, env_var_path=os.environ.get(CONFIG_ENV_VAR)
    )
    options = apply_search_config(SearchOptions(), config_data)
    overrides = _collect_search_overrides(parsed_args)
    if overrides:
        options = options.create_updated(**overrides)
    return options


@contextlib.contextmanager
def _input_path(file_arg: str | None) -> Iterator[Path]:
    """Yield the file to search, materialising the bundled sample when none is given."""
    if file_arg is not None:
        yield Path(file_arg)
        return

    sample = resources.files("chunkgrep") / "data" / DEFAULT_SAMPLE_RESOURCE
    with resources.as_file(sample) as sample_path:
        logger.debug("No file given, searching bundled sample %s", sample_path)
        yield sample_path


def _run_search(
    service: SearchService, path: Path, term: str, *, show_progress: bool, use_rich: bool
) -> SearchReport:
    if not show_progress:
        return service.search(path, term)

    expected_chunks = service.options.resolved_workers()
    with ProgressContext(use_rich=use_rich, total=expected_chunks, description=f"Searching {path.name}") as progress:
        return service.search(path, term, progress_callback=create_progress_context_callback(progress))


def _write_report(report: SearchReport, parsed_args: argparse.Namespace, use_rich: bool) -> None:
    if parsed_args.json:
        write_json(report)
    elif use_rich:
        write_rich(report, Console(force_terminal=True if parsed_args.force_rich else None))
    else:
        write_plain(report)


def main(args: list[str] | None = None) -> int:
    """Run the chunkgrep CLI and return its exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    try:
        options = _resolve_options(parsed_args)
    except argparse.ArgumentTypeError as exc:
        print(f"Error loading configuration: {exc}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    use_rich = should_use_rich_output(parsed_args)
    service = SearchService(options=options)

    started_at = time.perf_counter()
    try:
        with _input_path(parsed_args.file) as path:
            report = _run_search(
                service, path, parsed_args.term, show_progress=parsed_args.progress, use_rich=use_rich
            )
    except Exception as exc:
        logger.debug("Search failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return get_exit_code_for_exception(exc)
    elapsed = time.perf_counter() - started_at

    _write_report(report, parsed_args, use_rich)

    if parsed_args.summary:
        SummaryRenderer(use_rich=use_rich).render_search_summary(report, elapsed)

    return EXIT_SUCCESS


__all__ = ["main"]
