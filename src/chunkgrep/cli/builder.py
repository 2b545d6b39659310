#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Argument parser construction and exit code mapping for the chunkgrep CLI."""

import argparse
import textwrap

from chunkgrep import __version__
from chunkgrep.constants import DEFAULT_SEARCH_TERM, ENCODING_ERRORS_MODES, EXECUTOR_KINDS, MATCH_MODES
from chunkgrep.exceptions import FileError, ValidationError

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}") from exc
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the chunkgrep argument parser.

    Option flags default to ``None`` so that unset flags never override values
    loaded from a configuration file.
    """
    parser = argparse.ArgumentParser(
        prog="chunkgrep",
        description="Search a file for a whole word in parallel, printing numbered, underlined matches.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent(
            """\
            examples:
              chunkgrep                                  search the bundled sample for "All"
              chunkgrep timeout server.log               whole-word search
              chunkgrep time server.log --match part -i  fuzzy, case-insensitive search
              chunkgrep error big.log -j 8 --json        eight workers, JSON output
            """
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "term",
        nargs="?",
        default=DEFAULT_SEARCH_TERM,
        help=f"Word to search for (default: {DEFAULT_SEARCH_TERM!r})",
    )
    parser.add_argument(
        "file",
        nargs="?",
        default=None,
        help="File to search (default: the bundled Jabberwocky sample)",
    )

    matching = parser.add_argument_group("matching")
    matching.add_argument(
        "--match",
        dest="match_mode",
        choices=list(MATCH_MODES),
        default=None,
        help="'word' reports lines with an exact whole-word hit; 'part' enables fuzzy acceptance",
    )
    matching.add_argument(
        "--fuzzy",
        dest="match_mode",
        action="store_const",
        const="part",
        help="Shortcut for --match part",
    )
    case_group = matching.add_mutually_exclusive_group()
    case_group.add_argument(
        "-i",
        "--ignore-case",
        dest="case_sensitive",
        action="store_const",
        const=False,
        default=None,
        help="Perform case-insensitive matching",
    )
    case_group.add_argument(
        "--case-sensitive",
        dest="case_sensitive",
        action="store_const",
        const=True,
        help="Perform case-sensitive matching (default)",
    )

    execution = parser.add_argument_group("execution")
    execution.add_argument(
        "-j",
        "--workers",
        dest="workers",
        type=_positive_int,
        default=None,
        help="Number of chunks and parallel workers (default: number of CPUs)",
    )
    execution.add_argument(
        "--executor",
        dest="executor",
        choices=list(EXECUTOR_KINDS),
        default=None,
        help="Worker pool used for chunk scans (default: process)",
    )
    execution.add_argument("--encoding", dest="encoding", default=None, help="Text encoding (default: utf-8)")
    execution.add_argument(
        "--encoding-errors",
        dest="encoding_errors",
        choices=list(ENCODING_ERRORS_MODES),
        default=None,
        help="How undecodable bytes are handled (default: replace)",
    )
    execution.add_argument("--config", help="Configuration file overriding defaults (TOML, YAML or JSON)")

    output = parser.add_argument_group("output")
    output_mode = output.add_mutually_exclusive_group()
    output_mode.add_argument("--json", action="store_true", help="Emit matches as a JSON array")
    output_mode.add_argument("--rich", action="store_true", help="Enable rich-style highlighted output")
    output.add_argument(
        "--force-rich",
        action="store_true",
        help="Use rich output even when stdout is not a terminal",
    )
    output.add_argument("--progress", action="store_true", help="Show a per-chunk progress bar on stderr")
    output.add_argument("--summary", action="store_true", help="Print a run summary on stderr")

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output with detailed logging (equivalent to --log-level DEBUG)",
    )
    logging_group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )
    logging_group.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        help="Write log messages to specified file in addition to console output",
    )
    logging_group.add_argument(
        "--trace",
        action="store_true",
        help="Enable trace mode with timestamped, per-process logging",
    )

    return parser


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    # Bad terms, plans and options
    if isinstance(exception, (ValidationError, ValueError)):
        return EXIT_VALIDATION_ERROR

    # Missing or unreadable input
    if isinstance(exception, (FileError, OSError)):
        return EXIT_FILE_ERROR

    # All other errors (unexpected errors)
    return EXIT_ERROR
