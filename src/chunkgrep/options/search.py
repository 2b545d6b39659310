"""Configuration options for the chunked search pipeline."""

from __future__ import annotations

import codecs
import os
from dataclasses import dataclass, field

from chunkgrep.constants import (
    DEFAULT_CASE_SENSITIVE,
    DEFAULT_ENCODING,
    DEFAULT_ENCODING_ERRORS,
    DEFAULT_EXECUTOR,
    DEFAULT_FUZZY,
    DEFAULT_STRIP_CARRIAGE_RETURNS,
    ENCODING_ERRORS_MODES,
    EXECUTOR_KINDS,
    NEWLINE,
    EncodingErrorsMode,
    ExecutorKind,
)
from chunkgrep.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class SearchOptions(CloneFrozenMixin):
    """Search configuration toggles used by the CLI and API."""

    workers: int | None = field(
        default=None,
        metadata={
            "help": "Number of chunks and parallel workers (defaults to the number of CPUs)",
            "type": int,
            "importance": "core",
        },
    )
    fuzzy: bool = field(
        default=DEFAULT_FUZZY,
        metadata={
            "help": "Accept any line containing the term as a whole word (highlighting stays exact)",
            "importance": "core",
        },
    )
    case_sensitive: bool = field(
        default=DEFAULT_CASE_SENSITIVE,
        metadata={
            "help": "Match the term case-sensitively",
            "importance": "core",
        },
    )
    encoding: str = field(
        default=DEFAULT_ENCODING,
        metadata={
            "help": "Text encoding used to decode lines",
            "importance": "advanced",
        },
    )
    encoding_errors: EncodingErrorsMode = field(
        default=DEFAULT_ENCODING_ERRORS,
        metadata={
            "help": "How undecodable bytes are handled (strict, replace, ignore)",
            "choices": list(ENCODING_ERRORS_MODES),
            "importance": "advanced",
        },
    )
    executor: ExecutorKind = field(
        default=DEFAULT_EXECUTOR,
        metadata={
            "help": "Worker pool used for chunk scans (process, thread, serial)",
            "choices": list(EXECUTOR_KINDS),
            "importance": "advanced",
        },
    )
    strip_carriage_returns: bool = field(
        default=DEFAULT_STRIP_CARRIAGE_RETURNS,
        metadata={
            "help": "Drop a trailing carriage return from each line (CRLF files)",
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges and enumerated options at construction time."""
        if self.workers is not None and (isinstance(self.workers, bool) or not isinstance(self.workers, int)):
            raise ValueError(f"workers must be an integer, got {self.workers!r}")
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        for flag_name in ("fuzzy", "case_sensitive", "strip_carriage_returns"):
            value = getattr(self, flag_name)
            if not isinstance(value, bool):
                raise ValueError(f"{flag_name} must be a boolean, got {value!r}")
        if self.executor not in EXECUTOR_KINDS:
            raise ValueError(f"executor must be one of {', '.join(EXECUTOR_KINDS)}, got {self.executor!r}")
        if self.encoding_errors not in ENCODING_ERRORS_MODES:
            raise ValueError(
                f"encoding_errors must be one of {', '.join(ENCODING_ERRORS_MODES)}, got {self.encoding_errors!r}"
            )
        if not self.encoding:
            raise ValueError("encoding must not be empty")
        try:
            codecs.lookup(self.encoding)
        except LookupError as exc:
            raise ValueError(f"Unknown encoding: {self.encoding}") from exc
        # Chunk boundaries and line reads split on the raw b"\n" byte.
        try:
            encoded_newline = "\n".encode(self.encoding)
        except (LookupError, UnicodeError) as exc:
            raise ValueError(f"Encoding {self.encoding} is not a text encoding") from exc
        if encoded_newline != NEWLINE:
            raise ValueError(
                f"Encoding {self.encoding} is not supported: a newline must encode to the single byte 0x0A"
            )

    def resolved_workers(self) -> int:
        """Return the effective worker count, falling back to the CPU count."""
        if self.workers is not None:
            return self.workers
        return os.cpu_count() or 1


__all__ = ["SearchOptions"]
