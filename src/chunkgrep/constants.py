#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the chunkgrep library.

This module centralizes hardcoded values and default configuration used
across the library.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Search Defaults - Matching and decoding behavior
3. Planning and Scanning - Chunk planning parameters
4. Rendering - Marker row glyphs
5. CLI Defaults - Default term and bundled sample file
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

ExecutorKind = Literal["process", "thread", "serial"]
EncodingErrorsMode = Literal["strict", "replace", "ignore"]

EXECUTOR_KINDS: tuple[str, ...] = ("process", "thread", "serial")
ENCODING_ERRORS_MODES: tuple[str, ...] = ("strict", "replace", "ignore")
MATCH_MODES: tuple[str, ...] = ("word", "part")

# =============================================================================
# Search Defaults
# =============================================================================

DEFAULT_CASE_SENSITIVE = True
DEFAULT_FUZZY = False
DEFAULT_ENCODING = "utf-8"
DEFAULT_ENCODING_ERRORS: EncodingErrorsMode = "replace"
DEFAULT_EXECUTOR: ExecutorKind = "process"
DEFAULT_STRIP_CARRIAGE_RETURNS = True

# =============================================================================
# Planning and Scanning
# =============================================================================

NEWLINE = b"\n"
CARRIAGE_RETURN = b"\r"

# Block size used when scanning forward from a candidate split point
BOUNDARY_SCAN_BLOCK_SIZE = 4096

# =============================================================================
# Rendering
# =============================================================================

MARKER_HIT = "^"
MARKER_MISS = "_"
RICH_MATCH_STYLE = "bold yellow"
RICH_LINE_NUMBER_STYLE = "green"

# =============================================================================
# CLI Defaults
# =============================================================================

DEFAULT_SEARCH_TERM = "All"
DEFAULT_SAMPLE_RESOURCE = "Jabberwocky.txt"
CONFIG_ENV_VAR = "CHUNKGREP_CONFIG"
