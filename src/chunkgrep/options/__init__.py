#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for chunkgrep.

Options are frozen dataclasses validated once at construction; use
``create_updated`` to derive modified copies.
"""

from __future__ import annotations

from chunkgrep.options.base import CloneFrozenMixin
from chunkgrep.options.search import SearchOptions

__all__ = ["CloneFrozenMixin", "SearchOptions"]
