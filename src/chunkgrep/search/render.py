"""Render global matches as numbered lines with an underline marker row.

Each match renders as two lines::

    3 the cat sat on the mat
      ____^^^_______________

The marker row is indented by the width of the ``"{line_number} "`` prefix
so every glyph sits under the character it describes.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from rich.text import Text

from chunkgrep.constants import MARKER_HIT, MARKER_MISS, RICH_LINE_NUMBER_STYLE, RICH_MATCH_STYLE
from chunkgrep.search.types import GlobalMatch, TokenSpan


def marker_indent(line_number: int) -> int:
    """Return the marker row indent: decimal digits of the line number plus the separating space."""
    return len(str(line_number)) + 1


def marker_row(line: str, spans: Iterable[TokenSpan]) -> str:
    """Return one glyph per character of ``line``: ``^`` inside a span, ``_`` elsewhere."""
    span_list = list(spans)
    return "".join(
        MARKER_HIT if any(span.contains(index) for span in span_list) else MARKER_MISS for index in range(len(line))
    )


def render_match(match: GlobalMatch) -> str:
    """Render ``match`` as its numbered line followed by the aligned marker row."""
    indent = " " * marker_indent(match.line_number)
    return f"{match.line_number} {match.line}\n{indent}{marker_row(match.line, match.spans)}"


def render_matches(matches: Iterable[GlobalMatch]) -> Iterator[str]:
    """Render matches in the order given; callers must not re-sort."""
    for match in matches:
        yield render_match(match)


def render_match_rich(match: GlobalMatch) -> Text:
    """Render ``match`` as a rich ``Text`` with the line number and hits styled."""
    text = Text()
    text.append(str(match.line_number), style=RICH_LINE_NUMBER_STYLE)
    text.append(" ")
    cursor = 0
    for span in sorted(match.spans, key=lambda span: span.start):
        if span.start > cursor:
            text.append(match.line[cursor : span.start])
        text.append(match.line[span.start : span.end], style=RICH_MATCH_STYLE)
        cursor = max(cursor, span.end)
    text.append(match.line[cursor:])
    text.append("\n")
    text.append(" " * marker_indent(match.line_number))
    text.append(marker_row(match.line, match.spans), style="dim")
    return text


def match_to_dict(match: GlobalMatch) -> dict[str, Any]:
    """Return a JSON-serializable record for ``match``."""
    return {
        "line_number": match.line_number,
        "line": match.line,
        "spans": [span.as_list() for span in match.spans],
    }
