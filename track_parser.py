"""
Map parsing utilities for the track solver.

Turns diagram text into a TrackMap. Rows are kept exactly as drawn: no
padding, no tab expansion. Unknown characters are left in place for the
walker to reject.
"""

from __future__ import annotations

import logging
import re
import textwrap
from pathlib import Path

from track_types import DEFAULT_SYMBOLS, TrackMap, TrackSymbols

__all__ = ["parse_track_map", "load_track_map", "split_rows"]

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_rows(text: str) -> list[str]:
    """Split text into rows on \\n, \\r\\n or \\r (and nothing else)."""
    return _LINE_BREAK.split(text)


def parse_track_map(
    text: str,
    symbols: TrackSymbols = DEFAULT_SYMBOLS,
    dedent: bool = False,
) -> TrackMap:
    """
    Parse a diagram into a TrackMap.

    Format:
    - One row per line
    - One tile per character, column = character index
    - Lines may have different lengths; missing tiles are blank

    With dedent=True, a diagram embedded in a triple-quoted string can be
    written indented:

        \"\"\"
            @---A---+
                    |
            x-B-+   C
        \"\"\"

    The first and last lines are dropped if they are blank, then the common
    leading whitespace is removed from every line.

    Args:
        text: Diagram text
        symbols: Symbol set the diagram is drawn with
        dedent: Strip surrounding blank lines and common indentation

    Returns:
        TrackMap holding the rows
    """
    if dedent:
        text = textwrap.dedent(text)
        rows = split_rows(text)
        if rows and not rows[0].strip():
            rows = rows[1:]
        if rows and not rows[-1].strip():
            rows = rows[:-1]
    else:
        rows = split_rows(text)

    track_map = TrackMap(tuple(rows), symbols)
    logger.debug("parsed map: %d rows, width %d", track_map.height, track_map.width)
    return track_map


def load_track_map(path: str | Path, symbols: TrackSymbols = DEFAULT_SYMBOLS) -> TrackMap:
    """Read a diagram from a UTF-8 text file."""
    text = Path(path).read_text(encoding="utf-8")
    # A trailing newline is the file's terminator, not an extra empty row
    if text.endswith("\n"):
        text = text[:-1]
        if text.endswith("\r"):
            text = text[:-1]
    return parse_track_map(text, symbols)
