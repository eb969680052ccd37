"""
ASCII rendering for track maps.

Provides two views of a walk:
1. Colored map - the diagram as drawn, with walked tiles colored by how often
   they were visited and the current head of the walk highlighted
2. Visit counts - the diagram with each walked tile replaced by its visit count
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Callable

import simple_chalk as chalk  # type: ignore[import-untyped]

from track_path import Path
from track_types import Position, TileKind, TrackMap

logger = logging.getLogger(__name__)


def _identity(s: str) -> str:
    return s


def tile_color(
    track_map: TrackMap,
    position: Position,
    visits: int,
    head: Position | None = None,
) -> Callable[[str], str]:
    """Pick the colorizer for one tile."""
    if head is not None and position == head:
        return chalk.redBright
    kind = track_map.kind_at(position)
    if visits == 0:
        if kind in (TileKind.START, TileKind.END):
            return chalk.white
        return _identity
    if kind is TileKind.WAYPOINT:
        return chalk.blueBright
    if visits > 1:
        return chalk.yellow
    return chalk.green


def render_map(
    track_map: TrackMap,
    path: Path = (),
    head: Position | None = None,
    color: bool = True,
) -> str:
    """
    Render a map with the walked tiles highlighted.

    Rows keep the length they were drawn with, so with color=False the output
    is the diagram text unchanged.

    Args:
        track_map: The map to render
        path: Tiles walked so far
        head: Optional tile to highlight as the current position
        color: Emit ANSI colors

    Returns:
        Rendered string, one line per map row
    """
    visits = Counter(path)
    logger.info(
        "render_map: %dx%d, %d tiles walked (%d distinct)",
        track_map.height,
        track_map.width,
        len(path),
        len(visits),
    )

    lines: list[str] = []
    for r, row in enumerate(track_map.rows):
        cells: list[str] = []
        for c, symbol in enumerate(row):
            if not color or symbol == track_map.symbols.blank:
                cells.append(symbol)
                continue
            position = Position(r, c)
            colorize = tile_color(track_map, position, visits[position], head)
            cells.append(colorize(symbol))
        lines.append("".join(cells))
    return "\n".join(lines)


def render_visit_counts(track_map: TrackMap, path: Path) -> str:
    """
    Render a map with every walked tile replaced by its visit count.

    Tiles visited more than 9 times show as '9'. Tiles not on the path keep
    their symbol.
    """
    visits = Counter(path)
    width = track_map.width

    lines: list[str] = []
    for r in range(track_map.height):
        cells: list[str] = []
        for c in range(width):
            count = visits[Position(r, c)]
            cells.append(str(min(count, 9)) if count else track_map.tile_at(r, c))
        lines.append("".join(cells).rstrip())
    return "\n".join(lines)
