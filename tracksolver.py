"""
Track solver: find the one path from start to end on an ASCII track map.

The walker advances one tile at a time. Each step looks at the tile it lands
on and produces a Verdict:

- DeadEnd: the track stops here (no continuation)
- Ambiguous: the track forks here, or the tile cannot legally be entered
- Walk: a complete path that ends on the end marker

Whenever several directions are probed from one tile (the start tile and
corners) their verdicts are merged with ensure_single_outcome(). DeadEnd and
Ambiguous are both failures for the caller of solve(), but they must stay
distinct during the walk: merging discards dead ends and fails on forks.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from track_parser import parse_track_map
from track_path import Path, extend, is_tip_revisited, start_path, tip, visit_count
from track_types import (
    DEFAULT_SYMBOLS,
    Direction,
    MarkerError,
    Position,
    TileKind,
    TrackMap,
    TrackSymbols,
)

logger = logging.getLogger(__name__)

# A tile may be passed once, then crossed under once
MAX_VISITS = 2

# Interpreter frames used per step of the walk, and headroom for the caller
FRAMES_PER_STEP = 4
RECURSION_MARGIN = 200


class FailureReason(Enum):
    """Why a tile produced an Ambiguous verdict."""

    FORK = "fork"  # More than one direction continues
    ILLEGAL_CROSSING = "illegal_crossing"  # Entered a straight track from the side
    STRAIGHT_THROUGH_CORNER = "straight_through_corner"  # Track continues past a corner
    UNRESOLVED_WAYPOINT = "unresolved_waypoint"  # Letter is neither straight nor a turn
    WAYPOINT_FORK = "waypoint_fork"  # Letter passed straight has a live side branch
    END_CONTINUES = "end_continues"  # Track goes on beyond the end marker
    UNRECOGNIZED_TILE = "unrecognized_tile"  # Symbol is not part of the track alphabet
    REVISIT_LIMIT = "revisit_limit"  # Tile entered more than MAX_VISITS times


# =============================================================================
# Verdicts
# =============================================================================


@dataclass(frozen=True)
class DeadEnd:
    """No continuation from this tile."""

    pass


@dataclass(frozen=True)
class Ambiguous:
    """The walk cannot be continued unambiguously from this tile."""

    reason: FailureReason
    position: Position | None = None


@dataclass(frozen=True)
class Walk:
    """A complete path from the start marker to the end marker."""

    path: Path


Verdict = DeadEnd | Ambiguous | Walk


@dataclass(frozen=True)
class Solution:
    """Letters collected along the path, and every tile symbol walked over."""

    letters: str
    tiles: str


def _fail(reason: FailureReason, position: Position) -> Ambiguous:
    logger.debug("%s at (%d, %d)", reason.value, position.row, position.col)
    return Ambiguous(reason, position)


def ensure_single_outcome(verdicts: Iterable[Verdict], position: Position | None = None) -> Verdict:
    """
    Merge the verdicts of sibling probes made from the same tile.

    Dead ends are discarded. If nothing remains the tile is a dead end; if
    more than one continuation remains the tile is a fork, even when every
    continuation is a complete walk. A single remaining verdict is returned
    unchanged, so an Ambiguous result further along propagates upward.

    Args:
        verdicts: Results of probing each direction
        position: The tile the probes were made from (for diagnostics)

    Returns:
        The merged verdict
    """
    continuations = [v for v in verdicts if not isinstance(v, DeadEnd)]
    if not continuations:
        return DeadEnd()
    if len(continuations) > 1:
        if position is None:
            logger.debug("fork: %d continuations", len(continuations))
            return Ambiguous(FailureReason.FORK)
        return _fail(FailureReason.FORK, position)
    return continuations[0]


# =============================================================================
# Walker
# =============================================================================


def step(track_map: TrackMap, path: Path, direction: Direction) -> Verdict:
    """
    Move one tile in `direction` from the tip of `path` and apply that tile's rule.

    Args:
        track_map: The map being walked
        path: Path so far; its tip is the tile being left
        direction: Direction of travel, i.e. the direction of arrival at the next tile

    Returns:
        Verdict for the rest of the walk from the next tile
    """
    path = extend(path, direction)
    position = tip(path)

    if visit_count(path) > MAX_VISITS:
        return _fail(FailureReason.REVISIT_LIMIT, position)

    match track_map.kind_at(position):
        case TileKind.BLANK:
            return DeadEnd()
        case TileKind.HORIZONTAL:
            return _horizontal(track_map, path, direction)
        case TileKind.VERTICAL:
            return _vertical(track_map, path, direction)
        case TileKind.CORNER:
            return _corner(track_map, path, direction)
        case TileKind.WAYPOINT:
            return _waypoint(track_map, path, direction)
        case TileKind.END:
            return _end(track_map, path, direction)
        case _:
            return _fail(FailureReason.UNRECOGNIZED_TILE, position)


def _horizontal(track_map: TrackMap, path: Path, direction: Direction) -> Verdict:
    # Vertical arrival is only a crossing under an earlier horizontal pass
    if direction.is_horizontal or is_tip_revisited(path):
        return step(track_map, path, direction)
    return _fail(FailureReason.ILLEGAL_CROSSING, tip(path))


def _vertical(track_map: TrackMap, path: Path, direction: Direction) -> Verdict:
    if direction.is_vertical or is_tip_revisited(path):
        return step(track_map, path, direction)
    return _fail(FailureReason.ILLEGAL_CROSSING, tip(path))


def _corner(
    track_map: TrackMap,
    path: Path,
    direction: Direction,
    straight: Verdict | None = None,
) -> Verdict:
    """
    A corner must turn: nothing may continue straight ahead, and exactly one of
    the two sideways directions must continue.

    `straight` is the already computed straight-ahead verdict, if any.
    """
    position = tip(path)
    if straight is None:
        straight = step(track_map, path, direction)
    if not isinstance(straight, DeadEnd):
        return _fail(FailureReason.STRAIGHT_THROUGH_CORNER, position)

    return ensure_single_outcome(
        [step(track_map, path, turn) for turn in direction.orthogonal],
        position,
    )


def _waypoint(track_map: TrackMap, path: Path, direction: Direction) -> Verdict:
    """
    A letter acts as a horizontal track, a vertical track or a corner, in that
    order, whichever of them yields a complete walk.

    The horizontal and vertical rules both continue straight ahead, and on a
    first visit exactly one of them applies, so the straight continuation is
    computed once and shared with the corner rule's straight-ahead check.

    A letter passed straight on its first visit must not have a live side
    branch, unless the walk comes back through it later (crossing under it).

    A straight continuation that fails further along is returned as is, so
    the reported reason is the one found there. A letter that neither
    continues nor turns is UNRESOLVED_WAYPOINT.
    """
    position = tip(path)

    straight = step(track_map, path, direction)
    match straight:
        case Walk(path=walked):
            if is_tip_revisited(path) or visit_count(walked, position) > 1:
                return straight
            if all(isinstance(step(track_map, path, side), DeadEnd) for side in direction.orthogonal):
                return straight
            return _fail(FailureReason.WAYPOINT_FORK, position)
        case Ambiguous():
            return straight

    turned = _corner(track_map, path, direction, straight)
    if isinstance(turned, DeadEnd):
        return _fail(FailureReason.UNRESOLVED_WAYPOINT, position)
    return turned


def _end(track_map: TrackMap, path: Path, direction: Direction) -> Verdict:
    """The walk is complete if nothing leads on from the end marker (except back)."""
    position = tip(path)
    onward = [step(track_map, path, d) for d in Direction if d is not direction.opposite]
    if all(isinstance(verdict, DeadEnd) for verdict in onward):
        return Walk(path)
    return _fail(FailureReason.END_CONTINUES, position)


def walk_map(track_map: TrackMap) -> Verdict:
    """
    Walk the map from its start marker in all four directions.

    Returns:
        Walk if exactly one complete path exists, otherwise DeadEnd or Ambiguous

    Raises:
        MissingMarkerError: No start marker
        AmbiguousMarkerError: More than one start marker
    """
    start = track_map.start_position
    path = start_path(start)
    previous_limit = sys.getrecursionlimit()
    sys.setrecursionlimit(max(previous_limit, recursion_limit_for(track_map)))
    try:
        return ensure_single_outcome([step(track_map, path, d) for d in Direction], start)
    finally:
        sys.setrecursionlimit(previous_limit)


def recursion_limit_for(track_map: TrackMap) -> int:
    """Recursion limit deep enough to walk every tile MAX_VISITS times."""
    cells = track_map.height * track_map.width
    return FRAMES_PER_STEP * MAX_VISITS * cells + RECURSION_MARGIN


# =============================================================================
# Result Projection
# =============================================================================


def extract_tiles(track_map: TrackMap, path: Path) -> str:
    """Every symbol walked over, in order, repeats included."""
    return "".join(track_map[position] for position in path)


def extract_letters(track_map: TrackMap, path: Path) -> str:
    """Waypoint letters in order of first visit; a letter crossed twice counts once."""
    first_visits = dict.fromkeys(path)
    return "".join(
        track_map[position]
        for position in first_visits
        if track_map.kind_at(position) is TileKind.WAYPOINT
    )


def solve_map(track_map: TrackMap) -> Solution | None:
    """Solve an already parsed map. Returns None if there is no single valid path."""
    try:
        verdict = walk_map(track_map)
    except MarkerError as error:
        logger.debug("no solution: %s", error)
        return None
    except RecursionError:
        logger.debug("no solution: track too long to walk")
        return None

    match verdict:
        case Walk(path=path):
            logger.debug("solved: %d tiles walked", len(path))
            return Solution(extract_letters(track_map, path), extract_tiles(track_map, path))
        case Ambiguous(reason=reason, position=position):
            logger.debug("no solution: %s at %s", reason.value, position)
        case DeadEnd():
            logger.debug("no solution: no track leads from the start")
    return None


def solve(text: str, symbols: TrackSymbols = DEFAULT_SYMBOLS, dedent: bool = False) -> Solution | None:
    """
    Find the letters and tiles along the single path from start to end.

    Args:
        text: Diagram text, one map row per line
        symbols: Symbol set the diagram is drawn with
        dedent: Strip surrounding blank lines and common indentation first

    Returns:
        Solution, or None when the map has no single well-formed path
    """
    return solve_map(parse_track_map(text, symbols, dedent))
