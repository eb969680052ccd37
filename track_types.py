"""
Shared type definitions for the track solver.
"""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from enum import Enum


class Direction(Enum):
    """Orthogonal direction of movement on the map."""

    UP = (-1, 0)  # decreasing row
    LEFT = (0, -1)  # decreasing col
    RIGHT = (0, 1)  # increasing col
    DOWN = (1, 0)  # increasing row

    @property
    def d_row(self) -> int:
        return self.value[0]

    @property
    def d_col(self) -> int:
        return self.value[1]

    @property
    def is_horizontal(self) -> bool:
        return self.d_row == 0

    @property
    def is_vertical(self) -> bool:
        return not self.is_horizontal

    @property
    def opposite(self) -> Direction:
        """The direction along the same axis, pointing the other way."""
        return _OPPOSITES[self]

    @property
    def orthogonal(self) -> tuple[Direction, Direction]:
        """The two directions on the other axis, in declaration order."""
        if self.is_horizontal:
            return (Direction.UP, Direction.DOWN)
        return (Direction.LEFT, Direction.RIGHT)

    def apply(self, position: Position) -> Position:
        """Return the position directly next to the given one in this direction."""
        return Position(position.row + self.d_row, position.col + self.d_col)


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True)
class Position:
    """A cell in an unbounded 2D plane."""

    row: int
    col: int


class TileKind(Enum):
    """Class of a map symbol, as seen by the walker."""

    BLANK = "blank"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    CORNER = "corner"
    WAYPOINT = "waypoint"
    START = "start"
    END = "end"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class TrackSymbols:
    """Symbols used to draw a map."""

    start: str = "@"
    end: str = "x"
    blank: str = " "
    horizontal: str = "-"
    vertical: str = "|"
    corner: str = "+"
    waypoints: str = string.ascii_uppercase

    def __post_init__(self) -> None:
        roles = {
            "start": self.start,
            "end": self.end,
            "blank": self.blank,
            "horizontal": self.horizontal,
            "vertical": self.vertical,
            "corner": self.corner,
        }
        bad_length = [name for name, symbol in roles.items() if len(symbol) != 1]
        if bad_length:
            raise ValueError(
                f"Track symbols must be single characters\n"
                f"  Offending roles: {', '.join(bad_length)}"
            )

        seen: dict[str, str] = {}
        for name, symbol in roles.items():
            if symbol in seen:
                raise ValueError(
                    f"Duplicate track symbol {symbol!r}\n"
                    f"  Used for both '{seen[symbol]}' and '{name}'"
                )
            if symbol in self.waypoints:
                raise ValueError(
                    f"Track symbol {symbol!r} for '{name}' is also a waypoint letter"
                )
            seen[symbol] = name

    def classify(self, symbol: str) -> TileKind:
        if symbol == self.blank:
            return TileKind.BLANK
        if symbol == self.horizontal:
            return TileKind.HORIZONTAL
        if symbol == self.vertical:
            return TileKind.VERTICAL
        if symbol == self.corner:
            return TileKind.CORNER
        if symbol == self.end:
            return TileKind.END
        if symbol == self.start:
            return TileKind.START
        if len(symbol) == 1 and symbol in self.waypoints:
            return TileKind.WAYPOINT
        return TileKind.UNRECOGNIZED


DEFAULT_SYMBOLS = TrackSymbols()


# =============================================================================
# Map Definition Types
# =============================================================================


class MarkerError(ValueError):
    """A marker that must occur exactly once does not."""

    def __init__(self, message: str, symbol: str) -> None:
        super().__init__(message)
        self.symbol = symbol


class MissingMarkerError(MarkerError):
    def __init__(self, symbol: str) -> None:
        super().__init__(f"Map is missing the {symbol!r} marker", symbol)


class AmbiguousMarkerError(MarkerError):
    def __init__(self, symbol: str, positions: list[Position]) -> None:
        found = ", ".join(f"({p.row}, {p.col})" for p in positions)
        super().__init__(
            f"Map has {len(positions)} {symbol!r} markers, expected exactly one\n"
            f"  Found at: {found}",
            symbol,
        )
        self.positions = positions


@dataclass(frozen=True)
class TrackMap:
    """An immutable map of track symbols. Rows may differ in length."""

    rows: tuple[str, ...]
    symbols: TrackSymbols = field(default=DEFAULT_SYMBOLS)

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return max((len(row) for row in self.rows), default=0)

    def tile_at(self, row: int, col: int) -> str:
        """Symbol at (row, col); blank for anything outside the drawn map."""
        if 0 <= row < len(self.rows):
            line = self.rows[row]
            if 0 <= col < len(line):
                return line[col]
        return self.symbols.blank

    def __getitem__(self, position: Position) -> str:
        return self.tile_at(position.row, position.col)

    def kind_at(self, position: Position) -> TileKind:
        return self.symbols.classify(self[position])

    def positions_of(self, symbol: str) -> list[Position]:
        """All positions holding the symbol, in reading order."""
        return [
            Position(r, c)
            for r, line in enumerate(self.rows)
            for c, char in enumerate(line)
            if char == symbol
        ]

    @property
    def start_position(self) -> Position:
        return find_unique_marker(self, self.symbols.start)


def find_unique_marker(track_map: TrackMap, symbol: str) -> Position:
    """
    Find the single occurrence of a marker symbol on the map.

    Args:
        track_map: The map to scan
        symbol: The marker to look for

    Returns:
        Position of the marker

    Raises:
        MissingMarkerError: The symbol does not occur
        AmbiguousMarkerError: The symbol occurs more than once
    """
    positions = track_map.positions_of(symbol)
    if not positions:
        raise MissingMarkerError(symbol)
    if len(positions) > 1:
        raise AmbiguousMarkerError(symbol, positions)
    return positions[0]
