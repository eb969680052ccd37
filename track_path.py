"""
Paths walked across a track map.

A path is a plain tuple of positions, starting at the start marker. Every
operation returns a new tuple, so sibling probes never share state.
A position may appear in a well-formed path at most twice: once on the
first pass and once when the track crosses back under itself.
"""

from __future__ import annotations

from track_types import Direction, Position

Path = tuple[Position, ...]


def start_path(position: Position) -> Path:
    return (position,)


def tip(path: Path) -> Position:
    """The current (last) position of the path."""
    return path[-1]


def extend(path: Path, direction: Direction, steps: int = 1) -> Path:
    """
    Extend the path by moving from its tip in the given direction.

    Args:
        path: Path to extend (not modified)
        direction: Direction of every step
        steps: Number of tiles to move

    Returns:
        New path with `steps` more positions

    Raises:
        ValueError: If steps is negative
    """
    if steps < 0:
        raise ValueError(f"Path cannot be extended by a negative number of steps: {steps}")

    added: list[Position] = []
    current = tip(path)
    for _ in range(steps):
        current = direction.apply(current)
        added.append(current)
    return path + tuple(added)


def visit_count(path: Path, position: Position | None = None) -> int:
    """How many times the position (default: the tip) appears in the path."""
    if position is None:
        position = tip(path)
    return path.count(position)


def is_tip_revisited(path: Path) -> bool:
    """True if the tip was already visited earlier in the path."""
    return visit_count(path) > 1
