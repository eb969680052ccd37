#!/usr/bin/env python3
"""
Command-line demo for the track solver.

Usage:
    python demo.py FILE            solve the diagram in FILE
    python demo.py --layout NAME   solve one of the bundled LAYOUTS
    python demo.py                 read the diagram from stdin

Options:
    --visits     also print visit counts per tile
    --no-color   plain output
    --verbose    debug logging of every walker decision
"""

from __future__ import annotations

import logging
import sys

from ascii_render import render_map, render_visit_counts
from track_parser import load_track_map, parse_track_map
from track_types import MarkerError, TrackMap
from tracksolver import (
    Ambiguous,
    DeadEnd,
    Walk,
    extract_letters,
    extract_tiles,
    walk_map,
)

LAYOUTS = dict(
    basic="""
        @---A---+
                |
        x-B-+   C
            |   |
            +---+
    """,
    intersections="""
        @
        | +-C--+
        A |    |
        +---B--+
          |      x
          |      |
          +---D--+
    """,
    letter_turns="""
        @---A---+
                |
        x-B-+   |
            |   |
            +---C
    """,
    goonies="""
            +-O-N-+
            |     |
            |   +-I-+
        @-G-O-+ | | |
            | | +-+ E
            +-+     S
                    |
                    x
    """,
    compact="""
         +-L-+
         |  +A-+
        @B+ ++ H
         ++    x
    """,
    t_fork="""
             x-B
               |
        @--A---+
               |
          x+   C
           |   |
           +---+
    """,
    fake_turn="""
        @-A-+-B-x
    """,
)

USAGE = "usage: demo.py [FILE | --layout NAME] [--visits] [--no-color] [--verbose]"


def read_map(source: str | None) -> TrackMap:
    """Load a map from a bundled layout name, a file path, or stdin (None)."""
    if source is None:
        return parse_track_map(sys.stdin.read().rstrip("\n"))
    if source in LAYOUTS:
        return parse_track_map(LAYOUTS[source], dedent=True)
    return load_track_map(source)


def describe_failure(verdict: DeadEnd | Ambiguous) -> str:
    match verdict:
        case Ambiguous(reason=reason, position=None):
            return f"{reason.value}"
        case Ambiguous(reason=reason, position=position):
            return f"{reason.value} at row {position.row}, column {position.col}"
        case _:
            return "no track leads from the start"


def main(argv: list[str]) -> int:
    """Run the demo. Returns the process exit status."""
    color = True
    show_visits = False
    verbose = False
    source: str | None = None

    args = list(argv)
    while args:
        arg = args.pop(0)
        if arg == "--no-color":
            color = False
        elif arg == "--visits":
            show_visits = True
        elif arg == "--verbose":
            verbose = True
        elif arg == "--layout":
            if not args or args[0] not in LAYOUTS:
                print(f"Unknown layout. Available: {', '.join(sorted(LAYOUTS))}")
                return 2
            source = args.pop(0)
        elif arg in ("-h", "--help"):
            print(USAGE)
            return 0
        elif arg.startswith("-") or source is not None:
            print(USAGE)
            return 2
        else:
            source = arg

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        track_map = read_map(source)
    except OSError as error:
        print(f"Cannot read map: {error}")
        return 2

    try:
        verdict = walk_map(track_map)
    except (MarkerError, RecursionError) as error:
        print(render_map(track_map, color=color))
        print()
        print(f"No solution: {error}")
        return 1

    if not isinstance(verdict, Walk):
        print(render_map(track_map, color=color))
        print()
        print(f"No solution: {describe_failure(verdict)}")
        return 1

    path = verdict.path
    print(render_map(track_map, path, color=color))
    print()
    if show_visits:
        print(render_visit_counts(track_map, path))
        print()
    print(f"Letters: {extract_letters(track_map, path)}")
    print(f"Path as characters: {extract_tiles(track_map, path)}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
