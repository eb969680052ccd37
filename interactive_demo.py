"""
Interactive demo for the track solver.
Solve a map, then step along the walk with keyboard commands.
"""

from __future__ import annotations

import logging
import sys

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import render_map
from demo import describe_failure, read_map
from track_path import Path
from track_types import MarkerError, TrackMap
from tracksolver import Walk, extract_letters, extract_tiles, walk_map


class InteractiveWalkViewer:
    """Step through a solved walk one tile at a time."""

    def __init__(self, track_map: TrackMap, path: Path) -> None:
        self.track_map = track_map
        self.path = path
        self.step_index = 0
        self.console = Console()
        self.status_message = "Ready"

    @property
    def walked(self) -> Path:
        return self.path[: self.step_index + 1]

    def generate_display(self) -> Panel:
        """Generate the current display with map and status."""
        head = self.path[self.step_index]
        walked = self.walked

        status = Text()
        status.append("Step: ", style="bold")
        status.append(f"{self.step_index} / {len(self.path) - 1}\n")
        status.append("Position: ", style="bold")
        status.append(f"row {head.row}, column {head.col} ({self.track_map[head]!r})\n")
        status.append("Letters so far: ", style="bold")
        status.append(f"{extract_letters(self.track_map, walked)}\n")
        status.append("Tiles so far: ", style="bold")
        status.append(f"{extract_tiles(self.track_map, walked)}\n\n")

        map_text = render_map(self.track_map, walked, head=head)
        status.append(Text.from_ansi(map_text))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  N / D - Step forward\n")
        status.append("  P / A - Step back\n")
        status.append("  E     - Jump to end\n")
        status.append("  R     - Reset to start\n")
        status.append("  Q     - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="Track Solver Walk Viewer", border_style="green", width=80)

    def advance(self, steps: int) -> None:
        """Move along the walk, clamped to its ends."""
        target = min(max(self.step_index + steps, 0), len(self.path) - 1)
        if target == self.step_index:
            self.status_message = "At the end of the walk" if steps > 0 else "At the start"
        else:
            self.step_index = target
            self.status_message = f"Moved to step {self.step_index}"

    def handle_key(self, key: str) -> bool:
        """Apply one key press. Returns False when the viewer should quit."""
        match key.lower():
            case "q":
                self.status_message = "Quitting..."
                return False
            case "n" | "d":
                self.advance(1)
            case "p" | "a":
                self.advance(-1)
            case "e":
                self.advance(len(self.path))
            case "r":
                self.step_index = 0
                self.status_message = "Back at the start"
            case _:
                self.status_message = f"Unknown key: {key!r}"
        return True

    def run(self) -> None:
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())
                    if not self.handle_key(readchar.readkey()):
                        live.update(self.generate_display())
                        break
            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


def main(source: str | None) -> int:
    track_map = read_map(source)
    try:
        verdict = walk_map(track_map)
    except MarkerError as error:
        print(f"No solution: {error}")
        return 1
    if not isinstance(verdict, Walk):
        print(f"No solution: {describe_failure(verdict)}")
        return 1

    InteractiveWalkViewer(track_map, verdict.path).run()
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")
    sys.exit(main(sys.argv[1] if len(sys.argv) > 1 else "goonies"))
