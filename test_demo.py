"""Tests for the command-line demo and the walk viewer."""

import io

import pytest

from demo import LAYOUTS, describe_failure, main, read_map
from interactive_demo import InteractiveWalkViewer
from track_types import Position
from tracksolver import Ambiguous, DeadEnd, FailureReason, Walk, walk_map


class TestDemoMain:
    """Tests for demo.main()."""

    def test_layout_solved(self, capsys) -> None:
        assert main(["--layout", "basic", "--no-color"]) == 0
        out = capsys.readouterr().out
        assert "Letters: ACB" in out
        assert "Path as characters: @---A---+|C|+---+|+-B-x" in out

    def test_layout_with_visits(self, capsys) -> None:
        assert main(["--layout", "intersections", "--no-color", "--visits"]) == 0
        out = capsys.readouterr().out
        assert "11211111" in out
        assert "Letters: ABCD" in out

    def test_layout_without_solution(self, capsys) -> None:
        assert main(["--layout", "t_fork", "--no-color"]) == 1
        out = capsys.readouterr().out
        assert "No solution: fork at row 2, column 7" in out

    def test_fake_turn_reason(self, capsys) -> None:
        assert main(["--layout", "fake_turn", "--no-color"]) == 1
        assert "straight_through_corner at row 0, column 4" in capsys.readouterr().out

    def test_file(self, tmp_path, capsys) -> None:
        map_file = tmp_path / "map.txt"
        map_file.write_text("@-A-+\n    |\nx-B-+\n", encoding="utf-8")
        assert main([str(map_file), "--no-color"]) == 0
        out = capsys.readouterr().out
        assert "Letters: AB" in out
        assert "Path as characters: @-A-+|+-B-x" in out

    def test_missing_start(self, tmp_path, capsys) -> None:
        map_file = tmp_path / "map.txt"
        map_file.write_text("--A--x\n", encoding="utf-8")
        assert main([str(map_file), "--no-color"]) == 1
        assert "missing the '@' marker" in capsys.readouterr().out

    def test_stdin(self, monkeypatch, capsys) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("@--x\n"))
        assert main(["--no-color"]) == 0
        assert "Path as characters: @--x" in capsys.readouterr().out

    def test_unreadable_file(self, tmp_path, capsys) -> None:
        assert main([str(tmp_path / "nope.txt")]) == 2
        assert "Cannot read map" in capsys.readouterr().out

    @pytest.mark.parametrize("argv", [["--layout", "nope"], ["--bogus"], ["a.txt", "b.txt"]])
    def test_bad_arguments(self, argv, capsys) -> None:
        assert main(argv) == 2

    def test_help(self, capsys) -> None:
        assert main(["--help"]) == 0
        assert capsys.readouterr().out.startswith("usage:")

    def test_every_bundled_layout_parses(self) -> None:
        for name in LAYOUTS:
            assert read_map(name).start_position is not None


class TestDescribeFailure:
    """Tests for failure messages."""

    def test_dead_end(self) -> None:
        assert describe_failure(DeadEnd()) == "no track leads from the start"

    def test_ambiguous_with_position(self) -> None:
        message = describe_failure(Ambiguous(FailureReason.FORK, Position(3, 4)))
        assert message == "fork at row 3, column 4"

    def test_ambiguous_without_position(self) -> None:
        assert describe_failure(Ambiguous(FailureReason.FORK)) == "fork"


class TestInteractiveWalkViewer:
    """Tests for stepping through a walk without the live display."""

    def make_viewer(self) -> InteractiveWalkViewer:
        track_map = read_map("basic")
        verdict = walk_map(track_map)
        assert isinstance(verdict, Walk)
        return InteractiveWalkViewer(track_map, verdict.path)

    def test_step_forward_and_back(self) -> None:
        viewer = self.make_viewer()
        assert viewer.handle_key("n")
        assert viewer.handle_key("D")
        assert viewer.step_index == 2
        assert viewer.handle_key("p")
        assert viewer.step_index == 1
        assert viewer.walked == viewer.path[:2]

    def test_clamped_at_both_ends(self) -> None:
        viewer = self.make_viewer()
        viewer.handle_key("a")
        assert viewer.step_index == 0
        assert viewer.status_message == "At the start"
        viewer.handle_key("e")
        assert viewer.step_index == len(viewer.path) - 1
        viewer.handle_key("n")
        assert viewer.status_message == "At the end of the walk"

    def test_reset_and_quit(self) -> None:
        viewer = self.make_viewer()
        viewer.handle_key("e")
        viewer.handle_key("r")
        assert viewer.step_index == 0
        assert not viewer.handle_key("q")

    def test_unknown_key(self) -> None:
        viewer = self.make_viewer()
        assert viewer.handle_key("z")
        assert viewer.status_message == "Unknown key: 'z'"

    def test_display_shows_progress(self) -> None:
        viewer = self.make_viewer()
        viewer.handle_key("e")
        panel = viewer.generate_display()
        text = panel.renderable.plain
        assert "Letters so far: ACB" in text
        assert "Tiles so far: @---A---+|C|+---+|+-B-x" in text
