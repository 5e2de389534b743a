"""Tests for shape analysis."""

import pytest

from svgextruder.core.analyzer import ShapeAnalyzer, count_curve_commands
from svgextruder.core.builder import OutlineBuilder
from svgextruder.core.parser import parse_path
from svgextruder.domain import Outline, Point2D


@pytest.fixture
def analyzer() -> ShapeAnalyzer:
    """Create an analyzer instance."""
    return ShapeAnalyzer()


def _curvy_path(curves: int) -> str:
    """A closed path with the given number of cubic segments."""
    segments = " ".join(f"C{i * 10 + 3},5 {i * 10 + 7},5 {(i + 1) * 10},0" for i in range(curves))
    return f"M0,0 {segments} L{curves * 10},-20 L0,-20 Z"


class TestShapeAnalyzer:
    """Tests for ShapeAnalyzer."""

    def test_square(self, analyzer: ShapeAnalyzer) -> None:
        """Test analysis of a plain polygon."""
        outline = Outline(points=(Point2D(0, 0), Point2D(10, 0), Point2D(10, 20), Point2D(0, 20)))
        analysis = analyzer.analyze(outline, [])

        assert analysis.bounding_box_min == Point2D(0, 0)
        assert analysis.bounding_box_max == Point2D(10, 20)
        assert analysis.point_count == 4
        assert analysis.curve_command_count == 0
        assert analysis.complexity_score == 4.0

    def test_curve_weighting(self, analyzer: ShapeAnalyzer) -> None:
        """Test each curve adds ten to the score."""
        subpath = OutlineBuilder().build_subpaths(parse_path(_curvy_path(3)), resolution=4)[0]
        analysis = analyzer.analyze_subpath(subpath)

        assert analysis.curve_command_count == 3
        assert analysis.complexity_score == analysis.point_count + 30

    def test_custom_curve_weight(self) -> None:
        """Test the curve weight is configurable."""
        subpath = OutlineBuilder().build_subpaths(parse_path(_curvy_path(2)), resolution=4)[0]
        analysis = ShapeAnalyzer(curve_weight=3).analyze_subpath(subpath)
        assert analysis.complexity_score == analysis.point_count + 6

    def test_complexity_monotonic_in_curves(self, analyzer: ShapeAnalyzer) -> None:
        """Test more curves never lowers the score."""
        builder = OutlineBuilder()
        scores = []
        for curves in range(1, 12):
            subpath = builder.build_subpaths(parse_path(_curvy_path(curves)), resolution=8)[0]
            scores.append(analyzer.analyze_subpath(subpath).complexity_score)
        assert scores == sorted(scores)
        assert len(set(scores)) == len(scores)

    def test_bounding_box_includes_curve_samples(self, analyzer: ShapeAnalyzer) -> None:
        """Test the bounding box is taken over flattened points."""
        subpath = OutlineBuilder().build_subpaths(parse_path("M0,0 Q5,10 10,0 Z"), resolution=2)[0]
        analysis = analyzer.analyze_subpath(subpath)
        assert analysis.bounding_box_max.y == 5.0

    def test_count_curve_commands(self) -> None:
        """Test curve counting over mixed commands."""
        commands = parse_path("M0 0 L1 1 C1 2 3 4 5 6 Q1 1 2 2 A1 1 0 0 1 4 4 H9 Z")
        assert count_curve_commands(commands) == 3
