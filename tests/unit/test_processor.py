"""Tests for pipeline orchestration."""

from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from svgextruder.config import ExtruderSettings, FlattenConfig, ProcessingConfig
from svgextruder.core.processor import PathPipeline, PathProcessor, process_path
from svgextruder.domain import (
    DegradedFlatten,
    DetailLevel,
    PathResult,
    Point2D,
    SvgDocument,
    SvgPathElement,
)
from svgextruder.exceptions import InvalidBudgetError, InvalidResolutionError

SQUARE = "M0,0 L10,0 L10,10 L0,10 Z"
BLOB = "M0,0 C10,-5 20,5 30,0 S40,20 30,30 Q15,40 0,30 T0,0 Z"
TWO_SUBPATHS = "M0 0 H10 V10 H0 Z M20 20 H30 V30 H20 Z"


@pytest.fixture
def settings() -> ExtruderSettings:
    """Create test settings with a small flatten resolution."""
    return ExtruderSettings(
        flatten=FlattenConfig(default_resolution=8),
        processing=ProcessingConfig(max_workers=1),
    )


@pytest.fixture
def pipeline(settings: ExtruderSettings) -> PathPipeline:
    """Create a pipeline instance."""
    return PathPipeline(settings)


@pytest.fixture
def processor(settings: ExtruderSettings) -> PathProcessor:
    """Create a processor with a mock logger."""
    return PathProcessor(settings, logger=Mock())


class TestPathPipeline:
    """Tests for the single-path pipeline."""

    def test_run_square(self, pipeline: PathPipeline) -> None:
        """Test a plain square runs through every stage."""
        result = pipeline.run(SQUARE)

        assert result.ok
        assert result.element_id == "path-0"
        assert len(result.outlines) == 1
        assert result.analyses[0].point_count == 4
        assert result.settings[0] == result.ladders[0][-1].settings
        assert [r.level for r in result.ladders[0]] == list(DetailLevel)

    def test_run_uses_given_resolution(self, pipeline: PathPipeline) -> None:
        """Test the build resolution controls curve sampling."""
        coarse = pipeline.run("M0,0 L10,0 Q20,5 10,10 Z", resolution=4)
        fine = pipeline.run("M0,0 L10,0 Q20,5 10,10 Z", resolution=16)
        assert coarse.analyses[0].point_count == 6
        assert fine.analyses[0].point_count == 18

    def test_run_multiple_subpaths(self, pipeline: PathPipeline) -> None:
        """Test every subpath gets its own analysis and settings."""
        result = pipeline.run(TWO_SUBPATHS)
        assert len(result.subpaths) == 2
        assert len(result.analyses) == 2
        assert len(result.settings) == 2
        assert len(result.ladders) == 2

    def test_parse_failure_captured(self, pipeline: PathPipeline) -> None:
        """Test parse errors are reported with the source text."""
        result = pipeline.run("M0 0 B10 10", index=3, element_id="bad")

        assert not result.ok
        assert result.index == 3
        assert result.element_id == "bad"
        assert result.source == "M0 0 B10 10"
        assert result.error_type == "UnsupportedCommandError"
        assert "M0 0 B10 10" in result.error

    def test_degenerate_path_fails(self, pipeline: PathPipeline) -> None:
        """Test a path with no valid outline is a failure."""
        result = pipeline.run("M0 0 L10 0 Z")
        assert not result.ok
        assert result.error_type == "NoValidOutlinesError"

    def test_degraded_arcs_recorded(self, pipeline: PathPipeline) -> None:
        """Test degraded arcs are attached to the result."""
        result = pipeline.run("M0 0 L10 0 A0 0 0 0 1 10 10 Z")
        assert result.ok
        assert len(result.degraded) == 1

    def test_underflowing_arc_radius_degrades(self, pipeline: PathPipeline) -> None:
        """Test a vanishingly small arc radius degrades instead of failing."""
        result = pipeline.run("M0,0 A1e-200,1e-200 0 0 1 10,0 L10,10 Z")
        assert result.ok
        assert len(result.degraded) == 1
        assert result.subpaths[0].outline.points[:2] == (Point2D(0, 0), Point2D(10, 0))

    def test_ladders_optional(self) -> None:
        """Test ladders are skipped when disabled."""
        pipeline = PathPipeline(ExtruderSettings(processing=ProcessingConfig(build_ladders=False)))
        result = pipeline.run(SQUARE)
        assert result.ladders == ()
        assert len(result.settings) == 1

    def test_invalid_budget(self, pipeline: PathPipeline) -> None:
        """Test a non-positive budget is rejected."""
        with pytest.raises(InvalidBudgetError):
            pipeline.run(SQUARE, vertex_budget=0)

    def test_to_jobs_uses_planned_settings(self, pipeline: PathPipeline) -> None:
        """Test jobs rebuild each outline at its planned resolution."""
        result = pipeline.run(BLOB)
        jobs = pipeline.to_jobs(result)

        assert len(jobs) == 1
        settings = result.settings[0]
        assert jobs[0].detail_settings == settings
        # Four curves at the planned resolution; the last sample is the start point
        assert len(jobs[0].outlines[0]) == 4 * settings.curve_resolution

    def test_to_jobs_for_level(self, pipeline: PathPipeline) -> None:
        """Test jobs for a ladder rung."""
        result = pipeline.run(BLOB)
        jobs = pipeline.to_jobs(result, DetailLevel.LOW)
        assert jobs[0].detail_settings == result.rung(0, DetailLevel.LOW).settings

    def test_to_jobs_without_ladders(self) -> None:
        """Test a rung is computed on demand when ladders were skipped."""
        pipeline = PathPipeline(ExtruderSettings(processing=ProcessingConfig(build_ladders=False)))
        result = pipeline.run(BLOB)
        jobs = pipeline.to_jobs(result, DetailLevel.HIGH)
        base = pipeline.planner.optimal_settings(result.analyses[0])
        assert jobs[0].detail_settings.curve_resolution == 2 * base.curve_resolution

    def test_to_jobs_reports_degraded_arcs(self, pipeline: PathPipeline) -> None:
        """Test arcs degraded while rebuilding reach the callback."""
        result = pipeline.run("M0 0 L10 0 A0 0 0 0 1 10 10 Z")
        events: list[DegradedFlatten] = []
        jobs = pipeline.to_jobs(result, DetailLevel.ULTRA, on_degraded=events.append)

        assert len(jobs) == 1
        assert len(events) == 1
        assert events[0].end == Point2D(10, 10)

    def test_to_jobs_rejects_failure(self, pipeline: PathPipeline) -> None:
        """Test failed results cannot be extruded."""
        with pytest.raises(ValueError):
            pipeline.to_jobs(pipeline.run("M0 0 B1 1"))

    def test_deterministic(self, pipeline: PathPipeline) -> None:
        """Test identical input gives identical results apart from timing."""
        first = pipeline.run(BLOB)
        second = pipeline.run(BLOB)
        assert first.subpaths == second.subpaths
        assert first.analyses == second.analyses
        assert first.settings == second.settings
        assert first.ladders == second.ladders


class TestProcessPath:
    """Tests for process_path function."""

    def test_process_path_success(self, settings: ExtruderSettings) -> None:
        """Test a successful path serializes fully."""
        result = process_path(SQUARE, settings.model_dump(), index=1, element_id="sq")

        assert result["error"] is None
        assert result["element_id"] == "sq"
        restored = PathResult.from_dict(result)
        assert restored.ok
        assert len(restored.outlines) == 1

    def test_process_path_parse_error(self, settings: ExtruderSettings) -> None:
        """Test parse failures come back as data."""
        result = process_path("M0 0 C1 2", settings.model_dump())
        assert result["error_type"] == "MalformedArgumentsError"
        assert "traceback" not in result

    def test_process_path_handles_unexpected_error(self) -> None:
        """Test invalid settings are caught with a traceback."""
        result = process_path(SQUARE, {"flatten": {"default_resolution": -1}}, index=4)

        assert result["error"]
        assert result["element_id"] == "path-4"
        assert "traceback" in result
        assert not PathResult.from_dict(result).ok


class TestPathProcessor:
    """Tests for PathProcessor class."""

    def test_process_paths_in_order(self, processor: PathProcessor) -> None:
        """Test results come back in input order."""
        results = processor.process_paths([SQUARE, BLOB, TWO_SUBPATHS])

        assert [r.index for r in results] == [0, 1, 2]
        assert [r.element_id for r in results] == ["path-0", "path-1", "path-2"]
        assert all(r.ok for r in results)

    def test_partial_failure(self, processor: PathProcessor) -> None:
        """Test one bad path does not stop its siblings."""
        results = processor.process_paths([SQUARE, "M0 0 B1 1", BLOB])

        assert [r.ok for r in results] == [True, False, True]
        assert processor.stats.processed_count == 2
        assert processor.stats.error_count == 1
        assert processor.stats.errors[0][0] == "path-1"

    def test_elements_keep_ids(self, processor: PathProcessor) -> None:
        """Test path elements pass their ids through."""
        elements = [SvgPathElement(index=0, element_id="logo", d=SQUARE)]
        results = processor.process_paths(elements)
        assert results[0].element_id == "logo"

    def test_stats(self, processor: PathProcessor) -> None:
        """Test statistics accumulate outlines and degraded arcs."""
        processor.process_paths([TWO_SUBPATHS, "M0 0 L10 0 A0 0 0 0 1 10 10 Z"])

        stats = processor.stats
        assert stats.processed_count == 2
        assert stats.outline_count == 3
        assert stats.degraded_count == 1
        assert stats.avg_path_time_ms is not None
        assert stats.duration_seconds >= 0.0

    def test_progress_callback(self, processor: PathProcessor) -> None:
        """Test the progress callback sees every path."""
        calls = []
        processor.process_paths(
            [SQUARE, "M0 0 B1 1"],
            progress_callback=lambda done, total, path_id, ok: calls.append((done, total, path_id, ok)),
        )
        assert calls == [(1, 2, "path-0", True), (2, 2, "path-1", False)]

    def test_invalid_arguments_rejected_up_front(self, processor: PathProcessor) -> None:
        """Test bad resolution or budget raise before any work."""
        with pytest.raises(InvalidResolutionError):
            processor.process_paths([SQUARE], resolution=0)
        with pytest.raises(InvalidBudgetError):
            processor.process_paths([SQUARE], vertex_budget=0)
        assert processor.stats.processed_count == 0

    def test_empty_batch(self, processor: PathProcessor) -> None:
        """Test an empty batch returns nothing."""
        assert processor.process_paths([]) == []

    def test_process_document(self, processor: PathProcessor) -> None:
        """Test a document's paths are processed with its viewBox."""
        document = SvgDocument(
            paths=[
                SvgPathElement(index=0, element_id="a", d=SQUARE),
                SvgPathElement(index=1, element_id="b", d="M0 0 B1 1"),
            ]
        )
        result = processor.process_document(document, name="doc.svg")

        assert result.name == "doc.svg"
        assert result.view_box == document.view_box
        assert result.ok_count == 1
        assert [p.element_id for p in result.failed] == ["b"]
        assert not result.all_failed

    def test_process_files(self, processor: PathProcessor, tmp_path: Path) -> None:
        """Test several files share one run and are regrouped per file."""
        first = tmp_path / "first.svg"
        first.write_text(f'<svg><path d="{SQUARE}"/><path d="{BLOB}"/></svg>', encoding="utf-8")
        second = tmp_path / "second.svg"
        second.write_text(f'<svg viewBox="0 0 10 10"><path id="x" d="{SQUARE}"/></svg>', encoding="utf-8")
        missing = tmp_path / "missing.svg"

        documents = processor.process_files([first, missing, second])

        assert [d.name for d in documents] == [str(first), str(missing), str(second)]
        assert [p.index for p in documents[0].paths] == [0, 1]
        assert documents[1].error is not None
        assert documents[1].all_failed
        assert documents[2].paths[0].index == 0
        assert documents[2].paths[0].element_id == "x"
        assert documents[2].view_box.width == 10

    def test_default_logger(self, settings: ExtruderSettings) -> None:
        """Test a processor works without an explicit logger."""
        with patch("svgextruder.core.processor.structlog.get_logger") as mock_get_logger:
            mock_get_logger.return_value = Mock()
            processor = PathProcessor(settings)
            mock_get_logger.assert_called_once_with("svgextruder")
        assert processor.process_paths([SQUARE])[0].ok
