"""Pipeline orchestration and parallel batch processing.

This module wires parser, builder, analyzer and planner into a per-path
pipeline and fans batches of paths out across worker processes using
ProcessPoolExecutor.

Key components:
- PathPipeline: In-process parse -> build -> analyze -> plan for one path
- process_path: Top-level picklable function for parallel execution
- PathProcessor: Batch orchestrator for paths, documents and files

A path that fails to parse is reported in its PathResult with the source
text attached; it never aborts its siblings. Results always come back in
input order regardless of completion order.
"""

import time
import traceback
from collections.abc import Callable, Sequence
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import replace
from pathlib import Path
from typing import Any

import structlog

from svgextruder.config import ExtruderSettings, get_default_settings
from svgextruder.core.analyzer import ShapeAnalyzer
from svgextruder.core.builder import OutlineBuilder
from svgextruder.core.flattener import DegradedCallback
from svgextruder.core.parser import PathCommandParser
from svgextruder.core.planner import DetailLevelPlanner
from svgextruder.domain import (
    DegradedFlatten,
    DetailLevel,
    DocumentResult,
    ExtrusionJob,
    Outline,
    PathResult,
    SvgDocument,
    SvgPathElement,
    Subpath,
)
from svgextruder.exceptions import (
    InvalidBudgetError,
    InvalidResolutionError,
    ParseError,
    PathProcessingError,
    SvgLoadError,
)
from svgextruder.io import SvgReader
from svgextruder.utils import ProcessingLogger, ProcessingStats

ProgressCallback = Callable[[int, int, str, bool], None]


class PathPipeline:
    """Runs the full path-to-outline pipeline for single paths.

    Stateless apart from its settings; safe to create inside worker
    processes.

    Example:
        pipeline = PathPipeline()
        result = pipeline.run("M0,0 C10,0 10,10 0,10 Z")
        jobs = pipeline.to_jobs(result, DetailLevel.HIGH)
    """

    def __init__(self, settings: ExtruderSettings | None = None) -> None:
        self.settings = settings or get_default_settings()
        self.parser = PathCommandParser()
        self.analyzer = ShapeAnalyzer(curve_weight=self.settings.detail.curve_weight)
        self.planner = DetailLevelPlanner(self.settings.detail)

    def run(
        self,
        source: str,
        index: int = 0,
        element_id: str | None = None,
        resolution: int | None = None,
        vertex_budget: int | None = None,
    ) -> PathResult:
        """Process one path.

        Args:
            source: Raw path ``d`` string
            index: Position of the path in its batch
            element_id: Element id (defaults to ``path-{index}``)
            resolution: Curve resolution for building (config default if None)
            vertex_budget: Budget for per-outline planning (config default if None)

        Returns:
            PathResult; parse failures are captured in ``error``

        Raises:
            InvalidResolutionError: If resolution is below 1
            InvalidBudgetError: If vertex_budget is below 1
        """
        start_time = time.time()
        element_id = element_id or f"path-{index}"
        if resolution is None:
            resolution = self.settings.flatten.default_resolution
        degraded: list[DegradedFlatten] = []
        builder = OutlineBuilder(on_degraded=degraded.append)

        try:
            commands = self.parser.parse(source)
            subpaths = builder.build_required(commands, resolution)
        except ParseError as e:
            error = PathProcessingError(source, e)
            return PathResult(
                index=index,
                element_id=element_id,
                source=source,
                degraded=tuple(degraded),
                error=str(error),
                error_type=type(e).__name__,
                duration_ms=(time.time() - start_time) * 1000,
            )

        analyses = tuple(self.analyzer.analyze_subpath(s) for s in subpaths)
        settings = tuple(self.planner.plan(a, vertex_budget) for a in analyses)
        ladders: tuple = ()
        if self.settings.processing.build_ladders:
            ladders = tuple(tuple(self.planner.plan_ladder(a)) for a in analyses)

        return PathResult(
            index=index,
            element_id=element_id,
            source=source,
            subpaths=tuple(subpaths),
            analyses=analyses,
            settings=settings,
            ladders=ladders,
            degraded=tuple(degraded),
            duration_ms=(time.time() - start_time) * 1000,
        )

    def refine(
        self,
        subpath: Subpath,
        resolution: int,
        on_degraded: DegradedCallback | None = None,
    ) -> Outline:
        """Rebuild one subpath's outline at a new curve resolution.

        The subpath's own commands are replayed, so a subpath always
        rebuilds into exactly one outline. Arcs that fall back to a line
        at the new resolution are reported to ``on_degraded``.
        """
        rebuilt = OutlineBuilder(on_degraded=on_degraded).build(subpath.commands, resolution)
        return rebuilt[0] if rebuilt else subpath.outline

    def to_jobs(
        self,
        result: PathResult,
        level: DetailLevel | None = None,
        on_degraded: DegradedCallback | None = None,
    ) -> list[ExtrusionJob]:
        """Extrusion jobs for a successful result, one per outline.

        Each outline is rebuilt at the resolution of its chosen settings:
        the budget-planned settings, or the given ladder rung. Degraded
        arcs met while rebuilding are reported to ``on_degraded``.

        Raises:
            ValueError: If the result is a failure
        """
        if not result.ok:
            raise ValueError(f"Cannot extrude failed path {result.element_id}: {result.error}")

        jobs: list[ExtrusionJob] = []
        for i, subpath in enumerate(result.subpaths):
            if level is None:
                chosen = result.settings[i]
            elif result.ladders:
                chosen = result.rung(i, level).settings
            else:
                base = self.planner.optimal_settings(result.analyses[i])
                chosen = self.planner.settings_for_level(base, level)
            outline = self.refine(subpath, chosen.curve_resolution, on_degraded)
            jobs.append(ExtrusionJob(outlines=(outline,), detail_settings=chosen))
        return jobs


def process_path(
    source: str,
    config_dict: dict[str, Any],
    index: int = 0,
    element_id: str | None = None,
    resolution: int | None = None,
    vertex_budget: int | None = None,
) -> dict[str, Any]:
    """Process a single path.

    Top-level function designed to be picklable for use with
    ProcessPoolExecutor. Rebuilds settings, runs the pipeline and returns
    the serialized result.

    Args:
        source: Raw path ``d`` string
        config_dict: Serialized ExtruderSettings
        index: Position of the path in its batch
        element_id: Element id
        resolution: Curve resolution for building
        vertex_budget: Budget for per-outline planning

    Returns:
        Serialized PathResult; unexpected failures also carry a traceback
    """
    start_time = time.time()

    try:
        settings = ExtruderSettings.model_validate(config_dict)
        pipeline = PathPipeline(settings)
        result = pipeline.run(
            source,
            index=index,
            element_id=element_id,
            resolution=resolution,
            vertex_budget=vertex_budget,
        )
        return result.to_dict()

    except Exception as e:
        return {
            "index": index,
            "element_id": element_id or f"path-{index}",
            "source": source,
            "error": str(e),
            "error_type": type(e).__name__,
            "traceback": traceback.format_exc(),
            "duration_ms": (time.time() - start_time) * 1000,
        }


class PathProcessor:
    """Orchestrates batch processing of SVG paths.

    Manages the complete workflow:
    1. Collect path data from strings, documents or files
    2. Process paths in parallel using worker processes
    3. Merge results back into input order
    4. Update statistics and log failures and degraded arcs

    Example:
        processor = PathProcessor(ExtruderSettings())
        results = processor.process_paths(["M0,0 L10,0 L10,10 Z"], max_workers=1)
    """

    def __init__(
        self,
        config: ExtruderSettings | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the processor.

        Args:
            config: Settings (defaults if None)
            logger: Logger to report through (module logger if None)
        """
        self.config = config or get_default_settings()
        self.logger = logger or structlog.get_logger("svgextruder")
        self.processing_logger = ProcessingLogger(self.logger)

    @property
    def stats(self) -> ProcessingStats:
        """Statistics accumulated across every call."""
        return self.processing_logger.stats

    def process_paths(
        self,
        paths: Sequence[str | SvgPathElement],
        resolution: int | None = None,
        vertex_budget: int | None = None,
        max_workers: int | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> list[PathResult]:
        """Process a batch of paths.

        Args:
            paths: Raw ``d`` strings or path elements
            resolution: Curve resolution (config default if None)
            vertex_budget: Per-outline vertex budget (config default if None)
            max_workers: Worker processes (config default if None, 1 = inline)
            progress_callback: Optional callback(completed, total, path_id, success)

        Returns:
            One PathResult per input, in input order
        """
        tasks: list[tuple[str, str]] = []
        for i, item in enumerate(paths):
            if isinstance(item, SvgPathElement):
                tasks.append((item.d, item.element_id))
            else:
                tasks.append((item, f"path-{i}"))

        return self._run(tasks, resolution, vertex_budget, max_workers, progress_callback)

    def process_document(
        self,
        document: SvgDocument,
        name: str = "<document>",
        resolution: int | None = None,
        vertex_budget: int | None = None,
        max_workers: int | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> DocumentResult:
        """Process every path element of a parsed document."""
        results = self.process_paths(
            document.paths,
            resolution=resolution,
            vertex_budget=vertex_budget,
            max_workers=max_workers,
            progress_callback=progress_callback,
        )
        return DocumentResult(name=name, view_box=document.view_box, paths=results)

    def process_files(
        self,
        svg_paths: Sequence[Path],
        resolution: int | None = None,
        vertex_budget: int | None = None,
        max_workers: int | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> list[DocumentResult]:
        """Process several SVG files with one shared worker pool.

        Paths from all files are fanned out together; results are regrouped
        per file in input order. A file that cannot be loaded yields a
        DocumentResult with ``error`` set and does not stop the others.
        """
        documents: list[DocumentResult] = []
        tasks: list[tuple[str, str]] = []
        owners: list[int] = []

        for file_idx, svg_path in enumerate(svg_paths):
            try:
                document = SvgReader(svg_path).load()
            except SvgLoadError as e:
                self.logger.error("SVG load failed", path=str(svg_path), error=e.reason)
                documents.append(DocumentResult(name=str(svg_path), error=str(e)))
                continue

            documents.append(DocumentResult(name=str(svg_path), view_box=document.view_box))
            for element in document.paths:
                tasks.append((element.d, element.element_id))
                owners.append(file_idx)

        results = self._run(tasks, resolution, vertex_budget, max_workers, progress_callback)

        for file_idx, result in zip(owners, results):
            documents[file_idx].paths.append(result)

        # Reindex each document's paths from zero
        for document in documents:
            document.paths = [replace(r, index=i) for i, r in enumerate(document.paths)]

        return documents

    def _run(
        self,
        tasks: list[tuple[str, str]],
        resolution: int | None,
        vertex_budget: int | None,
        max_workers: int | None,
        progress_callback: ProgressCallback | None,
    ) -> list[PathResult]:
        if resolution is not None and resolution < 1:
            raise InvalidResolutionError(resolution)
        if vertex_budget is not None and vertex_budget < 1:
            raise InvalidBudgetError(vertex_budget)

        stats = self.stats
        stats.start_time = stats.start_time or time.time()

        if max_workers is None:
            max_workers = self.config.processing.max_workers

        self.logger.info(
            "Starting path processing",
            path_count=len(tasks),
            max_workers=max_workers,
        )

        config_dict = self.config.model_dump()
        total = len(tasks)
        results: dict[int, PathResult] = {}

        def collect(index: int, result_dict: dict[str, Any]) -> None:
            result = PathResult.from_dict(result_dict)
            results[index] = result
            self._record(result, result_dict.get("traceback"))
            if progress_callback is not None:
                progress_callback(len(results), total, result.element_id, result.ok)

        if max_workers == 1 or total <= 1:
            for index, (source, element_id) in enumerate(tasks):
                self.processing_logger.log_path_start(element_id)
                collect(
                    index,
                    process_path(source, config_dict, index, element_id, resolution, vertex_budget),
                )
        else:
            self._run_parallel(tasks, config_dict, resolution, vertex_budget, max_workers, collect)

        stats.end_time = time.time()
        self.logger.info(
            "Processing complete",
            processed=stats.processed_count,
            errors=stats.error_count,
            outlines=stats.outline_count,
            degraded=stats.degraded_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return [results[i] for i in range(total)]

    def _run_parallel(
        self,
        tasks: list[tuple[str, str]],
        config_dict: dict[str, Any],
        resolution: int | None,
        vertex_budget: int | None,
        max_workers: int | None,
        collect: Callable[[int, dict[str, Any]], None],
    ) -> None:
        """Fan tasks out over a process pool, collecting as they complete."""
        pending_futures: dict = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for index, (source, element_id) in enumerate(tasks):
                future = executor.submit(
                    process_path,
                    source,
                    config_dict,
                    index,
                    element_id,
                    resolution,
                    vertex_budget,
                )
                pending_futures[future] = index

            try:
                for future in as_completed(list(pending_futures)):
                    index = pending_futures.pop(future)
                    source, element_id = tasks[index]

                    try:
                        result_dict = future.result()
                    except Exception as e:
                        # Executor-level error
                        result_dict = {
                            "index": index,
                            "element_id": element_id,
                            "source": source,
                            "error": str(e),
                            "error_type": type(e).__name__,
                            "traceback": traceback.format_exc(),
                        }
                    collect(index, result_dict)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                for f in pending_futures:
                    f.cancel()
                executor.shutdown(wait=True, cancel_futures=True)
                raise

    def _record(self, result: PathResult, tb: str | None = None) -> None:
        """Update statistics and logs for one finished path."""
        for event in result.degraded:
            self.processing_logger.log_degraded(result.element_id, event)

        if not result.ok:
            self.processing_logger.log_path_error(
                result.element_id,
                result.error or "unknown error",
                source=result.source,
            )
            if tb:
                self.logger.debug("Path failure traceback", path=result.element_id, traceback=tb)
            return

        for i, analysis in enumerate(result.analyses):
            self.processing_logger.log_outline_analysis(result.element_id, i, analysis)
        self.processing_logger.log_path_complete(
            result.element_id,
            outlines=len(result.subpaths),
            duration_ms=result.duration_ms,
        )
