"""Core processing algorithms for svgextruder.

This module contains the path-to-solid pipeline:

- Path parsing (tokenizing, relative/absolute resolution, smooth reflection)
- Curve flattening (Bezier evaluation, elliptical arc construction)
- Outline building (subpath accumulation, implicit closing)
- Shape analysis (bounding box, complexity score)
- Detail level planning (resolution and bevel settings, LOD ladders)

All services are designed to be:
- Stateless (safe for use in worker processes)
- Pure apart from logging
- Deterministic (identical input, identical output)

Key functions:
- parse_path: Parse a ``d`` string into absolute commands
- flatten_curve: Flatten one curved command
- build_outlines: Build closed outlines from commands
- process_path: Picklable per-path worker function

Key classes:
- PathCommandParser: Parses path data
- CurveFlattener: Flattens curves at a resolution
- OutlineBuilder: Builds closed outlines
- ShapeAnalyzer: Scores outline complexity
- DetailLevelPlanner: Plans resolution and extrusion settings
- PathPipeline: Runs the whole chain for one path
- PathProcessor: Batch orchestration across worker processes
"""

from svgextruder.core.analyzer import ShapeAnalyzer, count_curve_commands
from svgextruder.core.builder import OutlineBuilder, build_outlines
from svgextruder.core.flattener import CurveFlattener, flatten_curve
from svgextruder.core.parser import ParserState, PathCommandParser, advance, parse_path, tokenize
from svgextruder.core.planner import DetailLevelPlanner, clamp
from svgextruder.core.processor import PathPipeline, PathProcessor, process_path

__all__ = [
    # Analyzer
    "ShapeAnalyzer",
    "count_curve_commands",
    # Builder
    "OutlineBuilder",
    "build_outlines",
    # Flattener
    "CurveFlattener",
    "flatten_curve",
    # Parser
    "ParserState",
    "PathCommandParser",
    "advance",
    "parse_path",
    "tokenize",
    # Planner
    "DetailLevelPlanner",
    "clamp",
    # Processor
    "PathPipeline",
    "PathProcessor",
    "process_path",
]
