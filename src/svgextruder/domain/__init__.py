"""Domain models for svgextruder.

This module contains the value types that flow through the
path-to-solid pipeline. All models are designed to be:

- Immutable (frozen dataclasses)
- Serializable for inter-process communication (parallel processing)
- Independent of any 3D or XML library

Key classes:
- Point2D: A 2D point
- MoveTo, LineTo, CubicCurveTo, QuadraticCurveTo, ArcTo, ClosePath: Path commands
- Outline: A closed polygon built from one subpath
- ShapeAnalysis: Complexity metrics for an outline
- DetailSettings: Tessellation and extrusion parameters
- ExtrusionJob: Outlines plus settings for an extrusion backend
"""

from svgextruder.domain.commands import (
    CURVE_KINDS,
    ArcTo,
    ClosePath,
    CommandKind,
    CubicCurveTo,
    CurveCommand,
    LineTo,
    MoveTo,
    PathCommand,
    QuadraticCurveTo,
    command_from_dict,
)
from svgextruder.domain.detail import DetailLevel, DetailRung, DetailSettings, ShapeAnalysis
from svgextruder.domain.document import SvgDocument, SvgPathElement, ViewBox
from svgextruder.domain.extrusion import ExtrusionJob, ExtrusionProvider
from svgextruder.domain.geometry import ORIGIN, Point2D
from svgextruder.domain.outline import DegradedFlatten, Outline, Subpath, outline_from_points
from svgextruder.domain.result import DocumentResult, PathResult

__all__: list[str] = [
    # Enums
    "CommandKind",
    "DetailLevel",
    # Core types
    "ORIGIN",
    "Point2D",
    "MoveTo",
    "LineTo",
    "CubicCurveTo",
    "QuadraticCurveTo",
    "ArcTo",
    "ClosePath",
    "PathCommand",
    "CurveCommand",
    "CURVE_KINDS",
    "command_from_dict",
    "Outline",
    "Subpath",
    "DegradedFlatten",
    "outline_from_points",
    "ShapeAnalysis",
    "DetailSettings",
    "DetailRung",
    "ExtrusionJob",
    "ExtrusionProvider",
    # Results
    "PathResult",
    "DocumentResult",
    # Documents
    "SvgDocument",
    "SvgPathElement",
    "ViewBox",
]
