"""Internal Bezier curve evaluation.

This is an internal module containing helper functions for the curve
flattener. Not intended for public use.
"""

from svgextruder.domain import Point2D


def quadratic_point(p0: Point2D, p1: Point2D, p2: Point2D, t: float) -> Point2D:
    """Evaluate a quadratic Bezier curve at parameter t.

    Args:
        p0: Start point
        p1: Control point
        p2: End point
        t: Curve parameter in [0, 1]

    Returns:
        Point on the curve
    """
    mt = 1.0 - t
    a = mt * mt
    b = 2.0 * mt * t
    c = t * t
    return Point2D(
        a * p0.x + b * p1.x + c * p2.x,
        a * p0.y + b * p1.y + c * p2.y,
    )


def cubic_point(p0: Point2D, p1: Point2D, p2: Point2D, p3: Point2D, t: float) -> Point2D:
    """Evaluate a cubic Bezier curve at parameter t.

    Uses the Bernstein form; each sample depends only on t.

    Args:
        p0: Start point
        p1: First control point
        p2: Second control point
        p3: End point
        t: Curve parameter in [0, 1]

    Returns:
        Point on the curve
    """
    mt = 1.0 - t
    a = mt * mt * mt
    b = 3.0 * mt * mt * t
    c = 3.0 * mt * t * t
    d = t * t * t
    return Point2D(
        a * p0.x + b * p1.x + c * p2.x + d * p3.x,
        a * p0.y + b * p1.y + c * p2.y + d * p3.y,
    )


def sample_parameters(resolution: int) -> list[float]:
    """Uniform parameters ``i / resolution`` for ``i = 1..resolution - 1``.

    The final parameter (t = 1) is left out; callers append the exact
    endpoint instead of evaluating it.
    """
    return [i / resolution for i in range(1, resolution)]
