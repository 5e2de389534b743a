"""Internal elliptical arc construction.

Converts SVG endpoint-parameterized arcs to center parameterization
(SVG 1.1 implementation notes, sections F.6.5 and F.6.6). Not intended for
public use.
"""

import math
from dataclasses import dataclass

from svgextruder.domain import ArcTo, Point2D


class ArcConstructionError(ValueError):
    """The arc cannot be solved; callers fall back to a straight line."""

    pass


@dataclass(frozen=True, slots=True)
class CenterArc:
    """An elliptical arc in center parameterization.

    Attributes:
        cx: Ellipse center x
        cy: Ellipse center y
        rx: X radius after out-of-range correction
        ry: Y radius after out-of-range correction
        phi: Rotation of the ellipse x-axis in radians
        theta1: Start angle in radians
        delta: Signed sweep angle in radians
    """

    cx: float
    cy: float
    rx: float
    ry: float
    phi: float
    theta1: float
    delta: float

    def point_at(self, fraction: float) -> Point2D:
        """Point at a fraction of the sweep (0 = start, 1 = end)."""
        theta = self.theta1 + self.delta * fraction
        cos_phi = math.cos(self.phi)
        sin_phi = math.sin(self.phi)
        cos_t = math.cos(theta)
        sin_t = math.sin(theta)
        return Point2D(
            self.cx + self.rx * cos_phi * cos_t - self.ry * sin_phi * sin_t,
            self.cy + self.rx * sin_phi * cos_t + self.ry * cos_phi * sin_t,
        )


def solve_center_arc(start: Point2D, arc: ArcTo) -> CenterArc:
    """Compute the center parameterization of an arc.

    Args:
        start: Current point where the arc begins
        arc: Arc command with absolute end point

    Returns:
        CenterArc describing the same curve

    Raises:
        ArcConstructionError: Zero radius or coincident endpoints
    """
    rx = abs(arc.rx)
    ry = abs(arc.ry)
    # Radii whose squares underflow behave as zero
    if rx * rx == 0.0 or ry * ry == 0.0:
        raise ArcConstructionError("zero radius")
    if start == arc.end:
        raise ArcConstructionError("coincident endpoints")

    phi = arc.rotation_rad
    cos_phi = math.cos(phi)
    sin_phi = math.sin(phi)

    # Step 1: move the midpoint of the chord to the origin and unrotate
    dx = (start.x - arc.end.x) / 2.0
    dy = (start.y - arc.end.y) / 2.0
    x1p = cos_phi * dx + sin_phi * dy
    y1p = -sin_phi * dx + cos_phi * dy

    # Scale radii up when no ellipse of the given size can reach both ends
    lam = (x1p * x1p) / (rx * rx) + (y1p * y1p) / (ry * ry)
    if lam > 1.0:
        scale = math.sqrt(lam)
        rx *= scale
        ry *= scale

    # Step 2: center in the unrotated frame
    rx2 = rx * rx
    ry2 = ry * ry
    num = rx2 * ry2 - rx2 * y1p * y1p - ry2 * x1p * x1p
    den = rx2 * y1p * y1p + ry2 * x1p * x1p
    if den == 0.0:
        raise ArcConstructionError("coincident endpoints")
    coef = math.sqrt(max(0.0, num / den))
    if arc.large_arc == arc.sweep:
        coef = -coef
    cxp = coef * rx * y1p / ry
    cyp = -coef * ry * x1p / rx

    # Step 3: back to the original frame
    cx = cos_phi * cxp - sin_phi * cyp + (start.x + arc.end.x) / 2.0
    cy = sin_phi * cxp + cos_phi * cyp + (start.y + arc.end.y) / 2.0

    # Step 4: start angle and sweep
    ux = (x1p - cxp) / rx
    uy = (y1p - cyp) / ry
    vx = (-x1p - cxp) / rx
    vy = (-y1p - cyp) / ry
    theta1 = math.atan2(uy, ux)
    delta = math.atan2(vy, vx) - theta1
    if arc.sweep and delta < 0:
        delta += 2.0 * math.pi
    elif not arc.sweep and delta > 0:
        delta -= 2.0 * math.pi

    result = CenterArc(cx=cx, cy=cy, rx=rx, ry=ry, phi=phi, theta1=theta1, delta=delta)
    if not all(math.isfinite(v) for v in (cx, cy, rx, ry, theta1, delta)):
        raise ArcConstructionError("non-finite arc parameters")
    return result
