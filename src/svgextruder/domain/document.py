"""SVG document metadata collected at ingestion time."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class ViewBox:
    """The SVG viewBox rectangle."""

    x: float = 0.0
    y: float = 0.0
    width: float = 200.0
    height: float = 200.0

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True, slots=True)
class SvgPathElement:
    """One ``<path>`` element found in a document.

    Attributes:
        index: Position among the document's path elements
        element_id: The ``id`` attribute, or ``path-{index}`` when absent
        d: Raw path data
        fill: Fill paint (defaults to black, as SVG does)
        stroke: Stroke paint
        stroke_width: Stroke width in user units
    """

    index: int
    element_id: str
    d: str
    fill: str = "black"
    stroke: str = "none"
    stroke_width: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "id": self.element_id,
            "d": self.d,
            "fill": self.fill,
            "stroke": self.stroke,
            "stroke_width": self.stroke_width,
        }


@dataclass
class SvgDocument:
    """Path elements and viewBox of a parsed SVG document."""

    view_box: ViewBox = field(default_factory=ViewBox)
    paths: list[SvgPathElement] = field(default_factory=list)
    source: str | None = None

    @property
    def path_count(self) -> int:
        return len(self.paths)

    def is_empty(self) -> bool:
        return not self.paths
