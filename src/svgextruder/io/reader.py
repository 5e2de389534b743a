"""SVG reader for collecting path elements.

This module provides the SvgReader class for loading SVG files and
extracting every ``<path>`` element's data into domain models.
"""

import re
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from pathlib import Path

import structlog

from svgextruder.domain import SvgDocument, SvgPathElement, ViewBox
from svgextruder.exceptions import SvgLoadError

logger = structlog.get_logger(__name__)

_LEADING_NUMBER_RE = re.compile(r"\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")


def _local_name(tag: str) -> str:
    """Strip an XML namespace from a tag name."""
    return tag.rsplit("}", 1)[-1]


def _parse_length(value: str | None) -> float:
    """Leading number of a length attribute ("2", "2px", "1.5e1"), else 0."""
    if not value:
        return 0.0
    match = _LEADING_NUMBER_RE.match(value)
    return float(match.group(1)) if match else 0.0


def parse_view_box(value: str | None) -> ViewBox:
    """Parse a viewBox attribute, falling back to 0 0 200 200."""
    if not value:
        return ViewBox()
    parts = [p for p in re.split(r"[\s,]+", value.strip()) if p]
    try:
        x, y, width, height = (float(p) for p in parts)
    except ValueError:
        logger.warning("Invalid viewBox, using default", view_box=value)
        return ViewBox()
    return ViewBox(x=x, y=y, width=width, height=height)


def read_svg_string(text: str) -> SvgDocument:
    """Parse SVG markup into a document.

    Args:
        text: SVG XML text

    Returns:
        SvgDocument with the root viewBox and all path elements in
        document order

    Raises:
        SvgLoadError: If the markup is not well-formed XML
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise SvgLoadError("<string>", str(e)) from e

    view_box = parse_view_box(root.get("viewBox")) if _local_name(root.tag) == "svg" else ViewBox()

    paths: list[SvgPathElement] = []
    index = 0
    for element in root.iter():
        if not isinstance(element.tag, str) or _local_name(element.tag) != "path":
            continue
        d = element.get("d")
        if not d or not d.strip():
            logger.warning("Path element without data skipped", index=index, id=element.get("id"))
            index += 1
            continue
        paths.append(
            SvgPathElement(
                index=index,
                element_id=element.get("id") or f"path-{index}",
                d=d,
                fill=element.get("fill") or "black",
                stroke=element.get("stroke") or "none",
                stroke_width=_parse_length(element.get("stroke-width")),
            )
        )
        index += 1

    return SvgDocument(view_box=view_box, paths=paths, source=text)


class SvgReader:
    """Loads SVG files and extracts path elements.

    Example:
        reader = SvgReader(Path("logo.svg"))
        reader.load()
        for element in reader.iter_paths():
            print(element.element_id, element.d)
    """

    def __init__(self, svg_path: Path) -> None:
        """Initialize the SVG reader.

        Args:
            svg_path: Path to the SVG file
        """
        self._svg_path = svg_path
        self._document: SvgDocument | None = None

    def load(self) -> SvgDocument:
        """Load and parse the SVG file.

        Returns:
            The parsed document

        Raises:
            SvgLoadError: If the file is missing, unreadable or not XML
        """
        if not self._svg_path.exists():
            raise SvgLoadError(str(self._svg_path), "file not found")

        try:
            text = self._svg_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SvgLoadError(str(self._svg_path), str(e)) from e

        try:
            self._document = read_svg_string(text)
        except SvgLoadError as e:
            raise SvgLoadError(str(self._svg_path), e.reason) from e

        logger.info(
            "SVG loaded",
            path=str(self._svg_path),
            paths=self._document.path_count,
        )
        return self._document

    @property
    def document(self) -> SvgDocument:
        """Return the loaded document.

        Raises:
            RuntimeError: If the file has not been loaded yet
        """
        if self._document is None:
            raise RuntimeError("SVG not loaded. Call load() first.")
        return self._document

    @property
    def path_count(self) -> int:
        """Number of path elements with data."""
        return self.document.path_count

    @property
    def view_box(self) -> ViewBox:
        """The document viewBox."""
        return self.document.view_box

    def iter_paths(self) -> Iterator[SvgPathElement]:
        """Iterate over path elements in document order."""
        yield from self.document.paths
