"""Tests for SVG reading."""

from pathlib import Path

import pytest

from svgextruder.domain import ViewBox
from svgextruder.exceptions import SvgLoadError
from svgextruder.io import SvgReader, parse_view_box, read_svg_string

SAMPLE_SVG = """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 50">
  <g>
    <path id="square" d="M10 10 H40 V40 H10 Z" fill="red"/>
    <path d="M50 10 C60 0 70 0 80 10 Z" stroke="blue" stroke-width="2.5px"/>
  </g>
  <path id="empty" d=""/>
  <path id="last" d="M0 0 L5 0 L5 5"/>
</svg>
"""


@pytest.fixture
def sample_svg(tmp_path: Path) -> Path:
    """Write the sample document to a file."""
    svg_path = tmp_path / "sample.svg"
    svg_path.write_text(SAMPLE_SVG, encoding="utf-8")
    return svg_path


class TestParseViewBox:
    """Tests for viewBox parsing."""

    def test_space_and_comma_separated(self) -> None:
        """Test both separator styles."""
        assert parse_view_box("0 0 100 50") == ViewBox(0, 0, 100, 50)
        assert parse_view_box("-5,-5, 10,10") == ViewBox(-5, -5, 10, 10)

    def test_missing_uses_default(self) -> None:
        """Test absent viewBox falls back to 0 0 200 200."""
        assert parse_view_box(None) == ViewBox(0, 0, 200, 200)

    def test_invalid_uses_default(self) -> None:
        """Test malformed viewBox falls back to the default."""
        assert parse_view_box("0 0 wide") == ViewBox()


class TestReadSvgString:
    """Tests for parsing SVG markup."""

    def test_collects_paths_in_order(self) -> None:
        """Test namespaced and nested paths are found in document order."""
        document = read_svg_string(SAMPLE_SVG)

        assert document.view_box == ViewBox(0, 0, 100, 50)
        assert [p.element_id for p in document.paths] == ["square", "path-1", "last"]
        assert document.path_count == 3

    def test_attributes_and_defaults(self) -> None:
        """Test paint attributes and their defaults."""
        square, curve, last = read_svg_string(SAMPLE_SVG).paths

        assert square.fill == "red"
        assert square.stroke == "none"
        assert curve.fill == "black"
        assert curve.stroke == "blue"
        assert curve.stroke_width == 2.5
        assert last.index == 3

    def test_no_namespace(self) -> None:
        """Test documents without the SVG namespace."""
        document = read_svg_string('<svg><path d="M0 0 L1 0 L1 1"/></svg>')
        assert document.paths[0].element_id == "path-0"
        assert document.view_box == ViewBox()

    def test_malformed_xml(self) -> None:
        """Test broken markup raises SvgLoadError."""
        with pytest.raises(SvgLoadError):
            read_svg_string("<svg><path d='M0 0'></svg>")


class TestSvgReader:
    """Tests for SvgReader."""

    def test_load(self, sample_svg: Path) -> None:
        """Test loading a file."""
        reader = SvgReader(sample_svg)
        document = reader.load()

        assert document.path_count == 3
        assert reader.path_count == 3
        assert reader.view_box == ViewBox(0, 0, 100, 50)
        assert [p.d for p in reader.iter_paths()][0] == "M10 10 H40 V40 H10 Z"

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file raises SvgLoadError."""
        with pytest.raises(SvgLoadError) as exc_info:
            SvgReader(tmp_path / "missing.svg").load()
        assert exc_info.value.reason == "file not found"

    def test_invalid_file(self, tmp_path: Path) -> None:
        """Test a non-XML file raises SvgLoadError with the file path."""
        svg_path = tmp_path / "broken.svg"
        svg_path.write_text("not xml at all", encoding="utf-8")
        with pytest.raises(SvgLoadError) as exc_info:
            SvgReader(svg_path).load()
        assert exc_info.value.path == str(svg_path)

    def test_access_before_load(self, sample_svg: Path) -> None:
        """Test properties require load() first."""
        reader = SvgReader(sample_svg)
        with pytest.raises(RuntimeError):
            _ = reader.document
