"""SVG I/O layer for svgextruder.

This module reads SVG documents with the standard library XML parser and
hands their path data to the pipeline as domain models.

Key responsibilities:
- Load SVG files
- Collect ``<path>`` elements with their id, data and paint attributes
- Parse the document viewBox

Key classes:
- SvgReader: Load SVG files and iterate their paths
"""

from svgextruder.io.reader import SvgReader, parse_view_box, read_svg_string

__all__ = [
    "SvgReader",
    "parse_view_box",
    "read_svg_string",
]
