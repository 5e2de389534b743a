"""svgextruder - Turn SVG path outlines into extrudable 3D solids.

svgextruder parses SVG path ``d`` strings into closed polygon outlines,
flattens their curves to a chosen resolution, scores each outline's
complexity and plans level-of-detail extrusion settings for a 3D
extrusion backend.

Example:
    $ svgextruder analyze logo.svg

This prints every path in logo.svg with its outlines, complexity score and
the recommended curve resolution for extrusion.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
