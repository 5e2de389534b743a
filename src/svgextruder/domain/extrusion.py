"""The contract handed to a 3D extrusion backend.

Triangulation, bevel geometry, vertex welding and normals belong to the
backend. This package only produces outlines and settings, so any geometry
library can be plugged in behind ``ExtrusionProvider``.
"""

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from svgextruder.domain.detail import DetailSettings
from svgextruder.domain.outline import Outline


@dataclass(frozen=True, slots=True)
class ExtrusionJob:
    """Outlines plus the settings to extrude them with.

    Attributes:
        outlines: Closed polygons to extrude, in source order
        detail_settings: Resolution and bevel parameters
    """

    outlines: tuple[Outline, ...]
    detail_settings: DetailSettings

    def to_dict(self) -> dict[str, Any]:
        return {
            "outlines": [o.to_dict() for o in self.outlines],
            "detail_settings": self.detail_settings.to_dict(),
        }


@runtime_checkable
class ExtrusionProvider(Protocol):
    """Anything that can turn an extrusion job into 3D geometry."""

    def extrude(self, job: ExtrusionJob) -> Any:
        ...
