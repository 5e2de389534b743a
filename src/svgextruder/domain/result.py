"""Per-path and per-document pipeline results."""

from dataclasses import dataclass, field
from typing import Any

from svgextruder.domain.detail import DetailLevel, DetailRung, DetailSettings, ShapeAnalysis
from svgextruder.domain.document import ViewBox
from svgextruder.domain.outline import DegradedFlatten, Outline, Subpath


@dataclass(frozen=True)
class PathResult:
    """Outcome of processing one path ``d`` string.

    A failed path keeps its source text and error message so the caller can
    report it while sibling paths still render.

    Attributes:
        index: Position of the path in its batch
        element_id: Element id, or ``path-{index}``
        source: The raw path data
        subpaths: Built outlines with their source commands
        analyses: One ShapeAnalysis per subpath
        settings: Budget-planned DetailSettings per subpath
        ladders: Low..Ultra rungs per subpath (empty when not requested)
        degraded: Arcs that fell back to straight lines
        error: Human-readable failure message, None on success
        error_type: Exception class name of the failure
        duration_ms: Wall time spent on the path
    """

    index: int
    element_id: str
    source: str
    subpaths: tuple[Subpath, ...] = ()
    analyses: tuple[ShapeAnalysis, ...] = ()
    settings: tuple[DetailSettings, ...] = ()
    ladders: tuple[tuple[DetailRung, ...], ...] = ()
    degraded: tuple[DegradedFlatten, ...] = ()
    error: str | None = None
    error_type: str | None = None
    duration_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def outlines(self) -> list[Outline]:
        return [s.outline for s in self.subpaths]

    def rung(self, outline_index: int, level: DetailLevel) -> DetailRung:
        """Ladder rung of one outline.

        Raises:
            LookupError: If ladders were not computed or the level is missing
        """
        for rung in self.ladders[outline_index]:
            if rung.level is level:
                return rung
        raise LookupError(f"No {level.name} rung for outline {outline_index}")

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "index": self.index,
            "element_id": self.element_id,
            "source": self.source,
            "subpaths": [s.to_dict() for s in self.subpaths],
            "analyses": [a.to_dict() for a in self.analyses],
            "settings": [s.to_dict() for s in self.settings],
            "ladders": [[r.to_dict() for r in ladder] for ladder in self.ladders],
            "degraded": [d.to_dict() for d in self.degraded],
            "error": self.error,
            "error_type": self.error_type,
            "duration_ms": self.duration_ms,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PathResult":
        """Deserialize from dictionary."""
        return cls(
            index=data["index"],
            element_id=data["element_id"],
            source=data["source"],
            subpaths=tuple(Subpath.from_dict(s) for s in data.get("subpaths", [])),
            analyses=tuple(ShapeAnalysis.from_dict(a) for a in data.get("analyses", [])),
            settings=tuple(DetailSettings.from_dict(s) for s in data.get("settings", [])),
            ladders=tuple(
                tuple(DetailRung.from_dict(r) for r in ladder) for ladder in data.get("ladders", [])
            ),
            degraded=tuple(DegradedFlatten.from_dict(d) for d in data.get("degraded", [])),
            error=data.get("error"),
            error_type=data.get("error_type"),
            duration_ms=data.get("duration_ms", 0.0),
        )


@dataclass
class DocumentResult:
    """Results for every path of one SVG document.

    Attributes:
        name: File path or label of the document
        view_box: Document viewBox
        paths: Per-path results in document order
        error: Set when the document itself could not be loaded
    """

    name: str
    view_box: ViewBox = field(default_factory=ViewBox)
    paths: list[PathResult] = field(default_factory=list)
    error: str | None = None

    @property
    def ok_count(self) -> int:
        return sum(1 for p in self.paths if p.ok)

    @property
    def failed(self) -> list[PathResult]:
        return [p for p in self.paths if not p.ok]

    @property
    def all_failed(self) -> bool:
        return self.error is not None or (bool(self.paths) and self.ok_count == 0)
