"""Exception hierarchy for svgextruder."""


class SvgExtruderError(Exception):
    """Base exception for all svgextruder errors."""

    pass


class ParseError(SvgExtruderError):
    """Errors raised while turning path data into outlines."""

    pass


class UnsupportedCommandError(ParseError):
    """Path data contains a command letter outside the SVG path grammar."""

    def __init__(self, letter: str) -> None:
        self.letter = letter
        super().__init__(f"Unsupported path command '{letter}'")


class MalformedArgumentsError(ParseError):
    """A path command received the wrong number or kind of arguments."""

    def __init__(self, command: str, got: int, expected: int, reason: str | None = None) -> None:
        self.command = command
        self.got = got
        self.expected = expected
        self.reason = reason
        message = (
            f"Malformed arguments for '{command}': got {got}, "
            f"expected a multiple of {expected}"
        )
        if reason:
            message = f"Malformed arguments for '{command}': {reason}"
        super().__init__(message)


class NoValidOutlinesError(ParseError):
    """Every subpath degenerated below three distinct points."""

    def __init__(self) -> None:
        super().__init__("Path produced no valid outlines")


class GeometryError(SvgExtruderError):
    """Errors in geometric calculations."""

    pass


class OutlineError(GeometryError):
    """Outline data violates the closed-polygon invariant."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class InvalidResolutionError(GeometryError):
    """Curve resolution must be a positive step count."""

    def __init__(self, resolution: int) -> None:
        self.resolution = resolution
        super().__init__(f"Curve resolution must be >= 1, got {resolution}")


class PlanningError(SvgExtruderError):
    """Errors related to detail level planning."""

    pass


class InvalidBudgetError(PlanningError):
    """Vertex budget must be a positive count."""

    def __init__(self, budget: int) -> None:
        self.budget = budget
        super().__init__(f"Target vertex budget must be >= 1, got {budget}")


class DocumentError(SvgExtruderError):
    """Errors related to reading SVG documents."""

    pass


class SvgLoadError(DocumentError):
    """Error loading an SVG file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load SVG '{path}': {reason}")


class PathProcessingError(SvgExtruderError):
    """A single path failed; carries the offending path text."""

    def __init__(self, source: str, cause: Exception) -> None:
        self.source = source
        self.cause = cause
        snippet = source if len(source) <= 80 else source[:77] + "..."
        super().__init__(f"{cause} (path: {snippet!r})")
