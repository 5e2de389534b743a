"""SVG path data parser.

Turns one ``d`` attribute string into a list of typed drawing commands with
absolute coordinates. The parser is a small state machine: the state it
carries between commands (current point, subpath start and the last Bezier
control points used by the smooth ``S``/``T`` commands) is an explicit
``ParserState`` value threaded through ``advance()``, so reflection can be
tested in isolation.
"""

import math
import re
from collections.abc import Iterator
from dataclasses import dataclass, replace

import structlog

from svgextruder.domain import (
    ORIGIN,
    ArcTo,
    ClosePath,
    CubicCurveTo,
    LineTo,
    MoveTo,
    PathCommand,
    Point2D,
    QuadraticCurveTo,
)
from svgextruder.exceptions import MalformedArgumentsError, UnsupportedCommandError

logger = structlog.get_logger(__name__)

# Arguments consumed per repetition of each command
COMMAND_ARITY: dict[str, int] = {
    "M": 2,
    "L": 2,
    "H": 1,
    "V": 1,
    "C": 6,
    "S": 4,
    "Q": 4,
    "T": 2,
    "A": 7,
    "Z": 0,
}

_SEPARATORS = frozenset(" \t\r\n\f,")
_NUMBER_RE = re.compile(r"[-+]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?")
_ARC_FLAG_SLOTS = (3, 4)


@dataclass(frozen=True, slots=True)
class ParserState:
    """Resolution state carried from one command to the next.

    Attributes:
        current: Current pen position
        subpath_start: Where the current subpath began (target of Z)
        last_cubic_control: Second control point of the previous command if
            it was a cubic curve, else None
        last_quadratic_control: Control point of the previous command if it
            was a quadratic curve, else None
    """

    current: Point2D = ORIGIN
    subpath_start: Point2D = ORIGIN
    last_cubic_control: Point2D | None = None
    last_quadratic_control: Point2D | None = None


def tokenize(path_data: str) -> Iterator[tuple[str, list[float]]]:
    """Split path data into (command letter, arguments) pairs.

    Handles the compact number forms SVG allows (``10-5``, ``0.5.5``,
    exponents) and packed arc flags (``a1,1 0 0110,10``).

    Raises:
        UnsupportedCommandError: On a letter outside the path grammar or any
            character that is neither a number nor a separator
        MalformedArgumentsError: On numbers before the first command or
            invalid arc flags
    """
    pos = 0
    length = len(path_data)
    letter: str | None = None
    args: list[float] = []

    while pos < length:
        ch = path_data[pos]

        if ch in _SEPARATORS:
            pos += 1
            continue

        if ch.isalpha():
            if ch.upper() not in COMMAND_ARITY:
                raise UnsupportedCommandError(ch)
            if letter is not None:
                yield letter, args
            letter = ch
            args = []
            pos += 1
            continue

        if letter is None:
            raise MalformedArgumentsError(
                "", 0, 0, reason="path data must begin with a command letter"
            )

        if letter in "Aa" and len(args) % 7 in _ARC_FLAG_SLOTS:
            if ch not in "01":
                raise MalformedArgumentsError(
                    letter, len(args), 7, reason=f"arc flags must be 0 or 1, got {ch!r}"
                )
            args.append(float(ch))
            pos += 1
            continue

        match = _NUMBER_RE.match(path_data, pos)
        if match is None:
            raise UnsupportedCommandError(ch)
        value = float(match.group())
        if not math.isfinite(value):
            raise MalformedArgumentsError(
                letter, len(args), COMMAND_ARITY[letter.upper()],
                reason=f"non-finite number {match.group()!r}",
            )
        args.append(value)
        pos = match.end()

    if letter is not None:
        yield letter, args


def advance(state: ParserState, letter: str, args: list[float]) -> tuple[ParserState, PathCommand]:
    """Resolve one command group against the state.

    Args:
        state: State after the previous command
        letter: Command letter (case selects absolute/relative)
        args: Exactly one argument group for this command

    Returns:
        Tuple of (new state, absolute command)
    """
    relative = letter.islower()
    cur = state.current

    def point(x: float, y: float) -> Point2D:
        if relative:
            return Point2D(cur.x + x, cur.y + y)
        return Point2D(x, y)

    op = letter.upper()

    if op == "M":
        p = point(args[0], args[1])
        return ParserState(current=p, subpath_start=p), MoveTo(p)

    if op == "L":
        p = point(args[0], args[1])
        return replace(state, current=p, last_cubic_control=None, last_quadratic_control=None), LineTo(p)

    if op == "H":
        p = Point2D(cur.x + args[0] if relative else args[0], cur.y)
        return replace(state, current=p, last_cubic_control=None, last_quadratic_control=None), LineTo(p)

    if op == "V":
        p = Point2D(cur.x, cur.y + args[0] if relative else args[0])
        return replace(state, current=p, last_cubic_control=None, last_quadratic_control=None), LineTo(p)

    if op == "C":
        c1 = point(args[0], args[1])
        c2 = point(args[2], args[3])
        end = point(args[4], args[5])
        new_state = replace(state, current=end, last_cubic_control=c2, last_quadratic_control=None)
        return new_state, CubicCurveTo(c1=c1, c2=c2, end=end)

    if op == "S":
        c1 = state.last_cubic_control.reflect_through(cur) if state.last_cubic_control else cur
        c2 = point(args[0], args[1])
        end = point(args[2], args[3])
        new_state = replace(state, current=end, last_cubic_control=c2, last_quadratic_control=None)
        return new_state, CubicCurveTo(c1=c1, c2=c2, end=end)

    if op == "Q":
        c = point(args[0], args[1])
        end = point(args[2], args[3])
        new_state = replace(state, current=end, last_cubic_control=None, last_quadratic_control=c)
        return new_state, QuadraticCurveTo(c=c, end=end)

    if op == "T":
        c = state.last_quadratic_control.reflect_through(cur) if state.last_quadratic_control else cur
        end = point(args[0], args[1])
        new_state = replace(state, current=end, last_cubic_control=None, last_quadratic_control=c)
        return new_state, QuadraticCurveTo(c=c, end=end)

    if op == "A":
        end = point(args[5], args[6])
        arc = ArcTo(
            rx=abs(args[0]),
            ry=abs(args[1]),
            rotation_rad=math.radians(args[2]),
            large_arc=args[3] != 0,
            sweep=args[4] != 0,
            end=end,
        )
        return replace(state, current=end, last_cubic_control=None, last_quadratic_control=None), arc

    if op == "Z":
        closed = ParserState(current=state.subpath_start, subpath_start=state.subpath_start)
        return closed, ClosePath()

    raise UnsupportedCommandError(letter)


class PathCommandParser:
    """Parses SVG path data into absolute drawing commands.

    The parser holds no state between calls and is safe for use in worker
    processes.

    Example:
        parser = PathCommandParser()
        commands = parser.parse("M0,0 L10,0 L10,10 Z")
    """

    def parse(self, path_data: str) -> list[PathCommand]:
        """Parse a path ``d`` string.

        Args:
            path_data: Raw SVG path data

        Returns:
            Commands in source order, all coordinates absolute

        Raises:
            UnsupportedCommandError: Unknown command letter or stray character
            MalformedArgumentsError: Argument count or flag mismatch
        """
        state = ParserState()
        commands: list[PathCommand] = []

        for letter, args in tokenize(path_data):
            if not commands and letter not in "Mm":
                raise MalformedArgumentsError(
                    letter, len(args), COMMAND_ARITY[letter.upper()],
                    reason="path data must begin with a moveto",
                )

            arity = COMMAND_ARITY[letter.upper()]
            if arity == 0:
                if args:
                    raise MalformedArgumentsError(
                        letter, len(args), 0, reason="closepath takes no arguments"
                    )
                state, command = advance(state, letter, args)
                commands.append(command)
                continue

            if not args or len(args) % arity:
                raise MalformedArgumentsError(letter, len(args), arity)

            for i in range(0, len(args), arity):
                group_letter = letter
                # Extra coordinate pairs after a moveto are implicit linetos
                if i > 0 and letter in "Mm":
                    group_letter = "L" if letter == "M" else "l"
                state, command = advance(state, group_letter, args[i : i + arity])
                commands.append(command)

        logger.debug("Parsed path data", commands=len(commands), length=len(path_data))
        return commands


def parse_path(path_data: str) -> list[PathCommand]:
    """Parse path data with a default parser."""
    return PathCommandParser().parse(path_data)
