"""Parsing of SVG path-data text into subpaths and segments.

Pipeline: text chunks -> SubPathSplitter -> subpath text -> CommandTokenizer
-> command text -> SegmentParser -> segments. Relative and shorthand commands are
resolved into the canonical absolute segments Line, QuadraticCurve, CubicCurve and Arc.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence

from svgpathdata.common import COMMAND_INFO, SVG_NUMBER, SVG_SEPARATOR
from svgpathdata.errors import InvalidNumber, InvalidParameterCount, MalformedDocument, UnknownCommand
from svgpathdata.geom import ORIGIN, Point
from svgpathdata.segment import Arc, CubicCurve, LazySegments, Line, QuadraticCurve, Segment, SubPath
from svgpathdata.tokenizer import CommandTokenizer, SubPathSplitter, TextStream

logger = logging.getLogger(__name__)

_COMMAND_PARTS_RE = re.compile(r"^\s*([a-df-z])(.*)$", re.IGNORECASE | re.DOTALL)
_SUBPATH_PARTS_RE = re.compile(r"^\s*(m)([^a-df-z]*)([^mz]*)(z\s*)?$", re.IGNORECASE)


def split_parameters(text: str) -> List[str]:
    """Split parameter text at runs of whitespace and/or a single comma."""
    text = text.strip()
    if not text:
        return []
    return SVG_SEPARATOR.split(text)


def parse_parameters(token: str, text: str) -> List[float]:
    """
    Parse the parameter text of the command _token_ into floats.

    Args:
        token (str): the complete raw command, used in error messages
        text (str): the parameter part of the command

    Returns:
        List[float]: the parameters in order of appearance

    Raises:
        InvalidNumber: if a parameter is not a number or not finite
    """
    values = []
    for raw in split_parameters(text):
        if not SVG_NUMBER.fullmatch(raw):
            raise InvalidNumber(f"Invalid number {raw!r} in command {token.strip()!r}", raw)
        value = float(raw)
        if not math.isfinite(value):
            raise InvalidNumber(f"Number {raw!r} out of range in command {token.strip()!r}", raw)
        values.append(value)
    return values


###############################################################################
# CursorState
###############################################################################


@dataclass
class CursorState:
    """Running state of one subpath's parse.

    Attributes:
        current_point: End point of the last segment (start point initially).
        quadratic_mirror: Control point reflected through the current point by T/t.
        cubic_mirror: Control point reflected through the current point by S/s.
    """

    current_point: Point
    quadratic_mirror: Point
    cubic_mirror: Point

    @classmethod
    def at(cls, point: Point) -> CursorState:
        """Create a state positioned at _point_ with both mirrors reset."""
        return cls(point, point, point)

    def advance(self, to_point: Point, quadratic_mirror: Optional[Point] = None, cubic_mirror: Optional[Point] = None):
        """Move to _to_point_; mirrors not given are reset to the new current point."""
        self.current_point = to_point
        self.quadratic_mirror = quadratic_mirror if quadratic_mirror is not None else to_point
        self.cubic_mirror = cubic_mirror if cubic_mirror is not None else to_point


###############################################################################
# SegmentParser
###############################################################################


class SegmentParser:
    """Turns command strings of one subpath into absolute segments.

    Each instance owns its CursorState, so one instance serves exactly one subpath.
    """

    def __init__(self, start_point: Point):
        self._state = CursorState.at(start_point)
        self._handlers: Dict[str, Callable[[str, Sequence[float], bool], Segment]] = {
            "L": self._line_to,
            "H": self._horizontal_line_to,
            "V": self._vertical_line_to,
            "Q": self._quadratic_to,
            "T": self._smooth_quadratic_to,
            "C": self._cubic_to,
            "S": self._smooth_cubic_to,
            "A": self._arc_to,
        }

    @property
    def state(self) -> CursorState:
        """The running cursor state."""
        return self._state

    def parse(self, commands: Iterable[str]) -> Iterator[Segment]:
        """Lazily yield the segments of the given command strings."""
        for command in commands:
            yield from self.parse_command(command)

    def parse_command(self, command: str) -> List[Segment]:
        """
        Parse a single command (one letter plus its parameters) into segments.

        Parameter count and number syntax are validated before any segment is built.

        Args:
            command (str): raw command text, e.g. "l50,25 10,10"

        Returns:
            List[Segment]: one segment per parameter group

        Raises:
            UnknownCommand: if the letter is not a segment command
            InvalidParameterCount: if the parameters do not form complete groups
            InvalidNumber: if a parameter is not a finite number
        """
        match = _COMMAND_PARTS_RE.match(command)
        info = COMMAND_INFO.get(match.group(1)) if match else None
        # move and close directives emit no segment of their own
        if info is None or info.segment is None:
            raise UnknownCommand(f"Invalid command: {command.strip()!r}", command)
        letter, text = match.groups()
        params = parse_parameters(command, text)
        group_size = info.group_size
        if not params or len(params) % group_size:
            raise InvalidParameterCount(f"Invalid number of parameters: {command.strip()!r}", command)

        groups = [params[i : i + group_size] for i in range(0, len(params), group_size)]
        segments = []
        for group in groups:
            segment = self._handlers[letter.upper()](command, group, info.is_relative)
            segments.append(segment)
        return segments

    def _resolve(self, command: str, x: float, y: float, relative: bool) -> Point:
        """Absolute point of (x, y), relative to the current point if requested."""
        point = self._state.current_point.translate(x, y) if relative else Point(x, y)
        return self._checked(command, point)

    @staticmethod
    def _checked(command: str, point: Point) -> Point:
        if not point.is_finite():
            raise InvalidNumber(f"Coordinate out of range in command {command.strip()!r}", command)
        return point

    def _line_to(self, command: str, group: Sequence[float], relative: bool) -> Segment:
        to_point = self._resolve(command, group[0], group[1], relative)
        self._state.advance(to_point)
        return Line(to_point)

    def _horizontal_line_to(self, command: str, group: Sequence[float], relative: bool) -> Segment:
        current = self._state.current_point
        to_point = self._resolve(command, group[0], 0.0 if relative else current.y, relative)
        self._state.advance(to_point)
        return Line(to_point)

    def _vertical_line_to(self, command: str, group: Sequence[float], relative: bool) -> Segment:
        current = self._state.current_point
        to_point = self._resolve(command, 0.0 if relative else current.x, group[0], relative)
        self._state.advance(to_point)
        return Line(to_point)

    def _quadratic_to(self, command: str, group: Sequence[float], relative: bool) -> Segment:
        control = self._resolve(command, group[0], group[1], relative)
        to_point = self._resolve(command, group[2], group[3], relative)
        self._state.advance(to_point, quadratic_mirror=control)
        return QuadraticCurve(control, to_point)

    def _smooth_quadratic_to(self, command: str, group: Sequence[float], relative: bool) -> Segment:
        control = self._checked(command, self._state.quadratic_mirror.reflect(self._state.current_point))
        to_point = self._resolve(command, group[0], group[1], relative)
        self._state.advance(to_point, quadratic_mirror=control)
        return QuadraticCurve(control, to_point)

    def _cubic_to(self, command: str, group: Sequence[float], relative: bool) -> Segment:
        control1 = self._resolve(command, group[0], group[1], relative)
        control2 = self._resolve(command, group[2], group[3], relative)
        to_point = self._resolve(command, group[4], group[5], relative)
        self._state.advance(to_point, cubic_mirror=control2)
        return CubicCurve(control1, control2, to_point)

    def _smooth_cubic_to(self, command: str, group: Sequence[float], relative: bool) -> Segment:
        control1 = self._checked(command, self._state.cubic_mirror.reflect(self._state.current_point))
        control2 = self._resolve(command, group[0], group[1], relative)
        to_point = self._resolve(command, group[2], group[3], relative)
        self._state.advance(to_point, cubic_mirror=control2)
        return CubicCurve(control1, control2, to_point)

    def _arc_to(self, command: str, group: Sequence[float], relative: bool) -> Segment:
        radius_x, radius_y, rotation, large_arc, sweep = group[:5]
        for flag in (large_arc, sweep):
            if flag not in (0.0, 1.0):
                raise InvalidNumber(f"Arc flag must be 0 or 1 in command {command.strip()!r}", command)
        to_point = self._resolve(command, group[5], group[6], relative)
        self._state.advance(to_point)
        return Arc(radius_x, radius_y, rotation, large_arc == 1.0, sweep == 1.0, to_point)


###############################################################################
# SvgPathDataParser
###############################################################################


class SvgPathDataParser:
    """Parses a path-data document into a lazy sequence of SubPaths.

    Args:
        keep_text (bool, optional): store the raw text of each subpath as its cached_text,
            so that serializing reproduces the input verbatim. Defaults to False.
    """

    def __init__(self, keep_text: bool = False):
        self.keep_text = keep_text

    def parse(self, chunks: TextStream) -> Iterator[SubPath]:
        """
        Lazily yield the subpaths of the document.

        Args:
            chunks (TextStream): the document as a string or as an iterable of text chunks

        Yields:
            SubPath: one per move directive; its segments are parsed when iterated

        Raises:
            ParseError: on the first malformed piece of text; nothing is yielded afterwards
        """
        previous: Optional[SubPath] = None
        for text in SubPathSplitter.split(chunks):
            sub_path = self.parse_subpath(text, previous)
            yield sub_path
            previous = sub_path

    def parse_subpath(self, text: str, previous: Optional[SubPath] = None) -> SubPath:
        """
        Parse the text of a single subpath.

        Args:
            text (str): text from a move directive up to an optional close directive
            previous (Optional[SubPath], optional): the preceding subpath of the document;
                a relative move starts from its final current point. Defaults to None.

        Returns:
            SubPath: the subpath with lazily parsed segments
        """
        match = _SUBPATH_PARTS_RE.match(text)
        if not match:
            raise MalformedDocument(f"Invalid subpath: {text.strip()[:32]!r}", text)
        move, move_text, command_text, close = match.groups()

        move_command = move + move_text
        move_info = COMMAND_INFO[move]
        params = parse_parameters(move_command, move_text)
        if not params or len(params) % move_info.group_size:
            raise InvalidParameterCount(f"Invalid number of parameters: {move_command.strip()!r}", move_command)

        if move_info.is_relative:
            # relative to the current point after the previous subpath, i.e. its end point
            # (or its start point if it was closed), not the start point of an open subpath
            start_point = self.current_point_after(previous).translate(params[0], params[1])
            if not start_point.is_finite():
                raise InvalidNumber(f"Coordinate out of range in command {move_command.strip()!r}", move_command)
        else:
            start_point = Point(params[0], params[1])

        if len(params) > 2:
            # additional coordinate pairs of a move are implicit line commands
            implicit_lines = " ".join(split_parameters(move_text)[2:])
            command_text = f"{'l' if move_info.is_relative else 'L'}{implicit_lines} {command_text}"

        logger.debug("subpath at %s, closed=%s", start_point, close is not None)
        return SubPath(
            start_point=start_point,
            segments=LazySegments(
                partial(self.parse_segments, start_point, command_text), f"{start_point}, {command_text!r}"
            ),
            closed=close is not None,
            cached_text=text if self.keep_text else None,
        )

    @staticmethod
    def parse_segments(start_point: Point, command_text: str) -> Iterator[Segment]:
        """Lazily yield the segments of the commands following a move to _start_point_."""
        return SegmentParser(start_point).parse(CommandTokenizer.tokenize(command_text))

    @staticmethod
    def current_point_after(sub_path: Optional[SubPath]) -> Point:
        """Current point after _sub_path_ has been drawn (the origin if there is none)."""
        if sub_path is None:
            return ORIGIN
        if sub_path.closed:
            return sub_path.start_point
        return sub_path.end_point()


def parse(chunks: TextStream, keep_text: bool = False) -> Iterator[SubPath]:
    """Parse path-data text (a string or an iterable of chunks) into a lazy sequence of SubPaths."""
    return SvgPathDataParser(keep_text=keep_text).parse(chunks)


def parse_all(chunks: TextStream) -> List[SubPath]:
    """Parse a whole document eagerly; every subpath is returned with a tuple of segments."""
    return [sub_path.materialized() for sub_path in parse(chunks)]
