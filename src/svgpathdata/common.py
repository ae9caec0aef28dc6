"""Central module containing constants and definitions for SVG path-data processing."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Dict, Literal, Optional

###############################################################################
# Types
###############################################################################


SegmentCmds = Literal[  # Type-Definition for the canonical (absolute) segment commands
    # LineTo (2) - draw a straight line from the current point to (x,y)
    "L",
    # Quadratic Bezier To (4) - draw a quadratic Bezier curve with one control point and an endpoint (x,y)
    "Q",
    # Cubic Bezier To (6) - draw a cubic Bezier curve with two control points and an endpoint (x,y)
    "C",
    # Arc (7) - draw an elliptical arc (rx ry x-axis-rotation large-arc-flag sweep-flag x y)
    "A",
]


###############################################################################
# PathCommandInfo
###############################################################################


@dataclass(frozen=True)
class PathCommandInfo:
    """Metadata for SVG path-data commands.

    Attributes:
        group_size: Number of numeric parameters consumed by one repetition of the command
        segment: Canonical segment command emitted for one group (None for M and Z)
        is_relative: Whether the coordinates are relative to the current point
    """

    group_size: int
    segment: Optional[SegmentCmds]
    is_relative: bool = False


# Command registry with metadata; uppercase = absolute coordinates, lowercase = relative.
COMMAND_INFO: Dict[str, PathCommandInfo] = {
    "M": PathCommandInfo(2, None),
    "m": PathCommandInfo(2, None, True),
    "L": PathCommandInfo(2, "L"),
    "l": PathCommandInfo(2, "L", True),
    "H": PathCommandInfo(1, "L"),
    "h": PathCommandInfo(1, "L", True),
    "V": PathCommandInfo(1, "L"),
    "v": PathCommandInfo(1, "L", True),
    "Q": PathCommandInfo(4, "Q"),
    "q": PathCommandInfo(4, "Q", True),
    "T": PathCommandInfo(2, "Q"),
    "t": PathCommandInfo(2, "Q", True),
    "C": PathCommandInfo(6, "C"),
    "c": PathCommandInfo(6, "C", True),
    "S": PathCommandInfo(4, "C"),
    "s": PathCommandInfo(4, "C", True),
    "A": PathCommandInfo(7, "A"),
    "a": PathCommandInfo(7, "A", True),
    "Z": PathCommandInfo(0, None),
    "z": PathCommandInfo(0, None, True),
}

###############################################################################
# Consts
###############################################################################

# Definition of a number (sign, integer and/or fraction, optional exponent)
SVG_NUMBER: re.Pattern = re.compile(r"[-+]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?")
# Separator between parameters: a run of whitespace and/or a single comma
SVG_SEPARATOR: re.Pattern = re.compile(r"\s*,\s*|\s+")

# Sweeps closer than this (radians) to a multiple of 90 degrees are rounded to it;
# sub-arcs this close to 90 degrees use QUARTER_ARC_KAPPA
ARC_SWEEP_EPSILON: float = 1e-7
# Control point distance of a cubic approximating an exact quarter of the unit circle
QUARTER_ARC_KAPPA: float = 4.0 / 3.0 * (math.sqrt(2.0) - 1.0)

# Separator used when joining serialized fragments into a single string
DEFAULT_SEPARATOR: str = " "


###############################################################################
# Functions
###############################################################################


def format_number(value: float) -> str:
    """Format a float for path-data output.

    Integral values are written without fractional part, all others by the shortest
    representation that reads back to the same float. Negative zero is written as "0".

    Args:
        value (float): the number to format

    Returns:
        str: the textual representation
    """
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def main() -> None:
    """Display the command registry."""
    for letter, info in COMMAND_INFO.items():
        print(f"{letter}: {info}")


if __name__ == "__main__":
    main()
