"""Exceptions raised while reading, writing and transforming path data."""

from __future__ import annotations

from typing import Optional


class PathDataError(ValueError):
    """Base class for all errors caused by invalid path data."""


class ParseError(PathDataError):
    """Raised when path-data text cannot be parsed.

    Attributes:
        token: the raw text (command or parameter) that caused the failure, if known
    """

    def __init__(self, message: str, token: Optional[str] = None):
        super().__init__(message)
        self.token = token


class MalformedDocument(ParseError):
    """Subpath text does not begin with a move directive."""


class UnknownCommand(ParseError):
    """Command letter outside the recognized set."""


class InvalidParameterCount(ParseError):
    """Parameter count is not a positive multiple of the command's group size."""


class InvalidNumber(ParseError):
    """Parameter is not a (finite) number, or a flag is not 0 or 1."""


class ArcTransformError(PathDataError):
    """Arc segments cannot be mapped point-wise; normalize them to cubics first."""
