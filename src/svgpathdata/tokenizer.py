"""Incremental splitting of path-data text delivered in arbitrary chunks.

Both splitters buffer the incoming text and peel off complete pieces as soon as
the start of the following piece has been seen. The result does not depend on
where the chunk boundaries fall.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Iterator, Union

from svgpathdata.errors import MalformedDocument, UnknownCommand

logger = logging.getLogger(__name__)

# "e" is excluded from the command letters as it belongs to the exponent of a number.
_SUBPATH_RE = re.compile(r"^\s*m[^a-df-z]*[^mz]*(?:z|(?=m))", re.IGNORECASE)
_COMMAND_RE = re.compile(r"^\s*[a-df-z][^a-df-z]*(?=[a-df-z])", re.IGNORECASE)
_COMMAND_LETTER_RE = re.compile(r"[a-df-z]", re.IGNORECASE)

TextStream = Union[str, Iterable[str]]


def as_chunks(text: TextStream) -> Iterable[str]:
    """Treat a plain string as a stream consisting of one chunk."""
    if isinstance(text, str):
        return (text,)
    return text


###############################################################################
# SubPathSplitter
###############################################################################


class SubPathSplitter:
    """Splits a path-data document into the texts of its subpaths."""

    @staticmethod
    def split(chunks: TextStream) -> Iterator[str]:
        """
        Lazily yield the untrimmed text of each subpath.

        Each piece runs from a move directive up to (not including) the next move
        directive, or through a close directive. Concatenating the pieces gives the
        input back, apart from blank text following the last close directive.

        Args:
            chunks (TextStream): the document as a string or as an iterable of text chunks

        Yields:
            str: text of one subpath

        Raises:
            MalformedDocument: if the text of a subpath does not begin with "M" or "m"
        """
        buffer = ""
        for chunk in as_chunks(chunks):
            buffer += chunk
            while True:
                match = _SUBPATH_RE.match(buffer)
                if not match:
                    break
                logger.debug("subpath complete: %r", match.group(0))
                yield match.group(0)
                buffer = buffer[match.end() :]
            SubPathSplitter._check_start(buffer)

        if buffer.strip():
            logger.debug("final subpath: %r", buffer)
            yield buffer

    @staticmethod
    def _check_start(buffer: str) -> None:
        """Fail as soon as the pending text is known not to start with a move directive."""
        pending = buffer.lstrip()
        if pending and pending[0] not in "Mm":
            raise MalformedDocument(f"Subpath must start with a move directive: {pending[:32]!r}", pending)


###############################################################################
# CommandTokenizer
###############################################################################


class CommandTokenizer:
    """Splits a command stream into single commands (letter plus raw parameters)."""

    @staticmethod
    def tokenize(chunks: TextStream) -> Iterator[str]:
        """
        Lazily yield each command with its unparsed parameter text.

        Args:
            chunks (TextStream): the command stream as a string or as an iterable of text chunks

        Yields:
            str: one command, e.g. "L100,100 "

        Raises:
            UnknownCommand: if non-blank text precedes the first command letter
        """
        buffer = ""
        for chunk in as_chunks(chunks):
            buffer += chunk
            while True:
                match = _COMMAND_RE.match(buffer)
                if not match:
                    break
                yield match.group(0)
                buffer = buffer[match.end() :]
            CommandTokenizer._check_start(buffer)

        if buffer.strip():
            yield buffer

    @staticmethod
    def _check_start(buffer: str) -> None:
        pending = buffer.lstrip()
        if pending and not _COMMAND_LETTER_RE.match(pending):
            raise UnknownCommand(f"Expected a command letter: {pending[:32]!r}", pending)
