"""Error types raised while parsing JSON text and walking element trees.

Two families live here:

- Grammar errors.  ``JsonTokenError`` is raised by the scanner and the
  decoders with the offending character offset and a ``TokenErrorKind``
  message key.  The parse entry points convert it into ``JsonParseError``
  (a ``ValueError``) whose message embeds an excerpt of the source.
- Path errors.  ``PathArgumentError``, ``PathNotFoundError`` and
  ``PathTypeError`` share the ``JsonPathError`` base so callers can catch
  them together, while each also subclasses the closest builtin.
"""

from __future__ import annotations

import re
from enum import StrEnum, auto

__all__ = [
    "JsonParseError",
    "JsonPathError",
    "JsonTokenError",
    "PathArgumentError",
    "PathNotFoundError",
    "PathTypeError",
    "TokenErrorKind",
]

_EXCERPT_BLANKS = re.compile(r"[\r\n\t]")


class TokenErrorKind(StrEnum):
    """Message keys for grammar errors.

    Values are the lowercased member names, e.g. ``"unexpected_eof"``.
    """

    UNEXPECTED_EOF = auto()
    UNEXPECTED_TOKEN = auto()
    MISPLACED_COMMA = auto()
    EXPECTED_COMMA = auto()
    EXPECTED_COLON = auto()
    EXPECTED_OPEN = auto()
    INVALID_LITERAL = auto()
    INVALID_NUMBER = auto()
    INVALID_ESCAPE = auto()
    INVALID_UNICODE_ESCAPE = auto()
    CONTROL_CHARACTER = auto()
    NON_STRING_KEY = auto()
    TRAILING_DATA = auto()
    DEPTH_EXCEEDED = auto()


_DEFAULT_MESSAGES: dict[TokenErrorKind, str] = {
    TokenErrorKind.UNEXPECTED_EOF: "Unexpected end of input",
    TokenErrorKind.UNEXPECTED_TOKEN: "Unexpected token",
    TokenErrorKind.MISPLACED_COMMA: "Misplaced comma",
    TokenErrorKind.EXPECTED_COMMA: "Expected: ,",
    TokenErrorKind.EXPECTED_COLON: "Expected: :",
    TokenErrorKind.EXPECTED_OPEN: "Expected an opening token",
    TokenErrorKind.INVALID_LITERAL: "Invalid literal",
    TokenErrorKind.INVALID_NUMBER: "Invalid number",
    TokenErrorKind.INVALID_ESCAPE: "Invalid escaped char",
    TokenErrorKind.INVALID_UNICODE_ESCAPE: "Encoded char must be in hex",
    TokenErrorKind.CONTROL_CHARACTER: "Unescaped control character in string",
    TokenErrorKind.NON_STRING_KEY: "Keys in objects must be strings",
    TokenErrorKind.TRAILING_DATA: "Unexpected data after the value",
    TokenErrorKind.DEPTH_EXCEEDED: "Maximum nesting depth exceeded",
}


def render_excerpt(source: str, index: int, radius: int = 25) -> str:
    """Render the characters around ``index`` with the target wrapped in ``<>``.

    Line breaks and tabs are flattened to spaces so the excerpt always fits
    on a single line.  An index at (or past) the end renders as ``<>``.
    """
    length = len(source)
    before = source[max(0, index - radius) : min(length, index)]
    target = source[index] if 0 <= index < length else ""
    after = source[min(length, index + 1) : min(length, index + 1 + radius)]
    return _EXCERPT_BLANKS.sub(" ", f"{before}<{target}>{after}")


class JsonTokenError(Exception):
    """Lexical or grammar violation detected at a character offset.

    Attributes:
        kind:    Which rule was violated (see ``TokenErrorKind``).
        index:   Zero-based character offset of the offending character.
        message: Human-readable description without the excerpt.
    """

    def __init__(
        self,
        kind: TokenErrorKind,
        index: int,
        message: str | None = None,
    ) -> None:
        self.kind = kind
        self.index = index
        self.message = message if message is not None else _DEFAULT_MESSAGES[kind]
        super().__init__(f"{self.message} at offset {index}")

    def format_message(self, source: str, radius: int = 25) -> str:
        """Return the message followed by an excerpt of ``source`` at the offset."""
        excerpt = render_excerpt(source, self.index, radius)
        return f"{self.message} at offset {self.index}: {excerpt}"


class JsonParseError(ValueError):
    """The single error raised by the parse entry points for malformed text.

    Attributes:
        kind:    Message key of the underlying grammar violation.
        offset:  Zero-based character offset of the failure.
        excerpt: Rendered source excerpt around ``offset``.
    """

    def __init__(self, message: str, kind: TokenErrorKind, offset: int, excerpt: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.offset = offset
        self.excerpt = excerpt

    @classmethod
    def from_token_error(
        cls, error: JsonTokenError, source: str, radius: int = 25
    ) -> JsonParseError:
        return cls(
            error.format_message(source, radius),
            kind=error.kind,
            offset=error.index,
            excerpt=render_excerpt(source, error.index, radius),
        )


class JsonPathError(Exception):
    """Base class for failures while walking a path through an element tree.

    Attributes:
        path: The remaining path (rendered) starting at the failing segment.
    """

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


class PathArgumentError(JsonPathError, ValueError):
    """A segment addressing an array is not a non-negative integer index."""


class PathNotFoundError(JsonPathError, LookupError):
    """A non-optional intermediate segment does not exist."""


class PathTypeError(JsonPathError, TypeError):
    """A non-lenient intermediate segment resolves to a scalar element."""
