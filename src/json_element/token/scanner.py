"""Scanner: buffered character source for the JSON decoders.

The scanner owns the source text and a cursor.  It exposes one character
of lookahead (``peek``), consumption (``advance``), whitespace skipping and
construction of positioned ``JsonTokenError`` instances.  It never
backtracks; the decoders decide what to read from a single peeked character.
"""

from __future__ import annotations

import re

from json_element.errors import JsonTokenError, TokenErrorKind

__all__ = ["WHITESPACE", "Scanner"]

# RFC 8259 insignificant whitespace.
WHITESPACE = frozenset(" \t\n\r")


class Scanner:
    """Cursor over an already-buffered JSON source string.

    Example::

        scanner = Scanner("  [1]")
        scanner.skip_whitespace()
        scanner.peek()     # "["
        scanner.advance()  # "["
        scanner.index      # 3
    """

    __slots__ = ("_length", "_source", "index")

    def __init__(self, source: str) -> None:
        self._source = source
        self._length = len(source)
        self.index = 0

    @property
    def source(self) -> str:
        return self._source

    def at_end(self) -> bool:
        return self.index >= self._length

    def maybe_peek(self) -> str | None:
        """Return the current character, or None at end of input."""
        if self.index >= self._length:
            return None
        return self._source[self.index]

    def peek(self) -> str:
        """Return the current character without consuming it.

        Raises:
            JsonTokenError: ``unexpected_eof`` at end of input.
        """
        if self.index >= self._length:
            raise self.error(TokenErrorKind.UNEXPECTED_EOF)
        return self._source[self.index]

    def advance(self) -> str:
        """Consume and return the current character.

        Raises:
            JsonTokenError: ``unexpected_eof`` at end of input.
        """
        if self.index >= self._length:
            raise self.error(TokenErrorKind.UNEXPECTED_EOF)
        char = self._source[self.index]
        self.index += 1
        return char

    def expect(self, char: str, kind: TokenErrorKind) -> None:
        """Consume ``char`` or raise ``kind`` pointing at the mismatch."""
        if self.peek() != char:
            raise self.error(kind)
        self.index += 1

    def expect_word(self, word: str, kind: TokenErrorKind) -> None:
        """Consume the exact literal ``word`` or raise ``kind``.

        The error offset points at the first character that diverges.
        """
        for char in word:
            current = self.maybe_peek()
            if current is None:
                raise self.error(TokenErrorKind.UNEXPECTED_EOF)
            if current != char:
                raise self.error(kind)
            self.index += 1

    def match(self, pattern: re.Pattern[str]) -> str | None:
        """Consume and return the text matched by ``pattern`` at the cursor."""
        found = pattern.match(self._source, self.index)
        if found is None or found.end() == self.index:
            return None
        self.index = found.end()
        return found.group()

    def skip_whitespace(self) -> None:
        while self.index < self._length and self._source[self.index] in WHITESPACE:
            self.index += 1

    def error(
        self,
        kind: TokenErrorKind,
        message: str | None = None,
        index: int | None = None,
    ) -> JsonTokenError:
        """Build (not raise) a grammar error at ``index`` (defaults to the cursor)."""
        return JsonTokenError(kind, self.index if index is None else index, message)
