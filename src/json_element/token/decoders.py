"""ElementDecoder: recursive-descent decoding of JSON text into elements.

One ``decode_*`` method exists per element kind.  Each verifies its opening
token and consumes exactly one grammar production from the ``Scanner``;
the composite decoders loop over their children and recurse through
``decode_element``, which dispatches on a single peeked character:

    ``{`` object, ``[`` array, ``"`` string, ``t``/``f`` boolean,
    ``n`` null, ``-`` or a digit number.

No backtracking happens across element kinds once a dispatch decision is
made.  Every violation raises ``JsonTokenError``; no partial tree escapes.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from decimal import Decimal, InvalidOperation

from json_element.config import ParserConfig
from json_element.errors import TokenErrorKind
from json_element.token.scanner import Scanner
from json_element.tree.nodes import (
    FALSE,
    NULL,
    TRUE,
    JsonArray,
    JsonBoolean,
    JsonElement,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
)

__all__ = ["ElementDecoder"]

# RFC 8259 number grammar; leading zeros are not allowed.
_NUMBER_RE = re.compile(r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?")
# Characters that may not directly follow a complete number literal.
_NUMBER_TAIL = frozenset("0123456789.eE+-")
# A run of string characters needing no further inspection.
_STRING_RUN_RE = re.compile(r'[^"\\\x00-\x1f]+')
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_SHORT_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


class ElementDecoder:
    """Decodes elements from a ``Scanner``.

    A decoder instance is single use: it tracks the current nesting depth
    while decoding one document.

    Example::

        decoder = ElementDecoder(Scanner('{"a": [1, true]}'))
        element = decoder.decode_document()
        element.compact()  # '{"a":[1,true]}'
    """

    def __init__(self, scanner: Scanner, config: ParserConfig | None = None) -> None:
        self._scanner = scanner
        self._config = config if config is not None else ParserConfig()
        self._depth = 0

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def decode_document(
        self, decode: Callable[[], JsonElement] | None = None
    ) -> JsonElement:
        """Decode one element surrounded only by optional whitespace.

        Args:
            decode: The kind-specific decode method to apply.  Defaults to
                ``decode_element`` (any kind).

        Raises:
            JsonTokenError: ``trailing_data`` if anything but whitespace
                follows the element, or any error of the element decoder.
        """
        scanner = self._scanner
        scanner.skip_whitespace()
        element = (decode or self.decode_element)()
        scanner.skip_whitespace()
        if not scanner.at_end():
            raise scanner.error(TokenErrorKind.TRAILING_DATA)
        return element

    def decode_element(self) -> JsonElement:
        """Decode the element starting at the cursor, whatever its kind."""
        scanner = self._scanner
        char = scanner.peek()

        if char == "{":
            return self.decode_object()
        if char == "[":
            return self.decode_array()
        if char == '"':
            return self.decode_string()
        if char in ("t", "f"):
            return self.decode_boolean()
        if char == "n":
            return self.decode_null()
        if char == "-" or "0" <= char <= "9":
            return self.decode_number()

        raise scanner.error(TokenErrorKind.UNEXPECTED_TOKEN)

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    def decode_null(self) -> JsonNull:
        self._scanner.expect_word("null", TokenErrorKind.INVALID_LITERAL)
        return NULL

    def decode_boolean(self) -> JsonBoolean:
        scanner = self._scanner
        if scanner.peek() == "t":
            scanner.expect_word("true", TokenErrorKind.INVALID_LITERAL)
            return TRUE
        scanner.expect_word("false", TokenErrorKind.INVALID_LITERAL)
        return FALSE

    def decode_number(self) -> JsonNumber:
        """Decode a number literal into an exact ``Decimal``-backed element."""
        scanner = self._scanner
        start = scanner.index
        literal = scanner.match(_NUMBER_RE)
        if literal is None:
            raise scanner.error(TokenErrorKind.INVALID_NUMBER, index=start)
        # "01", "1.", "1e" and friends: the grammar stopped mid-literal.
        if scanner.maybe_peek() in _NUMBER_TAIL:
            raise scanner.error(TokenErrorKind.INVALID_NUMBER)
        try:
            value = Decimal(literal)
        except InvalidOperation:
            # Exponent beyond what Decimal can represent.
            raise scanner.error(TokenErrorKind.INVALID_NUMBER, index=start) from None
        return JsonNumber(value)

    def decode_string(self) -> JsonString:
        return JsonString(self._decode_text())

    def _decode_text(self) -> str:
        scanner = self._scanner
        scanner.expect('"', TokenErrorKind.EXPECTED_OPEN)
        parts: list[str] = []

        while True:
            run = scanner.match(_STRING_RUN_RE)
            if run is not None:
                parts.append(run)
            char = scanner.advance()
            if char == '"':
                return "".join(parts)
            if char == "\\":
                parts.append(self._decode_escape())
                continue
            raise scanner.error(
                TokenErrorKind.CONTROL_CHARACTER, index=scanner.index - 1
            )

    def _decode_escape(self) -> str:
        scanner = self._scanner
        char = scanner.advance()
        if char in _SHORT_ESCAPES:
            return _SHORT_ESCAPES[char]
        if char != "u":
            raise scanner.error(TokenErrorKind.INVALID_ESCAPE, index=scanner.index - 1)

        code = self._decode_hex4()
        if 0xD800 <= code <= 0xDBFF and self._peek_low_surrogate():
            scanner.index += 2
            low = self._decode_hex4()
            code = 0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)
        # Lone surrogates are kept as-is.
        return chr(code)

    def _decode_hex4(self) -> int:
        scanner = self._scanner
        digits = []
        for _ in range(4):
            char = scanner.advance()
            if char not in _HEX_DIGITS:
                raise scanner.error(
                    TokenErrorKind.INVALID_UNICODE_ESCAPE, index=scanner.index - 1
                )
            digits.append(char)
        return int("".join(digits), 16)

    def _peek_low_surrogate(self) -> bool:
        source = self._scanner.source
        index = self._scanner.index
        if not source.startswith("\\u", index):
            return False
        digits = source[index + 2 : index + 6]
        if len(digits) != 4 or not all(char in _HEX_DIGITS for char in digits):
            return False
        return 0xDC00 <= int(digits, 16) <= 0xDFFF

    # ------------------------------------------------------------------
    # Composites
    # ------------------------------------------------------------------

    def decode_array(self) -> JsonArray:
        """Decode ``[ element (, element)* ]``; trailing commas are rejected."""
        scanner = self._scanner
        self._enter()
        scanner.expect("[", TokenErrorKind.EXPECTED_OPEN)
        items: list[JsonElement] = []

        scanner.skip_whitespace()
        if scanner.peek() == "]":
            scanner.advance()
            self._depth -= 1
            return JsonArray(items)

        comma = None
        while True:
            scanner.skip_whitespace()
            char = scanner.peek()
            if char == ",":
                raise scanner.error(TokenErrorKind.MISPLACED_COMMA)
            if char == "]":
                raise scanner.error(TokenErrorKind.MISPLACED_COMMA, index=comma)

            items.append(self.decode_element())

            scanner.skip_whitespace()
            char = scanner.peek()
            if char == "]":
                scanner.advance()
                break
            if char != ",":
                raise scanner.error(TokenErrorKind.EXPECTED_COMMA)
            comma = scanner.index
            scanner.advance()

        self._depth -= 1
        return JsonArray(items)

    def decode_object(self) -> JsonObject:
        """Decode ``{ "key": element (, "key": element)* }``.

        A repeated key keeps the position of its first occurrence and takes
        the value of its last one.
        """
        scanner = self._scanner
        self._enter()
        scanner.expect("{", TokenErrorKind.EXPECTED_OPEN)
        members: dict[str, JsonElement] = {}

        scanner.skip_whitespace()
        if scanner.peek() == "}":
            scanner.advance()
            self._depth -= 1
            return JsonObject(members)

        comma = None
        while True:
            scanner.skip_whitespace()
            char = scanner.peek()
            if char == ",":
                raise scanner.error(TokenErrorKind.MISPLACED_COMMA)
            if char == "}":
                raise scanner.error(TokenErrorKind.MISPLACED_COMMA, index=comma)
            if char != '"':
                raise scanner.error(TokenErrorKind.NON_STRING_KEY)

            key = self._decode_text()
            scanner.skip_whitespace()
            scanner.expect(":", TokenErrorKind.EXPECTED_COLON)
            scanner.skip_whitespace()
            members[key] = self.decode_element()

            scanner.skip_whitespace()
            char = scanner.peek()
            if char == "}":
                scanner.advance()
                break
            if char != ",":
                raise scanner.error(TokenErrorKind.EXPECTED_COMMA)
            comma = scanner.index
            scanner.advance()

        self._depth -= 1
        return JsonObject(members)

    def _enter(self) -> None:
        self._depth += 1
        if self._depth > self._config.max_depth:
            raise self._scanner.error(TokenErrorKind.DEPTH_EXCEEDED)
