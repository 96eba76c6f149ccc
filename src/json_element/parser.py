"""Public parse entry points: JSON text -> element.

``parse`` accepts any element kind; ``parse_object``, ``parse_array``,
``parse_string``, ``parse_number``, ``parse_boolean`` and ``parse_null``
require the text to hold exactly that kind.  In every case only whitespace
may surround the element.

This module is the library boundary for grammar errors: the internal
``JsonTokenError`` is converted into ``JsonParseError`` (a ``ValueError``)
whose message names the offset and shows an excerpt of the source.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from json_element.config import ParserConfig
from json_element.errors import JsonParseError, JsonTokenError
from json_element.token.decoders import ElementDecoder
from json_element.token.scanner import Scanner
from json_element.tree.nodes import (
    JsonArray,
    JsonBoolean,
    JsonElement,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
)

__all__ = [
    "parse",
    "parse_array",
    "parse_boolean",
    "parse_null",
    "parse_number",
    "parse_object",
    "parse_string",
]

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=JsonElement)


def _run(
    text: str,
    config: ParserConfig | None,
    select: Callable[[ElementDecoder], Callable[[], E]],
) -> E:
    if not isinstance(text, str):
        msg = f"JSON source must be a str, got {type(text).__name__}"
        raise TypeError(msg)
    config = config if config is not None else ParserConfig()
    decoder = ElementDecoder(Scanner(text), config)
    try:
        return decoder.decode_document(select(decoder))  # type: ignore[return-value]
    except JsonTokenError as exc:
        logger.debug("JSON parse failed: %s at offset %d", exc.kind, exc.index)
        raise JsonParseError.from_token_error(exc, text, config.excerpt_radius) from exc


def parse(text: str, config: ParserConfig | None = None) -> JsonElement:
    """Parse JSON text holding any single element.

    Args:
        text:   JSON text.
        config: Parser limits.  Defaults to ``ParserConfig()``.

    Returns:
        The decoded element.

    Raises:
        JsonParseError: If ``text`` is not valid JSON.

    Example::

        parse('{"a":1,"b":[true,false]}').compact()
        # '{"a":1,"b":[true,false]}'
    """
    return _run(text, config, lambda decoder: decoder.decode_element)


def parse_object(text: str, config: ParserConfig | None = None) -> JsonObject:
    """Parse JSON text holding a single object."""
    return _run(text, config, lambda decoder: decoder.decode_object)


def parse_array(text: str, config: ParserConfig | None = None) -> JsonArray:
    """Parse JSON text holding a single array."""
    return _run(text, config, lambda decoder: decoder.decode_array)


def parse_string(text: str, config: ParserConfig | None = None) -> JsonString:
    return _run(text, config, lambda decoder: decoder.decode_string)


def parse_number(text: str, config: ParserConfig | None = None) -> JsonNumber:
    return _run(text, config, lambda decoder: decoder.decode_number)


def parse_boolean(text: str, config: ParserConfig | None = None) -> JsonBoolean:
    return _run(text, config, lambda decoder: decoder.decode_boolean)


def parse_null(text: str, config: ParserConfig | None = None) -> JsonNull:
    return _run(text, config, lambda decoder: decoder.decode_null)
