"""json-element - JSON element trees with path-addressed mutation."""

from __future__ import annotations

import logging

from json_element.config import ParserConfig
from json_element.errors import (
    JsonParseError,
    JsonPathError,
    JsonTokenError,
    PathArgumentError,
    PathNotFoundError,
    PathTypeError,
    TokenErrorKind,
)
from json_element.parser import (
    parse,
    parse_array,
    parse_boolean,
    parse_null,
    parse_number,
    parse_object,
    parse_string,
)
from json_element.path import JsonPath, PathCache, Segment
from json_element.tree import (
    FALSE,
    NULL,
    TRUE,
    ElementBuilder,
    ElementType,
    JsonArray,
    JsonBoolean,
    JsonElement,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonStruct,
    from_value,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__: str = "0.1.0"
__all__: list[str] = [
    "FALSE",
    "NULL",
    "TRUE",
    "ElementBuilder",
    "ElementType",
    "JsonArray",
    "JsonBoolean",
    "JsonElement",
    "JsonNull",
    "JsonNumber",
    "JsonObject",
    "JsonParseError",
    "JsonPath",
    "JsonPathError",
    "JsonString",
    "JsonStruct",
    "JsonTokenError",
    "ParserConfig",
    "PathArgumentError",
    "PathCache",
    "PathNotFoundError",
    "PathTypeError",
    "Segment",
    "TokenErrorKind",
    "from_value",
    "parse",
    "parse_array",
    "parse_boolean",
    "parse_null",
    "parse_number",
    "parse_object",
    "parse_string",
]
