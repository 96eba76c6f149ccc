"""Tree subpackage for the in-memory JSON element model.

Re-exports the public API for the tree module:
- ElementType: StrEnum of the six element kinds
- JsonElement: abstract base of every element
- JsonNull, JsonBoolean, JsonNumber, JsonString: scalar elements
- JsonStruct: composite base carrying query/assign/delete/update
- JsonArray, JsonObject: the two composite elements
- NULL, TRUE, FALSE: shared scalar constants
- ElementBuilder / from_value: native Python value -> element conversion
"""

from json_element.tree.builder import ElementBuilder, from_value
from json_element.tree.nodes import (
    FALSE,
    NULL,
    TRUE,
    ElementType,
    JsonArray,
    JsonBoolean,
    JsonElement,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonStruct,
)

__all__ = [
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
    "JsonString",
    "JsonStruct",
    "from_value",
]
