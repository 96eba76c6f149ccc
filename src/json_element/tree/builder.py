"""ElementBuilder: converts plain Python values into typed element trees.

Uses recursive dispatch to convert dicts, lists/tuples and scalar values
into ``JsonElement`` instances.  Existing elements pass through untouched,
so mixed trees (native containers holding elements) are accepted.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from json_element.tree.nodes import (
    FALSE,
    NULL,
    TRUE,
    JsonArray,
    JsonElement,
    JsonNumber,
    JsonObject,
    JsonString,
)

__all__ = ["ElementBuilder", "from_value"]

# Type alias for native values the builder understands
NativeValue = (
    dict[str, Any] | list[Any] | tuple[Any, ...] | str | int | float | Decimal | bool | None
)


@dataclass
class ElementBuilder:
    """Converts native Python values into a ``JsonElement`` tree.

    The dispatch order is critical: bool MUST be checked before int because
    bool is a subclass of int in Python (isinstance(True, int) is True).

    Example::

        builder = ElementBuilder()
        element = builder.build({"name": "John", "tags": ["a", "b"]})
        element.compact()  # '{"name":"John","tags":["a","b"]}'
    """

    def build(self, value: NativeValue | JsonElement) -> JsonElement:
        """Convert a native value to an element.

        Args:
            value: An element, or None, bool, int, float, Decimal, str, a list
                or tuple of convertible values, or a dict with str keys.

        Returns:
            The matching element; ``None`` becomes ``NULL``.

        Raises:
            TypeError: If ``value`` (or anything nested in it) has no JSON
                counterpart, or a dict key is not a str.
            ValueError: If a number is not finite.
        """
        if isinstance(value, JsonElement):
            return value

        if value is None:
            return NULL

        # CRITICAL: bool MUST be checked before int
        if isinstance(value, bool):
            return TRUE if value else FALSE

        if isinstance(value, (int, float, Decimal)):
            return JsonNumber(value)

        if isinstance(value, str):
            return JsonString(value)

        if isinstance(value, dict):
            return self._build_object(value)

        if isinstance(value, (list, tuple)):
            return JsonArray(self.build(item) for item in value)

        msg = f"Unsupported JSON value type: {type(value)!r}"
        raise TypeError(msg)

    def _build_object(self, obj: dict[Any, Any]) -> JsonObject:
        members: list[tuple[str, JsonElement]] = []
        for key, val in obj.items():
            if not isinstance(key, str):
                msg = f"Object keys must be str, got {type(key)!r}"
                raise TypeError(msg)
            members.append((key, self.build(val)))
        return JsonObject(members)


# Module-level builder (stateless, safe to share)
_builder = ElementBuilder()


def from_value(value: NativeValue | JsonElement) -> JsonElement:
    """Convert a native Python value into an element (see ``ElementBuilder``)."""
    return _builder.build(value)
