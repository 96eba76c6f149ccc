"""Element classes for the in-memory JSON document tree.

The element kinds form a closed set described by ``ElementType``:

- scalars:    ``JsonNull``, ``JsonBoolean``, ``JsonNumber``, ``JsonString``
- composites: ``JsonArray``, ``JsonObject`` (both ``JsonStruct`` subclasses)

Only composites carry the path operations (``query``, ``assign``, ``delete``,
``update``); scalars have no traversal surface at all.  Equality and hashing
are structural for every kind, and numbers compare by value so ``1`` and
``1.0`` are equal.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import (
    Callable,
    Iterable,
    Iterator,
    Mapping,
    MutableSequence,
)
from decimal import Decimal, InvalidOperation
from enum import StrEnum, auto
from typing import TYPE_CHECKING, Any, ClassVar, overload

if TYPE_CHECKING:
    from json_element.config import ParserConfig
    from json_element.path import JsonPath

__all__ = [
    "FALSE",
    "NULL",
    "TRUE",
    "ElementType",
    "JsonArray",
    "JsonBoolean",
    "JsonElement",
    "JsonNull",
    "JsonNumber",
    "JsonObject",
    "JsonString",
    "JsonStruct",
    "MAX_ARRAY_INDEX",
]

_ESCAPE_RE = re.compile(r'[\\"\x00-\x1f]')
_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}
_INDEX_RE = re.compile(r"[0-9]+")
# Largest index a path segment may address in an array (signed 32-bit range).
MAX_ARRAY_INDEX = 2**31 - 1


def quote(text: str) -> str:
    """Render ``text`` as a JSON string literal.

    The forward slash and non-ASCII characters are never escaped; control
    characters without a short escape become ``\\u00XX``.
    """

    def _replace(found: re.Match[str]) -> str:
        char = found.group()
        return _ESCAPES.get(char) or f"\\u{ord(char):04x}"

    return f'"{_ESCAPE_RE.sub(_replace, text)}"'


def _require_element(value: object) -> JsonElement:
    if not isinstance(value, JsonElement):
        msg = f"expected a JsonElement, got {type(value).__name__}"
        raise TypeError(msg)
    return value


def _render(root: JsonElement, indent: str, tab: str | None) -> str:
    """Serialize ``root`` with an explicit work stack; ``tab=None`` is compact.

    Nesting depth is not limited by the interpreter stack.
    """
    parts: list[str] = []
    stack: list[str | tuple[JsonElement, str]] = [(root, indent)]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue

        element, level = item
        if isinstance(element, JsonArray):
            opening, closing = "[", "]"
            children: list[tuple[str | None, JsonElement]] = [
                (None, child) for child in element._items
            ]
        elif isinstance(element, JsonObject):
            opening, closing = "{", "}"
            children = list(element._members.items())
        else:
            parts.append(element.compact())
            continue
        if not children:
            parts.append(opening + closing)
            continue

        inner = level if tab is None else level + tab
        colon = ":" if tab is None else ": "
        work: list[str | tuple[JsonElement, str]] = [opening]
        for position, (key, child) in enumerate(children):
            if position:
                work.append(",")
            if tab is not None:
                work.append("\n" + inner)
            if key is not None:
                work.append(quote(key) + colon)
            work.append((child, inner))
        if tab is not None:
            work.append("\n" + level)
        work.append(closing)
        stack.extend(reversed(work))
    return "".join(parts)


class ElementType(StrEnum):
    """Enumeration of the six JSON element kinds.

    StrEnum values are the lowercased member names (Python 3.11+):
    - NULL    -> "null"
    - BOOLEAN -> "boolean"
    - NUMBER  -> "number"
    - STRING  -> "string"
    - ARRAY   -> "array"   (composite)
    - OBJECT  -> "object"  (composite)
    """

    NULL = auto()
    BOOLEAN = auto()
    NUMBER = auto()
    STRING = auto()
    ARRAY = auto()
    OBJECT = auto()


class JsonElement(ABC):
    """A node in the document tree, scalar or composite."""

    __slots__ = ()

    element_type: ClassVar[ElementType]
    # Name of the matching entry point in json_element.parser.
    _parser_entry: ClassVar[str] = "parse"

    @classmethod
    def parse(cls, text: str, config: ParserConfig | None = None) -> Any:
        """Parse ``text`` into an element of this kind.

        Raises:
            JsonParseError: If ``text`` is not a single element of this kind
                surrounded by optional whitespace.
        """
        from json_element import parser

        return getattr(parser, cls._parser_entry)(text, config)

    @abstractmethod
    def compact(self) -> str:
        """Render the minimal single-line JSON text of this element."""

    def pretty(self, indent: str = "", tab: str = "\t") -> str:
        """Render indented JSON text; scalars ignore ``indent`` and ``tab``."""
        return self.compact()

    @abstractmethod
    def clone(self) -> JsonElement:
        """Return a copy of this element (shallow for composites)."""

    @abstractmethod
    def to_value(self) -> Any:
        """Convert this element to plain Python values."""

    def __copy__(self) -> JsonElement:
        return self.clone()

    def __str__(self) -> str:
        return self.compact()


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------


class JsonNull(JsonElement):
    """The JSON ``null`` literal.  There is exactly one instance, ``NULL``."""

    __slots__ = ()

    element_type = ElementType.NULL
    _parser_entry = "parse_null"
    _instance: ClassVar[JsonNull | None] = None

    def __new__(cls) -> JsonNull:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def compact(self) -> str:
        return "null"

    def clone(self) -> JsonNull:
        return self

    def to_value(self) -> None:
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonElement):
            return NotImplemented
        return isinstance(other, JsonNull)

    def __hash__(self) -> int:
        return hash(None)

    def __repr__(self) -> str:
        return "JsonNull()"


class JsonBoolean(JsonElement):
    """The JSON ``true`` / ``false`` literals."""

    __slots__ = ("_value",)

    element_type = ElementType.BOOLEAN
    _parser_entry = "parse_boolean"

    def __init__(self, value: bool) -> None:
        if not isinstance(value, bool):
            msg = f"JsonBoolean requires a bool, got {type(value).__name__}"
            raise TypeError(msg)
        self._value = value

    @property
    def value(self) -> bool:
        return self._value

    def compact(self) -> str:
        return "true" if self._value else "false"

    def clone(self) -> JsonBoolean:
        return self

    def to_value(self) -> bool:
        return self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonElement):
            return NotImplemented
        return isinstance(other, JsonBoolean) and other._value is self._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"JsonBoolean({self._value!r})"


class JsonNumber(JsonElement):
    """A JSON number held as an exact ``Decimal``.

    Equality and hashing follow the numeric value, not the literal text:
    ``JsonNumber("1") == JsonNumber("1.0")``.  Floats are converted through
    their shortest ``repr`` so ``JsonNumber(0.1)`` holds ``Decimal("0.1")``.
    """

    __slots__ = ("_value",)

    element_type = ElementType.NUMBER
    _parser_entry = "parse_number"

    def __init__(self, value: Decimal | int | float | str) -> None:
        if isinstance(value, bool):
            msg = "JsonNumber does not accept bool values"
            raise TypeError(msg)
        if isinstance(value, Decimal):
            number = value
        elif isinstance(value, int):
            number = Decimal(value)
        elif isinstance(value, float):
            number = Decimal(repr(value))
        elif isinstance(value, str):
            try:
                number = Decimal(value)
            except InvalidOperation:
                msg = f"invalid number literal: {value!r}"
                raise ValueError(msg) from None
        else:
            msg = f"JsonNumber requires a number, got {type(value).__name__}"
            raise TypeError(msg)
        if not number.is_finite():
            msg = f"JSON numbers must be finite, got {number}"
            raise ValueError(msg)
        self._value = number

    @property
    def value(self) -> Decimal:
        return self._value

    def compact(self) -> str:
        return str(self._value)

    def clone(self) -> JsonNumber:
        return self

    def to_value(self) -> int | Decimal:
        """Return an ``int`` for plain integers, otherwise the exact ``Decimal``."""
        if self._value.as_tuple().exponent == 0:
            return int(self._value)
        return self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonElement):
            return NotImplemented
        return isinstance(other, JsonNumber) and other._value == self._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"JsonNumber({str(self._value)!r})"


class JsonString(JsonElement):
    """A JSON string."""

    __slots__ = ("_value",)

    element_type = ElementType.STRING
    _parser_entry = "parse_string"

    def __init__(self, value: str) -> None:
        if not isinstance(value, str):
            msg = f"JsonString requires a str, got {type(value).__name__}"
            raise TypeError(msg)
        self._value = value

    @property
    def value(self) -> str:
        return self._value

    def compact(self) -> str:
        return quote(self._value)

    def clone(self) -> JsonString:
        return self

    def to_value(self) -> str:
        return self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonElement):
            return NotImplemented
        return isinstance(other, JsonString) and other._value == self._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"JsonString({self._value!r})"


NULL = JsonNull()
TRUE = JsonBoolean(True)
FALSE = JsonBoolean(False)


# ---------------------------------------------------------------------------
# Composites
# ---------------------------------------------------------------------------


class JsonStruct(JsonElement):
    """A composite element that can contain other elements.

    Subclasses supply four hop primitives (``resolve_key``, ``child``,
    ``put_child``, ``remove_child``); the path operations are shared and run
    through ``json_element.engine``.

    Paths may be given as ``JsonPath`` instances or as path strings, e.g.
    ``"users.0.name"``, ``"meta?.version"`` (optional) or ``"tags??.0"``
    (optional and lenient).
    """

    __slots__ = ()

    # ------------------------------------------------------------------
    # Path operations
    # ------------------------------------------------------------------

    def query(self, path: JsonPath | str) -> JsonElement | None:
        """Return the element at ``path``, or None if it does not exist.

        Raises:
            PathArgumentError: An array was addressed with a non-numeric segment.
            PathNotFoundError: A non-optional intermediate segment is missing.
            PathTypeError: A non-lenient intermediate segment is a scalar.
        """
        from json_element import engine

        return engine.query(self, path)

    def assign(self, path: JsonPath | str, element: JsonElement) -> JsonElement | None:
        """Set the element at ``path`` and return the previous one (or None).

        Assigning past the end of an array pads it with ``NULL`` first.
        Raises the same errors as ``query``.
        """
        from json_element import engine

        return engine.assign(self, path, element)

    def delete(self, path: JsonPath | str) -> JsonElement | None:
        """Remove the element at ``path`` and return it (or None if absent)."""
        from json_element import engine

        return engine.delete(self, path)

    def update(
        self,
        path: JsonPath | str,
        operator: Callable[[JsonElement | None], JsonElement | None],
    ) -> JsonElement | None:
        """Replace the element at ``path`` with ``operator(current)``.

        Returning the same object is a no-op, returning None deletes the
        element.  Exceptions raised by ``operator`` propagate unchanged.

        Returns:
            The element at ``path`` after the call, or None if it was deleted.
        """
        from json_element import engine

        return engine.update(self, path, operator)

    # ------------------------------------------------------------------
    # Hop primitives
    # ------------------------------------------------------------------

    @abstractmethod
    def resolve_key(self, name: str) -> int | str | None:
        """Translate a segment name into a key, or None if it can never be one."""

    @abstractmethod
    def child(self, key: Any) -> JsonElement | None:
        """Return the child stored under ``key``, or None if absent."""

    @abstractmethod
    def put_child(self, key: Any, element: JsonElement) -> JsonElement | None:
        """Store ``element`` under ``key`` and return the previous child."""

    @abstractmethod
    def remove_child(self, key: Any) -> JsonElement | None:
        """Remove the child under ``key`` and return it, or None if absent."""


class JsonArray(JsonStruct, MutableSequence[JsonElement]):
    """An ordered, growable sequence of elements.

    Behaves like a ``list`` restricted to ``JsonElement`` items.  Segment
    names addressing an array must be non-negative decimal integers no
    larger than ``MAX_ARRAY_INDEX``.

    Example::

        array = JsonArray()
        array.assign("3", JsonString("x"))
        array.compact()  # '[null,null,null,"x"]'
    """

    __slots__ = ("_items",)

    element_type = ElementType.ARRAY
    _parser_entry = "parse_array"

    def __init__(self, items: Iterable[JsonElement] = ()) -> None:
        self._items: list[JsonElement] = [_require_element(item) for item in items]

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------

    @overload
    def __getitem__(self, index: int) -> JsonElement: ...

    @overload
    def __getitem__(self, index: slice) -> JsonArray: ...

    def __getitem__(self, index: int | slice) -> JsonElement | JsonArray:
        if isinstance(index, slice):
            return JsonArray(self._items[index])
        return self._items[index]

    def __setitem__(self, index: Any, value: Any) -> None:
        if isinstance(index, slice):
            self._items[index] = [_require_element(item) for item in value]
        else:
            self._items[index] = _require_element(value)

    def __delitem__(self, index: int | slice) -> None:
        del self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[JsonElement]:
        return iter(self._items)

    def insert(self, index: int, value: JsonElement) -> None:
        self._items.insert(index, _require_element(value))

    # ------------------------------------------------------------------
    # Hop primitives
    # ------------------------------------------------------------------

    def resolve_key(self, name: str) -> int | None:
        if _INDEX_RE.fullmatch(name) is None:
            return None
        # Bounded before int() so very long digit runs stay cheap.
        if len(name.lstrip("0")) > len(str(MAX_ARRAY_INDEX)):
            return None
        index = int(name)
        return index if index <= MAX_ARRAY_INDEX else None

    def child(self, key: int) -> JsonElement | None:
        return self._items[key] if key < len(self._items) else None

    def put_child(self, key: int, element: JsonElement) -> JsonElement | None:
        element = _require_element(element)
        if key >= len(self._items):
            self._items.extend([NULL] * (key - len(self._items) + 1))
        previous = self._items[key]
        self._items[key] = element
        return previous

    def remove_child(self, key: int) -> JsonElement | None:
        return self._items.pop(key) if key < len(self._items) else None

    # ------------------------------------------------------------------
    # JsonElement
    # ------------------------------------------------------------------

    def compact(self) -> str:
        return _render(self, "", None)

    def pretty(self, indent: str = "", tab: str = "\t") -> str:
        return _render(self, indent, tab)

    def clone(self) -> JsonArray:
        clone = JsonArray()
        clone._items = list(self._items)
        return clone

    def to_value(self) -> list[Any]:
        return [item.to_value() for item in self._items]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonElement):
            return NotImplemented
        return isinstance(other, JsonArray) and other._items == self._items

    def __hash__(self) -> int:
        return hash(tuple(self._items))

    def __repr__(self) -> str:
        return f"JsonArray({self._items!r})"


class JsonObject(JsonStruct, Mapping[str, JsonElement]):
    """An insertion-ordered mapping of string keys to elements.

    Re-assigning an existing key keeps its position; a new key is appended.
    Supports item assignment and deletion like a ``dict``.  ``update`` is
    the path operation inherited from ``JsonStruct``, not ``dict.update``;
    use ``merge`` to copy members in bulk.
    """

    __slots__ = ("_members",)

    element_type = ElementType.OBJECT
    _parser_entry = "parse_object"

    def __init__(
        self,
        members: Mapping[str, JsonElement] | Iterable[tuple[str, JsonElement]] = (),
    ) -> None:
        self._members: dict[str, JsonElement] = {}
        self.merge(members)

    def merge(
        self,
        members: Mapping[str, JsonElement] | Iterable[tuple[str, JsonElement]],
    ) -> None:
        """Upsert every ``(key, element)`` pair from ``members`` in order."""
        pairs = members.items() if isinstance(members, Mapping) else members
        for key, value in pairs:
            self[key] = value

    # ------------------------------------------------------------------
    # Mapping protocol
    # ------------------------------------------------------------------

    def __getitem__(self, key: str) -> JsonElement:
        return self._members[key]

    def __setitem__(self, key: str, value: JsonElement) -> None:
        if not isinstance(key, str):
            msg = f"JsonObject keys must be str, got {type(key).__name__}"
            raise TypeError(msg)
        self._members[key] = _require_element(value)

    def __delitem__(self, key: str) -> None:
        del self._members[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, key: object) -> bool:
        return key in self._members

    def pop(self, key: str, *default: JsonElement | None) -> JsonElement | None:
        return self._members.pop(key, *default)

    def clear(self) -> None:
        self._members.clear()

    # ------------------------------------------------------------------
    # Hop primitives
    # ------------------------------------------------------------------

    def resolve_key(self, name: str) -> str:
        return name

    def child(self, key: str) -> JsonElement | None:
        return self._members.get(key)

    def put_child(self, key: str, element: JsonElement) -> JsonElement | None:
        previous = self._members.get(key)
        self[key] = element
        return previous

    def remove_child(self, key: str) -> JsonElement | None:
        return self._members.pop(key, None)

    # ------------------------------------------------------------------
    # JsonElement
    # ------------------------------------------------------------------

    def compact(self) -> str:
        return _render(self, "", None)

    def pretty(self, indent: str = "", tab: str = "\t") -> str:
        return _render(self, indent, tab)

    def clone(self) -> JsonObject:
        clone = JsonObject()
        clone._members = dict(self._members)
        return clone

    def to_value(self) -> dict[str, Any]:
        return {key: value.to_value() for key, value in self._members.items()}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonElement):
            return NotImplemented
        return isinstance(other, JsonObject) and other._members == self._members

    def __hash__(self) -> int:
        return hash(frozenset(self._members.items()))

    def __repr__(self) -> str:
        return f"JsonObject({self._members!r})"
