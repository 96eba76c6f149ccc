"""Path expressions addressing elements inside a composite.

A path is a dot-separated chain of segments, each naming an object key or
an array index.  Two suffixes adjust how an intermediate hop reacts when it
cannot be walked through:

- ``name?``  optional: a missing element yields None instead of raising.
- ``name??`` optional and lenient: additionally, a scalar in the way (or a
  non-numeric index into an array right after it) yields None.

``\\.``, ``\\?`` and ``\\\\`` escape a literal dot, question mark and
backslash inside a name.

Compiled paths are plain values; ``PathCache`` memoizes compilation of path
strings in an LRU cache so repeated string paths are parsed once.

Example::

    path = JsonPath.parse("users.0?.tags??.0")
    [segment.name for segment in path]  # ['users', '0', 'tags', '0']
    str(path)                           # 'users.0?.tags??.0'
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from cachetools import LRUCache

__all__ = ["JsonPath", "PathCache", "Segment", "as_path"]

logger = logging.getLogger(__name__)


def _escape(name: str) -> str:
    return name.replace("\\", "\\\\").replace(".", "\\.").replace("?", "\\?")


@dataclass(frozen=True, slots=True)
class Segment:
    """One hop of a path.

    Attributes:
        name:     Object key or array index text.
        optional: A missing element at this hop short-circuits to None.
        lenient:  A scalar at this hop short-circuits to None, and so does a
                  non-numeric index into the array reached through this hop.
        prev:     Previous segment, or None for the first one.
        next:     Next segment, or None for the terminal one.

    ``prev`` and ``next`` are wired by ``JsonPath``; they take no part in
    equality, hashing or ``repr``.
    """

    name: str
    optional: bool = False
    lenient: bool = False
    prev: Segment | None = field(default=None, compare=False, repr=False)
    next: Segment | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            msg = f"segment name must be a str, got {type(self.name).__name__}"
            raise TypeError(msg)

    @property
    def is_terminal(self) -> bool:
        return self.next is None

    def prefix(self) -> str:
        """Render the path from the first segment up to and including this one."""
        parts = []
        segment: Segment | None = self
        while segment is not None:
            parts.append(str(segment))
            segment = segment.prev
        return ".".join(reversed(parts))

    def __str__(self) -> str:
        if self.lenient:
            suffix = "??"
        elif self.optional:
            suffix = "?"
        else:
            suffix = ""
        return _escape(self.name) + suffix


class JsonPath:
    """An immutable, doubly-linked chain of at least one ``Segment``.

    The segments handed to the constructor are copied before being linked,
    so one ``Segment`` may appear in several paths.
    """

    __slots__ = ("_segments",)

    def __init__(self, segments: Iterable[Segment]) -> None:
        copies = tuple(
            Segment(segment.name, segment.optional, segment.lenient)
            for segment in segments
        )
        if not copies:
            msg = "a path needs at least one segment"
            raise ValueError(msg)
        for previous, current in zip(copies, copies[1:]):
            object.__setattr__(previous, "next", current)
            object.__setattr__(current, "prev", previous)
        self._segments = copies

    @classmethod
    def parse(cls, source: str) -> JsonPath:
        """Compile a path string.

        Splits on unescaped dots.  In each part, one trailing ``?`` marks the
        segment optional and two mark it optional and lenient; further
        question marks belong to the name.  The empty string is a single
        segment naming the empty key.
        """
        if not isinstance(source, str):
            msg = f"path source must be a str, got {type(source).__name__}"
            raise TypeError(msg)

        segments: list[Segment] = []
        chars: list[str] = []
        # Number of unescaped '?' closing the current part.
        marks = 0
        index = 0
        while index < len(source):
            char = source[index]
            if char == "\\" and index + 1 < len(source):
                chars.extend("?" * marks)
                marks = 0
                chars.append(source[index + 1])
                index += 2
                continue
            if char == ".":
                segments.append(cls._segment(chars, marks))
                chars, marks = [], 0
            elif char == "?":
                marks += 1
            else:
                chars.extend("?" * marks)
                marks = 0
                chars.append(char)
            index += 1
        segments.append(cls._segment(chars, marks))
        return cls(segments)

    @staticmethod
    def _segment(chars: list[str], marks: int) -> Segment:
        flags = min(marks, 2)
        name = "".join(chars) + "?" * (marks - flags)
        return Segment(name, optional=flags >= 1, lenient=flags == 2)

    @classmethod
    def of(cls, *names: str) -> JsonPath:
        """Build a strict path from raw names (no escaping, no flags)."""
        return cls(Segment(name) for name in names)

    @property
    def head(self) -> Segment:
        return self._segments[0]

    @property
    def segments(self) -> tuple[Segment, ...]:
        return self._segments

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonPath):
            return NotImplemented
        return self._segments == other._segments

    def __hash__(self) -> int:
        return hash(self._segments)

    def __str__(self) -> str:
        return ".".join(str(segment) for segment in self._segments)

    def __repr__(self) -> str:
        return f"JsonPath({str(self)!r})"


class PathCache:
    """LRU cache of compiled paths keyed by their source string.

    Each instance holds its own ``LRUCache``; eviction of the least recently
    used entry is silent once ``max_size`` is exceeded.

    Args:
        max_size: Maximum number of compiled paths to keep.  Defaults to 256.
    """

    def __init__(self, max_size: int = 256) -> None:
        self._cache: LRUCache[str, JsonPath] = LRUCache(maxsize=max_size)

    @property
    def max_size(self) -> int:
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        return int(self._cache.currsize)

    def compile(self, source: str) -> JsonPath:
        """Return the compiled path for ``source``, compiling it on a miss."""
        path = self._cache.get(source)
        if path is None:
            logger.debug("path cache miss: %r", source)
            path = JsonPath.parse(source)
            self._cache[source] = path
        return path

    def clear(self) -> None:
        self._cache.clear()


_default_cache = PathCache()


def as_path(path: JsonPath | str) -> JsonPath:
    """Coerce ``path`` to a ``JsonPath``, compiling strings through the default cache."""
    if isinstance(path, JsonPath):
        return path
    if isinstance(path, str):
        return _default_cache.compile(path)
    msg = f"path must be a JsonPath or str, got {type(path).__name__}"
    raise TypeError(msg)
