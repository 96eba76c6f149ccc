"""Path operations over composite elements: query, assign, delete, update.

The walk is an explicit loop over the segment chain, one composite layer
per segment.  At every hop the current segment name is resolved into a key
of the current composite:

1. Arrays only accept non-negative decimal indices.  Any other name is a
   ``PathArgumentError``, unless the segment that led into this array is
   lenient, in which case the whole operation yields None.
2. Intermediate hop (the segment has a successor):
   - child is a composite: continue the walk inside it;
   - child is missing: None if the segment is optional, else
     ``PathNotFoundError``;
   - child is a scalar: None if the segment is lenient, else
     ``PathTypeError``.
3. Terminal hop: apply the primitive (read, upsert, remove) on the composite
   reached.

Nothing is mutated before the terminal hop, so a failing walk leaves the
tree untouched.  ``update`` is a ``query`` followed by an ``assign`` or a
``delete`` and is not atomic beyond that.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from json_element.errors import PathArgumentError, PathNotFoundError, PathTypeError
from json_element.path import JsonPath, as_path
from json_element.tree.nodes import JsonElement, JsonStruct

__all__ = ["assign", "delete", "query", "update"]


def _walk(struct: JsonStruct, path: JsonPath | str) -> tuple[JsonStruct, Any] | None:
    """Return the composite and key addressed by the terminal segment.

    Returns None when an optional or lenient segment short-circuits the walk.
    """
    segment = as_path(path).head

    while True:
        key = struct.resolve_key(segment.name)
        if key is None:
            previous = segment.prev
            if previous is not None and previous.lenient:
                return None
            trail = segment.prefix()
            raise PathArgumentError(f"Invalid array index {trail}", trail)

        if segment.next is None:
            return struct, key

        child = struct.child(key)
        if isinstance(child, JsonStruct):
            struct = child
            segment = segment.next
            continue

        if child is None:
            if segment.optional:
                return None
            trail = segment.prefix()
            raise PathNotFoundError(f"Missing property {trail}", trail)

        if segment.lenient:
            return None
        trail = segment.prefix()
        raise PathTypeError(
            f"Cannot access non struct property {trail} ({child.element_type})",
            trail,
        )


def query(struct: JsonStruct, path: JsonPath | str) -> JsonElement | None:
    """Return the element at ``path`` below ``struct``, or None if absent."""
    target = _walk(struct, path)
    if target is None:
        return None
    owner, key = target
    return owner.child(key)


def assign(
    struct: JsonStruct, path: JsonPath | str, element: JsonElement
) -> JsonElement | None:
    """Upsert ``element`` at ``path`` and return the element it replaced.

    Arrays are padded with ``NULL`` up to the target index first, so the
    previous element of a freshly padded slot is ``NULL``.
    """
    if not isinstance(element, JsonElement):
        msg = f"expected a JsonElement, got {type(element).__name__}"
        raise TypeError(msg)
    target = _walk(struct, path)
    if target is None:
        return None
    owner, key = target
    return owner.put_child(key, element)


def delete(struct: JsonStruct, path: JsonPath | str) -> JsonElement | None:
    """Remove the element at ``path`` and return it; absent targets are a no-op."""
    target = _walk(struct, path)
    if target is None:
        return None
    owner, key = target
    return owner.remove_child(key)


def update(
    struct: JsonStruct,
    path: JsonPath | str,
    operator: Callable[[JsonElement | None], JsonElement | None],
) -> JsonElement | None:
    """Replace the element at ``path`` with ``operator(current)``.

    - result is ``current`` itself: nothing changes;
    - result is None: the element is deleted;
    - otherwise: the result is assigned.

    Returns:
        The element at ``path`` after the call (None after a delete).
    """
    compiled = as_path(path)
    current = query(struct, compiled)
    result = operator(current)

    if result is current:
        return current
    if result is None:
        delete(struct, compiled)
        return None
    assign(struct, compiled, result)
    return result
