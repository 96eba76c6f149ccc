"""pytest plugin for json-element.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from json_element.parser import parse
from json_element.tree.builder import from_value
from json_element.tree.nodes import JsonArray, JsonElement, JsonObject


def _coerce(value: Any) -> JsonElement:
    """JSON text is parsed; elements and native values are converted."""
    if isinstance(value, str):
        return parse(value)
    return from_value(value)


def first_difference(actual: JsonElement, expected: JsonElement, path: str = "") -> str | None:
    """Return the dotted path of the first structural difference, or None.

    The root is reported as ``"<root>"``.
    """
    if actual == expected:
        return None
    if isinstance(actual, JsonObject) and isinstance(expected, JsonObject):
        for key in list(expected) + [key for key in actual if key not in expected]:
            child = f"{path}.{key}" if path else key
            if key not in actual or key not in expected:
                return child
            found = first_difference(actual[key], expected[key], child)
            if found is not None:
                return found
    if isinstance(actual, JsonArray) and isinstance(expected, JsonArray):
        for index in range(max(len(actual), len(expected))):
            child = f"{path}.{index}" if path else str(index)
            if index >= len(actual) or index >= len(expected):
                return child
            found = first_difference(actual[index], expected[index], child)
            if found is not None:
                return found
    return path or "<root>"


@pytest.fixture(scope="session")
def assert_json_equal() -> Any:
    """Fixture that returns a callable structural JSON equality asserter.

    The fixture is session-scoped because the returned callable is stateless.

    Usage in tests::

        def test_payload(assert_json_equal):
            assert_json_equal('{"a": 1.0}', {"a": 1})

        def test_mismatch(assert_json_equal):
            with pytest.raises(AssertionError, match=r"first difference at a"):
                assert_json_equal({"a": 1}, {"a": 2})

    Returns:
        A callable ``_assert(actual, expected) -> None``.  Each argument may be
        JSON text, a ``JsonElement`` or a native Python value.
    """

    def _assert(actual: Any, expected: Any) -> None:
        """Assert that two JSON documents are structurally equal.

        Raises:
            AssertionError: When the documents differ, with both compact
                renderings and the path of the first difference.
        """
        left = _coerce(actual)
        right = _coerce(expected)
        where = first_difference(left, right)
        if where is not None:
            raise AssertionError(
                f"JSON documents differ: first difference at {where}\n"
                f"  actual:   {left.compact()}\n"
                f"  expected: {right.compact()}"
            )

    return _assert
