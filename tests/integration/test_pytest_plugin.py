"""Integration tests for the json-element pytest plugin.

These tests verify that the assert_json_equal fixture is auto-discovered
via the pytest11 entry point and behaves correctly.

NOTE: These tests require json-element to be installed (even in editable mode
via ``pip install -e .``). The pytest11 entry point is only registered at
install time -- running from a raw source checkout without installing will not
discover the fixture.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from typing import Any

import pytest

from json_element import JsonArray, JsonNumber, parse
from json_element.integrations._pytest_plugin import first_difference


def test_fixture_passes_equal_docs(assert_json_equal: Any) -> None:
    """Numbers compare by value and member order is irrelevant."""
    assert_json_equal('{"a": 1.0, "b": [true]}', {"b": [True], "a": 1})


def test_fixture_accepts_elements(assert_json_equal: Any) -> None:
    """Elements and JSON text can be compared directly."""
    assert_json_equal(JsonArray([JsonNumber(1)]), "[1]")


def test_fixture_fails_on_difference(assert_json_equal: Any) -> None:
    """The failure names the path of the first difference."""
    with pytest.raises(AssertionError, match=r"first difference at a\.1"):
        assert_json_equal({"a": [1, 2]}, {"a": [1, 3]})


def test_fixture_error_message_contents(assert_json_equal: Any) -> None:
    """AssertionError message should show both compact renderings."""
    with pytest.raises(AssertionError) as exc_info:
        assert_json_equal({"x": 1}, {"x": 2})

    error_message = str(exc_info.value)
    assert "actual:   {\"x\":1}" in error_message
    assert "expected: {\"x\":2}" in error_message


def test_fixture_rejects_invalid_text(assert_json_equal: Any) -> None:
    """Malformed JSON text is a parse error, not a mismatch."""
    with pytest.raises(ValueError):
        assert_json_equal("[1,]", [1])


def test_fixture_returns_callable(assert_json_equal: Any) -> None:
    """The fixture should return a callable, not None or a direct assertion result."""
    assert callable(assert_json_equal), (
        "assert_json_equal fixture must return a callable, not a direct value"
    )


class TestFirstDifference:
    """first_difference() reports the earliest differing path."""

    def test_equal(self) -> None:
        """Equal trees have no difference."""
        assert first_difference(parse("[1]"), parse("[1.0]")) is None

    def test_root(self) -> None:
        """Differing scalars report the root."""
        assert first_difference(parse("1"), parse("2")) == "<root>"

    def test_kind_change_at_root(self) -> None:
        """Different kinds report the root."""
        assert first_difference(parse("[]"), parse("{}")) == "<root>"

    def test_missing_key(self) -> None:
        """A key only in the expected tree is reported."""
        assert first_difference(parse('{"a": 1}'), parse('{"a": 1, "b": 2}')) == "b"

    def test_extra_key(self) -> None:
        """A key only in the actual tree is reported."""
        assert first_difference(parse('{"a": 1, "c": 2}'), parse('{"a": 1}')) == "c"

    def test_nested(self) -> None:
        """Nested paths are joined with dots."""
        actual = parse('{"a": {"b": [1, {"c": true}]}}')
        expected = parse('{"a": {"b": [1, {"c": false}]}}')
        assert first_difference(actual, expected) == "a.b.1.c"

    def test_length_mismatch(self) -> None:
        """The first missing index is reported."""
        assert first_difference(parse("[1]"), parse("[1, 2]")) == "1"


def test_plugin_discovery() -> None:
    """Verify assert_json_equal appears in pytest --fixtures output."""
    result = subprocess.run(
        [sys.executable, "-m", "pytest", "--fixtures", "-q"],
        capture_output=True,
        text=True,
        cwd=str(Path(__file__).resolve().parents[2]),
    )
    assert "assert_json_equal" in result.stdout, (
        f"assert_json_equal not found in pytest --fixtures output.\n"
        f"stdout:\n{result.stdout}\n"
        f"stderr:\n{result.stderr}"
    )
